"""localekit - message localization with dialect-aware fallback chains."""

from localekit.i18n import (
    DEFAULT_LOCALE,
    LocaleSource,
    LocalizationConfig,
    LocalizationError,
    LocalizationInitError,
    LocalizationRequest,
    LocalizationService,
    MessageSink,
    MessageStore,
    Resolver,
    create_resolver,
)

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_LOCALE",
    "LocaleSource",
    "LocalizationConfig",
    "LocalizationError",
    "LocalizationInitError",
    "LocalizationRequest",
    "LocalizationService",
    "MessageSink",
    "MessageStore",
    "Resolver",
    "create_resolver",
]

"""i18n system - message localization with dialect-aware fallback.

Provides a layered message store, translation loaders and the resolver
that searches the requested locale, its dialect alternatives, caller
fallbacks and the default locale before returning the bare key.

Main components:
- models: LocalizationConfig, LocalizationRequest, Resolution
- store: MessageStore
- loader: TranslationLoader, DirectoryTranslationLoader and parsers
- resolver: Resolver with placeholder substitution
- delivery: LocaleSource and MessageSink collaborator interfaces
- factory / service: construction from settings and the DI facade
"""

from localekit.i18n.delivery import LocaleSource, MessageSink
from localekit.i18n.errors import (
    LocalizationError,
    LocalizationInitError,
    SinkNotConfiguredError,
    TranslationLoadError,
)
from localekit.i18n.factory import create_config, create_loaders, create_resolver
from localekit.i18n.loader import (
    DirectoryTranslationLoader,
    MappingTranslationLoader,
    TranslationLoader,
    build_message_store,
    is_locale_tag,
    parse_properties,
    parse_yaml,
)
from localekit.i18n.models import (
    DEFAULT_ALTERNATIVES,
    DEFAULT_LOCALE,
    LocaleTag,
    LocalizationConfig,
    LocalizationRequest,
    Resolution,
)
from localekit.i18n.resolver import Resolver, expand_fallbacks, substitute_placeholders
from localekit.i18n.service import LocalizationService, get_localization_service
from localekit.i18n.store import MessageStore

__all__ = [
    "DEFAULT_ALTERNATIVES",
    "DEFAULT_LOCALE",
    "LocaleTag",
    "LocalizationConfig",
    "LocalizationRequest",
    "Resolution",
    "MessageStore",
    "TranslationLoader",
    "DirectoryTranslationLoader",
    "MappingTranslationLoader",
    "build_message_store",
    "is_locale_tag",
    "parse_properties",
    "parse_yaml",
    "Resolver",
    "expand_fallbacks",
    "substitute_placeholders",
    "LocaleSource",
    "MessageSink",
    "LocalizationError",
    "LocalizationInitError",
    "TranslationLoadError",
    "SinkNotConfiguredError",
    "create_config",
    "create_loaders",
    "create_resolver",
    "LocalizationService",
    "get_localization_service",
]

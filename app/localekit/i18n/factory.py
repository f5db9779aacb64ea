"""Factory functions for creating i18n components.

Provides convenience functions for initializing resolvers with the
application's configured translation sources.
"""

from pathlib import Path
from typing import List, Optional, Union

import structlog

from localekit.configuration import Settings, get_settings
from localekit.i18n.delivery import LocaleSource, MessageSink
from localekit.i18n.loader import (
    DirectoryTranslationLoader,
    TranslationLoader,
    build_message_store,
)
from localekit.i18n.models import (
    DEFAULT_ALTERNATIVES,
    LocalizationConfig,
)
from localekit.i18n.resolver import Resolver

logger = structlog.get_logger()


def create_config(settings: Optional[Settings] = None) -> LocalizationConfig:
    """Build the locale configuration from settings.

    Args:
        settings: Settings instance (default: get_settings()).

    Returns:
        LocalizationConfig with the configured default locale and either
        the configured or the built-in dialect alternatives.

    Raises:
        ValueError: If a configured locale lists itself as an alternative.
    """
    settings = settings or get_settings()
    alternatives = settings.i18n.dialect_alternatives
    return LocalizationConfig(
        default_locale=settings.i18n.default_locale,
        alternatives=alternatives if alternatives is not None else DEFAULT_ALTERNATIVES,
    )


def create_loaders(
    settings: Optional[Settings] = None,
    bundled_package: Optional[str] = None,
    user_locales_dir: Union[str, Path, None] = None,
) -> List[TranslationLoader]:
    """Create the translation loaders in merge order: bundled, then user.

    Args:
        settings: Settings instance (default: get_settings()).
        bundled_package: Package with shipped translations (default: settings).
        user_locales_dir: Directory with user overrides (default: settings).

    Raises:
        LocalizationInitError: If the bundled package cannot be located.
    """
    settings = settings or get_settings()
    package = bundled_package or settings.i18n.bundled_package
    user_dir = user_locales_dir or settings.i18n.user_locales_dir

    loaders: List[TranslationLoader] = [DirectoryTranslationLoader.from_package(package)]
    if user_dir:
        loaders.append(DirectoryTranslationLoader(user_dir, source="user"))
    return loaders


def create_resolver(
    settings: Optional[Settings] = None,
    locale_source: Optional[LocaleSource] = None,
    sink: Optional[MessageSink] = None,
    bundled_package: Optional[str] = None,
    user_locales_dir: Union[str, Path, None] = None,
    loaders: Optional[List[TranslationLoader]] = None,
) -> Resolver:
    """Create and populate a Resolver.

    Usage:
        # Use defaults (shipped translations plus the configured user dir)
        resolver = create_resolver()

        # Custom user overrides and delivery
        resolver = create_resolver(
            user_locales_dir=Path("/srv/app/lang"),
            locale_source=ProfileLocaleSource(),
            sink=ChatSink(),
        )

    Raises:
        LocalizationInitError: If the bundled translations cannot be read.
    """
    settings = settings or get_settings()
    if loaders is None:
        loaders = create_loaders(settings, bundled_package, user_locales_dir)

    store = build_message_store(loaders)
    resolver = Resolver(
        store=store,
        config=create_config(settings),
        locale_source=locale_source,
        sink=sink,
    )
    logger.info(
        "resolver_created",
        loader_count=len(loaders),
        locales=store.locales(),
    )
    return resolver

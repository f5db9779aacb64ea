"""Localization service for dependency injection.

Provides a class-based interface to the i18n system for easier DI and testing.
"""

from functools import lru_cache
from typing import Any, Iterable, List, Optional

from localekit.i18n.factory import create_loaders, create_resolver
from localekit.i18n.loader import TranslationLoader, build_message_store
from localekit.i18n.models import LocaleTag, LocalizationRequest
from localekit.i18n.resolver import Resolver
from localekit.logging import get_module_logger

logger = get_module_logger()


class LocalizationService:
    """Class-based localization service.

    Thin facade over a Resolver; resolution work is delegated to it.

    Usage:
        service = LocalizationService()
        request = service.localizable("game.start", 10).with_prefix("[Game] ")
        service.send_to(request, player)
        service.broadcast(request, online_players)
    """

    def __init__(
        self,
        resolver: Optional[Resolver] = None,
        loaders: Optional[List[TranslationLoader]] = None,
    ):
        """Initialize localization service.

        Args:
            resolver: Optional pre-configured Resolver. If not provided,
                one is created via the factory from `loaders` (or from
                settings when no loaders are given).
            loaders: Translation loaders used to build and reload the store.
        """
        if resolver is None and loaders is None:
            loaders = create_loaders()
        self._loaders = loaders
        self._resolver = resolver or create_resolver(loaders=loaders)

    def localizable(self, key: str, *replacements: Any) -> LocalizationRequest:
        """Create a request for key with placeholder values."""
        return self._resolver.localizable(key, *replacements)

    def localize(self, request: LocalizationRequest) -> str:
        """Localize in the default locale."""
        return self._resolver.resolve_for_default(request)

    def localize_in(
        self, request: LocalizationRequest, locale: LocaleTag, *fallbacks: LocaleTag
    ) -> str:
        """Localize in locale with optional fallback locales."""
        return self._resolver.resolve(request, locale, fallbacks)

    def localize_for(
        self, request: LocalizationRequest, user: Any, *fallbacks: LocaleTag
    ) -> str:
        """Localize in the locale of user."""
        return self._resolver.resolve_for_user(request, user, fallbacks)

    def send_to(
        self, request: LocalizationRequest, user: Any, *fallbacks: LocaleTag
    ) -> None:
        """Localize for user and deliver it to them."""
        self._resolver.deliver_to_user(request, user, fallbacks)

    def broadcast(
        self,
        request: LocalizationRequest,
        recipients: Iterable[Any],
        *fallbacks: LocaleTag,
    ) -> int:
        """Deliver to each recipient in their own locale."""
        return self._resolver.broadcast(request, recipients, fallbacks)

    def has_message(self, key: str, locale: LocaleTag) -> bool:
        """Check if locale itself defines key."""
        return self._resolver.has_message(key, locale)

    def get_available_locales(self) -> List[LocaleTag]:
        """Get the locales with loaded translations."""
        return self._resolver.available_locales()

    @property
    def default_locale(self) -> LocaleTag:
        return self._resolver.default_locale

    @default_locale.setter
    def default_locale(self, locale: LocaleTag) -> None:
        self._resolver.default_locale = locale

    def reload(self) -> None:
        """Rebuild the store from the loaders and publish it atomically.

        Lookups in flight keep using the previous store until they finish.

        Raises:
            LocalizationInitError: If a required source cannot be read; the
                published store is left untouched.
        """
        loaders = self._loaders if self._loaders is not None else create_loaders()
        fresh = build_message_store(loaders)
        self._resolver.swap_store(fresh)
        logger.info("reloaded_all_translations", locale_count=len(fresh))

    @property
    def resolver(self) -> Resolver:
        """Access underlying Resolver instance."""
        return self._resolver


@lru_cache
def get_localization_service() -> LocalizationService:
    """Get application-scoped localization service singleton."""
    return LocalizationService()

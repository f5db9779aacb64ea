"""Locale resolution with dialect-aware fallback chains.

Resolves a message key to display text by searching the requested locale,
its dialect alternatives, the caller's fallback locales and finally the
default locale. If every locale misses, the bare key is returned; a miss is
never an error.
"""

import re
from collections import deque
from dataclasses import replace
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from localekit.i18n.delivery import LocaleSource, MessageSink
from localekit.i18n.errors import SinkNotConfiguredError
from localekit.i18n.models import (
    LocaleTag,
    LocalizationConfig,
    LocalizationRequest,
    Resolution,
)
from localekit.i18n.store import MessageStore
from localekit.logging import bind_localization_context, get_module_logger

logger = get_module_logger()

_PLACEHOLDER_PATTERN = re.compile(r"%(\d+)")


def substitute_placeholders(template: str, replacements: Sequence[str]) -> str:
    """Replace %1, %2, ... in template with the matching replacement.

    Each token is the longest run of digits after "%", so %10 is token ten,
    not %1 followed by "0". Replacement values are inserted literally.
    Tokens without a matching value (including %0) are left unexpanded.

    Args:
        template: Message template.
        replacements: Values, the first one replacing %1.

    Returns:
        Template with placeholders filled in.
    """
    if not replacements:
        return template

    def _replace(match: "re.Match[str]") -> str:
        index = int(match.group(1))
        if 1 <= index <= len(replacements):
            return replacements[index - 1]
        return match.group(0)

    return _PLACEHOLDER_PATTERN.sub(_replace, template)


def expand_fallbacks(
    locale: LocaleTag,
    fallbacks: Iterable[LocaleTag],
    alternatives: Mapping[LocaleTag, Sequence[LocaleTag]],
) -> List[LocaleTag]:
    """Build the working fallback list for a resolution.

    Each fallback is followed by its dialect alternatives that are not
    already listed; inserted alternatives are not expanded themselves. The
    requested locale's own alternatives are then pushed to the front one at
    a time, so they are tried before any caller-supplied fallback, last
    registered alternative first.

    Args:
        locale: Requested locale.
        fallbacks: Caller-supplied fallback locales, in order.
        alternatives: Dialect alternatives table.

    Returns:
        Ordered list of locales to try after the requested one.
    """
    expanded = list(fallbacks)
    i = 0
    while i < len(expanded):
        for alt in alternatives.get(expanded[i], ()):
            if alt not in expanded:
                expanded.insert(i + 1, alt)
                i += 1
        i += 1

    for alt in alternatives.get(locale, ()):
        if alt not in expanded:
            expanded.insert(0, alt)
    return expanded


class Resolver:
    """Resolves localization requests against a MessageStore.

    The store reference is read once per resolution, so swap_store() can
    publish a reloaded store while other threads are resolving.

    Attributes:
        locale_source: Optional LocaleSource for per-user locales.
        sink: Optional MessageSink used for delivery and broadcast.
    """

    def __init__(
        self,
        store: Optional[MessageStore] = None,
        config: Optional[LocalizationConfig] = None,
        locale_source: Optional[LocaleSource] = None,
        sink: Optional[MessageSink] = None,
    ):
        self._store = store if store is not None else MessageStore()
        self._config = config or LocalizationConfig()
        self.locale_source = locale_source
        self.sink = sink
        logger.info(
            "initialized_resolver",
            default_locale=self._config.default_locale,
            locale_count=len(self._store),
            locale_source_enabled=locale_source is not None,
        )

    @property
    def store(self) -> MessageStore:
        return self._store

    @property
    def config(self) -> LocalizationConfig:
        return self._config

    @property
    def default_locale(self) -> LocaleTag:
        """Locale tried once every fallback is exhausted."""
        return self._config.default_locale

    @default_locale.setter
    def default_locale(self, locale: LocaleTag) -> None:
        self._config = replace(self._config, default_locale=locale)
        logger.info("default_locale_changed", default_locale=locale)

    def swap_store(self, store: MessageStore) -> MessageStore:
        """Publish a fully built store, replacing the current one.

        Returns:
            The previously published store.
        """
        previous, self._store = self._store, store
        logger.info(
            "swapped_message_store",
            previous_locale_count=len(previous),
            locale_count=len(store),
        )
        return previous

    def localizable(self, key: str, *replacements: Any) -> LocalizationRequest:
        """Create a request for key bound to this resolver.

        Args:
            key: Message key.
            *replacements: Values for %1, %2, ...
        """
        return LocalizationRequest(key=key, replacements=replacements, owner=self)

    def expand_fallbacks(
        self, locale: LocaleTag, fallbacks: Iterable[LocaleTag]
    ) -> List[LocaleTag]:
        """Expand fallbacks with the configured dialect alternatives."""
        return expand_fallbacks(locale, fallbacks, self._config.alternatives)

    def resolve(
        self,
        request: LocalizationRequest,
        locale: LocaleTag,
        fallbacks: Iterable[LocaleTag] = (),
    ) -> str:
        """Resolve request to display text.

        Args:
            request: Key, placeholder values and prefix.
            locale: Requested locale.
            fallbacks: Locales to try if locale has no entry. Dialect
                alternatives are added automatically.

        Returns:
            Prefixed, substituted template, or the prefixed key if no locale
            defines it.
        """
        return self.resolve_detailed(request, locale, fallbacks).text

    def resolve_detailed(
        self,
        request: LocalizationRequest,
        locale: LocaleTag,
        fallbacks: Iterable[LocaleTag] = (),
    ) -> Resolution:
        """Resolve request and report which locales were tried.

        Returns:
            Resolution with the text, the matching locale and the attempts.
        """
        store = self._store
        config = self._config

        template = store.lookup(locale, request.key)
        if template is not None:
            return Resolution(self._render(request, template), locale, (locale,))

        chain = expand_fallbacks(locale, fallbacks, config.alternatives)
        return self.search_chain(
            request, locale, chain, store=store, default_locale=config.default_locale
        )

    def search_chain(
        self,
        request: LocalizationRequest,
        current: LocaleTag,
        remaining: Iterable[LocaleTag],
        store: Optional[MessageStore] = None,
        default_locale: Optional[LocaleTag] = None,
    ) -> Resolution:
        """Consume an expanded fallback list after current has missed.

        Tries each remaining locale in order, then the default locale once
        (unless current already is the default), then gives up with the key.

        Args:
            request: Request being resolved.
            current: Locale that was just tried without success.
            remaining: Expanded fallback list, consumed front to back.
            store: Store snapshot; the published store when omitted.
            default_locale: Default locale snapshot.
        """
        store = store if store is not None else self._store
        default_locale = default_locale or self._config.default_locale
        queue = deque(remaining)
        attempted: List[LocaleTag] = [current]

        while True:
            if queue:
                current = queue.popleft()
            elif current != default_locale:
                current = default_locale
            else:
                logger.warning(
                    "translation_not_found",
                    key=request.key,
                    attempted=attempted,
                )
                return Resolution(self._prefix(request) + request.key, None, tuple(attempted))

            attempted.append(current)
            template = store.lookup(current, request.key)
            if template is not None:
                logger.debug(
                    "used_fallback_translation",
                    key=request.key,
                    requested_locale=attempted[0],
                    fallback_locale=current,
                )
                return Resolution(
                    self._render(request, template), current, tuple(attempted)
                )

    def resolve_for_default(self, request: LocalizationRequest) -> str:
        """Resolve in the request locale, or the default locale, without fallbacks."""
        return self.resolve(request, request.locale or self.default_locale)

    def locale_of(self, user: Any) -> LocaleTag:
        """Get the locale for user, falling back to the default locale.

        Never raises: a missing or failing LocaleSource yields the default.
        """
        if self.locale_source is None:
            return self.default_locale
        try:
            locale = self.locale_source.locale_of(user)
        except Exception as e:  # pylint: disable=broad-except
            logger.warning(
                "locale_source_failed",
                user=repr(user),
                error=str(e),
            )
            return self.default_locale
        return locale or self.default_locale

    def resolve_for_user(
        self,
        request: LocalizationRequest,
        user: Any,
        fallbacks: Iterable[LocaleTag] = (),
    ) -> str:
        """Resolve in the request locale, or the locale reported for user."""
        locale = request.locale or self.locale_of(user)
        return self.resolve(request, locale, fallbacks)

    def deliver_to_user(
        self,
        request: LocalizationRequest,
        user: Any,
        fallbacks: Iterable[LocaleTag] = (),
    ) -> None:
        """Resolve request for user and hand the text to the sink.

        Raises:
            SinkNotConfiguredError: If this resolver has no sink.
        """
        sink = self._require_sink()
        sink.deliver(user, self.resolve_for_user(request, user, fallbacks))

    def broadcast(
        self,
        request: LocalizationRequest,
        recipients: Iterable[Any],
        fallbacks: Iterable[LocaleTag] = (),
    ) -> int:
        """Deliver request to every recipient in their own locale.

        The default-locale text is logged once afterwards.

        Args:
            request: Request to deliver.
            recipients: Users to deliver to (e.g. everyone online).
            fallbacks: Fallback locales applied to every recipient.

        Returns:
            Number of recipients delivered to.

        Raises:
            SinkNotConfiguredError: If this resolver has no sink.
        """
        self._require_sink()
        fallbacks = tuple(fallbacks)
        count = 0
        with bind_localization_context(message_key=request.key):
            for user in recipients:
                self.deliver_to_user(request, user, fallbacks)
                count += 1
            logger.info(
                "localized_broadcast",
                text=self.resolve_for_default(request),
                recipient_count=count,
            )
        return count

    def has_message(self, key: str, locale: LocaleTag) -> bool:
        """Check if locale itself defines key (no fallbacks)."""
        return self._store.has_message(locale, key)

    def available_locales(self) -> List[LocaleTag]:
        """Get the locales the published store has entries for."""
        return self._store.locales()

    def _require_sink(self) -> MessageSink:
        if self.sink is None:
            raise SinkNotConfiguredError("No message sink configured for delivery")
        return self.sink

    @staticmethod
    def _prefix(request: LocalizationRequest) -> str:
        return request.prefix or ""

    def _render(self, request: LocalizationRequest, template: str) -> str:
        return self._prefix(request) + substitute_placeholders(
            template, request.replacements
        )


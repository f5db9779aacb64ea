"""Localization models.

Defines the value objects shared by the store, the resolver and callers:
locale configuration, localization requests and resolution results.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Iterable,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

from localekit.i18n.errors import LocalizationError

if TYPE_CHECKING:
    from localekit.i18n.resolver import Resolver

# Opaque `language[_REGION]` identifier, compared by exact string match
LocaleTag = str

DEFAULT_LOCALE: LocaleTag = "en_US"

# Members of a family are acceptable substitutes for one another
DIALECT_FAMILIES: Tuple[Tuple[LocaleTag, ...], ...] = (
    ("en_US", "en_GB", "en_CA", "en_AU", "en_NZ"),
    ("fr_FR", "fr_CA", "fr_BE", "fr_CH"),
    ("de_DE", "de_AT", "de_CH"),
    ("es_ES", "es_MX", "es_AR", "es_UY", "es_VE"),
    ("pt_PT", "pt_BR"),
    ("it_IT", "it_CH"),
    ("nl_NL", "nl_BE"),
)


def alternatives_from_families(
    families: Iterable[Sequence[LocaleTag]],
) -> Dict[LocaleTag, Tuple[LocaleTag, ...]]:
    """Build an alternatives table where each member lists its siblings.

    Args:
        families: Groups of mutually substitutable locale tags.

    Returns:
        Mapping of each tag to the other members of its family, in order.
    """
    table: Dict[LocaleTag, Tuple[LocaleTag, ...]] = {}
    for family in families:
        for tag in family:
            table[tag] = tuple(other for other in family if other != tag)
    return table


DEFAULT_ALTERNATIVES: Mapping[LocaleTag, Tuple[LocaleTag, ...]] = MappingProxyType(
    alternatives_from_families(DIALECT_FAMILIES)
)


@dataclass(frozen=True)
class LocalizationConfig:
    """Read-only locale configuration injected into a Resolver.

    Attributes:
        default_locale: Locale tried once every fallback is exhausted.
        alternatives: Locale tag to the ordered tags accepted in its place.
    """

    default_locale: LocaleTag = DEFAULT_LOCALE
    alternatives: Mapping[LocaleTag, Tuple[LocaleTag, ...]] = field(
        default_factory=lambda: DEFAULT_ALTERNATIVES
    )

    def __post_init__(self) -> None:
        frozen: Dict[LocaleTag, Tuple[LocaleTag, ...]] = {}
        for tag, alts in self.alternatives.items():
            alts = tuple(alts)
            if tag in alts:
                raise ValueError(f"Locale {tag} lists itself as a dialect alternative")
            frozen[tag] = alts
        object.__setattr__(self, "alternatives", MappingProxyType(frozen))

    def alternatives_for(self, tag: LocaleTag) -> Tuple[LocaleTag, ...]:
        """Get the registered dialect alternatives of a locale.

        Args:
            tag: Locale tag to look up.

        Returns:
            Ordered alternatives, empty if none are registered.
        """
        return self.alternatives.get(tag, ())


@dataclass(frozen=True)
class Resolution:
    """Outcome of one fallback search.

    Attributes:
        text: Final display string.
        locale: Tag whose template produced the text, None if the bare key
            was returned.
        attempted: Tags looked up, in order.
    """

    text: str
    locale: Optional[LocaleTag]
    attempted: Tuple[LocaleTag, ...] = ()

    @property
    def is_fallback(self) -> bool:
        """Whether the text came from anything but the first attempt."""
        return self.locale is None or (
            bool(self.attempted) and self.locale != self.attempted[0]
        )


@dataclass(frozen=True)
class LocalizationRequest:
    """A localizable message bound to the resolver that owns it.

    Builder methods return new requests, so a request can be shared and
    specialised per call site.

    Attributes:
        key: Message key (e.g. "game.start").
        replacements: Values for the %1, %2, ... placeholders.
        locale: Optional locale overriding the default or user locale.
        prefix: Optional text prepended to the localized message.
        owner: Resolver used by the convenience methods.
    """

    key: str
    replacements: Tuple[str, ...] = ()
    locale: Optional[LocaleTag] = None
    prefix: Optional[str] = None
    owner: Optional["Resolver"] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "replacements", tuple(str(value) for value in self.replacements)
        )

    def with_replacements(self, *replacements: Any) -> "LocalizationRequest":
        """Return a copy using the given placeholder values.

        The first value replaces %1, the second %2, and so on.
        """
        return replace(self, replacements=tuple(str(value) for value in replacements))

    def with_prefix(self, prefix: Optional[str]) -> "LocalizationRequest":
        """Return a copy that prepends prefix to the localized text."""
        return replace(self, prefix=prefix)

    def with_locale(self, locale: Optional[LocaleTag]) -> "LocalizationRequest":
        """Return a copy that is localized in locale instead of the
        default or user locale."""
        return replace(self, locale=locale)

    def _require_owner(self) -> "Resolver":
        if self.owner is None:
            raise LocalizationError(
                f"Localization request '{self.key}' is not bound to a resolver"
            )
        return self.owner

    def localize(self) -> str:
        """Localize in the owner's default locale (or the request locale)."""
        return self._require_owner().resolve_for_default(self)

    def localize_in(self, locale: LocaleTag, *fallbacks: LocaleTag) -> str:
        """Localize in locale, falling back through fallbacks.

        Dialect alternatives (e.g. en_GB for en_US) are added automatically.
        """
        return self._require_owner().resolve(self, locale, fallbacks)

    def localize_for(self, user: Any, *fallbacks: LocaleTag) -> str:
        """Localize in the locale reported for user."""
        return self._require_owner().resolve_for_user(self, user, fallbacks)

    def send_to(self, user: Any, *fallbacks: LocaleTag) -> None:
        """Localize for user and deliver the text to them."""
        self._require_owner().deliver_to_user(self, user, fallbacks)

    def broadcast(self, recipients: Iterable[Any], *fallbacks: LocaleTag) -> int:
        """Deliver to every recipient in their own locale.

        Returns:
            Number of recipients the message was delivered to.
        """
        return self._require_owner().broadcast(self, recipients, fallbacks)

"""Layered message store.

Holds the merged translation tables for every locale. Sources for the same
locale are merged in order and the last one wins per key, which is how user
overrides take precedence over shipped translations.
"""

from typing import Any, Dict, Iterator, List, Mapping, Optional

from localekit.i18n.models import LocaleTag


class MessageStore:
    """Mapping of locale tag to message key to template.

    Populated once during initialization and read-only afterwards, so
    lookups are safe from any number of threads. Reloading builds a new
    store instead of mutating a published one.

    Attributes:
        tables: {locale_tag: {key: template}}.
    """

    def __init__(self, tables: Optional[Mapping[LocaleTag, Mapping[str, Any]]] = None):
        self.tables: Dict[LocaleTag, Dict[str, str]] = {}
        for tag, entries in (tables or {}).items():
            self.merge(tag, entries)

    def merge(self, tag: LocaleTag, entries: Mapping[str, Any]) -> None:
        """Merge entries into the table for tag.

        Creates the table if absent. Existing keys are overwritten.

        Args:
            tag: Locale the entries belong to.
            entries: Key to template mapping.
        """
        table = self.tables.setdefault(tag, {})
        for key, template in entries.items():
            table[str(key)] = str(template)

    def lookup(self, tag: LocaleTag, key: str) -> Optional[str]:
        """Retrieve a template.

        Args:
            tag: Locale to look in.
            key: Message key.

        Returns:
            Template string, or None if the locale or key is unknown.
        """
        table = self.tables.get(tag)
        if table is None:
            return None
        return table.get(key)

    def has_locale(self, tag: LocaleTag) -> bool:
        """Check whether any entries exist for tag."""
        return bool(self.tables.get(tag))

    def has_message(self, tag: LocaleTag, key: str) -> bool:
        """Check whether tag defines key."""
        return key in self.tables.get(tag, {})

    def locales(self) -> List[LocaleTag]:
        """Get the sorted locale tags that hold at least one entry."""
        return sorted(tag for tag, table in self.tables.items() if table)

    def get_table(self, tag: LocaleTag) -> Dict[str, str]:
        """Get a copy of every entry for tag (empty if unknown)."""
        return dict(self.tables.get(tag, {}))

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and self.has_locale(tag)

    def __iter__(self) -> Iterator[LocaleTag]:
        return iter(self.locales())

    def __len__(self) -> int:
        return len(self.locales())

    def __repr__(self) -> str:
        return f"MessageStore(locales={self.locales()!r})"

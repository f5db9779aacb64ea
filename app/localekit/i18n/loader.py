"""Translation loading interface and implementations.

Defines the contract for translation sources and provides a directory
loader that reads `.properties` and YAML files, either from a user
directory on disk or from the package data shipped with the application.

File names follow `<locale>.<ext>` or `<domain>.<locale>.<ext>`; files for
the same locale are merged in name order.
"""

import os
import re
from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

import structlog
import yaml

from localekit.i18n.errors import LocalizationInitError, TranslationLoadError
from localekit.i18n.models import LocaleTag
from localekit.i18n.store import MessageStore

logger = structlog.get_logger()

_ESCAPE_PATTERN = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)
_SEPARATOR_PATTERN = re.compile(r"(?<!\\)(?:\\\\)*[=:]")
_CONTROL_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "f": "\f"}
_LOCALE_TAG_PATTERN = re.compile(r"[A-Za-z]{2,3}(?:_[A-Za-z0-9]{2,8})*")


def _unescape(text: str, source: str) -> str:
    def _replace(match: "re.Match[str]") -> str:
        token = match.group(1)
        if len(token) == 5:
            return chr(int(token[1:], 16))
        if token == "u":
            raise TranslationLoadError(f"Malformed \\uXXXX escape in {source}", source)
        return _CONTROL_ESCAPES.get(token, token)

    return _ESCAPE_PATTERN.sub(_replace, text)


def _ends_with_continuation(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _logical_lines(text: str) -> Iterator[Tuple[int, str]]:
    """Yield (line_number, logical_line) pairs with continuations joined."""
    pending = ""
    start = 0
    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.lstrip()
        if not pending:
            if not line or line[0] in "#!":
                continue
            start = number
        if _ends_with_continuation(line):
            pending += line[:-1]
            continue
        yield start, pending + line
        pending = ""
    if pending:
        yield start, pending


def parse_properties(text: str, source: str = "<string>") -> Dict[str, str]:
    """Parse a `.properties` document into key/template pairs.

    Supports `#`/`!` comments, `=` or `:` separators, backslash line
    continuation and `\\n \\t \\r \\f \\\\ \\uXXXX` escapes. Lines without a
    separator or with an empty key are skipped.

    Args:
        text: Document contents.
        source: Name used in log events and errors.

    Returns:
        Parsed entries in document order; later duplicates win.

    Raises:
        TranslationLoadError: On a malformed unicode escape.
    """
    entries: Dict[str, str] = {}
    for number, line in _logical_lines(text):
        match = _SEPARATOR_PATTERN.search(line)
        if match is None:
            logger.warning("malformed_translation_entry", source=source, line=number)
            continue
        key = line[: match.end() - 1].rstrip()
        value = line[match.end():].lstrip()
        if not key:
            logger.warning("malformed_translation_entry", source=source, line=number)
            continue
        entries[_unescape(key, source)] = _unescape(value, source)
    return entries


def _flatten(data: Mapping[Any, Any], source: str, prefix: str = "") -> Dict[str, str]:
    items: Dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            items.update(_flatten(value, source, full_key))
        elif value is None or isinstance(value, (list, tuple)):
            logger.warning(
                "invalid_translation_value",
                source=source,
                key=full_key,
                expected="scalar",
            )
        else:
            items[full_key] = str(value)
    return items


def parse_yaml(text: str, source: str = "<string>") -> Dict[str, str]:
    """Parse a YAML translation document.

    Expected format (nesting is flattened into dotted keys):
        game:
          start: "The game begins in %1 seconds"

    Args:
        text: Document contents.
        source: Name used in log events and errors.

    Returns:
        Flattened key/template pairs.

    Raises:
        TranslationLoadError: If the document is not valid YAML or not a mapping.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise TranslationLoadError(f"Failed to parse {source}: {e}", source) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TranslationLoadError(
            f"Expected a mapping at the top of {source}, got {type(data).__name__}",
            source,
        )
    return _flatten(data, source)


Parser = Callable[[str, str], Dict[str, str]]

PARSERS: Dict[str, Parser] = {
    ".properties": parse_properties,
    ".yml": parse_yaml,
    ".yaml": parse_yaml,
}


def locale_tag_from_filename(name: str) -> Optional[LocaleTag]:
    """Extract the locale tag from a translation file name.

    "en_US.properties" -> "en_US", "game.fr_FR.yml" -> "fr_FR".

    Returns:
        Locale tag, or None for unsupported extensions.
    """
    for suffix in PARSERS:
        if name.endswith(suffix):
            stem = name[: -len(suffix)]
            tag = stem.rsplit(".", 1)[-1]
            return tag or None
    return None


def is_locale_tag(tag: str) -> bool:
    """Check that tag looks like `language[_REGION]` (e.g. "en", "pt_BR")."""
    return _LOCALE_TAG_PATTERN.fullmatch(tag) is not None


class TranslationLoader(ABC):
    """Abstract base for translation sources.

    Implementations return every entry they can read, grouped by locale.
    Unreadable individual sources are skipped and logged, never raised.
    """

    @abstractmethod
    def load_all(self) -> Dict[LocaleTag, Dict[str, str]]:
        """Load translations for all locales this source provides.

        Returns:
            Dict mapping locale tag to key/template pairs.

        Raises:
            LocalizationInitError: If a required source cannot be enumerated.
        """
        pass


class MappingTranslationLoader(TranslationLoader):
    """Loader over translations already held in memory."""

    def __init__(self, tables: Mapping[LocaleTag, Mapping[str, Any]]):
        self.tables = tables

    def load_all(self) -> Dict[LocaleTag, Dict[str, str]]:
        return {
            tag: {str(k): str(v) for k, v in entries.items()}
            for tag, entries in self.tables.items()
        }


class DirectoryTranslationLoader(TranslationLoader):
    """Loader for a flat directory of translation files.

    Works with a filesystem path or any importlib.resources traversable, so
    the same loader reads a user directory and the shipped package data.

    Attributes:
        translations_dir: Directory (Path or Traversable) to scan.
        required: Whether a missing directory is fatal.
        source: Label for log events ("bundled", "user", ...).
    """

    def __init__(
        self,
        translations_dir: Union[str, "os.PathLike[str]", Any],
        required: bool = False,
        source: str = "user",
    ):
        if isinstance(translations_dir, (str, os.PathLike)):
            translations_dir = Path(translations_dir)
        self.translations_dir = translations_dir
        self.required = required
        self.source = source

    @classmethod
    def from_package(cls, package: str) -> "DirectoryTranslationLoader":
        """Create a required loader over the data files of a package.

        Args:
            package: Importable package name (e.g. "localekit.locales").

        Raises:
            LocalizationInitError: If the package cannot be located.
        """
        try:
            root = resources.files(package)
        except (ModuleNotFoundError, TypeError, ValueError) as e:
            logger.error("bundled_translations_not_found", package=package, error=str(e))
            raise LocalizationInitError(
                f"Cannot locate bundled translations package '{package}'"
            ) from e
        return cls(root, required=True, source="bundled")

    def load_all(self) -> Dict[LocaleTag, Dict[str, str]]:
        """Load every supported file in the directory.

        Subdirectories and unreadable or malformed files are skipped with a
        warning. Files are processed in name order.

        Returns:
            Dict mapping locale tag to merged key/template pairs.

        Raises:
            LocalizationInitError: If the directory is required and cannot
                be enumerated.
        """
        root = self.translations_dir
        if not root.is_dir():
            reason = "not_a_directory" if root.is_file() else "not_found"
            if self.required:
                log = logger.error
            elif reason == "not_a_directory":
                log = logger.warning
            else:
                log = logger.info
            log(
                "translations_directory_unavailable",
                source=self.source,
                translations_dir=str(root),
                reason=reason,
            )
            if self.required:
                raise LocalizationInitError(
                    f"Translations directory {root} for {self.source} translations"
                    f" cannot be read ({reason})"
                )
            return {}

        try:
            children = sorted(root.iterdir(), key=lambda entry: entry.name)
        except OSError as e:
            if self.required:
                logger.error(
                    "translations_directory_unreadable",
                    source=self.source,
                    translations_dir=str(root),
                    error=str(e),
                )
                raise LocalizationInitError(
                    f"Cannot enumerate translations directory {root}"
                ) from e
            logger.warning(
                "translations_directory_unreadable",
                source=self.source,
                translations_dir=str(root),
                error=str(e),
            )
            return {}

        result: Dict[LocaleTag, Dict[str, str]] = {}
        file_count = 0
        for entry in children:
            if entry.name.startswith((".", "__")):
                continue
            if entry.is_dir():
                logger.warning(
                    "locale_subdirectory_skipped",
                    source=self.source,
                    name=entry.name,
                )
                continue

            tag = locale_tag_from_filename(entry.name)
            if tag is None:
                continue
            if not is_locale_tag(tag):
                logger.warning(
                    "translation_file_skipped",
                    source=self.source,
                    file=entry.name,
                    error=f"'{tag}' is not a language[_REGION] locale tag",
                )
                continue

            try:
                entries = self.load_file(entry)
            except TranslationLoadError as e:
                logger.warning(
                    "translation_file_skipped",
                    source=self.source,
                    file=entry.name,
                    error=str(e),
                )
                continue

            result.setdefault(tag, {}).update(entries)
            file_count += 1

        logger.info(
            "loaded_translations",
            source=self.source,
            translations_dir=str(root),
            file_count=file_count,
            locale_count=len(result),
        )
        return result

    def load_file(self, entry: Any) -> Dict[str, str]:
        """Read and parse a single translation file.

        Args:
            entry: Path or Traversable of the file.

        Raises:
            TranslationLoadError: If the file cannot be read or parsed.
        """
        parser = next(
            (fn for suffix, fn in PARSERS.items() if entry.name.endswith(suffix)),
            None,
        )
        if parser is None:
            raise TranslationLoadError(f"Unsupported translation file {entry.name}", entry.name)
        try:
            text = entry.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TranslationLoadError(f"Cannot read {entry.name}: {e}", entry.name) from e
        return parser(text, entry.name)


def build_message_store(loaders: Iterable[TranslationLoader]) -> MessageStore:
    """Merge the output of loaders, in order, into a new MessageStore.

    Pass bundled loaders first and user loaders last so user entries win.

    Raises:
        LocalizationInitError: Propagated from a required loader.
    """
    store = MessageStore()
    for loader in loaders:
        for tag, entries in loader.load_all().items():
            store.merge(tag, entries)
    return store

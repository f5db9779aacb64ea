"""Tests for localekit.i18n.loader module."""

from unittest.mock import patch

import pytest

from localekit.i18n.errors import LocalizationInitError, TranslationLoadError
from localekit.i18n.loader import (
    DirectoryTranslationLoader,
    MappingTranslationLoader,
    build_message_store,
    is_locale_tag,
    locale_tag_from_filename,
    parse_properties,
    parse_yaml,
)


@pytest.mark.unit
class TestParseProperties:
    """Tests for the .properties parser."""

    def test_basic_entries(self):
        """Parses key=value lines."""
        assert parse_properties("a=1\nb=2\n") == {"a": "1", "b": "2"}

    def test_comments_and_blank_lines(self):
        """# and ! comments and blank lines are ignored."""
        text = "# comment\n! also comment\n\n  \ngreet=Hello\n"

        assert parse_properties(text) == {"greet": "Hello"}

    def test_colon_separator_and_whitespace(self):
        """':' separates too and whitespace around it is trimmed."""
        assert parse_properties("  key : value with spaces  ") == {
            "key": "value with spaces  "
        }

    def test_value_may_contain_separator(self):
        """Only the first separator splits key and value."""
        assert parse_properties("url=http://x?a=b") == {"url": "http://x?a=b"}

    def test_empty_value(self):
        """A key with nothing after the separator maps to ''."""
        assert parse_properties("empty=") == {"empty": ""}

    def test_line_continuation(self):
        """A trailing backslash joins the next line."""
        text = "long=first \\\n    second\nnext=x\n"

        assert parse_properties(text) == {"long": "first second", "next": "x"}

    def test_escapes(self):
        """Standard escapes are decoded."""
        text = "k=tab\\there\\nnew \\u00e9 back\\\\slash\n"

        assert parse_properties(text) == {"k": "tab\there\nnew é back\\slash"}

    def test_escaped_backslash_before_u(self):
        """An escaped backslash followed by u is not a unicode escape."""
        text = "path=C:\\\\users\\\\me\n"

        assert parse_properties(text) == {"path": "C:\\users\\me"}

    def test_escaped_backslash_then_unicode_escape(self):
        """Escape pairs are read left to right."""
        assert parse_properties("k=\\\\\\u00e9") == {"k": "\\\u00e9"}

    def test_escaped_separator_in_key(self):
        """An escaped '=' belongs to the key."""
        assert parse_properties("a\\=b=c") == {"a=b": "c"}

    def test_later_duplicate_wins(self):
        """Duplicate keys keep the last value."""
        assert parse_properties("k=1\nk=2\n") == {"k": "2"}

    def test_line_without_separator_skipped(self):
        """Lines without a separator are skipped with a warning."""
        with patch("localekit.i18n.loader.logger") as mock_logger:
            result = parse_properties("orphan\nk=v\n", "en_US.properties")

        assert result == {"k": "v"}
        mock_logger.warning.assert_called_once_with(
            "malformed_translation_entry", source="en_US.properties", line=1
        )

    def test_empty_key_skipped(self):
        """Entries with an empty key are skipped."""
        assert parse_properties("=value\nk=v\n") == {"k": "v"}

    def test_placeholders_preserved(self):
        """%N tokens are kept verbatim."""
        assert parse_properties("page=Page %1 of %2") == {"page": "Page %1 of %2"}

    def test_malformed_unicode_escape_raises(self):
        """A broken \\u escape fails the whole document."""
        with pytest.raises(TranslationLoadError):
            parse_properties("k=\\u12", "bad.properties")


@pytest.mark.unit
class TestParseYaml:
    """Tests for the YAML parser."""

    def test_nested_keys_flattened(self):
        """Nested mappings become dotted keys."""
        text = "game:\n  start: Go %1\n  end:\n    win: Won\nflat: x\n"

        assert parse_yaml(text) == {
            "game.start": "Go %1",
            "game.end.win": "Won",
            "flat": "x",
        }

    def test_scalars_coerced_to_str(self):
        """Numbers and booleans become strings."""
        assert parse_yaml("n: 3\nb: true\n") == {"n": "3", "b": "True"}

    def test_empty_document(self):
        """An empty document has no entries."""
        assert parse_yaml("") == {}

    def test_invalid_values_skipped(self):
        """Lists and nulls are skipped."""
        assert parse_yaml("a: [1, 2]\nb:\nc: ok\n") == {"c": "ok"}

    def test_invalid_yaml_raises(self):
        """Syntax errors raise TranslationLoadError."""
        with pytest.raises(TranslationLoadError) as exc_info:
            parse_yaml("key: [unclosed", "bad.yml")

        assert exc_info.value.source == "bad.yml"

    def test_non_mapping_raises(self):
        """A top-level list is rejected."""
        with pytest.raises(TranslationLoadError):
            parse_yaml("- a\n- b\n")


@pytest.mark.unit
class TestLocaleTagFromFilename:
    """Tests for file name parsing."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("en_US.properties", "en_US"),
            ("fr_FR.yml", "fr_FR"),
            ("de_DE.yaml", "de_DE"),
            ("game.es_ES.yml", "es_ES"),
            ("a.b.pt_BR.properties", "pt_BR"),
            ("README.md", None),
            ("__init__.py", None),
            (".properties", None),
        ],
    )
    def test_extracts_last_segment(self, name, expected):
        """The tag is the last dot-separated segment of the stem."""
        assert locale_tag_from_filename(name) == expected


@pytest.mark.unit
class TestIsLocaleTag:
    """Tests for locale tag validation."""

    @pytest.mark.parametrize("tag", ["en", "en_US", "pt_BR", "es_419", "zh_Hant_TW", "fil_PH"])
    def test_accepts_locale_tags(self, tag):
        """language[_REGION] tags are accepted."""
        assert is_locale_tag(tag)

    @pytest.mark.parametrize("tag", ["messages", "game", "e", "en-US", "en_", "_US", ""])
    def test_rejects_other_names(self, tag):
        """Other stems are rejected."""
        assert not is_locale_tag(tag)


@pytest.mark.unit
class TestMappingTranslationLoader:
    """Tests for the in-memory loader."""

    def test_returns_string_tables(self):
        """Values are coerced to strings and tables copied."""
        tables = {"en_US": {"n": 1}}

        result = MappingTranslationLoader(tables).load_all()
        result["en_US"]["n"] = "changed"

        assert MappingTranslationLoader(tables).load_all() == {"en_US": {"n": "1"}}


@pytest.mark.unit
class TestDirectoryTranslationLoader:
    """Tests for DirectoryTranslationLoader."""

    def test_loads_all_formats(self, temp_translations_dir):
        """Properties and YAML files are grouped by locale."""
        result = DirectoryTranslationLoader(temp_translations_dir).load_all()

        assert set(result) == {"en_US", "fr_FR", "de_DE"}
        assert result["en_US"]["greet"] == "Hello %1"
        assert result["de_DE"] == {
            "game.start": "Spiel startet in %1",
            "greet": "Hallo %1",
        }

    def test_files_for_same_locale_merged_in_name_order(self, tmp_path):
        """Several files may contribute to one locale; later names win."""
        (tmp_path / "a.en_US.properties").write_text("k=a\nonly.a=1\n", encoding="utf-8")
        (tmp_path / "b.en_US.properties").write_text("k=b\n", encoding="utf-8")

        result = DirectoryTranslationLoader(tmp_path).load_all()

        assert result == {"en_US": {"k": "b", "only.a": "1"}}

    def test_accepts_string_path(self, temp_translations_dir):
        """A str path is converted to a Path."""
        loader = DirectoryTranslationLoader(str(temp_translations_dir))

        assert "fr_FR" in loader.load_all()

    def test_unsupported_files_ignored(self, tmp_path):
        """Files with unknown extensions are ignored."""
        (tmp_path / "notes.txt").write_text("hello", encoding="utf-8")
        (tmp_path / "en_US.properties").write_text("k=v", encoding="utf-8")

        assert DirectoryTranslationLoader(tmp_path).load_all() == {"en_US": {"k": "v"}}

    def test_subdirectory_skipped(self, tmp_path):
        """Subdirectories are not searched."""
        nested = tmp_path / "fr_FR"
        nested.mkdir()
        (nested / "fr_FR.properties").write_text("k=v", encoding="utf-8")

        with patch("localekit.i18n.loader.logger") as mock_logger:
            result = DirectoryTranslationLoader(tmp_path).load_all()

        assert result == {}
        mock_logger.warning.assert_called_once_with(
            "locale_subdirectory_skipped", source="user", name="fr_FR"
        )

    def test_hidden_and_cache_entries_ignored(self, tmp_path):
        """Dot and dunder entries are skipped silently."""
        (tmp_path / "__pycache__").mkdir()
        (tmp_path / ".hidden.en_US.properties").write_text("k=v", encoding="utf-8")

        with patch("localekit.i18n.loader.logger") as mock_logger:
            result = DirectoryTranslationLoader(tmp_path).load_all()

        assert result == {}
        mock_logger.warning.assert_not_called()

    def test_file_without_locale_tag_skipped(self, tmp_path):
        """A file whose stem is not a locale tag is skipped with a warning."""
        (tmp_path / "messages.properties").write_text("k=v", encoding="utf-8")
        (tmp_path / "en_US.properties").write_text("k=v", encoding="utf-8")

        with patch("localekit.i18n.loader.logger") as mock_logger:
            result = DirectoryTranslationLoader(tmp_path).load_all()

        assert result == {"en_US": {"k": "v"}}
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args[0][0] == "translation_file_skipped"
        assert mock_logger.warning.call_args[1]["file"] == "messages.properties"

    def test_malformed_file_skipped(self, tmp_path):
        """A malformed file is skipped and the rest still load."""
        (tmp_path / "de_DE.yml").write_text("key: [unclosed", encoding="utf-8")
        (tmp_path / "en_US.properties").write_text("k=v", encoding="utf-8")

        with patch("localekit.i18n.loader.logger") as mock_logger:
            result = DirectoryTranslationLoader(tmp_path).load_all()

        assert result == {"en_US": {"k": "v"}}
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args[0][0] == "translation_file_skipped"

    def test_undecodable_file_skipped(self, tmp_path):
        """Files that are not UTF-8 are skipped."""
        (tmp_path / "fr_FR.properties").write_bytes(b"k=\xff\xfe\n")

        assert DirectoryTranslationLoader(tmp_path).load_all() == {}

    def test_missing_optional_directory(self, tmp_path):
        """A missing optional directory yields no translations."""
        loader = DirectoryTranslationLoader(tmp_path / "nope")

        assert loader.load_all() == {}

    def test_missing_required_directory_raises(self, tmp_path):
        """A missing required directory is fatal."""
        loader = DirectoryTranslationLoader(tmp_path / "nope", required=True)

        with pytest.raises(LocalizationInitError):
            loader.load_all()

    def test_file_instead_of_directory(self, tmp_path):
        """A path to a file is not a translations directory."""
        path = tmp_path / "en_US.properties"
        path.write_text("k=v", encoding="utf-8")

        assert DirectoryTranslationLoader(path).load_all() == {}
        with pytest.raises(LocalizationInitError):
            DirectoryTranslationLoader(path, required=True).load_all()

    def test_load_file_unreadable(self, tmp_path):
        """load_file raises TranslationLoadError for missing files."""
        loader = DirectoryTranslationLoader(tmp_path)

        with pytest.raises(TranslationLoadError):
            loader.load_file(tmp_path / "missing.properties")


@pytest.mark.unit
class TestPackageLoader:
    """Tests for loading the shipped translations."""

    def test_from_package_loads_bundled_locales(self):
        """The shipped package contains the core locales."""
        loader = DirectoryTranslationLoader.from_package("localekit.locales")
        result = loader.load_all()

        assert loader.required is True
        assert loader.source == "bundled"
        assert {"en_US", "en_GB", "fr_FR", "de_DE"} <= set(result)
        assert result["en_US"]["common.page"] == "Page %1 of %2"
        assert result["en_GB"]["common.color"] == "Colour"

    def test_from_package_unknown_package(self):
        """An unknown package is an initialization error."""
        with pytest.raises(LocalizationInitError):
            DirectoryTranslationLoader.from_package("localekit.no_such_locales")


@pytest.mark.unit
class TestBuildMessageStore:
    """Tests for build_message_store."""

    def test_later_loaders_override(self, temp_translations_dir, user_translations_dir):
        """User loaders shadow bundled keys and add locales."""
        store = build_message_store(
            [
                DirectoryTranslationLoader(temp_translations_dir, required=True),
                DirectoryTranslationLoader(user_translations_dir),
            ]
        )

        assert store.lookup("en_US", "k") == "override"
        assert store.lookup("en_US", "farewell") == "Goodbye"
        assert store.lookup("es_ES", "greet") == "Hola %1"
        assert store.locales() == ["de_DE", "en_US", "es_ES", "fr_FR"]

    def test_no_loaders(self):
        """No loaders give an empty store."""
        assert len(build_message_store([])) == 0

    def test_required_loader_failure_propagates(self, tmp_path):
        """Init errors from a required loader propagate."""
        with pytest.raises(LocalizationInitError):
            build_message_store(
                [DirectoryTranslationLoader(tmp_path / "nope", required=True)]
            )


@pytest.mark.unit
class TestInitFailureLogging:
    """Fatal loader failures are logged before raising."""

    def test_required_directory_logs_error(self, tmp_path):
        """A missing required directory is logged at error level."""
        loader = DirectoryTranslationLoader(tmp_path / "nope", required=True, source="bundled")

        with patch("localekit.i18n.loader.logger") as mock_logger:
            with pytest.raises(LocalizationInitError):
                loader.load_all()

        mock_logger.error.assert_called_once_with(
            "translations_directory_unavailable",
            source="bundled",
            translations_dir=str(tmp_path / "nope"),
            reason="not_found",
        )

    def test_unknown_package_logs_error(self):
        """An unknown bundled package is logged at error level."""
        with patch("localekit.i18n.loader.logger") as mock_logger:
            with pytest.raises(LocalizationInitError):
                DirectoryTranslationLoader.from_package("localekit.no_such_locales")

        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args[0][0] == "bundled_translations_not_found"

"""Feature-level fixtures for i18n system tests.

Provides translation directories on disk, collaborator doubles and
resolvers built from the shared factories.
"""

import pytest
import yaml

from tests.factories.i18n import (
    MappingLocaleSource,
    RecordingSink,
    make_config,
    make_message_store,
    make_resolver,
    make_settings,
)


@pytest.fixture
def temp_translations_dir(tmp_path):
    """Create a directory with sample translation files.

    Returns a directory structure like:
    - en_US.properties
    - fr_FR.properties
    - game.de_DE.yml
    """
    bundled = tmp_path / "bundled"
    bundled.mkdir()
    (bundled / "en_US.properties").write_text(
        "# English\n"
        "greet=Hello %1\n"
        "farewell=Goodbye\n"
        "k=bundled\n",
        encoding="utf-8",
    )
    (bundled / "fr_FR.properties").write_text(
        "greet=Bonjour %1\nfarewell=Au revoir\n",
        encoding="utf-8",
    )
    with open(bundled / "game.de_DE.yml", "w", encoding="utf-8") as f:
        yaml.dump({"game": {"start": "Spiel startet in %1"}, "greet": "Hallo %1"}, f)
    return bundled


@pytest.fixture
def user_translations_dir(tmp_path):
    """Create a user override directory shadowing one bundled key."""
    user = tmp_path / "user"
    user.mkdir()
    (user / "en_US.properties").write_text("k=override\n", encoding="utf-8")
    (user / "es_ES.properties").write_text("greet=Hola %1\n", encoding="utf-8")
    return user


@pytest.fixture
def message_store():
    """MessageStore with the default factory tables."""
    return make_message_store()


@pytest.fixture
def config():
    """LocalizationConfig with en_US <-> en_GB and fr_FR <-> fr_CA."""
    return make_config()


@pytest.fixture
def sink():
    """Recording MessageSink."""
    return RecordingSink()


@pytest.fixture
def locale_source():
    """LocaleSource for three users."""
    return MappingLocaleSource({"alice": "fr_FR", "bob": "de_DE", "carol": "en_GB"})


@pytest.fixture
def resolver(config, locale_source, sink):
    """Resolver over the default tables with delivery collaborators."""
    return make_resolver(config=config, locale_source=locale_source, sink=sink)


@pytest.fixture
def settings(temp_translations_dir):
    """Settings whose user directory is the temp translations directory."""
    return make_settings(user_locales_dir=str(temp_translations_dir))

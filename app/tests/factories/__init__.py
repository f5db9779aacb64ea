"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_config,
    make_message_store,
    make_resolver,
    make_settings,
    make_tables,
)

__all__ = [
    "make_config",
    "make_message_store",
    "make_resolver",
    "make_settings",
    "make_tables",
]

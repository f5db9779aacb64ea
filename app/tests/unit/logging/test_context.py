"""Unit tests for localekit.logging.context module.

Tests cover:
- bind_localization_context() context manager
- get_correlation_id()
- set_correlation_id()
- clear_localization_context()
"""

import uuid

import pytest
import structlog

from localekit.logging.context import (
    bind_localization_context,
    clear_localization_context,
    get_correlation_id,
    set_correlation_id,
)


@pytest.mark.unit
class TestBindLocalizationContext:
    """Test suite for bind_localization_context context manager."""

    def test_auto_generates_correlation_id(self):
        """Correlation ID is auto-generated if not provided."""
        with bind_localization_context() as correlation_id:
            assert get_correlation_id() == correlation_id
            uuid.UUID(correlation_id)

    def test_uses_provided_correlation_id(self):
        """Provided correlation ID is used instead of generating one."""
        with bind_localization_context(correlation_id="broadcast-1"):
            assert get_correlation_id() == "broadcast-1"

    def test_binds_message_key_and_extra_context(self):
        """Message key and extra values are bound to context."""
        with bind_localization_context(message_key="game.start", zone="lobby"):
            ctx = structlog.contextvars.get_contextvars()
            assert ctx["message_key"] == "game.start"
            assert ctx["zone"] == "lobby"

    def test_omits_message_key_when_none(self):
        """message_key is not bound when not provided."""
        with bind_localization_context():
            assert "message_key" not in structlog.contextvars.get_contextvars()

    def test_context_cleared_after_block(self):
        """Bound values are removed when the block exits."""
        with bind_localization_context(message_key="k"):
            pass

        assert get_correlation_id() is None
        assert "message_key" not in structlog.contextvars.get_contextvars()

    def test_context_cleared_after_exception(self):
        """Bound values are removed even when the block raises."""
        with pytest.raises(RuntimeError):
            with bind_localization_context(message_key="k"):
                raise RuntimeError("boom")

        assert get_correlation_id() is None


@pytest.mark.unit
class TestCorrelationHelpers:
    """Test suite for the correlation ID helpers."""

    def test_get_correlation_id_none_by_default(self):
        """No correlation ID outside a bound context."""
        assert get_correlation_id() is None

    def test_set_correlation_id(self):
        """set_correlation_id binds the value."""
        set_correlation_id("abc")

        assert get_correlation_id() == "abc"

    def test_clear_localization_context(self):
        """clear_localization_context removes every bound value."""
        set_correlation_id("abc")
        structlog.contextvars.bind_contextvars(extra="x")

        clear_localization_context()

        assert structlog.contextvars.get_contextvars() == {}

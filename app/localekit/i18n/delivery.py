"""Collaborator interfaces for per-user localization and delivery.

The host application implements these; localekit never assumes how a
user's locale is discovered or how text reaches them.
"""

from abc import ABC, abstractmethod
from typing import Any

from localekit.i18n.models import LocaleTag


class LocaleSource(ABC):
    """Reports the preferred locale of a user.

    A resolver works without one; every user then gets the default locale.

    Example Implementation:
        class ProfileLocaleSource(LocaleSource):

            def locale_of(self, user) -> str:
                return user.profile.locale
    """

    @abstractmethod
    def locale_of(self, user: Any) -> LocaleTag:
        """Get the locale tag preferred by user.

        Args:
            user: Host-specific user handle.

        Returns:
            Locale tag (e.g. "fr_FR"). An empty value means unknown.
        """
        pass


class MessageSink(ABC):
    """Delivers localized text to a user.

    Example Implementation:
        class ChatSink(MessageSink):

            def deliver(self, user, text: str) -> None:
                user.send_message(text)
    """

    @abstractmethod
    def deliver(self, user: Any, text: str) -> None:
        """Send text to user.

        Args:
            user: Host-specific user handle.
            text: Localized message.
        """
        pass

"""Exceptions for the localization system.

Resolution misses are never errors; only loading and delivery
problems surface as exceptions.
"""


class LocalizationError(Exception):
    """Base exception for all localization errors.

    Example:
        try:
            service = LocalizationService()
        except LocalizationError as e:
            logger.error("localization_error", error=str(e))
    """

    pass


class LocalizationInitError(LocalizationError):
    """Raised when the bundled translations cannot be located or enumerated.

    Unrecoverable for the owning component; surfaced at startup.

    Example:
        >>> DirectoryTranslationLoader.from_package("missing.locales")
        Traceback (most recent call last):
        ...
        LocalizationInitError: Cannot locate bundled translations package 'missing.locales'
    """

    pass


class TranslationLoadError(LocalizationError):
    """Raised when a single translation file is unreadable or malformed.

    Directory loaders catch it, log a warning and skip the file.
    """

    def __init__(self, message: str, source: str = ""):
        super().__init__(message)
        self.source = source


class SinkNotConfiguredError(LocalizationError):
    """Raised when delivery is requested from a resolver without a sink."""

    pass

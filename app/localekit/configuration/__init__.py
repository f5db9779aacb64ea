"""localekit configuration module - public API.

Centralized configuration management using Pydantic BaseSettings.

Exports:
    Settings: Main settings class (for testing/overrides)
    LocalizationSettings: Locale resolution settings section
    get_settings: Cached settings provider

Example:
    ```python
    from localekit.configuration import get_settings

    settings = get_settings()
    default_locale = settings.i18n.default_locale
    ```
"""

from localekit.configuration.localization import LocalizationSettings
from localekit.configuration.settings import Settings, get_settings

__all__ = ["Settings", "LocalizationSettings", "get_settings"]

"""Localization settings."""

from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from localekit.configuration.base import LocalizationBaseSettings


class LocalizationSettings(LocalizationBaseSettings):
    """Locale resolution and translation source configuration.

    Environment Variables:
        LOCALIZATION_DEFAULT_LOCALE: Final fallback locale (default: en_US)
        LOCALIZATION_USER_DIR: Directory with user override translation files
        LOCALIZATION_BUNDLED_PACKAGE: Package holding the shipped translations
        LOCALIZATION_DIALECT_ALTERNATIVES: JSON mapping of locale tag to the
            list of its dialect alternatives. Replaces the built-in table.

    Example:
        ```python
        from localekit.configuration import get_settings

        settings = get_settings()

        default_locale = settings.i18n.default_locale
        user_dir = settings.i18n.user_locales_dir
        ```
    """

    default_locale: str = Field(
        default="en_US",
        alias="LOCALIZATION_DEFAULT_LOCALE",
        description="Locale tried after every fallback is exhausted",
    )
    user_locales_dir: Optional[str] = Field(
        default=None,
        alias="LOCALIZATION_USER_DIR",
        description="Directory of user translation files merged over the bundled ones",
    )
    bundled_package: str = Field(
        default="localekit.locales",
        alias="LOCALIZATION_BUNDLED_PACKAGE",
        description="Importable package whose data files are the shipped translations",
    )
    dialect_alternatives: Optional[Dict[str, List[str]]] = Field(
        default=None,
        alias="LOCALIZATION_DIALECT_ALTERNATIVES",
        description="Locale tag to dialect alternatives; built-in table when unset",
    )

    @field_validator("dialect_alternatives", mode="before")
    @classmethod
    def validate_dialect_alternatives(cls, v: Any) -> Any:
        """Discard values that are not a non-empty mapping."""
        if not isinstance(v, dict) or not v:
            return None
        return v

    @field_validator("default_locale")
    @classmethod
    def validate_default_locale(cls, v: str) -> str:
        """Ensure the default locale is not blank."""
        if not v or not v.strip():
            raise ValueError("Default locale cannot be empty")
        return v.strip()

"""localekit configuration settings - main aggregator."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from localekit.configuration.localization import LocalizationSettings


class Settings(BaseSettings):
    """localekit configuration settings - main aggregator.

    Environment Variables:
        PREFIX: Environment prefix; an empty prefix means production
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        ```python
        from localekit.configuration import get_settings

        settings = get_settings()

        if settings.is_production:
            # JSON logs...

        default_locale = settings.i18n.default_locale
        ```
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    i18n: LocalizationSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        if "i18n" not in kwargs:
            kwargs["i18n"] = LocalizationSettings()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()

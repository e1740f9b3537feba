"""ti18n configuration settings."""

from pydantic import Field, field_validator

from ti18n.configuration.base import LibrarySettings


class Settings(LibrarySettings):
    """ti18n configuration settings.

    Environment Variables:
        TI18N_DEFAULT_LOCALE: Locale used by stores created without one (default: en)
        TI18N_DEBUG: Emit debug diagnostics such as every resource candidate tried
        TI18N_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        TI18N_ENVIRONMENT: "production" renders logs as JSON, anything else as console
        TI18N_ENCODING: Text encoding used to decode resource bytes (default: utf-8)

    Example:
        ```python
        from ti18n.configuration import settings

        locale = settings.DEFAULT_LOCALE
        if settings.is_production:
            ...
        ```
    """

    DEFAULT_LOCALE: str = Field(default="en")
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")
    ENVIRONMENT: str = Field(default="development")
    ENCODING: str = Field(default="utf-8")

    @field_validator("DEFAULT_LOCALE")
    @classmethod
    def validate_default_locale(cls, v: str) -> str:
        """Reject blank locale tags."""
        v = v.strip()
        if not v:
            raise ValueError("DEFAULT_LOCALE must not be blank")
        return v

    @property
    def is_production(self) -> bool:
        """Check if the library runs in a production environment."""
        return self.ENVIRONMENT.lower() == "production"

    @property
    def effective_log_level(self) -> str:
        """Log level after applying the DEBUG switch."""
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL.upper()


# Create the settings instance
settings = Settings()

"""Shared base classes for ti18n settings modules."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class LibrarySettings(BaseSettings):
    """Base class for ti18n settings.

    All settings classes should inherit from this class so they share the
    same environment behavior (``.env`` loading, ``TI18N_`` prefix, case
    sensitivity, unknown keys ignored).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TI18N_",
        case_sensitive=True,
        extra="ignore",
    )

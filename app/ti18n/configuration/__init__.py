"""ti18n configuration module - public API.

Exports:
    settings: Singleton Settings instance
    Settings: Settings class (for testing/overrides)

Example:
    ```python
    from ti18n.configuration import settings

    if settings.DEBUG:
        ...
    ```
"""

from ti18n.configuration.settings import Settings, settings

__all__ = ["Settings", "settings"]

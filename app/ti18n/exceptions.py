"""Custom exceptions for the ti18n system.

Every failure raised while resolving, parsing or configuring translation
resources derives from I18nError so callers can catch a single type.
"""

from typing import Any, Optional, Sequence


class I18nError(Exception):
    """Base exception for all ti18n errors.

    Example:
        try:
            store.update("fr")
        except I18nError as e:
            logger.error("i18n_error", error=str(e))
    """

    pass


class ResourceNotFoundError(I18nError):
    """Raised when no candidate resource exists for a locale.

    Attributes:
        owner: Owning type/package of a namespace lookup, if any.
        namespace: Namespace or directory that was searched, if any.
        locale: Originally requested locale.
        candidates: Candidate paths that were tried, in order.
    """

    def __init__(
        self,
        message: str,
        owner: Optional[Any] = None,
        namespace: Optional[str] = None,
        locale: Optional[str] = None,
        candidates: Sequence[str] = (),
    ):
        super().__init__(message)
        self.owner = owner
        self.namespace = namespace
        self.locale = locale
        self.candidates = tuple(candidates)


class ParseError(I18nError, ValueError):
    """Raised when resource content is malformed for its format.

    Attributes:
        format_name: Human-readable format name (e.g. "YAML").
        cause: Underlying exception, if any.
    """

    def __init__(self, format_name: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"Failed to parse {format_name} content: {message}")
        self.format_name = format_name
        self.cause = cause


class InvalidConfigurationError(I18nError, ValueError):
    """Raised when a locator or store is configured inconsistently.

    Example:
        >>> ByNamespace(owner=MyPlugin, namespace="")
        Traceback (most recent call last):
        ...
        InvalidConfigurationError: Namespace must not be empty when loading from an owner
    """

    pass


class InputNullError(I18nError, TypeError):
    """Raised when an explicit stream or file argument is missing."""

    pass


class PlaceholderError(I18nError, ValueError):
    """Raised when printf-style arguments do not match a template."""

    def __init__(self, template: str, cause: BaseException):
        super().__init__(f"Cannot format {template!r}: {cause}")
        self.template = template
        self.cause = cause

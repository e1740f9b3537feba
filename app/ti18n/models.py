"""Core data structures for the ti18n system.

Defines locale helpers, the resource locator variants, named placeholder
values and the translation store states.
"""

from dataclasses import dataclass
from enum import Enum
from os import PathLike
from pathlib import Path
from typing import Any, BinaryIO, Dict, Union

from ti18n.exceptions import InputNullError, InvalidConfigurationError

ENGLISH = "en"
"""Fixed fallback locale for namespace lookups."""

FlatTable = Dict[str, str]

PathType = Union[str, PathLike]


def normalize_locale(locale: Any) -> str:
    """Validate and normalize a locale tag.

    Locales are opaque language tags such as "en", "fr" or "en_US". Surrounding
    whitespace is stripped; nothing else is rewritten. Tags become file names,
    so path separators and ".." are rejected.

    Args:
        locale: Candidate locale tag.

    Returns:
        The stripped locale tag.

    Raises:
        InvalidConfigurationError: If locale is not a non-blank string or
            contains path components.
    """
    if not isinstance(locale, str) or not locale.strip():
        raise InvalidConfigurationError(f"Invalid locale: {locale!r}")
    locale = locale.strip()
    if "/" in locale or "\\" in locale or ".." in locale:
        raise InvalidConfigurationError(f"Locale must not contain path components: {locale!r}")
    return locale


class StoreState(str, Enum):
    """Lifecycle state of a TranslationStore."""

    EMPTY = "empty"
    LOADED = "loaded"


@dataclass(frozen=True)
class NamedValue:
    """A named placeholder value for ``{keyword}`` substitution.

    Attributes:
        keyword: Placeholder name, without braces.
        value: Replacement value; converted with str() at substitution time.
    """

    keyword: str
    value: Any


class ResourceLocator:
    """Base for the variants describing where resource bytes come from."""

    def describe(self) -> str:
        """Short human-readable description used in logs and errors."""
        raise NotImplementedError


@dataclass(frozen=True)
class ByFile(ResourceLocator):
    """An explicit resource file; locale and extension search do not apply."""

    path: Path

    def __post_init__(self):
        if self.path is None:
            raise InputNullError("File must not be None")
        object.__setattr__(self, "path", Path(self.path))

    def describe(self) -> str:
        return f"file:{self.path}"


@dataclass(frozen=True)
class ByDirectory(ResourceLocator):
    """A directory holding ``<locale><ext>`` files.

    The directory must exist when the locator is created.
    """

    path: Path

    def __post_init__(self):
        if self.path is None:
            raise InputNullError("Directory must not be None")
        path = Path(self.path)
        if not path.exists():
            raise InvalidConfigurationError(f"Directory does not exist: {path}")
        if not path.is_dir():
            raise InvalidConfigurationError(f"Not a directory: {path}")
        object.__setattr__(self, "path", path)

    def describe(self) -> str:
        return f"directory:{self.path}"


@dataclass(frozen=True)
class ByNamespace(ResourceLocator):
    """Package resources under ``<namespace>/<locale><ext>`` next to an owner.

    Attributes:
        owner: Module, package name, or class/object whose defining package
            anchors the lookup.
        namespace: Resource sub-directory inside the owner's package.
    """

    owner: Any
    namespace: str

    def __post_init__(self):
        if self.owner is None:
            raise InvalidConfigurationError("Owner must not be None when loading from a namespace")
        if not isinstance(self.namespace, str) or not self.namespace.strip():
            raise InvalidConfigurationError(
                "Namespace must not be empty when loading from an owner"
            )
        object.__setattr__(self, "namespace", self.namespace.strip().strip("/"))

    def describe(self) -> str:
        owner_name = getattr(self.owner, "__qualname__", None) or getattr(
            self.owner, "__name__", str(self.owner)
        )
        return f"namespace:{owner_name}:{self.namespace}"


@dataclass(frozen=True)
class ByStream(ResourceLocator):
    """Raw resource bytes supplied by the caller."""

    data: bytes

    def __post_init__(self):
        if self.data is None:
            raise InputNullError("Stream must not be None")
        if not isinstance(self.data, (bytes, bytearray)):
            raise TypeError(f"ByStream expects bytes, got {type(self.data).__name__}")
        object.__setattr__(self, "data", bytes(self.data))

    @classmethod
    def from_stream(cls, stream: BinaryIO) -> "ByStream":
        """Read a binary file-like object once and keep its bytes.

        Raises:
            InputNullError: If stream is None.
        """
        if stream is None:
            raise InputNullError("Stream must not be None")
        return cls(stream.read())

    def describe(self) -> str:
        return f"stream:{len(self.data)} bytes"

"""Resource providers for namespace-based lookups.

A provider answers one question: given an owner and a relative path such as
``"lang/fr.yml"``, what are the resource bytes, if any? The Resource Locator
only talks to this interface, so lookups can be served from installed
packages or from memory.
"""

import importlib
import importlib.resources
import sys
import types
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from ti18n.exceptions import InvalidConfigurationError


class ResourceProvider(ABC):
    """Abstract base for resource providers."""

    @abstractmethod
    def get_resource(self, owner: Any, relative_path: str) -> Optional[bytes]:
        """Return the bytes at relative_path for owner, or None if absent.

        Args:
            owner: Object anchoring the lookup (module, package name, class).
            relative_path: "/"-separated path relative to the owner's root.

        Raises:
            OSError: If the resource exists but cannot be read.
        """
        pass

    @abstractmethod
    def validate_owner(self, owner: Any) -> None:
        """Check that owner can anchor lookups.

        Raises:
            InvalidConfigurationError: If owner has no resolvable resource root.
        """
        pass


class PackageResourceProvider(ResourceProvider):
    """Serves resources shipped inside Python packages.

    The owner is resolved to a package: a package name string is used as
    is, a module maps to its package, and any other object (class, function,
    instance) maps to the package of the module that defines it. Lookups go
    through importlib.resources, so zipped and installed packages work too.
    """

    @staticmethod
    def package_name(owner: Any) -> str:
        """Resolve owner to the dotted name of the package anchoring lookups.

        Raises:
            InvalidConfigurationError: If the owner's module cannot be found.
        """
        if isinstance(owner, str):
            module_name = owner
        elif isinstance(owner, types.ModuleType):
            module_name = owner.__name__
        else:
            target = owner if isinstance(owner, type) else type(owner)
            module_name = getattr(target, "__module__", None)
            if not module_name:
                raise InvalidConfigurationError(f"Cannot determine the module of {owner!r}")

        module = sys.modules.get(module_name)
        if module is None:
            try:
                module = importlib.import_module(module_name)
            except ImportError as e:
                raise InvalidConfigurationError(
                    f"Owner {owner!r} does not resolve to an importable module"
                ) from e

        return module.__package__ or module.__name__

    def _root(self, owner: Any):
        package = self.package_name(owner)
        try:
            return importlib.resources.files(package)
        except (ImportError, TypeError) as e:
            raise InvalidConfigurationError(
                f"Package {package!r} has no resource root"
            ) from e

    def validate_owner(self, owner: Any) -> None:
        self._root(owner)

    def get_resource(self, owner: Any, relative_path: str) -> Optional[bytes]:
        resource = self._root(owner)
        for part in relative_path.split("/"):
            if part:
                resource = resource / part

        if not resource.is_file():
            return None
        return resource.read_bytes()


class MappingResourceProvider(ResourceProvider):
    """Serves resources from an in-memory ``{relative_path: bytes}`` mapping.

    The owner only has to be non-None; every owner sees the same mapping.

    Example:
        provider = MappingResourceProvider({"lang/en.yml": b"greeting: Hello"})
    """

    def __init__(self, resources: Mapping[str, bytes]):
        self.resources = dict(resources)

    def validate_owner(self, owner: Any) -> None:
        if owner is None:
            raise InvalidConfigurationError("Owner must not be None")

    def get_resource(self, owner: Any, relative_path: str) -> Optional[bytes]:
        return self.resources.get(relative_path)

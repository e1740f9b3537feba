"""Resource resolution: turn a locator and a locale into resource bytes.

Namespace lookups walk a short fallback chain (requested locale, then
English) over the format's extensions. Directory lookups try the format's
extensions for the requested locale only. File and stream locators bypass
locale and extension search entirely.
"""

from typing import List, Optional

from ti18n.exceptions import ResourceNotFoundError
from ti18n.formats import FormatSpec
from ti18n.logging import get_module_logger
from ti18n.models import (
    ENGLISH,
    ByDirectory,
    ByFile,
    ByNamespace,
    ByStream,
    ResourceLocator,
    normalize_locale,
)
from ti18n.resources import ResourceProvider

logger = get_module_logger()


def build_base_path(namespace: Optional[str], locale: str) -> str:
    """Return ``"<namespace>/<locale>"``, or just the locale without a namespace."""
    return f"{namespace}/{locale}" if namespace else locale


def fallback_chain(locale: str) -> List[str]:
    """Locales tried for a namespace lookup, in order.

    Example:
        >>> fallback_chain("fr")
        ['fr', 'en']
        >>> fallback_chain("en")
        ['en']
    """
    if locale == ENGLISH:
        return [ENGLISH]
    return [locale, ENGLISH]


class ResourceResolver:
    """Resolves resource bytes for one format.

    Attributes:
        format_spec: Extensions and name of the format being resolved.
        provider: ResourceProvider serving namespace lookups.
    """

    def __init__(self, format_spec: FormatSpec, provider: ResourceProvider):
        self.format_spec = format_spec
        self.provider = provider

    def resolve(self, locator: ResourceLocator, locale: str) -> bytes:
        """Resolve the resource bytes for a locale.

        Args:
            locator: Where the resource lives.
            locale: Requested locale; ignored by file and stream locators.

        Returns:
            Raw resource bytes.

        Raises:
            ResourceNotFoundError: If no candidate resource exists.
            InvalidConfigurationError: If the locale is not a plain tag.
        """
        if isinstance(locator, ByStream):
            return locator.data
        if isinstance(locator, ByFile):
            return self._resolve_file(locator)
        if isinstance(locator, ByDirectory):
            return self._resolve_directory(locator, normalize_locale(locale))
        if isinstance(locator, ByNamespace):
            return self._resolve_namespace(locator, normalize_locale(locale))
        raise TypeError(f"Unsupported resource locator: {type(locator).__name__}")

    def _resolve_file(self, locator: ByFile) -> bytes:
        path = locator.path
        format_name = self.format_spec.format_name
        if not path.exists():
            raise ResourceNotFoundError(
                f"Failed to load {format_name} file: {path} does not exist",
                candidates=[str(path)],
            )
        if not path.is_file():
            raise ResourceNotFoundError(
                f"Failed to load {format_name} file: {path} is not a file",
                candidates=[str(path)],
            )
        try:
            return path.read_bytes()
        except OSError as e:
            raise ResourceNotFoundError(
                f"Failed to load {format_name} file: {path} is not readable",
                candidates=[str(path)],
            ) from e

    def _resolve_directory(self, locator: ByDirectory, locale: str) -> bytes:
        candidates = []
        for extension in self.format_spec.extensions:
            candidate = locator.path / f"{locale}{extension}"
            candidates.append(str(candidate))
            logger.debug("trying_resource_candidate", candidate=str(candidate))
            if candidate.is_file():
                try:
                    return candidate.read_bytes()
                except OSError as e:
                    raise ResourceNotFoundError(
                        f"Failed to load {self.format_spec.format_name} file: {candidate} is not readable",
                        namespace=str(locator.path),
                        locale=locale,
                        candidates=candidates,
                    ) from e

        raise ResourceNotFoundError(
            f"Failed to load {self.format_spec.format_name} file for {locator.path} in {locale}",
            namespace=str(locator.path),
            locale=locale,
            candidates=candidates,
        )

    def _resolve_namespace(self, locator: ByNamespace, locale: str) -> bytes:
        candidates = []
        for candidate_locale in fallback_chain(locale):
            base_path = build_base_path(locator.namespace, candidate_locale)
            for extension in self.format_spec.extensions:
                candidate = base_path + extension
                candidates.append(candidate)
                logger.debug("trying_resource_candidate", candidate=candidate)
                try:
                    data = self.provider.get_resource(locator.owner, candidate)
                except OSError as e:
                    raise ResourceNotFoundError(
                        f"Failed to read {self.format_spec.format_name} resource {candidate}",
                        owner=locator.owner,
                        namespace=locator.namespace,
                        locale=locale,
                        candidates=candidates,
                    ) from e
                if data is None:
                    continue

                if candidate_locale != locale:
                    logger.info(
                        "used_fallback_resource",
                        requested_locale=locale,
                        fallback_locale=candidate_locale,
                        resource=candidate,
                    )
                return data

        raise ResourceNotFoundError(
            f"Failed to load {self.format_spec.format_name} file for "
            f"{locator.describe()} in {locale}",
            owner=locator.owner,
            namespace=locator.namespace,
            locale=locale,
            candidates=candidates,
        )

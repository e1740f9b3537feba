"""Factory functions for creating translation stores.

create_store() picks the right ResourceLocator from keyword arguments and
validates that exactly one resource source was given.
"""

from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

from ti18n.exceptions import InvalidConfigurationError
from ti18n.formats import Format
from ti18n.logging import get_module_logger
from ti18n.models import (
    ByDirectory,
    ByFile,
    ByNamespace,
    ByStream,
    PathType,
    ResourceLocator,
)
from ti18n.resources import ResourceProvider
from ti18n.store import TranslationStore

logger = get_module_logger()


def _build_locator(
    file: Optional[PathType],
    directory: Optional[PathType],
    owner: Any,
    namespace: Optional[str],
    stream: Optional[Union[bytes, BinaryIO]],
) -> ResourceLocator:
    if owner is not None and namespace is None:
        raise InvalidConfigurationError("Namespace must not be None when loading from an owner")

    sources = {
        "file": file is not None,
        "directory": directory is not None,
        "namespace": namespace is not None,
        "stream": stream is not None,
    }
    chosen = [name for name, given in sources.items() if given]
    if not chosen:
        raise InvalidConfigurationError("Invalid configuration for loading language map")
    if len(chosen) > 1:
        raise InvalidConfigurationError(
            f"Exactly one resource source is allowed, got: {', '.join(chosen)}"
        )

    if file is not None:
        return ByFile(Path(file))
    if directory is not None:
        return ByDirectory(Path(directory))
    if stream is not None:
        if isinstance(stream, (bytes, bytearray)):
            return ByStream(bytes(stream))
        return ByStream.from_stream(stream)
    if owner is not None:
        return ByNamespace(owner, namespace)

    # A bare namespace names a directory on disk
    return ByDirectory(Path(namespace))


def _resolve_format(fmt: Optional[Union[Format, str]], file: Optional[PathType]) -> Format:
    if isinstance(fmt, Format):
        return fmt
    if fmt is not None:
        try:
            return Format.from_name(fmt)
        except ValueError as e:
            raise InvalidConfigurationError(str(e)) from e
    if file is not None and Path(file).suffix:
        try:
            return Format.from_extension(Path(file).suffix)
        except ValueError as e:
            raise InvalidConfigurationError(str(e)) from e
    return Format.YAML


def create_store(
    *,
    file: Optional[PathType] = None,
    directory: Optional[PathType] = None,
    owner: Any = None,
    namespace: Optional[str] = None,
    stream: Optional[Union[bytes, BinaryIO]] = None,
    fmt: Optional[Union[Format, str]] = None,
    locale: Optional[str] = None,
    provider: Optional[ResourceProvider] = None,
    preload: bool = False,
) -> TranslationStore:
    """Create and configure a TranslationStore.

    Exactly one source must be given: ``file``, ``directory``, ``owner`` with
    ``namespace``, ``stream``, or ``namespace`` alone (treated as a directory
    path, which must exist).

    Args:
        file: Explicit resource file.
        directory: Directory of ``<locale><ext>`` files.
        owner: Module, package name or class anchoring a namespace lookup.
        namespace: Resource sub-directory for owner, or a directory path.
        stream: Raw bytes or a binary file-like object (read once).
        fmt: Format or format name. Inferred from file's suffix when omitted,
            else YAML.
        locale: Initial locale (default: settings.DEFAULT_LOCALE).
        provider: ResourceProvider for namespace lookups.
        preload: Whether to call update() before returning.

    Returns:
        TranslationStore: Configured store

    Raises:
        InvalidConfigurationError: If the sources are missing or ambiguous.

    Usage:
        # Package resources: mypackage/lang/fr.yml, falling back to lang/en.yml
        store = create_store(owner=mypackage, namespace="lang", locale="fr", preload=True)

        # Directory of JSON files
        store = create_store(directory="/srv/locales", fmt="json")
    """
    locator = _build_locator(file, directory, owner, namespace, stream)
    resource_format = _resolve_format(fmt, file)

    store = TranslationStore(locator, resource_format, locale=locale, provider=provider)

    if preload:
        store.update()
        logger.info(
            "store_created_with_preload",
            locator=locator.describe(),
            locale=store.locale,
            key_count=len(store),
        )
    else:
        logger.info("store_created_lazy", locator=locator.describe())

    return store

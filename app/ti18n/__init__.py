"""ti18n - multi-format localized resource loading.

Resolves translation resources by package namespace, directory, file or raw
bytes; flattens YAML, JSON, Properties and XML content into one dotted-key
table; fills placeholders at lookup time.

Main components:
- models: locale helpers, ResourceLocator variants, NamedValue, StoreState
- formats: Format enum and the FORMATS parser table
- flattener: nested tree to flat table
- locator: ResourceResolver with English fallback for namespaces
- resources: ResourceProvider implementations
- placeholders: printf, anonymous-brace and named-brace substitution
- store: TranslationStore
- factory: create_store()
"""

from ti18n.exceptions import (
    I18nError,
    InputNullError,
    InvalidConfigurationError,
    ParseError,
    PlaceholderError,
    ResourceNotFoundError,
)
from ti18n.factory import create_store
from ti18n.flattener import flatten
from ti18n.formats import FORMATS, Format, FormatSpec, parse_resource
from ti18n.locator import ResourceResolver
from ti18n.models import (
    ENGLISH,
    ByDirectory,
    ByFile,
    ByNamespace,
    ByStream,
    NamedValue,
    ResourceLocator,
    StoreState,
)
from ti18n.resources import (
    MappingResourceProvider,
    PackageResourceProvider,
    ResourceProvider,
)
from ti18n.store import TranslationStore

__all__ = [
    "ENGLISH",
    "FORMATS",
    "ByDirectory",
    "ByFile",
    "ByNamespace",
    "ByStream",
    "Format",
    "FormatSpec",
    "I18nError",
    "InputNullError",
    "InvalidConfigurationError",
    "MappingResourceProvider",
    "NamedValue",
    "PackageResourceProvider",
    "ParseError",
    "PlaceholderError",
    "ResourceLocator",
    "ResourceNotFoundError",
    "ResourceProvider",
    "ResourceResolver",
    "StoreState",
    "TranslationStore",
    "create_store",
    "flatten",
    "parse_resource",
]

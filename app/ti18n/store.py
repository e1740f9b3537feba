"""Translation store: the active lookup table for one locale.

The store resolves resource bytes through a ResourceResolver, parses them
with the configured format and publishes the resulting table together with
its locale as one immutable snapshot. Readers always see either the previous
snapshot or the new one, never a partially filled table.
"""

from types import MappingProxyType
from typing import Any, BinaryIO, Dict, Mapping, NamedTuple, Optional, Union

from ti18n.configuration import settings
from ti18n.exceptions import I18nError, InputNullError, InvalidConfigurationError
from ti18n.formats import FORMATS, Format, parse_resource
from ti18n.locator import ResourceResolver
from ti18n.logging import get_module_logger
from ti18n.models import (
    ByNamespace,
    FlatTable,
    NamedValue,
    ResourceLocator,
    StoreState,
    normalize_locale,
)
from ti18n.placeholders import format_positional, replace_anonymous, replace_named
from ti18n.resources import PackageResourceProvider, ResourceProvider

logger = get_module_logger()

_EMPTY_TABLE: Mapping[str, str] = MappingProxyType({})


class _Snapshot(NamedTuple):
    locale: str
    table: Mapping[str, str]
    state: StoreState


class TranslationStore:
    """Holds the active translation table and its locale.

    Lookups never fail: an unknown key resolves to the key itself. Loading
    failures propagate to the caller of update() and leave the previous
    table and locale in place.

    Attributes:
        locator: Where resource bytes come from.
        format: Format used to parse them.
        provider: ResourceProvider used by namespace locators.

    Example:
        store = TranslationStore(ByNamespace(MyPlugin, "lang"), Format.YAML, locale="fr")
        store.update()
        store.to("menu.open")
        store.to_brace("cart.summary", 5, "cart")
    """

    def __init__(
        self,
        locator: ResourceLocator,
        fmt: Union[Format, str] = Format.YAML,
        locale: Optional[str] = None,
        provider: Optional[ResourceProvider] = None,
    ):
        """Initialize the store in the EMPTY state.

        Args:
            locator: Resource locator variant.
            fmt: Format or format name (e.g. "json").
            locale: Initial locale (default: settings.DEFAULT_LOCALE).
            provider: Provider for namespace lookups (default: package resources).

        Raises:
            InvalidConfigurationError: If the locator is missing or a namespace
                owner has no resolvable resource root.
        """
        if locator is None:
            raise InvalidConfigurationError("Invalid configuration for loading language map")
        if not isinstance(locator, ResourceLocator):
            raise TypeError(f"Expected a ResourceLocator, got {type(locator).__name__}")

        self.locator = locator
        self.format = fmt if isinstance(fmt, Format) else Format.from_name(fmt)
        self.provider = provider or PackageResourceProvider()

        if isinstance(locator, ByNamespace):
            self.provider.validate_owner(locator.owner)

        self._resolver = ResourceResolver(FORMATS[self.format], self.provider)
        self._snapshot = _Snapshot(
            normalize_locale(locale if locale is not None else settings.DEFAULT_LOCALE),
            _EMPTY_TABLE,
            StoreState.EMPTY,
        )

        logger.info(
            "initialized_translation_store",
            locator=locator.describe(),
            format=self.format.value,
            locale=self._snapshot.locale,
        )

    @property
    def locale(self) -> str:
        """Locale of the active snapshot."""
        return self._snapshot.locale

    @property
    def state(self) -> StoreState:
        return self._snapshot.state

    @property
    def is_loaded(self) -> bool:
        return self._snapshot.state is StoreState.LOADED

    @property
    def table(self) -> Dict[str, str]:
        """Return a copy of the active table."""
        return dict(self._snapshot.table)

    def update(self, locale: Optional[str] = None) -> None:
        """Load translations for a locale and make them active.

        Args:
            locale: Locale to load (default: the current locale).

        Raises:
            ResourceNotFoundError: If no resource exists for the locale.
            ParseError: If the resource is malformed.
        """
        target = normalize_locale(locale) if locale is not None else self._snapshot.locale
        try:
            data = self._resolver.resolve(self.locator, target)
            table = parse_resource(self.format, data)
        except I18nError as e:
            logger.error(
                "translations_load_failed",
                locator=self.locator.describe(),
                format=self.format.value,
                locale=target,
                error=str(e),
            )
            raise

        self._publish(target, table)

    def update_from_stream(self, source: Union[bytes, BinaryIO]) -> None:
        """Load translations from caller-supplied bytes, bypassing resolution.

        The current locale is kept.

        Args:
            source: Raw bytes or a binary file-like object.

        Raises:
            InputNullError: If source is None.
            TypeError: If source is neither bytes nor readable.
            ParseError: If the content is malformed.
        """
        if source is None:
            raise InputNullError(
                f"Failed to load {FORMATS[self.format].format_name} file: input stream is None"
            )
        if isinstance(source, (bytes, bytearray)):
            data = bytes(source)
        elif hasattr(source, "read"):
            data = source.read()
        else:
            raise TypeError(
                f"update_from_stream expects bytes or a binary stream, got {type(source).__name__}"
            )

        try:
            table = parse_resource(self.format, data)
        except I18nError as e:
            logger.error(
                "translations_load_failed",
                locator="stream",
                format=self.format.value,
                locale=self._snapshot.locale,
                error=str(e),
            )
            raise

        self._publish(self._snapshot.locale, table)

    def reset(self, locale: Optional[str] = None) -> None:
        """Drop the active table, optionally retargeting the locale.

        The locator and format are kept, so update() can load again.
        """
        target = normalize_locale(locale) if locale is not None else self._snapshot.locale
        self._snapshot = _Snapshot(target, _EMPTY_TABLE, StoreState.EMPTY)
        logger.info("translations_reset", locale=target)

    def _publish(self, locale: str, table: FlatTable) -> None:
        self._snapshot = _Snapshot(locale, MappingProxyType(dict(table)), StoreState.LOADED)
        logger.info(
            "translations_loaded",
            locator=self.locator.describe(),
            format=self.format.value,
            locale=locale,
            key_count=len(table),
        )

    def has(self, key: str) -> bool:
        return key in self._snapshot.table

    def __contains__(self, key: object) -> bool:
        return key in self._snapshot.table

    def __len__(self) -> int:
        return len(self._snapshot.table)

    def to(self, key: str, *args: Any) -> str:
        """Translate a key, applying printf-style arguments if given.

        Formatting is skipped when the key has no translation, so the key is
        returned verbatim even if arguments were supplied.

        Example:
            "Hello %s" with arg "world" produces "Hello world"
            "%d items" with arg 5 produces "5 items"
            "Rate: %.2f" with arg 0.123 produces "Rate: 0.12"

        Raises:
            PlaceholderError: If the arguments do not match the template.
        """
        text = self._snapshot.table.get(key)
        if text is None:
            return key
        return format_positional(text, args)

    def to_brace(self, key: str, /, *args: Any, **named: Any) -> str:
        """Translate a key, filling brace placeholders.

        Plain positional arguments fill anonymous ``{}`` markers in order.
        NamedValue arguments, or keyword arguments, fill ``{keyword}``
        markers pair by pair in the given order.

        Example:
            "{} items in {}" with args ("5", "cart") produces "5 items in cart"
            "{b1} items in {b2}" with b1="5", b2="cart" produces "5 items in cart"

        Raises:
            TypeError: If plain values are mixed with named ones.
        """
        text = self._snapshot.table.get(key)
        if text is None:
            return key

        if named:
            if args:
                raise TypeError("Cannot mix positional and keyword placeholder values")
            return replace_named(text, [NamedValue(k, v) for k, v in named.items()])

        named_args = [arg for arg in args if isinstance(arg, NamedValue)]
        if named_args:
            if len(named_args) != len(args):
                raise TypeError("Cannot mix NamedValue and plain placeholder values")
            return replace_named(text, named_args)

        return replace_anonymous(text, args)

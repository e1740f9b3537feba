"""Tests for ti18n.store module."""

import io

import pytest

from ti18n import (
    ByDirectory,
    ByFile,
    ByNamespace,
    ByStream,
    Format,
    InputNullError,
    InvalidConfigurationError,
    MappingResourceProvider,
    NamedValue,
    ParseError,
    PlaceholderError,
    ResourceNotFoundError,
    StoreState,
    TranslationStore,
)
from tests.factories.i18n import (
    make_json_resource,
    make_loaded_store,
    make_translation_tree,
    make_yaml_resource,
)


class Owner:
    """Owning type for namespace lookups."""


@pytest.mark.unit
class TestStoreLifecycle:
    """Tests for construction, update and reset."""

    @pytest.fixture
    def store(self, mapping_provider):
        """Namespace-backed store in the EMPTY state."""
        return TranslationStore(ByNamespace(Owner, "lang"), Format.YAML, provider=mapping_provider)

    def test_initial_state(self, store):
        """A new store is EMPTY with the default English locale."""
        assert store.state is StoreState.EMPTY
        assert store.is_loaded is False
        assert store.locale == "en"
        assert len(store) == 0

    def test_default_locale_from_settings(self, override_settings, mapping_provider):
        """The configured default locale is used when none is given."""
        override_settings(DEFAULT_LOCALE="fr")
        store = TranslationStore(ByNamespace(Owner, "lang"), provider=mapping_provider)
        assert store.locale == "fr"

    def test_format_by_name(self, mapping_provider):
        """Formats can be given by name."""
        store = TranslationStore(ByNamespace(Owner, "lang"), "yaml", provider=mapping_provider)
        assert store.format is Format.YAML

    def test_missing_locator(self):
        """A locator is required."""
        with pytest.raises(InvalidConfigurationError):
            TranslationStore(None)

    def test_locator_type_is_checked(self):
        """Arbitrary objects are not locators."""
        with pytest.raises(TypeError):
            TranslationStore("lang")

    def test_unresolvable_owner(self):
        """Namespace owners must have a resource root."""
        with pytest.raises(InvalidConfigurationError):
            TranslationStore(ByNamespace("ti18n_no_such_package_xyz", "lang"))

    def test_update_loads_locale(self, store):
        """update() fills the table and records the locale."""
        store.update("fr")
        assert store.state is StoreState.LOADED
        assert store.locale == "fr"
        assert store.to("menu.greeting") == "Bonjour"

    def test_update_uses_current_locale(self, store):
        """update() without arguments reloads the current locale."""
        store.update()
        assert store.to("menu.greeting") == "Hello"

    def test_update_falls_back_to_english(self, store):
        """A locale with no resource loads the English content."""
        store.update("ja")
        assert store.locale == "ja"
        assert store.to("menu.greeting") == "Hello"

    def test_update_without_any_resource(self):
        """Missing requested and English resources fail the update."""
        store = TranslationStore(
            ByNamespace(Owner, "lang"), provider=MappingResourceProvider({})
        )
        with pytest.raises(ResourceNotFoundError):
            store.update("fr")
        assert store.state is StoreState.EMPTY

    def test_failed_reload_keeps_previous_table(self, store):
        """A failed update leaves the loaded table and locale untouched."""
        store.update("fr")
        before = store.table

        store.provider.resources.clear()
        with pytest.raises(ResourceNotFoundError):
            store.update("de")

        assert store.locale == "fr"
        assert store.table == before
        assert store.is_loaded

    def test_parse_failure_keeps_previous_table(self, store):
        """A malformed resource does not clear the table."""
        store.update("en")
        with pytest.raises(ParseError):
            store.update("es")
        assert store.locale == "en"
        assert store.to("menu.greeting") == "Hello"

    def test_update_replaces_table(self, store):
        """Keys from the previous locale do not leak into the new one."""
        store.update_from_stream(b"only.here: x")
        store.update("en")
        assert "only.here" not in store

    def test_reset_clears_table(self, store):
        """reset() empties the table but keeps the locale."""
        store.update("fr")
        store.reset()
        assert store.state is StoreState.EMPTY
        assert store.locale == "fr"
        assert store.to("menu.greeting") == "menu.greeting"

    def test_reset_with_locale(self, store):
        """reset(locale) retargets the next update."""
        store.update("en")
        store.reset("fr")
        assert store.locale == "fr"
        assert len(store) == 0

        store.update()
        assert store.to("menu.greeting") == "Bonjour"

    def test_update_rejects_blank_locale(self, store):
        """Blank locales are rejected before any lookup."""
        with pytest.raises(InvalidConfigurationError):
            store.update("  ")

    def test_update_rejects_path_like_locale(self, store):
        """Locales cannot reach resources outside the namespace."""
        store.update("en")
        with pytest.raises(InvalidConfigurationError):
            store.update("../lang/fr")
        assert store.locale == "en"


@pytest.mark.unit
class TestUpdateFromStream:
    """Tests for update_from_stream()."""

    @pytest.fixture
    def store(self, locales_dir):
        return TranslationStore(ByDirectory(locales_dir), Format.YAML, locale="fr")

    def test_bytes(self, store):
        """Raw bytes replace the table; the locale is kept."""
        store.update_from_stream(make_yaml_resource(make_translation_tree("Hej")))
        assert store.to("menu.greeting") == "Hej"
        assert store.locale == "fr"
        assert store.is_loaded

    def test_file_object(self, store):
        """Binary file objects are read."""
        store.update_from_stream(io.BytesIO(b"greeting: Hi"))
        assert store.to("greeting") == "Hi"

    def test_none(self, store):
        """Missing streams are an InputNullError."""
        with pytest.raises(InputNullError):
            store.update_from_stream(None)

    def test_text_is_rejected(self, store):
        """Text must be encoded before loading."""
        with pytest.raises(TypeError, match="bytes or a binary stream"):
            store.update_from_stream("greeting: Hi")
        assert store.state is StoreState.EMPTY

    def test_failure_keeps_previous_table(self, store):
        """Malformed streams do not clear the table."""
        store.update()
        with pytest.raises(ParseError):
            store.update_from_stream(b"")
        assert store.to("menu.greeting") == "Bonjour"


@pytest.mark.unit
class TestOtherLocators:
    """Tests for file, directory and stream backed stores."""

    def test_file_store(self, tmp_path):
        """File stores ignore the locale."""
        path = tmp_path / "messages.json"
        path.write_bytes(make_json_resource())
        store = TranslationStore(ByFile(path), Format.JSON)
        store.update("de")
        assert store.to("menu.open") == "Open"
        assert store.locale == "de"

    def test_directory_store_has_no_fallback(self, locales_dir):
        """Directory stores fail for locales without a file."""
        store = TranslationStore(ByDirectory(locales_dir), Format.YAML)
        with pytest.raises(ResourceNotFoundError):
            store.update("de")

    def test_stream_store_reloads(self):
        """Stream locators can be loaded more than once."""
        store = TranslationStore(ByStream(b"a: b"), Format.YAML)
        store.update()
        store.update("fr")
        assert store.to("a") == "b"

    def test_package_resources(self, resource_package):
        """Package resources load through the default provider."""
        store = TranslationStore(ByNamespace(resource_package.Plugin, "lang"), Format.YAML)
        store.update("de")
        assert store.to("menu.greeting") == "Hallo"
        store.update("fr")
        assert store.to("menu.greeting") == "Hello"


@pytest.mark.unit
class TestLookup:
    """Tests for to() and to_brace()."""

    @pytest.fixture
    def store(self):
        return make_loaded_store()

    def test_to_resolved(self, store):
        """Known keys resolve to their value."""
        assert store.to("menu.open") == "Open"

    @pytest.mark.parametrize("key", ["missing.key", "", "menu"])
    def test_to_unresolved_returns_key(self, store, key):
        """Unknown keys resolve to themselves."""
        assert store.to(key) == key

    def test_to_on_empty_store(self, locales_dir):
        """An EMPTY store resolves every key to itself."""
        store = TranslationStore(ByDirectory(locales_dir))
        assert store.to("menu.open") == "menu.open"

    def test_to_formats_arguments(self, store):
        """printf-style arguments are applied to resolved templates."""
        assert store.to("menu.items.count", 5) == "5 items"

    def test_to_skips_formatting_for_unresolved_key(self, store):
        """Unresolved keys are returned verbatim even with arguments."""
        assert store.to("missing.key", "world") == "missing.key"
        assert store.to("%d missing", "x") == "%d missing"

    def test_to_ignores_unused_arguments(self):
        """A translation may omit values its arguments provide."""
        store = make_loaded_store({"hello": "Hello"})
        assert store.to("hello", "world") == "Hello"

    def test_to_format_mismatch(self, store):
        """Mismatched arguments raise PlaceholderError."""
        with pytest.raises(PlaceholderError):
            store.to("menu.items.count", "many")

    def test_to_brace_anonymous(self, store):
        """Positional arguments fill {} markers."""
        assert store.to_brace("menu.items.cart", "5", "cart") == "5 items in cart"

    def test_to_brace_without_args(self, store):
        """No arguments: the template is returned unchanged."""
        assert store.to_brace("menu.items.cart") == "{} items in {}"

    def test_to_brace_unresolved(self, store):
        """Unresolved keys are returned verbatim."""
        assert store.to_brace("{} missing", "x") == "{} missing"
        assert store.to_brace("{b1} missing", b1="x") == "{b1} missing"

    def test_to_brace_named_values(self, store):
        """NamedValue arguments fill {keyword} markers."""
        result = store.to_brace("named", NamedValue("b1", "5"), NamedValue("b2", "cart"))
        assert result == "5 items in cart"

    def test_to_brace_keywords(self, store):
        """Keyword arguments fill {keyword} markers."""
        assert store.to_brace("named", b1=5, b2="cart") == "5 items in cart"

    def test_to_brace_keyword_named_key(self):
        """A placeholder called 'key' does not clash with the key argument."""
        store = make_loaded_store({"msg": "{key}!"})
        assert store.to_brace("msg", key="k") == "k!"

    def test_to_brace_repeated_named(self):
        """Every occurrence of a named marker is replaced."""
        store = make_loaded_store({"twice": "{b1} and {b1}"})
        assert store.to_brace("twice", b1="X") == "X and X"

    def test_to_brace_mixed_values(self, store):
        """Plain and named values cannot be mixed."""
        with pytest.raises(TypeError):
            store.to_brace("named", "5", NamedValue("b2", "cart"))
        with pytest.raises(TypeError):
            store.to_brace("named", "5", b2="cart")

    def test_has_and_contains(self, store):
        """Membership reflects the active table."""
        assert store.has("menu.open")
        assert "menu.open" in store
        assert "missing" not in store

    def test_table_is_a_copy(self, store):
        """Mutating the returned table does not touch the store."""
        table = store.table
        table["menu.open"] = "changed"
        assert store.to("menu.open") == "Open"

"""Feature-level fixtures for ti18n tests.

Provides on-disk locale directories, an importable resource package and an
in-memory resource provider.
"""

import importlib
import sys

import pytest

from ti18n import MappingResourceProvider
from tests.factories.i18n import make_translation_tree, make_yaml_resource

SAMPLE_PACKAGE = "ti18n_sample_plugin"


@pytest.fixture
def locales_dir(tmp_path):
    """Create a directory of YAML locale files.

    Returns a directory structure like:
    - en.yml
    - fr.yaml
    """
    directory = tmp_path / "locales"
    directory.mkdir()
    (directory / "en.yml").write_bytes(make_yaml_resource())
    (directory / "fr.yaml").write_bytes(make_yaml_resource(make_translation_tree("Bonjour")))
    return directory


@pytest.fixture
def resource_package(tmp_path, monkeypatch):
    """Create an importable package shipping ``lang/en.yml`` and ``lang/de.yml``."""
    package_dir = tmp_path / "site" / SAMPLE_PACKAGE
    lang_dir = package_dir / "lang"
    lang_dir.mkdir(parents=True)
    (package_dir / "__init__.py").write_text(
        "class Plugin:\n    pass\n", encoding="utf-8"
    )
    (lang_dir / "en.yml").write_bytes(make_yaml_resource())
    (lang_dir / "de.yml").write_bytes(make_yaml_resource(make_translation_tree("Hallo")))

    monkeypatch.syspath_prepend(str(tmp_path / "site"))
    importlib.invalidate_caches()
    module = importlib.import_module(SAMPLE_PACKAGE)
    yield module
    sys.modules.pop(SAMPLE_PACKAGE, None)


@pytest.fixture
def mapping_provider():
    """In-memory provider with English, French and a broken Spanish resource."""
    return MappingResourceProvider(
        {
            "lang/en.yml": make_yaml_resource(),
            "lang/fr.yaml": make_yaml_resource(make_translation_tree("Bonjour")),
            "lang/es.yml": b"menu: [unclosed",
        }
    )

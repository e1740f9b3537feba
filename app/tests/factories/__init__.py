"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_json_resource,
    make_loaded_store,
    make_properties_resource,
    make_translation_tree,
    make_xml_resource,
    make_yaml_resource,
)

__all__ = [
    "make_json_resource",
    "make_loaded_store",
    "make_properties_resource",
    "make_translation_tree",
    "make_xml_resource",
    "make_yaml_resource",
]

"""Shared pytest fixtures for ti18n tests."""

import pytest

from ti18n.configuration import settings


@pytest.fixture
def override_settings(monkeypatch):
    """Temporarily override fields of the global settings instance.

    Usage:
        def test_x(override_settings):
            override_settings(ENCODING="latin-1")
    """

    def _override(**values):
        for name, value in values.items():
            monkeypatch.setattr(settings, name, value)
        return settings

    return _override

"""Shared pytest fixtures for all test suites."""

import pytest

from islandhop.adapters.loader import load_fixture_bundle
from islandhop.config import Settings, get_settings
from islandhop.models.catalog import CatalogBundle
from islandhop.session import TripSession


@pytest.fixture
def settings() -> Settings:
    return get_settings()


@pytest.fixture
def fixture_bundle(settings: Settings) -> CatalogBundle:
    """Complete catalog built from the packaged fixtures."""
    return load_fixture_bundle(settings=settings)


@pytest.fixture
def session(fixture_bundle: CatalogBundle, settings: Settings) -> TripSession:
    """Fresh, ready session over the fixture catalog."""
    return TripSession(fixture_bundle, settings=settings)

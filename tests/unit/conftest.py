"""Shared test fixtures."""

from typing import Any

import pytest

from elementor_mcp.core.data.store import ElementorDataStore
from tests.unit.fakes import PAGE_ID, FakeWordPressApi, build_tree


@pytest.fixture
def tree() -> list[dict[str, Any]]:
    return build_tree()


@pytest.fixture
def fake_api() -> FakeWordPressApi:
    """A site with one Elementor page (id 42)."""
    api = FakeWordPressApi()
    api.add_document("pages", PAGE_ID, elements=build_tree())
    return api


@pytest.fixture
def store(fake_api: FakeWordPressApi) -> ElementorDataStore:
    return ElementorDataStore(fake_api)

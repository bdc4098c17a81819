"""Tests for chunked reads, backups and template listing."""

import json

import pytest

from elementor_mcp.core.data.backup import (
    BACKUP_KEY_PREFIX,
    backup_elementor_data,
    chunk_elements,
    list_templates,
)
from elementor_mcp.core.data.store import ElementorDataStore
from elementor_mcp.exceptions import SaveFailedError
from tests.unit.fakes import PAGE_ID, FakeWordPressApi, build_tree


def test_chunk_elements_pages_top_level() -> None:
    elements = [{"id": str(i)} for i in range(12)]

    result = chunk_elements(elements, chunk_size=5, chunk_index=2)

    assert result["total_chunks"] == 3
    assert result["total_elements"] == 12
    assert result["elements_in_chunk"] == 2
    assert [el["id"] for el in result["elements"]] == ["10", "11"]


def test_chunk_elements_past_end_is_empty() -> None:
    result = chunk_elements([{"id": "a"}], chunk_size=5, chunk_index=4)
    assert result["elements"] == []
    assert result["total_chunks"] == 1


def test_chunk_elements_rejects_zero_size() -> None:
    with pytest.raises(ValueError, match="chunk_size must be at least 1"):
        chunk_elements([], chunk_size=0)


def test_backup_writes_timestamped_meta(
    store: ElementorDataStore, fake_api: FakeWordPressApi
) -> None:
    result = backup_elementor_data(fake_api, store, post_id=PAGE_ID, backup_name="before redesign")

    assert result["resource"] == "pages"
    assert result["backup_key"] == f"{BACKUP_KEY_PREFIX}{result['timestamp']}"
    meta = fake_api.documents[("pages", PAGE_ID)]["meta"]
    payload = json.loads(meta[result["backup_key"]])
    assert payload["backup_name"] == "before redesign"
    assert payload["post_id"] == PAGE_ID
    assert payload["elementor_data"] == build_tree()
    # the live data is untouched
    assert fake_api.stored_elements("pages", PAGE_ID) == build_tree()


def test_backup_default_name(store: ElementorDataStore, fake_api: FakeWordPressApi) -> None:
    result = backup_elementor_data(fake_api, store, post_id=PAGE_ID)
    meta = fake_api.documents[("pages", PAGE_ID)]["meta"]
    assert json.loads(meta[result["backup_key"]])["backup_name"].startswith("Backup ")


def test_backup_of_template_fails() -> None:
    api = FakeWordPressApi()
    api.add_document("elementor_library", 7, elements=[])
    store = ElementorDataStore(api)

    with pytest.raises(SaveFailedError, match="Failed to store backup"):
        backup_elementor_data(api, store, post_id=7)


def test_list_templates_filters_by_type(fake_api: FakeWordPressApi) -> None:
    fake_api.collections["elementor_library"] = [{"id": 1}, {"id": 2}]

    result = list_templates(fake_api, per_page=5, template_type="header")

    assert result == {"total": 2, "templates": [{"id": 1}, {"id": 2}]}
    assert fake_api.calls[-1] == (
        "list",
        "elementor_library",
        {"per_page": 5, "meta_key": "_elementor_template_type", "meta_value": "header"},
    )


def test_list_templates_without_type(fake_api: FakeWordPressApi) -> None:
    list_templates(fake_api)
    assert "meta_value" not in fake_api.calls[-1][2]

"""Tests for ElementorDataStore: fetch, save and the read-modify-write transaction."""

import json
from typing import Any

import pytest

from elementor_mcp.core.data.store import ElementorDataStore, parse_elementor_data
from elementor_mcp.exceptions import (
    DocumentNotFoundError,
    ElementorParseError,
    NoElementorDataError,
    SaveFailedError,
)
from tests.unit.fakes import PAGE_ID, FakeWordPressApi, build_tree


def test_parse_strips_debug_preamble() -> None:
    raw = 'Debug: rendering\n--- Elementor Data ---\n[{"id": "a"}]'
    assert parse_elementor_data(raw) == [{"id": "a"}]


def test_parse_plain_json() -> None:
    assert parse_elementor_data("[]") == []


def test_parse_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        parse_elementor_data("not json")


def test_fetch_probes_posts_before_pages(
    store: ElementorDataStore, fake_api: FakeWordPressApi
) -> None:
    elements = store.fetch(PAGE_ID)

    assert elements == build_tree()
    assert fake_api.calls[:2] == [("retrieve", "posts", PAGE_ID), ("retrieve", "pages", PAGE_ID)]


def test_fetch_reads_templates_last() -> None:
    api = FakeWordPressApi()
    api.add_document("elementor_library", 7, elements=[{"id": "t1", "elType": "section"}])

    assert ElementorDataStore(api).fetch(7) == [{"id": "t1", "elType": "section"}]
    assert [c[1] for c in api.calls] == ["posts", "pages", "elementor_library"]


def test_fetch_handles_preamble_in_stored_data() -> None:
    api = FakeWordPressApi()
    api.add_document("posts", 5, raw='warn\n--- Elementor Data ---\n[{"id": "x"}]')
    assert ElementorDataStore(api).fetch(5) == [{"id": "x"}]


def test_fetch_returns_already_decoded_data() -> None:
    api = FakeWordPressApi()
    api.add_document("posts", 5, raw=[{"id": "x"}])
    assert ElementorDataStore(api).fetch(5) == [{"id": "x"}]


def test_fetch_keeps_probing_past_document_without_data() -> None:
    api = FakeWordPressApi()
    api.add_document("posts", 9)
    api.add_document("pages", 9, elements=[{"id": "p"}])
    assert ElementorDataStore(api).fetch(9) == [{"id": "p"}]


def test_fetch_unknown_id_raises_not_found(store: ElementorDataStore) -> None:
    with pytest.raises(DocumentNotFoundError, match="Could not find post, page, or template"):
        store.fetch(999)


def test_fetch_without_data_raises_no_data() -> None:
    api = FakeWordPressApi()
    api.add_document("pages", 3)
    with pytest.raises(NoElementorDataError, match="No _elementor_data found"):
        ElementorDataStore(api).fetch(3)


def test_fetch_bad_json_raises_parse_error() -> None:
    api = FakeWordPressApi()
    api.add_document("pages", 3, raw="{broken")
    with pytest.raises(ElementorParseError, match="Failed to parse _elementor_data for post 3"):
        ElementorDataStore(api).fetch(3)


def test_save_falls_back_to_resource_that_accepts(
    store: ElementorDataStore, fake_api: FakeWordPressApi
) -> None:
    resource = store.save(PAGE_ID, [{"id": "only"}])

    assert resource == "pages"
    assert fake_api.stored_elements("pages", PAGE_ID) == [{"id": "only"}]
    sent_meta = fake_api.persisted()[-1][2][1]
    assert json.loads(sent_meta["_elementor_data"]) == [{"id": "only"}]


def test_save_raises_when_every_resource_rejects(
    store: ElementorDataStore, fake_api: FakeWordPressApi
) -> None:
    fake_api.rejected_resources = {"posts", "pages", "elementor_library"}
    with pytest.raises(SaveFailedError):
        store.save(PAGE_ID, [])
    assert len(fake_api.persisted()) == 3


def test_with_elementor_data_saves_mutated_tree(
    store: ElementorDataStore, fake_api: FakeWordPressApi
) -> None:
    def mutator(elements: list[dict[str, Any]]) -> str:
        elements.pop()
        return "done"

    assert store.with_elementor_data(PAGE_ID, mutator) == "done"
    assert [el["id"] for el in fake_api.stored_elements("pages", PAGE_ID)] == ["sec1"]


def test_with_elementor_data_saves_even_without_changes(
    store: ElementorDataStore, fake_api: FakeWordPressApi
) -> None:
    store.with_elementor_data(PAGE_ID, lambda elements: None)
    assert fake_api.persisted()
    assert fake_api.stored_elements("pages", PAGE_ID) == build_tree()


def test_with_elementor_data_does_not_save_when_mutator_raises(
    store: ElementorDataStore, fake_api: FakeWordPressApi
) -> None:
    def mutator(elements: list[dict[str, Any]]) -> None:
        elements.clear()
        msg = "boom"
        raise RuntimeError(msg)

    with pytest.raises(RuntimeError, match="boom"):
        store.with_elementor_data(PAGE_ID, mutator)
    assert fake_api.persisted() == []
    assert fake_api.stored_elements("pages", PAGE_ID) == build_tree()

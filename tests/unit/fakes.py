"""Fake implementations for testing the Elementor tools."""

import copy
import json
from typing import Any

from elementor_mcp.config import ELEMENTOR_DATA_KEY
from elementor_mcp.exceptions import ResourceNotFoundError, WordPressApiError


class FakeWordPressApi:
    """In-memory fake for WordPressApi.

    Documents are keyed by (resource, post_id), like the REST routes. Unknown
    keys raise ResourceNotFoundError, as WordPress answers 404 for an id of
    another post type. All calls are recorded for assertions.
    """

    def __init__(self) -> None:
        self.documents: dict[tuple[str, int], dict[str, Any]] = {}
        self.collections: dict[str, list[dict[str, Any]]] = {}
        self.rejected_resources: set[str] = set()
        self.calls: list[tuple[str, str, Any]] = []

    def add_document(
        self,
        resource: str,
        post_id: int,
        *,
        elements: list[dict[str, Any]] | None = None,
        raw: Any = None,
    ) -> None:
        """Register a document; ``elements`` is stored serialized, ``raw`` as given."""
        meta: dict[str, Any] = {}
        if elements is not None:
            meta[ELEMENTOR_DATA_KEY] = json.dumps(elements)
        elif raw is not None:
            meta[ELEMENTOR_DATA_KEY] = raw
        self.documents[(resource, post_id)] = {"id": post_id, "meta": meta}

    def stored_elements(self, resource: str, post_id: int) -> Any:
        """Return the parsed element data currently stored for a document."""
        return json.loads(self.documents[(resource, post_id)]["meta"][ELEMENTOR_DATA_KEY])

    def persisted(self) -> list[tuple[str, str, Any]]:
        return [c for c in self.calls if c[0] == "persist"]

    @property
    def closed(self) -> bool:
        return any(c[0] == "close" for c in self.calls)

    def close(self) -> None:
        self.calls.append(("close", "session", None))

    def retrieve(self, resource: str, post_id: int) -> dict[str, Any]:
        self.calls.append(("retrieve", resource, post_id))
        doc = self.documents.get((resource, post_id))
        if doc is None:
            msg = f"FakeWordPressApi: no {resource} with id {post_id}"
            raise ResourceNotFoundError(msg, status_code=404)
        return copy.deepcopy(doc)

    def persist(self, resource: str, post_id: int, meta: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("persist", resource, (post_id, meta)))
        if resource in self.rejected_resources:
            msg = f"FakeWordPressApi: write to {resource} rejected"
            raise WordPressApiError(msg, status_code=403)
        doc = self.documents.get((resource, post_id))
        if doc is None:
            msg = f"FakeWordPressApi: no {resource} with id {post_id}"
            raise ResourceNotFoundError(msg, status_code=404)
        doc["meta"].update(meta)
        return copy.deepcopy(doc)

    def list_resource(self, resource: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        self.calls.append(("list", resource, params))
        return copy.deepcopy(self.collections.get(resource, []))


PAGE_ID = 42


def build_tree() -> list[dict[str, Any]]:
    """A small page: a one-column section with two widgets, then a flexbox container."""
    return [
        {
            "id": "sec1",
            "elType": "section",
            "isInner": False,
            "settings": {"layout": "boxed"},
            "elements": [
                {
                    "id": "col1",
                    "elType": "column",
                    "isInner": False,
                    "settings": {"_column_size": 100},
                    "elements": [
                        {
                            "id": "w1",
                            "elType": "widget",
                            "widgetType": "heading",
                            "isInner": False,
                            "settings": {"title": "Hello", "typography": {"size": 12}},
                            "elements": [],
                        },
                        {
                            "id": "w2",
                            "elType": "widget",
                            "widgetType": "text-editor",
                            "isInner": False,
                            "settings": {"editor": "<p>Body</p>"},
                            "elements": [],
                        },
                    ],
                }
            ],
        },
        {
            "id": "cont1",
            "elType": "container",
            "isInner": False,
            "settings": {"content_width": "boxed"},
            "elements": [
                {
                    "id": "w3",
                    "elType": "widget",
                    "widgetType": "button",
                    "isInner": False,
                    "settings": {"text": "Click"},
                    "elements": [],
                }
            ],
        },
    ]

"""Fetch, mutate and save the _elementor_data meta field of a document."""

import json
from collections.abc import Callable
from typing import Any, TypeVar

from loguru import logger

from elementor_mcp.config import ELEMENTOR_DATA_KEY
from elementor_mcp.exceptions import (
    DocumentNotFoundError,
    ElementorParseError,
    NoElementorDataError,
    SaveFailedError,
    WordPressApiError,
)
from elementor_mcp.models.element import Element
from elementor_mcp.protocols import DocumentClientProtocol

T = TypeVar("T")

# Probe order when resolving a document id. WordPress ids are shared across
# post types, but each endpoint only answers for its own type.
RESOURCE_KINDS: tuple[str, ...] = ("posts", "pages", "elementor_library")

# Debug builds of the Elementor REST bridge prefix the data with a preamble.
DATA_SEPARATOR = "--- Elementor Data ---\n"


def parse_elementor_data(raw: str) -> list[Element]:
    """Parse serialized element data, dropping any debug preamble.

    Raises:
        ValueError: If the remaining text is not JSON.
    """
    sep_index = raw.find(DATA_SEPARATOR)
    json_part = raw[sep_index + len(DATA_SEPARATOR) :] if sep_index != -1 else raw
    data: list[Element] = json.loads(json_part)
    return data


class ElementorDataStore:
    """Read-modify-write access to a document's element tree.

    There is no version check on save: two overlapping transactions on the
    same document end with the last writer's tree.
    """

    def __init__(self, client: DocumentClientProtocol) -> None:
        self._client = client

    def _try_retrieve(self, resource: str, post_id: int) -> dict[str, Any] | None:
        try:
            return self._client.retrieve(resource, post_id)
        except WordPressApiError as e:
            logger.debug("No {} with id {}: {}", resource, post_id, e)
            return None

    def _try_persist(self, resource: str, post_id: int, meta: dict[str, Any]) -> bool:
        try:
            self._client.persist(resource, post_id, meta)
        except WordPressApiError as e:
            logger.debug("Save to {} {} rejected: {}", resource, post_id, e)
            return False
        return True

    def fetch(self, post_id: int) -> list[Element]:
        """Fetch and parse the element tree of a post, page or template.

        Raises:
            DocumentNotFoundError: No resource kind knows this id.
            NoElementorDataError: The document exists but has no element data.
            ElementorParseError: The stored data is not valid JSON.
        """
        found_any = False
        for resource in RESOURCE_KINDS:
            payload = self._try_retrieve(resource, post_id)
            if payload is None:
                continue
            found_any = True
            raw = (payload.get("meta") or {}).get(ELEMENTOR_DATA_KEY)
            if not raw:
                continue

            logger.debug("Loaded Elementor data for {} from {}", post_id, resource)
            if not isinstance(raw, str):
                return raw  # type: ignore[no-any-return]
            try:
                return parse_elementor_data(raw)
            except ValueError as e:
                msg = f"Failed to parse {ELEMENTOR_DATA_KEY} for post {post_id}"
                raise ElementorParseError(msg) from e

        if not found_any:
            msg = f"Could not find post, page, or template with ID {post_id}"
            raise DocumentNotFoundError(msg)
        msg = (
            f"No {ELEMENTOR_DATA_KEY} found for post/page {post_id}. "
            "Is Elementor enabled on this content?"
        )
        raise NoElementorDataError(msg)

    def save(self, post_id: int, elements: list[Element]) -> str:
        """Serialize and write the tree back, returning the resource kind used.

        Raises:
            SaveFailedError: Every resource kind rejected the write.
        """
        meta = {ELEMENTOR_DATA_KEY: json.dumps(elements)}
        for resource in RESOURCE_KINDS:
            if self._try_persist(resource, post_id, meta):
                logger.info("Saved Elementor data for {} via {}", post_id, resource)
                return resource
        msg = f"Failed to save Elementor data for post/page/template {post_id}"
        raise SaveFailedError(msg)

    def with_elementor_data(self, post_id: int, mutator: Callable[[list[Element]], T]) -> T:
        """Fetch the tree, apply ``mutator`` to it in place, save it, return the result.

        The tree is saved even when the mutator changes nothing. If the
        mutator raises, nothing is saved.
        """
        elements = self.fetch(post_id)
        result = mutator(elements)
        self.save(post_id, elements)
        return result

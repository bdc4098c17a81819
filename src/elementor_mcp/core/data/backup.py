"""Raw data access: chunked reads, meta snapshots, template listing."""

import json
import math
import time
from datetime import UTC, datetime
from typing import Any

from loguru import logger

from elementor_mcp.core.data.store import ElementorDataStore
from elementor_mcp.exceptions import SaveFailedError, WordPressApiError
from elementor_mcp.models.element import Element
from elementor_mcp.protocols import DocumentClientProtocol, RestClientProtocol

BACKUP_KEY_PREFIX = "_elementor_data_backup_"

# Backups only go to posts and pages; templates are not snapshotted.
BACKUP_RESOURCES: tuple[str, ...] = ("posts", "pages")


def chunk_elements(
    elements: list[Element], *, chunk_size: int = 5, chunk_index: int = 0
) -> dict[str, Any]:
    """Slice top-level elements into pages of ``chunk_size``."""
    if chunk_size < 1:
        msg = f"chunk_size must be at least 1, got {chunk_size}"
        raise ValueError(msg)
    total = len(elements)
    start = chunk_index * chunk_size
    chunk = elements[start : start + chunk_size]
    return {
        "chunk_index": chunk_index,
        "chunk_size": chunk_size,
        "total_chunks": math.ceil(total / chunk_size),
        "total_elements": total,
        "elements_in_chunk": len(chunk),
        "elements": chunk,
    }


def backup_elementor_data(
    client: DocumentClientProtocol,
    store: ElementorDataStore,
    *,
    post_id: int,
    backup_name: str | None = None,
) -> dict[str, Any]:
    """Snapshot the current element tree into a timestamped meta key."""
    elements = store.fetch(post_id)
    timestamp = int(time.time() * 1000)
    backup_key = f"{BACKUP_KEY_PREFIX}{timestamp}"
    iso = datetime.fromtimestamp(timestamp / 1000, tz=UTC).isoformat()
    payload = {
        "backup_name": backup_name or f"Backup {iso}",
        "timestamp": timestamp,
        "post_id": post_id,
        "elementor_data": elements,
    }
    meta = {backup_key: json.dumps(payload)}

    for resource in BACKUP_RESOURCES:
        try:
            client.persist(resource, post_id, meta)
        except WordPressApiError as e:
            logger.debug("Backup to {} {} rejected: {}", resource, post_id, e)
            continue
        logger.info("Backed up Elementor data for {} as {}", post_id, backup_key)
        return {"backup_key": backup_key, "timestamp": timestamp, "resource": resource}

    msg = f"Failed to store backup for post/page {post_id}"
    raise SaveFailedError(msg)


def list_templates(
    client: RestClientProtocol, *, per_page: int = 10, template_type: str | None = None
) -> dict[str, Any]:
    """List Elementor library templates, optionally filtered by template type."""
    params: dict[str, Any] = {"per_page": per_page, "meta_key": "_elementor_template_type"}
    if template_type:
        params["meta_value"] = template_type
    templates = client.list_resource("elementor_library", params)
    return {"total": len(templates), "templates": templates}

"""MCP server exposing Elementor page editing tools for a WordPress site."""

import json
from collections.abc import AsyncIterator, Callable, Mapping, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from functools import partial
from typing import Any

from loguru import logger
from mcp.server.fastmcp import Context, FastMCP

from elementor_mcp.api import WordPressApi
from elementor_mcp.config import load_settings
from elementor_mcp.core.data.backup import backup_elementor_data, chunk_elements, list_templates
from elementor_mcp.core.data.store import ElementorDataStore
from elementor_mcp.core.ops import elements as element_ops
from elementor_mcp.core.ops import sections as section_ops
from elementor_mcp.core.ops import widgets as widget_ops
from elementor_mcp.core.ops.structure import list_elements, page_structure
from elementor_mcp.models.element import WidgetUpdate
from elementor_mcp.protocols import DocumentClientProtocol, RestClientProtocol


def _run(action: str, fn: Callable[[], dict[str, Any]]) -> dict[str, Any]:
    """Run a tool body, turning any failure into an error payload."""
    try:
        result = fn()
    except Exception as e:
        logger.warning("Error {}: {}", action, e)
        return {"success": False, "error": f"Error {action}: {e}"}
    return {"success": True, **result}


# --- Core functions (testable without MCP context) ---

# Data


def elementor_get_data(store: ElementorDataStore, *, post_id: int) -> dict[str, Any]:
    """Fetch the full element tree of a post/page/template."""
    return _run(
        "fetching Elementor data",
        lambda: {"post_id": post_id, "elements": store.fetch(post_id)},
    )


def elementor_update_data(
    store: ElementorDataStore, *, post_id: int, elementor_data: str
) -> dict[str, Any]:
    """Replace the whole element tree with the given JSON array."""

    def body() -> dict[str, Any]:
        parsed = json.loads(elementor_data)
        if not isinstance(parsed, list):
            msg = "elementor_data must be a JSON array of elements"
            raise ValueError(msg)
        resource = store.save(post_id, parsed)
        return {
            "message": f"Successfully updated Elementor data for post {post_id}",
            "resource": resource,
        }

    return _run("updating Elementor data", body)


def elementor_get_data_chunked(
    store: ElementorDataStore, *, post_id: int, chunk_size: int = 5, chunk_index: int = 0
) -> dict[str, Any]:
    """Return one chunk of top-level elements."""
    return _run(
        "fetching chunked Elementor data",
        lambda: {
            "post_id": post_id,
            **chunk_elements(
                store.fetch(post_id), chunk_size=chunk_size, chunk_index=chunk_index
            ),
        },
    )


def elementor_backup_data(
    client: DocumentClientProtocol,
    store: ElementorDataStore,
    *,
    post_id: int,
    backup_name: str | None = None,
) -> dict[str, Any]:
    """Snapshot the element tree into post meta."""
    return _run(
        "creating backup",
        lambda: backup_elementor_data(client, store, post_id=post_id, backup_name=backup_name),
    )


def elementor_get_templates(
    client: RestClientProtocol, *, per_page: int = 10, template_type: str | None = None
) -> dict[str, Any]:
    """List Elementor library templates."""
    return _run(
        "fetching Elementor templates",
        lambda: list_templates(client, per_page=per_page, template_type=template_type),
    )


# Structure


def elementor_get_page_structure(
    store: ElementorDataStore, *, post_id: int, include_settings: bool = False
) -> dict[str, Any]:
    """Nested outline of the page."""
    return _run(
        "getting page structure",
        lambda: {
            "post_id": post_id,
            "structure": page_structure(store.fetch(post_id), include_settings=include_settings),
        },
    )


def elementor_get_elements(
    store: ElementorDataStore, *, post_id: int, include_content: bool = False
) -> dict[str, Any]:
    """Flat element listing with depth."""

    def body() -> dict[str, Any]:
        rows = list_elements(store.fetch(post_id), include_content=include_content)
        return {"post_id": post_id, "total_elements": len(rows), "elements": rows}

    return _run("getting Elementor elements", body)


# Sections


def elementor_create_section(
    store: ElementorDataStore,
    *,
    post_id: int,
    columns: int = 1,
    position: int | None = None,
    section_settings: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return _run(
        "creating section",
        lambda: store.with_elementor_data(
            post_id,
            partial(
                section_ops.create_section,
                columns=columns,
                position=position,
                section_settings=section_settings,
            ),
        ),
    )


def elementor_create_container(
    store: ElementorDataStore,
    *,
    post_id: int,
    position: int | None = None,
    container_settings: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return _run(
        "creating container",
        lambda: store.with_elementor_data(
            post_id,
            partial(
                section_ops.create_container,
                position=position,
                container_settings=container_settings,
            ),
        ),
    )


def elementor_add_column(
    store: ElementorDataStore, *, post_id: int, section_id: str, columns_to_add: int = 1
) -> dict[str, Any]:
    return _run(
        "adding column to section",
        lambda: store.with_elementor_data(
            post_id,
            partial(
                section_ops.add_column_to_section,
                section_id=section_id,
                columns_to_add=columns_to_add,
            ),
        ),
    )


def elementor_duplicate_section(
    store: ElementorDataStore, *, post_id: int, section_id: str, position: int | None = None
) -> dict[str, Any]:
    return _run(
        "duplicating section",
        lambda: store.with_elementor_data(
            post_id,
            partial(section_ops.duplicate_section, section_id=section_id, position=position),
        ),
    )


def elementor_reorder_sections(
    store: ElementorDataStore, *, post_id: int, section_ids: list[str]
) -> dict[str, Any]:
    return _run(
        "reordering sections",
        lambda: store.with_elementor_data(
            post_id,
            partial(section_ops.reorder_top_level_sections, section_ids=section_ids),
        ),
    )


# Elements


def elementor_delete_element(
    store: ElementorDataStore, *, post_id: int, element_id: str
) -> dict[str, Any]:
    return _run(
        "deleting element",
        lambda: store.with_elementor_data(
            post_id, partial(element_ops.delete_element, element_id=element_id)
        ),
    )


def elementor_reorder_elements(
    store: ElementorDataStore, *, post_id: int, container_id: str, element_ids: list[str]
) -> dict[str, Any]:
    return _run(
        "reordering elements",
        lambda: store.with_elementor_data(
            post_id,
            partial(
                element_ops.reorder_elements,
                container_id=container_id,
                element_ids=element_ids,
            ),
        ),
    )


def elementor_copy_settings(
    store: ElementorDataStore,
    *,
    post_id: int,
    source_element_id: str,
    target_element_id: str,
    settings_to_copy: list[str] | None = None,
) -> dict[str, Any]:
    return _run(
        "copying element settings",
        lambda: store.with_elementor_data(
            post_id,
            partial(
                element_ops.copy_element_settings,
                source_element_id=source_element_id,
                target_element_id=target_element_id,
                settings_to_copy=settings_to_copy,
            ),
        ),
    )


def elementor_find_by_type(
    store: ElementorDataStore, *, post_id: int, widget_type: str, include_settings: bool = False
) -> dict[str, Any]:
    """Read-only: widgets of one type."""
    return _run(
        "finding elements by type",
        lambda: element_ops.find_elements_by_type(
            store.fetch(post_id), widget_type=widget_type, include_settings=include_settings
        ),
    )


# Widgets


def elementor_add_widget(
    store: ElementorDataStore,
    *,
    post_id: int,
    widget_type: str,
    widget_settings: dict[str, Any] | None = None,
    section_id: str | None = None,
    column_id: str | None = None,
    position: int | None = None,
) -> dict[str, Any]:
    return _run(
        "adding widget",
        lambda: store.with_elementor_data(
            post_id,
            partial(
                widget_ops.add_widget_to_section,
                widget_type=widget_type,
                widget_settings=widget_settings,
                section_id=section_id,
                column_id=column_id,
                position=position,
            ),
        ),
    )


def elementor_insert_widget(
    store: ElementorDataStore,
    *,
    post_id: int,
    widget_type: str,
    target_element_id: str,
    insert_position: str = "after",
    widget_settings: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return _run(
        "inserting widget",
        lambda: store.with_elementor_data(
            post_id,
            partial(
                widget_ops.insert_widget_at_position,
                widget_type=widget_type,
                target_element_id=target_element_id,
                insert_position=insert_position,
                widget_settings=widget_settings,
            ),
        ),
    )


def elementor_clone_widget(
    store: ElementorDataStore,
    *,
    post_id: int,
    widget_id: str,
    target_element_id: str | None = None,
    insert_position: str = "after",
) -> dict[str, Any]:
    return _run(
        "cloning widget",
        lambda: store.with_elementor_data(
            post_id,
            partial(
                widget_ops.clone_widget,
                widget_id=widget_id,
                target_element_id=target_element_id,
                insert_position=insert_position,
            ),
        ),
    )


def elementor_move_widget(
    store: ElementorDataStore,
    *,
    post_id: int,
    widget_id: str,
    target_section_id: str | None = None,
    target_column_id: str | None = None,
    position: int | None = None,
) -> dict[str, Any]:
    return _run(
        "moving widget",
        lambda: store.with_elementor_data(
            post_id,
            partial(
                widget_ops.move_widget,
                widget_id=widget_id,
                target_section_id=target_section_id,
                target_column_id=target_column_id,
                position=position,
            ),
        ),
    )


def elementor_update_widget(
    store: ElementorDataStore,
    *,
    post_id: int,
    widget_id: str,
    widget_settings: dict[str, Any] | None = None,
    widget_content: str | None = None,
) -> dict[str, Any]:
    return _run(
        "updating widget",
        lambda: store.with_elementor_data(
            post_id,
            partial(
                widget_ops.update_widget,
                widget_id=widget_id,
                widget_settings=widget_settings,
                widget_content=widget_content,
            ),
        ),
    )


def elementor_get_widget(
    store: ElementorDataStore, *, post_id: int, widget_id: str
) -> dict[str, Any]:
    """Read-only: a single element with its subtree."""
    return _run(
        "fetching widget",
        lambda: {"widget": widget_ops.get_widget(store.fetch(post_id), widget_id=widget_id)},
    )


def elementor_update_section(
    store: ElementorDataStore,
    *,
    post_id: int,
    section_id: str,
    widgets_updates: Sequence[WidgetUpdate | Mapping[str, Any]],
) -> dict[str, Any]:
    return _run(
        "updating section widgets",
        lambda: store.with_elementor_data(
            post_id,
            partial(
                widget_ops.update_section_widgets,
                section_id=section_id,
                widgets_updates=widgets_updates,
            ),
        ),
    )


def elementor_get_widget_content(
    store: ElementorDataStore, *, post_id: int, widget_id: str
) -> dict[str, Any]:
    """Read-only: a widget's primary content."""
    return _run(
        "getting widget content",
        lambda: widget_ops.get_widget_content(store.fetch(post_id), widget_id=widget_id),
    )


# Posts and pages (pass-through)


def wp_list_content(
    client: RestClientProtocol,
    *,
    resource: str,
    page: int = 1,
    per_page: int = 10,
    search: str | None = None,
    status: str | None = None,
) -> dict[str, Any]:
    """List posts or pages with basic filtering."""
    params: dict[str, Any] = {"page": page, "per_page": max(1, min(per_page, 100))}
    if search:
        params["search"] = search
    if status:
        params["status"] = status

    def body() -> dict[str, Any]:
        items = client.list_resource(resource, params)
        return {
            resource: [
                {
                    "id": item.get("id"),
                    "title": (item.get("title") or {}).get("rendered", ""),
                    "status": item.get("status"),
                    "link": item.get("link"),
                }
                for item in items
            ],
            "count": len(items),
        }

    return _run(f"listing {resource}", body)


def wp_get_content(client: RestClientProtocol, *, resource: str, post_id: int) -> dict[str, Any]:
    """Fetch a single post or page in edit context."""
    return _run(
        f"fetching {resource.rstrip('s')} {post_id}",
        lambda: {"item": client.retrieve(resource, post_id)},
    )


# --- MCP Server Setup ---


@dataclass
class ServerContext:
    """Shared resources for the MCP server lifetime."""

    api: WordPressApi
    store: ElementorDataStore


@asynccontextmanager
async def server_lifespan(_server: FastMCP) -> AsyncIterator[ServerContext]:
    """Build the WordPress client on startup."""
    settings = load_settings()
    api = WordPressApi(settings)
    logger.info("WordPress client ready for {}", settings.api_url)
    try:
        yield ServerContext(api=api, store=ElementorDataStore(api))
    finally:
        api.close()


mcp_server = FastMCP(
    "wordpress-elementor",
    instructions="""\
Elementor stores each page as a tree: sections hold columns, columns hold
widgets; flexbox containers can hold widgets or other containers directly.
Every element has a short id.

## Best Practice: Look Before You Edit

1. Call get_page_structure (or get_elementor_elements) to learn element ids.
2. Edit with the structural tools; each call reads, changes and saves the page.
3. Call backup_elementor_data before large changes.

## Tips
- Edits are last-writer-wins: do not edit the same page from two sessions.
- update_elementor_widget merges settings shallowly; nested objects are
  replaced whole.
- reorder_elements keeps children you did not list, after the listed ones.
""",
    lifespan=server_lifespan,
)


def _ctx(mcp_ctx: Context) -> ServerContext:
    return mcp_ctx.request_context.lifespan_context  # type: ignore[return-value]


# --- MCP Tool Wrappers ---


@mcp_server.tool(name="get_elementor_data")
async def get_elementor_data_tool(ctx: Context, post_id: int) -> dict[str, Any]:
    """Fetch _elementor_data for a post/page/template. Returns the full element tree.

    Args:
        post_id: Post, page or template ID.
    """
    return elementor_get_data(_ctx(ctx).store, post_id=post_id)


@mcp_server.tool(name="update_elementor_data")
async def update_elementor_data_tool(
    ctx: Context, post_id: int, elementor_data: str
) -> dict[str, Any]:
    """Save _elementor_data back (full replacement).

    Args:
        post_id: Post, page or template ID.
        elementor_data: JSON string of the element array.
    """
    return elementor_update_data(_ctx(ctx).store, post_id=post_id, elementor_data=elementor_data)


@mcp_server.tool(name="get_elementor_data_chunked")
async def get_elementor_data_chunked_tool(
    ctx: Context, post_id: int, chunk_size: int = 5, chunk_index: int = 0
) -> dict[str, Any]:
    """Return a chunk of top-level elements, for pages too large to read at once.

    Args:
        post_id: Post, page or template ID.
        chunk_size: Top-level elements per chunk.
        chunk_index: Zero-based chunk number.
    """
    return elementor_get_data_chunked(
        _ctx(ctx).store, post_id=post_id, chunk_size=chunk_size, chunk_index=chunk_index
    )


@mcp_server.tool(name="backup_elementor_data")
async def backup_elementor_data_tool(
    ctx: Context, post_id: int, backup_name: str | None = None
) -> dict[str, Any]:
    """Snapshot _elementor_data into a timestamped post meta key before changes.

    Args:
        post_id: Post or page ID.
        backup_name: Optional label stored with the snapshot.
    """
    server = _ctx(ctx)
    return elementor_backup_data(
        server.api, server.store, post_id=post_id, backup_name=backup_name
    )


@mcp_server.tool(name="get_elementor_templates")
async def get_elementor_templates_tool(
    ctx: Context, per_page: int = 10, type: str | None = None
) -> dict[str, Any]:
    """List elementor_library templates with an optional template type filter.

    Args:
        per_page: Max templates to return.
        type: Template type (page, section, header, footer, ...).
    """
    return elementor_get_templates(_ctx(ctx).api, per_page=per_page, template_type=type)


@mcp_server.tool(name="get_page_structure")
async def get_page_structure_tool(
    ctx: Context, post_id: int, include_settings: bool = False
) -> dict[str, Any]:
    """Get a tree view of the page with id, type, widgetType and level per element.

    Args:
        post_id: Post, page or template ID.
        include_settings: Include each element's settings.
    """
    return elementor_get_page_structure(
        _ctx(ctx).store, post_id=post_id, include_settings=include_settings
    )


@mcp_server.tool(name="get_elementor_elements")
async def get_elementor_elements_tool(
    ctx: Context, post_id: int, include_content: bool = False
) -> dict[str, Any]:
    """Get a flat list of all elements with id, type, level and widgetType.

    Args:
        post_id: Post, page or template ID.
        include_content: Add a short content preview for text-like widgets.
    """
    return elementor_get_elements(
        _ctx(ctx).store, post_id=post_id, include_content=include_content
    )


@mcp_server.tool(name="create_elementor_section")
async def create_elementor_section_tool(
    ctx: Context,
    post_id: int,
    columns: int = 1,
    position: int | None = None,
    section_settings: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Add a new section with N equal columns. Sections are top-level layout containers.

    Args:
        post_id: Post, page or template ID.
        columns: Number of columns.
        position: Index among top-level elements (default: end of page).
        section_settings: Initial section settings.
    """
    return elementor_create_section(
        _ctx(ctx).store,
        post_id=post_id,
        columns=columns,
        position=position,
        section_settings=section_settings,
    )


@mcp_server.tool(name="create_elementor_container")
async def create_elementor_container_tool(
    ctx: Context,
    post_id: int,
    position: int | None = None,
    container_settings: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Add a new flexbox container to the page.

    Args:
        post_id: Post, page or template ID.
        position: Index among top-level elements (default: end of page).
        container_settings: Settings merged over boxed/column defaults.
    """
    return elementor_create_container(
        _ctx(ctx).store,
        post_id=post_id,
        position=position,
        container_settings=container_settings,
    )


@mcp_server.tool(name="add_column_to_section")
async def add_column_to_section_tool(
    ctx: Context, post_id: int, section_id: str, columns_to_add: int = 1
) -> dict[str, Any]:
    """Add one or more columns to an existing section.

    Args:
        post_id: Post, page or template ID.
        section_id: Section to extend.
        columns_to_add: How many columns to append.
    """
    return elementor_add_column(
        _ctx(ctx).store, post_id=post_id, section_id=section_id, columns_to_add=columns_to_add
    )


@mcp_server.tool(name="duplicate_section")
async def duplicate_section_tool(
    ctx: Context, post_id: int, section_id: str, position: int | None = None
) -> dict[str, Any]:
    """Deep clone a top-level section with all its contents, with new ids throughout.

    Args:
        post_id: Post, page or template ID.
        section_id: Top-level section or container to clone.
        position: Index for the copy (default: right after the original).
    """
    return elementor_duplicate_section(
        _ctx(ctx).store, post_id=post_id, section_id=section_id, position=position
    )


@mcp_server.tool(name="reorder_top_level_sections")
async def reorder_top_level_sections_tool(
    ctx: Context, post_id: int, section_ids: list[str]
) -> dict[str, Any]:
    """Change the order of top-level sections/containers.

    Listed ids come first in the given order; unlisted ones follow unchanged.

    Args:
        post_id: Post, page or template ID.
        section_ids: Top-level ids in the desired order.
    """
    return elementor_reorder_sections(_ctx(ctx).store, post_id=post_id, section_ids=section_ids)


@mcp_server.tool(name="delete_elementor_element")
async def delete_elementor_element_tool(
    ctx: Context, post_id: int, element_id: str
) -> dict[str, Any]:
    """Remove any element (widget, column, section or container) and its contents.

    Args:
        post_id: Post, page or template ID.
        element_id: Element to delete; searched at every nesting level.
    """
    return elementor_delete_element(_ctx(ctx).store, post_id=post_id, element_id=element_id)


@mcp_server.tool(name="reorder_elements")
async def reorder_elements_tool(
    ctx: Context, post_id: int, container_id: str, element_ids: list[str]
) -> dict[str, Any]:
    """Reorder the child elements of a section, column or container.

    Listed ids come first in the given order; unlisted children follow unchanged.

    Args:
        post_id: Post, page or template ID.
        container_id: Parent element.
        element_ids: Child ids in the desired order.
    """
    return elementor_reorder_elements(
        _ctx(ctx).store, post_id=post_id, container_id=container_id, element_ids=element_ids
    )


@mcp_server.tool(name="copy_element_settings")
async def copy_element_settings_tool(
    ctx: Context,
    post_id: int,
    source_element_id: str,
    target_element_id: str,
    settings_to_copy: list[str] | None = None,
) -> dict[str, Any]:
    """Copy settings from one element to another, all of them or only the named keys.

    Args:
        post_id: Post, page or template ID.
        source_element_id: Element to copy from.
        target_element_id: Element to copy to.
        settings_to_copy: Keys to copy (default: replace all settings).
    """
    return elementor_copy_settings(
        _ctx(ctx).store,
        post_id=post_id,
        source_element_id=source_element_id,
        target_element_id=target_element_id,
        settings_to_copy=settings_to_copy,
    )


@mcp_server.tool(name="find_elements_by_type")
async def find_elements_by_type_tool(
    ctx: Context, post_id: int, widget_type: str, include_settings: bool = False
) -> dict[str, Any]:
    """Find all widgets of a type (e.g. 'heading', 'image', 'button').

    Args:
        post_id: Post, page or template ID.
        widget_type: Elementor widget type.
        include_settings: Include each widget's settings.
    """
    return elementor_find_by_type(
        _ctx(ctx).store,
        post_id=post_id,
        widget_type=widget_type,
        include_settings=include_settings,
    )


@mcp_server.tool(name="add_widget_to_section")
async def add_widget_to_section_tool(
    ctx: Context,
    post_id: int,
    widget_type: str,
    section_id: str | None = None,
    column_id: str | None = None,
    widget_settings: dict[str, Any] | None = None,
    position: int | None = None,
) -> dict[str, Any]:
    """Insert a widget into a column, section or container.

    column_id wins; a section_id resolves to the section's first column (or the
    container itself); with neither, the first available column or container
    on the page is used.

    Args:
        post_id: Post, page or template ID.
        widget_type: Elementor widget type.
        section_id: Target section or container.
        column_id: Target column.
        widget_settings: Initial widget settings.
        position: Index within the target (default: append).
    """
    return elementor_add_widget(
        _ctx(ctx).store,
        post_id=post_id,
        widget_type=widget_type,
        widget_settings=widget_settings,
        section_id=section_id,
        column_id=column_id,
        position=position,
    )


@mcp_server.tool(name="insert_widget_at_position")
async def insert_widget_at_position_tool(
    ctx: Context,
    post_id: int,
    widget_type: str,
    target_element_id: str,
    insert_position: str = "after",
    widget_settings: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Add a widget before, after, or inside a specific element.

    Args:
        post_id: Post, page or template ID.
        widget_type: Elementor widget type.
        target_element_id: Reference element.
        insert_position: "before", "after" or "inside".
        widget_settings: Initial widget settings.
    """
    return elementor_insert_widget(
        _ctx(ctx).store,
        post_id=post_id,
        widget_type=widget_type,
        target_element_id=target_element_id,
        insert_position=insert_position,
        widget_settings=widget_settings,
    )


@mcp_server.tool(name="clone_widget")
async def clone_widget_tool(
    ctx: Context,
    post_id: int,
    widget_id: str,
    target_element_id: str | None = None,
    insert_position: str = "after",
) -> dict[str, Any]:
    """Duplicate a widget with new ids. Without a target, the copy goes right after it.

    Args:
        post_id: Post, page or template ID.
        widget_id: Element to clone.
        target_element_id: Place the clone next to this element instead.
        insert_position: "before" or "after" the target.
    """
    return elementor_clone_widget(
        _ctx(ctx).store,
        post_id=post_id,
        widget_id=widget_id,
        target_element_id=target_element_id,
        insert_position=insert_position,
    )


@mcp_server.tool(name="move_widget")
async def move_widget_tool(
    ctx: Context,
    post_id: int,
    widget_id: str,
    target_section_id: str | None = None,
    target_column_id: str | None = None,
    position: int | None = None,
) -> dict[str, Any]:
    """Move a widget to another column, section or container, keeping its id.

    Args:
        post_id: Post, page or template ID.
        widget_id: Element to move.
        target_section_id: Destination section or container.
        target_column_id: Destination column.
        position: Index within the destination (default: append).
    """
    return elementor_move_widget(
        _ctx(ctx).store,
        post_id=post_id,
        widget_id=widget_id,
        target_section_id=target_section_id,
        target_column_id=target_column_id,
        position=position,
    )


@mcp_server.tool(name="update_elementor_widget")
async def update_elementor_widget_tool(
    ctx: Context,
    post_id: int,
    widget_id: str,
    widget_settings: dict[str, Any] | None = None,
    widget_content: str | None = None,
) -> dict[str, Any]:
    """Modify widget settings and/or its main text/html content.

    Args:
        post_id: Post, page or template ID.
        widget_id: Widget to update.
        widget_settings: Settings merged over the existing ones.
        widget_content: New primary content (title, editor text, button label...).
    """
    return elementor_update_widget(
        _ctx(ctx).store,
        post_id=post_id,
        widget_id=widget_id,
        widget_settings=widget_settings,
        widget_content=widget_content,
    )


@mcp_server.tool(name="get_elementor_widget")
async def get_elementor_widget_tool(ctx: Context, post_id: int, widget_id: str) -> dict[str, Any]:
    """Fetch a single element by id, including settings and nested elements.

    Args:
        post_id: Post, page or template ID.
        widget_id: Element id.
    """
    return elementor_get_widget(_ctx(ctx).store, post_id=post_id, widget_id=widget_id)


@mcp_server.tool(name="update_elementor_section")
async def update_elementor_section_tool(
    ctx: Context, post_id: int, section_id: str, widgets_updates: list[WidgetUpdate]
) -> dict[str, Any]:
    """Batch update several widgets inside one section.

    Each update needs a widget_id and may carry widget_settings and/or
    widget_content. Ids not found in the section are listed under not_found.
    A malformed entry fails the whole batch and nothing is saved.

    Args:
        post_id: Post, page or template ID.
        section_id: Section (or any element) whose subtree is searched.
        widgets_updates: Updates to apply.
    """
    return elementor_update_section(
        _ctx(ctx).store, post_id=post_id, section_id=section_id, widgets_updates=widgets_updates
    )


@mcp_server.tool(name="get_widget_content")
async def get_widget_content_tool(ctx: Context, post_id: int, widget_id: str) -> dict[str, Any]:
    """Extract the main text/html content of a widget and the field it lives in.

    Args:
        post_id: Post, page or template ID.
        widget_id: Widget id.
    """
    return elementor_get_widget_content(_ctx(ctx).store, post_id=post_id, widget_id=widget_id)


@mcp_server.tool(name="list_pages")
async def list_pages_tool(
    ctx: Context,
    page: int = 1,
    per_page: int = 10,
    search: str | None = None,
    status: str | None = None,
) -> dict[str, Any]:
    """List pages (id, title, status, link) to find post ids.

    Args:
        page: Page of the collection.
        per_page: Items per page (1-100).
        search: Limit to pages matching a string.
        status: publish, draft, pending, private or future.
    """
    return wp_list_content(
        _ctx(ctx).api, resource="pages", page=page, per_page=per_page, search=search, status=status
    )


@mcp_server.tool(name="get_page")
async def get_page_tool(ctx: Context, page_id: int) -> dict[str, Any]:
    """Retrieve a single page by id (edit context).

    Args:
        page_id: Page ID.
    """
    return wp_get_content(_ctx(ctx).api, resource="pages", post_id=page_id)


@mcp_server.tool(name="list_posts")
async def list_posts_tool(
    ctx: Context,
    page: int = 1,
    per_page: int = 10,
    search: str | None = None,
    status: str | None = None,
) -> dict[str, Any]:
    """List posts (id, title, status, link) to find post ids.

    Args:
        page: Page of the collection.
        per_page: Items per page (1-100).
        search: Limit to posts matching a string.
        status: publish, draft, pending, private or future.
    """
    return wp_list_content(
        _ctx(ctx).api, resource="posts", page=page, per_page=per_page, search=search, status=status
    )


@mcp_server.tool(name="get_post")
async def get_post_tool(ctx: Context, post_id: int) -> dict[str, Any]:
    """Retrieve a single post by id (edit context).

    Args:
        post_id: Post ID.
    """
    return wp_get_content(_ctx(ctx).api, resource="posts", post_id=post_id)


def run_mcp_server(*, verbose: bool = False) -> None:
    """Run the MCP server with stdio transport."""
    from elementor_mcp.logging_config import configure_logging

    configure_logging(verbose=verbose, log_file=load_settings().log_file)
    mcp_server.run(transport="stdio")

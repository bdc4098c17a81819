"""Top-level layout: sections, containers, columns, duplication, page order."""

from typing import Any

from elementor_mcp.core.ops.elements import reorder_children
from elementor_mcp.core.tree.ids import generate_element_id, reassign_element_ids
from elementor_mcp.core.tree.traversal import find_element_by_id
from elementor_mcp.exceptions import ElementNotFoundError, InvalidContainerError
from elementor_mcp.models.element import COLUMN, CONTAINER, SECTION, Element, make_element

# Width given to columns appended to an existing section.
ADDED_COLUMN_SIZE = 50


def _new_column(size: int) -> Element:
    return make_element(
        COLUMN,
        element_id=generate_element_id(),
        settings={"_column_size": size, "_inline_size": None},
    )


def _insert_top_level(elements: list[Element], element: Element, position: int | None) -> None:
    # Unlike widget insertion, position == len(elements) is treated as "append".
    if position is not None and 0 <= position < len(elements):
        elements.insert(position, element)
    else:
        elements.append(element)


def create_section(
    elements: list[Element],
    *,
    columns: int = 1,
    position: int | None = None,
    section_settings: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Add a section with ``columns`` evenly sized columns.

    Column width is ``100 // columns``; the remainder is not redistributed
    (3 columns are 33/33/33).
    """
    cols = columns or 1
    section = make_element(
        SECTION, element_id=generate_element_id(), settings=section_settings
    )
    section["elements"] = [_new_column(100 // cols) for _ in range(cols)]
    _insert_top_level(elements, section, position)
    return {
        "section_id": section["id"],
        "columns": cols,
        "column_ids": [c["id"] for c in section["elements"]],
        "position": position if position is not None else "end",
    }


def create_container(
    elements: list[Element],
    *,
    position: int | None = None,
    container_settings: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Add a flexbox container (boxed, column direction unless overridden)."""
    settings = {"content_width": "boxed", "flex_direction": "column", **(container_settings or {})}
    container = make_element(CONTAINER, element_id=generate_element_id(), settings=settings)
    _insert_top_level(elements, container, position)
    return {
        "container_id": container["id"],
        "position": position if position is not None else "end",
    }


def add_column_to_section(
    elements: list[Element], *, section_id: str, columns_to_add: int = 1
) -> dict[str, Any]:
    """Append columns to an existing section."""
    section = find_element_by_id(elements, section_id)
    if section is None:
        msg = f"Section with ID {section_id} not found"
        raise ElementNotFoundError(msg)
    if section.get("elType") != SECTION:
        msg = f"Element {section_id} is not a section (type: {section.get('elType')})"
        raise InvalidContainerError(msg)

    count = columns_to_add or 1
    kids = section.setdefault("elements", [])
    new_columns = [_new_column(ADDED_COLUMN_SIZE) for _ in range(count)]
    kids.extend(new_columns)
    return {
        "section_id": section_id,
        "columns_added": count,
        "column_ids": [c["id"] for c in new_columns],
        "total_columns": len(kids),
    }


def duplicate_section(
    elements: list[Element], *, section_id: str, position: int | None = None
) -> dict[str, Any]:
    """Deep clone a top-level section with fresh ids, by default right after it."""
    index = next((i for i, el in enumerate(elements) if el.get("id") == section_id), None)
    if index is None:
        msg = f"Section with ID {section_id} not found at top level"
        raise ElementNotFoundError(msg)

    duplicate = reassign_element_ids(elements[index])
    insert_position = position if position is not None else index + 1
    elements.insert(insert_position, duplicate)
    return {
        "original_section_id": section_id,
        "new_section_id": duplicate["id"],
        "position": insert_position,
    }


def reorder_top_level_sections(
    elements: list[Element], *, section_ids: list[str]
) -> dict[str, Any]:
    """Reorder the page's top-level sections/containers."""
    reorder_children(elements, section_ids, scope="page")
    return {
        "reordered_count": len(section_ids),
        "total_elements": len(elements),
        "new_order": [el.get("id") for el in elements],
    }

"""Widget-level editing: add, insert, clone, move, update, batch update."""

from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger
from pydantic import ValidationError

from elementor_mcp.core.ops.placement import insert_at, insert_relative, resolve_container
from elementor_mcp.core.tree.content import (
    get_widget_content_field,
    set_widget_content,
)
from elementor_mcp.core.tree.content import get_widget_content as _content_of
from elementor_mcp.core.tree.ids import generate_element_id, reassign_element_ids
from elementor_mcp.core.tree.traversal import (
    find_element_by_id,
    find_in_subtree,
    remove_element,
)
from elementor_mcp.exceptions import ElementNotFoundError, UnsupportedContentError
from elementor_mcp.models.element import WIDGET, Element, WidgetUpdate, make_element


def _new_widget(widget_type: str, widget_settings: dict[str, Any] | None) -> Element:
    return make_element(
        WIDGET,
        element_id=generate_element_id(),
        widget_type=widget_type,
        settings=widget_settings,
    )


def _require(elements: list[Element], element_id: str, label: str = "Widget") -> Element:
    element = find_element_by_id(elements, element_id)
    if element is None:
        msg = f"{label} {element_id} not found"
        raise ElementNotFoundError(msg)
    return element


def _merge_settings(element: Element, settings: dict[str, Any]) -> None:
    """Shallow merge: top-level keys overwrite, nested dicts are replaced whole."""
    element["settings"] = {**(element.get("settings") or {}), **settings}


def add_widget_to_section(
    elements: list[Element],
    *,
    widget_type: str,
    widget_settings: dict[str, Any] | None = None,
    section_id: str | None = None,
    column_id: str | None = None,
    position: int | None = None,
) -> dict[str, Any]:
    """Insert a new widget into a column, section or container.

    Args:
        elements: Document tree (mutated in place).
        widget_type: Elementor widgetType, e.g. "heading".
        widget_settings: Initial settings for the widget.
        section_id: Section/container to add to (a section's first column is used).
        column_id: Column to add to; wins over section_id.
        position: Index among the container's children; out of range appends.
    """
    widget = _new_widget(widget_type, widget_settings)
    container = resolve_container(elements, column_id=column_id, section_id=section_id)
    index = insert_at(container, widget, position)
    return {
        "widget_id": widget["id"],
        "widget_type": widget_type,
        "container_id": container["id"],
        "position": index,
    }


def insert_widget_at_position(
    elements: list[Element],
    *,
    widget_type: str,
    target_element_id: str,
    insert_position: str = "after",
    widget_settings: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Insert a new widget before, after or inside a target element."""
    widget = _new_widget(widget_type, widget_settings)
    parent = insert_relative(
        elements, widget, target_id=target_element_id, relation=insert_position
    )

    result: dict[str, Any] = {"widget_id": widget["id"], "inserted_position": insert_position}
    if insert_position == "inside":
        result["parent_id"] = target_element_id
        return result
    result["target_id"] = target_element_id
    if parent is not None:
        result["parent_id"] = parent["id"]
    return result


def clone_widget(
    elements: list[Element],
    *,
    widget_id: str,
    target_element_id: str | None = None,
    insert_position: str = "after",
) -> dict[str, Any]:
    """Duplicate an element with fresh ids for its whole subtree.

    Without a target the clone lands next to the original.
    """
    if insert_position not in ("before", "after"):
        msg = f"Invalid insert position {insert_position!r}, expected 'before' or 'after'"
        raise ValueError(msg)

    original = _require(elements, widget_id)
    cloned = reassign_element_ids(original)

    if target_element_id:
        insert_relative(elements, cloned, target_id=target_element_id, relation=insert_position)
    else:
        insert_relative(elements, cloned, target_id=widget_id, relation="after")

    return {
        "original_widget_id": widget_id,
        "cloned_widget_id": cloned["id"],
        "widget_type": cloned.get("widgetType"),
    }


def move_widget(
    elements: list[Element],
    *,
    widget_id: str,
    target_section_id: str | None = None,
    target_column_id: str | None = None,
    position: int | None = None,
) -> dict[str, Any]:
    """Detach an element and drop it into another container, keeping its id.

    The element is removed before the target is resolved, so a target inside
    the moved subtree is reported as not found.
    """
    widget = remove_element(elements, widget_id)
    if widget is None:
        msg = f"Widget {widget_id} not found"
        raise ElementNotFoundError(msg)

    container = resolve_container(
        elements,
        column_id=target_column_id,
        section_id=target_section_id,
        hint="target_section_id or target_column_id",
    )
    index = insert_at(container, widget, position)
    return {
        "widget_id": widget["id"],
        "moved_to_container": container["id"],
        "new_position": index,
    }


def update_widget(
    elements: list[Element],
    *,
    widget_id: str,
    widget_settings: dict[str, Any] | None = None,
    widget_content: Any | None = None,
) -> dict[str, Any]:
    """Merge settings into a widget and/or replace its primary content."""
    widget = _require(elements, widget_id)

    if widget_settings:
        _merge_settings(widget, widget_settings)

    if widget_content is not None and not set_widget_content(widget, widget_content):
        msg = (
            f"Unable to set content for widget type: {widget.get('widgetType') or ''}. "
            "Use widget_settings instead."
        )
        raise UnsupportedContentError(msg)

    return {
        "widget_id": widget["id"],
        "widget_type": widget.get("widgetType"),
        "updated_settings": list(widget_settings) if widget_settings else [],
        "updated_content": widget_content is not None,
    }


def _parse_updates(
    widgets_updates: Sequence[WidgetUpdate | Mapping[str, Any]],
) -> list[WidgetUpdate]:
    """Validate every batch entry before any of them is applied."""
    parsed: list[WidgetUpdate] = []
    for i, update in enumerate(widgets_updates):
        if isinstance(update, WidgetUpdate):
            parsed.append(update)
            continue
        try:
            parsed.append(WidgetUpdate.model_validate(update))
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc']) or 'entry'}: {err['msg']}"
                for err in e.errors()
            )
            msg = f"Invalid widgets_updates[{i}] ({problems}): {update!r}"
            raise ValueError(msg) from e
    return parsed


def update_section_widgets(
    elements: list[Element],
    *,
    section_id: str,
    widgets_updates: Sequence[WidgetUpdate | Mapping[str, Any]],
) -> dict[str, list[str]]:
    """Apply a batch of widget updates inside one section's subtree.

    Ids missing from the subtree are reported under ``not_found`` instead of
    failing the batch. Content on unmapped widget types is skipped. A malformed
    entry raises ``ValueError`` before any widget is touched.
    """
    updates = _parse_updates(widgets_updates)
    section = _require(elements, section_id, label="Section")

    results: dict[str, list[str]] = {"updated": [], "not_found": []}
    for update in updates:
        target_id = update.widget_id
        widget = find_in_subtree(section, target_id)
        if widget is None:
            results["not_found"].append(target_id)
            continue

        if update.widget_settings:
            _merge_settings(widget, update.widget_settings)
        if update.widget_content is not None and not set_widget_content(
            widget, update.widget_content
        ):
            logger.debug("Skipping content for unmapped widget {}", target_id)

        results["updated"].append(target_id)
    return results


def get_widget(elements: list[Element], *, widget_id: str) -> Element:
    """Return a single element (with its subtree) by id."""
    return _require(elements, widget_id)


def get_widget_content(elements: list[Element], *, widget_id: str) -> dict[str, Any]:
    """Return a widget's primary content and the settings key it lives in."""
    widget = _require(elements, widget_id)
    widget_type = widget.get("widgetType")
    return {
        "widget_id": widget["id"],
        "widget_type": widget_type,
        "content_field": get_widget_content_field(widget_type or ""),
        "content": _content_of(widget),
    }
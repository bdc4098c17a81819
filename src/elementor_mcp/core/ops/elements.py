"""Element-level editing: delete, reorder, copy settings, find by type."""

import copy
from typing import Any

from elementor_mcp.core.tree.traversal import (
    find_element_by_id,
    find_element_parent,
    find_widgets_by_type,
    sibling_list,
)
from elementor_mcp.exceptions import ElementNotFoundError, MissingElementsError
from elementor_mcp.models.element import Element


def reorder_children(
    kids: list[Element], ordered_ids: list[str], *, scope: str = "container"
) -> list[Element]:
    """Reorder ``kids`` in place: listed ids first, the rest after in prior order.

    Raises:
        MissingElementsError: Listing every id that is not among ``kids``.
            ``kids`` is left untouched in that case.
    """
    by_id = {el.get("id"): el for el in kids}
    missing = [eid for eid in ordered_ids if eid not in by_id]
    if missing:
        msg = f"Element IDs not found in {scope}: {', '.join(missing)}"
        raise MissingElementsError(msg, missing_ids=missing)

    mentioned = set(ordered_ids)
    reordered = [by_id[eid] for eid in dict.fromkeys(ordered_ids)]
    reordered.extend(el for el in kids if el.get("id") not in mentioned)
    kids[:] = reordered
    return kids


def delete_element(elements: list[Element], *, element_id: str) -> dict[str, Any]:
    """Remove an element and its whole subtree from wherever it sits."""
    element = find_element_by_id(elements, element_id)
    ref = find_element_parent(elements, element_id)
    if element is None or ref is None:
        msg = f"Element with ID {element_id} not found"
        raise ElementNotFoundError(msg)

    sibling_list(elements, ref).pop(ref.index)
    return {
        "deleted_element_id": element_id,
        "element_type": element.get("elType"),
        "widget_type": element.get("widgetType"),
    }


def reorder_elements(
    elements: list[Element], *, container_id: str, element_ids: list[str]
) -> dict[str, Any]:
    """Reorder the direct children of a section, column or container."""
    container = find_element_by_id(elements, container_id)
    if container is None:
        msg = f"Container with ID {container_id} not found"
        raise ElementNotFoundError(msg)
    kids = container.get("elements")
    if not isinstance(kids, list):
        msg = f"Element {container_id} does not contain child elements"
        raise ElementNotFoundError(msg)

    reorder_children(kids, element_ids)
    return {
        "container_id": container_id,
        "reordered_count": len(element_ids),
        "total_elements": len(kids),
        "new_order": [el.get("id") for el in kids],
    }


def copy_element_settings(
    elements: list[Element],
    *,
    source_element_id: str,
    target_element_id: str,
    settings_to_copy: list[str] | None = None,
) -> dict[str, Any]:
    """Copy settings from one element to another.

    With ``settings_to_copy`` only those keys present on the source are
    copied; otherwise the target's settings are replaced by a deep copy of
    the source's.
    """
    source = find_element_by_id(elements, source_element_id)
    if source is None:
        msg = f"Source element with ID {source_element_id} not found"
        raise ElementNotFoundError(msg)
    target = find_element_by_id(elements, target_element_id)
    if target is None:
        msg = f"Target element with ID {target_element_id} not found"
        raise ElementNotFoundError(msg)

    source_settings = source.get("settings") or {}
    if settings_to_copy:
        copied: list[str] = []
        target_settings = target.setdefault("settings", {})
        for key in settings_to_copy:
            if key in source_settings:
                target_settings[key] = copy.deepcopy(source_settings[key])
                copied.append(key)
    else:
        target["settings"] = copy.deepcopy(source_settings)
        copied = list(source_settings)

    return {
        "source_element_id": source_element_id,
        "target_element_id": target_element_id,
        "copied_settings": copied,
        "total_copied": len(copied),
    }


def find_elements_by_type(
    elements: list[Element], *, widget_type: str, include_settings: bool = False
) -> dict[str, Any]:
    """List widgets of one widgetType, optionally with their settings."""
    found = []
    for el in find_widgets_by_type(elements, widget_type):
        entry: dict[str, Any] = {"id": el.get("id"), "widgetType": el.get("widgetType")}
        if include_settings:
            entry["settings"] = el.get("settings") or {}
        found.append(entry)
    return {"widget_type": widget_type, "found_count": len(found), "elements": found}

"""Container resolution and positional insertion shared by editing operations."""

from elementor_mcp.core.tree.traversal import (
    find_element_by_id,
    find_element_parent,
    find_first_container,
    sibling_list,
)
from elementor_mcp.exceptions import ElementNotFoundError, InvalidContainerError
from elementor_mcp.models.element import COLUMN, SECTION, Element, children

RELATIONS: tuple[str, ...] = ("before", "after", "inside")


def resolve_container(
    elements: list[Element],
    *,
    column_id: str | None = None,
    section_id: str | None = None,
    hint: str = "section_id or column_id",
) -> Element:
    """Pick the element a widget should be dropped into.

    Priority: explicit column, explicit section (a section resolves to its
    first column), then the first suitable container in the document.
    """
    if column_id:
        container = find_element_by_id(elements, column_id)
        if container is None:
            msg = f"Column with ID {column_id} not found"
            raise ElementNotFoundError(msg)
        return container

    if section_id:
        container = find_element_by_id(elements, section_id)
        if container is None:
            msg = f"Section with ID {section_id} not found"
            raise ElementNotFoundError(msg)
        if container.get("elType") == SECTION:
            column = next(
                (c for c in container.get("elements") or [] if c.get("elType") == COLUMN), None
            )
            if column is None:
                msg = f"No column found in section {section_id}"
                raise InvalidContainerError(msg)
            return column
        return container

    container = find_first_container(elements)
    if container is None:
        msg = f"No suitable container found. Please provide {hint}."
        raise InvalidContainerError(msg)
    return container


def insert_at(container: Element, element: Element, position: int | None) -> int:
    """Insert into ``container``'s children, appending when ``position`` is out of range.

    Returns:
        The index the element ended up at.
    """
    kids = children(container)
    if position is not None and 0 <= position <= len(kids):
        kids.insert(position, element)
        return position
    kids.append(element)
    return len(kids) - 1


def insert_relative(
    elements: list[Element],
    element: Element,
    *,
    target_id: str,
    relation: str,
) -> Element | None:
    """Insert ``element`` before, after or inside the target element.

    Returns:
        The element that now directly holds ``element`` (None at top level).
    """
    if relation not in RELATIONS:
        msg = f"Invalid insert position {relation!r}, expected one of {list(RELATIONS)!r}"
        raise ValueError(msg)

    target = find_element_by_id(elements, target_id)
    if target is None:
        msg = f"Target element {target_id} not found"
        raise ElementNotFoundError(msg)

    if relation == "inside":
        children(target).append(element)
        return target

    ref = find_element_parent(elements, target_id)
    if ref is None:
        msg = f"Target element {target_id} not found"
        raise ElementNotFoundError(msg)
    index = ref.index if relation == "before" else ref.index + 1
    sibling_list(elements, ref).insert(index, element)
    return ref.parent

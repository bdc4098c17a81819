"""Tree traversal: depth-first walk, lookup, parent search, flattening."""

from collections.abc import Callable

from elementor_mcp.models.element import (
    COLUMN,
    CONTAINER,
    SECTION,
    WIDGET,
    Element,
    FlatElement,
    ParentRef,
)

Visitor = Callable[[Element, int], bool | None]


def walk(elements: list[Element], visitor: Visitor, depth: int = 0) -> bool:
    """Visit every element in pre-order, depth first.

    The visitor receives ``(element, depth)``; returning True stops the walk.

    Returns:
        True if the visitor stopped the walk, False if the forest was exhausted.
    """
    for element in elements:
        if visitor(element, depth) is True:
            return True
        kids = element.get("elements")
        if kids and walk(kids, visitor, depth + 1):
            return True
    return False


def find_element_by_id(elements: list[Element], element_id: str) -> Element | None:
    """Find the first element (pre-order) with the given id."""
    found: list[Element] = []

    def visit(element: Element, _depth: int) -> bool:
        if element.get("id") == element_id:
            found.append(element)
            return True
        return False

    walk(elements, visit)
    return found[0] if found else None


def find_element_parent(elements: list[Element], element_id: str) -> ParentRef | None:
    """Locate the parent of an element and its index among the parent's children.

    Top-level elements report ``parent=None`` and their index in ``elements``.
    """
    for i, element in enumerate(elements):
        if element.get("id") == element_id:
            return ParentRef(parent=None, index=i)

    result: list[ParentRef] = []

    def visit(element: Element, _depth: int) -> bool:
        for i, child in enumerate(element.get("elements") or []):
            if child.get("id") == element_id:
                result.append(ParentRef(parent=element, index=i))
                return True
        return False

    walk(elements, visit)
    return result[0] if result else None


def filter_elements(
    elements: list[Element], predicate: Callable[[Element], bool]
) -> list[Element]:
    """Collect every element matching ``predicate``, by reference, in pre-order."""
    matches: list[Element] = []

    def visit(element: Element, _depth: int) -> None:
        if predicate(element):
            matches.append(element)

    walk(elements, visit)
    return matches


def find_widgets_by_type(elements: list[Element], widget_type: str) -> list[Element]:
    """Find all widgets with the given widgetType."""
    return filter_elements(
        elements,
        lambda el: el.get("elType") == WIDGET and el.get("widgetType") == widget_type,
    )


def flatten_elements(elements: list[Element]) -> list[FlatElement]:
    """Flatten the tree into (element, depth) pairs in pre-order."""
    flat: list[FlatElement] = []
    walk(elements, lambda el, depth: flat.append(FlatElement(element=el, depth=depth)))
    return flat


def find_in_subtree(element: Element, element_id: str) -> Element | None:
    """Find an element within ``element``'s subtree, the root included."""
    return find_element_by_id([element], element_id)


def sibling_list(elements: list[Element], ref: ParentRef) -> list[Element]:
    """Return the list holding an element located by ``find_element_parent``."""
    if ref.parent is None:
        return elements
    return ref.parent["elements"]  # type: ignore[no-any-return]


def remove_element(elements: list[Element], element_id: str) -> Element | None:
    """Detach the element (and its subtree) wherever it sits, and return it."""
    ref = find_element_parent(elements, element_id)
    if ref is None:
        return None
    return sibling_list(elements, ref).pop(ref.index)


def find_first_container(elements: list[Element]) -> Element | None:
    """Find the first element a widget can be dropped into.

    In document order: a column, a section's first column, or a flexbox
    container, recursing into children otherwise.
    """
    for element in elements:
        el_type = element.get("elType")
        if el_type == COLUMN:
            return element
        kids = element.get("elements") or []
        if el_type == SECTION:
            column = next((c for c in kids if c.get("elType") == COLUMN), None)
            if column is not None:
                return column
        if el_type == CONTAINER:
            return element
        if kids:
            found = find_first_container(kids)
            if found is not None:
                return found
    return None

"""Domain models for Elementor element trees.

Elements stay plain dicts so keys we do not know about (``isInner``, editor
bookkeeping) survive a read-modify-write cycle untouched.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict

Element = dict[str, Any]

SECTION = "section"
COLUMN = "column"
WIDGET = "widget"
CONTAINER = "container"

ELEMENT_TYPES = frozenset({SECTION, COLUMN, WIDGET, CONTAINER})


@dataclass(frozen=True)
class FlatElement:
    """An element paired with its depth in the tree (roots are depth 0)."""

    element: Element
    depth: int


@dataclass(frozen=True)
class ParentRef:
    """Where an element sits: its parent (None at top level) and index."""

    parent: Element | None
    index: int


class WidgetUpdate(BaseModel):
    """One entry of a batch widget update."""

    model_config = ConfigDict(extra="forbid")

    widget_id: str
    widget_settings: dict[str, Any] | None = None
    widget_content: Any | None = None


def children(element: Element) -> list[Element]:
    """Return the element's child list, creating it if absent."""
    kids = element.get("elements")
    if not isinstance(kids, list):
        kids = []
        element["elements"] = kids
    return kids


def make_element(
    el_type: str,
    *,
    element_id: str,
    settings: dict[str, Any] | None = None,
    widget_type: str | None = None,
) -> Element:
    """Build a new element dict in the shape Elementor stores."""
    if el_type not in ELEMENT_TYPES:
        msg = f"Unknown element type: {el_type!r}"
        raise ValueError(msg)
    element: Element = {
        "id": element_id,
        "elType": el_type,
        "isInner": False,
        "settings": dict(settings) if settings else {},
        "elements": [],
    }
    if widget_type is not None:
        element["widgetType"] = widget_type
    return element

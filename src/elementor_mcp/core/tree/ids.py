"""Element id generation."""

import copy
import random
import string

from elementor_mcp.models.element import Element

_ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 8


def generate_element_id() -> str:
    """Generate an 8-character lowercase alphanumeric id, Elementor style."""
    return "".join(random.choices(_ID_ALPHABET, k=ID_LENGTH))


def reassign_element_ids(element: Element) -> Element:
    """Return a deep copy of ``element`` with a fresh id on every node.

    The input is left untouched; settings and child order are copied verbatim.
    New ids never repeat an id of the source subtree or of each other.
    """
    clone = copy.deepcopy(element)
    used = set(_collect_ids(element))
    _reassign_in_place(clone, used)
    return clone


def _collect_ids(element: Element) -> list[str]:
    ids = [element.get("id")]
    for child in element.get("elements") or []:
        ids.extend(_collect_ids(child))
    return ids


def _reassign_in_place(element: Element, used: set[str]) -> None:
    new_id = generate_element_id()
    while new_id in used:
        new_id = generate_element_id()
    used.add(new_id)
    element["id"] = new_id
    for child in element.get("elements") or []:
        _reassign_in_place(child, used)

"""Read-only views of a page's element tree."""

from typing import Any

from elementor_mcp.core.tree.content import content_preview
from elementor_mcp.core.tree.traversal import flatten_elements
from elementor_mcp.models.element import Element


def page_structure(
    elements: list[Element], *, include_settings: bool = False, level: int = 0
) -> list[dict[str, Any]]:
    """Build a nested outline with id, type, widgetType and level per element."""
    outline: list[dict[str, Any]] = []
    for element in elements:
        node: dict[str, Any] = {
            "id": element.get("id"),
            "type": element.get("elType"),
            "widgetType": element.get("widgetType"),
            "level": level,
        }
        if include_settings and element.get("settings"):
            node["settings"] = element["settings"]
        kids = element.get("elements")
        if kids:
            node["children"] = page_structure(
                kids, include_settings=include_settings, level=level + 1
            )
        outline.append(node)
    return outline


def list_elements(
    elements: list[Element], *, include_content: bool = False
) -> list[dict[str, Any]]:
    """Flat pre-order listing with depth and an optional content preview."""
    rows: list[dict[str, Any]] = []
    for flat in flatten_elements(elements):
        element = flat.element
        row: dict[str, Any] = {
            "id": element.get("id"),
            "type": element.get("elType"),
            "level": flat.depth,
        }
        if element.get("widgetType"):
            row["widgetType"] = element["widgetType"]
            if include_content:
                preview = content_preview(element)
                if preview is not None:
                    row["contentPreview"] = preview
        rows.append(row)
    return rows


def render_outline(outline: list[dict[str, Any]]) -> str:
    """Render a page outline as an indented text tree for the CLI."""
    lines: list[str] = []
    for node in outline:
        indent = "    " * node["level"]
        label = node["type"] or "?"
        if node.get("widgetType"):
            label += f":{node['widgetType']}"
        lines.append(f"{indent}- {label}  [id={node['id']}]")
        if node.get("children"):
            lines.append(render_outline(node["children"]))
    return "\n".join(lines)

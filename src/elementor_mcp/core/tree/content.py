"""Map widget types to the settings key holding their primary content."""

from typing import Any

from elementor_mcp.models.element import Element

WIDGET_CONTENT_FIELDS: dict[str, str] = {
    "heading": "title",
    "text-editor": "editor",
    "html": "html",
    "button": "text",
    "icon-box": "title_text",
    "image-box": "title_text",
    "call-to-action": "title",
    "testimonial": "testimonial_content",
    "counter": "title",
    "progress-bar": "title",
    "tabs": "tabs",
    "accordion": "tabs",
    "toggle": "tabs",
    "alert": "alert_title",
    "price-table": "heading",
    "price-list": "price_list",
}

PREVIEW_LENGTH = 100


def get_widget_content_field(widget_type: str) -> str | None:
    """Get the settings key for a widget type's primary content, if known."""
    return WIDGET_CONTENT_FIELDS.get(widget_type)


def get_widget_content(element: Element) -> Any | None:
    """Extract the primary content from a widget, or None."""
    widget_type = element.get("widgetType")
    if not widget_type:
        return None
    field = WIDGET_CONTENT_FIELDS.get(widget_type)
    if field is None:
        return None
    return (element.get("settings") or {}).get(field)


def set_widget_content(element: Element, content: Any) -> bool:
    """Set the primary content on a widget in place.

    Returns:
        False (and leaves the element untouched) when the widget type is
        missing or unmapped, True otherwise.
    """
    widget_type = element.get("widgetType")
    if not widget_type:
        return False
    field = WIDGET_CONTENT_FIELDS.get(widget_type)
    if field is None:
        return False
    settings = element.get("settings")
    if not isinstance(settings, dict):
        settings = {}
        element["settings"] = settings
    settings[field] = content
    return True


def content_preview(element: Element, limit: int = PREVIEW_LENGTH) -> str | None:
    """Short human-readable preview of a widget's content for listings."""
    settings = element.get("settings") or {}
    widget_type = element.get("widgetType")

    if widget_type in ("heading", "text-editor", "html"):
        value = settings.get(WIDGET_CONTENT_FIELDS[widget_type])
        return str(value)[:limit] if value else None
    if widget_type == "image":
        image = settings.get("image")
        return image.get("url") if isinstance(image, dict) else None
    if widget_type == "button":
        return settings.get("text")
    return None

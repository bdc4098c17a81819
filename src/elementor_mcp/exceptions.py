"""Exception types for the WordPress client and Elementor tree operations."""


class WordPressApiError(RuntimeError):
    """A WordPress REST request failed."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ResourceNotFoundError(WordPressApiError):
    """The requested REST resource does not exist (HTTP 404)."""


class ElementorError(Exception):
    """Base class for failures while reading or editing Elementor data."""


class DocumentNotFoundError(ElementorError):
    """No post, page or template exists with the given id."""


class NoElementorDataError(ElementorError):
    """The document exists but carries no _elementor_data."""


class ElementorParseError(ElementorError):
    """The _elementor_data field is not valid JSON."""


class SaveFailedError(ElementorError):
    """Every resource kind rejected the write."""


class ElementNotFoundError(ElementorError):
    """A referenced element id does not resolve in the tree."""


class InvalidContainerError(ElementorError):
    """The resolved element cannot hold the requested children."""


class UnsupportedContentError(ElementorError):
    """The widget type has no known content field."""


class MissingElementsError(ElementorError):
    """Some ids of a reorder request are not in the expected scope."""

    def __init__(self, message: str, *, missing_ids: list[str]) -> None:
        super().__init__(message)
        self.missing_ids = missing_ids

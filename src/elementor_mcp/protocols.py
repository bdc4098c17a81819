"""Protocols for dependency injection of the WordPress client."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DocumentClientProtocol(Protocol):
    """Protocol for clients that read and write WordPress post meta."""

    def retrieve(self, resource: str, post_id: int) -> dict[str, Any]:
        """Fetch a single resource (edit context) and return its JSON.

        Raises ResourceNotFoundError when the id does not exist for this resource.
        """
        ...

    def persist(self, resource: str, post_id: int, meta: dict[str, Any]) -> dict[str, Any]:
        """Write meta fields to a single resource and return the updated JSON."""
        ...


@runtime_checkable
class RestClientProtocol(DocumentClientProtocol, Protocol):
    """Protocol for clients that also expose collection listing."""

    def list_resource(self, resource: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        """List a REST collection (posts, pages, elementor_library, ...)."""
        ...

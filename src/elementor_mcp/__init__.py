"""WordPress Elementor page editing over MCP."""

from elementor_mcp.api import WordPressApi
from elementor_mcp.core.data.store import ElementorDataStore
from elementor_mcp.protocols import DocumentClientProtocol, RestClientProtocol

__all__ = ["DocumentClientProtocol", "ElementorDataStore", "RestClientProtocol", "WordPressApi"]

"""WordPress REST API client."""

import json
import logging
from typing import Any

import requests

from elementor_mcp.config import REQUEST_TIMEOUT, WordPressSettings
from elementor_mcp.exceptions import ResourceNotFoundError, WordPressApiError


class WordPressApi:
    """Encapsulated WordPress REST API (wp/v2) with Basic auth."""

    def __init__(self, settings: WordPressSettings, *, timeout: float = REQUEST_TIMEOUT) -> None:
        self.base_url = settings.api_url
        self.timeout = timeout
        self.sess = requests.Session()
        self.sess.headers["Content-Type"] = "application/json"
        self.logger = logging.getLogger("api")

        if settings.has_credentials:
            self.sess.auth = (settings.username, settings.password)  # type: ignore[assignment]

        self.logger.debug(
            f"API ready: base_url {self.base_url!r}, authenticated {settings.has_credentials!r}"
        )

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Invoke a REST endpoint, return the decoded JSON body."""
        url = self.base_url + path.lstrip("/")
        self.logger.debug(f"Making request: {method} {url!r} params={params!r} {repr(body)[:64]}")

        r = self.sess.request(
            method,
            url,
            params=params,
            data=json.dumps(body) if body is not None else None,
            timeout=self.timeout,
        )
        self.logger.debug(f"Response: {r.status_code} {r.text[:200]!r}")

        if r.status_code == 404:
            msg = f"Not found: {method} {path!r} -> {_error_message(r)}"
            raise ResourceNotFoundError(msg, status_code=404)
        if not r.ok:
            msg = f"API call failed: {method} {path!r} -> ({r.status_code}, {_error_message(r)!r})"
            raise WordPressApiError(msg, status_code=r.status_code)
        if not r.text:
            return {}
        return r.json()

    def retrieve(self, resource: str, post_id: int) -> dict[str, Any]:
        """Fetch a single post/page/template in edit context (meta included)."""
        params = {"context": "edit"}
        rv: dict[str, Any] = self.request("GET", f"{resource}/{post_id}", params=params)
        return rv

    def persist(self, resource: str, post_id: int, meta: dict[str, Any]) -> dict[str, Any]:
        """Write meta fields to a single post/page/template."""
        rv: dict[str, Any] = self.request("POST", f"{resource}/{post_id}", body={"meta": meta})
        return rv

    def list_resource(self, resource: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        """List a REST collection."""
        rv: list[dict[str, Any]] = self.request("GET", resource, params=params)
        return rv

    def close(self) -> None:
        self.sess.close()


def _error_message(r: requests.Response) -> str:
    """Extract the WordPress error message from a response, if any."""
    try:
        data = r.json()
    except ValueError:
        return r.text[:200]
    if isinstance(data, dict) and "message" in data:
        return str(data["message"])
    return r.text[:200]

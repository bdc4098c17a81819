"""Tests for WordPressApi, the REST client."""

import json
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from elementor_mcp.api import WordPressApi
from elementor_mcp.config import WordPressSettings
from elementor_mcp.exceptions import ResourceNotFoundError, WordPressApiError

BASE_URL = "https://example.com/wp-json/wp/v2/"


@pytest.fixture
def api_with_mock_session() -> tuple[WordPressApi, MagicMock]:
    """Create a WordPressApi with a mocked requests.Session."""
    settings = WordPressSettings(api_url=BASE_URL, username="admin", password="secret")
    with patch("elementor_mcp.api.requests.Session") as mock_session_cls:
        mock_session = MagicMock()
        mock_session.headers = {}
        mock_session_cls.return_value = mock_session
        api = WordPressApi(settings)

    return api, mock_session


def _make_response(data: Any, status_code: int = 200) -> MagicMock:
    """Create a mock HTTP response with given JSON data."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = data
    response.text = json.dumps(data)
    return response


def test_init_sets_basic_auth_and_json_header(
    api_with_mock_session: tuple[WordPressApi, MagicMock],
) -> None:
    api, mock_session = api_with_mock_session
    assert mock_session.auth == ("admin", "secret")
    assert mock_session.headers["Content-Type"] == "application/json"
    assert api.base_url == BASE_URL


def test_retrieve_requests_edit_context(
    api_with_mock_session: tuple[WordPressApi, MagicMock],
) -> None:
    api, mock_session = api_with_mock_session
    mock_session.request.return_value = _make_response({"id": 42, "meta": {}})

    result = api.retrieve("pages", 42)

    assert result == {"id": 42, "meta": {}}
    mock_session.request.assert_called_once_with(
        "GET",
        BASE_URL + "pages/42",
        params={"context": "edit"},
        data=None,
        timeout=30.0,
    )


def test_persist_posts_meta_body(
    api_with_mock_session: tuple[WordPressApi, MagicMock],
) -> None:
    api, mock_session = api_with_mock_session
    mock_session.request.return_value = _make_response({"id": 7})

    api.persist("posts", 7, {"_elementor_data": "[]"})

    args, kwargs = mock_session.request.call_args
    assert args == ("POST", BASE_URL + "posts/7")
    assert json.loads(kwargs["data"]) == {"meta": {"_elementor_data": "[]"}}


def test_list_resource_passes_params(
    api_with_mock_session: tuple[WordPressApi, MagicMock],
) -> None:
    api, mock_session = api_with_mock_session
    mock_session.request.return_value = _make_response([{"id": 1}])

    assert api.list_resource("elementor_library", {"per_page": 5}) == [{"id": 1}]
    assert mock_session.request.call_args.kwargs["params"] == {"per_page": 5}


def test_404_raises_resource_not_found(
    api_with_mock_session: tuple[WordPressApi, MagicMock],
) -> None:
    api, mock_session = api_with_mock_session
    mock_session.request.return_value = _make_response(
        {"code": "rest_post_invalid_id", "message": "Invalid post ID."}, status_code=404
    )

    with pytest.raises(ResourceNotFoundError, match="Invalid post ID") as exc:
        api.retrieve("posts", 1)
    assert exc.value.status_code == 404


def test_error_status_raises_api_error(
    api_with_mock_session: tuple[WordPressApi, MagicMock],
) -> None:
    api, mock_session = api_with_mock_session
    mock_session.request.return_value = _make_response(
        {"message": "Sorry, you are not allowed to edit this post."}, status_code=403
    )

    with pytest.raises(WordPressApiError, match="API call failed") as exc:
        api.persist("posts", 1, {})
    assert exc.value.status_code == 403
    assert not isinstance(exc.value, ResourceNotFoundError)


def test_empty_body_returns_empty_dict(
    api_with_mock_session: tuple[WordPressApi, MagicMock],
) -> None:
    api, mock_session = api_with_mock_session
    response = _make_response(None)
    response.text = ""
    mock_session.request.return_value = response

    assert api.request("POST", "posts/1") == {}


def test_close_closes_session(
    api_with_mock_session: tuple[WordPressApi, MagicMock],
) -> None:
    api, mock_session = api_with_mock_session

    api.close()

    mock_session.close.assert_called_once_with()

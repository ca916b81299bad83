"""Tests for wren.http.request — mutable request model."""

from typing import Any

from wren.http.request import Request


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope dict."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": "/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


def _receive_chunks(*chunks: bytes):
    messages = [
        {"type": "http.request", "body": chunk, "more_body": i < len(chunks) - 1}
        for i, chunk in enumerate(chunks)
    ]

    async def receive() -> dict[str, Any]:
        return messages.pop(0)

    return receive


class TestFromUrl:
    def test_path_left_unset(self) -> None:
        request = Request.from_url("http://localhost/users/42?tab=posts")
        assert request.path is None
        assert request.url_path == "/users/42"
        assert request.query_string == b"tab=posts"

    def test_method_and_headers(self) -> None:
        request = Request.from_url(
            "http://localhost/", method="post", headers={"X-Role": "admin"}
        )
        assert request.method == "POST"
        assert request.headers.get("x-role") == "admin"

    def test_non_ascii_query_is_percent_encoded(self) -> None:
        request = Request.from_url("http://localhost/search?q=日本&page=2")
        assert request.query_string == b"q=%E6%97%A5%E6%9C%AC&page=2"
        assert request.url_path == "/search"

    def test_non_latin1_header(self) -> None:
        request = Request.from_url("http://localhost/", headers={"X-Currency": "€"})
        assert request.headers.get("x-currency") == "€"

    async def test_non_ascii_query_reaches_stack(self) -> None:
        from wren.middleware.stack import middleware_stack, pipe

        stack = middleware_stack([pipe("/search", lambda req: req.query_string)])
        result = await stack(Request.from_url("http://localhost/search?q=日本"))
        assert result == b"q=%E6%97%A5%E6%9C%AC"

    async def test_empty_body(self) -> None:
        assert await Request.from_url("http://localhost/").body() == b""


class TestFromAsgi:
    def test_basic(self) -> None:
        scope = _make_scope(method="POST", path="/users/42", query_string=b"a=1")
        request = Request.from_asgi(scope, _receive_chunks(b""))

        assert request.method == "POST"
        assert request.path == "/users/42"
        assert request.url == "http://localhost:8000/users/42?a=1"

    def test_headers(self) -> None:
        scope = _make_scope(headers=[(b"content-type", b"application/json")])
        request = Request.from_asgi(scope, _receive_chunks(b""))
        assert request.content_type == "application/json"

    def test_no_server(self) -> None:
        scope = _make_scope(server=None, path="/x")
        request = Request.from_asgi(scope, _receive_chunks(b""))
        assert request.url == "http://localhost/x"


class TestMutation:
    def test_path_is_writable(self) -> None:
        request = Request.from_url("http://localhost/old")
        request.path = "/new"
        assert request.path == "/new"
        assert request.url_path == "/old"


class TestBody:
    async def test_chunks_joined_and_cached(self) -> None:
        request = Request.from_asgi(_make_scope(), _receive_chunks(b"hel", b"lo"))
        assert await request.body() == b"hello"
        # receive is exhausted; the cached value is returned
        assert await request.body() == b"hello"

    async def test_text(self) -> None:
        request = Request.from_asgi(_make_scope(), _receive_chunks("héllo".encode()))
        assert await request.text() == "héllo"

    async def test_json(self) -> None:
        request = Request.from_asgi(_make_scope(), _receive_chunks(b'{"a": [1, 2]}'))
        assert await request.json() == {"a": [1, 2]}

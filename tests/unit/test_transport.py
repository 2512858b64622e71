import httpx
import pytest

from pytest_httpspec import ConfigurationError, CookieJar, HttpxTransport, SendOptions, TransportError
from pytest_httpspec.transport import build_request_kwargs, build_response, decode_body


class TestBuildRequestKwargs:
    def test_defaults(self):
        kwargs = build_request_kwargs(SendOptions(method="get", url="http://x/"))

        assert kwargs["method"] == "GET"
        assert kwargs["timeout"] == 3.0
        assert kwargs["follow_redirects"] is False
        assert "content" not in kwargs
        assert "json" not in kwargs

    def test_cookie_header_from_jar(self):
        options = SendOptions(method="GET", url="http://x/", cookie_jar=CookieJar({"sid": "abc"}))

        assert build_request_kwargs(options)["headers"]["Cookie"] == "sid=abc"

    def test_cookie_header_appended_to_existing(self):
        options = SendOptions(
            method="GET",
            url="http://x/",
            headers={"Cookie": "theme=dark"},
            cookie_jar=CookieJar({"sid": "abc"}),
        )

        assert build_request_kwargs(options)["headers"]["Cookie"] == "theme=dark; sid=abc"

    def test_json_mode(self):
        options = SendOptions(method="POST", url="http://x/", body={"a": 1}, json_mode=True)
        kwargs = build_request_kwargs(options)

        assert kwargs["json"] == {"a": 1}
        assert kwargs["headers"]["Accept"] == "application/json"

    def test_text_body(self):
        kwargs = build_request_kwargs(SendOptions(method="POST", url="http://x/", body="raw"))

        assert kwargs["content"] == "raw"

    def test_form_body(self):
        kwargs = build_request_kwargs(SendOptions(method="POST", url="http://x/", body={"a": "1"}))

        assert kwargs["data"] == {"a": "1"}

    def test_unsupported_body_without_json_mode(self):
        with pytest.raises(ConfigurationError, match="requires json mode"):
            build_request_kwargs(SendOptions(method="POST", url="http://x/", body=[1, 2]))


class TestDecodeBody:
    def test_json_mode_parses(self):
        assert decode_body(httpx.Response(200, json={"a": 1}), json_mode=True) == {"a": 1}

    def test_json_mode_invalid_json_falls_back_to_text(self):
        assert decode_body(httpx.Response(200, content=b"not json"), json_mode=True) == "not json"

    def test_text_mode(self):
        assert decode_body(httpx.Response(200, text="plain"), json_mode=False) == "plain"

    def test_build_response_snapshots_jar(self):
        jar = CookieJar({"sid": "abc"})
        response = build_response(httpx.Response(204), json_mode=False, cookie_jar=jar)
        jar["later"] = "1"

        assert response.status_code == 204
        assert response.cookies == {"sid": "abc"}


class TestHttpxTransport:
    def test_sends_request(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(201, text="created")

        transport = HttpxTransport(httpx.MockTransport(handler))
        response = transport.send(SendOptions(method="PUT", url="http://x/items/1", body="payload", headers={"a": "1"}))

        assert response.status_code == 201
        assert seen[0].method == "PUT"
        assert seen[0].headers["a"] == "1"
        assert seen[0].content == b"payload"

    def test_timeout_mapped(self):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        with pytest.raises(TransportError, match="timed out") as exc_info:
            HttpxTransport(httpx.MockTransport(handler)).send(SendOptions(method="GET", url="http://x/"))

        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)

    def test_connection_error_mapped(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(TransportError, match="connection error"):
            HttpxTransport(httpx.MockTransport(handler)).send(SendOptions(method="GET", url="http://x/"))

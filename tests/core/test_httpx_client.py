import logging
import httpx
import pytest

from graph_connectors.core.exceptions import NetworkOrServerError
from graph_connectors.core.httpx_client import HTTPClient
from graph_connectors.core.logger import get_logger, mask_token
from graph_connectors.core.utils import append_query, decode_query, encode_query


@pytest.mark.asyncio
class TestHTTPClient:

    async def test_does_not_follow_redirects(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(302, headers={"location": "http://cdn.test/pic.jpg", "content-type": "image/jpeg"})

        async with HTTPClient(transport=httpx.MockTransport(handler)) as http:
            response = await http.request("GET", "https://graph.example.test/zuck/picture")

        assert response.status == 302
        assert response.location == "http://cdn.test/pic.jpg"
        assert response.content_type == "image/jpeg"

    async def test_decodes_utf8_and_sends_form_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["body"] = request.content
            seen["content_type"] = request.headers.get("content-type")
            return httpx.Response(200, content='{"name": "Zoé"}'.encode("utf-8"),
                                  headers={"content-type": "application/json"})

        async with HTTPClient(transport=httpx.MockTransport(handler)) as http:
            response = await http.request("POST", "https://graph.example.test/me/feed", body="message=hi")

        assert response.body == '{"name": "Zoé"}'
        assert seen == {"method": "POST", "body": b"message=hi",
                        "content_type": "application/x-www-form-urlencoded"}

    async def test_error_status_is_returned(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": {"message": "bad"}})

        async with HTTPClient(transport=httpx.MockTransport(handler)) as http:
            response = await http.request("GET", "https://graph.example.test/me")

        assert response.status == 400
        assert "bad" in response.body

    async def test_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with HTTPClient(transport=httpx.MockTransport(handler)) as http:
            with pytest.raises(NetworkOrServerError) as exc_info:
                await http.request("GET", "https://graph.example.test/me")

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    async def test_invalid_url_is_a_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"id": "4"})

        async with HTTPClient(transport=httpx.MockTransport(handler)) as http:
            with pytest.raises(NetworkOrServerError) as exc_info:
                await http.request("GET", "https://graph.example.test/me\x01")

        assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)


class TestQueryHelpers:

    def test_encode_mapping(self):
        assert encode_query({"fields": "id", "limit": 5}) == "fields=id&limit=5"

    def test_encode_list_repeats_key(self):
        assert encode_query({"ids": ["1", "2"]}) == "ids=1&ids=2"

    def test_encode_nested_mapping_as_json(self):
        assert decode_query(encode_query({"q": {"a": "b"}})) == {"q": '{"a": "b"}'}

    def test_encode_empty(self):
        assert encode_query(None) == ""
        assert encode_query({}) == ""

    def test_append_query(self):
        assert append_query("me", {"a": "1"}) == "me?a=1"
        assert append_query("me?x=2", {"a": "1"}) == "me?x=2&a=1"
        assert append_query("me", None) == "me"

    def test_decode_strips_question_mark(self):
        assert decode_query("?foo=bar") == {"foo": "bar"}

    def test_mask_token(self):
        assert mask_token("https://h/me?access_token=SECRET&x=1") == "https://h/me?access_token=***&x=1"
        assert mask_token("https://h/me") == "https://h/me"


class TestLogger:

    def test_module_loggers_share_package_handler(self):
        client_logger = get_logger("graph_connectors.graph.api_client")
        outside_logger = get_logger("scripts.demo")

        assert client_logger.name == "graph_connectors.graph.api_client"
        assert outside_logger.name == "graph_connectors.scripts.demo"
        assert len(logging.getLogger("graph_connectors").handlers) == 1
        assert not client_logger.handlers

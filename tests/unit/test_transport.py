"""Tests for the httpx-backed transport."""

import httpx
import pytest

from groupme_utils import USER_AGENT
from groupme_utils.core.client import HttpxTransport, TransportError

URL = "https://api.groupme.com/v3/groups?token=abc"


def make_transport(handler, **kwargs) -> HttpxTransport:
    client = httpx.Client(transport=httpx.MockTransport(handler), headers={"User-Agent": USER_AGENT})
    return HttpxTransport(client=client, **kwargs)


class TestHttpxTransport:
    """Test cases for HttpxTransport."""

    def test_get_returns_body_and_status(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b'{"response": []}')

        response = make_transport(handler).get(URL)

        assert response.status_code == 200
        assert response.content == b'{"response": []}'
        assert response.is_success
        assert seen[0].method == "GET"
        assert seen[0].url.params["token"] == "abc"
        assert seen[0].headers["User-Agent"] == USER_AGENT

    def test_post_sends_no_body(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        make_transport(handler).post("https://api.groupme.com/v3/messages/1/2/like?token=abc")

        assert seen[0].method == "POST"
        assert seen[0].content == b""

    def test_error_status_returned_by_default(self):
        transport = make_transport(lambda request: httpx.Response(404, content=b""))

        response = transport.get(URL)

        assert response.status_code == 404
        assert not response.is_success

    def test_error_status_raises_when_requested(self):
        transport = make_transport(lambda request: httpx.Response(401), raise_for_status=True)

        with pytest.raises(TransportError) as exc_info:
            transport.get(URL)

        assert exc_info.value.status == 401
        assert "token=***" in exc_info.value.details["url"]

    def test_connection_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            make_transport(handler).get(URL)

        assert isinstance(exc_info.value.original_error, httpx.ConnectError)
        assert "abc" not in str(exc_info.value)

    def test_supplied_client_not_closed(self):
        client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
        with HttpxTransport(client=client):
            pass
        assert not client.is_closed

    def test_own_client_closed(self):
        transport = HttpxTransport(timeout=5)
        transport.close()
        assert transport._client.is_closed

import json

import httpx
import pytest

from ethrpc.client import ValidationCloudClient
from ethrpc.config import ClientConfig

API_KEY = "test-key"


@pytest.fixture
def config():
    return ClientConfig(api_key=API_KEY)


@pytest.fixture
def make_client(config):
    """Build a client whose HTTP traffic goes to `handler` instead of the network."""

    def _make(handler, cfg=None):
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return ValidationCloudClient(cfg or config, http_client=http)

    return _make


@pytest.fixture
def rpc_result():
    """Return a MockTransport handler that answers every call with `result`.

    Each request seen by the handler is appended to `handler.requests`.
    """

    def _factory(result):
        def handler(request: httpx.Request) -> httpx.Response:
            handler.requests.append(request)
            body = json.loads(request.content)
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})

        handler.requests = []
        return handler

    return _factory

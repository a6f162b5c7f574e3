import asyncio
import json
import logging

import httpx
import pytest

from ethrpc.client import ValidationCloudClient
from ethrpc.config import ClientConfig
from ethrpc.errors import ApiError, ConfigError
from ethrpc.models import EthereumErrorCode

ADDRESS = "0x742d35Cc6634C0532925a3b844Bc454e4438f44e"


def _never_called(request):
    raise AssertionError(f"unexpected HTTP call to {request.url}")


def test_constructor_requires_api_key():
    with pytest.raises(ConfigError, match="API key is required"):
        ValidationCloudClient(ClientConfig(api_key=""))


@pytest.mark.asyncio
async def test_block_number_is_normalized(make_client, rpc_result):
    client = make_client(rpc_result("0x1234"))
    response = await client.request("eth_blockNumber")
    assert response.result == 4660
    assert response.error is None


@pytest.mark.asyncio
async def test_get_balance_is_normalized(make_client, rpc_result):
    client = make_client(rpc_result("0xde0b6b3a7640000"))
    response = await client.request("eth_getBalance", [ADDRESS, "latest"])
    assert response.result == {"wei": "1000000000000000000", "ether": "1"}


@pytest.mark.asyncio
async def test_envelope_url_and_headers(make_client, rpc_result):
    handler = rpc_result("0x1")
    client = make_client(handler)
    await client.request("eth_getBalance", [ADDRESS, "latest"])

    (sent,) = handler.requests
    assert sent.method == "POST"
    assert str(sent.url) == "https://mainnet.ethereum.validationcloud.io/v1/test-key"
    assert sent.headers["content-type"] == "application/json"
    body = json.loads(sent.content)
    assert body == {"jsonrpc": "2.0", "id": body["id"], "method": "eth_getBalance", "params": [ADDRESS, "latest"]}
    assert isinstance(body["id"], int)


@pytest.mark.asyncio
async def test_params_default_to_empty_list(make_client, rpc_result):
    handler = rpc_result("0x1")
    client = make_client(handler)
    await client.request("eth_blockNumber")
    assert json.loads(handler.requests[0].content)["params"] == []


@pytest.mark.asyncio
async def test_custom_base_url(make_client, rpc_result):
    handler = rpc_result("0x1")
    cfg = ClientConfig(api_key="k", base_url="https://sepolia.example.io/v1/")
    client = make_client(handler, cfg)
    await client.request("eth_blockNumber")
    assert str(handler.requests[0].url) == "https://sepolia.example.io/v1/k"


@pytest.mark.asyncio
async def test_request_ids_are_unique_and_per_client(make_client, rpc_result):
    handler = rpc_result("0x1")
    client = make_client(handler)
    await asyncio.gather(*(client.request("eth_blockNumber") for _ in range(5)))
    ids = [json.loads(r.content)["id"] for r in handler.requests]
    assert sorted(ids) == [1, 2, 3, 4, 5]

    other_handler = rpc_result("0x1")
    other = make_client(other_handler)
    await other.request("eth_blockNumber")
    assert json.loads(other_handler.requests[0].content)["id"] == 1


@pytest.mark.asyncio
async def test_unknown_method_result_passes_through(make_client, rpc_result):
    client = make_client(rpc_result({"anything": "0xff"}))
    response = await client.request("debug_traceTransaction", ["0xabc", {}])
    assert response.result == {"anything": "0xff"}


@pytest.mark.asyncio
async def test_validation_fails_before_any_io(make_client):
    client = make_client(_never_called)
    with pytest.raises(ApiError, match="Invalid address parameter") as exc_info:
        await client.request("eth_getBalance", ["invalid-address", "latest"])
    assert exc_info.value.code == EthereumErrorCode.INVALID_PARAMS

    with pytest.raises(ApiError, match="eth_getBalance requires address and block parameters"):
        await client.request("eth_getBalance", [ADDRESS])
    with pytest.raises(ApiError, match="Invalid transaction hash parameter"):
        await client.request("eth_getTransactionByHash", ["invalid-hash"])
    with pytest.raises(ApiError, match="eth_getLogs requires a filter object parameter"):
        await client.request("eth_getLogs", ["invalid-filter"])


@pytest.mark.asyncio
async def test_empty_method_is_rejected(make_client):
    client = make_client(_never_called)
    with pytest.raises(ApiError, match="method must be a non-empty string"):
        await client.request("")


@pytest.mark.asyncio
async def test_rpc_error_object_is_returned_not_raised(make_client):
    def handler(request):
        body = json.loads(request.content)
        return httpx.Response(
            200,
            json={"jsonrpc": "2.0", "id": body["id"], "error": {"code": -32601, "message": "the method foo does not exist"}},
        )

    client = make_client(handler)
    response = await client.request("foo")
    assert response.result is None
    assert response.error.code == -32601
    assert response.error.message == "the method foo does not exist"
    assert response.to_dict()["error"] == {"code": -32601, "message": "the method foo does not exist"}
    assert "result" not in response.to_dict()


@pytest.mark.asyncio
async def test_null_result_is_kept(make_client, rpc_result):
    client = make_client(rpc_result(None))
    response = await client.request("eth_getTransactionReceipt", ["0xabc"])
    assert response.result is None
    assert response.to_dict()["result"] is None


@pytest.mark.asyncio
async def test_http_error_uses_body_message_and_status(make_client):
    client = make_client(lambda request: httpx.Response(400, json={"message": "Invalid request"}))
    with pytest.raises(ApiError) as exc_info:
        await client.request("eth_blockNumber")
    err = exc_info.value
    assert err.message == "Invalid request"
    assert err.code == 400
    assert err.details == {"message": "Invalid request"}


@pytest.mark.asyncio
async def test_http_error_uses_jsonrpc_error_from_body(make_client):
    body = {"jsonrpc": "2.0", "id": 1, "error": {"code": -32005, "message": "rate limited"}}
    client = make_client(lambda request: httpx.Response(429, json=body))
    with pytest.raises(ApiError) as exc_info:
        await client.request("eth_blockNumber")
    assert exc_info.value.message == "rate limited"
    assert exc_info.value.code == -32005


@pytest.mark.asyncio
async def test_http_error_without_json_body_falls_back_and_hides_key(make_client):
    client = make_client(lambda request: httpx.Response(503, text="upstream down"))
    with pytest.raises(ApiError) as exc_info:
        await client.request("eth_blockNumber")
    err = exc_info.value
    assert err.code == 503
    assert "503" in err.message
    assert "test-key" not in err.message
    assert err.details == {"body": "upstream down"}


@pytest.mark.asyncio
async def test_network_error_has_no_code(make_client):
    def handler(request):
        raise httpx.ConnectError("Network error", request=request)

    client = make_client(handler)
    with pytest.raises(ApiError, match="Network error") as exc_info:
        await client.request("eth_blockNumber")
    assert exc_info.value.code is None


@pytest.mark.asyncio
async def test_timeout_is_a_transport_error(make_client):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    client = make_client(handler)
    with pytest.raises(ApiError, match="timed out") as exc_info:
        await client.request("eth_blockNumber")
    assert exc_info.value.code is None


@pytest.mark.asyncio
async def test_invalid_json_body(make_client):
    client = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(ApiError, match="Invalid JSON in RPC response") as exc_info:
        await client.request("eth_blockNumber")
    assert exc_info.value.code == EthereumErrorCode.PARSE_ERROR


@pytest.mark.asyncio
async def test_unexpected_error_is_wrapped(make_client):
    def handler(request):
        raise RuntimeError()

    client = make_client(handler)
    with pytest.raises(ApiError, match="Unknown error") as exc_info:
        await client.request("eth_blockNumber")
    assert isinstance(exc_info.value.__cause__, RuntimeError)


@pytest.mark.asyncio
async def test_unexpected_error_keeps_its_message(make_client):
    def handler(request):
        raise RuntimeError("boom")

    client = make_client(handler)
    with pytest.raises(ApiError, match="boom"):
        await client.request("eth_blockNumber")


@pytest.mark.asyncio
async def test_connection_success(make_client, rpc_result):
    handler = rpc_result("0x1")
    client = make_client(handler)
    assert await client.test_connection() is True
    assert json.loads(handler.requests[0].content)["method"] == "eth_blockNumber"


@pytest.mark.asyncio
async def test_connection_failure_returns_false(make_client):
    def handler(request):
        raise httpx.ConnectError("Connection failed", request=request)

    client = make_client(handler)
    assert await client.test_connection() is False


@pytest.mark.asyncio
async def test_connection_http_failure_returns_false(make_client):
    client = make_client(lambda request: httpx.Response(401, json={"message": "bad key"}))
    assert await client.test_connection() is False


@pytest.mark.asyncio
async def test_injected_http_client_is_not_closed(config, rpc_result):
    http = httpx.AsyncClient(transport=httpx.MockTransport(rpc_result("0x1")))
    async with ValidationCloudClient(config, http_client=http) as client:
        await client.request("eth_blockNumber")
    assert not http.is_closed
    await http.aclose()


def test_logger_is_injectable_and_key_is_hidden(config, caplog):
    log = logging.getLogger("test.validation_cloud")
    with caplog.at_level(logging.INFO, logger="test.validation_cloud"):
        ValidationCloudClient(config, logger=log)
    assert "[HIDDEN]" in caplog.text
    assert "test-key" not in caplog.text

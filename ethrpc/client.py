# =============================================================================
# ethrpc/client.py  -  Validation Cloud JSON-RPC client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Runs one Ethereum JSON-RPC call end to end:
#
#     validate_params  ->  build envelope  ->  POST  ->  normalize_result
#
#   and turns EVERY failure on the way into an ApiError.
#
# ONE SHOT:
#   Each request() issues exactly one POST.  There is no retry and no
#   backoff; a failed POST fails the call.  Timeouts are enforced by httpx
#   and arrive here as ordinary transport errors.
#
# STATE:
#   The only thing that survives between calls is the request-id counter,
#   and it belongs to the client instance.  Ids are monotonic per client,
#   starting at 1.  Everything else (envelope, response, normalized result)
#   is owned by the call that made it, so concurrent calls need no locking.
#
# ERROR MAPPING:
#   HTTP error status   ->  message/code from the body if it has them,
#                           else httpx's message and the HTTP status
#   no response at all  ->  the exception's message, code None
#   non-JSON body       ->  "Invalid JSON in RPC response" (PARSE_ERROR)
#   anything else       ->  its message, or "Unknown error"
#
#   A JSON-RPC `error` inside a 200 response is NOT raised: it is returned
#   in RpcResponse.error for the caller to inspect.
# =============================================================================

import itertools
import logging
from typing import Any, Optional

import httpx

from ethrpc.config import ClientConfig
from ethrpc.errors import ApiError
from ethrpc.models import EthereumErrorCode, RpcEnvelope, RpcRequest, RpcResponse
from ethrpc.normalizer import normalize_result
from ethrpc.validator import validate_params

_HEADERS = {"Content-Type": "application/json"}


class ValidationCloudClient:
    """Async client for the Validation Cloud Ethereum endpoint.

    Usage:
        async with ValidationCloudClient(ClientConfig(api_key="...")) as client:
            response = await client.request("eth_blockNumber")
            print(response.result)   # already a decimal int

    Args:
        config: Endpoint, API key and timeout.
        http_client: An httpx.AsyncClient to send through.  When given, the
            caller owns it and aclose() leaves it open.
        logger: Where diagnostics go; defaults to this module's logger.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config
        self._log = logger or logging.getLogger(__name__)
        self._http = http_client
        self._owns_http = http_client is None
        self._ids = itertools.count(1)

        self._log.info(
            f"Initializing client: endpoint={config.redacted_endpoint} "
            f"timeout_ms={config.timeout_ms}"
        )

    async def __aenter__(self) -> "ValidationCloudClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _get_http(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout_seconds),
                headers=_HEADERS,
            )
        return self._http

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    def _redact(self, text: str) -> str:
        return text.replace(self.config.api_key, "[HIDDEN]")

    def build_envelope(self, method: str, params: Optional[list] = None) -> RpcEnvelope:
        """Wrap method+params in a JSON-RPC 2.0 envelope with a fresh id."""
        return RpcEnvelope(id=next(self._ids), method=method, params=list(params or []))

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------
    async def request(self, method: str, params: Optional[list] = None) -> RpcResponse:
        """Make one JSON-RPC call and return the response with its result normalized.

        Args:
            method: JSON-RPC method, e.g. "eth_getBalance".
            params: Positional params; defaults to [].

        Returns:
            The node's RpcResponse.  `result` has been passed through
            normalize_result(); `error` is the node's error object, if any.

        Raises:
            ApiError: On invalid params (before any I/O) or any failure to
                get a JSON-RPC response from the endpoint.
        """
        rpc = RpcRequest(method=method, params=list(params) if params is not None else [])
        self._log.debug(f"Request: method={rpc.method} params={rpc.params}")

        validate_params(rpc.method, rpc.params)
        envelope = self.build_envelope(rpc.method, rpc.params)

        try:
            response = await self._send(envelope)
        except ApiError as exc:
            self._log.warning(f"Request {envelope.id} ({rpc.method}) failed: {exc.message} (code={exc.code})")
            raise
        except Exception as exc:
            self._log.error(f"Request {envelope.id} ({rpc.method}) failed unexpectedly: {exc!r}")
            raise ApiError(self._redact(str(exc)) or "Unknown error") from exc

        if response.result is not None:
            response.result = normalize_result(rpc.method, response.result)
        if response.error is not None:
            self._log.info(
                f"Request {envelope.id} ({rpc.method}) returned RPC error "
                f"{response.error.code}: {response.error.message}"
            )
        self._log.debug(f"Response {envelope.id}: {response.to_dict()}")
        return response

    async def test_connection(self) -> bool:
        """Return True if an eth_blockNumber call succeeds, False otherwise.

        For liveness checks only: the failure reason is logged, not returned.
        """
        self._log.info("Testing connection...")
        try:
            await self.request("eth_blockNumber")
        except ApiError as exc:
            self._log.warning(f"Connection test failed: {exc.message}")
            return False
        self._log.info("Connection test successful")
        return True

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------
    async def _send(self, envelope: RpcEnvelope) -> RpcResponse:
        body = envelope.to_dict()
        self._log.debug(f"POST {self.config.redacted_endpoint} body={body}")

        try:
            resp = await self._get_http().post(
                self.config.endpoint,
                json=body,
                headers=_HEADERS,
                timeout=self.config.timeout_seconds,
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise self._error_from_status(exc) from exc
        except httpx.RequestError as exc:
            raise ApiError(self._redact(str(exc)) or type(exc).__name__) from exc

        self._log.debug(f"Received HTTP {resp.status_code}")
        try:
            data = resp.json()
        except ValueError as exc:
            raise ApiError(
                "Invalid JSON in RPC response",
                EthereumErrorCode.PARSE_ERROR,
                {"body": resp.text},
            ) from exc
        if not isinstance(data, dict):
            raise ApiError(
                "Unexpected JSON-RPC response (not an object)",
                EthereumErrorCode.PARSE_ERROR,
                {"body": data},
            )
        return RpcResponse.from_dict(data)

    def _error_from_status(self, exc: httpx.HTTPStatusError) -> ApiError:
        response = exc.response
        try:
            body = response.json()
        except ValueError:
            body = None

        message = None
        code = None
        if isinstance(body, dict):
            message = body.get("message")
            rpc_error = body.get("error")
            if isinstance(rpc_error, dict):
                message = message or rpc_error.get("message")
                if isinstance(rpc_error.get("code"), int):
                    code = rpc_error["code"]
            details = body
        else:
            details = {"body": response.text} if response.text else None

        return ApiError(
            str(message) if message else self._redact(str(exc)),
            code if code is not None else response.status_code,
            details,
        )

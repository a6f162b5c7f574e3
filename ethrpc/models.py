# =============================================================================
# ethrpc/models.py  -  Data Models (the "nouns" of a JSON-RPC call)
# =============================================================================
#
# Every object here lives for exactly one call: it is built, handed down the
# validate -> send -> normalize pipeline, and dropped.  Nothing is persisted
# and nothing is shared between calls.
#
# WIRE NAMES vs PYTHON NAMES:
#   The dataclasses use the JSON-RPC 2.0 field names ("jsonrpc", "id",
#   "method", "params", "result", "error") so that to_dict() is a plain
#   field dump and the logs read the same as the wire.
# =============================================================================

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional

from ethrpc.errors import ApiError

JSONRPC_VERSION = "2.0"


# -----------------------------------------------------------------------------
# EthereumErrorCode  -  standard JSON-RPC error codes
# -----------------------------------------------------------------------------
class EthereumErrorCode(IntEnum):
    """Standard JSON-RPC 2.0 error codes used by Ethereum nodes."""

    PARSE_ERROR = -32700               # Invalid JSON was received
    INVALID_REQUEST = -32600           # Not a valid request object
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602            # Raised locally by the validator
    INTERNAL_ERROR = -32603
    SERVER_ERROR = -32000              # Generic node-side failure


# -----------------------------------------------------------------------------
# KNOWN_METHODS  -  the methods the tool description advertises
# -----------------------------------------------------------------------------
# This is documentation for the agent, not an allow-list: any method string
# is forwarded to the node.
# -----------------------------------------------------------------------------
KNOWN_METHODS: dict[str, str] = {
    "eth_blockNumber": "[]",
    "eth_getBalance": "[address, block]",
    "eth_getTransactionByHash": "[txHash]",
    "eth_getBlockByNumber": "[block, includeTransactions]",
    "eth_getBlockByHash": "[blockHash, includeTransactions]",
    "eth_getTransactionReceipt": "[txHash]",
    "eth_getCode": "[address, block]",
    "net_version": "[]",
    "eth_gasPrice": "[]",
    "eth_getLogs": "[{fromBlock?, toBlock?, address?, topics?}]",
    "eth_sendRawTransaction": "[signedTransactionData]",
    "eth_call": "[{from?, to, gas?, gasPrice?, value?, data?}, block]",
    "eth_estimateGas": "[{from?, to?, gas?, gasPrice?, value?, data?}]",
    "eth_getTransactionCount": "[address, block]",
}


@dataclass
class RpcRequest:
    """A method name plus its positional params, as received from the caller."""

    method: str
    params: list = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.method, str) or not self.method.strip():
            raise ApiError(
                "method must be a non-empty string",
                EthereumErrorCode.INVALID_PARAMS,
            )
        if self.params is None:
            self.params = []


@dataclass
class RpcEnvelope:
    """The JSON-RPC 2.0 request body sent to the node.  Built fresh per call."""

    id: int
    method: str
    params: list = field(default_factory=list)
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict:
        return {
            "jsonrpc": self.jsonrpc,
            "id": self.id,
            "method": self.method,
            "params": self.params,
        }


@dataclass
class RpcErrorObject:
    """The `error` member of a JSON-RPC response."""

    code: int
    message: str
    data: Any = None

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["RpcErrorObject"]:
        if raw is None:
            return None
        if not isinstance(raw, dict):
            # Some gateways put a bare string here.
            return cls(code=EthereumErrorCode.SERVER_ERROR, message=str(raw))
        code = raw.get("code")
        return cls(
            code=code if isinstance(code, int) else EthereumErrorCode.SERVER_ERROR,
            message=str(raw.get("message", "")),
            data=raw.get("data"),
        )

    def to_dict(self) -> dict:
        out: dict[str, Any] = {"code": int(self.code), "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out


@dataclass
class RpcResponse:
    """A JSON-RPC response as returned by the node.

    The node is trusted to populate exactly one of `result` / `error`, but
    nothing here enforces it: both are optional and null-checked.
    """

    id: Any
    jsonrpc: str = JSONRPC_VERSION
    result: Any = None
    error: Optional[RpcErrorObject] = None

    @classmethod
    def from_dict(cls, raw: dict) -> "RpcResponse":
        return cls(
            id=raw.get("id"),
            jsonrpc=raw.get("jsonrpc", JSONRPC_VERSION),
            result=raw.get("result"),
            error=RpcErrorObject.from_dict(raw.get("error")),
        )

    def to_dict(self) -> dict:
        out: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            out["error"] = self.error.to_dict()
        else:
            out["result"] = self.result
        return out

# =============================================================================
# mcp_tools/mcp_server.py  -  FastMCP Tool Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the Ethereum JSON-RPC client to an agent host as MCP tools.
#   Each tool is a thin wrapper around ethrpc/: it logs, calls the client,
#   and turns the result into something MCP can carry.
#
# TOOLS:
#   ethereum_request   Make any Ethereum JSON-RPC call.  Numbers in the
#                      result come back as decimals.
#   check_connection   Liveness check: {"connected": true|false}.
#
# ERRORS:
#   - Wrong argument types (no method, method not a string, params not a
#     list) are rejected by FastMCP's argument validation before our code
#     runs.
#   - An ApiError from the client (bad params, node/HTTP/network failure)
#     becomes a ToolError, which the host receives as an error RESULT
#     carrying "Validation Cloud API error: <message>".
#   - Any other exception is not caught here.
#
# RUNNING THIS SERVER:
#   Normally started through main.py (loads .env, checks config).  It can
#   also be run directly:  python -m mcp_tools.mcp_server
# =============================================================================

import json
import logging
import sys
from typing import Any, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

# The tools layer depends on ethrpc/ and nothing else of ours.
from ethrpc.client import ValidationCloudClient
from ethrpc.config import load_config
from ethrpc.errors import ApiError
from ethrpc.models import KNOWN_METHODS

# =============================================================================
# Logging
# =============================================================================
# stdout is the MCP transport, so every log line goes to STDERR.
#   CYAN    incoming tool calls
#   GREEN   tool responses
#   YELLOW  status lines in between
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Send log output to stderr at the given level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    """Log the tool response as compact JSON, then return it."""
    logger.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(result, separators=(',', ':'))}{_RESET}")
    return result


# =============================================================================
# Client
# =============================================================================
# One client per server process, built from the environment on first use
# unless main.py has already installed one.
# =============================================================================
_client: Optional[ValidationCloudClient] = None


def set_client(client: Optional[ValidationCloudClient]) -> None:
    global _client
    _client = client


def get_client() -> ValidationCloudClient:
    """Return the process-wide client, creating it from env vars if needed.

    Raises:
        ConfigError: If VALIDATION_CLOUD_API_KEY is not set.
    """
    global _client
    if _client is None:
        _client = ValidationCloudClient(load_config())
    return _client


# =============================================================================
# FastMCP server instance
# =============================================================================
mcp = FastMCP("validation-cloud-server")

_METHOD_LINES = "\n".join(f"  - {name} {shape}" for name, shape in KNOWN_METHODS.items())

ETHEREUM_REQUEST_DESCRIPTION = f"""Make Ethereum JSON-RPC requests using Validation Cloud.

Pass the JSON-RPC method name and its positional params exactly as the
Ethereum JSON-RPC API defines them.  Any method is accepted; common ones:
{_METHOD_LINES}

Hex-encoded numbers in the result are converted to decimals:
  - eth_blockNumber, eth_gasPrice, eth_estimateGas -> integer
  - eth_getBalance -> {{"wei": "<decimal string>", "ether": "<decimal string>"}}
  - blocks, transactions and receipts -> numeric fields as integers,
    `value` as a {{wei, ether}} pair
Other methods return the node's result unchanged.

Returns the JSON-RPC response: {{"jsonrpc", "id", "result"}} or
{{"jsonrpc", "id", "error": {{"code", "message"}}}}.
"""


# =============================================================================
# TOOL 1: ethereum_request
# =============================================================================
@mcp.tool(name="ethereum_request", description=ETHEREUM_REQUEST_DESCRIPTION)
async def ethereum_request(method: str, params: Optional[list[Any]] = None) -> dict:
    _log_request("ethereum_request", method=method, params=params)

    if not method.strip():
        raise ToolError("Method must be a non-empty string")

    try:
        response = await get_client().request(method, params or [])
    except ApiError as exc:
        _log_status(f"API error: {exc.message} (code={exc.code})")
        raise ToolError(f"Validation Cloud API error: {exc.message}") from exc

    if response.error is not None:
        _log_status(f"Node returned error {response.error.code}")
    return _log_response("ethereum_request", response.to_dict())


# =============================================================================
# TOOL 2: check_connection
# =============================================================================
@mcp.tool(name="check_connection")
async def check_connection() -> dict:
    """Check whether the Validation Cloud endpoint is reachable.

    Makes a single eth_blockNumber call.  Use this when ethereum_request
    calls keep failing and you need to know whether the endpoint is up.

    Returns:
        {"connected": true} if the call succeeded, {"connected": false}
        otherwise.  No failure detail is included.
    """
    _log_request("check_connection")
    connected = await get_client().test_connection()
    return _log_response("check_connection", {"connected": connected})


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    configure_logging()
    mcp.run()

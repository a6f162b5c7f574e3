# =============================================================================
# ethrpc/validator.py  -  Parameter Validator
# =============================================================================
#
# Rejects a call whose params cannot possibly be right BEFORE any network
# I/O happens.  Only three methods are checked:
#
#   eth_getBalance            [address, block], address starts with "0x"
#   eth_getTransactionByHash  [txHash], hash starts with "0x"
#   eth_getLogs               [filterObject]
#
# Every other method is forwarded as-is and the node decides.  Adding a
# method here changes what callers see for it (a local INVALID_PARAMS error
# instead of the node's answer), so the list stays short on purpose.
# =============================================================================

from typing import Any, Callable, Optional

from ethrpc.errors import ApiError
from ethrpc.models import EthereumErrorCode


def _invalid(message: str) -> ApiError:
    return ApiError(message, EthereumErrorCode.INVALID_PARAMS)


def _is_hex_prefixed(value: Any) -> bool:
    return isinstance(value, str) and value.startswith("0x")


def _validate_get_balance(params: list) -> None:
    if len(params) != 2:
        raise _invalid("eth_getBalance requires address and block parameters")
    if not _is_hex_prefixed(params[0]):
        raise _invalid("Invalid address parameter")


def _validate_get_transaction_by_hash(params: list) -> None:
    if len(params) != 1 or not _is_hex_prefixed(params[0]):
        raise _invalid("Invalid transaction hash parameter")


def _validate_get_logs(params: list) -> None:
    if len(params) != 1 or not isinstance(params[0], dict):
        raise _invalid("eth_getLogs requires a filter object parameter")


_VALIDATORS: dict[str, Callable[[list], None]] = {
    "eth_getBalance": _validate_get_balance,
    "eth_getTransactionByHash": _validate_get_transaction_by_hash,
    "eth_getLogs": _validate_get_logs,
}


def validate_params(method: str, params: Optional[list] = None) -> None:
    """Check the shape of `params` for `method`.

    Args:
        method: JSON-RPC method name.
        params: Positional params; None is treated as an empty list.

    Raises:
        ApiError: With code INVALID_PARAMS when the shape is wrong.
    """
    validator = _VALIDATORS.get(method)
    if validator is None:
        return
    validator(list(params) if params else [])

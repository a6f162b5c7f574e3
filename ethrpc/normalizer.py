# =============================================================================
# ethrpc/normalizer.py  -  Response Normalizer
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Takes the raw `result` of a JSON-RPC call and rewrites its hex-encoded
#   numbers as decimals, choosing the representation by what the field
#   MEANS:
#     - counts, sizes, heights, timestamps  ->  int
#     - currency (wei)                      ->  {"wei": "...", "ether": "..."}
#
# HOW THE RULES ARE PICKED:
#   By method name.  Each method family has its own rule; methods with no
#   rule are returned untouched (the normalizer never guesses at a shape
#   it does not know).
#
#   eth_blockNumber / eth_gasPrice / eth_estimateGas  ->  int
#   eth_getBalance                                    ->  {wei, ether}
#   eth_getBlockByNumber / eth_getBlockByHash         ->  block + its txs
#   eth_getTransactionByHash / ...Receipt             ->  transaction
#
# NULL vs MISSING (transactions):
#   Pending transactions carry blockNumber/transactionIndex = null, and
#   receipts carry gasUsed etc. that plain transactions lack.  The two kinds
#   of optional field are handled differently:
#     - blockNumber, transactionIndex, gasPrice  ->  null when falsy
#     - gasUsed, cumulativeGasUsed, effectiveGasPrice  ->  converted only when
#       truthy, otherwise left exactly as they were (absent stays absent)
#   Consumers depend on this per-field behaviour; it must stay as is.
# =============================================================================

from typing import Any, Callable

from ethrpc.conversions import hex_to_decimal, to_wei_and_ether

_QUANTITY_METHODS = frozenset({"eth_blockNumber", "eth_gasPrice", "eth_estimateGas"})
_BLOCK_METHODS = frozenset({"eth_getBlockByNumber", "eth_getBlockByHash"})
_TRANSACTION_METHODS = frozenset({"eth_getTransactionByHash", "eth_getTransactionReceipt"})

_BLOCK_QUANTITY_FIELDS = ("number", "gasLimit", "gasUsed", "timestamp")
_TX_NULLABLE_FIELDS = ("blockNumber", "transactionIndex", "gasPrice")
_TX_REQUIRED_FIELDS = ("gas", "nonce")
_TX_RECEIPT_FIELDS = ("gasUsed", "cumulativeGasUsed", "effectiveGasPrice")


def normalize_transaction(tx: Any) -> Any:
    """Convert the numeric fields of a transaction or receipt object.

    Non-dict input is returned unchanged.
    """
    if not isinstance(tx, dict):
        return tx

    out = dict(tx)
    for name in _TX_NULLABLE_FIELDS:
        out[name] = hex_to_decimal(tx[name]) if tx.get(name) else None
    for name in _TX_REQUIRED_FIELDS:
        out[name] = hex_to_decimal(tx.get(name))
    out["value"] = to_wei_and_ether(tx.get("value"))
    for name in _TX_RECEIPT_FIELDS:
        if tx.get(name):
            out[name] = hex_to_decimal(tx[name])
    return out


def normalize_block(block: Any) -> Any:
    """Convert a block's header quantities and any full transaction objects.

    `transactions` may hold full objects (includeTransactions=true) or bare
    hashes; only the objects are rewritten.
    """
    if not isinstance(block, dict):
        return block

    out = dict(block)
    for name in _BLOCK_QUANTITY_FIELDS:
        if block.get(name):
            out[name] = hex_to_decimal(block[name])

    transactions = block.get("transactions")
    if isinstance(transactions, list):
        out["transactions"] = [
            normalize_transaction(tx) if isinstance(tx, dict) else tx
            for tx in transactions
        ]
    return out


def _normalize_balance(result: Any) -> Any:
    if not isinstance(result, str):
        return result
    return to_wei_and_ether(result)


def _rule_for(method: str) -> Callable[[Any], Any] | None:
    if method in _QUANTITY_METHODS:
        return hex_to_decimal
    if method == "eth_getBalance":
        return _normalize_balance
    if method in _BLOCK_METHODS:
        return normalize_block
    if method in _TRANSACTION_METHODS:
        return normalize_transaction
    return None


def normalize_result(method: str, result: Any) -> Any:
    """Rewrite an RPC result's hex quantities as decimals.

    Args:
        method: The JSON-RPC method that produced the result.
        result: The raw `result` member of the node's response.

    Returns:
        The normalized value.  Falsy results (None, "", 0) and results of
        methods without a rule come back unchanged.
    """
    if not result:
        return result
    rule = _rule_for(method)
    if rule is None:
        return result
    return rule(result)

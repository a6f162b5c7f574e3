# =============================================================================
# ethrpc/conversions.py  -  Hex quantity -> decimal conversions
# =============================================================================
#
# Ethereum nodes encode every number as a "0x"-prefixed base-16 string
# ("0x5208" == 21000).  These three functions turn them into values a human
# or a language model can read directly.
#
# ALL THREE ARE TOTAL:
#   None, "", "0x" and anything that is not a hex quantity map to zero
#   (0 or "0").  A malformed field in a node response degrades to zero
#   instead of failing the whole call.
#
#   hex_to_decimal         -> int   (block numbers, gas, timestamps, nonces)
#   hex_to_decimal_string  -> str   (large integers, e.g. wei amounts)
#   wei_to_ether           -> str   (wei / 10**18, exact, no float rounding)
# =============================================================================

import re
from typing import Any

_HEX_DIGITS_RE = re.compile(r"[0-9a-fA-F]+")

WEI_PER_ETHER = 10**18


def _parse_hex(value: Any) -> int:
    """Parse a hex quantity into an int, returning 0 for anything unparseable."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value if value >= 0 else 0
    if not isinstance(value, str):
        return 0

    raw = value.strip()
    if raw[:2] in ("0x", "0X"):
        raw = raw[2:]
    if not raw or not _HEX_DIGITS_RE.fullmatch(raw):
        return 0
    return int(raw, 16)


def hex_to_decimal(value: Any) -> int:
    """Convert a hex quantity (e.g. "0xa") to an int (10).

    Returns 0 for None, "", "0x" or a string that is not hex.
    """
    return _parse_hex(value)


def hex_to_decimal_string(value: Any) -> str:
    """Convert a hex quantity to a base-10 string.

    Unlike hex_to_decimal the result is a string, so it survives JSON
    consumers that read numbers as doubles.  Any size is supported:

        >>> hex_to_decimal_string("0xffffffffffffffffffffffffffffffff")
        '340282366920938463463374607431768211455'
    """
    return str(_parse_hex(value))


def wei_to_ether(value: Any) -> str:
    """Convert a hex wei amount to an ether amount as a decimal string.

    The division by 10**18 is done on integers, so the result is exact and
    carries no trailing zeros:

        "0xde0b6b3a7640000" -> "1"
        "0x16345785d8a0000" -> "0.1"
        "0x1"               -> "0.000000000000000001"
    """
    wei = _parse_hex(value)
    whole, frac = divmod(wei, WEI_PER_ETHER)
    if frac == 0:
        return str(whole)
    frac_str = f"{frac:018d}".rstrip("0")
    return f"{whole}.{frac_str}"


def to_wei_and_ether(value: Any) -> dict[str, str]:
    """Return the {wei, ether} pair used for every currency-valued field."""
    return {
        "wei": hex_to_decimal_string(value),
        "ether": wei_to_ether(value),
    }

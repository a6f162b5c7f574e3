# =============================================================================
# ethrpc/__init__.py
# =============================================================================
# This package contains ALL the logic for making Ethereum JSON-RPC calls
# against Validation Cloud and shaping their results.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or any agent framework.  The
#   only third-party import is httpx, in client.py.  Everything else
#   (conversions, normalizer, validator) is pure Python and can be used
#   from a bare REPL with no network.
#
#   models.py       request / envelope / response dataclasses, error codes
#   errors.py       ApiError, ConfigError
#   conversions.py  hex -> int / decimal string / ether
#   normalizer.py   per-method result rewriting
#   validator.py    pre-flight param checks
#   config.py       ClientConfig + environment loading
#   client.py       ValidationCloudClient (validate -> send -> normalize)
# =============================================================================

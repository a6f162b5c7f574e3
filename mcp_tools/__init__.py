# =============================================================================
# mcp_tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers.
#
# ARCHITECTURAL ROLE:
#   mcp_tools/ is the translation layer between the agent host (MCP) and the
#   JSON-RPC client in ethrpc/.  It:
#     1. Declares the tools and their descriptions (the host's LLM reads them)
#     2. Calls ethrpc/ to do the work
#     3. Converts ethrpc/ results and errors into MCP results
#
# It holds no JSON-RPC logic of its own: validation, normalization and
# error mapping all live in ethrpc/.
# =============================================================================

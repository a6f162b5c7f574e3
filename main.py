# =============================================================================
# main.py  -  Entry Point for the Validation Cloud MCP server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py          (or the `validation-cloud-mcp` script)
#
# WHAT HAPPENS:
#   1. Loads .env (VALIDATION_CLOUD_API_KEY, etc.)
#   2. Sends logging to stderr; stdout belongs to the MCP stdio transport
#   3. Builds the client; a missing API key stops the process here
#   4. Optionally pings the endpoint once (VALIDATION_CLOUD_CHECK_ON_START=true)
#   5. Serves the tools in mcp_tools/mcp_server.py over stdio until the
#      host closes the pipe or Ctrl-C
# =============================================================================

import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from ethrpc.client import ValidationCloudClient
from ethrpc.config import load_config
from ethrpc.errors import ConfigError
from mcp_tools.mcp_server import configure_logging, mcp, set_client

logger = logging.getLogger("validation_cloud")


async def _check_connection(client: ValidationCloudClient) -> bool:
    try:
        return await client.test_connection()
    finally:
        # The HTTP client is bound to this event loop; let the server's
        # loop create its own.
        await client.aclose()


def main() -> int:
    load_dotenv()
    configure_logging(os.environ.get("LOG_LEVEL", "INFO"))

    try:
        config = load_config()
    except ConfigError as exc:
        logger.error(f"Configuration error: {exc}")
        return 1

    client = ValidationCloudClient(config)
    set_client(client)

    if os.environ.get("VALIDATION_CLOUD_CHECK_ON_START", "false").lower() == "true":
        if asyncio.run(_check_connection(client)):
            logger.info("Endpoint reachable")
        else:
            logger.warning("Endpoint not reachable; serving anyway")

    logger.info("Starting MCP server on stdio")
    try:
        mcp.run()
    except KeyboardInterrupt:
        logger.info("Received interrupt, shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())

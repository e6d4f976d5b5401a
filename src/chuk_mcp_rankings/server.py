#!/usr/bin/env python3
"""
Entry point for the CHUK Rankings MCP Server.

This module provides the main entry point for the MCP server,
supporting multiple transport modes (stdio, http).
"""

import argparse
import asyncio
import logging
from pathlib import Path

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point with transport detection."""
    parser = argparse.ArgumentParser(description="CHUK Rankings MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file (default: $RANKINGS_CONFIG)",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="Catalog backend URL (default: $RANKINGS_API_URL)",
    )
    parser.add_argument(
        "--storage",
        choices=["http", "yaml"],
        default=None,
        help="Where lists are saved (default: yaml)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    # Import after argument parsing to avoid issues
    from chuk_mcp_rankings.async_server import create_server
    from chuk_mcp_rankings.config import RankingsConfig

    config = RankingsConfig.load(args.config, api_url=args.api_url, storage=args.storage)
    mcp = create_server(config)

    if args.transport == "stdio":
        logger.info("Starting CHUK Rankings MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Rankings MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()

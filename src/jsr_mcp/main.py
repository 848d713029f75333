"""Command-line entry point for the JSR MCP server."""

from __future__ import annotations

import argparse
import asyncio
import json

from jsr_mcp.client import JSRClient
from jsr_mcp.config import JSRConfig, load_config
from jsr_mcp.fastmcp_adapter import build_fastmcp_app
from jsr_mcp.logging_config import get_logger, setup_logging

logger = get_logger(__name__)

TRANSPORTS = ("stdio", "http", "sse", "streamable-http")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(description="JSR registry MCP server")
    parser.add_argument(
        "--transport",
        choices=TRANSPORTS,
        default="stdio",
        help="Transport used to talk to the MCP client (default: stdio).",
    )
    parser.add_argument("--host", help="Bind address for network transports.")
    parser.add_argument("--port", type=int, help="Port for network transports.")
    parser.add_argument("--path", help="URL path for network transports.")
    parser.add_argument(
        "--catalog",
        action="store_true",
        help="Print the available tool catalog as JSON and exit.",
    )
    parser.add_argument(
        "--skip-connection-check",
        action="store_true",
        help="Do not probe the JSR API before serving.",
    )
    parser.add_argument(
        "--log-level", help="Logging level (default: LOGGING_LEVEL or INFO)."
    )
    return parser


async def check_connection(config: JSRConfig) -> bool:
    """Probe the JSR API and log the outcome; never raises."""
    logger.info("Testing JSR API connection to %s", config.api_url)
    status = await JSRClient(config).test_connection()
    if status.success:
        logger.info("Successfully connected to JSR API")
    else:
        logger.warning("Failed to connect to JSR API: %s", status.error)
        logger.warning("The server will keep running but some tools may fail.")
    return status.success


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = load_config()
        app, server = build_fastmcp_app(config)

        if args.catalog:
            print(json.dumps(server.to_catalog(), indent=2))
            return 0

        if not args.skip_connection_check:
            asyncio.run(check_connection(config))

        run_options = {
            key: value
            for key, value in (
                ("host", args.host),
                ("port", args.port),
                ("path", args.path),
            )
            if value is not None
        }
        logger.info("Starting JSR MCP server on %s transport", args.transport)
        app.run(transport=args.transport, **run_options)
    except Exception:
        logger.exception("Fatal error while starting the JSR MCP server")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

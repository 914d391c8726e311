import argparse
import asyncio
import logging

import uvicorn

from .config import Config, setup_logging
from .mcp.http_transport import create_app
from .mcp.session import McpSession
from .mcp.stdio import run_stdio
from .service import TravelService
from .tools.catalog import build_server

logger = logging.getLogger(__name__)


def build_app():
    """FastAPI app wired to a TravelService built from the environment."""
    service = TravelService.from_config(allow_mock=True)
    mode = "mock" if service.offline else Config.AMADEUS_ENVIRONMENT
    return create_app(build_server(service), mode=mode)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Amadeus travel MCP server")
    parser.add_argument("--http", action="store_true", default=Config.MCP_HTTP_ENABLED,
                        help="Serve MCP over HTTP instead of stdio")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=Config.PORT)
    parser.add_argument("--log-level", default=Config.LOG_LEVEL)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)

    # Missing credentials are not fatal: tools answer with mock data
    Config.validate()

    if args.http:
        logger.info(f"Starting HTTP transport on port {args.port}")
        uvicorn.run(build_app(), host=args.host, port=args.port, log_config=None)
        return

    service = TravelService.from_config(allow_mock=True)
    session = McpSession(build_server(service))
    try:
        asyncio.run(run_stdio(session))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()

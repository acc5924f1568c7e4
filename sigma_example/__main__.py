"""Entry point for the Sigma example bridge server."""

import logging

from sigma_example.server import create_server
from sigma_example.state import get_deps
from sigma_example.utils.console import configure_logging

logger = logging.getLogger(__name__)


def run_server() -> None:
    """Run the bridge server with the configured transport."""
    settings = get_deps().settings
    configure_logging(settings.log_level, use_colors=settings.log_colors)
    mcp = create_server()

    if settings.transport == "stdio":
        logger.info("Starting Sigma example bridge (transport=stdio)")
        mcp.run(transport="stdio")
    else:
        logger.info(
            "Starting Sigma example bridge (transport=http, host=%s, port=%d)",
            settings.http_host,
            settings.http_port,
        )
        mcp.run(
            transport="http",
            host=settings.http_host,
            port=settings.http_port,
        )


if __name__ == "__main__":
    run_server()

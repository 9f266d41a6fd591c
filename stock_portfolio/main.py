"""Main entry point for the API server."""

import logging
import os
import sys

import uvicorn

from stock_portfolio.api.app import create_app
from stock_portfolio.config import ConfigurationError, configure_logging, get_settings

logger = logging.getLogger(__name__)


def run(host: str, port: int) -> None:
    """Validate configuration, build the app and serve it."""
    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        app = create_app(settings)
    except ConfigurationError as e:
        logger.critical(str(e))
        sys.exit(1)

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    # Get host/port from environment or defaults
    host = os.environ.get("HOST", "0.0.0.0")
    port_str = os.environ.get("PORT", "8086")
    try:
        port = int(port_str)
        if not (1 <= port <= 65535):
            raise ValueError("Port out of range")
    except ValueError:
        print(f"Error: Invalid PORT value '{port_str}'. Must be an integer between 1-65535.")
        sys.exit(1)

    run(host, port)

"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Command-line launcher: ``python -m dashboard``.
"""

import argparse
import logging

import uvicorn

from dashboard.app.core.config import settings

LOGGER = logging.getLogger("dashboard")


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and serve the FastAPI app with uvicorn."""
    parser = argparse.ArgumentParser(description="Dashboard server")
    parser.add_argument(
        "--host",
        type=str,
        default="0.0.0.0",
        help="Interface to bind",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help="Port to start server",
    )
    args = parser.parse_args(argv)

    LOGGER.info("API Server Using port: %i", args.port)
    uvicorn.run(
        "dashboard.app.main:app",
        host=args.host,
        port=args.port,
        timeout_graceful_shutdown=5,
        log_config=None,
    )


if __name__ == "__main__":
    main()

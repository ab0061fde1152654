"""
Run the council site with uvicorn.
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from council_site.config import get_settings

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Council site web server")
    parser.add_argument(
        "--host",
        type=str,
        default=settings.host,
        help="Interface to bind",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help="Port to listen on (defaults to $PORT)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Server running on port %d", args.port)
    logger.info("Site should be live at: http://localhost:%d", args.port)
    uvicorn.run(
        "council_site.app:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

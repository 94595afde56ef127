"""Entry-point for the pulse-stats service."""
import argparse
import logging

import uvicorn

from .config import settings
from .logger import setup_logging


def main():
    parser = argparse.ArgumentParser(description="pulse-stats HTTP service")
    parser.add_argument("--host", default=settings.server_host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.server_port, help="Port to listen on")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    args = parser.parse_args()

    setup_logging(level=settings.log_level, log_file=args.log_file)

    from .api import app

    logging.info(
        "Serving statistics for %s/%s on %s:%s",
        settings.github_owner, settings.github_repo, args.host, args.port,
    )
    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

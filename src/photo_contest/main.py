"""Command-line entrypoint that serves the contest with uvicorn."""

import logging
import socket

import uvicorn

from photo_contest.app_logging import configure_logging
from photo_contest.config import Settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the ASGI app on the configured host and port."""
    configure_logging()
    settings = Settings()
    logger.info("Photo contest listening on:")
    logger.info(" - http://localhost:%s", settings.port)
    logger.info(" - http://%s:%s", _local_ip(), settings.port)
    uvicorn.run(
        "photo_contest.api.asgi:app",
        host=settings.host,
        port=settings.port,
        log_level="info",
    )


def _local_ip() -> str:
    """Best guess at this host's LAN address, for the startup banner."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as probe:
            probe.connect(("192.0.2.1", 80))
            return probe.getsockname()[0]
    except OSError:
        return "localhost"


if __name__ == "__main__":
    main()

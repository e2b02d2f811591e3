import logging

import uvicorn

from .logger import configure_logging
from .settings import load_settings

logger = logging.getLogger(__name__)


def run() -> None:
    settings = load_settings()
    configure_logging(settings.server.log_level)

    logger.info("ClipFinder server running on port %s", settings.server.port)
    if not settings.acrcloud.has_credentials:
        logger.warning(
            "To use ACRCloud features, create a .env file with ACR_ACCESS_KEY, ACR_ACCESS_SECRET and ACR_HOST"
        )

    uvicorn.run(
        "clipfinder.app:app",
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.server.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    run()

"""Application entry point for the QuickHelp OCR API server."""

import uvicorn

from quickhelp_ocr.api.app import create_app
from quickhelp_ocr.utils.config import load_config
from quickhelp_ocr.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> None:
    """Start the FastAPI application server.

    uvicorn's own logging config is disabled so its loggers keep the
    handler and level installed by :func:`setup_logging`.
    """
    config = load_config()
    setup_logging(config.log_level)
    logger.info("Server running on port %d", config.server.port)
    uvicorn.run(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()

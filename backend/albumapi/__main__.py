"""
Album API — Process Entry Point
================================

What:  `album-api` console script and `python -m albumapi`.
How:   Load settings → configure logging → fail fast on missing Airtable
       variables → build the app → run uvicorn until the process is signalled.
"""

import logging
import sys

import uvicorn
from pydantic import ValidationError as SettingsValidationError

from albumapi.config import Settings
from albumapi.exceptions import ConfigurationError
from albumapi.main import create_app, setup_logging

logger = logging.getLogger("albumapi")


def main() -> None:
    try:
        settings = Settings()
    except SettingsValidationError as e:
        setup_logging()
        logger.critical("Invalid configuration: %s", e)
        sys.exit(1)

    setup_logging(settings.log_level)

    try:
        app = create_app(settings)
    except ConfigurationError as e:
        logger.critical("%s", e.message)
        sys.exit(1)

    uvicorn.run(
        app,
        host=settings.backend_host,
        port=settings.backend_port,
        log_config=None,  # keep the logging configured above
    )


if __name__ == "__main__":
    main()

# src/taskboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (store connection + repositories),
then serves the HTTP API with uvicorn until interrupted.
"""

from __future__ import annotations

import logging
import sys

import uvicorn

from ..api.app import create_app
from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..core.errors import StoreError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        state = create_initial_state(settings=settings)
    except StoreError:
        # Fail loudly: without a store every request would fail anyway.
        logger.exception("Document store unavailable, not starting.")
        sys.exit(1)

    app = create_app(state)
    try:
        logger.info("server running on port %s", settings.port)
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    finally:
        state.close()
        logger.info("Bye.")


if __name__ == "__main__":
    main()

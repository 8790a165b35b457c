"""Application entry point: prepares the database and reports what it holds."""

from __future__ import annotations

import json
import logging
import sys

from bookmanager.config import load_config
from bookmanager.dao import BookDAO
from bookmanager.service import BookService
from bookmanager.storage import Session, init_db

logger = logging.getLogger("bookmanager")


def _setup_logging(log_level: str, log_format: str) -> None:
    """Configure root logger based on config."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format == "json":
        formatter = logging.Formatter(
            json.dumps(
                {
                    "time": "%(asctime)s",
                    "level": "%(levelname)s",
                    "logger": "%(name)s",
                    "message": "%(message)s",
                }
            )
        )
    else:
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def main() -> None:
    """Load config, set up logging, initialize the schema and count stored books."""
    config = load_config()

    _setup_logging(config.log_level, config.log_format)

    logger.info("Book manager starting (env=%s, db=%s)", config.app_env, config.database_path)

    init_db(config.database_path)

    session = Session(config.database_path)
    try:
        service = BookService(BookDAO(session))
        logger.info("%d book(s) in store", len(service.get_all()))
    finally:
        session.close_connection()


if __name__ == "__main__":
    main()

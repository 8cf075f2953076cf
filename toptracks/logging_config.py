"""
Root logger setup.
Human-readable lines by default, JSON lines when LOG_FORMAT=json.
"""
import logging
import sys

import json_log_formatter


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    if fmt == "json":
        handler.setFormatter(json_log_formatter.VerboseJSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    # Quiet noisy libraries
    for lib in ("sqlalchemy.engine", "uvicorn.access"):
        logging.getLogger(lib).setLevel(logging.WARNING)

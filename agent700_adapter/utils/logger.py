# agent700_adapter/utils/logger.py

import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def init_logger(level: str = None) -> None:
    """
    Send adapter, uvicorn and urllib3 logs to stdout with one format.
    Level comes from the argument, else LOG_LEVEL, else INFO.
    """
    level = level or os.getenv("LOG_LEVEL", "INFO")
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers = [handler]

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uv = logging.getLogger(name)
        uv.handlers = [handler]
        uv.setLevel(log_level)

    # urllib3 logs full request lines at DEBUG; keep it one notch quieter
    logging.getLogger("urllib3").setLevel(max(log_level, logging.INFO))

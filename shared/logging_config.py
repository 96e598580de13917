import logging
import os
import sys

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s"


def configure_logging(log_level: str = None) -> None:
    """
    Attach a stdout handler to the root logger unless one is already present.

    The Lambda runtime installs its own root handler, so this only takes
    effect when running locally or under a CLI.
    """
    level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))

    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, "%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)

"""Root logging setup for the API process."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
HANDLER_NAME = "nftscope"


def configure_logging(level: str = "INFO") -> None:
    """Attach a stdout handler to the root logger once."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    if any(h.name == HANDLER_NAME for h in root.handlers):
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.name = HANDLER_NAME
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

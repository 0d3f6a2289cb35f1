"""
Logging setup.

All application loggers live under the "chatter" namespace and share one handler.
"""

import logging
import sys

from chatter.core.config import get_settings

_ROOT_NAME = "chatter"
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(_ROOT_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        root.setLevel(get_settings().LOG_LEVEL.upper())
    return root


def setup_logger(name: str = _ROOT_NAME) -> logging.Logger:
    """Get a logger under the application namespace."""
    root = _configure_root()
    if name == _ROOT_NAME:
        return root
    if not name.startswith(f"{_ROOT_NAME}."):
        name = f"{_ROOT_NAME}.{name}"
    return logging.getLogger(name)


logger = setup_logger()

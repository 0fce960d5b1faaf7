"""Logging configuration."""

import logging
import sys
from typing import Optional

from wealthdash.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers and the level they are capped at
_QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "urllib3": logging.WARNING,
    "peewee": logging.WARNING,  # yfinance's timezone cache
    "yfinance": logging.CRITICAL,
}


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure application logging to stdout.

    level overrides LOG_LEVEL from settings. Upstream validation chatter from
    yfinance is silenced; provider failures are logged by our own modules.
    """
    level_value = getattr(logging, (level or get_settings().log_level).upper(), None)
    if not isinstance(level_value, int):
        level_value = logging.INFO
    logging.basicConfig(
        level=level_value,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

import logging
import os
from typing import Optional

# Third-party loggers that log every pooled connection the fan-out opens.
_CHATTY_LOGGERS = ("urllib3", "requests")


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure logging for the API process and its upstream calls.

    ``level`` normally comes from ``Settings.log_level`` (APP_LOG_LEVEL); when it
    is None, LOG_LEVEL is read and INFO is the default. Cache hits and prompts are
    logged at DEBUG, upstream failures at WARNING/ERROR. Unless running at
    DEBUG, the HTTP stack's per-connection messages are hidden.
    """
    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if level_value > logging.DEBUG:
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

import os
import sys
import logging

LOG_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(message)s'


def init_logger(name: str, level: str = None) -> logging.Logger:
    """Return a named logger writing to stdout. Level defaults to $LOG_LEVEL or INFO."""
    logger = logging.getLogger(name)
    logger.setLevel(level or os.environ.get('LOG_LEVEL', 'INFO'))

    # avoid stacking handlers when a module is re-imported
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.propagate = False
    return logger

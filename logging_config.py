import logging
import sys
from typing import Optional


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Configures a logger with a standard console format.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))

    # Prevent duplicate logs if logger is already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger

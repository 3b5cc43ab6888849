import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


console = Console()


def setup_logger(name: str, log_file: Optional[str] = None, level: Optional[str] = None) -> logging.Logger:
    """
    Create (or fetch) a named logger.

    Without ``log_file`` the logger writes to the console through rich.
    With ``log_file`` it appends plain lines to that file instead.

    Args:
        name: Logger name, usually ``__name__``
        log_file: Optional path of a file to append to
        level: Level name; defaults to the LOG_LEVEL environment variable or INFO
    """
    logger = logging.getLogger(name)
    logger.setLevel((level or os.environ.get('LOG_LEVEL', 'INFO')).upper())

    if logger.handlers:
        return logger

    if log_file:
        handler = logging.FileHandler(log_file, delay=True)
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    else:
        handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter('%(message)s', datefmt='[%X]'))

    logger.addHandler(handler)
    logger.propagate = False
    return logger

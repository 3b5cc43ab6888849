from functools import wraps
from .logger import setup_logger
import os

error_logger = setup_logger(__name__, os.path.join(os.getcwd(), 'error.log'))


def log_and_continue(message: str, logger=None):
    """
    Run the wrapped call best-effort.

    Any exception is logged as a warning (and appended to error.log) and
    swallowed; the wrapper then returns None.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                if logger is not None:
                    logger.warning(f"{message}: {e}")
                error_logger.warning(f"{message}: {e!r}")
                return None
        return wrapper
    return decorator

from .logger import setup_logger
from .error import error_logger, log_and_continue

__all__ = ['setup_logger', 'error_logger', 'log_and_continue']

"""Structured logging utilities with context support."""

import functools
import logging
import threading
import uuid
from typing import Any, Callable, Dict, Optional

# Thread-local storage for log context
_thread_local = threading.local()


def generate_run_id() -> str:
    """Generate a unique id for one calculation run.

    Returns:
        UUID string attached to every log record of the run
    """
    return str(uuid.uuid4())


def get_log_context() -> Dict[str, Any]:
    """Get a copy of the fields currently attached to log records."""
    return dict(getattr(_thread_local, "context", {}))


class LogContext:
    """
    Context manager for adding structured fields to log records.

    Fields are stored in thread-local storage and added to every log
    record emitted within the block by the handlers' context filter.

    Example:
        with LogContext(entry_index=3, record_date="2024-03-06"):
            logger.warning("Invalid time format")
            # Log will include entry_index and record_date fields
    """

    def __init__(self, **kwargs):
        self.fields = kwargs
        self.previous_context: Optional[Dict[str, Any]] = None

    def __enter__(self):
        if not hasattr(_thread_local, "context"):
            _thread_local.context = {}

        # Save previous context for restoration
        self.previous_context = _thread_local.context.copy()
        _thread_local.context.update(self.fields)

        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.previous_context is not None:
            _thread_local.context = self.previous_context
        else:
            _thread_local.context = {}


class _ContextFilter(logging.Filter):
    """Logging filter that adds context fields to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in get_log_context().items():
            setattr(record, key, value)
        return True


def log_function_call(
    func: Optional[Callable] = None, *, include_args: bool = False, level: str = "DEBUG"
) -> Callable:
    """
    Decorator to log function entry and exit.

    Exceptions are logged with traceback and re-raised.

    Args:
        func: Function to decorate (when used without arguments)
        include_args: Whether to include function arguments in logs
        level: Log level to use (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Decorated function

    Example:
        @log_function_call
        def calculate_charges(records, travel_config):
            ...

        @log_function_call(include_args=True, level="INFO")
        def read(path):
            ...
    """

    def decorator(f: Callable) -> Callable:
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(f.__module__)
            log_level = getattr(logging, level.upper())

            if include_args:
                args_repr = [repr(a) for a in args]
                kwargs_repr = [f"{k}={v!r}" for k, v in kwargs.items()]
                signature = ", ".join(args_repr + kwargs_repr)
                logger.log(log_level, f"Entering {f.__name__} with args: {signature}")
            else:
                logger.log(log_level, f"Entering {f.__name__}")

            try:
                result = f(*args, **kwargs)
                logger.log(log_level, f"Exiting {f.__name__}")
                return result

            except Exception as e:
                logger.error(
                    f"Exception in {f.__name__}: {type(e).__name__}: {e}",
                    exc_info=True,
                )
                raise

        return wrapper

    # Handle both @log_function_call and @log_function_call() syntax
    if func is None:
        return decorator
    else:
        return decorator(func)

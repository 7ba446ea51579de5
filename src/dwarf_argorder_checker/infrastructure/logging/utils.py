#!/usr/bin/env python3

"""Logging helpers shared by all modules."""

import logging
from collections.abc import Callable
from functools import wraps
from time import time
from typing import Any, TypeVar, cast

F = TypeVar("F", bound=Callable[..., Any])


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass ``__name__``)."""
    return logging.getLogger(name)


def log_timing(func: F) -> F:
    """
    Decorator that logs how long a call took at DEBUG level.

    Failures are logged with their elapsed time and re-raised unchanged.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = get_logger(func.__module__)
        func_name = func.__qualname__
        start_time = time()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"Failed {func_name} after {time() - start_time:.2f}s: {e}")
            raise

        logger.debug(f"Completed {func_name} in {time() - start_time:.2f}s")
        return result

    return cast("F", wrapper)

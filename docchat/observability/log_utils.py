"""
Logging helpers for structured `extra` payloads.

User text (messages, chunk content, prompts) is never logged whole; these
helpers reduce values to short summaries first.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any


def safe_log_value(value: Any, max_length: int = 200) -> str:
    """
    Convert a value to a bounded string for logging.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Log-safe representation
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"
    text = value if isinstance(value, str) else repr(value)
    if len(text) > max_length:
        return text[:max_length] + f"... (truncated, {len(text)} total)"
    return text


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """
    Log a message with every context value passed through `safe_log_value`.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs
    """
    logger.log(level, message, extra={k: safe_log_value(v) for k, v in context.items()})


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log an exception with traceback and context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context
    """
    extra = {k: safe_log_value(v) for k, v in context.items()}
    extra.update({"error_type": type(exc).__name__, "error_msg": safe_log_value(str(exc))})
    logger.error(message, exc_info=exc, extra=extra)

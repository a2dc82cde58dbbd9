"""
Structured logging helpers for record traffic.

Record payloads carry base64 document bodies, reference lists and long
free-text fields. Nothing from a payload goes into a log line verbatim:
values are summarised first, and context travels as record attributes.

Dependencies: logging (stdlib), recordaccess.models
System role: Logging helper functions
"""

import logging
from collections.abc import Mapping
from typing import Any

from recordaccess.models.record import Reference

MAX_VALUE_LENGTH = 200


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a field value for a log line.

    References show as 'collection(id)', containers and byte strings by
    size only, and anything longer than max_length is cut.

    Args:
        value: Field value or context value
        max_length: Maximum rendered length

    Returns:
        str: Short, log-safe rendering
    """
    try:
        reference = Reference.coerce(value)
        if reference is not None:
            rendered = f"{reference.entity_type}({reference.normalized_id})"
        elif value is None:
            rendered = "None"
        elif isinstance(value, str):
            rendered = value
        elif isinstance(value, (bytes, bytearray)):
            rendered = f"bytes({len(value)})"
        elif isinstance(value, (list, tuple)):
            rendered = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, Mapping):
            rendered = f"dict({len(value)} keys)"
        else:
            rendered = str(value)
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"

    if len(rendered) > max_length:
        return f"{rendered[:max_length]}... ({len(rendered)} chars)"
    return rendered


def summarize_fields(fields: Mapping[str, Any], max_length: int = 40) -> str:
    """One-line 'name=value, ...' summary of a field map."""
    return ", ".join(
        f"{name}={safe_log_value(value, max_length)}" for name, value in fields.items()
    )


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with context attached as record attributes.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Key-value pairs, summarised with safe_log_value
    """
    logger.log(level, message, extra={key: safe_log_value(val) for key, val in context.items()})


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log a failed record operation with its traceback.

    Adds error_type and error_msg to the context; for record access errors
    the status code is included when the store returned one.
    """
    extra = {key: safe_log_value(val) for key, val in context.items()}
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    status_code = getattr(exc, "status_code", None)
    if status_code is not None:
        extra["status_code"] = status_code
    logger.error(f"{message}: {extra['error_type']}", exc_info=exc, extra=extra)

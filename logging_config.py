"""
Logging for toolgate.

One package logger, "toolgate", writing to stderr: stdout carries the MCP
stdio transport, and the CLI prints its JSON results there.

Every record passes through CredentialFilter before it is emitted, so a
credentials URL that ends up in a message (an S3_API_KEY echoed in an
error, a botocore exception string) is printed with its userinfo masked.

patching/ never logs.
"""

import logging
import sys

from validation import redact_api_key

logger = logging.getLogger("toolgate")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

# Longest repr of a single API parameter in debug lines
MAX_PARAM_CHARS = 120


class CredentialFilter(logging.Filter):
    """Mask ACCESS_KEY:SECRET userinfo in the rendered message."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_api_key(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def configure_logging(level: str = "INFO") -> None:
    """
    Attach the stderr handler (once) and set the level.

    Unknown level names fall back to INFO rather than failing startup.
    """
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logger.setLevel(resolved)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        handler.addFilter(CredentialFilter())
        logger.addHandler(handler)


def _short(value: object) -> str:
    text = repr(value)
    if len(text) > MAX_PARAM_CHARS:
        return f"{text[:MAX_PARAM_CHARS]}... ({len(text)} chars)"
    return text


def log_api_call(service: str, method: str, **params: object) -> None:
    """Debug line for an outgoing storage or HTTP call. None params are skipped."""
    param_str = ", ".join(f"{k}={_short(v)}" for k, v in params.items() if v is not None)
    logger.debug(f"API: {service}.{method}({param_str})")


def log_api_result(service: str, method: str, size: int | None = None) -> None:
    if size is not None:
        logger.debug(f"API: {service}.{method} returned {size} bytes")
    else:
        logger.debug(f"API: {service}.{method} completed")


def log_retry(attempt: int, max_attempts: int, delay_ms: int, reason: str) -> None:
    logger.warning(f"Retry {attempt}/{max_attempts} in {delay_ms}ms: {reason}")

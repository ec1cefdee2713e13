"""
Turns OpenAI SDK failures of the summary call into readable errors.

`chat.completions.create` fails either before a response arrives
(`APIConnectionError`, timeouts included) or with an HTTP error status
(`APIStatusError` and its subclasses).
"""

from collections.abc import Generator
from contextlib import contextmanager

from openai import (
    APIConnectionError,
    APIStatusError,
    AuthenticationError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
)

from common.logging import get_logger

logger = get_logger(__name__)

OPENAI_EXCEPTIONS = (APIConnectionError, APIStatusError)

# Most specific first; any other status falls through to the generic message
STATUS_ERROR_PREFIXES = (
    (AuthenticationError, "OpenAI authentication failed"),
    (PermissionDeniedError, "OpenAI access denied"),
    (NotFoundError, "OpenAI model or deployment not found"),
    (RateLimitError, "OpenAI rate limit exceeded"),
)


def format_openai_error(e: Exception) -> str:
    if isinstance(e, APIConnectionError):
        return f"Cannot connect to OpenAI: {e.message}"
    for error_type, prefix in STATUS_ERROR_PREFIXES:
        if isinstance(e, error_type):
            return f"{prefix}: {e.message}"
    if isinstance(e, APIStatusError):
        return f"OpenAI API error ({e.status_code}): {e.message}"
    return f"{type(e).__name__}: {e}"


@contextmanager
def handle_openai_errors(operation_name: str) -> Generator[None, None, None]:
    """
    Re-raise OpenAI failures inside the block as `RuntimeError` with a formatted message.

    Usage:
        with handle_openai_errors("Summarize"):
            response = await client.chat.completions.create(...)
    """
    try:
        yield
    except OPENAI_EXCEPTIONS as e:
        error_msg = format_openai_error(e)
        logger.error(f"[{operation_name}] OpenAI API error: {error_msg}")
        raise RuntimeError(error_msg) from e

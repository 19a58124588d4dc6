"""
Are.na MCP Server - Errors

Typed failures raised by the client and resolver, and the mapping from
those failures to messages shown to the assistant.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Union


class ArenaError(Exception):
    """Base class for all Are.na client failures."""


class ArenaApiError(ArenaError):
    """An upstream HTTP response outside the 2xx range."""

    def __init__(
        self,
        message: str,
        status: int,
        response_body: Any = None,
        retry_after_seconds: Optional[float] = None,
        url: str = "",
    ):
        super().__init__(message)
        self.status = status
        self.response_body = response_body
        self.retry_after_seconds = retry_after_seconds
        self.url = url

    @property
    def retryable(self) -> bool:
        return is_retryable_status(self.status)


class ChannelResolutionError(ArenaError):
    """A channel was located but could not be returned safely."""


class AmbiguousChannelError(ChannelResolutionError):
    """Several channels match the input and none stands out."""

    def __init__(self, raw_input: str, candidates: List[dict]):
        self.raw_input = raw_input
        self.candidates = candidates
        choices = "; ".join(
            f"{c['title']} (slug: {c['slug'] or 'none'}, id: {c['id']})"
            for c in candidates
        )
        super().__init__(
            f'Channel "{raw_input}" is ambiguous. Use an exact slug/id. '
            f"Candidates: {choices}"
        )


class OwnerMismatchError(ChannelResolutionError):
    """The resolved channel is not owned by the user named in the input."""

    def __init__(
        self,
        raw_input: str,
        expected_owner_slug: str,
        actual_owner_slug: Optional[str],
    ):
        self.raw_input = raw_input
        self.expected_owner_slug = expected_owner_slug
        self.actual_owner_slug = actual_owner_slug
        if actual_owner_slug is None:
            message = (
                f'Channel owner verification failed for "{raw_input}". '
                f'Expected owner "{expected_owner_slug}", but the API did not '
                "return an owner slug."
            )
        else:
            message = (
                f'Channel owner mismatch for "{raw_input}". Expected owner '
                f'"{expected_owner_slug}" but got "{actual_owner_slug}".'
            )
        super().__init__(message)


@dataclass(frozen=True)
class ErrorContext:
    """What the caller was doing when the error happened."""
    operation: Optional[str] = None
    target: Optional[Union[str, int]] = None
    search_fallback_enabled: Optional[bool] = None


def is_retryable_status(status: int) -> bool:
    return status == 429 or status >= 500


def _non_blank(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def extract_error_details(response_body: Any) -> Optional[str]:
    """
    Pull a diagnostic message out of an error body.

    Checks ``details.message``, then ``message``, then ``error`` as a string,
    then ``error.message``.
    """
    if not isinstance(response_body, dict):
        return None

    details = response_body.get("details")
    if isinstance(details, dict):
        message = _non_blank(details.get("message"))
        if message:
            return message

    message = _non_blank(response_body.get("message"))
    if message:
        return message

    error = response_body.get("error")
    if _non_blank(error):
        return error
    if isinstance(error, dict):
        return _non_blank(error.get("message"))
    return None


def to_user_facing_error(
    error: BaseException,
    context: Optional[ErrorContext] = None,
) -> str:
    """
    Describe a failure for the assistant.

    Pure function of the error's status, body and the context; the same
    inputs always give the same text.
    """
    context = context or ErrorContext()

    if not isinstance(error, ArenaApiError):
        return str(error) or "Unexpected error while talking to Are.na."

    target = f" ({context.target})" if context.target is not None else ""
    operation = f"{context.operation or 'Operation'}{target}"
    details = extract_error_details(error.response_body)
    suffix = f" Details: {details}" if details else ""
    status = error.status

    if status == 400:
        return f"{operation} failed because the request was invalid.{suffix}"
    if status == 401:
        return f"Access denied. Check ARENA_ACCESS_TOKEN and try again.{suffix}"
    if status == 403:
        if (
            context.operation == "search_arena"
            and context.search_fallback_enabled is False
        ):
            return (
                "Search is unavailable on this account tier. "
                "Enable v2 fallback or upgrade to Premium."
            )
        return (
            f"Access denied for {operation}. "
            f"This usually means missing permissions.{suffix}"
        )
    if status == 404:
        return (
            f"{operation} failed because the requested resource was not found."
            f"{suffix}"
        )
    if status == 422:
        return f"{operation} failed validation.{suffix}"
    if status == 429:
        if error.retry_after_seconds is not None:
            return (
                "Are.na rate limit exceeded. "
                f"Retry after {error.retry_after_seconds:g} seconds."
            )
        return "Are.na rate limit exceeded. Retry in a moment."
    if status >= 500:
        return "Are.na API is temporarily unavailable. Retry shortly."

    return f"{operation} failed with status {status}.{suffix}"

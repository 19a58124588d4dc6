"""
Tools - Shared Helpers
"""

import httpx

from arena_mcp.errors import ArenaError, ErrorContext, to_user_facing_error

# Failures a tool reports back to the assistant instead of raising.
TOOL_ERRORS = (ArenaError, httpx.HTTPError, ValueError)


def error_result(error: BaseException, operation: str, target=None, **context) -> dict:
    return {
        "error": to_user_facing_error(
            error,
            ErrorContext(operation=operation, target=target, **context),
        )
    }

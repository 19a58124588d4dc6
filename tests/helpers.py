"""
Test helpers for scripting upstream Are.na responses.
"""

import httpx


def reply(status: int = 200, body=None, headers=None, text=None):
    """A factory building a fresh response each time it is served."""

    def build() -> httpx.Response:
        if text is not None:
            return httpx.Response(status, text=text, headers=headers or {})
        if body is None:
            return httpx.Response(status, headers=headers or {})
        return httpx.Response(status, json=body, headers=headers or {})

    return build


class ScriptedHandler:
    """
    Serves queued replies in order, repeating the last one, and records
    every request it sees. Exceptions in the queue are raised instead.
    """

    def __init__(self, *replies):
        self.replies = list(replies)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(item, Exception):
            raise item
        return item()

    @property
    def call_count(self) -> int:
        return len(self.requests)

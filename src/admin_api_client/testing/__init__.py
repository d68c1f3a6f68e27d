"""Testing utilities for code built on the management API client.

Helpers for faking the server side with :class:`httpx.MockTransport`:
page envelopes for list endpoints, a client wired to a mock handler, and a
handler wrapper that records how many requests were in flight at once.

Example:
    ```python
    from admin_api_client.testing import mock_api_client, page_response


    async def test_lists_conferences():
        def handler(request):
            return page_response([{"name": "vmr-1"}])

        async with mock_api_client(handler) as client:
            response = await client.send(FetchAll(Api.CONFIGURATION, "conference"))
            assert await response.stream.collect() == [{"name": "vmr-1"}]
    ```
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from admin_api_client.auth.providers import AuthProvider
from admin_api_client.client import ApiClient

TEST_ADDRESS = "mgmt.example.com"
TEST_BASE_URL = f"https://{TEST_ADDRESS}"

Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


def page_envelope(
    objects: list[Any],
    next: str | None = None,
    *,
    limit: int = 500,
    offset: int = 0,
    previous: str | None = None,
    total_count: int | None = None,
) -> dict[str, Any]:
    """Build the JSON body of one page of a list response."""
    return {
        "objects": objects,
        "meta": {
            "limit": limit,
            "offset": offset,
            "next": next,
            "previous": previous,
            "total_count": len(objects) if total_count is None else total_count,
        },
    }


def page_response(objects: list[Any], next: str | None = None, **meta: Any) -> httpx.Response:
    """Build a 200 response carrying one page of ``objects``."""
    return httpx.Response(200, json=page_envelope(objects, next, **meta))


def mock_api_client(
    handler: Handler,
    auth: AuthProvider | None = None,
    *,
    address: str = TEST_ADDRESS,
    **kwargs: Any,
) -> ApiClient:
    """Create an :class:`ApiClient` whose requests are answered by ``handler``."""
    return ApiClient(address, auth, transport=httpx.MockTransport(handler), **kwargs)


class InFlightCounter:
    """Async mock handler that tracks concurrent requests.

    Every request is held for ``delay`` seconds before ``respond`` answers it,
    so overlapping requests are visible in :attr:`max_in_flight`.

    Args:
        respond: Produces the response for each request
        delay: Seconds each request stays in flight
    """

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response], delay: float = 0.01):
        self._respond = respond
        self._delay = delay
        self.in_flight = 0
        self.max_in_flight = 0
        self.calls = 0

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self._delay)
            return self._respond(request)
        finally:
            self.in_flight -= 1


__all__ = [
    "TEST_ADDRESS",
    "TEST_BASE_URL",
    "InFlightCounter",
    "mock_api_client",
    "page_envelope",
    "page_response",
]

"""Pagination engine for FetchAll requests.

List endpoints wrap their results in a page envelope::

    {
        "objects": [...],
        "meta": {"limit": 500, "offset": 0, "next": "/api/...?offset=500", "previous": null, "total_count": 1234}
    }

:class:`PageStream` turns one FetchAll request into an async iterator over
the objects of every page. Only the first request uses the caller's offset;
later pages follow the server's ``next`` link exactly as given.
"""

import json
import logging
import sys
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from admin_api_client.errors.exceptions import ApiError
from admin_api_client.request import FetchAll

if TYPE_CHECKING:
    from admin_api_client.client import ApiClient

logger = logging.getLogger(__name__)


@dataclass
class PageMeta:
    limit: int | None = None
    offset: int | None = None
    next: str | None = None
    previous: str | None = None
    total_count: int | None = None


@dataclass
class PageEnvelope:
    """One page of a list response."""

    objects: list[Any] = field(default_factory=list)
    meta: PageMeta = field(default_factory=PageMeta)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "PageEnvelope":
        """Decode a page envelope from a list response.

        Raises:
            ApiError: If the body is not JSON or not shaped like a page envelope
        """
        text = response.text
        try:
            data = json.loads(text)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            objects = data["objects"]
            meta = data["meta"]
            if not isinstance(objects, list):
                raise ValueError("'objects' is not a list")
            if not isinstance(meta, dict):
                raise ValueError("'meta' is not an object")
            next_link = meta.get("next")
            if next_link is not None and not isinstance(next_link, str):
                raise ValueError("'meta.next' is not a string")
        except (ValueError, KeyError) as e:
            raise ApiError(
                f"failed to parse API response to JSON ({e}):\n\n{text}",
                status_code=response.status_code,
                reason=response.reason_phrase,
                cause=e,
                response=response,
            ) from e

        return cls(
            objects=objects,
            meta=PageMeta(
                limit=meta.get("limit"),
                offset=meta.get("offset"),
                next=next_link,
                previous=meta.get("previous"),
                total_count=meta.get("total_count"),
            ),
        )


class PageStream:
    """Lazily-fetched, order-preserving stream of the objects of a FetchAll request.

    Each refill performs exactly one page fetch, holding a concurrency permit
    only for that network call. The stream is forward-only and ends for good
    when the server stops supplying ``next`` links, when ``limit`` objects have
    been yielded, or after an error has been raised from it; issue a new
    request to enumerate again.

    Example:
        ```python
        stream = PageStream(client, FetchAll(Api.STATUS, "worker_vm", limit=10))
        async for worker in stream:
            print(worker["name"])
        ```
    """

    def __init__(self, client: "ApiClient", request: FetchAll) -> None:
        self._client = client
        self._remaining = request.limit if request.limit > 0 else sys.maxsize
        self._pending: deque[Any] = deque()
        # The first page comes from the request itself, later ones from `next` links
        self._next: FetchAll | str | None = request
        self.pages_fetched = 0

    def __aiter__(self) -> "PageStream":
        return self

    async def __anext__(self) -> Any:
        while not self._pending:
            if self._next is None or self._remaining <= 0:
                raise StopAsyncIteration
            await self._fetch_page()

        self._remaining -= 1
        return self._pending.popleft()

    async def _fetch_page(self) -> None:
        target = self._next
        # Cleared first so that a failed fetch terminates the stream
        self._next = None

        if isinstance(target, FetchAll):
            http_request = await self._client.build(target)
        else:
            logger.debug("Following next page link")
            http_request = await self._client.build_link_request(target)

        response = await self._client.execute(http_request)
        envelope = PageEnvelope.from_response(response)
        self.pages_fetched += 1

        self._pending.extend(envelope.objects[: self._remaining])
        if len(envelope.objects) < self._remaining:
            self._next = envelope.meta.next

    async def collect(self) -> list[Any]:
        """Drain the stream into a list."""
        return [obj async for obj in self]

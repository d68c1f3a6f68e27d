"""Dispatcher for the management API.

:class:`ApiClient` turns request-model values into concrete HTTP requests,
authenticates them, sends them with a bounded number in flight, and
interprets the outcome as a response-model value or a typed error.

Example:
    ```python
    from admin_api_client import Api, ApiClient, Content, FetchOne

    async with ApiClient("mgmt.example.com", auth) as client:
        response = await client.send(FetchOne(Api.CONFIGURATION, "conference", "12"))
        if isinstance(response, Content):
            print(response.value["name"])
    ```
"""

import asyncio
import logging

import httpx

from admin_api_client.api import Api, base_url_from_address
from admin_api_client.auth.providers import AuthProvider, NoAuth
from admin_api_client.errors.exceptions import ApiError, TransportError
from admin_api_client.errors.handler import decode_json, raise_for_status
from admin_api_client.pagination import PageStream
from admin_api_client.request import (
    ApiRequest,
    Create,
    Delete,
    FetchAll,
    FetchOne,
    SchemaOfNamespace,
    SchemaOfResource,
    Update,
)
from admin_api_client.response import ApiResponse, Content, ContentStream, NoContent, RedirectLocation

# Too many parallel requests bog down the management node
DEFAULT_MAX_CONCURRENT_REQUESTS = 5


class ApiClient:
    """Long-lived client for one management API server.

    Safe to share between concurrent tasks: the only shared mutable state is
    the concurrency limiter and the auth provider. At most
    ``max_concurrent_requests`` HTTP calls are in flight at any moment, across
    single requests and every open pagination stream.

    Args:
        address: Server address; see :func:`~admin_api_client.api.base_url_from_address`
        auth: Auth provider applied to every request (default: :class:`NoAuth`)
        http_client: Shared HTTP client. When omitted one is created that
            follows redirects, and is closed again by :meth:`aclose`.
        transport: Transport for the HTTP client created when ``http_client``
            is omitted, e.g. an :class:`httpx.MockTransport` in tests
        max_concurrent_requests: Bound on simultaneous in-flight requests
        logger: Destination for request trace logs (default: this module's logger)
    """

    base_url_from_address = staticmethod(base_url_from_address)

    def __init__(
        self,
        address: str,
        auth: AuthProvider | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        max_concurrent_requests: int = DEFAULT_MAX_CONCURRENT_REQUESTS,
        logger: logging.Logger | None = None,
    ) -> None:
        if max_concurrent_requests < 1:
            raise ValueError("max_concurrent_requests must be at least 1")

        self.base_url = base_url_from_address(address)
        self.auth = auth or NoAuth()
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(transport=transport, follow_redirects=True)
        self._semaphore = asyncio.Semaphore(max_concurrent_requests)
        self._logger = logger or logging.getLogger(__name__)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http_client.aclose()

    def base_uri(self, api: Api) -> str:
        """Absolute base URI of a namespace, without a trailing slash."""
        return f"{self.base_url}{api.base_path}"

    async def build(self, request: ApiRequest) -> httpx.Request:
        """Build the authenticated HTTP request for a request-model value.

        Args:
            request: The operation to perform

        Returns:
            A request ready to be passed to :meth:`execute`

        Raises:
            ApiError: If the request cannot be built (e.g. an invalid URL)
            AuthError: If the auth provider cannot authenticate the request
        """
        base = self.base_uri(request.api)

        try:
            if isinstance(request, FetchOne):
                url = f"{base}/{request.resource}/{request.object_id}/"
                self._logger.info(f"GET {url}")
                http_request = self._http_client.build_request("GET", url)
            elif isinstance(request, FetchAll):
                url = f"{base}/{request.resource}/"
                params = [("limit", str(request.page_size)), ("offset", str(request.offset))]
                params.extend(request.filters.items())
                self._logger.info(
                    f"GET_ALL {url}?limit={request.page_size}&offset={request.offset}  "
                    "(query parameters are excluded since they may be sensitive)"
                )
                http_request = self._http_client.build_request("GET", url, params=params)
            elif isinstance(request, Create):
                url = f"{base}/{request.resource}/"
                self._logger.info(f"POST {url}")
                http_request = self._http_client.build_request("POST", url, json=request.body)
            elif isinstance(request, Update):
                url = f"{base}/{request.resource}/{request.object_id}/"
                self._logger.info(f"PATCH {url}")
                http_request = self._http_client.build_request("PATCH", url, json=request.body)
            elif isinstance(request, Delete):
                url = f"{base}/{request.resource}/{request.object_id}/"
                self._logger.info(f"DELETE {url}")
                http_request = self._http_client.build_request("DELETE", url)
            elif isinstance(request, SchemaOfNamespace):
                url = f"{base}/"
                self._logger.debug(f"API_SCHEMA {url}")
                http_request = self._http_client.build_request("GET", url)
            elif isinstance(request, SchemaOfResource):
                url = f"{base}/{request.resource}/schema/"
                self._logger.debug(f"SCHEMA {url}")
                http_request = self._http_client.build_request("GET", url)
            else:
                raise TypeError(f"unsupported request type: {type(request).__name__}")
        except (httpx.InvalidURL, ValueError) as e:
            raise ApiError(f"error building request: {e}", cause=e) from e

        return await self.auth.decorate(http_request)

    async def build_link_request(self, link: str) -> httpx.Request:
        """Build an authenticated GET for a server-supplied link.

        Server-relative links are resolved against the base URL; absolute
        links are used unchanged.
        """
        url = link if link.startswith(("http://", "https://")) else f"{self.base_url}{link}"
        try:
            http_request = self._http_client.build_request("GET", url)
        except httpx.InvalidURL as e:
            raise ApiError(f"error building request: {e}", cause=e) from e
        return await self.auth.decorate(http_request)

    async def execute(self, request: httpx.Request) -> httpx.Response:
        """Send a built request while holding one concurrency permit.

        The permit covers exactly one network round-trip, body included, and
        is released on every exit path.

        Args:
            request: Request produced by :meth:`build` or :meth:`build_link_request`

        Returns:
            The fully-read, successful response

        Raises:
            TransportError: If no HTTP response was received
            ApiError: If the response status is not 2xx
        """
        method = request.method
        # Query strings may carry sensitive filter values
        url = request.url.copy_with(query=None)

        async with self._semaphore:
            self._logger.debug(f"--> {method} {url}")
            try:
                response = await self._http_client.send(request)
            except httpx.RequestError as e:
                raise TransportError(f"error sending request: {e}", cause=e) from e
            self._logger.debug(f"<-- {method} {url}")

        raise_for_status(response)
        return response

    async def send(self, request: ApiRequest) -> ApiResponse:
        """Perform one operation against the API.

        FetchAll requests return a :class:`ContentStream` straight away; no
        network call happens until the stream is iterated. Everything else is
        sent once and classified:

        - non-empty body from a command POST: :class:`NoContent` with the
          decoded payload, if any
        - any other non-empty body: :class:`Content` holding the decoded JSON
        - empty body with a ``Location`` header: :class:`RedirectLocation`
        - empty body otherwise: :class:`NoContent`

        Raises:
            TransportError: If no HTTP response was received
            ApiError: If the response status is not 2xx
            DecodeError: If a non-command response body is not valid JSON
            AuthError: If the request could not be authenticated
        """
        if isinstance(request, FetchAll):
            return ContentStream(PageStream(self, request))

        is_command = isinstance(request, Create) and request.api.is_command

        http_request = await self.build(request)
        response = await self.execute(http_request)

        if response.content:
            if is_command:
                return NoContent(payload=self._command_payload(response))
            return Content(decode_json(response))

        location = response.headers.get("Location")
        if location is not None:
            return RedirectLocation(location)
        return NoContent()

    def _command_payload(self, response: httpx.Response):
        try:
            return response.json()
        except ValueError:
            self._logger.debug("Command response body is not JSON, ignoring it")
            return None

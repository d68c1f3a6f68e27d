"""Admin API Client - async client core for the management REST API.

This library provides the request-dispatch engine used by management tooling:
- A closed request model over the fixed set of API namespaces
- Pluggable authentication (none, HTTP basic, OAuth2 client credentials)
- Bounded-concurrency dispatch with typed error classification
- Lazily-fetched, order-preserving pagination streams

Example:
    ```python
    from admin_api_client import Api, ApiClient, FetchAll
    from admin_api_client.auth import BasicAuth

    auth = BasicAuth("admin", "secret")

    async with ApiClient("mgmt.example.com", auth) as client:
        response = await client.send(FetchAll(Api.CONFIGURATION, "conference"))
        async for conference in response.stream:
            print(conference["name"])
    ```
"""

from admin_api_client.api import Api, CommandApi
from admin_api_client.client import ApiClient
from admin_api_client.request import (
    ApiRequest,
    Create,
    Delete,
    FetchAll,
    FetchOne,
    SchemaOfNamespace,
    SchemaOfResource,
    Update,
    with_offset,
)
from admin_api_client.response import (
    ApiResponse,
    Content,
    ContentStream,
    NoContent,
    RedirectLocation,
    content_or_default,
)

__version__ = "0.1.0"

__all__ = [
    "Api",
    "ApiClient",
    "ApiRequest",
    "ApiResponse",
    "CommandApi",
    "Content",
    "ContentStream",
    "Create",
    "Delete",
    "FetchAll",
    "FetchOne",
    "NoContent",
    "RedirectLocation",
    "SchemaOfNamespace",
    "SchemaOfResource",
    "Update",
    "__version__",
    "content_or_default",
    "with_offset",
]

"""Request model: the closed set of operations the client can perform."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from admin_api_client.api import Api

DEFAULT_PAGE_SIZE = 500


@dataclass(frozen=True)
class SchemaOfNamespace:
    """Fetch the schema index of a whole namespace."""

    api: Api


@dataclass(frozen=True)
class SchemaOfResource:
    """Fetch the schema of one resource."""

    api: Api
    resource: str


@dataclass(frozen=True)
class FetchOne:
    """Fetch a single object by id."""

    api: Api
    resource: str
    object_id: str


@dataclass(frozen=True)
class FetchAll:
    """Fetch every object of a resource, following server pagination.

    Attributes:
        filters: Extra query parameters. These may carry sensitive values and
            are never written to logs.
        page_size: Objects requested per page (the ``limit`` query parameter).
        limit: Maximum number of objects to yield; 0 means unbounded.
        offset: Offset of the first page only. Later pages follow the
            server-supplied ``next`` link.
    """

    api: Api
    resource: str
    filters: Mapping[str, str] = field(default_factory=dict)
    page_size: int = DEFAULT_PAGE_SIZE
    limit: int = 0
    offset: int = 0

    def with_offset(self, offset: int) -> "FetchAll":
        """Return a copy of this request starting at ``offset``."""
        return replace(self, offset=offset)


@dataclass(frozen=True)
class Create:
    """Create an object (POST). On command namespaces this runs a command."""

    api: Api
    resource: str
    body: Any


@dataclass(frozen=True)
class Update:
    """Partially update an object (PATCH)."""

    api: Api
    resource: str
    object_id: str
    body: Any


@dataclass(frozen=True)
class Delete:
    api: Api
    resource: str
    object_id: str


ApiRequest = SchemaOfNamespace | SchemaOfResource | FetchOne | FetchAll | Create | Update | Delete


def with_offset(request: ApiRequest, offset: int) -> FetchAll:
    """Derive a copy of a FetchAll request with a different offset.

    Args:
        request: The request to copy. Must be a :class:`FetchAll`.
        offset: The new offset.

    Returns:
        A new FetchAll request identical apart from its offset.

    Raises:
        TypeError: If ``request`` is not a FetchAll request.
    """
    if not isinstance(request, FetchAll):
        raise TypeError(f"offset only applies to FetchAll requests, not {type(request).__name__}")
    return request.with_offset(offset)

"""Response model: the outcomes of a successful dispatch."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from admin_api_client.pagination import PageStream


@dataclass(frozen=True)
class NoContent:
    """The call succeeded and there is nothing to return.

    Attributes:
        payload: For commands, the decoded informational body the server sent
            back (typically ``{"status": ..., "data": ...}``), or None if the
            body was empty or not JSON.
    """

    payload: Any = None


@dataclass(frozen=True)
class RedirectLocation:
    """The call succeeded with an empty body and a ``Location`` header."""

    location: str


@dataclass(frozen=True)
class Content:
    """Decoded JSON body of a successful call."""

    value: Any


@dataclass(frozen=True)
class ContentStream:
    """Lazily-fetched objects of a paginated FetchAll request."""

    stream: "PageStream"


ApiResponse = NoContent | RedirectLocation | Content | ContentStream


def content_or_default(response: ApiResponse, default: Any = None) -> Any:
    """Return the decoded body of a Content response, else ``default``."""
    if isinstance(response, Content):
        return response.value
    return default

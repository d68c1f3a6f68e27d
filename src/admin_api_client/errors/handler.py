"""Error handling utilities for HTTP responses."""

import json
from typing import Any

import httpx

from admin_api_client.errors.exceptions import ApiError, DecodeError
from admin_api_client.errors.models import ErrorBody


def raise_for_status(response: httpx.Response) -> None:
    """Raise ApiError for non-success HTTP responses.

    The message is taken from the body when possible: an ``{"error": ...}``
    string, otherwise pretty-printed JSON, otherwise the raw text, otherwise a
    generic note about the status code.

    Args:
        response: HTTP response object

    Raises:
        ApiError: If the status code is not 2xx
    """
    if response.is_success:
        return

    body = ErrorBody.from_response(response)
    raise ApiError(
        message=body.to_exception_message(),
        status_code=response.status_code,
        reason=response.reason_phrase,
        response=response,
    )


def decode_json(response: httpx.Response) -> Any:
    """Decode a successful response body as JSON.

    Args:
        response: HTTP response object

    Returns:
        The decoded JSON value

    Raises:
        DecodeError: If the body is not valid JSON; the message includes the
            raw body for diagnosis
    """
    text = response.text
    try:
        return json.loads(text)
    except ValueError as e:
        raise DecodeError(
            f"failed to parse API response to JSON ({e}):\n\n{text}",
            body=text,
            status_code=response.status_code,
            cause=e,
            response=response,
        ) from e

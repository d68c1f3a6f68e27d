"""Error taxonomy for the management API client."""

from admin_api_client.errors.exceptions import (
    ApiError,
    ClientError,
    DecodeError,
    TransportError,
)
from admin_api_client.errors.handler import decode_json, raise_for_status
from admin_api_client.errors.models import ErrorBody

__all__ = [
    "ApiError",
    "ClientError",
    "DecodeError",
    "ErrorBody",
    "TransportError",
    "decode_json",
    "raise_for_status",
]

"""Structured exceptions for client failures."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class ClientError(Exception):
    """Base exception for every failure surfaced by the client."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: BaseException | None = None,
        response: "httpx.Response | None" = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.cause = cause
        self.response = response


class TransportError(ClientError):
    """The request never produced an HTTP response (connection, DNS, TLS, timeout)."""

    pass


class DecodeError(ClientError):
    """A successful response carried a body that is not valid JSON."""

    def __init__(self, message: str, body: str, **kwargs):
        super().__init__(message, **kwargs)
        self.body = body


class ApiError(ClientError):
    """The server answered with a non-success status.

    ``status_code`` is the only structured field callers should branch on,
    e.g. to detect rejected credentials (401).
    """

    def __init__(self, message: str, status_code: int | None = None, reason: str | None = None, **kwargs):
        super().__init__(message, status_code=status_code, **kwargs)
        self.reason = reason

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401

    def __str__(self) -> str:
        if self.status_code is None:
            return f"api error: {self.message}"
        status = f"{self.status_code} {self.reason}" if self.reason else str(self.status_code)
        return f"api error with status {status}: {self.message}"

"""Error body model for non-success responses."""

import json
from dataclasses import dataclass
from typing import Any

import httpx


@dataclass
class ErrorBody:
    """Best-effort interpretation of an error response body.

    The management API usually reports failures as ``{"error": "..."}`` but
    may also return arbitrary JSON, plain text, or nothing at all.
    """

    status: int
    reason: str = ""
    error: str | None = None  # Value of a top-level string "error" field
    document: Any = None  # Any other JSON document
    text: str = ""  # Raw body

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ErrorBody":
        """Parse an error body from an HTTP response.

        Args:
            response: HTTP response object (its body must already be read)

        Returns:
            ErrorBody object; parsing never fails
        """
        try:
            text = response.text
        except (UnicodeDecodeError, LookupError):
            text = ""

        body = cls(status=response.status_code, reason=response.reason_phrase, text=text)
        if not text:
            return body

        try:
            data = json.loads(text)
        except ValueError:
            return body

        if isinstance(data, dict) and isinstance(data.get("error"), str):
            body.error = data["error"]
        else:
            body.document = data
        return body

    def to_exception_message(self) -> str:
        """Convert the body to an exception message."""
        if self.error is not None:
            message = self.error
        elif self.document is not None:
            message = "\n" + json.dumps(self.document, indent=2)
        elif self.text:
            message = self.text
        else:
            status = f"{self.status} {self.reason}".rstrip()
            message = f'response code "{status}" did not indicate success'
        return f"http error: {message}"

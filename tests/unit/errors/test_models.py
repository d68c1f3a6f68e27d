"""Tests for the error body model."""

import pytest
from httpx import Response

from admin_api_client.errors.models import ErrorBody


@pytest.mark.unit
def test_parse_error_field():
    """Test parsing the usual {"error": "..."} body."""
    response = Response(status_code=400, json={"error": "Invalid filter"})

    body = ErrorBody.from_response(response)

    assert body.status == 400
    assert body.reason == "Bad Request"
    assert body.error == "Invalid filter"
    assert body.document is None


@pytest.mark.unit
def test_parse_non_string_error_field():
    """Test an "error" field that is not a string is kept as a document."""
    response = Response(status_code=400, json={"error": {"code": 7}})

    body = ErrorBody.from_response(response)

    assert body.error is None
    assert body.document == {"error": {"code": 7}}


@pytest.mark.unit
def test_parse_json_list():
    """Test parsing a JSON body that is not an object."""
    response = Response(status_code=400, json=["first problem", "second problem"])

    body = ErrorBody.from_response(response)

    assert body.error is None
    assert body.document == ["first problem", "second problem"]


@pytest.mark.unit
def test_handle_plain_text_response():
    """Test handling a non-JSON body keeps only the text."""
    response = Response(
        status_code=500,
        headers={"content-type": "text/plain"},
        text="Internal Server Error",
    )

    body = ErrorBody.from_response(response)

    assert body.error is None
    assert body.document is None
    assert body.text == "Internal Server Error"


@pytest.mark.unit
def test_to_exception_message_error_field():
    """Test the "error" field is used verbatim."""
    body = ErrorBody(status=404, reason="Not Found", error="not found")

    assert body.to_exception_message() == "http error: not found"


@pytest.mark.unit
def test_to_exception_message_document():
    """Test other JSON documents are pretty-printed with two-space indent."""
    body = ErrorBody(status=400, document={"name": ["required"]})

    assert body.to_exception_message() == 'http error: \n{\n  "name": [\n    "required"\n  ]\n}'


@pytest.mark.unit
def test_to_exception_message_text():
    """Test the raw text is used when the body is not JSON."""
    body = ErrorBody(status=502, text="Bad gateway from proxy")

    assert body.to_exception_message() == "http error: Bad gateway from proxy"


@pytest.mark.unit
def test_to_exception_message_empty():
    """Test an empty body produces a status-based fallback message."""
    body = ErrorBody(status=500, reason="Internal Server Error")

    assert body.to_exception_message() == 'http error: response code "500 Internal Server Error" did not indicate success'


@pytest.mark.unit
def test_to_exception_message_empty_without_reason():
    """Test the fallback message without a reason phrase."""
    body = ErrorBody(status=599)

    assert body.to_exception_message() == 'http error: response code "599" did not indicate success'

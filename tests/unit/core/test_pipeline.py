"""
Tests for Request.do() and the execution pipeline.
"""

import io

import pytest
import requests
import responses

from src.http_request_builder.core.body import DecodeTarget
from src.http_request_builder.core.encoding import Encoding
from src.http_request_builder.core.exceptions import (
    ConnectionError,
    MissingFieldError,
    MissingMethodError,
    RequestEncodeError,
    ResponseDecodeError,
    StatusCodeError,
    TimeoutError,
    TransportError,
    URLBuildError,
    UnsupportedRequestEncodingError,
    UnsupportedResponseEncodingError,
)
from src.http_request_builder.core.pipeline import DoOptions, join_options
from src.http_request_builder.core.request import Request
from src.http_request_builder.core.transport import set_default_transport


def _request(transport, method="GET"):
    return (
        Request()
        .with_transport(transport)
        .with_method(method)
        .from_url_string("http://www.example.com/api/v1/path?foo=bar")
    )


class TestJoinOptions:
    """Test merging of DoOptions."""

    def test_empty(self):
        assert join_options() == DoOptions()

    def test_none_is_skipped(self):
        assert join_options(None, DoOptions(request_encoding=Encoding.JSON)) == DoOptions(
            request_encoding=Encoding.JSON
        )

    def test_first_non_empty_wins(self):
        joined = join_options(
            DoOptions(request_encoding=Encoding.JSON),
            DoOptions(request_encoding="XML", response_encoding="XML"),
            DoOptions(response_encoding=Encoding.JSON),
        )

        assert joined.request_encoding == Encoding.JSON
        assert joined.response_encoding == "XML"


class TestBuildErrors:
    """Errors raised before anything is sent."""

    def test_missing_method(self, recording_transport):
        transport = recording_transport()
        request = Request().with_transport(transport).from_url_string("http://example.com/")

        with pytest.raises(MissingMethodError) as exc_info:
            request.do()

        assert str(exc_info.value) == "must provide method"
        assert transport.requests == []

    def test_missing_method_checked_before_url(self, recording_transport):
        request = Request().with_transport(recording_transport())

        with pytest.raises(MissingMethodError):
            request.do()

    @pytest.mark.parametrize("url, field", [
        ("/only/path", "scheme"),
        ("http:///path", "host"),
        ("http://example.com", "path"),
    ])
    def test_url_build_error(self, recording_transport, url, field):
        transport = recording_transport()
        request = Request().with_transport(transport).with_method("GET").from_url_string(url)

        with pytest.raises(URLBuildError) as exc_info:
            request.do()

        assert exc_info.value.field == field
        assert isinstance(exc_info.value.__cause__, MissingFieldError)
        assert transport.requests == []

    def test_defaults_installed(self, recording_transport):
        transport = recording_transport()
        set_default_transport(transport)
        request = Request().with_method("GET").from_url_string("http://example.com/")
        request.query = None

        request.do()

        assert request.transport is transport
        assert request.query == {}
        assert request.header == {}


class TestRequestBody:
    """Test request body encoding."""

    def test_no_body(self, recording_transport):
        transport = recording_transport()

        response = _request(transport).do()

        assert response.status_code == 200
        sent = transport.requests[0]
        assert sent.method == "GET"
        assert sent.url == "http://www.example.com/api/v1/path?foo=bar"
        assert sent.body == b""

    def test_json_body_from_content_type(self, recording_transport):
        transport = recording_transport()

        (
            _request(transport, "POST")
            .add_header("Content-Type", "application/json")
            .with_request_body({"foo": "bar"})
            .do()
        )

        sent = transport.requests[0]
        assert sent.body == b'{"foo":"bar"}'
        assert sent.header["Content-Type"] == ["application/json"]

    def test_raw_bytes_sent_verbatim(self, recording_transport):
        transport = recording_transport()

        _request(transport, "PUT").with_request_body(b"\x00\x01raw").do()

        sent = transport.requests[0]
        assert sent.body == b"\x00\x01raw"
        assert "Content-Type" not in sent.header

    def test_raw_bytes_ignore_encoding(self, recording_transport):
        transport = recording_transport()

        (
            _request(transport, "POST")
            .add_header("Content-Type", "application/json")
            .with_request_body(b"not json")
            .do()
        )

        assert transport.requests[0].body == b"not json"

    def test_unknown_encoding(self, recording_transport):
        transport = recording_transport()
        request = _request(transport, "POST").with_request_body({"foo": "bar"})

        with pytest.raises(UnsupportedRequestEncodingError) as exc_info:
            request.do()

        assert str(exc_info.value) == "unable to encode request body (encoding: unknown)"
        assert transport.requests == []

    def test_unsupported_content_type(self, recording_transport):
        request = (
            _request(recording_transport(), "POST")
            .add_header("Content-Type", "application/xml")
            .with_request_body({"foo": "bar"})
        )

        with pytest.raises(UnsupportedRequestEncodingError):
            request.do()

    def test_option_overrides_header(self, recording_transport):
        transport = recording_transport()

        (
            _request(transport, "POST")
            .add_header("Content-Type", "text/plain")
            .with_request_body([1, 2])
            .do(DoOptions(request_encoding=Encoding.JSON))
        )

        assert transport.requests[0].body == b"[1,2]"

    def test_encode_failure(self, recording_transport):
        transport = recording_transport()
        request = (
            _request(transport, "POST")
            .add_header("Content-Type", "application/json")
            .with_request_body({"value": float("nan")})
        )

        with pytest.raises(RequestEncodeError) as exc_info:
            request.do()

        assert isinstance(exc_info.value.__cause__, ValueError)
        assert transport.requests == []

    def test_encode_too_deep(self, recording_transport):
        transport = recording_transport()
        value = []
        for _ in range(100000):
            value = [value]
        request = (
            _request(transport, "POST")
            .add_header("Content-Type", "application/json")
            .with_request_body(value)
        )

        with pytest.raises(RequestEncodeError) as exc_info:
            request.do()

        assert isinstance(exc_info.value.__cause__, RecursionError)
        assert transport.requests == []


class TestTransportErrors:
    """Test classification of transport failures."""

    def test_connection_error(self, recording_transport):
        request = _request(recording_transport(error=requests.ConnectionError("refused")))

        with pytest.raises(ConnectionError) as exc_info:
            request.do()

        assert exc_info.value.url == "http://www.example.com/api/v1/path?foo=bar"
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)

    def test_timeout(self, recording_transport):
        request = _request(recording_transport(error=requests.ReadTimeout("slow")))

        with pytest.raises(TimeoutError):
            request.do()

    def test_partial_response_kept(self, recording_transport):
        partial = requests.Response()
        partial.status_code = 200
        error = requests.exceptions.ChunkedEncodingError("broken", response=partial)

        with pytest.raises(TransportError) as exc_info:
            _request(recording_transport(error=error)).do()

        assert exc_info.value.response is partial

    def test_transport_error_passes_through(self, recording_transport):
        error = TransportError("custom failure", "http://www.example.com/")

        with pytest.raises(TransportError) as exc_info:
            _request(recording_transport(error=error)).do()

        assert exc_info.value is error


class TestResponseBody:
    """Test status validation and response decoding."""

    def test_decode_json(self, recording_transport):
        transport = recording_transport(content=b'{"id":1,"name":"x"}')
        result = {}

        response = (
            _request(transport)
            .add_header("Accept", "application/json")
            .with_response_body(result)
            .do()
        )

        assert response.status_code == 200
        assert result == {"id": 1, "name": "x"}

    def test_decode_value_without_target(self, recording_transport):
        request = (
            _request(recording_transport(content=b"[1,2,3]"))
            .with_response_body(DecodeTarget())
        )

        request.do(DoOptions(response_encoding=Encoding.JSON))

        assert request.response_body.value == [1, 2, 3]

    def test_response_encoding_from_accept_not_content_type(self, recording_transport):
        request = (
            _request(recording_transport(content=b'{"id":1}'))
            .add_header("Content-Type", "application/json")
            .with_response_body({})
        )

        with pytest.raises(UnsupportedResponseEncodingError) as exc_info:
            request.do()

        assert exc_info.value.response.status_code == 200

    def test_option_overrides_accept(self, recording_transport):
        result = {}

        (
            _request(recording_transport(content=b'{"ok":true}'))
            .add_header("Accept", "text/html")
            .with_response_body(result)
            .do(DoOptions(response_encoding=Encoding.JSON))
        )

        assert result == {"ok": True}

    def test_byte_sink(self, recording_transport):
        sink = bytearray(b"stale")

        (
            _request(recording_transport(content=b"\x89PNG"))
            .add_header("Accept", "application/json")
            .with_response_body(sink)
            .do()
        )

        assert sink == bytearray(b"\x89PNG")

    def test_writable_sink(self, recording_transport):
        stream = io.BytesIO()

        _request(recording_transport(content=b"payload")).with_response_body(stream).do()

        assert stream.getvalue() == b"payload"

    def test_malformed_json(self, recording_transport):
        request = (
            _request(recording_transport(content=b"{not json"))
            .add_header("Accept", "application/json")
            .with_response_body({})
        )

        with pytest.raises(ResponseDecodeError) as exc_info:
            request.do()

        assert exc_info.value.response is not None

    def test_body_ignored_without_target(self, recording_transport):
        response = _request(recording_transport(content=b"{not json")).do()

        assert response.content == b"{not json"


class TestStatusCode:
    """Test non-2xx handling."""

    @pytest.mark.parametrize("status", [200, 201, 204, 299])
    def test_success(self, recording_transport, status):
        assert _request(recording_transport(status_code=status)).do().status_code == status

    @pytest.mark.parametrize("status", [300, 304, 404, 500])
    def test_failure(self, recording_transport, status):
        with pytest.raises(StatusCodeError) as exc_info:
            _request(recording_transport(status_code=status)).do()

        assert exc_info.value.status_code == status
        assert str(exc_info.value) == f"received status code {status}"
        assert exc_info.value.response.status_code == status

    def test_informational_status_passes(self, recording_transport):
        assert _request(recording_transport(status_code=123)).do().status_code == 123

    def test_error_body_decoded_before_raise(self, recording_transport):
        result = {}
        request = (
            _request(recording_transport(status_code=404, content=b'{"error":"not found"}'))
            .add_header("Accept", "application/json")
            .with_response_body(result)
        )

        with pytest.raises(StatusCodeError) as exc_info:
            request.do()

        assert exc_info.value.status_code == 404
        assert result == {"error": "not found"}

    def test_decode_error_replaces_status_error(self, recording_transport):
        request = (
            _request(recording_transport(status_code=500, content=b"<html>oops</html>"))
            .add_header("Accept", "application/json")
            .with_response_body({})
        )

        with pytest.raises(ResponseDecodeError) as exc_info:
            request.do()

        assert exc_info.value.response.status_code == 500

    def test_decode_too_deep_replaces_status_error(self, recording_transport):
        content = b"[" * 100000 + b"]" * 100000
        request = (
            _request(recording_transport(status_code=500, content=content))
            .add_header("Accept", "application/json")
            .with_response_body([])
        )

        with pytest.raises(ResponseDecodeError) as exc_info:
            request.do()

        assert isinstance(exc_info.value.__cause__, RecursionError)
        assert exc_info.value.response.status_code == 500


class TestWithRequestsTransport:
    """Full pipeline over SessionTransport with mocked HTTP."""

    def test_post_json(self, mock_responses):
        mock_responses.add(
            responses.POST,
            "https://api.example.com/v1/items",
            json={"id": 42},
            status=201,
        )
        result = {}

        response = (
            Request()
            .with_method("POST")
            .from_url_string("https://api.example.com/v1/items?dry_run=1")
            .add_header("Content-Type", "application/json")
            .add_header("Accept", "application/json")
            .with_request_body({"name": "item"})
            .with_response_body(result)
            .do()
        )

        assert response.status_code == 201
        assert result == {"id": 42}
        sent = mock_responses.calls[0].request
        assert sent.url == "https://api.example.com/v1/items?dry_run=1"
        assert sent.body == b'{"name":"item"}'
        assert sent.headers["Accept"] == "application/json"

    def test_status_error(self, mock_responses):
        mock_responses.add(responses.DELETE, "https://api.example.com/v1/items/1", status=403)

        with pytest.raises(StatusCodeError) as exc_info:
            Request().with_method("DELETE").from_url_string("https://api.example.com/v1/items/1").do()

        assert exc_info.value.status_code == 403

    def test_connection_refused(self, mock_responses):
        mock_responses.add(
            responses.GET,
            "https://api.example.com/health",
            body=requests.ConnectionError("refused"),
        )

        with pytest.raises(ConnectionError):
            Request().with_method("GET").from_url_string("https://api.example.com/health").do()

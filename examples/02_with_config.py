"""
Transport Configuration Examples

Demonstrates timeouts, session headers, a shared default transport
and per-call codec overrides.
"""

from src.http_request_builder import (
    DoOptions,
    Encoding,
    SessionTransport,
    TimeoutError,
    TransportConfig,
    new_request,
    set_default_transport,
)


def custom_transport():
    """Dedicated transport with timeouts and a User-Agent."""
    print("\n=== Custom transport ===")

    config = TransportConfig.create(
        timeout=(3, 10),
        headers={"User-Agent": "request-builder-example/1.0"},
    )

    with SessionTransport(config) as transport:
        result = {}
        (
            new_request()
            .with_transport(transport)
            .with_method("GET")
            .from_url_string("https://httpbin.org/headers")
            .add_header("Accept", "application/json")
            .with_response_body(result)
            .do()
        )
        print(f"User-Agent: {result['headers']['User-Agent']}")


def default_transport():
    """Replace the process-wide default transport."""
    print("\n=== Default transport ===")

    set_default_transport(SessionTransport(TransportConfig.create(timeout=5)))

    response = new_request().with_method("GET").from_url_string("https://httpbin.org/get").do()
    print(f"Status: {response.status_code}")

    set_default_transport(None)


def timeout():
    """with_timeout() on a dedicated transport."""
    print("\n=== Timeout ===")

    try:
        (
            new_request()
            .with_transport(SessionTransport())
            .with_timeout(1)
            .with_method("GET")
            .from_url_string("https://httpbin.org/delay/3")
            .do()
        )
    except TimeoutError as e:
        print(f"Timed out: {e}")


def codec_override():
    """Force JSON decoding without an Accept header."""
    print("\n=== Codec override ===")

    result = {}
    (
        new_request()
        .with_method("GET")
        .from_url_string("https://httpbin.org/json")
        .with_response_body(result)
        .do(DoOptions(response_encoding=Encoding.JSON))
    )
    print(f"Keys: {list(result)}")


if __name__ == "__main__":
    custom_transport()
    default_transport()
    timeout()
    codec_override()

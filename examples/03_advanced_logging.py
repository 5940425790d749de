"""
Structured Logging Examples

Demonstrates JSON request logs, correlation IDs and file logging.
Sensitive headers and query parameters are masked.
"""

from src.http_request_builder import SessionTransport, TransportConfig, new_request
from src.http_request_builder.core.logging import (
    LoggingConfig,
    clear_correlation_id,
    set_correlation_id,
)


def json_logs():
    """JSON logs with a correlation ID."""
    print("\n" + "=" * 60)
    print("JSON logs")
    print("=" * 60 + "\n")

    config = TransportConfig.create(
        logging=LoggingConfig.create(
            level="INFO",
            format="json",
            extra_fields={"service": "examples"},
        ),
    )

    set_correlation_id("example-1")
    with SessionTransport(config) as transport:
        (
            new_request()
            .with_transport(transport)
            .with_method("GET")
            .from_url_string("https://httpbin.org/get?api_key=secret&page=1")
            .add_header("Authorization", "Bearer secret-token")
            .do()
        )
    clear_correlation_id()


def file_logs():
    """Text logs written to a rotating file."""
    print("\n" + "=" * 60)
    print("File logs (logs/requests.log)")
    print("=" * 60 + "\n")

    config = TransportConfig.create(
        logging=LoggingConfig.create(
            level="INFO",
            format="text",
            enable_console=False,
            enable_file=True,
            file_path="logs/requests.log",
        ),
    )

    with SessionTransport(config) as transport:
        new_request().with_transport(transport).with_method("GET").from_url_string(
            "https://httpbin.org/status/200"
        ).do()


if __name__ == "__main__":
    json_logs()
    file_logs()

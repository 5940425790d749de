"""
Basic Request Builder Usage Examples

Demonstrates GET with a decoded response, POST with a JSON body,
raw bytes and status code handling.
"""

from src.http_request_builder import StatusCodeError, new_request

BASE_URL = "https://jsonplaceholder.typicode.com"


def get_json():
    """GET with the response decoded into a dict."""
    print("\n=== GET with JSON response ===")

    post = {}
    response = (
        new_request()
        .with_method("GET")
        .from_url_string(f"{BASE_URL}/posts/1")
        .add_header("Accept", "application/json")
        .with_response_body(post)
        .do()
    )

    print(f"Status: {response.status_code}")
    print(f"Title: {post['title']}")


def get_with_query():
    """GET with query parameters added one by one."""
    print("\n=== GET with query ===")

    comments = []
    (
        new_request()
        .with_method("GET")
        .with_scheme("https")
        .with_host("jsonplaceholder.typicode.com")
        .with_path("/comments")
        .add_query("postId", "1")
        .add_header("Accept", "application/json")
        .with_response_body(comments)
        .do()
    )

    print(f"Comments: {len(comments)}")


def post_json():
    """POST with a JSON encoded body."""
    print("\n=== POST with JSON ===")

    created = {}
    response = (
        new_request()
        .with_method("POST")
        .from_url_string(f"{BASE_URL}/posts")
        .add_header("Content-Type", "application/json")
        .add_header("Accept", "application/json")
        .with_request_body({"title": "My Post", "body": "Content", "userId": 1})
        .with_response_body(created)
        .do()
    )

    print(f"Status: {response.status_code}")
    print(f"Created ID: {created['id']}")


def raw_bytes():
    """Raw bytes in, raw bytes out."""
    print("\n=== Raw bytes ===")

    content = bytearray()
    (
        new_request()
        .with_method("GET")
        .from_url_string(f"{BASE_URL}/posts/1")
        .with_response_body(content)
        .do()
    )

    print(f"Received {len(content)} bytes")


def status_error():
    """Non-2xx responses raise StatusCodeError after the body is read."""
    print("\n=== Status error ===")

    body = {}
    try:
        (
            new_request()
            .with_method("GET")
            .from_url_string(f"{BASE_URL}/posts/999999")
            .add_header("Accept", "application/json")
            .with_response_body(body)
            .do()
        )
    except StatusCodeError as e:
        print(f"Error: {e}")
        print(f"Body: {body}")


if __name__ == "__main__":
    get_json()
    get_with_query()
    post_json()
    raw_bytes()
    status_error()

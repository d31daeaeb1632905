import requests

from ui_kit import error_detail


def _http_error(status: int, body: bytes, content_type: str = "application/json") -> requests.HTTPError:
    r = requests.Response()
    r.status_code = status
    r._content = body
    r.headers["Content-Type"] = content_type
    r.encoding = "utf-8"
    return requests.HTTPError(f"{status} error", response=r)


def test_detail_from_json_body():
    e = _http_error(409, b'{"detail": "could not allocate a child code"}')
    assert error_detail(e) == "could not allocate a child code"


def test_non_json_body_falls_back_to_text():
    e = _http_error(500, b"<html>Internal Server Error</html>", "text/html")
    assert error_detail(e) == "<html>Internal Server Error</html>"


def test_empty_body_returns_the_error():
    e = _http_error(502, b"")
    assert error_detail(e) is e

"""HTTP client core: request building, sending, rate limits and API errors."""

from __future__ import annotations

import json
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from urllib.parse import parse_qs, urlencode, urljoin, urlsplit, urlunsplit

import requests
from requests.structures import CaseInsensitiveDict

LIBRARY_VERSION = "1.62.0"
DEFAULT_BASE_URL = "https://api.digitalocean.com/"
USER_AGENT = f"oceanapi/{LIBRARY_VERSION}"
MEDIA_TYPE = "application/json"

HEADER_RATE_LIMIT = "RateLimit-Limit"
HEADER_RATE_REMAINING = "RateLimit-Remaining"
HEADER_RATE_RESET = "RateLimit-Reset"

_BODYLESS_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})
_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass
class ListOptions:
    """Pagination parameters for list calls; zero values are left out."""

    page: int = 0
    per_page: int = 0

    def to_query(self) -> dict[str, int]:
        query = {}
        if self.page:
            query["page"] = self.page
        if self.per_page:
            query["per_page"] = self.per_page
        return query


@dataclass(frozen=True)
class Rate:
    """Rate limit reported by the most recent API call."""

    limit: int = 0
    remaining: int = 0
    reset: datetime | None = None


@dataclass
class Response:
    """An API response: the HTTP response plus data parsed from it."""

    http_response: requests.Response
    rate: Rate = Rate()
    links: Any = None
    meta: Any = None
    monitor: str = ""
    data: Any = None

    @property
    def status_code(self) -> int:
        return self.http_response.status_code


class ErrorResponse(Exception):
    """An API call answered with a status code outside the 2xx range."""

    def __init__(self, response: requests.Response, message: str = "", request_id: str = "") -> None:
        super().__init__(message)
        self.response = response
        self.message = message
        self.request_id = request_id

    def __str__(self) -> str:
        request = getattr(self.response, "request", None)
        method = getattr(request, "method", "") or ""
        url = getattr(request, "url", "") or ""
        status = getattr(self.response, "status_code", 0)
        if self.request_id:
            return f"{method} {url}: {status} (request {json.dumps(self.request_id)}) {self.message}"
        return f"{method} {url}: {status} {self.message}"


def _check_url(url: str) -> str:
    if url.startswith(":"):
        raise ValueError(f"parse {url!r}: missing protocol scheme")
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
        raise ValueError(f"parse {url!r}: invalid control character in URL")
    return url


def add_options(path: str, options: Any) -> str:
    """Merge the query parameters of ``options`` into ``path``."""
    if options is None:
        return path
    parts = urlsplit(_check_url(path))
    values = parse_qs(parts.query, keep_blank_values=True)
    extra = options.to_query() if hasattr(options, "to_query") else dict(options)
    for key, value in extra.items():
        values[key] = [str(value)]
    query = urlencode(sorted(values.items()), doseq=True)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def _json_default(obj: Any) -> Any:
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if hasattr(obj, "to_json"):
        return obj.to_json()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _encode_json(body: Any) -> bytes:
    text = json.dumps(body, default=_json_default, separators=(",", ":"), ensure_ascii=False)
    text = "".join(_JSON_ESCAPES.get(ch, ch) for ch in text)
    return (text + "\n").encode("utf-8")


def _int_or_zero(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def _rate_from_headers(headers: Mapping[str, str]) -> Rate:
    limit = _int_or_zero(headers.get(HEADER_RATE_LIMIT) or "0")
    remaining = _int_or_zero(headers.get(HEADER_RATE_REMAINING) or "0")
    reset_seconds = _int_or_zero(headers.get(HEADER_RATE_RESET) or "0")
    reset = datetime.fromtimestamp(reset_seconds, tz=timezone.utc) if reset_seconds else None
    return Rate(limit=limit, remaining=remaining, reset=reset)


def check_response(response: requests.Response) -> None:
    """Raise ErrorResponse when ``response`` carries a non-2xx status."""
    if 200 <= response.status_code <= 299:
        return
    message = ""
    request_id = ""
    data = response.content or b""
    if data:
        raw = data.decode("utf-8", errors="replace")
        try:
            payload = json.loads(data)
        except ValueError:
            payload = None
        if (
            isinstance(payload, dict)
            and isinstance(payload.get("message", ""), str)
            and isinstance(payload.get("request_id", ""), str)
        ):
            message = payload.get("message") or ""
            request_id = payload.get("request_id") or ""
        else:
            message = raw
    if not request_id:
        request_id = response.headers.get("x-request-id", "") if response.headers else ""
    raise ErrorResponse(response, message, request_id)


def stream_to_string(stream: Any) -> str:
    """Read a binary or text stream to its end and return it as text."""
    data = stream.read()
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


ClientOption = Callable[["Client"], None]


def set_base_url(base_url: str) -> ClientOption:
    """Option that points the client at another base URL."""

    def apply(client: Client) -> None:
        client.base_url = _check_url(base_url)

    return apply


def set_user_agent(user_agent: str) -> ClientOption:
    """Option that prefixes the client's user agent."""

    def apply(client: Client) -> None:
        client.user_agent = f"{user_agent} {client.user_agent}"

    return apply


def set_request_headers(headers: Mapping[str, str]) -> ClientOption:
    """Option that adds headers sent with every request."""

    def apply(client: Client) -> None:
        client.headers.update(headers)

    return apply


class Client:
    """Builds and sends API requests and tracks the current rate limit."""

    def __init__(self, session: requests.Session | None = None) -> None:
        self.session = session if session is not None else requests.Session()
        self.base_url = DEFAULT_BASE_URL
        self.user_agent = USER_AGENT
        self.headers: dict[str, str] = {}
        self.rate = Rate()
        self._rate_lock = threading.Lock()
        self._on_request_completed: Callable[[Any, requests.Response], None] | None = None

    def new_request(self, method: str, url_str: str, body: Any = None) -> requests.PreparedRequest:
        """Prepare a request to ``url_str`` resolved against the base URL.

        For methods other than GET, HEAD and OPTIONS, ``body`` is sent as JSON.
        """
        url = urljoin(self.base_url, _check_url(url_str))
        method = method.upper()
        headers: CaseInsensitiveDict = CaseInsensitiveDict()
        data: bytes | None = None
        if method not in _BODYLESS_METHODS:
            data = _encode_json(body) if body is not None else b""
            headers["Content-Type"] = MEDIA_TYPE
        headers.update(self.headers)
        headers["Accept"] = MEDIA_TYPE
        headers["User-Agent"] = self.user_agent
        return self.session.prepare_request(
            requests.Request(method, url, headers=headers, data=data)
        )

    def do(self, request: requests.PreparedRequest, sink: Any = None) -> Response:
        """Send ``request`` and return the response.

        ``sink`` may be a writable binary stream that receives the raw body, or a
        callable that receives the decoded JSON document and whose result is
        stored as ``Response.data``. Raises ErrorResponse on a non-2xx status.
        """
        http_response = self.session.send(request)
        try:
            if self._on_request_completed is not None:
                self._on_request_completed(request, http_response)

            response = Response(http_response=http_response, rate=_rate_from_headers(http_response.headers))
            with self._rate_lock:
                self.rate = response.rate

            check_response(http_response)

            if sink is None:
                return response
            if hasattr(sink, "write"):
                sink.write(http_response.content)
            else:
                response.data = sink(json.loads(http_response.content))
            return response
        finally:
            http_response.close()

    def on_request_completed(self, callback: Callable[[Any, requests.Response], None]) -> None:
        """Register a callback run after every completed request."""
        self._on_request_completed = callback

    def get_rate(self) -> Rate:
        """Return the rate limit from the most recent call, thread-safely."""
        with self._rate_lock:
            return self.rate
import http.client
import json
import logging
import socket
from urllib import error, request
from urllib.parse import urlparse

from tenacity import Retrying, retry_if_exception, stop_after_attempt, wait_incrementing

logger = logging.getLogger(__name__)

_ALLOWED_HTTP_SCHEMES = {"http", "https"}
_RETRYABLE_STATUS = {429, 500, 502, 503, 504}
TIMEOUT_MESSAGE = "timeout"
SHAPE_MESSAGE = "Unexpected response shape"


class ChannelRequestError(RuntimeError):
    def __init__(self, message, *, status=None, retryable=False):
        super().__init__(message)
        self.status = status
        self.retryable = retryable


def validate_base_url(base_url):
    parsed = urlparse(base_url or "")
    scheme = parsed.scheme.lower()
    if scheme not in _ALLOWED_HTTP_SCHEMES or not parsed.netloc:
        raise ValueError("store URL must be an absolute HTTP(S) URL")
    return base_url.rstrip("/")


def _read_error_body(exc):
    try:
        body_bytes = exc.read()
    except (OSError, ValueError):
        return ""
    if not body_bytes:
        return ""
    return body_bytes.decode("utf-8", errors="replace").strip()[:300]


def _is_timeout(reason):
    return isinstance(reason, (socket.timeout, TimeoutError))


def _is_retryable(exc):
    return isinstance(exc, ChannelRequestError) and exc.retryable


def _send_once(req, timeout):
    try:
        with request.urlopen(req, timeout=timeout) as response:  # nosec B310
            status_code = response.getcode()
            body = response.read()
    except error.HTTPError as exc:
        body = _read_error_body(exc)
        message = "HTTP {}".format(exc.code)
        if body:
            message = "{} {}".format(message, body)
        raise ChannelRequestError(
            message, status=exc.code, retryable=exc.code in _RETRYABLE_STATUS
        ) from exc
    except error.URLError as exc:
        if _is_timeout(exc.reason):
            raise ChannelRequestError(TIMEOUT_MESSAGE, retryable=True) from exc
        raise ChannelRequestError(str(exc.reason), retryable=True) from exc
    except (socket.timeout, TimeoutError) as exc:
        raise ChannelRequestError(TIMEOUT_MESSAGE, retryable=True) from exc
    # urlopen only wraps connect errors; dropped connections and short reads surface raw
    except (http.client.HTTPException, OSError) as exc:
        raise ChannelRequestError(str(exc) or "connection error", retryable=True) from exc

    if status_code < 200 or status_code >= 300:
        raise ChannelRequestError(
            "HTTP {}".format(status_code),
            status=status_code,
            retryable=status_code in _RETRYABLE_STATUS,
        )
    if not body:
        return {}
    try:
        data = json.loads(body.decode("utf-8"))
    except ValueError as exc:
        raise ChannelRequestError("Invalid JSON response") from exc
    if not isinstance(data, dict):
        raise ChannelRequestError(SHAPE_MESSAGE)
    return data


def request_json(
    method,
    url,
    *,
    headers=None,
    payload=None,
    timeout=15.0,
    max_retries=0,
    backoff_seconds=0.5,
):
    data = None
    merged_headers = {"Accept": "application/json"}
    if payload is not None:
        data = json.dumps(payload).encode("utf-8")
        merged_headers["Content-Type"] = "application/json"
    merged_headers.update(headers or {})

    def _log_retry(retry_state):
        logger.debug(
            "Retrying %s %s after %s (attempt %s)",
            method,
            urlparse(url).path,
            retry_state.outcome.exception(),
            retry_state.attempt_number,
        )

    retrying = Retrying(
        stop=stop_after_attempt(max(0, max_retries) + 1),
        wait=wait_incrementing(start=backoff_seconds, increment=backoff_seconds),
        retry=retry_if_exception(_is_retryable),
        before_sleep=_log_retry,
        reraise=True,
    )
    for attempt in retrying:
        with attempt:
            req = request.Request(url, data=data, method=method, headers=merged_headers)
            return _send_once(req, timeout)


__all__ = ["ChannelRequestError", "SHAPE_MESSAGE", "TIMEOUT_MESSAGE", "request_json", "validate_base_url"]

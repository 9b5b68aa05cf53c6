import http.client
import json
import urllib.error
import urllib.request

DEFAULT_TIMEOUT = 10
NETWORK_FAILURE = 0


def normalize_api_base(api_base, suffix=""):
    base = (api_base or "").rstrip("/")
    if not base:
        return ""
    if suffix and not base.endswith(suffix):
        if suffix in base:
            return base.split(suffix, 1)[0] + suffix
        return base + suffix
    return base


def _decode_json(raw):
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


def _build_request(method, url, payload, headers):
    req_headers = {"Accept": "application/json", **(headers or {})}
    body = None
    if payload is not None:
        req_headers["Content-Type"] = "application/json"
        body = json.dumps(payload).encode("utf-8")
    return urllib.request.Request(url, data=body, headers=req_headers, method=method)


def api_json_request(method, url, payload=None, headers=None, timeout=DEFAULT_TIMEOUT):
    """Sends one JSON request and returns ``(status, parsed, raw)``.

    Never raises for transport problems: HTTP errors keep their status code,
    and connection, read and protocol failures report ``NETWORK_FAILURE``
    with the error text as ``raw``. ``parsed`` is None for non-JSON bodies.
    """
    req = _build_request(method, url, payload, headers)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as response:
            status = response.status
            raw = response.read().decode("utf-8", errors="replace")
    except urllib.error.HTTPError as exc:
        raw = exc.read().decode("utf-8", errors="replace") if exc.fp else ""
        return exc.code, _decode_json(raw), raw
    except (OSError, http.client.HTTPException, ValueError) as exc:
        return NETWORK_FAILURE, None, f"{type(exc).__name__}: {exc}"
    return status, _decode_json(raw), raw

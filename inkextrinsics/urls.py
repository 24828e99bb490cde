"""Node URL helpers."""

from __future__ import annotations

from urllib.parse import urlsplit

_DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
    "ftp": 21,
}


def url_to_string(url: str) -> str:
    """Serialize a URL, always writing the port when the scheme has a default."""
    parts = urlsplit(url.strip())
    scheme = parts.scheme.lower()
    if not scheme or not parts.netloc:
        raise ValueError(f"invalid URL: {url!r}")
    try:
        port = parts.port
    except ValueError as exc:
        raise ValueError(f"invalid port in URL: {url!r}") from exc
    if port is None:
        port = _DEFAULT_PORTS.get(scheme)

    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    userinfo, at, _ = parts.netloc.rpartition("@")
    authority = f"{userinfo}{at}{host}"
    if port is not None:
        authority += f":{port}"

    path = parts.path
    if not path and scheme in _DEFAULT_PORTS:
        path = "/"
    result = f"{scheme}://{authority}{path}"
    if parts.query:
        result += f"?{parts.query}"
    if parts.fragment:
        result += f"#{parts.fragment}"
    return result
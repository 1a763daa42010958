"""URL normalization for cache keys and request deduplication."""

from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

_DEFAULT_PORTS = {"http": 80, "https": 443}


def normalize_url(url: str) -> str:
    """Stable key for *url*.

    The fragment is dropped (it is never sent to the server), scheme and host
    are lower-cased, a default port is removed and an empty path becomes ``/``.
    The query string is kept verbatim.
    """
    parts = urlsplit(url.strip())
    scheme = parts.scheme.lower()
    netloc = parts.netloc
    if parts.hostname is not None:
        userinfo, _, hostport = parts.netloc.rpartition("@")
        host = parts.hostname
        if ":" in host:
            host = f"[{host}]"
        try:
            port = parts.port
        except ValueError:
            # invalid port is kept verbatim
            netloc = hostport.lower()
        else:
            netloc = host if port is None or _DEFAULT_PORTS.get(scheme) == port else f"{host}:{port}"
        if userinfo:
            netloc = f"{userinfo}@{netloc}"
    path = parts.path or ("/" if netloc else "")
    return urlunsplit((scheme, netloc, path, parts.query, ""))


def is_web_url(url: str) -> bool:
    return urlsplit(url.strip()).scheme.lower() in _DEFAULT_PORTS

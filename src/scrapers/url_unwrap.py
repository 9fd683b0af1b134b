# src/scrapers/url_unwrap.py

"""Decode URLs that carry their real destination as a query parameter.

Two shapes show up in search results:

* thumbnail proxies, e.g.
  ``//host/thumb.php?f=https%3a%2f%2fcdn%2fimg.jpg&``
* tracking redirects, e.g.
  ``https://host/redirect?url=https%3A%2F%2Fshop%2Fproduct``

Both are handled by :func:`unwrap_query_url`, which reports failure
explicitly instead of raising.
"""

from dataclasses import dataclass
from urllib.parse import unquote, urljoin, urlparse


@dataclass(frozen=True)
class UnwrapResult:
    """Outcome of an unwrap attempt."""

    ok: bool
    url: str = ""
    reason: str = ""

    @classmethod
    def success(cls, url: str) -> "UnwrapResult":
        return cls(ok=True, url=url)

    @classmethod
    def failure(cls, reason: str) -> "UnwrapResult":
        return cls(ok=False, reason=reason)


def normalize_protocol(url: str) -> str:
    """Prefix protocol-relative URLs (``//host/x``) with ``https:``."""
    url = url.strip()
    if url.startswith("//"):
        return "https:" + url
    return url


def is_absolute_http(url: str) -> bool:
    """Return True for absolute ``http``/``https`` URLs with a host."""
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def absolutize(url: str, base: str) -> str:
    """Resolve *url* against *base*, normalising protocol-relative input."""
    url = normalize_protocol(url)
    if is_absolute_http(url):
        return url
    return urljoin(base, url)


def origin_of(url: str) -> str:
    """Return ``scheme://host`` for *url*."""
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def _query_value(query: str, param: str) -> str | None:
    """Percent-decode the first *param* value; ``+`` stays literal."""
    for pair in query.split("&"):
        key, _, value = pair.partition("=")
        if unquote(key) == param:
            return unquote(value)
    return None


def unwrap_query_url(url: str, param: str) -> UnwrapResult:
    """Extract and decode the absolute URL carried in query parameter *param*."""
    if not url:
        return UnwrapResult.failure("empty url")
    try:
        parsed = urlparse(normalize_protocol(url))
    except ValueError as exc:
        return UnwrapResult.failure(f"unparseable url: {exc}")
    value = _query_value(parsed.query, param)
    if value is None or not value.strip():
        return UnwrapResult.failure(f"no '{param}' parameter")

    # Decoded once above; double-encoded payloads need another pass
    target = value.strip()
    if target.lower().startswith(("http%3a", "https%3a", "%2f%2f")):
        target = unquote(target)
    target = normalize_protocol(target)

    if not is_absolute_http(target):
        return UnwrapResult.failure(
            f"'{param}' is not an absolute http(s) url: {target!r}"
        )
    return UnwrapResult.success(target)

"""Split URL text into components, rejecting malformed input."""

from __future__ import annotations

import ipaddress
import logging
import re
import unicodedata
from urllib.parse import SplitResult, unquote, urlsplit

from url_hash.models.url import ParsedUrl

logger = logging.getLogger(__name__)

SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp", "file"})

# Code points a host may not contain once percent-decoded
FORBIDDEN_HOST_CHARS = frozenset(" #%/:<>?@[\\]^|\x7f") | frozenset(
    chr(i) for i in range(0x20)
)

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.\-]*$")
_C0_OR_SPACE = "".join(chr(i) for i in range(0x21))


class UrlParseError(ValueError):
    """Raised when text cannot be decomposed into a URL."""


def _split(cleaned: str, text: str) -> SplitResult:
    try:
        return urlsplit(cleaned)
    except ValueError as e:
        raise UrlParseError(f"Invalid URL {text!r}: {e}") from e


def _check_host(host: str, netloc: str, text: str) -> None:
    if "[" in netloc.rpartition("@")[2]:
        try:
            address = ipaddress.IPv6Address(host)
        except ValueError as e:
            raise UrlParseError(f"Invalid IPv6 host in {text!r}: {e}") from e
        if address.scope_id:
            raise UrlParseError(f"IPv6 zone identifiers are not allowed: {text!r}")
        return
    decoded = unicodedata.normalize("NFKC", unquote(host))
    forbidden = sorted(set(decoded) & FORBIDDEN_HOST_CHARS)
    if forbidden:
        raise UrlParseError(
            f"Forbidden character(s) {''.join(forbidden)!r} in host of {text!r}"
        )


def parse_url(text: str) -> ParsedUrl:
    """Decompose URL text into a ParsedUrl.

    Leading and trailing control characters and spaces are stripped and
    ASCII tab/newline characters removed before splitting. For special
    schemes a backslash before the query is read as ``/``.
    """
    cleaned = text.strip(_C0_OR_SPACE)
    cleaned = cleaned.replace("\t", "").replace("\n", "").replace("\r", "")
    if not cleaned:
        raise UrlParseError("URL is empty")
    if any("\ud800" <= ch <= "\udfff" for ch in cleaned):
        raise UrlParseError(f"URL contains an unpaired surrogate: {text!r}")

    parts = _split(cleaned, text)

    scheme = parts.scheme.lower()
    if not scheme:
        raise UrlParseError(f"URL has no scheme: {text!r}")
    if not _SCHEME_RE.match(scheme):
        raise UrlParseError(f"Invalid scheme {parts.scheme!r} in {text!r}")

    if scheme in SPECIAL_SCHEMES:
        cut = min(
            (i for i in (cleaned.find("?"), cleaned.find("#")) if i >= 0),
            default=len(cleaned),
        )
        if "\\" in cleaned[:cut]:
            cleaned = cleaned[:cut].replace("\\", "/") + cleaned[cut:]
            parts = _split(cleaned, text)

    has_authority = cleaned[len(scheme) + 1:].startswith("//")
    if scheme in SPECIAL_SCHEMES and scheme != "file" and not has_authority:
        raise UrlParseError(f"URL has no host: {text!r}")

    userinfo = None
    host = None
    port = None
    if has_authority:
        try:
            port = parts.port
        except ValueError as e:
            raise UrlParseError(f"Invalid port in {text!r}: {e}") from e
        host = parts.hostname or ""
        if not host and scheme in SPECIAL_SCHEMES and scheme != "file":
            raise UrlParseError(f"URL has an empty host: {text!r}")
        _check_host(host, parts.netloc, text)
        if "@" in parts.netloc:
            userinfo = parts.netloc.rpartition("@")[0]

    before_fragment, hash_sign, _ = cleaned.partition("#")
    query = parts.query if "?" in before_fragment else None
    fragment = parts.fragment if hash_sign else None

    parsed = ParsedUrl(
        scheme=scheme,
        userinfo=userinfo,
        host=host,
        port=port,
        path=parts.path,
        query=query,
        fragment=fragment,
    )
    logger.debug("Parsed %r into %r", text, parsed)
    return parsed

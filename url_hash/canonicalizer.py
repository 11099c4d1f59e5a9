"""Canonicalize URLs so equivalent spellings render identically.

Rules, applied in order:

1. The scheme is lower-cased.
2. The host is percent-decoded and lower-cased; IPv6 literals are compressed.
3. Non-ASCII hosts get the IDNA mapping (ideographic full stops become
   ``.``, NFKC) and their non-ASCII labels the punycode (``xn--``) form.
4. A port equal to the scheme's default is dropped.
5. ``.`` and ``..`` path segments, including ``%2e`` spellings, are removed.
6. An empty path becomes ``/``.
7. Path, query and fragment are percent-encoded; existing ``%XX`` escapes
   are kept as they are.
"""

from __future__ import annotations

import ipaddress
import logging
import unicodedata
from typing import Optional
from urllib.parse import quote, unquote

from url_hash.models.config import HashConfig
from url_hash.models.url import ParsedUrl
from url_hash.url_parser import SPECIAL_SCHEMES, parse_url

logger = logging.getLogger(__name__)

# Percent-encode sets, on top of C0 controls and non-ASCII
PATH_ENCODE_SET = frozenset(' "#<>?`{}')
QUERY_ENCODE_SET = frozenset(' "#<>')
SPECIAL_QUERY_ENCODE_SET = QUERY_ENCODE_SET | {"'"}
FRAGMENT_ENCODE_SET = frozenset(' "<>`')
USERINFO_ENCODE_SET = PATH_ENCODE_SET | frozenset("/:;=@[\\]^|")

# Label separators IDNA maps to "."
_IDNA_DOTS = str.maketrans({"。": ".", "．": ".", "｡": "."})

_SINGLE_DOT = frozenset({".", "%2e"})
_DOUBLE_DOT = frozenset({"..", ".%2e", "%2e.", "%2e%2e"})

_DEFAULT_CONFIG = HashConfig()


def _percent_encode(value: str, encode_set: frozenset[str]) -> str:
    return "".join(
        quote(ch, safe="", errors="surrogatepass")
        if ch in encode_set or not " " <= ch <= "~"
        else ch
        for ch in value
    )


def _normalize_host(host: str) -> str:
    host = unquote(host)
    if ":" in host:
        # IPv6 literal
        try:
            host = ipaddress.IPv6Address(host).compressed
        except ValueError:
            host = host.lower()
        return f"[{host}]"
    if not host.isascii():
        host = unicodedata.normalize("NFKC", host.translate(_IDNA_DOTS))
    labels = []
    for label in host.lower().split("."):
        if not label.isascii():
            label = unicodedata.normalize("NFC", label)
            label = "xn--" + label.encode("punycode").decode("ascii")
        labels.append(label)
    return ".".join(labels)


def _remove_dot_segments(path: str) -> str:
    """Remove ``.`` and ``..`` segments from an absolute path (RFC 3986 5.2.4).

    ``%2e`` counts as a dot in either case. A ``..`` with no segment left to
    remove is dropped, so ``/../x`` becomes ``/x``. A trailing ``.`` or
    ``..`` leaves a trailing slash.
    """
    segments = path.split("/")
    output: list[str] = []
    last = len(segments) - 1
    for i, segment in enumerate(segments):
        lowered = segment.lower()
        if lowered in _SINGLE_DOT:
            if i == last:
                output.append("")
        elif lowered in _DOUBLE_DOT:
            # output[0] is the empty segment before the leading slash
            if len(output) > 1:
                output.pop()
            if i == last:
                output.append("")
        else:
            output.append(segment)
    return "/".join(output)


def canonicalize(url: ParsedUrl, config: Optional[HashConfig] = None) -> str:
    """Render a parsed URL in its canonical text form."""
    config = config or _DEFAULT_CONFIG
    scheme = url.scheme.lower()

    if url.has_authority:
        authority = ""
        if url.userinfo is not None:
            user, colon, password = url.userinfo.partition(":")
            authority = (
                _percent_encode(user, USERINFO_ENCODE_SET)
                + colon
                + _percent_encode(password, USERINFO_ENCODE_SET)
                + "@"
            )
        authority += _normalize_host(url.host)
        if url.port is not None and url.port != config.default_port(scheme):
            authority += f":{url.port}"

        path = url.path
        if path and not path.startswith("/"):
            path = "/" + path
        path = _remove_dot_segments(path) or "/"
        result = f"{scheme}://{authority}{_percent_encode(path, PATH_ENCODE_SET)}"
    else:
        path = url.path
        if path.startswith("/"):
            path = _remove_dot_segments(path)
        result = f"{scheme}:{_percent_encode(path, PATH_ENCODE_SET)}"

    if url.query is not None:
        query_set = SPECIAL_QUERY_ENCODE_SET if scheme in SPECIAL_SCHEMES else QUERY_ENCODE_SET
        result += "?" + _percent_encode(url.query, query_set)
    if url.fragment is not None:
        result += "#" + _percent_encode(url.fragment, FRAGMENT_ENCODE_SET)

    logger.debug("Canonical form: %s", result)
    return result


def canonicalize_url(text: str, config: Optional[HashConfig] = None) -> str:
    """Parse URL text and return its canonical form.

    Raises UrlParseError when the text is not a valid URL.
    """
    return canonicalize(parse_url(text), config)

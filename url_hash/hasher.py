"""Derive stable SHA-256 hashes from canonical URLs."""

from __future__ import annotations

import hashlib
import logging
from typing import Optional, Union

from url_hash.canonicalizer import canonicalize
from url_hash.models.config import HashConfig
from url_hash.models.hashes import FullHash
from url_hash.models.url import ParsedUrl
from url_hash.url_parser import parse_url

logger = logging.getLogger(__name__)


def digest(canonical: str) -> FullHash:
    """Hash a canonical URL string into a FullHash."""
    return FullHash.from_digest(hashlib.sha256(canonical.encode("utf-8")).digest())


def hash_url(url: Union[str, ParsedUrl], config: Optional[HashConfig] = None) -> FullHash:
    """Canonicalize a URL and hash it.

    Text input is parsed first and may raise UrlParseError.
    """
    parsed = parse_url(url) if isinstance(url, str) else url
    canonical = canonicalize(parsed, config)
    full_hash = digest(canonical)
    logger.debug("Hashed %s -> %s", canonical, full_hash)
    return full_hash

"""URL index — deduplicates URLs by hash and persists them as JSON."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from url_hash.canonicalizer import canonicalize
from url_hash.hasher import digest
from url_hash.models.config import HashConfig
from url_hash.models.hashes import FullHash, ShortHash, VeryShortHash
from url_hash.models.index import IndexSnapshot
from url_hash.models.url import ParsedUrl
from url_hash.url_parser import parse_url

logger = logging.getLogger(__name__)


class UrlIndex:
    """In-memory map of FullHash to canonical URL."""

    def __init__(self, config: Optional[HashConfig] = None):
        self.config = config
        self._entries: dict[FullHash, str] = {}

    def _resolve(self, url: Union[str, ParsedUrl]) -> tuple[FullHash, str]:
        parsed = parse_url(url) if isinstance(url, str) else url
        canonical = canonicalize(parsed, self.config)
        return digest(canonical), canonical

    def add(self, url: Union[str, ParsedUrl]) -> bool:
        """Record a URL. Returns False when an equivalent URL is already present."""
        full_hash, canonical = self._resolve(url)
        if full_hash in self._entries:
            logger.debug("Duplicate URL %s (%s)", canonical, full_hash)
            return False
        self._entries[full_hash] = canonical
        return True

    def get(self, full_hash: FullHash) -> Optional[str]:
        return self._entries.get(full_hash)

    def find(self, prefix: Union[ShortHash, VeryShortHash]) -> list[FullHash]:
        """Return every stored hash that starts with the given prefix."""
        if isinstance(prefix, ShortHash):
            return [h for h in self._entries if h.starts_with(prefix)]
        return [h for h in self._entries if h.starts_with_just(prefix)]

    def __contains__(self, item: object) -> bool:
        if isinstance(item, FullHash):
            return item in self._entries
        if isinstance(item, (str, ParsedUrl)):
            return self._resolve(item)[0] in self._entries
        return False

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FullHash]:
        return iter(self._entries)

    def items(self) -> Iterator[tuple[FullHash, str]]:
        return iter(self._entries.items())

    def to_snapshot(self) -> IndexSnapshot:
        return IndexSnapshot(entries={str(h): url for h, url in self._entries.items()})

    @classmethod
    def from_snapshot(
        cls, snapshot: IndexSnapshot, config: Optional[HashConfig] = None
    ) -> "UrlIndex":
        index = cls(config)
        for key, url in snapshot.entries.items():
            index._entries[FullHash.parse(key)] = url
        return index


def dedupe(urls: Iterable[str], config: Optional[HashConfig] = None) -> list[str]:
    """Keep the first of each group of equivalent URLs, preserving order."""
    index = UrlIndex(config)
    return [url for url in urls if index.add(url)]


class UrlIndexStore:
    """Loads and saves a UrlIndex as a JSON file."""

    def __init__(self, path: Path, config: Optional[HashConfig] = None):
        self.path = Path(path)
        self.config = config

    def load(self) -> UrlIndex:
        """Load the index from disk, or create an empty one."""
        if self.path.exists():
            try:
                with open(self.path) as f:
                    data = json.load(f)
                return UrlIndex.from_snapshot(IndexSnapshot(**data), self.config)
            except Exception as e:
                logger.warning("Failed to load URL index: %s. Creating new.", e)
        return UrlIndex(self.config)

    def save(self, index: UrlIndex) -> None:
        """Persist the index to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        snapshot = index.to_snapshot()
        snapshot.last_updated = time.strftime("%Y-%m-%dT%H:%M:%SZ")
        with open(self.path, "w") as f:
            json.dump(snapshot.model_dump(), f, indent=2)
        logger.debug("Saved %d URLs to %s", len(index), self.path)

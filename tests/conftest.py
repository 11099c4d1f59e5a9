"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from url_hash.hasher import hash_url
from url_hash.models.config import HashConfig
from url_hash.models.hashes import FullHash
from url_hash.models.url import ParsedUrl


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def hash_config() -> HashConfig:
    """Create a config with an extra default port."""
    return HashConfig(default_ports={"gopher": 70})


@pytest.fixture
def temp_config_file(hash_config: HashConfig, tmp_path: Path) -> Path:
    """Create a temporary config file."""
    config_file = tmp_path / "url-hash.json"
    hash_config.save(config_file)
    return config_file


# ============================================================================
# URL and Hash Fixtures
# ============================================================================


@pytest.fixture
def parsed_url() -> ParsedUrl:
    """Create a decomposed URL in non-canonical form."""
    return ParsedUrl(
        scheme="HTTPS",
        host="Example.COM",
        port=443,
        path="/foo/../bar/./baz.jpg",
        query="q=hello world",
        fragment="to world",
    )


@pytest.fixture
def full_hash() -> FullHash:
    """Hash of a real documentation URL."""
    return hash_url(
        "https://doc.rust-lang.org/std/primitive.u8.html#method.to_ascii_lowercase"
    )


@pytest.fixture
def url_corpus() -> list[str]:
    """A few hundred distinct, realistic, already-canonical URLs."""
    hosts = ["example.com", "www.example.org", "api.example.net", "xn--exmple-xta.com"]
    urls = []
    for host in hosts:
        urls.append(f"https://{host}/")
        urls.append(f"http://{host}/")
        urls.append(f"https://{host}:8443/")
        for i in range(50):
            urls.append(f"https://{host}/articles/{i}")
            urls.append(f"https://{host}/search?q=term{i}&page={i % 5}")
        urls.append(f"https://{host}/docs/index.html#section-1")
        urls.append(f"https://{host}/docs/index.html#section-2")
    return urls

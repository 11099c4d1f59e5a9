"""Tests for the url-hash command line."""

import json
from pathlib import Path

from click.testing import CliRunner

from url_hash.cli import cli
from url_hash.hasher import hash_url


def run(*args: str):
    return CliRunner().invoke(cli, list(args))


class TestCanonicalizeCommand:
    def test_prints_canonical_forms(self):
        result = run("canonicalize", "HTTPS://Example.COM:443", "http://example.com/a/../b")
        assert result.exit_code == 0
        assert result.output.splitlines() == ["https://example.com/", "http://example.com/b"]

    def test_invalid_url_exits_1(self):
        result = run("canonicalize", "example.com")
        assert result.exit_code == 1
        assert "no scheme" in result.output

    def test_uses_config_file(self, temp_config_file: Path):
        result = run("-c", str(temp_config_file), "canonicalize", "gopher://example.com:70/")
        assert result.exit_code == 0
        assert result.output.strip() == "gopher://example.com/"

    def test_missing_config_exits_1(self, tmp_path: Path):
        result = run("-c", str(tmp_path / "missing.json"), "canonicalize", "https://example.com/")
        assert result.exit_code == 1
        assert "Config file not found" in result.output


class TestHashCommand:
    def test_full_hash(self):
        result = run("hash", "https://example.com/")
        assert result.exit_code == 0
        assert "URL Hashes" in result.output

    def test_forms(self):
        for form in ("short", "very-short"):
            result = run("hash", "--form", form, "https://example.com/")
            assert result.exit_code == 0

    def test_very_short_value_shown(self):
        expected = str(hash_url("https://example.com/").very_short())
        result = run("hash", "-f", "very-short", "https://example.com/")
        assert expected in result.output

    def test_rejects_unknown_form(self):
        result = run("hash", "--form", "tiny", "https://example.com/")
        assert result.exit_code == 2


class TestCompareCommand:
    def test_equivalent_urls(self):
        result = run("compare", "http://EXAMPLE.com:80", "http://example.com/")
        assert result.exit_code == 0
        assert "Same hash" in result.output

    def test_different_urls(self):
        result = run("compare", "http://example.com/a", "http://example.com/b")
        assert result.exit_code == 1
        assert "Different hashes" in result.output


class TestDedupeCommand:
    def test_prints_unique_urls(self, tmp_path: Path):
        url_file = tmp_path / "urls.txt"
        url_file.write_text(
            "https://example.com/a\n\nhttps://EXAMPLE.com/a\nhttps://example.com/b\n"
        )
        result = run("dedupe", str(url_file))
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines == ["https://example.com/a", "https://example.com/b"]

    def test_skips_invalid_urls(self, tmp_path: Path):
        url_file = tmp_path / "urls.txt"
        url_file.write_text("not a url\nhttps://example.com/\n")
        result = run("dedupe", str(url_file))
        assert result.exit_code == 0
        assert "https://example.com/" in result.output
        assert "1 invalid URLs skipped" in result.output

    def test_merges_into_index(self, tmp_path: Path):
        index_path = tmp_path / "index.json"
        first = tmp_path / "first.txt"
        first.write_text("https://example.com/a\n")
        second = tmp_path / "second.txt"
        second.write_text("https://example.com/a\nhttps://example.com/c\n")

        assert run("dedupe", str(first), "--index", str(index_path)).exit_code == 0
        result = run("dedupe", str(second), "--index", str(index_path))
        assert result.exit_code == 0
        assert "https://example.com/c" in result.output
        assert "https://example.com/a\n" not in result.output

        data = json.loads(index_path.read_text())
        assert len(data["entries"]) == 2

    def test_missing_file(self, tmp_path: Path):
        result = run("dedupe", str(tmp_path / "nope.txt"))
        assert result.exit_code == 2

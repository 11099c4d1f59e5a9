"""CLI entry point for URL hashing."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from url_hash.canonicalizer import canonicalize
from url_hash.hasher import digest
from url_hash.index import UrlIndex, UrlIndexStore
from url_hash.models.config import HashConfig
from url_hash.url_parser import UrlParseError, parse_url

console = Console()
logger = logging.getLogger(__name__)

HASH_FORMS = ("full", "short", "very-short")


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _canonical_or_exit(url: str, config: HashConfig) -> str:
    try:
        return canonicalize(parse_url(url), config)
    except UrlParseError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--config", "-c", default=None, help="Config file path")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """Stable, cross-platform hashes for URLs"""
    setup_logging(verbose)
    if config is None:
        ctx.obj = HashConfig()
        return
    try:
        ctx.obj = HashConfig.load(config)
    except FileNotFoundError:
        console.print(f"[red]Config file not found: {config}[/red]")
        sys.exit(1)


@cli.command(name="canonicalize")
@click.argument("urls", nargs=-1, required=True)
@click.pass_obj
def canonicalize_cmd(config: HashConfig, urls: tuple[str, ...]) -> None:
    """Print the canonical form of each URL."""
    for url in urls:
        click.echo(_canonical_or_exit(url, config))


@cli.command(name="hash")
@click.argument("urls", nargs=-1, required=True)
@click.option(
    "--form", "-f", type=click.Choice(HASH_FORMS), default="full", help="Hash length"
)
@click.option("--binary", is_flag=True, help="Show the raw bytes as hex")
@click.pass_obj
def hash_cmd(config: HashConfig, urls: tuple[str, ...], form: str, binary: bool) -> None:
    """Hash each URL."""
    table = Table(title="URL Hashes")
    table.add_column("URL", style="bold")
    table.add_column("Canonical")
    table.add_column("Hash", style="green")

    for url in urls:
        canonical = _canonical_or_exit(url, config)
        value = digest(canonical)
        if form == "short":
            value = value.short()
        elif form == "very-short":
            value = value.very_short()
        rendered = value.to_bytes().hex() if binary else str(value)
        table.add_row(escape(url), escape(canonical), rendered)

    console.print(table)


@cli.command()
@click.argument("url_a")
@click.argument("url_b")
@click.pass_obj
def compare(config: HashConfig, url_a: str, url_b: str) -> None:
    """Check whether two URLs hash identically."""
    hash_a = digest(_canonical_or_exit(url_a, config))
    hash_b = digest(_canonical_or_exit(url_b, config))
    if hash_a == hash_b:
        console.print(f"[green]Same hash:[/green] {hash_a}")
        return
    console.print("[yellow]Different hashes[/yellow]")
    console.print(f"  {escape(url_a)}: {hash_a}")
    console.print(f"  {escape(url_b)}: {hash_b}")
    sys.exit(1)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--index", "-i", "index_path", default=None, help="Persisted index file to merge into")
@click.pass_obj
def dedupe(config: HashConfig, file: str, index_path: str | None) -> None:
    """Print the unique URLs of FILE (one URL per line)."""
    store = UrlIndexStore(Path(index_path), config) if index_path else None
    index = store.load() if store else UrlIndex(config)
    before = len(index)

    with open(file) as f:
        lines = [line.strip() for line in f]

    skipped = 0
    for url in lines:
        if not url:
            continue
        try:
            added = index.add(url)
        except UrlParseError as e:
            logger.warning("Skipping %r: %s", url, e)
            skipped += 1
            continue
        if added:
            click.echo(url)

    if store:
        store.save(index)
        console.print(
            f"[green]Index updated:[/green] {len(index) - before} new, {len(index)} total",
            highlight=False,
        )
    if skipped:
        console.print(f"[yellow]{skipped} invalid URLs skipped[/yellow]")


if __name__ == "__main__":
    cli()

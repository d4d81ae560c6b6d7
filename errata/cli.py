"""Command line interface for building, ingesting, querying and serving the catalog."""

import asyncio
import sys
from pathlib import Path
from typing import NoReturn, Optional, Tuple

import click

from errata.config import settings
from errata.errors import ErrataError, RecordValidationError, UpstreamUnavailableError
from errata.utils.logging import setup_logging


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL for this run.")
def main(log_level: Optional[str]):
    """Errata API error catalog."""
    setup_logging(log_level or settings.log_level)


@main.command()
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Snapshot file to write (defaults to SNAPSHOT_PATH).",
)
@click.option("--dedupe", is_flag=True, help="Collapse records sharing a natural key.")
@click.option("--api", "apis", multiple=True, help="Only build these APIs (repeatable).")
def build(output: Optional[Path], dedupe: bool, apis: Tuple[str, ...]):
    """Build the normalized dataset and write the snapshot."""
    from errata.pipeline import build_snapshot, summarize

    output = output or Path(settings.snapshot_path)

    try:
        records = build_snapshot(output, apis=apis or None, dedupe=dedupe)
    except RecordValidationError as e:
        for problem in e.problems:
            click.echo(f"  {problem}", err=True)
        _fail(f"{len(e.problems)} seed record(s) failed validation; nothing written")
    except ErrataError as e:
        _fail(str(e))

    summary = summarize(records)
    click.echo(f"Wrote {summary['total']} records to {output}")
    for title, key in (
        ("By error type", "by_error_type"),
        ("By resource", "by_resource"),
        ("By severity", "by_severity"),
        ("By build severity", "by_build_severity"),
    ):
        click.echo(f"{title}:")
        for name, count in sorted(summary[key].items()):
            click.echo(f"  {name}: {count}")


@main.command()
@click.argument("raw", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("out", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--api", default="Stripe", show_default=True, help="API the listing belongs to.")
def transform(raw: Path, out: Path, api: str):
    """Turn a raw error-code listing into a normalized snapshot."""
    from errata.pipeline import normalize_all, transform_raw_errors, write_snapshot

    if not raw.exists():
        _fail(f"Raw listing not found: {raw}")

    seeds = transform_raw_errors(raw.read_text(encoding="utf-8"), api=api)
    records = normalize_all(seeds)
    write_snapshot(records, out)
    click.echo(f"Transformed {len(records)} {api} error codes into {out}")


@main.command()
@click.argument("snapshot", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.option("--store-url", default=None, help="Store endpoint (defaults to STORE_URL).")
def ingest(snapshot: Optional[Path], store_url: Optional[str]):
    """Load a snapshot into the remote error store."""
    from errata.pipeline import load_snapshot
    from errata.services.ingester import Ingester
    from errata.services.store import HelixErrorStore

    snapshot = snapshot or Path(settings.snapshot_path)
    if not snapshot.exists():
        _fail(f"Snapshot not found: {snapshot}")

    records = load_snapshot(snapshot)
    click.echo(f"Ingesting {len(records)} error patterns from {snapshot}")

    async def _run():
        async with HelixErrorStore(base_url=store_url) as store:
            return await Ingester(store).ingest(records)

    try:
        reports = asyncio.run(_run())
    except ErrataError as e:
        _fail(str(e))

    for report in reports:
        click.echo(
            f"{report.api}: {report.succeeded}/{report.total} ingested "
            f"({report.success_rate:.1f}%)"
        )
        for code in report.failed_codes:
            click.echo(f"  failed: {code}", err=True)


@main.command()
@click.argument("query", required=False, default="")
@click.option("--api", default=None, help="Restrict to one API.")
@click.option("--severity", default=None, help="critical, error, warning or all.")
@click.option("--page", default=1, show_default=True, type=click.IntRange(min=1))
@click.option("--store-url", default=None, help="Store endpoint (defaults to STORE_URL).")
def search(query: str, api: Optional[str], severity: Optional[str], page: int, store_url: Optional[str]):
    """Search the error patterns held in the remote store."""
    from errata.services.catalog import RemoteErrorCatalog
    from errata.services.store import HelixErrorStore

    async def _run():
        async with HelixErrorStore(base_url=store_url) as store:
            catalog = RemoteErrorCatalog(store, page_size=settings.page_size)
            return await catalog.query(query, page, api, severity)

    outcome = asyncio.run(_run())
    if outcome.degraded:
        _fail(outcome.message)

    result = outcome.result
    click.echo(f"{result.total} error(s), page {result.page} of {max(result.pages, 1)}")
    for record in result.errors:
        click.echo(f"  [{record.api}] {record.code} ({record.severity.value}): {record.error_message}")


@main.command()
@click.argument("code")
@click.option("--store-url", default=None, help="Store endpoint (defaults to STORE_URL).")
def show(code: str, store_url: Optional[str]):
    """Show one error pattern from the remote store with its best fix."""
    from errata.services.catalog import DEGRADED_MESSAGE, RemoteErrorCatalog
    from errata.services.store import HelixErrorStore

    async def _run():
        async with HelixErrorStore(base_url=store_url) as store:
            return await RemoteErrorCatalog(store).get_error_detail(code)

    try:
        record = asyncio.run(_run())
    except UpstreamUnavailableError:
        _fail(DEGRADED_MESSAGE)
    except ErrataError as e:
        _fail(str(e))

    click.echo(f"{record.code} [{record.api}] HTTP {record.http_status or '-'}")
    click.echo(f"  {record.error_message}")
    click.echo(f"Fix: {record.solution_title}")
    click.echo(f"  {record.solution_description}")
    click.echo(f"Docs: {record.source_url}")


@main.command()
@click.option("--host", default="0.0.0.0", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
def serve(host: str, port: int):
    """Serve the catalog over HTTP."""
    import uvicorn

    uvicorn.run("errata.main:app", host=host, port=port)


if __name__ == "__main__":
    main()

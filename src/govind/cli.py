import logging
from pathlib import Path

import click
import duckdb
import pandas as pd
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from govind.core.config import IndexerConfig
from govind.core.errors import GovernorError
from govind.core.models import LedgerStats
from govind.core.use_cases.index_ledger import LedgerIndexService
from govind.decoding.catalog import catalog_specs
from govind.ledger.json_reader import load_ledger_file
from govind.storage.duckdb_store import DuckDBStateStore
from govind.storage.export import export_parquet
from govind.storage.queries import fetch_proposals, fetch_votes

console = Console()

DEFAULT_DB = IndexerConfig().db_path

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_DB,
    show_default=True,
    help="DuckDB database file",
)


def _df_table(df: pd.DataFrame, title: str) -> Table:
    table = Table(title=title)
    for col in df.columns:
        table.add_column(str(col))
    for row in df.itertuples(index=False):
        table.add_row(*("" if v is None else str(v) for v in row))
    return table


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
)
def cli(log_level: str) -> None:
    """govind: governor event indexer for Soroban ledgers."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command("index")
@click.argument(
    "ledger_files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@db_option
@click.option(
    "--on-store-error",
    type=click.Choice(["continue", "raise"]),
    default="continue",
    show_default=True,
    help="Keep going after a failed write, or abort the ledger",
)
def index_cmd(ledger_files: tuple[Path, ...], db_path: Path, on_store_error: str) -> None:
    """Index JSON ledger exports, one closed ledger per file, in sequence order."""
    config = IndexerConfig(db_path=db_path, on_store_error=on_store_error)

    try:
        readers = [load_ledger_file(p) for p in ledger_files]
    except GovernorError as e:
        raise click.ClickException(str(e)) from e
    readers.sort(key=lambda r: r.ledger_sequence())

    service = LedgerIndexService(lambda: DuckDBStateStore(config.db_path), config)
    results: list[LedgerStats] = []

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[bold]indexing ledgers[/]"),
        BarColumn(),
        MofNCompleteColumn(),
        TextColumn("•"),
        TimeElapsedColumn(),
        transient=True,
        console=console,
    )
    with progress:
        task = progress.add_task("ledgers", total=len(readers))
        for reader in readers:
            try:
                results.append(service.on_close(reader))
            except GovernorError as e:
                raise click.ClickException(f"ledger {reader.ledger_sequence()}: {e}") from e
            progress.advance(task, 1)

    summary = Table(title="ledgers")
    for col in ("ledger", "txs", "events", "votes", "created", "updated", "failures"):
        summary.add_column(col, justify="right")
    for s in results:
        summary.add_row(
            str(s.ledger),
            str(s.tx_seen),
            str(s.events_seen),
            str(s.votes_written),
            str(s.proposals_created),
            str(s.status_updates),
            f"[red]{len(s.failures)}[/]" if s.failures else "0",
        )
    console.print(summary)

    for s in results:
        for f in s.failures:
            console.print(f"[red]failed[/] ledger={s.ledger} tx={f.tx_hash} event={f.event_index} {f.kind}: {f.error}")

    console.print(
        f"[bold]done[/]: {len(results)} ledgers • "
        f"[green]writes[/]={sum(s.writes for s in results)}  "
        f"[red]failures[/]={sum(len(s.failures) for s in results)}"
    )


@cli.command("proposals")
@db_option
@click.option("--contract", default=None, help="Contract hash (hex)")
def proposals_cmd(db_path: Path, contract: str | None) -> None:
    """List indexed proposals with their current status."""
    try:
        df = fetch_proposals(db_path, contract=contract)
    except duckdb.Error as e:
        raise click.ClickException(f"{db_path}: {e}") from e
    console.print(_df_table(df.drop(columns=["action", "description"]), "proposals"))


@cli.command("votes")
@db_option
@click.option("--contract", default=None, help="Contract hash (hex)")
@click.option("--proposal", "proposal_number", type=int, default=None, help="Proposal number")
def votes_cmd(db_path: Path, contract: str | None, proposal_number: int | None) -> None:
    """List recorded votes in the order they were indexed."""
    try:
        df = fetch_votes(db_path, contract=contract, proposal_number=proposal_number)
    except duckdb.Error as e:
        raise click.ClickException(f"{db_path}: {e}") from e
    console.print(_df_table(df, "votes"))


@cli.command("export")
@db_option
@click.option("--out", "out_dir", type=click.Path(file_okay=False, path_type=Path), required=True)
def export_cmd(db_path: Path, out_dir: Path) -> None:
    """Export votes and proposals to Parquet."""
    try:
        paths = export_parquet(db_path, out_dir)
    except duckdb.Error as e:
        raise click.ClickException(f"{db_path}: {e}") from e
    for path in paths:
        console.print(f"[bold]wrote[/] {path}")


@cli.command("catalog")
def catalog_cmd() -> None:
    """Show the governor events the indexer recognizes."""
    table = Table(title="event catalog")
    table.add_column("event")
    table.add_column("topics")
    table.add_column("data")
    for spec in catalog_specs():
        topics = ", ".join(f"{t.index}:{t.name}:{t.type}" for t in spec.topic_fields)
        data = ", ".join(f"{d.position}:{d.name}:{d.type}" for d in spec.data_fields) or "-"
        table.add_row(spec.symbol, topics, data)
    console.print(table)


if __name__ == "__main__":
    cli()

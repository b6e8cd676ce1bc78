"""CLI for the ``statement_merger`` package.

A Typer-based console interface over the ingestion pipeline. Environment
variables (``OPENAI_API_KEY`` and the ``STATEMENT_MERGER_*`` settings) are
loaded from a local ``.env`` using ``python-dotenv`` before any command runs.
Business logic lives in :mod:`statement_merger.ingest` and related modules;
this module only handles I/O and presentation.

Commands
--------
- ``merge FILE...``: consolidate statement exports into one CSV.
- ``paste``: consolidate a statement pasted on stdin.
- ``summarize FILE...``: consolidate, then print an AI spending summary.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .ingest import ingest_files, ingest_text
from .ledger import merge, sort_ledger
from .logging_setup import configure_logging
from .models import AiSummary, FileStatus, Ledger, Origin
from .serialize import serialize

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Merge bank and card statement exports into one categorized, "
        "deduplicated ledger. Loads settings from a local .env before running."
    ),
)
# Status and summaries go to stderr so stdout stays a clean CSV stream.
console = Console(stderr=True)


# ---- Presentation helpers ----------------------------------------------------


def _print_statuses(statuses: Sequence[FileStatus]) -> None:
    table = Table(title="Ingested files")
    table.add_column("File")
    table.add_column("Status")
    table.add_column("Rows", justify="right")
    table.add_column("Reason")
    for s in statuses:
        style = "green" if s.status == "processed" else "yellow"
        table.add_row(s.name, f"[{style}]{s.status}[/{style}]", str(s.count), s.reason or "")
    console.print(table)


def _print_summary(summary: AiSummary) -> None:
    console.print(Panel(summary.overview, title="Overview", border_style="cyan"))
    table = Table(title="Top categories")
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    for item in summary.top_categories:
        table.add_row(item.category, f"{item.amount:,.2f}")
    console.print(table)
    console.print(Panel(summary.savings_advice, title="Savings advice", border_style="green"))


def _emit(ledger: Ledger, output: Path | None) -> None:
    text = serialize(ledger)
    if output is None:
        if text:
            sys.stdout.write(text + "\n")
        return
    output.write_text(text, encoding="utf-8")
    console.print(f"[cyan]Wrote[/cyan] {len(ledger)} transactions to {output}")


# ---- Commands ----------------------------------------------------------------


FILES_ARGUMENT = typer.Argument(help="Statement CSV exports (EQ_, CIBC_, PC_, WS_ prefixes).")
OUTPUT_OPTION = typer.Option(
    "--output", "-o", help="Write the consolidated CSV here instead of stdout."
)
SORT_OPTION = typer.Option(
    "--sort", help="Column to sort by (Date, Description, Category, Amount, ...)."
)


@app.command("merge")
def merge_cmd(
    files: Annotated[list[Path], FILES_ARGUMENT],
    output: Annotated[Path | None, OUTPUT_OPTION] = None,
    sort: Annotated[str, SORT_OPTION] = "Date",
    ascending: Annotated[bool, typer.Option(help="Sort ascending instead of descending.")] = False,
    workers: Annotated[
        int | None, typer.Option(help="Max concurrent files (env STATEMENT_MERGER_MAX_WORKERS).")
    ] = None,
) -> None:
    """Consolidate statement exports into one categorized CSV."""

    try:
        ledger, statuses = ingest_files(files, max_workers=workers)
        ordered = sort_ledger(ledger, sort, descending=not ascending)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2) from e

    _print_statuses(statuses)
    if not any(s.status == "processed" for s in statuses):
        console.print("[red]Error:[/red] no input file could be processed.")
        raise typer.Exit(1)
    _emit(ordered, output)


@app.command("paste")
def paste_cmd(
    origin: Annotated[
        Origin, typer.Option(case_sensitive=False, help="Origin of the pasted statement.")
    ] = Origin.OTHER,
    account: Annotated[str, typer.Option(help="Account label for the pasted rows.")] = "Pasted",
    output: Annotated[Path | None, OUTPUT_OPTION] = None,
) -> None:
    """Consolidate a statement pasted on stdin."""

    text = sys.stdin.read()
    result = ingest_text(text, name="<stdin>", origin=origin, account_label=account)
    _print_statuses([result.status])
    _emit(merge([], result.transactions), output)


@app.command("summarize")
def summarize_cmd(
    files: Annotated[list[Path], FILES_ARGUMENT],
    sample_size: Annotated[int, typer.Option(help="Transactions sent to the model.")] = 50,
) -> None:
    """Consolidate statement exports and print an AI spending summary."""

    from .summary import summarize

    ledger, statuses = ingest_files(files)
    _print_statuses(statuses)
    if not ledger:
        console.print("[yellow]No transactions to summarize.[/yellow]")
        return
    if not os.getenv("OPENAI_API_KEY"):
        console.print("[yellow]OPENAI_API_KEY is not set; skipping the AI summary.[/yellow]")
        return

    console.print("[cyan]Analyzing transactions...[/cyan]")
    summary = summarize(ledger, sample_size=sample_size)
    if summary is None:
        console.print("[yellow]AI summary unavailable; see the log for details.[/yellow]")
        return
    _print_summary(summary)


@app.callback()
def _root(
    log_level: Annotated[
        str | None,
        typer.Option(help="Log level (falls back to env STATEMENT_MERGER_LOG_LEVEL, then INFO)."),
    ] = None,
) -> None:
    """Load ``.env`` from the working directory and configure logging."""

    # override=False keeps variables already set in the environment.
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level, console=console)


def main() -> None:  # pragma: no cover - console script entry point
    app()


if __name__ == "__main__":  # pragma: no cover
    main()

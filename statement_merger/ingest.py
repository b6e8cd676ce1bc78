"""Ingestion of statement text blobs and files into the ledger.

Each file (or pasted blob) is parsed and adapted as one independent unit of
work; units may run concurrently on a bounded thread pool. The merge into the
ledger happens once, on the caller's thread, after every unit has finished,
so a batch's rows are always appended as a whole.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from os import PathLike
from pathlib import Path
from typing import NamedTuple

from .adapters import process_records
from .ledger import merge
from .logging_setup import get_logger
from .models import CanonicalTransaction, FileStatus, Ledger, Origin
from .origins import resolve_origin
from .reader import parse

_logger = get_logger("statement_merger.ingest")

_MAX_WORKERS_CAP = 32
_DEFAULT_WORKERS = 4


class IngestResult(NamedTuple):
    transactions: list[CanonicalTransaction]
    status: FileStatus


def ingest_text(text: str, *, name: str, origin: Origin, account_label: str) -> IngestResult:
    """Parse and adapt one text blob into a batch plus its status."""

    records = parse(text)
    if not records:
        return IngestResult([], FileStatus(name=name, status="skipped", count=0, reason="no rows"))
    batch = process_records(records, origin, account_label)
    return IngestResult(batch, FileStatus(name=name, status="processed", count=len(batch)))


def _read_and_ingest(path: Path) -> IngestResult:
    try:
        # utf-8-sig drops the BOM some banks prepend to the header row. Bytes that
        # are not UTF-8 (Latin-1 exports) become U+FFFD instead of losing the file.
        text = path.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as e:
        _logger.warning("ingest:read_failed path=%s error=%s", path, e.__class__.__name__)
        return IngestResult(
            [], FileStatus(name=path.name, status="skipped", count=0, reason=str(e))
        )
    origin, account_label = resolve_origin(path)
    result = ingest_text(text, name=path.name, origin=origin, account_label=account_label)
    _logger.info(
        "ingest:file name=%s origin=%s status=%s count=%d",
        path.name,
        origin.value,
        result.status.status,
        result.status.count,
    )
    return result


def resolve_max_workers(n_files: int, requested: int | None = None) -> int:
    """Resolve the worker count for ``n_files`` units of work.

    Honors ``requested`` first, then the ``STATEMENT_MERGER_MAX_WORKERS`` env
    var; caps to ``n_files`` and 32 and never returns less than 1.
    """

    if requested is not None and requested < 1:
        raise ValueError("max_workers must be a positive integer")
    workers = requested
    if workers is None:
        env_val = os.getenv("STATEMENT_MERGER_MAX_WORKERS")
        try:
            workers = int(env_val) if env_val else None
        except ValueError:
            workers = None
    if workers is None or workers < 1:
        workers = _DEFAULT_WORKERS
    return max(1, min(workers, n_files, _MAX_WORKERS_CAP))


def ingest_files(
    paths: Sequence[str | PathLike[str]],
    existing: Iterable[CanonicalTransaction] = (),
    *,
    max_workers: int | None = None,
) -> tuple[Ledger, list[FileStatus]]:
    """Ingest ``paths`` and merge every batch into ``existing``.

    Returns the new ledger and one :class:`FileStatus` per path, in input
    order. Files that cannot be opened are reported as skipped and do not abort the
    others.
    """

    files = [Path(p) for p in paths]
    if not files:
        return merge(existing, []), []

    workers = resolve_max_workers(len(files), max_workers)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(_read_and_ingest, files))

    combined: list[CanonicalTransaction] = []
    for result in results:
        combined.extend(result.transactions)
    ledger = merge(existing, combined)
    _logger.info(
        "ingest:merged files=%d incoming=%d ledger=%d",
        len(files),
        len(combined),
        len(ledger),
    )
    return ledger, [r.status for r in results]


__all__ = ["IngestResult", "ingest_files", "ingest_text", "resolve_max_workers"]

"""Public interface for the ``statement_merger`` package.

This module exposes the pipeline functions and public models as the stable
import surface. There is no runtime logic here, only symbol re-exports.
"""

from .adapters import adapt, process_records
from .amounts import format_amount, format_amount_display, parse_amount
from .dates import format_date, parse_display_date
from .ingest import IngestResult, ingest_files, ingest_text
from .ledger import dedupe_key, merge, sort_ledger
from .models import (
    CSV_HEADERS,
    AiSummary,
    CanonicalTransaction,
    CategoryAmount,
    Classified,
    FileStatus,
    Ledger,
    Origin,
    RawRecord,
    Suppressed,
)
from .origins import resolve_origin
from .reader import parse
from .rules import RULES, Rule, categorize
from .serialize import serialize

__all__ = [
    # Pipeline
    "parse",
    "parse_amount",
    "format_amount",
    "format_amount_display",
    "format_date",
    "parse_display_date",
    "adapt",
    "process_records",
    "categorize",
    "merge",
    "dedupe_key",
    "sort_ledger",
    "serialize",
    "resolve_origin",
    "ingest_text",
    "ingest_files",
    # Models / types
    "CSV_HEADERS",
    "AiSummary",
    "CanonicalTransaction",
    "CategoryAmount",
    "Classified",
    "FileStatus",
    "IngestResult",
    "Ledger",
    "Origin",
    "RawRecord",
    "Rule",
    "RULES",
    "Suppressed",
]

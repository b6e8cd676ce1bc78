"""AI spending summary over the OpenAI Responses API.

Public API:
    - :func:`summarize`

The summary is an optional collaborator: it reads a bounded sample of the
ledger and never feeds anything back into ledger construction. Every failure
(no API key, network, malformed output) is logged and reported as ``None``.
No side effects occur at import time (no client creation, no env reads).
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping, Sequence
from typing import Any

from openai import OpenAI
from openai.types.responses import ResponseTextConfigParam
from pydantic import ValidationError

from .logging_setup import get_logger
from .models import AiSummary, CanonicalTransaction

_logger = get_logger("statement_merger.summary")

_SAMPLE_SIZE_DEFAULT: int = 50
_MODEL_DEFAULT: str = "gpt-5-mini"

_INSTRUCTIONS = (
    "You are a personal finance analyst. Analyze the provided bank and card "
    "transactions and produce a professional summary: a short overview of "
    "spending patterns, the top spending categories with their total amounts, "
    "and actionable savings advice. Output JSON only that conforms to the "
    "specified schema."
)

BEGIN = "BEGIN_TRANSACTIONS_JSON\n"
END = "\nEND_TRANSACTIONS_JSON"

_RESPONSE_FORMAT: dict[str, Any] = {
    "type": "json_schema",
    "name": "financial_summary",
    "schema": {
        "type": "object",
        "properties": {
            "overview": {
                "type": "string",
                "description": "A high-level summary of spending patterns.",
            },
            "topCategories": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "category": {"type": "string"},
                        "amount": {"type": "number"},
                    },
                    "required": ["category", "amount"],
                    "additionalProperties": False,
                },
            },
            "savingsAdvice": {
                "type": "string",
                "description": "Actionable advice to save money based on the data.",
            },
        },
        "required": ["overview", "topCategories", "savingsAdvice"],
        "additionalProperties": False,
    },
    "strict": True,
}


def _resolve_model() -> str:
    return os.getenv("STATEMENT_MERGER_SUMMARY_MODEL") or _MODEL_DEFAULT


def build_user_content(ledger: Sequence[CanonicalTransaction], sample_size: int) -> str:
    """Embed the first ``sample_size`` (description, amount) pairs as JSON."""

    sample = [{"desc": tx.description, "amt": tx.amount} for tx in ledger[:sample_size]]
    return (
        "Analyze these financial transactions and provide a professional summary.\n"
        f"{BEGIN}{json.dumps(sample, ensure_ascii=False)}{END}"
    )


def _extract_response_json_mapping(resp: Any) -> Mapping[str, Any]:
    text: str | None = getattr(resp, "output_text", None)
    if not text or not isinstance(text, str):
        raise ValueError("Unexpected Responses API shape; unable to locate text output")
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError("Model output was not valid JSON per the requested schema") from e
    if not isinstance(decoded, Mapping):
        raise ValueError("Invalid response: expected a JSON object at top level")
    return decoded


def _create_client() -> OpenAI:
    return OpenAI()


def summarize(
    ledger: Sequence[CanonicalTransaction],
    *,
    client: Any | None = None,
    sample_size: int = _SAMPLE_SIZE_DEFAULT,
) -> AiSummary | None:
    """Return an :class:`~statement_merger.models.AiSummary` or ``None``.

    ``client`` defaults to a fresh ``openai.OpenAI()``; tests pass a stub
    exposing ``responses.create(**kwargs)``. An empty ledger is not sent.
    """

    if not ledger:
        return None

    try:
        api = client if client is not None else _create_client()
        resp = api.responses.create(
            model=_resolve_model(),
            instructions=_INSTRUCTIONS,
            input=build_user_content(ledger, sample_size),
            text=ResponseTextConfigParam(format=_RESPONSE_FORMAT),  # type: ignore[typeddict-item]
        )
        summary = AiSummary.model_validate(_extract_response_json_mapping(resp))
    except (ValueError, ValidationError) as e:
        _logger.error("summary:invalid_output error=%s detail=%s", e.__class__.__name__, e)
        return None
    except Exception as e:  # noqa: BLE001 - the summary must never break the caller
        _logger.error("summary:failed error=%s detail=%s", e.__class__.__name__, e)
        return None

    _logger.info(
        "summary:done sampled=%d categories=%d",
        min(len(ledger), sample_size),
        len(summary.top_categories),
    )
    return summary


__all__ = ["summarize", "build_user_content"]

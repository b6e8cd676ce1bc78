import json

import pytest

import statement_merger.summary as summary_module
from statement_merger import CanonicalTransaction
from statement_merger.summary import build_user_content, summarize
from tests.helpers.openai_stub import OpenAIStub, extract_sample, summary_payload


def _ledger(n: int) -> list[CanonicalTransaction]:
    return [
        CanonicalTransaction(
            date=f"Jan {i + 1}, 2026",
            description=f"SHOP {i}",
            category="Household",
            sub_category="Groceries",
            amount=f"-${i}.00",
            account="EQ Bank",
        )
        for i in range(n)
    ]


def test_summarize_returns_parsed_summary():
    stub = OpenAIStub(summary_payload())

    result = summarize(_ledger(3), client=stub)

    assert result is not None
    assert result.overview.startswith("Most spending")
    assert [(c.category, c.amount) for c in result.top_categories] == [
        ("Household", -1245.5),
        ("Transport", -320.0),
    ]
    assert result.savings_advice.startswith("Consolidate")


def test_summarize_sends_a_bounded_sample_of_description_amount_pairs():
    stub = OpenAIStub(summary_payload())

    summarize(_ledger(80), client=stub, sample_size=50)

    assert len(stub.calls) == 1
    call = stub.calls[0]
    sample = extract_sample(call["input"])
    assert len(sample) == 50
    assert sample[0] == {"desc": "SHOP 0", "amt": "-$0.00"}
    assert call["model"] == "gpt-5-mini"
    assert call["text"]["format"]["type"] == "json_schema"


def test_model_comes_from_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("STATEMENT_MERGER_SUMMARY_MODEL", "gpt-4.1-mini")
    stub = OpenAIStub(summary_payload())

    summarize(_ledger(1), client=stub)

    assert stub.calls[0]["model"] == "gpt-4.1-mini"


def test_empty_ledger_is_not_sent():
    stub = OpenAIStub(summary_payload())

    assert summarize([], client=stub) is None
    assert stub.calls == []


@pytest.mark.parametrize(
    "output_text",
    [
        "not json at all",
        "",
        json.dumps(["a", "list"]),
        json.dumps({"overview": "missing the other fields"}),
    ],
)
def test_malformed_output_yields_none(output_text):
    assert summarize(_ledger(2), client=OpenAIStub(output_text)) is None


def test_client_errors_yield_none():
    stub = OpenAIStub(error=RuntimeError("connection reset"))

    assert summarize(_ledger(2), client=stub) is None
    assert len(stub.calls) == 1


def test_default_client_is_created_lazily(monkeypatch: pytest.MonkeyPatch):
    stub = OpenAIStub(summary_payload())
    monkeypatch.setattr(summary_module, "OpenAI", lambda: stub)

    result = summarize(_ledger(1))

    assert result is not None
    assert len(stub.calls) == 1


def test_user_content_embeds_sample_between_markers():
    content = build_user_content(_ledger(2), sample_size=10)

    assert extract_sample(content) == [
        {"desc": "SHOP 0", "amt": "-$0.00"},
        {"desc": "SHOP 1", "amt": "-$1.00"},
    ]

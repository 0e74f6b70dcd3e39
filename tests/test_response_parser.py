"""Tests for model reply extraction and normalization."""

import json

import pytest

from kisanmitra.errors import InvalidAIResponseError
from kisanmitra.services.response_parser import (
    DEFAULT_CONFIDENCE,
    PROVIDER_NAME,
    extract_json_object,
    normalize_ai_response,
    parse_ai_response,
)

# ---------------------------------------------------------------------------
# extract_json_object
# ---------------------------------------------------------------------------


def test_extract_slices_first_open_to_last_close() -> None:
    assert extract_json_object('pre {"a": {"b": 1}} post') == '{"a": {"b": 1}}'


@pytest.mark.parametrize("text", ["no braces here", "} backwards {", "only { open", ""])
def test_extract_returns_none_without_an_object(text: str) -> None:
    assert extract_json_object(text) is None


# ---------------------------------------------------------------------------
# parse_ai_response
# ---------------------------------------------------------------------------


def test_parse_embedded_object_unchanged() -> None:
    raw = (
        'Sure! {"answer":"Use urea 46-0-0.","confidence":"High",'
        '"sources":["ICAR"],"suggestions":["Test soil first"]}'
    )
    result = parse_ai_response(raw)

    assert result.model_dump() == {
        "answer": "Use urea 46-0-0.",
        "confidence": "High",
        "sources": ["ICAR"],
        "suggestions": ["Test soil first"],
    }


def test_parse_fenced_json_block() -> None:
    raw = '```json\n{"answer": "Sow after first rains.", "confidence": "Low"}\n```'
    result = parse_ai_response(raw)

    assert result.answer == "Sow after first rains."
    assert result.confidence == "Low"


def test_parse_plain_text_degrades_without_raising() -> None:
    result = parse_ai_response("I recommend crop rotation.")

    assert result.answer == "I recommend crop rotation."
    assert result.confidence == DEFAULT_CONFIDENCE == "Medium"
    assert result.sources == [PROVIDER_NAME]
    assert result.suggestions == []


def test_parse_malformed_json_degrades_to_full_text() -> None:
    raw = "Apply neem oil {not valid json} weekly."
    result = parse_ai_response(raw)

    assert result.answer == raw
    assert result.sources == [PROVIDER_NAME]


def test_parse_invalid_confidence_and_missing_lists() -> None:
    result = parse_ai_response('{"answer":"ok","confidence":"VeryHigh"}')

    assert result.answer == "ok"
    assert result.confidence == "Medium"
    assert result.sources == [PROVIDER_NAME]
    assert result.suggestions == []


def test_parse_confidence_is_case_sensitive() -> None:
    assert parse_ai_response('{"answer":"ok","confidence":"high"}').confidence == "Medium"


def test_parse_non_list_sources_and_suggestions() -> None:
    raw = json.dumps({"answer": "ok", "sources": "ICAR", "suggestions": {"a": 1}})
    result = parse_ai_response(raw)

    assert result.sources == [PROVIDER_NAME]
    assert result.suggestions == []


def test_parse_missing_answer_raises() -> None:
    with pytest.raises(InvalidAIResponseError, match="missing answer"):
        parse_ai_response('{"confidence":"High"}')


def test_parse_empty_answer_raises() -> None:
    with pytest.raises(InvalidAIResponseError):
        parse_ai_response('{"answer": "", "confidence": "High"}')


def test_parse_empty_reply_raises() -> None:
    with pytest.raises(InvalidAIResponseError):
        parse_ai_response("")


# ---------------------------------------------------------------------------
# normalize_ai_response
# ---------------------------------------------------------------------------


def test_normalize_stringifies_non_string_items() -> None:
    result = normalize_ai_response(
        {"answer": "ok", "sources": ["ICAR", 7], "suggestions": [{"step": 1}]}
    )

    assert result.sources == ["ICAR", "7"]
    assert result.suggestions == ['{"step": 1}']


def test_normalize_returns_independent_default_lists() -> None:
    first = normalize_ai_response({"answer": "a"})
    first.sources.append("mutated")
    second = normalize_ai_response({"answer": "b"})

    assert second.sources == [PROVIDER_NAME]

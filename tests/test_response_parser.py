# tests/test_response_parser.py
import pytest
from conftest import GROUNDING, VERIFICATION
from core.response_parser import (
    extract_json_object,
    extract_sources,
    parse_steps,
    parse_verification,
)
from model.verification import Verdict
from util.errors import InvalidModelOutput


def test_extract_json_object_ignores_surrounding_prose():
    raw = 'Sure! ```json\n{"score": 40, "verdict": "SUSPICIOUS"}\n``` Let me know.'
    assert extract_json_object(raw) == {"score": 40, "verdict": "SUSPICIOUS"}


def test_extract_json_object_spans_first_to_last_brace():
    raw = 'prefix {"a": {"b": 1}, "c": [ {"d": 2} ]} suffix'
    assert extract_json_object(raw) == {"a": {"b": 1}, "c": [{"d": 2}]}


def test_extract_json_object_two_objects_is_malformed():
    # Greedy match swallows both objects, which is not valid JSON
    with pytest.raises(InvalidModelOutput):
        extract_json_object('{"a": 1} and then {"b": 2}')


@pytest.mark.parametrize("raw", ["", "no json here", "[1, 2, 3]", "{not json}"])
def test_extract_json_object_rejects(raw):
    with pytest.raises(InvalidModelOutput):
        extract_json_object(raw)


def test_parse_verification_full_payload():
    import json

    result = parse_verification(json.dumps(VERIFICATION))
    assert result.verdict is Verdict.FAKE
    assert result.score == 12
    assert result.isAiGenerated is True
    assert [c.isFact for c in result.claims] == [False, True]


def test_parse_verification_normalizes_score_and_verdict():
    result = parse_verification('{"score": 104.6, "verdict": "credible", "extra": 1}')
    assert result.score == 100
    assert result.verdict is Verdict.CREDIBLE
    assert result.claims == []
    assert result.extractedContent is None

    assert parse_verification('{"score": "-3", "verdict": "SATIRE"}').score == 0
    assert parse_verification('{"score": 79.4, "verdict": "SATIRE"}').score == 79


@pytest.mark.parametrize(
    "raw",
    [
        '{"score": 50, "verdict": "MAYBE"}',
        '{"score": 50}',
        '{"verdict": "FAKE"}',
        '{"score": true, "verdict": "FAKE"}',
    ],
)
def test_parse_verification_rejects_bad_shapes(raw):
    with pytest.raises(InvalidModelOutput):
        parse_verification(raw)


def test_extract_sources_dedupes_by_uri_and_fills_defaults():
    sources = extract_sources(GROUNDING)
    assert [(s.title, s.uri) for s in sources] == [
        ("First (again)", "https://a.example/1"),
        ("Source", "https://b.example/2"),
    ]


def test_extract_sources_missing_uri_becomes_hash():
    assert extract_sources([{"web": {"title": "t"}}])[0].uri == "#"
    assert extract_sources([]) == []


def test_parse_steps_requires_exactly_four_strings():
    assert parse_steps('["a", "b", "c", "d"]') == ["a", "b", "c", "d"]
    assert parse_steps('```json\n["a", "b", "c", 4]\n```') == ["a", "b", "c", "4"]
    assert parse_steps('["a", "b", "c"]') is None
    assert parse_steps('{"steps": ["a", "b", "c", "d"]}') is None
    assert parse_steps("not json") is None
    assert parse_steps("") is None


@pytest.mark.parametrize(
    "score", ["null", "[50]", '{"value": 50}', "1e999", "-1e999", '"inf"', '"nan"']
)
def test_parse_verification_rejects_non_numeric_or_infinite_scores(score):
    with pytest.raises(InvalidModelOutput):
        parse_verification('{"score": %s, "verdict": "FAKE"}' % score)


def test_extract_sources_skips_malformed_chunks():
    chunks = [
        {"web": "https://a.example"},
        {"web": ["x"]},
        "not-a-chunk",
        {"web": {"title": 7, "uri": "https://c.example/3"}},
    ]
    assert [(s.title, s.uri) for s in extract_sources(chunks)] == [
        ("Source", "https://c.example/3")
    ]

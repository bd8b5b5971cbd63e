import json

import pytest

from edusynth.pipeline.errors import IncompleteResponse, MalformedResponse
from edusynth.pipeline.note import StudyNote
from edusynth.pipeline.parsing import candidate_text, extract_json_object, parse_and_validate, project_note


def _envelope(*texts: str) -> str:
    return json.dumps({"candidates": [{"content": {"parts": [{"text": text} for text in texts]}}]})


def test_extract_json_object_keeps_isolated_object() -> None:
    text = '{"summary": "S", "keyPoints": ["a"]}'
    assert extract_json_object(text) == text


def test_extract_json_object_strips_surrounding_prose() -> None:
    text = 'Sure! Here are your notes:\n```json\n{"summary": "S"}\n```\nGood luck.'
    assert extract_json_object(text) == '{"summary": "S"}'


@pytest.mark.parametrize("text", ["", "no braces at all", "only { open", "only } close", "} backwards {", None])
def test_extract_json_object_returns_none_without_bracket_pair(text) -> None:
    assert extract_json_object(text) is None


def test_extract_json_object_spans_first_to_last_brace() -> None:
    text = 'note {a} then {"summary": "S"}'
    assert extract_json_object(text) == '{a} then {"summary": "S"}'


def test_candidate_text_concatenates_parts() -> None:
    assert candidate_text(_envelope('{"summary": ', '"S"}')) == '{"summary": "S"}'


def test_candidate_text_falls_back_to_raw_when_path_absent() -> None:
    raw = '{"error": {"message": "nope"}}'
    assert candidate_text(raw) == raw
    assert candidate_text("not json") == "not json"
    assert candidate_text(json.dumps({"candidates": []})) == json.dumps({"candidates": []})
    assert candidate_text(json.dumps({"candidates": [{"content": None}]})) == json.dumps({"candidates": [{"content": None}]})


def test_candidate_text_ignores_non_text_parts() -> None:
    raw = json.dumps({"candidates": [{"content": {"parts": [{"inlineData": {}}, {"text": "{}"}, "junk"]}}]})
    assert candidate_text(raw) == "{}"


def test_parse_and_validate_live_envelope() -> None:
    raw = (
        '{"candidates":[{"content":{"parts":[{"text":"{\\"summary\\":\\"S\\",\\"explanation\\":\\"E\\",'
        '\\"keyPoints\\":[\\"a\\",\\"b\\"],\\"conclusion\\":\\"C\\"}"}]}}]}'
    )
    note = parse_and_validate(raw)

    assert note == StudyNote(summary="S", explanation="E", key_points=("a", "b"), conclusion="C")
    assert note.as_dict() == {"summary": "S", "explanation": "E", "keyPoints": ["a", "b"], "conclusion": "C"}


def test_parse_and_validate_trims_and_filters() -> None:
    payload = {
        "summary": "  S  ",
        "explanation": "\nE\n",
        "keyPoints": [" a ", "", "   ", None, "b"],
        "conclusion": " C",
    }
    note = parse_and_validate(_envelope("Here you go: " + json.dumps(payload)))

    assert note.summary == "S"
    assert note.explanation == "E"
    assert note.key_points == ("a", "b")
    assert note.conclusion == "C"


def test_parse_and_validate_round_trip() -> None:
    note = StudyNote(
        summary="Cells turn light into sugar.",
        explanation="Chlorophyll absorbs light.",
        key_points=("Light reactions", "Calvin cycle"),
        conclusion="Plants feed the food chain.",
    )
    assert parse_and_validate(note.to_json()) == note


def test_parse_and_validate_without_json_is_malformed() -> None:
    with pytest.raises(MalformedResponse, match="did not contain JSON"):
        parse_and_validate(_envelope("I cannot help with that."))


def test_parse_and_validate_invalid_json_is_malformed() -> None:
    with pytest.raises(MalformedResponse):
        parse_and_validate(_envelope('{"summary": "S",}'))


def test_parse_and_validate_missing_conclusion_is_incomplete() -> None:
    payload = {"summary": "S", "explanation": "E", "keyPoints": ["a"]}
    with pytest.raises(IncompleteResponse, match="missing required fields"):
        parse_and_validate(_envelope(json.dumps(payload)))


def test_project_note_rejects_non_list_key_points() -> None:
    with pytest.raises(IncompleteResponse):
        project_note({"summary": "S", "explanation": "E", "keyPoints": "a, b", "conclusion": "C"})


def test_section_text_renders_key_points_as_bullets() -> None:
    note = StudyNote(summary="S", explanation="E", key_points=("a", "b"), conclusion="C")
    assert note.section_text("keyPoints") == "- a\n- b"
    assert note.section_text("summary") == "S"
    with pytest.raises(ValueError):
        note.section_text("title")


def test_parse_and_validate_deep_nesting_is_malformed() -> None:
    with pytest.raises(MalformedResponse, match="nested too deeply"):
        parse_and_validate("{" + '"a":[' * 200000 + "]" * 200000 + "}")


def test_project_note_stringifies_non_string_values() -> None:
    note = project_note({"summary": ["a"], "explanation": 42, "keyPoints": [1, {"k": "v"}], "conclusion": "C"})

    assert note.summary == "['a']"
    assert note.explanation == "42"
    assert note.key_points == ("1", "{'k': 'v'}")

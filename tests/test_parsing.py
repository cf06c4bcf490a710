"""Tests for response parsing and shape detection."""

from diet_analyzer.services.parsing import (
    FlatAnalysis,
    NestedAnalysis,
    UnstructuredText,
    extract_json,
    parse_response,
    strip_code_fence,
)


def test_strip_code_fence_removes_json_fence() -> None:
    text = '```json\n{"foods": []}\n```'

    assert strip_code_fence(text) == '{"foods": []}'


def test_extract_json_uses_widest_brace_span() -> None:
    text = '以下是分析结果：{"foods": [{"name": "米饭"}], "nutrition": {}} 希望有帮助'

    assert extract_json(text) == {"foods": [{"name": "米饭"}], "nutrition": {}}


def test_extract_json_returns_none_for_prose() -> None:
    assert extract_json("这是一份很健康的午餐。") is None
    assert extract_json("{not json}") is None
    assert extract_json("} reversed {") is None


def test_parse_response_detects_nested_shape() -> None:
    shape = parse_response('{"food_analysis": {"foods": []}}')

    assert isinstance(shape, NestedAnalysis)


def test_parse_response_detects_flat_shape() -> None:
    shape = parse_response('```\n{"nutrition": {"total_carbs": "44g"}}\n```')

    assert isinstance(shape, FlatAnalysis)
    assert shape.payload == {"nutrition": {"total_carbs": "44g"}}


def test_parse_response_keeps_original_text_when_unparseable() -> None:
    text = "图片中有米饭和青菜，建议减少主食。"

    shape = parse_response(text)

    assert shape == UnstructuredText(text)


def test_parse_response_stringifies_unrecognized_objects() -> None:
    shape = parse_response('{"summary": "米饭"}')

    assert shape == UnstructuredText('{"summary": "米饭"}')


def test_integer_past_digit_limit_reads_as_unstructured() -> None:
    text = '{"foods": [], "nutrition": {"calories": ' + "9" * 5000 + "}}"

    assert extract_json(text) is None
    assert parse_response(text) == UnstructuredText(text)

"""Extraction of a JSON object from free-form model text."""

import json
import re
from dataclasses import dataclass

_FENCE_OPEN = re.compile(r"^\s*```[a-zA-Z]*\s*")
_FENCE_CLOSE = re.compile(r"\s*```\s*$")


@dataclass(frozen=True)
class NestedAnalysis:
    """Verbose shape keyed by ``food_analysis``."""

    payload: dict[str, object]


@dataclass(frozen=True)
class FlatAnalysis:
    """Shape with top-level ``foods`` and/or ``nutrition``."""

    payload: dict[str, object]


@dataclass(frozen=True)
class UnstructuredText:
    """Anything that is not one of the recognized shapes."""

    text: str


ResponseShape = NestedAnalysis | FlatAnalysis | UnstructuredText


def strip_code_fence(text: str) -> str:
    """Remove a Markdown code fence wrapped around the text, if any."""
    cleaned = _FENCE_OPEN.sub("", text, count=1)
    return _FENCE_CLOSE.sub("", cleaned, count=1)


def extract_json(text: str) -> dict[str, object] | None:
    """Decode the widest ``{...}`` span of the text.

    Returns None when there is no span, it does not decode (including integer
    literals past the interpreter's digit limit), or it decodes to something
    other than an object.
    """
    cleaned = strip_code_fence(text)
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        parsed = json.loads(cleaned[start : end + 1])
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def detect_shape(parsed: object, raw_text: str | None = None) -> ResponseShape:
    """Classify a decoded response by the keys it carries."""
    if isinstance(parsed, dict):
        if isinstance(parsed.get("food_analysis"), dict):
            return NestedAnalysis(parsed)
        if "foods" in parsed or "nutrition" in parsed:
            return FlatAnalysis(parsed)
    if parsed is None and raw_text is not None:
        return UnstructuredText(raw_text)
    if isinstance(parsed, str):
        return UnstructuredText(parsed)
    return UnstructuredText(json.dumps(parsed, ensure_ascii=False))


def parse_response(text: str) -> ResponseShape:
    """Turn raw model text into one of the recognized response shapes."""
    return detect_shape(extract_json(text), raw_text=text)

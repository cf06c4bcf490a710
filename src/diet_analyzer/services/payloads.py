"""Lenient models for the JSON shapes vision models actually return.

Model output is untrusted: numbers arrive as strings with units, field names
drift between prompts and providers, and lists hold stray objects. These
models coerce what they can and ignore unknown keys.
"""

from typing import Annotated

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field

from diet_analyzer.domain.report import UNKNOWN_FOOD_NAME, Level
from diet_analyzer.services.weights import parse_number

_LEVEL_SYNONYMS: dict[str, Level] = {
    "低": "低",
    "low": "低",
    "中": "中",
    "medium": "中",
    "moderate": "中",
    "高": "高",
    "high": "高",
}

_RECOMMENDATION_GROUPS = ("general_tips", "specific_recommendations")


def coerce_level(value: object) -> Level | None:
    """Map 低/中/高, English synonyms and phrasings like 中等风险 to a level."""
    if not isinstance(value, str):
        return None
    cleaned = value.strip().lower()
    if not cleaned:
        return None
    if cleaned in _LEVEL_SYNONYMS:
        return _LEVEL_SYNONYMS[cleaned]
    for prefix, level in _LEVEL_SYNONYMS.items():
        if cleaned.startswith(prefix):
            return level
    return None


def _coerce_name(value: object) -> str:
    if value is None:
        return UNKNOWN_FOOD_NAME
    text = str(value).strip()
    return text or UNKNOWN_FOOD_NAME


def _coerce_weight(value: object) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, int | float):
        return f"{parse_number(value):g}g"
    return str(value).strip()


def _grams(value: object) -> float:
    return max(parse_number(value), 0.0)


def _optional_grams(value: object) -> float | None:
    if value is None or value == "":
        return None
    return _grams(value)


def _coerce_text(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, dict):
        parts = [str(part).strip() for part in value.values() if part]
        return " ".join(part for part in parts if part) or None
    return str(value).strip() or None


def _coerce_string_list(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if not isinstance(value, list):
        return []
    items: list[str] = []
    for entry in value:
        text = _coerce_text(entry)
        if text:
            items.append(text)
    return items


def _flatten_recommendations(value: object) -> list[str]:
    """Accept a plain list or groups; general tips come before specific ones."""
    if not isinstance(value, dict):
        return _coerce_string_list(value)
    items: list[str] = []
    for group in _RECOMMENDATION_GROUPS:
        items.extend(_coerce_string_list(value.get(group)))
    for key, group_items in value.items():
        if key not in _RECOMMENDATION_GROUPS:
            items.extend(_coerce_string_list(group_items))
    return items


def _dict_or_none(value: object) -> dict | None:
    return value if isinstance(value, dict) else None


def _dict_or_empty(value: object) -> dict:
    return value if isinstance(value, dict) else {}


def _food_entries(value: object) -> list[dict]:
    """Keep object entries; bare strings become entries with only a name."""
    if not isinstance(value, list):
        return []
    entries: list[dict] = []
    for entry in value:
        if isinstance(entry, dict):
            entries.append(entry)
        elif isinstance(entry, str) and entry.strip():
            entries.append({"name": entry})
    return entries


Grams = Annotated[float, BeforeValidator(_grams)]
OptionalGrams = Annotated[float | None, BeforeValidator(_optional_grams)]
FoodName = Annotated[str, BeforeValidator(_coerce_name)]
WeightText = Annotated[str, BeforeValidator(_coerce_weight)]
OptionalText = Annotated[str | None, BeforeValidator(_coerce_text)]
Recommendations = Annotated[list[str], BeforeValidator(_flatten_recommendations)]
OptionalLevel = Annotated[Level | None, BeforeValidator(coerce_level)]


class _LooseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LooseNutrients(_LooseModel):
    """Per-food nutrients under any of the usual key spellings."""

    carbs: Grams = Field(
        default=0.0,
        validation_alias=AliasChoices(
            "carbs", "carbohydrates", "carbohydrate", "carbs_g", "碳水化合物"
        ),
    )
    protein: Grams = Field(
        default=0.0, validation_alias=AliasChoices("protein", "protein_g", "蛋白质")
    )
    fat: Grams = Field(
        default=0.0, validation_alias=AliasChoices("fat", "fat_g", "脂肪")
    )
    fiber: OptionalGrams = Field(
        default=None,
        validation_alias=AliasChoices(
            "fiber", "dietary_fiber", "fibre", "fiber_g", "膳食纤维"
        ),
    )


class LooseFood(_LooseModel):
    """One food entry from either response shape."""

    name: FoodName = Field(
        default=UNKNOWN_FOOD_NAME,
        validation_alias=AliasChoices("name", "food_name", "food"),
    )
    estimated_weight: WeightText = Field(
        default="",
        validation_alias=AliasChoices(
            "estimated_weight", "weight", "portion", "estimated_portion"
        ),
    )
    nutrients: Annotated[LooseNutrients | None, BeforeValidator(_dict_or_none)] = (
        Field(
            default=None,
            validation_alias=AliasChoices(
                "nutrients", "nutrition", "nutritional_info"
            ),
        )
    )


FoodList = Annotated[list[LooseFood], BeforeValidator(_food_entries)]


class LooseTotals(_LooseModel):
    """Meal totals as declared by the model."""

    total_carbs: Grams = Field(
        default=0.0,
        validation_alias=AliasChoices(
            "total_carbs", "total_carbohydrates", "carbohydrates", "carbs"
        ),
    )
    fiber: Grams = Field(
        default=0.0,
        validation_alias=AliasChoices("fiber", "dietary_fiber", "total_fiber"),
    )
    net_carbs: Grams = Field(
        default=0.0,
        validation_alias=AliasChoices("net_carbs", "net_carbohydrates"),
    )
    calories: Grams = Field(
        default=0.0,
        validation_alias=AliasChoices("calories", "total_calories", "energy"),
    )
    gl_level: OptionalLevel = Field(
        default=None,
        validation_alias=AliasChoices("gl_level", "glycemic_load_level"),
    )


class GlycemicAssessment(_LooseModel):
    """The ``gi_gl_assessment`` block of the nested shape."""

    gl_level: OptionalLevel = Field(
        default=None,
        validation_alias=AliasChoices(
            "gl_level", "glycemic_load_level", "overall_gl", "gl"
        ),
    )
    risk_level: OptionalLevel = Field(
        default=None,
        validation_alias=AliasChoices("risk_level", "overall_risk", "risk"),
    )


Totals = Annotated[LooseTotals, BeforeValidator(_dict_or_empty)]


class FoodAnalysis(_LooseModel):
    """The ``food_analysis`` object of the nested shape."""

    foods: FoodList = Field(default_factory=list)
    total_nutrition: Totals = Field(default_factory=LooseTotals)
    gi_gl_assessment: Annotated[
        GlycemicAssessment, BeforeValidator(_dict_or_empty)
    ] = Field(default_factory=GlycemicAssessment)


class NestedPayload(_LooseModel):
    """Verbose response with a ``food_analysis`` object."""

    food_analysis: FoodAnalysis
    recommendations: Recommendations = Field(default_factory=list)
    risk_level: OptionalLevel = None
    disclaimer: OptionalText = None


class FlatPayload(_LooseModel):
    """Response already close to the canonical report."""

    foods: FoodList = Field(default_factory=list)
    nutrition: Totals = Field(default_factory=LooseTotals)
    risk_level: OptionalLevel = Field(
        default=None, validation_alias=AliasChoices("risk_level", "risk")
    )
    recommendations: Recommendations = Field(default_factory=list)
    disclaimer: OptionalText = None

"""Normalization of parsed model output into the canonical report."""

import json
import logging
from dataclasses import dataclass, field

from pydantic import ValidationError

from diet_analyzer.domain.reference_foods import lookup_reference
from diet_analyzer.domain.report import (
    DEFAULT_DISCLAIMER,
    DEFAULT_RECOMMENDATIONS,
    FoodItem,
    Level,
    Nutrients,
    RawTextReport,
    Report,
)
from diet_analyzer.services.aggregator import DeclaredTotals, color_code, summarize
from diet_analyzer.services.parsing import (
    FlatAnalysis,
    NestedAnalysis,
    ResponseShape,
    UnstructuredText,
)
from diet_analyzer.services.payloads import (
    FlatPayload,
    LooseFood,
    LooseTotals,
    NestedPayload,
)
from diet_analyzer.services.weights import parse_weight, round_half_up

_logger = logging.getLogger(__name__)


@dataclass
class DraftReport:
    """Shape-independent intermediate result before backfill and totals."""

    foods: list[FoodItem]
    declared: DeclaredTotals
    risk_level: Level | None = None
    recommendations: list[str] = field(default_factory=list)
    disclaimer: str | None = None


def normalize(shape: ResponseShape) -> Report | RawTextReport:
    """Build a report from any recognized shape; never raises."""
    if isinstance(shape, UnstructuredText):
        return RawTextReport(analysis=shape.text)
    try:
        if isinstance(shape, NestedAnalysis):
            draft = draft_from_nested(NestedPayload.model_validate(shape.payload))
        else:
            draft = draft_from_flat(FlatPayload.model_validate(shape.payload))
    except ValidationError as exc:
        _logger.warning(
            "Model response did not fit %s shape: %s",
            type(shape).__name__,
            exc.error_count(),
        )
        return RawTextReport(analysis=_as_text(shape))
    return finalize(draft)


def draft_from_nested(payload: NestedPayload) -> DraftReport:
    """Flatten the verbose ``food_analysis`` shape."""
    analysis = payload.food_analysis
    assessment = analysis.gi_gl_assessment
    return DraftReport(
        foods=[_food_item(food) for food in analysis.foods],
        declared=_declared(
            analysis.total_nutrition,
            gl_level=assessment.gl_level or analysis.total_nutrition.gl_level,
        ),
        risk_level=payload.risk_level or assessment.risk_level,
        recommendations=payload.recommendations,
        disclaimer=payload.disclaimer,
    )


def draft_from_flat(payload: FlatPayload) -> DraftReport:
    """Pass the flat shape through with coerced types."""
    return DraftReport(
        foods=[_food_item(food) for food in payload.foods],
        declared=_declared(payload.nutrition, gl_level=payload.nutrition.gl_level),
        risk_level=payload.risk_level,
        recommendations=payload.recommendations,
        disclaimer=payload.disclaimer,
    )


def finalize(draft: DraftReport) -> Report:
    """Backfill nutrients, recompute totals and apply defaults."""
    foods = [backfill(food) for food in draft.foods]
    nutrition = summarize(foods, draft.declared)
    risk_level = draft.risk_level or nutrition.gl_level
    return Report(
        foods=foods,
        nutrition=nutrition,
        risk_level=risk_level,
        color_code=color_code(risk_level),
        recommendations=draft.recommendations or list(DEFAULT_RECOMMENDATIONS),
        disclaimer=draft.disclaimer or DEFAULT_DISCLAIMER,
    )


def backfill(food: FoodItem) -> FoodItem:
    """Estimate nutrients from the reference table when the model gave none.

    Items with any nonzero macro are returned unchanged. Items that cannot be
    estimated lose their (all-zero) nutrients.
    """
    if food.nutrients is not None and food.nutrients.has_macros():
        return food
    reference = lookup_reference(food.name)
    grams = parse_weight(food.estimated_weight)
    if reference is None or grams <= 0:
        return food.model_copy(update={"nutrients": None})
    nutrients = Nutrients(
        carbs=_scaled(reference.carbs, grams),
        protein=_scaled(reference.protein, grams),
        fat=_scaled(reference.fat, grams),
        fiber=_scaled(reference.fiber, grams),
    )
    return food.model_copy(update={"nutrients": nutrients})


def _food_item(food: LooseFood) -> FoodItem:
    nutrients = None
    if food.nutrients is not None:
        nutrients = Nutrients(
            carbs=food.nutrients.carbs,
            protein=food.nutrients.protein,
            fat=food.nutrients.fat,
            fiber=food.nutrients.fiber,
        )
    return FoodItem(
        name=food.name,
        estimated_weight=food.estimated_weight,
        nutrients=nutrients,
    )


def _declared(totals: LooseTotals, *, gl_level: Level | None) -> DeclaredTotals:
    return DeclaredTotals(
        total_carbs=totals.total_carbs,
        fiber=totals.fiber,
        net_carbs=totals.net_carbs,
        calories=totals.calories,
        gl_level=gl_level,
    )


def _as_text(shape: NestedAnalysis | FlatAnalysis) -> str:
    return json.dumps(shape.payload, ensure_ascii=False)


def _scaled(per_100g: float, grams: float) -> float:
    return round_half_up(per_100g * grams / 100)

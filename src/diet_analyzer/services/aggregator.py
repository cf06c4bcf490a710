"""Deterministic meal-level figures shared by every normalization path."""

import math
from collections.abc import Iterable
from dataclasses import dataclass

from diet_analyzer.domain.report import (
    ColorCode,
    FoodItem,
    Level,
    NutritionSummary,
)

LOW_GL_MAX_NET_CARBS = 30.0
MEDIUM_GL_MAX_NET_CARBS = 60.0

_COLOR_BY_LEVEL: dict[str, ColorCode] = {"低": "green", "中": "yellow", "高": "red"}


@dataclass(frozen=True)
class DeclaredTotals:
    """Meal totals as stated by the model, used only as a fallback."""

    total_carbs: float = 0.0
    fiber: float = 0.0
    net_carbs: float = 0.0
    calories: float = 0.0
    gl_level: Level | None = None


@dataclass(frozen=True)
class FoodTotals:
    """Sums across the nutrients of all food items."""

    carbs: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0


def net_carbs(total_carbs: float, fiber: float) -> float:
    """Total carbohydrate minus fiber, never below zero."""
    return max(total_carbs - fiber, 0.0)


def calories(carbs: float, protein: float, fat: float) -> float:
    """Energy in kcal from macronutrient grams (4/4/9)."""
    return 4 * carbs + 4 * protein + 9 * fat


def gl_level(net_carbs_g: float) -> Level:
    """Bucket net carbs into a glycemic-load tier."""
    if net_carbs_g <= LOW_GL_MAX_NET_CARBS:
        return "低"
    if net_carbs_g <= MEDIUM_GL_MAX_NET_CARBS:
        return "中"
    return "高"


def color_code(risk_level: str | None) -> ColorCode:
    """Map a risk level to its display color; unknown levels are yellow."""
    if risk_level is None:
        return "yellow"
    return _COLOR_BY_LEVEL.get(risk_level, "yellow")


def format_grams(value: float) -> str:
    return f"{_displayable(value):.1f}g"


def format_kcal(value: float) -> str:
    return f"{_displayable(value):.0f}kcal"


def _displayable(value: float) -> float:
    """Sums that overflowed to infinity are shown as zero."""
    return value if math.isfinite(value) else 0.0


def sum_foods(foods: Iterable[FoodItem]) -> FoodTotals:
    """Add up nutrients of items that carry them."""
    carbs = protein = fat = fiber = 0.0
    for food in foods:
        if food.nutrients is None:
            continue
        carbs += food.nutrients.carbs
        protein += food.nutrients.protein
        fat += food.nutrients.fat
        fiber += food.nutrients.fiber or 0.0
    return FoodTotals(carbs=carbs, protein=protein, fat=fat, fiber=fiber)


def summarize(foods: list[FoodItem], declared: DeclaredTotals) -> NutritionSummary:
    """Build the nutrition summary, preferring figures derived from the foods.

    Declared totals only fill in where the derived value is exactly zero.
    """
    totals = sum_foods(foods)
    total_carbs = totals.carbs or declared.total_carbs
    fiber = totals.fiber or declared.fiber
    if total_carbs:
        resolved_net = net_carbs(total_carbs, fiber)
        level = gl_level(resolved_net)
    else:
        resolved_net = declared.net_carbs
        level = declared.gl_level or gl_level(resolved_net)
    energy = calories(totals.carbs, totals.protein, totals.fat) or declared.calories
    return NutritionSummary(
        total_carbs=format_grams(total_carbs),
        fiber=format_grams(fiber),
        net_carbs=format_grams(resolved_net),
        gl_level=level,
        calories=format_kcal(energy),
    )

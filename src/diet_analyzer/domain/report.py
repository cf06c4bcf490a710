"""Canonical nutrition report returned to clients."""

from typing import Literal

from pydantic import BaseModel, Field

Level = Literal["低", "中", "高"]
ColorCode = Literal["green", "yellow", "red"]

UNKNOWN_FOOD_NAME = "未知食物"

DEFAULT_RECOMMENDATIONS: tuple[str, ...] = (
    "建议先吃蔬菜和蛋白质，再吃主食，有助于减缓餐后血糖上升",
    "注意控制主食分量，并在餐后2小时监测血糖",
)

DEFAULT_DISCLAIMER = (
    "本分析基于AI估算，仅供参考。实际营养值可能因烹饪方法和具体食材而异。"
    "请咨询专业医生或营养师获取个性化建议。"
)


class Nutrients(BaseModel):
    """Per-item macronutrients in grams."""

    carbs: float = Field(ge=0.0)
    protein: float = Field(ge=0.0)
    fat: float = Field(ge=0.0)
    fiber: float | None = Field(default=None, ge=0.0)

    def has_macros(self) -> bool:
        """Return true when any macronutrient is nonzero."""
        return any(value > 0 for value in (self.carbs, self.protein, self.fat))


class FoodItem(BaseModel):
    """Single recognized food with its portion estimate."""

    name: str = UNKNOWN_FOOD_NAME
    estimated_weight: str = ""
    nutrients: Nutrients | None = None


class NutritionSummary(BaseModel):
    """Meal-level nutrition figures formatted for display."""

    total_carbs: str
    fiber: str
    net_carbs: str
    gl_level: Level
    calories: str


class Report(BaseModel):
    """Structured analysis of one meal photo."""

    foods: list[FoodItem]
    nutrition: NutritionSummary
    risk_level: Level
    color_code: ColorCode
    recommendations: list[str] = Field(min_length=1)
    disclaimer: str


class RawTextReport(BaseModel):
    """Model answer that could not be read as a structured report."""

    analysis: str

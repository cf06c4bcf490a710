"""Per-100g reference nutrition values used to backfill missing estimates."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ReferenceFood:
    """Macronutrients, fiber and energy per 100 g of edible portion."""

    carbs: float
    protein: float
    fat: float
    fiber: float
    calories: float


_RICE = ReferenceFood(carbs=25.9, protein=2.6, fat=0.3, fiber=0.3, calories=116)
_BROWN_RICE = ReferenceFood(carbs=23.0, protein=2.6, fat=0.9, fiber=1.8, calories=111)
_NOODLES = ReferenceFood(carbs=24.3, protein=4.5, fat=0.5, fiber=0.8, calories=110)
_STEAMED_BUN = ReferenceFood(carbs=47.0, protein=7.0, fat=1.1, fiber=1.3, calories=223)
_BREAD = ReferenceFood(carbs=58.6, protein=8.3, fat=5.1, fiber=0.5, calories=313)
_POTATO = ReferenceFood(carbs=17.2, protein=2.0, fat=0.2, fiber=0.7, calories=77)
_SWEET_POTATO = ReferenceFood(carbs=24.7, protein=1.1, fat=0.2, fiber=1.6, calories=102)
_CORN = ReferenceFood(carbs=22.8, protein=4.0, fat=1.2, fiber=2.9, calories=112)
_APPLE = ReferenceFood(carbs=14.0, protein=0.3, fat=0.2, fiber=2.4, calories=52)
_BANANA = ReferenceFood(carbs=22.8, protein=1.1, fat=0.3, fiber=2.6, calories=89)
_BROCCOLI = ReferenceFood(carbs=6.6, protein=2.8, fat=0.4, fiber=2.6, calories=34)
_GREENS = ReferenceFood(carbs=3.0, protein=1.5, fat=0.3, fiber=1.1, calories=15)
_TOMATO = ReferenceFood(carbs=3.9, protein=0.9, fat=0.2, fiber=1.2, calories=18)
_EGG = ReferenceFood(carbs=1.1, protein=12.6, fat=9.5, fiber=0.0, calories=143)
_CHICKEN = ReferenceFood(carbs=0.0, protein=31.0, fat=3.6, fiber=0.0, calories=165)
_PORK = ReferenceFood(carbs=0.0, protein=21.0, fat=6.0, fiber=0.0, calories=143)
_BEEF = ReferenceFood(carbs=0.0, protein=26.0, fat=15.0, fiber=0.0, calories=250)
_FISH = ReferenceFood(carbs=0.0, protein=20.0, fat=5.0, fiber=0.0, calories=125)
_TOFU = ReferenceFood(carbs=1.9, protein=8.1, fat=3.7, fiber=0.4, calories=76)
_MILK = ReferenceFood(carbs=4.8, protein=3.2, fat=3.3, fiber=0.0, calories=61)
_YOGURT = ReferenceFood(carbs=9.3, protein=2.5, fat=2.7, fiber=0.0, calories=72)

# Iteration order matters: the last matching keyword wins, so more specific
# keywords are declared after the generic ones they contain.
REFERENCE_FOODS: dict[str, ReferenceFood] = {
    "米饭": _RICE,
    "糙米": _BROWN_RICE,
    "面条": _NOODLES,
    "馒头": _STEAMED_BUN,
    "面包": _BREAD,
    "土豆": _POTATO,
    "红薯": _SWEET_POTATO,
    "玉米": _CORN,
    "苹果": _APPLE,
    "香蕉": _BANANA,
    "西兰花": _BROCCOLI,
    "青菜": _GREENS,
    "番茄": _TOMATO,
    "西红柿": _TOMATO,
    "鸡蛋": _EGG,
    "鸡肉": _CHICKEN,
    "鸡胸": _CHICKEN,
    "猪肉": _PORK,
    "牛肉": _BEEF,
    "鱼": _FISH,
    "豆腐": _TOFU,
    "牛奶": _MILK,
    "酸奶": _YOGURT,
    "rice": _RICE,
    "brown rice": _BROWN_RICE,
    "noodle": _NOODLES,
    "steamed bun": _STEAMED_BUN,
    "bread": _BREAD,
    "potato": _POTATO,
    "sweet potato": _SWEET_POTATO,
    "corn": _CORN,
    "apple": _APPLE,
    "banana": _BANANA,
    "broccoli": _BROCCOLI,
    "tomato": _TOMATO,
    "egg": _EGG,
    "chicken": _CHICKEN,
    "pork": _PORK,
    "beef": _BEEF,
    "fish": _FISH,
    "tofu": _TOFU,
    "milk": _MILK,
    "yogurt": _YOGURT,
}


def lookup_reference(name: str | None) -> ReferenceFood | None:
    """Return reference values for the last keyword contained in the name."""
    if not name:
        return None
    lowered = name.lower()
    match: ReferenceFood | None = None
    for keyword, food in REFERENCE_FOODS.items():
        if keyword in lowered:
            match = food
    return match

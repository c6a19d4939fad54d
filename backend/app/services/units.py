"""
Ingredient display units.

Maps a free-text ingredient name to the unit shown next to its quantity
(e.g. "Whole Milk" -> "l", "Baby Spinach" -> "cup"). Purely cosmetic: the
result is never persisted.

Matching is substring based and the first matching category wins, so the
order of UNIT_RULES (and of the groups inside a rule) decides ambiguous
names: "maple syrup" is a liquid before it is a condiment.
"""

import re
from dataclasses import dataclass
from typing import Optional

from app.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class KeywordGroup:
    name: str
    keywords: tuple[str, ...]
    unit: Optional[str] = None  # None -> rule.default_unit


@dataclass(frozen=True)
class UnitRule:
    category: str
    unit: Optional[str] = None
    keywords: tuple[str, ...] = ()
    groups: tuple[KeywordGroup, ...] = ()
    default_unit: Optional[str] = None

    def match(self, name: str) -> Optional[str]:
        """Return this rule's unit for a normalized name, or None."""
        if self.groups:
            for group in self.groups:
                if any(kw in name for kw in group.keywords):
                    return group.unit or self.default_unit
            return None
        if any(kw in name for kw in self.keywords):
            return self.unit
        return None


UNIT_RULES: tuple[UnitRule, ...] = (
    UnitRule(
        category="liquid",
        unit="l",
        keywords=(
            "milk", "water", "oil", "cream", "broth", "stock", "juice", "wine",
            "coconut milk", "almond milk", "soy milk", "vegetable broth",
            "chicken broth", "beef broth", "marinade", "vinegar", "syrup",
            "liqueur", "beer", "spirits", "rum", "vodka", "whiskey",
        ),
    ),
    UnitRule(
        category="dry",
        unit="g",
        keywords=(
            "flour", "sugar", "salt", "pepper", "spices", "herbs", "cocoa",
            "baking powder", "baking soda", "cornstarch", "powdered sugar",
            "yeast", "breadcrumbs", "nutritional yeast", "matcha",
            "dried herbs", "ground spices", "curry powder", "chili powder",
            "paprika",
        ),
    ),
    UnitRule(
        category="granules",
        unit="g",
        keywords=(
            "coffee", "ground coffee", "instant coffee", "tea leaves",
            "loose tea", "matcha powder", "protein powder", "cocoa powder",
            "ground cinnamon", "ground nutmeg", "ground ginger",
            "ground turmeric", "ground cloves", "ground allspice",
            "powdered milk", "powdered sugar", "ground vanilla bean",
            "espresso powder",
        ),
    ),
    UnitRule(
        category="produce",
        default_unit="pc",
        groups=(
            KeywordGroup("default", (
                "onion", "garlic", "tomato", "potato", "carrot", "lettuce",
                "bell pepper", "chili", "cucumber", "zucchini", "eggplant",
                "radish", "turnip", "beetroot",
            )),
            KeywordGroup("leafy", (
                "spinach", "kale", "arugula", "swiss chard", "collard greens",
                "mixed greens", "basil leaves", "mint leaves", "parsley",
            ), unit="cup"),
            KeywordGroup("small", (
                "shallot", "scallion", "green onion", "leek", "pearl onion",
            ), unit="pc"),
            KeywordGroup("minced", (
                "ginger", "fresh herbs", "parsley", "cilantro", "chives",
            ), unit="tbsp"),
            KeywordGroup("chopped", (
                "cabbage", "cauliflower", "broccoli", "brussels sprouts",
            ), unit="cup"),
        ),
    ),
    UnitRule(
        category="protein",
        default_unit="g",
        groups=(
            KeywordGroup("default", (
                "chicken", "beef", "pork", "fish", "tofu", "tempeh", "seitan",
                "turkey", "lamb", "duck", "shrimp", "scallops", "crab",
                "salmon", "cod", "tuna",
            )),
            KeywordGroup("ground", (
                "ground beef", "ground turkey", "ground pork", "ground chicken",
            ), unit="g"),
            KeywordGroup("whole", (
                "egg", "salmon fillet", "chicken breast", "duck breast",
                "whole fish", "pork chop", "steak",
            ), unit="pc"),
        ),
    ),
    UnitRule(
        category="dairy",
        groups=(
            KeywordGroup("weight", (
                "cheese", "butter", "cream cheese", "feta", "parmesan",
                "mozzarella", "cheddar", "blue cheese", "goat cheese",
            ), unit="g"),
            KeywordGroup("volume", (
                "yogurt", "sour cream", "heavy cream", "half and half",
                "buttermilk",
            ), unit="l"),
            KeywordGroup("pieces", ("cheese slice", "cottage cheese"), unit="pc"),
        ),
    ),
    UnitRule(
        category="grains",
        groups=(
            KeywordGroup("weight", (
                "pasta", "noodles", "quinoa raw", "couscous", "bulgur raw",
            ), unit="g"),
            KeywordGroup("volume", (
                "rice", "oats", "quinoa cooked", "bulgur cooked", "wild rice",
                "basmati rice", "brown rice",
            ), unit="cup"),
        ),
    ),
    UnitRule(
        category="packaged",
        default_unit="can",
        groups=(
            KeywordGroup("default", (
                "beans", "corn", "tomato sauce", "chickpeas", "lentils",
                "black beans", "kidney beans", "tuna can", "sardines",
            )),
            KeywordGroup("weight", (
                "canned tomatoes", "canned salmon", "canned tuna",
            ), unit="g"),
        ),
    ),
    UnitRule(
        category="nuts",
        unit="g",
        keywords=(
            "almonds", "walnuts", "pecans", "cashews", "pistachios", "seeds",
            "sunflower seeds", "pumpkin seeds", "chia seeds", "flax seeds",
            "sesame seeds", "pine nuts", "macadamia nuts",
        ),
    ),
    UnitRule(
        category="condiments",
        unit="ml",
        keywords=(
            "ketchup", "mustard", "mayonnaise", "soy sauce", "hot sauce",
            "worcestershire sauce", "tahini", "honey", "maple syrup",
            "bbq sauce", "teriyaki sauce", "fish sauce", "oyster sauce",
        ),
    ),
)

_SIZE_WORDS = re.compile(r"\b(small|large|medium)\b")


def _fallback_unit(name: str) -> str:
    if _SIZE_WORDS.search(name):
        return "pc"
    if "liquid" in name:
        return "ml"
    if "solid" in name:
        return "g"
    return ""


def classify_unit(ingredient_name: str) -> str:
    """
    Best-guess display unit for an ingredient name.
    Returns "" when neither a category nor a fallback heuristic matches.
    """
    if not isinstance(ingredient_name, str):
        return ""
    name = ingredient_name.strip().lower()
    if not name:
        return ""
    for rule in UNIT_RULES:
        unit = rule.match(name)
        if unit is not None:
            return unit
    unit = _fallback_unit(name)
    if not unit:
        logger.debug("units.unclassified name=%s", name)
    return unit


def classify_units(ingredient_names: list[str]) -> dict[str, str]:
    """Classify a whole ingredient list at once (name -> unit)."""
    return {name: classify_unit(name) for name in ingredient_names}


def get_unit_categories() -> list[str]:
    """Category names in precedence order."""
    return [rule.category for rule in UNIT_RULES]

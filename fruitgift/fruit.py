"""Fruit definitions: rarity tiers, per-fruit values and the full catalogue."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

RARITY_MAX = 255


class Category(IntEnum):
    """Rarity tier of a fruit, controlling its base drop rate and how luck affects it."""

    STANDARD = 0
    RARE = 1
    EXOTIC = 2


_CATEGORY_BASE_VALUE = {
    Category.STANDARD: 1.0,
    Category.RARE: 3.0,
    Category.EXOTIC: 10.0,
}


@dataclass(frozen=True)
class Fruit:
    """A fruit that can be held in a bag, gifted or burned.

    ``raw_rarity`` is the within-category rarity in ``[0, 255]``; use
    :meth:`rarity` for the normalised value.
    """

    name: str
    emoji: str
    category: Category
    raw_rarity: int

    def __post_init__(self) -> None:
        if not 0 <= self.raw_rarity <= RARITY_MAX:
            raise ValueError(f"raw rarity must be in [0, {RARITY_MAX}], got {self.raw_rarity}")

    def rarity(self) -> float:
        """Within-category rarity normalised to ``[0.0, 1.0]``."""
        return self.raw_rarity / RARITY_MAX

    def value(self) -> float:
        """Intrinsic value: ``category_base * (1 + rarity())``."""
        return _CATEGORY_BASE_VALUE[self.category] * (1.0 + self.rarity())


# Standard (9)
GRAPES = Fruit("Grapes", "🍇", Category.STANDARD, 0)
MELON = Fruit("Melon", "🍈", Category.STANDARD, 32)
WATERMELON = Fruit("Watermelon", "🍉", Category.STANDARD, 64)
TANGERINE = Fruit("Tangerine", "🍊", Category.STANDARD, 96)
LEMON = Fruit("Lemon", "🍋", Category.STANDARD, 128)
BANANA = Fruit("Banana", "🍌", Category.STANDARD, 159)
PINEAPPLE = Fruit("Pineapple", "🍍", Category.STANDARD, 191)
RED_APPLE = Fruit("Red Apple", "🍎", Category.STANDARD, 223)
GREEN_APPLE = Fruit("Green Apple", "🍏", Category.STANDARD, 255)

# Rare (9)
PEAR = Fruit("Pear", "🍐", Category.RARE, 0)
PEACH = Fruit("Peach", "🍑", Category.RARE, 32)
CHERRIES = Fruit("Cherries", "🍒", Category.RARE, 64)
STRAWBERRY = Fruit("Strawberry", "🍓", Category.RARE, 96)
AVOCADO = Fruit("Avocado", "🥑", Category.RARE, 128)
CUCUMBER = Fruit("Cucumber", "🥒", Category.RARE, 159)
PEANUT = Fruit("Peanut", "🥜", Category.RARE, 191)
KIWI = Fruit("Kiwi", "🥝", Category.RARE, 223)
COCONUT = Fruit("Coconut", "🥥", Category.RARE, 255)

# Exotic (8)
MANGO = Fruit("Mango", "🥭", Category.EXOTIC, 0)
TOMATO = Fruit("Tomato", "🍅", Category.EXOTIC, 36)
CHESTNUT = Fruit("Chestnut", "🌰", Category.EXOTIC, 73)
HOT_PEPPER = Fruit("Hot Pepper", "🌶", Category.EXOTIC, 109)
BELL_PEPPER = Fruit("Bell Pepper", "🫑", Category.EXOTIC, 146)
GINGER_ROOT = Fruit("Ginger Root", "🫚", Category.EXOTIC, 182)
BLUEBERRIES = Fruit("Blueberries", "🫐", Category.EXOTIC, 219)
OLIVE = Fruit("Olive", "🫒", Category.EXOTIC, 255)

FRUITS: tuple[Fruit, ...] = (
    GRAPES,
    MELON,
    WATERMELON,
    TANGERINE,
    LEMON,
    BANANA,
    PINEAPPLE,
    RED_APPLE,
    GREEN_APPLE,
    PEAR,
    PEACH,
    CHERRIES,
    STRAWBERRY,
    AVOCADO,
    CUCUMBER,
    PEANUT,
    KIWI,
    COCONUT,
    MANGO,
    TOMATO,
    CHESTNUT,
    HOT_PEPPER,
    BELL_PEPPER,
    GINGER_ROOT,
    BLUEBERRIES,
    OLIVE,
)
"""All fruits, ordered by category then by ascending within-category rarity."""
"""Members of a community and their identifiers."""

from __future__ import annotations

import dataclasses
import math
import uuid
from dataclasses import dataclass, field

from fruitgift.bag import Bag
from fruitgift.fruit import Fruit

LUCK_MAX = 255


def _luck_from_fraction(luck: float) -> int:
    """Scale a fraction in ``[0, 1]`` to a raw luck value, rounding half away from zero."""
    if math.isnan(luck):
        return 0
    scaled = luck * LUCK_MAX
    rounded = math.floor(scaled + 0.5) if scaled >= 0 else math.ceil(scaled - 0.5)
    return max(0, min(LUCK_MAX, rounded))


@dataclass(frozen=True, order=True)
class MemberId:
    """Typed identifier for a :class:`Member`; random unless given."""

    uuid: uuid.UUID = field(default_factory=uuid.uuid4)

    def __str__(self) -> str:
        return str(self.uuid)


@dataclass
class Member:
    """A participant in the game."""

    display_name: str
    id: MemberId = field(default_factory=MemberId)
    luck_raw: int = 0
    bag: Bag = field(default_factory=Bag)

    def __post_init__(self) -> None:
        if not 0 <= self.luck_raw <= LUCK_MAX:
            raise ValueError(f"luck must be in [0, {LUCK_MAX}], got {self.luck_raw}")

    def with_id(self, id: MemberId) -> Member:
        """Return a copy with the given identifier."""
        return dataclasses.replace(self, id=id)

    def with_bag(self, bag: Bag) -> Member:
        """Return a copy holding ``bag``."""
        return dataclasses.replace(self, bag=bag)

    def with_luck(self, luck: int) -> Member:
        """Return a copy with raw luck ``luck`` in ``[0, 255]``."""
        return dataclasses.replace(self, luck_raw=luck)

    def with_luck_f64(self, luck: float) -> Member:
        """Return a copy with luck given as a fraction in ``[0.0, 1.0]``, rounded."""
        return dataclasses.replace(self, luck_raw=_luck_from_fraction(luck))

    def luck(self) -> float:
        """Luck normalised to ``[0.0, 1.0]``."""
        return self.luck_raw / LUCK_MAX

    def receive(self, fruit: Fruit) -> Member:
        """Add one ``fruit`` to this member's bag and return the member."""
        self.bag.insert(fruit)
        return self
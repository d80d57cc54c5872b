"""Computing the state changes of burning fruits."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from fruitgift.event_log import RemoveFruitFromMember
from fruitgift.fruit import Fruit


def compute_burn(community, member_id, fruits: Iterable[Fruit]) -> list:
    """One removal mutation per fruit actually burned.

    ``fruits`` may repeat and span several types; for each type
    ``min(requested, held)`` are burned and any excess is skipped. Returns an
    empty list if the member is unknown, nothing is requested, or nothing
    requested is held.
    """
    requested = Counter(fruits)
    if not requested:
        return []
    member = community.members.get(member_id)
    if member is None:
        return []
    return [
        RemoveFruitFromMember(member_id=member_id, fruit=fruit)
        for fruit, wanted in requested.items()
        for _ in range(min(wanted, member.bag.count(fruit)))
    ]
"""Computing the state changes of a gift between members."""

from __future__ import annotations

from fruitgift.event_log import AddFruitToMember, RemoveFruitFromMember
from fruitgift.fruit import Fruit


def compute_gift(community, sender_id, recipient_id, fruit: Fruit) -> list:
    """Mutations moving one ``fruit`` from sender to recipient.

    Returns an empty list (a no-op) if the sender is unknown or does not hold
    the fruit.
    """
    sender = community.members.get(sender_id)
    if sender is None or sender.bag.count(fruit) == 0:
        return []
    return [
        RemoveFruitFromMember(member_id=sender_id, fruit=fruit),
        AddFruitToMember(member_id=recipient_id, fruit=fruit),
    ]
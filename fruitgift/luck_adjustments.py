"""Luck bonuses and penalties earned by player actions between grants."""

from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence

from fruitgift.bag import bag_value
from fruitgift.community import Community, community_avg_bag_value
from fruitgift.event_log import (
    BurnLuckBonus,
    BurnPayload,
    GiftLuckBonus,
    GiftPayload,
    OstentatiousBurnPenalty,
    OstentatiousGiftPenalty,
    QuidProQuoPenalty,
    Record,
    RemoveFruitFromMember,
    StateMutation,
)
from fruitgift.member import MemberId

GIFT_LUCK_SCALE = 10.0
BURN_LUCK_SCALE = 10.0
OSTENTATION_RATIO = 2.0
OSTENTATION_SCALE = 5.0
QP_SIMILARITY_THRESHOLD = 0.2
QP_MAX_PENALTY = 64.0

_I16_MIN = -32768
_I16_MAX = 32767


def _round_half_away(value: float) -> int:
    truncated = math.trunc(value)
    if abs(value - truncated) == 0.5:
        return truncated + (1 if value > 0 else -1)
    return round(value)


def _to_i16(value: float) -> int:
    return max(_I16_MIN, min(_I16_MAX, _round_half_away(value)))


def _applied(record: Record) -> bool:
    return record.effect is not None and bool(record.effect.mutations)


def compute(
    community_at_last_grant: Community,
    records_since_last_grant: Sequence[Record],
    recent_gift_records: Sequence[Record],
) -> list[StateMutation]:
    """Luck mutations for the actions since the previous grant.

    ``records_since_last_grant`` must be in ascending sequence order;
    ``recent_gift_records`` feeds quid-pro-quo detection. Records without an
    effect, or with an empty one, are skipped. Mutations come out as gift
    bonuses, burn bonus, gift penalties, burn penalties, then the
    quid-pro-quo penalty.
    """
    running = community_at_last_grant.copy()

    gift_bonus_by_sender: dict[MemberId, float] = {}
    burn_bonus_total = 0.0
    gift_penalties: list[tuple[MemberId, int]] = []
    burn_penalties: list[tuple[MemberId, int]] = []

    for record in records_since_last_grant:
        if not _applied(record):
            continue
        effect = record.effect
        payload = record.event.payload

        if isinstance(payload, GiftPayload):
            gift_value = payload.fruit.value()
            gift_bonus_by_sender[payload.sender_id] = (
                gift_bonus_by_sender.get(payload.sender_id, 0.0) + gift_value
            )
            recipient = running.members.get(payload.recipient_id)
            recipient_value = bag_value(recipient.bag) if recipient is not None else 0.0
            excess = gift_value - OSTENTATION_RATIO * recipient_value
            penalty = -_to_i16(max(excess, 0.0) * OSTENTATION_SCALE)
            if penalty:
                gift_penalties.append((payload.sender_id, penalty))
        elif isinstance(payload, BurnPayload):
            burned_value = sum(
                mutation.fruit.value()
                for mutation in effect.mutations
                if isinstance(mutation, RemoveFruitFromMember)
            )
            burn_bonus_total += burned_value
            excess = burned_value - OSTENTATION_RATIO * community_avg_bag_value(running)
            penalty = -_to_i16(max(excess, 0.0) * OSTENTATION_SCALE)
            if penalty:
                burn_penalties.append((payload.member_id, penalty))

        effect.apply(running)

    mutations: list[StateMutation] = [
        GiftLuckBonus(member_id=member_id, delta=_to_i16(total * GIFT_LUCK_SCALE))
        for member_id, total in gift_bonus_by_sender.items()
    ]

    burn_delta = _to_i16(burn_bonus_total * BURN_LUCK_SCALE)
    if burn_delta > 0:
        mutations.append(BurnLuckBonus(delta=burn_delta))

    mutations.extend(
        OstentatiousGiftPenalty(member_id=member_id, delta=delta)
        for member_id, delta in gift_penalties
    )
    mutations.extend(
        OstentatiousBurnPenalty(member_id=member_id, delta=delta)
        for member_id, delta in burn_penalties
    )

    qp = _qp_penalty(recent_gift_records)
    if qp is not None:
        mutations.append(qp)
    return mutations


def _is_quid_pro_quo(forward: Iterable[float], backward: list[float]) -> bool:
    return any(
        va != vb and abs(va - vb) / max(va, vb) < QP_SIMILARITY_THRESHOLD
        for va in forward
        for vb in backward
    )


def _qp_penalty(recent_gift_records: Sequence[Record]) -> Optional[QuidProQuoPenalty]:
    directed: dict[tuple[MemberId, MemberId], list[float]] = {}
    for record in recent_gift_records:
        payload = record.event.payload
        if not _applied(record) or not isinstance(payload, GiftPayload):
            continue
        directed.setdefault((payload.sender_id, payload.recipient_id), []).append(
            payload.fruit.value()
        )

    seen: set[frozenset[MemberId]] = set()
    total_bidirectional = 0
    qp_count = 0
    for (sender, recipient), forward in directed.items():
        pair = frozenset((sender, recipient))
        if pair in seen:
            continue
        seen.add(pair)
        backward = directed.get((recipient, sender))
        if backward is None:
            continue
        total_bidirectional += 1
        if _is_quid_pro_quo(forward, backward):
            qp_count += 1

    if qp_count == 0:
        return None
    ratio = qp_count / total_bidirectional
    delta = -_round_half_away(ratio * QP_MAX_PENALTY)
    return QuidProQuoPenalty(delta=delta) if delta else None
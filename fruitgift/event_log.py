"""Events, effects and the state mutations that effects apply to a community."""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

from fruitgift.fruit import Fruit
from fruitgift.member import LUCK_MAX, Member, MemberId

if TYPE_CHECKING:
    from fruitgift.community import Community, CommunityId


@dataclass(frozen=True, order=True)
class SequenceId:
    """A position in the event/effect log sequence.

    Sequence IDs start at 1 and increase monotonically; an event and its
    effect share the same ID. Zero means "before any entry".
    """

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"sequence id must be non-negative, got {self.value}")

    @classmethod
    def zero(cls) -> SequenceId:
        """The position before the first entry."""
        return cls(0)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return f"SequenceId({self.value})"


class HasSequenceId(ABC):
    """Something that occupies a position in the event/effect log."""

    @abstractmethod
    def sequence_id(self) -> SequenceId:
        """The position of this entry in the log."""


# ── Shared shapes ───────────────────────────────────────────────────────────


class _LuckChecked:
    luck: int

    def __post_init__(self) -> None:
        if not 0 <= self.luck <= LUCK_MAX:
            raise ValueError(f"luck must be in [0, {LUCK_MAX}], got {self.luck}")


@dataclass(frozen=True)
class _MemberRef:
    member_id: MemberId


@dataclass(frozen=True)
class _MemberFruit:
    member_id: MemberId
    fruit: Fruit


@dataclass(frozen=True)
class _CommunityLuck(_LuckChecked):
    luck: int


@dataclass(frozen=True)
class _MemberLuck(_LuckChecked):
    member_id: MemberId
    luck: int


@dataclass(frozen=True)
class _Delta:
    delta: int


@dataclass(frozen=True)
class _MemberDelta:
    member_id: MemberId
    delta: int


# ── Event payloads ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class GrantPayload:
    """Distribute ``count`` fruits to every member of the community."""

    count: int


@dataclass(frozen=True)
class AddMemberPayload:
    """Add a member; ``member_id`` is chosen up front so the effect is reproducible."""

    display_name: str
    member_id: MemberId


class RemoveMemberPayload(_MemberRef):
    """Remove the member identified by ``member_id``."""


class SetCommunityLuckPayload(_CommunityLuck):
    """Set the community's raw luck."""


class SetMemberLuckPayload(_MemberLuck):
    """Set a member's raw luck."""


@dataclass(frozen=True)
class GiftPayload:
    """Transfer one ``fruit`` from ``sender_id`` to ``recipient_id``."""

    sender_id: MemberId
    recipient_id: MemberId
    fruit: Fruit
    message: Optional[str] = None


@dataclass(frozen=True)
class BurnPayload:
    """Destroy fruits held by ``member_id``; duplicates and mixed types allowed."""

    member_id: MemberId
    fruits: tuple[Fruit, ...]
    message: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fruits", tuple(self.fruits))


EventPayload = Union[
    GrantPayload,
    AddMemberPayload,
    RemoveMemberPayload,
    SetCommunityLuckPayload,
    SetMemberLuckPayload,
    GiftPayload,
    BurnPayload,
]


@dataclass(frozen=True)
class Event:
    """A recorded player intention; its consequences are computed as an :class:`Effect`."""

    id: SequenceId
    community_id: CommunityId
    payload: EventPayload


# ── State mutations ─────────────────────────────────────────────────────────


class AddFruitToMember(_MemberFruit):
    """Add one ``fruit`` to a member's bag."""


class RemoveFruitFromMember(_MemberFruit):
    """Remove one ``fruit`` from a member's bag; nothing happens if it is not held."""


@dataclass(frozen=True)
class AddMember:
    """Add ``member`` to the community."""

    member: Member


class RemoveMember(_MemberRef):
    """Remove a member from the community."""


class SetCommunityLuck(_CommunityLuck):
    """Set the community's raw luck."""


class SetMemberLuck(_MemberLuck):
    """Set a member's raw luck."""


class GiftLuckBonus(_MemberDelta):
    """Raise a member's luck by ``delta`` after gifting, clamped to ``[0, 255]``."""


class BurnLuckBonus(_Delta):
    """Raise community luck by ``delta`` after a burn, clamped to ``[0, 255]``."""


class OstentatiousGiftPenalty(_MemberDelta):
    """Adjust a member's luck by a negative ``delta`` for an ostentatious gift."""


class OstentatiousBurnPenalty(_MemberDelta):
    """Adjust a member's luck by a negative ``delta`` for an ostentatious burn."""


class QuidProQuoPenalty(_Delta):
    """Adjust community luck by a negative ``delta`` for reciprocal gifting."""


StateMutation = Union[
    AddFruitToMember,
    RemoveFruitFromMember,
    AddMember,
    RemoveMember,
    SetCommunityLuck,
    SetMemberLuck,
    GiftLuckBonus,
    BurnLuckBonus,
    OstentatiousGiftPenalty,
    OstentatiousBurnPenalty,
    QuidProQuoPenalty,
]

_MEMBER_DELTAS = (GiftLuckBonus, OstentatiousGiftPenalty, OstentatiousBurnPenalty)
_COMMUNITY_DELTAS = (BurnLuckBonus, QuidProQuoPenalty)


def _apply_luck_delta(raw: int, delta: int) -> int:
    return max(0, min(LUCK_MAX, raw + delta))


@dataclass(frozen=True)
class Effect:
    """The computed consequence of an event; carries the event's sequence ID.

    An effect with no mutations is a no-op.
    """

    id: SequenceId
    community_id: CommunityId
    mutations: tuple[StateMutation, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "mutations", tuple(self.mutations))

    def apply(self, community: Community) -> None:
        """Apply every mutation to ``community`` in order.

        Mutations for members no longer in the community are skipped.
        """
        for mutation in self.mutations:
            if isinstance(mutation, AddMember):
                member = mutation.member
                community.add_member(dataclasses.replace(member, bag=member.bag.copy()))
            elif isinstance(mutation, RemoveMember):
                community.remove_member(mutation.member_id)
            elif isinstance(mutation, SetCommunityLuck):
                community.luck_raw = mutation.luck
            elif isinstance(mutation, _COMMUNITY_DELTAS):
                community.luck_raw = _apply_luck_delta(community.luck_raw, mutation.delta)
            else:
                self._apply_to_member(community, mutation)

    @staticmethod
    def _apply_to_member(community: Community, mutation: StateMutation) -> None:
        member_id = getattr(mutation, "member_id", None)
        if member_id is None:
            raise TypeError(f"unknown state mutation: {mutation!r}")
        member = community.members.get(member_id)
        if member is None:
            return
        if isinstance(mutation, AddFruitToMember):
            member.receive(mutation.fruit)
        elif isinstance(mutation, RemoveFruitFromMember):
            member.bag.remove(mutation.fruit)
        elif isinstance(mutation, SetMemberLuck):
            member.luck_raw = mutation.luck
        elif isinstance(mutation, _MEMBER_DELTAS):
            member.luck_raw = _apply_luck_delta(member.luck_raw, mutation.delta)
        else:
            raise TypeError(f"unknown state mutation: {mutation!r}")


@dataclass(frozen=True)
class Record(HasSequenceId):
    """A log entry: an event and its effect, or ``None`` if not yet processed."""

    event: Event
    effect: Optional[Effect] = None

    def sequence_id(self) -> SequenceId:
        """The sequence ID of the event."""
        return self.event.id

    def community_id(self) -> CommunityId:
        """The community the event belongs to."""
        return self.event.community_id
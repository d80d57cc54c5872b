"""Communities: groups of members sharing a collective luck modifier."""

from __future__ import annotations

import dataclasses
import uuid
from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol, runtime_checkable

from fruitgift.bag import bag_value
from fruitgift.event_log import Effect, SequenceId
from fruitgift.member import LUCK_MAX, Member, MemberId, _luck_from_fraction


@dataclass(frozen=True, order=True)
class CommunityId:
    """Typed identifier for a :class:`Community`; random unless given."""

    uuid: uuid.UUID = field(default_factory=uuid.uuid4)

    def __str__(self) -> str:
        return str(self.uuid)


@runtime_checkable
class HasCommunityId(Protocol):
    """Something that belongs to a community."""

    def community_id(self) -> CommunityId:
        """The identifier of the community this value belongs to."""
        ...


@dataclass
class Community:
    """A group of members sharing a collective luck modifier.

    ``version`` is the log position up to which this snapshot has been
    computed; zero means no effects have been applied yet.
    """

    id: CommunityId = field(default_factory=CommunityId)
    luck_raw: int = 0
    members: dict[MemberId, Member] = field(default_factory=dict)
    version: SequenceId = field(default_factory=SequenceId.zero)

    def __post_init__(self) -> None:
        if not 0 <= self.luck_raw <= LUCK_MAX:
            raise ValueError(f"luck must be in [0, {LUCK_MAX}], got {self.luck_raw}")

    def copy(self) -> Community:
        """An independent copy: members and their bags are not shared."""
        return Community(
            id=self.id,
            luck_raw=self.luck_raw,
            members={
                member_id: dataclasses.replace(member, bag=member.bag.copy())
                for member_id, member in self.members.items()
            },
            version=self.version,
        )

    def _replaced(self, **changes) -> Community:
        clone = self.copy()
        return Community(
            id=changes.get("id", clone.id),
            luck_raw=changes.get("luck_raw", clone.luck_raw),
            members=clone.members,
            version=changes.get("version", clone.version),
        )

    def with_id(self, id: CommunityId) -> Community:
        """Return a copy with the given identifier."""
        return self._replaced(id=id)

    def with_luck(self, luck: int) -> Community:
        """Return a copy with raw luck ``luck`` in ``[0, 255]``."""
        return self._replaced(luck_raw=luck)

    def with_luck_f64(self, luck: float) -> Community:
        """Return a copy with luck given as a fraction in ``[0.0, 1.0]``, rounded."""
        return self._replaced(luck_raw=_luck_from_fraction(luck))

    def with_version(self, version: SequenceId) -> Community:
        """Return a copy at the given version."""
        return self._replaced(version=version)

    def luck(self) -> float:
        """Luck normalised to ``[0.0, 1.0]``."""
        return self.luck_raw / LUCK_MAX

    def add_member(self, member: Member) -> bool:
        """Add ``member``; return ``False`` if a member with its ID is already present."""
        if member.id in self.members:
            return False
        self.members[member.id] = member
        return True

    def remove_member(self, id: MemberId) -> Optional[Member]:
        """Remove and return the member with ``id``, or ``None`` if there is none."""
        return self.members.pop(id, None)

    def apply_effects(self, effects: Iterable[Effect]) -> None:
        """Apply ``effects`` in order, advancing ``version`` to the last one applied."""
        for effect in effects:
            effect.apply(self)
            self.version = effect.id

    def community_id(self) -> CommunityId:
        """This community's identifier."""
        return self.id


def community_avg_bag_value(community: Community) -> float:
    """Mean bag value across members, or ``0.0`` if there are none."""
    if not community.members:
        return 0.0
    total = sum(bag_value(member.bag) for member in community.members.values())
    return total / len(community.members)
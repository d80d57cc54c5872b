"""Storage ports for the event and effect log."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from fruitgift.community import CommunityId
from fruitgift.event_log import (
    Effect,
    Event,
    EventPayload,
    Record,
    SequenceId,
    StateMutation,
)


class EventLogProvider(ABC):
    """Read port for the event and effect log.

    Implementations raise :class:`fruitgift.error.DbError` subclasses on
    storage failures.
    """

    @abstractmethod
    async def get_record(self, community_id: CommunityId, id: SequenceId) -> Optional[Record]:
        """The log entry at ``id``, or ``None`` if not found."""

    @abstractmethod
    async def get_effect_for_event(
        self, community_id: CommunityId, event_id: SequenceId
    ) -> Optional[Effect]:
        """The effect of event ``event_id``, or ``None`` if not yet processed."""

    @abstractmethod
    async def get_effects_after(
        self, community_id: CommunityId, limit: int, after: SequenceId
    ) -> list[Effect]:
        """Up to ``limit`` effects with sequence ID strictly above ``after``, ascending.

        ``after`` is a keyset cursor; pass ``SequenceId.zero()`` to start at
        the beginning.
        """

    @abstractmethod
    async def get_records_before(
        self, community_id: CommunityId, limit: int, before: Optional[SequenceId]
    ) -> list[Record]:
        """Up to ``limit`` records with sequence ID strictly below ``before``, descending.

        ``before`` is a keyset cursor; ``None`` starts at the most recent record.
        """

    @abstractmethod
    async def get_latest_grant_events(self, community_id: CommunityId, limit: int) -> list[Event]:
        """Up to ``limit`` grant events, most recent first."""

    @abstractmethod
    async def get_latest_gift_records(self, community_id: CommunityId, limit: int) -> list[Record]:
        """Up to ``limit`` gift records, most recent first."""

    @abstractmethod
    async def get_records_between(
        self, community_id: CommunityId, after: SequenceId, before: SequenceId
    ) -> list[Record]:
        """All records with sequence ID strictly between ``after`` and ``before``, ascending."""


class EventLogPersistor(ABC):
    """Write port for the event and effect log."""

    @abstractmethod
    async def append_event(self, community_id: CommunityId, payload: EventPayload) -> Event:
        """Assign the next sequence ID to a new event and store it."""

    @abstractmethod
    async def append_effect(
        self,
        event_id: SequenceId,
        community_id: CommunityId,
        mutations: Sequence[StateMutation],
    ) -> Effect:
        """Store the effect of event ``event_id`` under the same sequence ID.

        Raises a ``DbError`` if an effect for ``event_id`` is already stored.
        """


class EventLogRepo(EventLogProvider, EventLogPersistor, ABC):
    """Combined read/write port for the event and effect log."""
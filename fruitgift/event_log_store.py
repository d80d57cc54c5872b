"""Reading and writing the event and effect log."""

from __future__ import annotations

from typing import Optional, Sequence

from fruitgift.community import CommunityId
from fruitgift.error import DbError, StorageLayerError
from fruitgift.event_log import (
    Effect,
    Event,
    EventPayload,
    Record,
    SequenceId,
    StateMutation,
)
from fruitgift.event_log_repo import EventLogRepo


class EventLogStore:
    """Reads and writes the event log through an :class:`EventLogRepo`.

    Storage failures are raised as :class:`StorageLayerError`.
    """

    def __init__(self, repo: EventLogRepo) -> None:
        self._repo = repo

    async def get_record(self, community_id: CommunityId, id: SequenceId) -> Optional[Record]:
        """The log entry at ``id``, or ``None`` if not found."""
        try:
            return await self._repo.get_record(community_id, id)
        except DbError as err:
            raise StorageLayerError.wrap("failed to read event log record", err) from err

    async def get_effect_for_event(
        self, community_id: CommunityId, event_id: SequenceId
    ) -> Optional[Effect]:
        """The effect of event ``event_id``, or ``None`` if not yet processed."""
        try:
            return await self._repo.get_effect_for_event(community_id, event_id)
        except DbError as err:
            raise StorageLayerError.wrap("failed to read effect", err) from err

    async def get_effects_after(
        self,
        community_id: CommunityId,
        limit: int,
        after: Optional[SequenceId] = None,
    ) -> list[Effect]:
        """Up to ``limit`` effects after ``after`` (default: the start), ascending."""
        cursor = SequenceId.zero() if after is None else after
        try:
            return await self._repo.get_effects_after(community_id, limit, cursor)
        except DbError as err:
            raise StorageLayerError.wrap("failed to read effects", err) from err

    async def get_records_before(
        self,
        community_id: CommunityId,
        limit: int,
        before: Optional[SequenceId] = None,
    ) -> list[Record]:
        """Up to ``limit`` records before ``before`` (default: the newest), descending."""
        try:
            return await self._repo.get_records_before(community_id, limit, before)
        except DbError as err:
            raise StorageLayerError.wrap("failed to read records", err) from err

    async def append_event(self, community_id: CommunityId, payload: EventPayload) -> Event:
        """Assign the next sequence ID to a new event and store it."""
        try:
            return await self._repo.append_event(community_id, payload)
        except DbError as err:
            raise StorageLayerError.wrap("failed to create event", err) from err

    async def append_effect(
        self,
        event_id: SequenceId,
        community_id: CommunityId,
        mutations: Sequence[StateMutation],
    ) -> Effect:
        """Store an effect under the sequence ID of its event."""
        try:
            return await self._repo.append_effect(event_id, community_id, mutations)
        except DbError as err:
            raise StorageLayerError.wrap("failed to create effect", err) from err
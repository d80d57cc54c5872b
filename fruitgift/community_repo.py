"""Storage ports for community snapshots."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from fruitgift.community import Community, CommunityId
from fruitgift.event_log import SequenceId


class CommunityProvider(ABC):
    """Read port for community snapshots.

    Implementations raise :class:`fruitgift.error.DbError` subclasses on
    storage failures.
    """

    @abstractmethod
    async def get(self, id: CommunityId, version: SequenceId) -> Optional[Community]:
        """The snapshot of community ``id`` at ``version``, or ``None`` if not found."""

    @abstractmethod
    async def get_latest(self, id: CommunityId) -> Optional[Community]:
        """The most recently stored snapshot of ``id``, or ``None`` if never persisted."""


class CommunityPersistor(ABC):
    """Write port for community snapshots.

    Concurrent writes are permitted; implementations manage shared state
    themselves.
    """

    @abstractmethod
    async def put(self, community: Community) -> Community:
        """Store ``community`` as a new snapshot version and return it.

        Raises a ``DbError`` if a snapshot at ``community.version`` already
        exists for this community.
        """


class CommunityRepo(CommunityProvider, CommunityPersistor, ABC):
    """Combined read/write port, for when reads and writes need not be separated."""
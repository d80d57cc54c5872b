"""Reading and writing communities, folding in effects from the log."""

from __future__ import annotations

import itertools
from typing import Optional

from fruitgift.community import Community, CommunityId
from fruitgift.community_repo import CommunityRepo
from fruitgift.error import DbError, StorageLayerError
from fruitgift.event_log import SequenceId
from fruitgift.event_log_repo import EventLogProvider

EFFECTS_PAGE_SIZE = 1000
"""Maximum number of effects fetched per page when advancing a snapshot."""


class CommunityStore:
    """Reads and writes communities through a repository and the event log.

    Storage failures are raised as :class:`StorageLayerError`.
    """

    def __init__(self, community_repo: CommunityRepo, event_log_provider: EventLogProvider) -> None:
        self._community_repo = community_repo
        self._event_log_provider = event_log_provider

    async def _put(self, community: Community, message: str) -> Community:
        try:
            return await self._community_repo.put(community)
        except DbError as err:
            raise StorageLayerError.wrap(message, err) from err

    async def init(self) -> Community:
        """Create and persist a new community at version zero."""
        return await self._put(Community(), "failed to initialize community")

    async def provision(self, id: CommunityId) -> Community:
        """Create and persist a new community with identifier ``id``."""
        return await self._put(Community(id=id), "failed to provision community")

    async def get(self, id: CommunityId, version: SequenceId) -> Optional[Community]:
        """The snapshot at ``version``, or ``None`` if not found."""
        try:
            return await self._community_repo.get(id, version)
        except DbError as err:
            raise StorageLayerError.wrap("failed to retrieve community snapshot", err) from err

    async def get_latest(self, id: CommunityId) -> Optional[Community]:
        """The community with every pending effect applied, or ``None`` if unknown.

        Effects recorded after the latest stored snapshot are applied page by
        page; if any were applied, the new snapshot is saved before it is
        returned.
        """
        try:
            community = await self._community_repo.get_latest(id)
        except DbError as err:
            raise StorageLayerError.wrap(
                "failed to retrieve latest version of community", err
            ) from err
        if community is None:
            return None

        initial_version = community.version
        for batch_number in itertools.count(1):
            previous_version = community.version
            try:
                batch = await self._event_log_provider.get_effects_after(
                    id, EFFECTS_PAGE_SIZE, previous_version
                )
            except DbError as err:
                raise StorageLayerError.wrap(
                    f"failed to retrieve effects for community at batch number {batch_number}",
                    err,
                ) from err
            exhausted = len(batch) < EFFECTS_PAGE_SIZE
            community.apply_effects(batch)
            if exhausted or community.version == previous_version:
                break

        if community.version == initial_version:
            return community
        return await self._put(community, "failed to persist updated community")
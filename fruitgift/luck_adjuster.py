"""Fetching what is needed to compute luck adjustments at grant time."""

from __future__ import annotations

from fruitgift import luck_adjustments
from fruitgift.community import Community
from fruitgift.community_repo import CommunityProvider
from fruitgift.event_log import SequenceId, StateMutation
from fruitgift.event_log_repo import EventLogProvider

RECENT_GIFT_RECORDS_LIMIT = 100


class LuckAdjuster:
    """Computes luck-adjustment mutations for a community at grant time.

    Storage errors from the providers propagate unchanged.
    """

    def __init__(self, event_log: EventLogProvider, community_provider: CommunityProvider) -> None:
        self._event_log = event_log
        self._community_provider = community_provider

    async def compute(self, community: Community, before: SequenceId) -> list[StateMutation]:
        """Luck mutations for ``community`` at the point just before ``before``.

        The window starts at the most recent previous grant (or the start of
        the log); the snapshot at that grant is used as the starting state,
        falling back to an empty community with the same ID.
        """
        grants = await self._event_log.get_latest_grant_events(community.id, 1)
        previous_grant_id = grants[0].id if grants else SequenceId.zero()

        at_last_grant = await self._community_provider.get(community.id, previous_grant_id)
        if at_last_grant is None:
            at_last_grant = Community(id=community.id)

        records_since_last_grant = await self._event_log.get_records_between(
            community.id, previous_grant_id, before
        )
        recent_gift_records = await self._event_log.get_latest_gift_records(
            community.id, RECENT_GIFT_RECORDS_LIMIT
        )

        return luck_adjustments.compute(
            at_last_grant, records_since_last_grant, recent_gift_records
        )
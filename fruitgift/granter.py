"""Port for distributing fruits to the members of a community."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fruitgift.community import Community
from fruitgift.event_log import StateMutation


class Granter(ABC):
    """Distributes fruits to every member of a community."""

    @abstractmethod
    def grant(self, community: Community, count: int) -> list[StateMutation]:
        """Mutations giving ``count`` fruits to each member; ``community`` is unchanged.

        Implementations may keep state, such as a random number generator,
        that advances on every call.
        """
"""
Service layer interfaces (ABCs).

These abstract base classes define the contracts between the team generator
and the collaborators around it (the tournament UI that calls it and the
notification sink that displays its failures).
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.models.player import Player, Roster, TierSelection
    from domain.models.team import Team
    from services.result import Result


class INotificationSink(ABC):
    """Receives user-facing failure messages (toast, chat message, stderr...)."""

    @abstractmethod
    def notify_error(self, message: str, code: str | None = None) -> None:
        """Display or record an error message."""
        ...


class ITeamGenerationService(ABC):
    """Interface for skill-balanced team generation."""

    @abstractmethod
    def generate_teams(
        self,
        roster: "Roster",
        selection: "TierSelection",
        team_size: int,
    ) -> "Result[list[Team]]":
        """Partition the selected players into balanced teams of at most team_size."""
        ...

    @abstractmethod
    def generate_teams_for_players(
        self,
        players: Iterable["Player"],
        selected_ids: Iterable[str],
        team_size: int,
    ) -> "Result[list[Team]]":
        """Convenience wrapper taking a flat roster and a flat selection."""
        ...

"""
Team generation orchestration (pool building, validation, failure reporting).
"""

import logging
import random
from collections.abc import Iterable

from config import TEAMGEN_SEED
from domain.models.category_pools import CategoryPools
from domain.models.player import Player, Roster, TierSelection
from domain.models.team import Team
from services.error_codes import NO_PLAYERS_SELECTED, UNSUPPORTED_TEAM_SIZE
from services.interfaces import INotificationSink, ITeamGenerationService
from services.notification_sink import LoggingNotificationSink
from services.result import Result
from team_assembler import TieredTeamAssembler, UnsupportedTeamSizeError

logger = logging.getLogger("teamgen.service")

NO_PLAYERS_MESSAGE = "Please select at least one player."


class TeamGenerationService(ITeamGenerationService):
    """
    Turns a roster snapshot and a selection into balanced teams.

    Never touches storage: the caller supplies the roster and persists or
    displays the returned teams however it likes.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        notifier: INotificationSink | None = None,
        assembler: TieredTeamAssembler | None = None,
    ):
        """
        Initialize the service.

        Args:
            rng: Random source for pool shuffling and team order. Defaults to a
                 generator seeded from TEAMGEN_SEED (unseeded when unset).
            notifier: Receives user-facing failure messages
            assembler: Assembler to use; built around rng when omitted
        """
        self.rng = rng if rng is not None else random.Random(TEAMGEN_SEED)
        self.notifier = notifier or LoggingNotificationSink()
        self.assembler = assembler or TieredTeamAssembler(rng=self.rng)

    def generate_teams(
        self,
        roster: Roster,
        selection: TierSelection,
        team_size: int,
    ) -> Result[list[Team]]:
        pools = CategoryPools.build(roster, selection, self.rng)
        if pools.is_empty():
            return self._fail(NO_PLAYERS_MESSAGE, NO_PLAYERS_SELECTED)

        try:
            assembled = self.assembler.assemble(pools, team_size)
        except UnsupportedTeamSizeError as exc:
            return self._fail(str(exc), UNSUPPORTED_TEAM_SIZE)

        for outcome in assembled.pass_outcomes:
            if outcome.remaining:
                logger.debug(
                    f"Pass {outcome.name} left {outcome.remaining} team(s) unbalanced "
                    f"after {outcome.swaps} swap(s)"
                )
        return Result.ok(assembled.teams)

    def generate_teams_for_players(
        self,
        players: Iterable[Player],
        selected_ids: Iterable[str],
        team_size: int,
    ) -> Result[list[Team]]:
        roster = Roster.from_players(players)
        selection = TierSelection.from_ids(selected_ids, roster)
        return self.generate_teams(roster, selection, team_size)

    def _fail(self, message: str, code: str) -> Result[list[Team]]:
        self.notifier.notify_error(message, code)
        return Result.fail(message, code=code)

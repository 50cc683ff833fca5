"""
Local-search rebalancing of assembled teams.

Handles one-for-one member swaps that break up undesirable team shapes
(two Ultra Noobs together, a weak player left solo while a strong player
is teamed up, ...). Contains pure domain logic with no side effects beyond
the team list it is handed.
"""

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from domain.models.player import SkillTier
from domain.models.team import Member, Team

logger = logging.getLogger("teamgen.rebalancer")

TeamPredicate = Callable[[Team], bool]
SwapListener = Callable[[str, Team, Team, Member, Member], None]


class RebalanceBudgetExceeded(RuntimeError):
    """A rebalancing pass stopped converging (swap did not reduce undesirable teams)."""


def find_team_index(
    teams: Sequence[Team],
    predicate: TeamPredicate,
    rng: random.Random | None = None,
) -> int | None:
    """
    Locate a team matching predicate.

    Returns the lowest matching index, or a uniformly chosen matching index
    when an rng is supplied. None when no team matches.
    """
    if rng is None:
        return next((i for i, team in enumerate(teams) if predicate(team)), None)
    matches = [i for i, team in enumerate(teams) if predicate(team)]
    if not matches:
        return None
    return rng.choice(matches)


# --- predicates -------------------------------------------------------------


def composition_is(*tiers: SkillTier) -> TeamPredicate:
    """Team is exactly this multiset of tiers."""
    return lambda team: team.is_composition(*tiers)


def solo_of(*tiers: SkillTier) -> TeamPredicate:
    """Single-member team whose player is in one of the given tiers."""
    allowed = frozenset(tiers)
    return lambda team: team.size == 1 and team.tiers[0] in allowed


def sized_with(size: int, tier: SkillTier) -> TeamPredicate:
    """Team of exactly ``size`` members that includes someone of ``tier``."""
    return lambda team: team.size == size and team.has_tier(tier)


def led_by(size: int, tier: SkillTier) -> TeamPredicate:
    """Team of exactly ``size`` members whose leader is of ``tier``."""
    return lambda team: team.size == size and team.leader.tier == tier


# --- pass definitions -------------------------------------------------------


@dataclass(frozen=True)
class DonorRule:
    """
    A team shape that can absorb the undesirable team's member.

    Attributes:
        matches: Predicate a donor team must satisfy
        take: Tier of the donor member moved into the undesirable team
    """

    matches: TeamPredicate
    take: SkillTier


@dataclass(frozen=True)
class RebalancePass:
    """
    One undesirable pattern and the donors that can repair it, in priority order.

    Attributes:
        name: Short identifier used in logs
        is_undesirable: Predicate for teams this pass tries to fix
        donors: Donor rules, tried in order until one has a candidate
        give: Tier of the member leaving the undesirable team
              (None = its strongest member, e.g. the only member of a solo)
    """

    name: str
    is_undesirable: TeamPredicate
    donors: tuple[DonorRule, ...]
    give: SkillTier | None = None


@dataclass
class PassOutcome:
    """Result of running a single rebalancing pass."""

    name: str
    swaps: int = 0
    remaining: int = 0  # Undesirable teams left when the pass stopped
    aborted: bool = False


class RebalancingService:
    """
    Runs rebalancing passes over a team list, in place.

    Every swap must strictly reduce the number of teams matching the pass's
    undesirable pattern, and a pass never performs more swaps than there
    were undesirable teams when it started. When either bound is violated the
    pass aborts: in strict mode by raising RebalanceBudgetExceeded, otherwise
    by logging an error and leaving the (still valid) partition as-is.
    """

    def __init__(self, strict: bool = False, on_swap: SwapListener | None = None):
        """
        Initialize the rebalancer.

        Args:
            strict: Raise instead of logging when a pass fails to converge
            on_swap: Optional callback invoked after each swap
        """
        self.strict = strict
        self.on_swap = on_swap

    def rebalance(self, teams: list[Team], passes: Sequence[RebalancePass]) -> list[PassOutcome]:
        """Apply passes in order and return one outcome per pass."""
        return [self.run_pass(teams, rebalance_pass) for rebalance_pass in passes]

    def run_pass(self, teams: list[Team], rebalance_pass: RebalancePass) -> PassOutcome:
        remaining = self._count(teams, rebalance_pass.is_undesirable)
        outcome = PassOutcome(name=rebalance_pass.name, remaining=remaining)
        budget = remaining

        while True:
            target_index = find_team_index(teams, rebalance_pass.is_undesirable)
            if target_index is None:
                break

            target = teams[target_index]
            donor_pick = self._find_donor(teams, target, rebalance_pass)
            if donor_pick is None:
                # Perfect balance is not always reachable; leave the rest as-is
                break

            if outcome.swaps >= budget:
                return self._abort(
                    outcome,
                    f"pass {rebalance_pass.name!r} exceeded its budget of {budget} swaps",
                )

            donor, incoming = donor_pick
            outgoing = self._outgoing_member(target, rebalance_pass)
            target.replace_member(outgoing, incoming)
            donor.replace_member(incoming, outgoing)
            outcome.swaps += 1

            logger.debug(
                f"[{rebalance_pass.name}] swapped {outgoing.name} <-> {incoming.name}: "
                f"{target.name} / {donor.name}"
            )
            if self.on_swap is not None:
                self.on_swap(rebalance_pass.name, target, donor, outgoing, incoming)

            now_remaining = self._count(teams, rebalance_pass.is_undesirable)
            if now_remaining >= outcome.remaining:
                outcome.remaining = now_remaining
                return self._abort(
                    outcome,
                    f"pass {rebalance_pass.name!r} swap did not reduce undesirable teams "
                    f"({now_remaining} remaining)",
                )
            outcome.remaining = now_remaining

        return outcome

    @staticmethod
    def _count(teams: Sequence[Team], predicate: TeamPredicate) -> int:
        return sum(1 for team in teams if predicate(team))

    @staticmethod
    def _outgoing_member(team: Team, rebalance_pass: RebalancePass) -> Member:
        if rebalance_pass.give is None:
            return team.members[0]
        member = team.member_of_tier(rebalance_pass.give)
        if member is None:
            raise ValueError(
                f"pass {rebalance_pass.name!r} matched {team.name} "
                f"without a {rebalance_pass.give.label} member"
            )
        return member

    @staticmethod
    def _find_donor(
        teams: Sequence[Team], target: Team, rebalance_pass: RebalancePass
    ) -> tuple[Team, Member] | None:
        for rule in rebalance_pass.donors:
            index = find_team_index(
                teams,
                lambda team, rule=rule: team is not target
                and rule.matches(team)
                and team.has_tier(rule.take),
            )
            if index is not None:
                donor = teams[index]
                if donor.leader.tier == rule.take:
                    return donor, donor.leader
                return donor, donor.member_of_tier(rule.take)
        return None

    def _abort(self, outcome: PassOutcome, message: str) -> PassOutcome:
        outcome.aborted = True
        if self.strict:
            raise RebalanceBudgetExceeded(message)
        logger.error(f"Rebalancing aborted: {message}")
        return outcome

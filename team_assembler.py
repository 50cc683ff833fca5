"""
Skill-tier team assembly algorithm.

Players arrive pre-sorted into four tiers. Teams are built by greedily
pairing extreme tiers together (Ultra Pro with Ultra Noob before Pro with
Noob), falling back to smaller groupings, and only forming same-tier teams
as a last resort. Whatever is left plays solo, and local-search swaps then
repair the shapes the greedy pass could not avoid.
"""

import logging
import random
import uuid
from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from config import REBALANCE_STRICT, TEAM_NAME_SEPARATOR, TEAMGEN_DEBUG_LOG_PATH
from domain.models.category_pools import CategoryPools
from domain.models.player import Player, SkillTier
from domain.models.team import Member, Team
from domain.services.rebalancing_service import (
    DonorRule,
    PassOutcome,
    RebalancePass,
    RebalancingService,
    composition_is,
    find_team_index,
    led_by,
    sized_with,
    solo_of,
)
from utils.debug_logging import debug_log

logger = logging.getLogger("teamgen.assembler")

UN = SkillTier.ULTRA_NOOB
N = SkillTier.NOOB
P = SkillTier.PRO
UP = SkillTier.ULTRA_PRO

RuleGuard = Callable[[CategoryPools, list[Team]], bool]


class UnsupportedTeamSizeError(ValueError):
    """Requested team size has no assembler."""

    def __init__(self, team_size: int):
        super().__init__(f"Team size {team_size} is not supported.")
        self.team_size = team_size


class PartitionError(ValueError):
    """Assembled teams do not form a valid partition of the selected players."""


@dataclass(frozen=True)
class PairingRule:
    """
    A tier combination formed repeatedly while its pools can supply it.

    Attributes:
        tiers: Tiers taken from the pools, in draw order
        guard: Optional extra condition checked before each team is formed
    """

    tiers: tuple[SkillTier, ...]
    guard: RuleGuard | None = None

    def requirements(self) -> Counter:
        return Counter(self.tiers)

    def can_apply(self, pools: CategoryPools, teams: list[Team]) -> bool:
        if not all(pools.has(tier, count) for tier, count in self.requirements().items()):
            return False
        return self.guard is None or self.guard(pools, teams)

    def __str__(self) -> str:
        return "+".join(tier.code for tier in self.tiers)


def _no_strong_players_left(pools: CategoryPools, teams: list[Team]) -> bool:
    return not pools.has(UP) and not pools.has(P)


def _no_noob_pairing_formed(pools: CategoryPools, teams: list[Team]) -> bool:
    # Two Ultra Noobs only team up when no P+N or N+N duo could be split to absorb them
    return find_team_index(teams, lambda t: t.is_composition(P, N) or t.is_composition(N, N)) is None


def _rule(*tiers: SkillTier, guard: RuleGuard | None = None) -> PairingRule:
    return PairingRule(tiers=tuple(tiers), guard=guard)


@dataclass(frozen=True)
class AssemblyPlan:
    """Pairing rules and rebalancing passes for one team size."""

    team_size: int
    mode: str
    rules: tuple[PairingRule, ...] = ()
    passes: tuple[RebalancePass, ...] = ()


SOLO_PLAN = AssemblyPlan(team_size=1, mode="solo")

DUO_PLAN = AssemblyPlan(
    team_size=2,
    mode="duo",
    rules=(
        _rule(UP, UN),
        _rule(P, UN),
        _rule(P, N),
        _rule(N, N),
        _rule(UN, N),
        _rule(UN, UN, guard=_no_noob_pairing_formed),
    ),
    passes=(
        RebalancePass(
            name="ultra_noob_pair",
            is_undesirable=composition_is(UN, UN),
            donors=(
                DonorRule(composition_is(P, N), take=P),
                DonorRule(composition_is(N, N), take=N),
            ),
            give=UN,
        ),
        RebalancePass(
            name="weak_solo",
            is_undesirable=solo_of(N, UN),
            donors=(
                DonorRule(composition_is(UP, UN), take=UP),
                DonorRule(composition_is(P, N), take=P),
            ),
        ),
        RebalancePass(
            name="pro_solo",
            is_undesirable=solo_of(P),
            donors=(DonorRule(composition_is(UP, UN), take=UP),),
        ),
        RebalancePass(
            name="noob_ultra_noob_pair",
            is_undesirable=composition_is(N, UN),
            donors=(DonorRule(composition_is(P, N), take=P),),
            give=N,
        ),
    ),
)

TRIO_PLAN = AssemblyPlan(
    team_size=3,
    mode="trio",
    rules=(
        # One strong leader per trio
        _rule(UP, N, UN),
        _rule(P, N, UN),
        # Doubled leaders when a tier is in excess
        _rule(UP, UP, UN),
        _rule(P, P, UN),
        _rule(UP, P, N),
        _rule(N, N, UN, guard=_no_strong_players_left),
        # Fall back to balanced duos; N+UN duos are never formed
        _rule(UP, UN),
        _rule(P, UN),
        _rule(P, N),
        _rule(N, N, guard=_no_strong_players_left),
        # Last resort: stack strong players rather than leave them solo
        _rule(UP, UP, UP),
        _rule(P, P, P),
    ),
    passes=(
        RebalancePass(
            name="weak_solo",
            is_undesirable=solo_of(N, UN),
            donors=(
                DonorRule(sized_with(3, UP), take=UP),
                DonorRule(sized_with(3, P), take=P),
            ),
        ),
        RebalancePass(
            name="pro_solo",
            is_undesirable=solo_of(P),
            donors=(DonorRule(sized_with(2, UP), take=UP),),
        ),
    ),
)

SQUAD_PLAN = AssemblyPlan(
    team_size=4,
    mode="squad",
    rules=(
        _rule(UP, P, N, UN),
        _rule(UP, N, N, UN),
        _rule(P, P, N, UN),
        _rule(UP, N, UN),
        _rule(P, N, UN),
        _rule(UP, UN),
        _rule(P, UN),
        _rule(P, N),
        _rule(N, N, guard=_no_strong_players_left),
        _rule(UP, UP, UP, UP),
        _rule(P, P, P, P),
    ),
    passes=(
        RebalancePass(
            name="weak_solo",
            is_undesirable=solo_of(N, UN),
            donors=(
                # Only squads still led by their strong player can give one up
                DonorRule(led_by(4, UP), take=UP),
                DonorRule(led_by(4, P), take=P),
            ),
        ),
    ),
)

ASSEMBLY_PLANS: dict[int, AssemblyPlan] = {
    plan.team_size: plan for plan in (SOLO_PLAN, DUO_PLAN, TRIO_PLAN, SQUAD_PLAN)
}


@dataclass
class AssemblyResult:
    """Result of a single assembly run."""

    teams: list[Team]
    team_size: int
    pass_outcomes: list[PassOutcome] = field(default_factory=list)

    @property
    def swap_count(self) -> int:
        return sum(outcome.swaps for outcome in self.pass_outcomes)


def validate_partition(teams: Iterable[Team], players: Iterable[Player], team_size: int) -> None:
    """
    Check that teams place every player exactly once within the size bound.

    Raises:
        PartitionError: On a dropped, duplicated or unknown player, an
            oversized team, or a non-zero kill counter
    """
    expected = Counter(p.id for p in players)
    placed: Counter = Counter()
    for team in teams:
        if not 1 <= team.size <= team_size:
            raise PartitionError(f"Team {team.name} has {team.size} members (max {team_size})")
        if any(m.kills for m in team.members):
            raise PartitionError(f"Team {team.name} has a member with recorded kills")
        placed.update(team.player_ids)

    duplicated = sorted(pid for pid, count in placed.items() if count > 1)
    if duplicated:
        raise PartitionError(f"Players placed more than once: {duplicated}")
    if placed != expected:
        missing = sorted(set(expected) - set(placed))
        unknown = sorted(set(placed) - set(expected))
        raise PartitionError(f"Partition mismatch (missing={missing}, unknown={unknown})")


class TieredTeamAssembler:
    """
    Builds skill-balanced teams from per-tier category pools.

    All randomness comes from the injected rng, so a seeded generator gives
    the same teams (membership and order) on every run.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        separator: str | None = None,
        strict: bool | None = None,
        trace_path: str | None = None,
    ):
        """
        Initialize the assembler.

        Args:
            rng: Random source for the final team order (default: unseeded)
            separator: Joins member names into team names (default from config)
            strict: Raise when a rebalancing pass fails to converge (default from config)
            trace_path: JSONL swap trace file (default from config, disabled when unset)
        """
        self.rng = rng if rng is not None else random.Random()
        self.separator = separator if separator is not None else TEAM_NAME_SEPARATOR
        self.strict = strict if strict is not None else REBALANCE_STRICT
        self.trace_path = trace_path if trace_path is not None else TEAMGEN_DEBUG_LOG_PATH
        self._run_id: str | None = None

    @staticmethod
    def plan_for(team_size: int) -> AssemblyPlan:
        """
        Route a team size to its assembly plan.

        Raises:
            UnsupportedTeamSizeError: If no plan exists for the size
        """
        plan = ASSEMBLY_PLANS.get(team_size)
        if plan is None:
            raise UnsupportedTeamSizeError(team_size)
        return plan

    def assemble(self, pools: CategoryPools, team_size: int) -> AssemblyResult:
        """
        Consume the pools and return the finished teams in random order.

        Args:
            pools: Shuffled category pools (consumed)
            team_size: Requested team size (1-4)

        Returns:
            AssemblyResult with the shuffled teams and per-pass outcomes

        Raises:
            UnsupportedTeamSizeError: If team_size is not supported (pools untouched)
        """
        plan = self.plan_for(team_size)
        placed_players = [p for tier in SkillTier for p in pools.peek_all(tier)]
        self._run_id = uuid.uuid4().hex[:8]

        teams = self._apply_rules(pools, plan)
        self._drain_leftovers(pools, teams)

        rebalancer = RebalancingService(
            strict=self.strict,
            on_swap=self._trace_swap if self.trace_path else None,
        )
        outcomes = rebalancer.rebalance(teams, plan.passes)

        validate_partition(teams, placed_players, plan.team_size)
        self.rng.shuffle(teams)

        logger.info(
            f"Assembled {len(teams)} {plan.mode} teams from {len(placed_players)} players "
            f"({sum(o.swaps for o in outcomes)} rebalancing swaps)"
        )
        return AssemblyResult(teams=teams, team_size=plan.team_size, pass_outcomes=outcomes)

    def _apply_rules(self, pools: CategoryPools, plan: AssemblyPlan) -> list[Team]:
        teams: list[Team] = []
        for rule in plan.rules:
            formed = 0
            while rule.can_apply(pools, teams):
                teams.append(self._make_team([pools.take(tier) for tier in rule.tiers]))
                formed += 1
            if formed:
                logger.debug(f"[{plan.mode}] rule {rule}: formed {formed} teams")
        return teams

    def _drain_leftovers(self, pools: CategoryPools, teams: list[Team]) -> None:
        """Every player still pooled plays solo, highest tier first."""
        for tier in SkillTier.strongest_first():
            while pools.has(tier):
                teams.append(self._make_team([pools.take(tier)]))

    def _make_team(self, players: list[Player]) -> Team:
        return Team([Member.from_player(p) for p in players], separator=self.separator)

    def _trace_swap(
        self, pass_name: str, target: Team, donor: Team, outgoing: Member, incoming: Member
    ) -> None:
        debug_log(
            "team_assembler.rebalance",
            f"{pass_name}: {outgoing.name} <-> {incoming.name}",
            {
                "pass": pass_name,
                "target": target.name,
                "donor": donor.name,
                "outgoing": outgoing.player_id,
                "incoming": incoming.player_id,
            },
            run_id=self._run_id,
            path=self.trace_path,
        )

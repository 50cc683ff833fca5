"""
Pytest fixtures for tests.

This module provides centralized roster builders and fixtures to reduce
duplication across the test suite. Import the helpers from here instead of
building players by hand in each test file.
"""

import random

import pytest

from domain.models.player import Player, Roster, SkillTier, TierSelection
from services.notification_sink import CollectingNotificationSink
from services.team_generation_service import TeamGenerationService
from team_assembler import TieredTeamAssembler

# =============================================================================
# CENTRALIZED CONSTANTS
# =============================================================================

TEST_SEED = 1337
"""Default seed for deterministic generation tests."""

TIER_PREFIX = {
    SkillTier.ULTRA_PRO: "UP",
    SkillTier.PRO: "P",
    SkillTier.NOOB: "N",
    SkillTier.ULTRA_NOOB: "UN",
}


def make_players(tier: SkillTier, count: int, start: int = 1, deleted: bool = False) -> list[Player]:
    """Create ``count`` players of one tier with ids/names like 'UP1', 'UP2'."""
    prefix = TIER_PREFIX[tier]
    return [
        Player(id=f"{prefix}{i}", name=f"{prefix}{i}", tier=tier, deleted=deleted)
        for i in range(start, start + count)
    ]


def build_roster(up: int = 0, p: int = 0, n: int = 0, un: int = 0) -> Roster:
    """Roster with the given number of players per tier."""
    return Roster.from_players(
        make_players(SkillTier.ULTRA_PRO, up)
        + make_players(SkillTier.PRO, p)
        + make_players(SkillTier.NOOB, n)
        + make_players(SkillTier.ULTRA_NOOB, un)
    )


def team_shapes(teams) -> list[str]:
    """Sorted composition codes, e.g. ['N+N', 'N'] - order-insensitive comparisons."""
    return sorted("+".join(t.code for t in team.composition) for team in teams)


@pytest.fixture(autouse=True)
def strict_rebalancing(monkeypatch):
    """
    Make non-converging rebalancing passes fail loudly in every test.

    Production only logs them; tests should never see one.
    """
    monkeypatch.setattr("team_assembler.REBALANCE_STRICT", True)
    monkeypatch.delenv("TEAMGEN_DEBUG_LOG_PATH", raising=False)
    monkeypatch.setattr("team_assembler.TEAMGEN_DEBUG_LOG_PATH", None)


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(TEST_SEED)


@pytest.fixture
def assembler(rng):
    """Assembler with a seeded rng and strict rebalancing."""
    return TieredTeamAssembler(rng=rng, strict=True)


@pytest.fixture
def notifier():
    """In-memory notification sink."""
    return CollectingNotificationSink()


@pytest.fixture
def generation_service(rng, notifier):
    """Team generation service wired to a seeded rng and collecting sink."""
    return TeamGenerationService(rng=rng, notifier=notifier)


@pytest.fixture
def mixed_roster():
    """17 players spread across all four tiers (odd count on purpose)."""
    return build_roster(up=4, p=5, n=5, un=3)


@pytest.fixture
def select_all():
    """Return a helper selecting everyone on a roster."""
    return TierSelection.all_of

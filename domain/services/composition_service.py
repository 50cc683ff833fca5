"""
Team composition reporting.

Summarizes how a generated team list is made up (which tier combinations
occurred and how often) so admins can judge the balance of a draw.
"""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from domain.models.player import SkillTier
from domain.models.team import Team

TEAM_MODE_LABELS = {
    1: "Solo 1",
    2: "Duo 2+1",
    3: "Trio 3+1",
    4: "Squad 4+1",
}


def team_mode_label(team_size: int) -> str:
    """Tournament mode label for a team size (e.g. 2 -> 'Duo 2+1')."""
    return TEAM_MODE_LABELS.get(team_size, f"{team_size}-player")


def composition_label(team: Team) -> str:
    """Tier codes joined strongest first, e.g. 'UP+UN'."""
    return "+".join(tier.code for tier in team.composition)


def summarize_compositions(teams: Sequence[Team]) -> dict[str, int]:
    """Count teams per composition, most frequent first (ties by label)."""
    counts = Counter(composition_label(team) for team in teams)
    return dict(sorted(counts.items(), key=lambda item: (-item[1], item[0])))


def tier_counts(teams: Sequence[Team]) -> dict[SkillTier, int]:
    """Number of placed players per tier."""
    counts = dict.fromkeys(SkillTier.strongest_first(), 0)
    for team in teams:
        for tier in team.tiers:
            counts[tier] += 1
    return counts


@dataclass
class CompositionReport:
    """Aggregate view of a generated team list."""

    team_count: int
    player_count: int
    solo_count: int
    largest_team: int
    smallest_team: int
    compositions: dict[str, int] = field(default_factory=dict)
    tiers: dict[SkillTier, int] = field(default_factory=dict)

    @classmethod
    def from_teams(cls, teams: Sequence[Team]) -> "CompositionReport":
        sizes = [team.size for team in teams]
        return cls(
            team_count=len(teams),
            player_count=sum(sizes),
            solo_count=sum(1 for size in sizes if size == 1),
            largest_team=max(sizes, default=0),
            smallest_team=min(sizes, default=0),
            compositions=summarize_compositions(teams),
            tiers=tier_counts(teams),
        )

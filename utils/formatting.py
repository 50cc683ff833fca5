"""
Shared formatting helpers and tier display constants.
"""

from collections.abc import Sequence

from domain.models.player import SkillTier
from domain.models.team import Team
from domain.services.composition_service import CompositionReport, composition_label, team_mode_label

TIER_BADGES = {
    SkillTier.ULTRA_PRO: "💎",
    SkillTier.PRO: "⭐",
    SkillTier.NOOB: "🌱",
    SkillTier.ULTRA_NOOB: "🐣",
}


def format_tier_display(tier: SkillTier) -> str:
    """Return tier label with its badge (e.g., '💎 Ultra Pro')."""
    return f"{TIER_BADGES.get(tier, '')} {tier.label}".strip()


def format_team_line(index: int, team: Team) -> str:
    """One line per team: number, name, composition and member tiers."""
    members = ", ".join(f"{m.name} [{m.tier.code}]" for m in team.members)
    return f"{index:>3}. {team.name} ({composition_label(team)}): {members}"


def format_team_sheet(teams: Sequence[Team], team_size: int) -> str:
    """Numbered team listing headed by the tournament mode."""
    lines = [f"{team_mode_label(team_size)} - {len(teams)} teams"]
    lines.extend(format_team_line(i, team) for i, team in enumerate(teams, start=1))
    return "\n".join(lines)


def format_composition_report(report: CompositionReport) -> str:
    lines = [
        f"Players placed: {report.player_count} in {report.team_count} teams "
        f"(sizes {report.smallest_team}-{report.largest_team}, {report.solo_count} solo)",
        "Tiers: " + ", ".join(f"{format_tier_display(t)} x{n}" for t, n in report.tiers.items()),
        "Compositions:",
    ]
    lines.extend(f"  {label:<12} x{count}" for label, count in report.compositions.items())
    return "\n".join(lines)

"""
Player domain model.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import IntEnum


class SkillTier(IntEnum):
    """
    Skill classification assigned to every player by tournament admins.

    Ordered from weakest to strongest so tiers compare naturally
    (``SkillTier.NOOB < SkillTier.PRO``).
    """

    ULTRA_NOOB = 0
    NOOB = 1
    PRO = 2
    ULTRA_PRO = 3

    @property
    def label(self) -> str:
        return _TIER_LABELS[self]

    @property
    def code(self) -> str:
        return _TIER_CODES[self]

    @classmethod
    def strongest_first(cls) -> list["SkillTier"]:
        """Tiers in descending priority (Ultra Pro first)."""
        return sorted(cls, reverse=True)

    @classmethod
    def from_label(cls, value: str) -> "SkillTier":
        """
        Parse a category label ("Ultra Noob") or short code ("UN").

        Raises:
            ValueError: If the label is not a known category
        """
        key = " ".join(value.replace("_", " ").replace("-", " ").split()).lower()
        for tier in cls:
            if key in (tier.label.lower(), tier.code.lower(), tier.name.replace("_", " ").lower()):
                return tier
        raise ValueError(f"Unknown player category: {value!r}")


_TIER_LABELS = {
    SkillTier.ULTRA_NOOB: "Ultra Noob",
    SkillTier.NOOB: "Noob",
    SkillTier.PRO: "Pro",
    SkillTier.ULTRA_PRO: "Ultra Pro",
}

_TIER_CODES = {
    SkillTier.ULTRA_NOOB: "UN",
    SkillTier.NOOB: "N",
    SkillTier.PRO: "P",
    SkillTier.ULTRA_PRO: "UP",
}


@dataclass(frozen=True)
class Player:
    """
    Represents a rostered player.

    This is a pure domain model with no infrastructure dependencies.
    The generator only ever reads players; it never mutates the roster.
    """

    id: str
    name: str
    tier: SkillTier
    deleted: bool = False  # Soft-deleted players are never placed on a team

    def __str__(self) -> str:
        return f"{self.name} ({self.tier.label})"


@dataclass
class Roster:
    """Full per-tier player lists, the universe selections are filtered from."""

    by_tier: dict[SkillTier, list[Player]] = field(
        default_factory=lambda: {tier: [] for tier in SkillTier}
    )

    @classmethod
    def from_players(cls, players: Iterable[Player]) -> "Roster":
        """Group a flat player list by tier, preserving input order."""
        roster = cls()
        for player in players:
            roster.by_tier[player.tier].append(player)
        return roster

    def players_for(self, tier: SkillTier) -> list[Player]:
        return self.by_tier.get(tier, [])

    def all_players(self) -> list[Player]:
        return [p for tier in SkillTier.strongest_first() for p in self.players_for(tier)]

    def __len__(self) -> int:
        return sum(len(players) for players in self.by_tier.values())


@dataclass
class TierSelection:
    """Selected player identifiers, one set per tier."""

    by_tier: dict[SkillTier, set[str]] = field(
        default_factory=lambda: {tier: set() for tier in SkillTier}
    )

    @classmethod
    def from_ids(cls, player_ids: Iterable[str], roster: Roster) -> "TierSelection":
        """
        Build a per-tier selection from a flat collection of ids.

        Ids that do not belong to anyone on the roster are ignored.
        """
        wanted = set(player_ids)
        selection = cls()
        for tier in SkillTier:
            selection.by_tier[tier] = {p.id for p in roster.players_for(tier) if p.id in wanted}
        return selection

    @classmethod
    def all_of(cls, roster: Roster) -> "TierSelection":
        return cls.from_ids((p.id for p in roster.all_players()), roster)

    def ids_for(self, tier: SkillTier) -> set[str]:
        return self.by_tier.get(tier, set())

    def count(self) -> int:
        return sum(len(ids) for ids in self.by_tier.values())

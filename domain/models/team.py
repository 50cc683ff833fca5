"""
Team domain model.
"""

from dataclasses import dataclass

from domain.models.player import Player, SkillTier

DEFAULT_NAME_SEPARATOR = "_"


@dataclass(frozen=True)
class Member:
    """A placed player as shown on the team sheet."""

    name: str
    player_id: str
    tier: SkillTier
    kills: int = 0

    @classmethod
    def from_player(cls, player: Player) -> "Member":
        return cls(name=player.name, player_id=player.id, tier=player.tier)


class Team:
    """
    Represents one generated team.

    Members are kept strongest tier first (stable within a tier), so the
    derived name and composition never depend on the order a swap touched
    them. The leader is the first member drawn when the team was formed;
    whoever is swapped in for the leader becomes the new leader. This is a
    pure domain model with no infrastructure dependencies.
    """

    def __init__(self, members: list[Member], separator: str = DEFAULT_NAME_SEPARATOR):
        """
        Initialize a team.

        Args:
            members: One or more members, the first one leading the team
            separator: Joins member names into the team name

        Raises:
            ValueError: If members is empty
        """
        if not members:
            raise ValueError("Team must have at least one member")
        self.separator = separator
        self._leader = members[0]
        self._members = self._ordered(members)

    @classmethod
    def of(cls, *players: Player, separator: str = DEFAULT_NAME_SEPARATOR) -> "Team":
        return cls([Member.from_player(p) for p in players], separator=separator)

    @staticmethod
    def _ordered(members: list[Member]) -> list[Member]:
        return sorted(members, key=lambda m: m.tier, reverse=True)

    @property
    def members(self) -> list[Member]:
        return list(self._members)

    @property
    def leader(self) -> Member:
        return self._leader

    @property
    def name(self) -> str:
        # Derived on every access so it can never drift from membership
        return self.separator.join(m.name for m in self._members)

    @property
    def size(self) -> int:
        return len(self._members)

    @property
    def tiers(self) -> tuple[SkillTier, ...]:
        return tuple(m.tier for m in self._members)

    @property
    def composition(self) -> tuple[SkillTier, ...]:
        """Member tiers, strongest first. ``(ULTRA_PRO, ULTRA_NOOB)`` for an UP+UN duo."""
        return self.tiers

    @property
    def player_ids(self) -> list[str]:
        return [m.player_id for m in self._members]

    def is_composition(self, *tiers: SkillTier) -> bool:
        """Check whether the team is exactly this multiset of tiers."""
        return self.composition == tuple(sorted(tiers, reverse=True))

    def has_tier(self, tier: SkillTier) -> bool:
        return tier in self.tiers

    def member_of_tier(self, tier: SkillTier) -> Member | None:
        """Return the first member of the given tier, or None."""
        for member in self._members:
            if member.tier == tier:
                return member
        return None

    def replace_member(self, outgoing: Member, incoming: Member) -> None:
        """
        Swap one member out for another, keeping tier ordering.

        Raises:
            ValueError: If outgoing is not on this team
        """
        try:
            index = self._members.index(outgoing)
        except ValueError:
            raise ValueError(f"{outgoing.name} is not a member of team {self.name}") from None
        members = list(self._members)
        members[index] = incoming
        self._members = self._ordered(members)
        if outgoing == self._leader:
            self._leader = incoming

    def to_dict(self) -> dict:
        return {
            "teamName": self.name,
            "players": [{"ign": m.name, "kills": m.kills} for m in self._members],
        }

    def __repr__(self) -> str:
        codes = "+".join(t.code for t in self.tiers)
        return f"Team({self.name!r}, {codes})"

    def __str__(self) -> str:
        player_names = ", ".join(m.name for m in self._members)
        return f"Team: {player_names}"

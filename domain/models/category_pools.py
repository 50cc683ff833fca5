"""
Per-tier working pools consumed during team assembly.
"""

import random
from collections import deque

from domain.models.player import Player, Roster, SkillTier, TierSelection


class CategoryPools:
    """
    Four randomized queues of eligible players, one per skill tier.

    Pools are consumed destructively: a player taken from a pool is placed.
    """

    def __init__(self, pools: dict[SkillTier, list[Player]] | None = None):
        pools = pools or {}
        self._pools: dict[SkillTier, deque[Player]] = {
            tier: deque(pools.get(tier, [])) for tier in SkillTier
        }

    @classmethod
    def build(cls, roster: Roster, selection: TierSelection, rng: random.Random) -> "CategoryPools":
        """
        Filter each tier's roster against the selection and shuffle it.

        Deleted players are dropped even when selected. Roster order is kept
        before the shuffle so a seeded rng always yields the same pools.
        """
        pools = {}
        for tier in SkillTier:
            selected = selection.ids_for(tier)
            eligible = [
                p for p in roster.players_for(tier) if p.id in selected and not p.deleted
            ]
            rng.shuffle(eligible)
            pools[tier] = eligible
        return cls(pools)

    def take(self, tier: SkillTier) -> Player:
        """
        Remove and return the head of a pool.

        Raises:
            IndexError: If the pool is empty
        """
        return self._pools[tier].popleft()

    def has(self, tier: SkillTier, count: int = 1) -> bool:
        return len(self._pools[tier]) >= count

    def size(self, tier: SkillTier) -> int:
        return len(self._pools[tier])

    def total(self) -> int:
        return sum(len(pool) for pool in self._pools.values())

    def is_empty(self) -> bool:
        return self.total() == 0

    def peek_all(self, tier: SkillTier) -> list[Player]:
        """Remaining players in a pool without consuming them."""
        return list(self._pools[tier])

    def counts(self) -> dict[str, int]:
        return {tier.code: len(self._pools[tier]) for tier in SkillTier.strongest_first()}

    def __repr__(self) -> str:
        return f"CategoryPools({self.counts()})"

"""
Domain models - pure data structures representing business entities.
"""

from domain.models.category_pools import CategoryPools
from domain.models.player import Player, Roster, SkillTier, TierSelection
from domain.models.team import Member, Team

__all__ = ["CategoryPools", "Member", "Player", "Roster", "SkillTier", "Team", "TierSelection"]

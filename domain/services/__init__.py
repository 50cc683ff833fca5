"""
Domain services containing pure business logic.
"""

from domain.services.composition_service import CompositionReport
from domain.services.rebalancing_service import (
    RebalanceBudgetExceeded,
    RebalancePass,
    RebalancingService,
    find_team_index,
)

__all__ = [
    "CompositionReport",
    "RebalanceBudgetExceeded",
    "RebalancePass",
    "RebalancingService",
    "find_team_index",
]

"""
Application services layer.

Services orchestrate business operations using domain models and services.
"""

# Service interfaces (ABCs)
from services.interfaces import INotificationSink, ITeamGenerationService
from services.notification_sink import CollectingNotificationSink, LoggingNotificationSink

# Result type for consistent error handling
from services.result import Result
from services.team_generation_service import TeamGenerationService

__all__ = [
    # Concrete services
    "TeamGenerationService",
    "LoggingNotificationSink",
    "CollectingNotificationSink",
    # Interfaces
    "INotificationSink",
    "ITeamGenerationService",
    # Result type
    "Result",
]

"""
Standard error codes for the service layer.

Callers branch on these instead of parsing message text:

    from services.error_codes import NO_PLAYERS_SELECTED
    if result.error_code == NO_PLAYERS_SELECTED:
        ...
"""

# Team generation errors
NO_PLAYERS_SELECTED = "no_players_selected"
UNSUPPORTED_TEAM_SIZE = "unsupported_team_size"

"""Board domain services: score board state and the live-board registry.

This package contains pure domain logic imported by HTTP routes and socket
handlers, keeping transport and rendering concerns separated from the
board's mutations and derivations.
"""

from .scoreboard import ScoreBoard, RENAME_STARTED, RESET_PROMPT, NEW_GAME_PROMPT
from .store import BoardStore, generate_board_code

__all__ = [
    'ScoreBoard',
    'BoardStore',
    'generate_board_code',
    'RENAME_STARTED',
    'RESET_PROMPT',
    'NEW_GAME_PROMPT',
]

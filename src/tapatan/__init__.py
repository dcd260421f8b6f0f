"""tapatan package.

Rules engine, move generation, alpha-beta computer opponent and a game
controller for Tapatan, plus a small CLI.

Convenience imports are exposed for common workflows.
"""

from .board import ADJACENCY, EMPTY, O, WIN_PATTERNS, X
from .controller import GameController, GameSnapshot
from .errors import IllegalMove, InvalidSelection
from .moves import NO_MOVE, Move, legal_moves
from .rules import (
    Outcome,
    Phase,
    apply_move,
    apply_placement,
    current_phase,
    evaluate_outcome,
    is_placing_phase_complete,
)
from .search import AlphaBetaSearch, evaluate_board, get_best_move

__all__ = [
    "ADJACENCY",
    "WIN_PATTERNS",
    "EMPTY",
    "X",
    "O",
    "GameController",
    "GameSnapshot",
    "IllegalMove",
    "InvalidSelection",
    "Move",
    "NO_MOVE",
    "legal_moves",
    "Outcome",
    "Phase",
    "apply_placement",
    "apply_move",
    "evaluate_outcome",
    "current_phase",
    "is_placing_phase_complete",
    "AlphaBetaSearch",
    "evaluate_board",
    "get_best_move",
]

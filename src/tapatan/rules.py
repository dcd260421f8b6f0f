"""
Rules engine: placement, sliding, outcome detection and phase derivation.
Notes:
- Boards are immutable tuples; apply_* return a new board and never touch the input.
- The phase is always derived from the board (and whether an outcome was recorded),
  never stored separately.
- Piece-count bookkeeping belongs to the caller; is_placing_phase_complete tells it
  when the placing stage is over.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple

from .board import (
    ADJACENCY,
    EMPTY,
    MAX_PIECES,
    O,
    PIECES_PER_SIDE,
    SIDES,
    WIN_PATTERNS,
    X,
    as_board,
    is_position,
    side_symbol,
)
from .errors import IllegalMove


class Phase(str, Enum):
    PREGAME = "pregame"
    PLACING = "placing"
    MOVING = "moving"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class Outcome:
    """Win (side + the exact triple) or draw (winner and pattern both None)."""
    winner: Optional[int] = None
    pattern: Optional[Tuple[int, int, int]] = None

    @property
    def is_draw(self) -> bool:
        return self.winner is None


DRAW = Outcome()


def count_occupied(board: Iterable[int]) -> int:
    return sum(1 for c in board if c != EMPTY)


def get_piece_counts(board: Tuple[int, ...]) -> Tuple[int, int]:
    return board.count(X), board.count(O)


def is_placing_phase_complete(board: Iterable[int]) -> bool:
    return count_occupied(board) >= MAX_PIECES


def find_winning_pattern(board: Tuple[int, ...]) -> Optional[Tuple[int, int, int]]:
    for pattern in WIN_PATTERNS:
        a, b, c = pattern
        v = board[a]
        if v != EMPTY and v == board[b] and v == board[c]:
            return pattern
    return None


def is_valid_board(board: Tuple[int, ...]) -> bool:
    """At most 3 pieces per side and at most one side holding a line."""
    x_count, o_count = get_piece_counts(board)
    if x_count > PIECES_PER_SIDE or o_count > PIECES_PER_SIDE:
        return False
    winners = {board[p[0]] for p in WIN_PATTERNS
               if board[p[0]] != EMPTY and board[p[0]] == board[p[1]] == board[p[2]]}
    return len(winners) <= 1


def has_slide(board: Tuple[int, ...], side: int) -> bool:
    for pos, cell in enumerate(board):
        if cell == side and any(board[n] == EMPTY for n in ADJACENCY[pos]):
            return True
    return False


def current_phase(board: Iterable[int], has_prior_outcome: bool = False) -> Phase:
    board = tuple(board)
    if has_prior_outcome or find_winning_pattern(board) is not None:
        return Phase.TERMINAL
    if is_placing_phase_complete(board):
        return Phase.MOVING
    return Phase.PLACING


def evaluate_outcome(board: Iterable[int], to_move: Optional[int] = None) -> Optional[Outcome]:
    """Win on any aligned triple; draw only in the moving phase when `to_move` is stuck."""
    board = tuple(board)
    pattern = find_winning_pattern(board)
    if pattern is not None:
        return Outcome(winner=board[pattern[0]], pattern=pattern)
    if to_move is not None and is_placing_phase_complete(board) and not has_slide(board, to_move):
        return DRAW
    return None


def _check_side(side: int) -> None:
    if side not in SIDES:
        raise IllegalMove(f"Unknown side: {side!r}")


def apply_placement(board: Iterable[int], side: int, position: int) -> Tuple[int, ...]:
    board = as_board(board)
    _check_side(side)
    if not is_position(position):
        raise IllegalMove(f"Position {position!r} is outside 0-8")
    if current_phase(board) is not Phase.PLACING:
        raise IllegalMove("Pieces can only be placed during the placing phase")
    if board[position] != EMPTY:
        raise IllegalMove(f"Position {position} is already occupied")
    if board.count(side) >= PIECES_PER_SIDE:
        raise IllegalMove(f"{side_symbol(side)} has no pieces left to place")
    new_board = list(board)
    new_board[position] = side
    return tuple(new_board)


def apply_move(board: Iterable[int], side: int, from_pos: int, to: int) -> Tuple[int, ...]:
    board = as_board(board)
    _check_side(side)
    if not is_position(from_pos) or not is_position(to):
        raise IllegalMove(f"Move {from_pos!r}->{to!r} is outside 0-8")
    if current_phase(board) is not Phase.MOVING:
        raise IllegalMove("Pieces can only slide during the moving phase")
    if board[from_pos] != side:
        raise IllegalMove(f"Position {from_pos} is not held by {side_symbol(side)}")
    if board[to] != EMPTY:
        raise IllegalMove(f"Position {to} is already occupied")
    if to not in ADJACENCY[from_pos]:
        raise IllegalMove(f"Position {to} is not connected to {from_pos}")
    new_board = list(board)
    new_board[from_pos] = EMPTY
    new_board[to] = side
    return tuple(new_board)

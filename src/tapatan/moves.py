"""
Move generation for both phases.
Ordering is ascending by source, then destination, so search is reproducible.
"""
from typing import Iterable, List, NamedTuple, Optional, Tuple

from .board import ADJACENCY, EMPTY
from .rules import Phase, apply_move, apply_placement


class Move(NamedTuple):
    from_pos: Optional[int]
    to: int

    @property
    def is_placement(self) -> bool:
        return self.from_pos is None

    def __str__(self) -> str:
        if self.to < 0:
            return "none"
        if self.from_pos is None:
            return f"place {self.to}"
        return f"{self.from_pos}->{self.to}"


NO_MOVE = Move(None, -1)


def legal_moves(board: Iterable[int], side: int, phase: Phase) -> List[Move]:
    board = tuple(board)
    phase = Phase(phase)
    if phase is Phase.PLACING:
        return [Move(None, i) for i, v in enumerate(board) if v == EMPTY]
    if phase is Phase.MOVING:
        moves: List[Move] = []
        for src, v in enumerate(board):
            if v != side:
                continue
            for dst in sorted(ADJACENCY[src]):
                if board[dst] == EMPTY:
                    moves.append(Move(src, dst))
        return moves
    return []


def apply_any(board: Iterable[int], side: int, move: Move) -> Tuple[int, ...]:
    """Apply a generated move through the validating rules functions."""
    if move.from_pos is None:
        return apply_placement(board, side, move.to)
    return apply_move(board, side, move.from_pos, move.to)

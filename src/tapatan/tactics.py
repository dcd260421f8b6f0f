"""
Tactics and simple motifs: immediate wins, moves that stop an immediate win, and safety checks.
Notes:
- Works in both phases; a "move" is a placement or a slide as produced by legal_moves.
- A block is judged by re-generating the opponent's replies, so in the moving phase
  a slide that vacates a cell can itself open a line for the opponent.
"""
from typing import Iterable, List

from .board import PIECES_PER_SIDE, opponent
from .moves import Move, apply_any, legal_moves
from .rules import Phase, current_phase, find_winning_pattern


def immediate_winning_moves(board: Iterable[int], side: int) -> List[Move]:
    board = tuple(board)
    phase = current_phase(board)
    if phase is Phase.PLACING and board.count(side) >= PIECES_PER_SIDE:
        return []
    wins: List[Move] = []
    for mv in legal_moves(board, side, phase):
        b = apply_any(board, side, mv)
        pattern = find_winning_pattern(b)
        if pattern is not None and b[pattern[0]] == side:
            wins.append(mv)
    return wins


def gives_opponent_immediate_win(board: Iterable[int], side: int, move: Move) -> bool:
    b = apply_any(tuple(board), side, move)
    if find_winning_pattern(b) is not None:
        return False
    return len(immediate_winning_moves(b, opponent(side))) > 0


def blocking_moves(board: Iterable[int], side: int) -> List[Move]:
    """Moves that leave the opponent without an immediate win, when it currently has one."""
    board = tuple(board)
    phase = current_phase(board)
    if phase is Phase.PLACING and board.count(side) >= PIECES_PER_SIDE:
        return []
    if not immediate_winning_moves(board, opponent(side)):
        return []
    return [
        mv for mv in legal_moves(board, side, phase)
        if not gives_opponent_immediate_win(board, side, mv)
    ]

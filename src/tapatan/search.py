"""
Computer opponent: depth-limited minimax with alpha-beta pruning.

Scores are from the searching side's perspective:
- win for the searching side: 10000 - depth (faster wins preferred)
- loss: -10000 + depth (slower losses preferred)
- draw (side to move is stuck in the moving phase): 0
- depth limit reached: static line heuristic (evaluate_board)

The depth limit is the only strength knob. There is no randomness, and moves are
generated in ascending order, so the same board and difficulty always yield the
same move. Ties at the root keep the first move generated.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from .board import CENTER, EMPTY, WIN_PATTERNS, opponent
from .moves import NO_MOVE, Move, legal_moves
from .rules import Phase, current_phase, evaluate_outcome

DIFFICULTY_DEPTHS: Dict[str, int] = {
    "easy": 1,
    "medium": 2,
    "hard": 6,
}
DEFAULT_DIFFICULTY = "medium"

WIN_SCORE = 10000
CENTER_WEIGHT = 15
# pieces in an unblocked line -> contribution; opponent pairs outweigh our own
OWN_LINE_WEIGHTS = {1: 10, 2: 100, 3: 1000}
OPPONENT_LINE_WEIGHTS = {1: -5, 2: -500, 3: -1000}


def depth_for(difficulty: str) -> int:
    try:
        return DIFFICULTY_DEPTHS[difficulty]
    except KeyError:
        raise ValueError(
            f"Unknown difficulty {difficulty!r}; choose one of {sorted(DIFFICULTY_DEPTHS)}"
        ) from None


def evaluate_board(board: Iterable[int], side: int) -> int:
    """Static evaluation of `board` for `side`; used only at the depth cutoff."""
    board = tuple(board)
    opp = opponent(side)
    score = 0
    for a, b, c in WIN_PATTERNS:
        line = (board[a], board[b], board[c])
        mine = line.count(side)
        theirs = line.count(opp)
        if mine and theirs:
            continue
        if mine:
            score += OWN_LINE_WEIGHTS[mine]
        elif theirs:
            score += OPPONENT_LINE_WEIGHTS[theirs]
    if board[CENTER] == side:
        score += CENTER_WEIGHT
    elif board[CENTER] == opp:
        score -= CENTER_WEIGHT
    return score


def _play(board: Tuple[int, ...], side: int, move: Move) -> Tuple[int, ...]:
    # unchecked: callers pass moves from legal_moves
    cells = list(board)
    if move.from_pos is not None:
        cells[move.from_pos] = EMPTY
    cells[move.to] = side
    return tuple(cells)


@dataclass
class SearchStats:
    nodes: int = 0
    cutoffs: int = 0
    leaves: int = 0


class AlphaBetaSearch:
    """Chooses moves for one side at a fixed difficulty."""

    def __init__(self, side: int, difficulty: str = DEFAULT_DIFFICULTY):
        self.side = side
        self.difficulty = difficulty
        self.depth_limit = depth_for(difficulty)
        self.stats = SearchStats()

    def best_move(self, board: Iterable[int], phase: Phase) -> Move:
        board = tuple(board)
        phase = Phase(phase)
        self.stats = SearchStats()

        moves = legal_moves(board, self.side, phase)
        if not moves:
            return NO_MOVE
        if len(moves) == 1:
            return moves[0]

        best = moves[0]
        best_value = float('-inf')
        for move in moves:
            child = _play(board, self.side, move)
            value = self._minimax(child, 0, False, float('-inf'), float('inf'))
            if value > best_value:
                best_value = value
                best = move

        logging.debug(
            "search side=%d difficulty=%s best=%s score=%s nodes=%d cutoffs=%d",
            self.side, self.difficulty, best, best_value, self.stats.nodes, self.stats.cutoffs,
        )
        return best

    def _minimax(self, board: Tuple[int, ...], depth: int, maximizing: bool,
                 alpha: float, beta: float) -> float:
        self.stats.nodes += 1
        mover = self.side if maximizing else opponent(self.side)

        outcome = evaluate_outcome(board, to_move=mover)
        if outcome is not None:
            if outcome.is_draw:
                return 0
            if outcome.winner == self.side:
                return WIN_SCORE - depth
            return -WIN_SCORE + depth

        if depth >= self.depth_limit:
            self.stats.leaves += 1
            return evaluate_board(board, self.side)

        moves = legal_moves(board, mover, current_phase(board))
        if maximizing:
            value = float('-inf')
            for move in moves:
                score = self._minimax(_play(board, mover, move), depth + 1, False, alpha, beta)
                value = max(value, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    self.stats.cutoffs += 1
                    break
            return value

        value = float('inf')
        for move in moves:
            score = self._minimax(_play(board, mover, move), depth + 1, True, alpha, beta)
            value = min(value, score)
            beta = min(beta, score)
            if beta <= alpha:
                self.stats.cutoffs += 1
                break
        return value


def get_best_move(board: Iterable[int], phase: Phase, side: int,
                  difficulty: str = DEFAULT_DIFFICULTY) -> Move:
    """Best move for `side`, or NO_MOVE when it has none (or the game is not in play)."""
    phase = Phase(phase)
    if phase in (Phase.PREGAME, Phase.TERMINAL):
        return NO_MOVE
    return AlphaBetaSearch(side, difficulty).best_move(board, phase)

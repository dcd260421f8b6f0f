"""
Game controller: owns one live game and turns clicks into rules-engine calls.

The controller is the only thing that mutates a GameInstance. Every command is
validated first; a rejected command raises IllegalMove or InvalidSelection and
leaves the instance exactly as it was.

Click semantics (place_or_move):
- placing phase: place a piece for the side to move
- moving phase: a click on one of the mover's pieces selects it (or clears the
  selection when it is already selected); with a selection, a click on a
  connected empty cell slides the selected piece there
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .board import (
    PIECES_PER_SIDE,
    SIDES,
    O,
    X,
    empty_board,
    is_position,
    opponent,
    serialize_board,
    side_symbol,
)
from .config import Settings
from .errors import IllegalMove, InvalidSelection, TapatanError
from .moves import NO_MOVE, Move
from .rules import Outcome, Phase, apply_move, apply_placement, current_phase, evaluate_outcome
from .search import DEFAULT_DIFFICULTY, AlphaBetaSearch, SearchStats, depth_for

MODES = ("singleplayer", "multiplayer")


def _full_counters() -> Dict[int, int]:
    return {X: PIECES_PER_SIDE, O: PIECES_PER_SIDE}


@dataclass
class GameInstance:
    board: Tuple[int, ...] = field(default_factory=empty_board)
    current_player: Optional[int] = None  # None until the first side is decided
    selected: Optional[int] = None
    remaining: Dict[int, int] = field(default_factory=_full_counters)
    outcome: Optional[Outcome] = None

    @property
    def phase(self) -> Phase:
        if self.current_player is None:
            return Phase.PREGAME
        return current_phase(self.board, self.outcome is not None)


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view handed to the presentation layer."""
    board: Tuple[int, ...]
    phase: Phase
    current_player: Optional[int]
    selected: Optional[int]
    remaining: Dict[int, int]
    winner: Optional[int]
    winning_pattern: Optional[Tuple[int, int, int]]
    is_draw: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "board": serialize_board(self.board),
            "phase": self.phase.value,
            "current_player": side_symbol(self.current_player) if self.current_player else None,
            "selected": self.selected,
            "remaining": {side_symbol(s): n for s, n in self.remaining.items()},
            "winner": side_symbol(self.winner) if self.winner else None,
            "winning_pattern": list(self.winning_pattern) if self.winning_pattern else None,
            "is_draw": self.is_draw,
        }


class GameController:
    def __init__(self, mode: str = "singleplayer", ai_side: int = O,
                 difficulty: str = DEFAULT_DIFFICULTY):
        self.set_mode(mode)
        if ai_side not in SIDES:
            raise ValueError(f"Unknown side: {ai_side!r}")
        self.ai_side = ai_side
        self.set_difficulty(difficulty)
        self.game = GameInstance()
        self.last_search: Optional[SearchStats] = None

    @classmethod
    def from_settings(cls, settings: Settings, mode: str = "singleplayer") -> "GameController":
        return cls(mode=mode, ai_side=settings.ai_side, difficulty=settings.difficulty)

    @property
    def phase(self) -> Phase:
        return self.game.phase

    def snapshot(self) -> GameSnapshot:
        g = self.game
        return GameSnapshot(
            board=g.board,
            phase=g.phase,
            current_player=g.current_player,
            selected=g.selected,
            remaining=dict(g.remaining),
            winner=g.outcome.winner if g.outcome else None,
            winning_pattern=g.outcome.pattern if g.outcome else None,
            is_draw=bool(g.outcome and g.outcome.is_draw),
        )

    # -- configuration -----------------------------------------------------

    def set_mode(self, mode: str) -> None:
        if mode not in MODES:
            raise ValueError(f"Unknown mode {mode!r}; choose one of {MODES}")
        self.mode = mode

    def set_difficulty(self, level: str) -> None:
        depth_for(level)
        self.difficulty = level

    # -- game lifecycle ----------------------------------------------------

    def reset_game(self) -> None:
        self.game = GameInstance()
        self.last_search = None
        logging.debug("game reset")

    def decide_first_side(self, side: int) -> None:
        if self.phase is not Phase.PREGAME:
            raise IllegalMove("The first side has already been decided")
        if side not in SIDES:
            raise IllegalMove(f"Unknown side: {side!r}")
        self.game.current_player = side
        logging.debug("first side: %s", side_symbol(side))

    def toss_coin(self, rng: Optional[random.Random] = None) -> int:
        """Pick the first side at random and start the placing phase."""
        rng = rng or random.Random()
        side = X if rng.random() < 0.5 else O
        self.decide_first_side(side)
        return side

    # -- player commands ---------------------------------------------------

    def select_cell(self, position: Optional[int]) -> None:
        g = self.game
        if position is None:
            g.selected = None
            return
        try:
            if self.phase is not Phase.MOVING:
                raise InvalidSelection("Pieces can only be selected during the moving phase")
            if not is_position(position):
                raise InvalidSelection(f"Position {position!r} is outside 0-8")
            if g.board[position] != g.current_player:
                raise InvalidSelection(
                    f"Position {position} does not hold a {side_symbol(g.current_player)} piece"
                )
        except TapatanError as e:
            logging.debug("rejected select_cell(%s): %s", position, e)
            raise
        g.selected = None if g.selected == position else position

    def place_or_move(self, position: int) -> None:
        try:
            self._dispatch(position)
        except TapatanError as e:
            logging.debug("rejected place_or_move(%s): %s", position, e)
            raise

    def _dispatch(self, position: int) -> None:
        g = self.game
        phase = self.phase
        if phase is Phase.PREGAME:
            raise IllegalMove("The first side has not been decided yet")
        if phase is Phase.TERMINAL:
            raise IllegalMove("The game is over")
        if not is_position(position):
            raise IllegalMove(f"Position {position!r} is outside 0-8")

        side = g.current_player
        if phase is Phase.PLACING:
            board = apply_placement(g.board, side, position)
            g.remaining[side] = max(0, g.remaining[side] - 1)
            self._finish_turn(board, side)
            return

        if g.board[position] == side:
            g.selected = None if g.selected == position else position
            return
        if g.selected is None:
            raise InvalidSelection(
                f"Select a {side_symbol(side)} piece before choosing a destination"
            )
        board = apply_move(g.board, side, g.selected, position)
        self._finish_turn(board, side)

    def _finish_turn(self, board: Tuple[int, ...], mover: int) -> None:
        g = self.game
        g.board = board
        g.selected = None
        outcome = evaluate_outcome(board, to_move=opponent(mover))
        if outcome is None:
            g.current_player = opponent(mover)
            logging.debug("board=%s to_move=%s", serialize_board(board), side_symbol(g.current_player))
            return
        g.outcome = outcome
        if outcome.is_draw:
            logging.info("Game drawn: %s cannot move", side_symbol(opponent(mover)))
        else:
            logging.info("%s wins with %s", side_symbol(outcome.winner), list(outcome.pattern))

    # -- computer opponent -------------------------------------------------

    def is_ai_turn(self) -> bool:
        return (
            self.mode == "singleplayer"
            and self.phase in (Phase.PLACING, Phase.MOVING)
            and self.game.current_player == self.ai_side
        )

    def play_ai_turn(self) -> Move:
        if not self.is_ai_turn():
            raise IllegalMove("It is not the computer's turn")
        return self.play_search_move(self.difficulty)

    def play_search_move(self, difficulty: Optional[str] = None) -> Move:
        """Search for the side to move and apply the result through the normal commands."""
        phase = self.phase
        if phase not in (Phase.PLACING, Phase.MOVING):
            raise IllegalMove(f"No move to search for in the {phase.value} phase")
        side = self.game.current_player
        engine = AlphaBetaSearch(side, difficulty or self.difficulty)
        move = engine.best_move(self.game.board, phase)
        self.last_search = engine.stats
        if move == NO_MOVE:
            return move
        if move.from_pos is not None and self.game.selected != move.from_pos:
            self.select_cell(move.from_pos)
        self.place_or_move(move.to)
        return move

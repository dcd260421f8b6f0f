"""
Computer-vs-computer games between difficulty levels.

Both sides are driven through a multiplayer GameController, so every move goes
through the same validated path as a human click. The moving phase can cycle
forever between equally matched sides, so games stop at a ply cap.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .board import O, X, side_symbol
from .config import DEFAULT_MAX_PLIES
from .controller import GameController
from .moves import NO_MOVE, Move
from .rules import Phase


@dataclass
class MatchResult:
    x_difficulty: str
    o_difficulty: str
    first: int
    winner: Optional[int] = None
    pattern: Optional[Tuple[int, int, int]] = None
    draw: bool = False
    capped: bool = False
    moves: List[Move] = field(default_factory=list)
    nodes: int = 0

    @property
    def plies(self) -> int:
        return len(self.moves)

    @property
    def label(self) -> str:
        if self.winner is not None:
            return side_symbol(self.winner)
        return "capped" if self.capped else "draw"


def play_match(x_difficulty: str, o_difficulty: str, first: int = X,
               max_plies: int = DEFAULT_MAX_PLIES) -> MatchResult:
    levels = {X: x_difficulty, O: o_difficulty}
    ctl = GameController(mode="multiplayer", difficulty=x_difficulty)
    ctl.decide_first_side(first)
    result = MatchResult(x_difficulty, o_difficulty, first)

    while ctl.phase in (Phase.PLACING, Phase.MOVING):
        if result.plies >= max_plies:
            result.capped = True
            break
        side = ctl.game.current_player
        move = ctl.play_search_move(levels[side])
        if move == NO_MOVE:
            break
        result.moves.append(move)
        result.nodes += ctl.last_search.nodes if ctl.last_search else 0

    snap = ctl.snapshot()
    result.winner = snap.winner
    result.pattern = snap.winning_pattern
    result.draw = snap.is_draw
    logging.debug(
        "match X=%s O=%s first=%s -> %s in %d plies",
        x_difficulty, o_difficulty, side_symbol(first), result.label, result.plies,
    )
    return result


def run_series(pairings: Iterable[Tuple[str, str]], games: int = 2,
               max_plies: int = DEFAULT_MAX_PLIES) -> Dict[Tuple[str, str], Counter]:
    """Play `games` games per pairing, alternating who moves first.

    Returns counts keyed by pairing with keys "X", "O", "draw" and "capped".
    """
    tallies: Dict[Tuple[str, str], Counter] = {}
    for x_level, o_level in pairings:
        counts: Counter = Counter()
        for g in range(games):
            first = X if g % 2 == 0 else O
            res = play_match(x_level, o_level, first=first, max_plies=max_plies)
            counts[res.label] += 1
        tallies[(x_level, o_level)] = counts
        logging.info("X=%s vs O=%s: %s", x_level, o_level, dict(counts))
    return tallies

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Optional

from .board import deserialize_board, opponent, parse_side, render_board, side_symbol
from .config import Settings, load_settings
from .controller import GameController
from .errors import TapatanError
from .match import run_series
from .rules import Phase, current_phase, evaluate_outcome, is_valid_board
from .search import DIFFICULTY_DEPTHS, get_best_move
from .tactics import blocking_moves, immediate_winning_moves
from .tracking import log_metrics, log_params, maybe_mlflow_run

LEVELS = sorted(DIFFICULTY_DEPTHS)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tapatan", description="Tapatan rules engine and computer opponent")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument("--seed", type=int, default=None, help="Seed for the coin toss")

    p_play = sub.add_parser("play", help="Play an interactive game in the terminal")
    p_play.add_argument("--difficulty", choices=LEVELS, default=None,
                        help="Computer strength (default: TAPATAN_DIFFICULTY or medium)")
    p_play.add_argument("--multiplayer", action="store_true",
                        help="Two local players take turns; no computer opponent")
    p_play.add_argument("--first", default=None,
                        help="Side that moves first (X or O); omit to toss a coin")

    p_best = sub.add_parser("bestmove", help="Ask the computer opponent for a move")
    p_best.add_argument("--board", required=True, help="Board string, e.g., 100020000")
    p_best.add_argument("--side", required=True, help="Side to move: X or O")
    p_best.add_argument("--difficulty", choices=LEVELS, default=None)

    p_out = sub.add_parser("outcome", help="Show phase and outcome for a board")
    p_out.add_argument("--board", required=True, help="Board string, e.g., 111220200")
    p_out.add_argument("--to-move", default=None, help="Side to move (enables draw detection)")

    p_tac = sub.add_parser("tactics", help="List immediate wins and blocks for a side")
    p_tac.add_argument("--board", required=True, help="Board string, e.g., 110020000")
    p_tac.add_argument("--side", required=True, help="Side to move: X or O")

    p_match = sub.add_parser("match", help="Computer-vs-computer games between difficulties")
    p_match.add_argument("--x", dest="x_level", choices=LEVELS, default="easy")
    p_match.add_argument("--o", dest="o_level", choices=LEVELS, default="hard")
    p_match.add_argument("--games", type=int, default=2, help="Games per pairing (sides alternate first move)")
    p_match.add_argument("--max-plies", type=int, default=None, help="Ply cap per game")
    p_match.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_match.add_argument("--log-dir", type=Path, default=None,
                         help="Directory for tracking logs (for mlflow local backend)")

    return p


def _print_info() -> None:
    import importlib.util
    import platform

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["mlflow", "pytest", "hypothesis"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _read_board(raw: str):
    board = deserialize_board(raw)
    if not is_valid_board(board):
        raise ValueError("Board is not a valid Tapatan position.")
    return board


def _run_play(ns, settings: Settings) -> int:
    mode = "multiplayer" if ns.multiplayer else "singleplayer"
    ctl = GameController.from_settings(settings, mode=mode)
    if ns.difficulty:
        ctl.set_difficulty(ns.difficulty)
    if ns.first:
        ctl.decide_first_side(parse_side(ns.first))
    else:
        side = ctl.toss_coin(random.Random(ns.seed))
        print(f"Coin toss: {side_symbol(side)} moves first")
    if mode == "singleplayer":
        print(f"You are {side_symbol(opponent(ctl.ai_side))}; computer ({ctl.difficulty}) is {side_symbol(ctl.ai_side)}")

    while ctl.phase in (Phase.PLACING, Phase.MOVING):
        if ctl.is_ai_turn():
            move = ctl.play_ai_turn()
            print(f"Computer plays {move}")
            continue
        snap = ctl.snapshot()
        print(render_board(snap.board))
        hint = f" (selected {snap.selected})" if snap.selected is not None else ""
        print(f"{side_symbol(snap.current_player)} to move [{snap.phase.value}]{hint}; 0-8, r=reset, q=quit")
        line = sys.stdin.readline()
        if not line:
            return 0
        cmd = line.strip().lower()
        if cmd == "q":
            return 0
        if cmd == "r":
            ctl.reset_game()
            ctl.toss_coin(random.Random(ns.seed))
            continue
        try:
            ctl.place_or_move(int(cmd))
        except (TapatanError, ValueError) as e:
            print(f"Rejected: {e}")

    snap = ctl.snapshot()
    print(render_board(snap.board))
    if snap.winner:
        print(f"{side_symbol(snap.winner)} wins with {list(snap.winning_pattern)}")
    else:
        print("Draw")
    return 0


def _run_match(ns, settings: Settings) -> int:
    if ns.games <= 0:
        logging.error("--games must be positive: %s", ns.games)
        return 2
    max_plies = ns.max_plies or settings.max_plies
    log_dir = ns.log_dir or settings.log_dir
    pairing = (ns.x_level, ns.o_level)
    with maybe_mlflow_run(ns.tracking == "mlflow", run_name="match", log_dir=log_dir):
        log_params({"x": ns.x_level, "o": ns.o_level, "games": ns.games, "max_plies": max_plies})
        tallies = run_series([pairing], games=ns.games, max_plies=max_plies)
        counts = tallies[pairing]
        log_metrics({k: float(counts.get(k, 0)) for k in ("X", "O", "draw", "capped")})
    logging.info(
        "x=%s o=%s games=%d x_wins=%d o_wins=%d draws=%d capped=%d",
        ns.x_level, ns.o_level, ns.games,
        counts.get("X", 0), counts.get("O", 0), counts.get("draw", 0), counts.get("capped", 0),
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if getattr(ns, "version", False):
        try:
            from importlib.metadata import PackageNotFoundError, version as _ver

            print(_ver("tapatan"))
        except PackageNotFoundError:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    try:
        settings = load_settings()
    except ValueError as e:
        logging.error("Invalid configuration: %s", e)
        return 2

    try:
        if ns.cmd == "play":
            return _run_play(ns, settings)

        if ns.cmd == "match":
            return _run_match(ns, settings)

        if ns.cmd == "bestmove":
            board = _read_board(ns.board)
            side = parse_side(ns.side)
            difficulty = ns.difficulty or settings.difficulty
            phase = current_phase(board)
            move = get_best_move(board, phase, side, difficulty)
            logging.info(
                "phase=%s side=%s difficulty=%s move=%s from=%s to=%s",
                phase.value, side_symbol(side), difficulty, move, move.from_pos, move.to,
            )
            return 0

        if ns.cmd == "outcome":
            board = _read_board(ns.board)
            to_move: Optional[int] = parse_side(ns.to_move) if ns.to_move else None
            outcome = evaluate_outcome(board, to_move=to_move)
            phase = current_phase(board, outcome is not None)
            logging.info(
                "phase=%s winner=%s pattern=%s draw=%s",
                phase.value,
                side_symbol(outcome.winner) if outcome and outcome.winner else None,
                list(outcome.pattern) if outcome and outcome.pattern else None,
                bool(outcome and outcome.is_draw),
            )
            return 0

        if ns.cmd == "tactics":
            board = _read_board(ns.board)
            side = parse_side(ns.side)
            logging.info(
                "side=%s wins=%s blocks=%s",
                side_symbol(side),
                [str(m) for m in immediate_winning_moves(board, side)],
                [str(m) for m in blocking_moves(board, side)],
            )
            return 0
    except (TapatanError, ValueError) as e:
        logging.error("%s", e)
        return 2

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

#!/usr/bin/env python3
from __future__ import annotations

import logging
import math
import statistics as stats
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

from tapatan.board import X, deserialize_board
from tapatan.rules import current_phase
from tapatan.search import DIFFICULTY_DEPTHS, AlphaBetaSearch
from tapatan.tracking import log_metrics, log_params, maybe_mlflow_run

POSITIONS = {
    "opening": "000000000",
    "placing_midgame": "100020000",
    "moving": "121200012",
}


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    repeats: int = 5
    tracking: str = "none"  # or "mlflow"
    log_dir: Path = Path("runs")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    cfg = Config()
    with maybe_mlflow_run(cfg.tracking == "mlflow", run_name="search_benchmarks", log_dir=cfg.log_dir):
        log_params({"repeats": cfg.repeats})
        metrics: Dict[str, float] = {}
        for name, raw in POSITIONS.items():
            board = deserialize_board(raw)
            phase = current_phase(board)
            for level in DIFFICULTY_DEPTHS:
                times: List[float] = []
                nodes = 0
                for _ in range(cfg.repeats):
                    engine = AlphaBetaSearch(X, level)
                    t0 = time.perf_counter()
                    engine.best_move(board, phase)
                    times.append(time.perf_counter() - t0)
                    nodes = engine.stats.nodes
                mean, half = ci95(times)
                metrics[f"{name}_{level}_mean_s"] = mean
                metrics[f"{name}_{level}_nodes"] = float(nodes)
                logging.info("%s/%s: mean=%.4fs ± %.4fs (95%% CI) nodes=%d", name, level, mean, half, nodes)
        log_metrics(metrics)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

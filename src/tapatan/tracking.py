"""
Experiment tracking helpers (optional MLflow backend) for self-play series.

MLflow is only imported when tracking is requested, so it stays an optional
extra. Without it, tracking calls are skipped with a warning.
"""
from __future__ import annotations

import importlib
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional

_active = False


def _mlflow():
    try:
        return importlib.import_module("mlflow")
    except ImportError:
        logging.warning("mlflow is not installed; continuing without tracking")
        return None


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    """Yield True while an MLflow run is active, False otherwise."""
    global _active
    mlflow = _mlflow() if enabled else None
    if mlflow is None:
        yield False
        return
    if log_dir is not None:
        mlflow.set_tracking_uri((log_dir.resolve() / "mlruns").as_uri())
    with mlflow.start_run(run_name=run_name):
        _active = True
        try:
            yield True
        finally:
            _active = False


def log_params(params: Dict[str, object]) -> None:
    if _active:
        importlib.import_module("mlflow").log_params(params)


def log_metrics(metrics: Dict[str, float]) -> None:
    if _active:
        importlib.import_module("mlflow").log_metrics(metrics)

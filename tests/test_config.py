from pathlib import Path

import pytest

from tapatan.board import O, X
from tapatan.config import DEFAULT_MAX_PLIES, load_settings
from tapatan.controller import GameController

ENV = ("TAPATAN_DIFFICULTY", "TAPATAN_AI_SIDE", "TAPATAN_MAX_PLIES", "TAPATAN_LOG_DIR")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = load_settings()
    assert s.difficulty == "medium"
    assert s.ai_side == O
    assert s.max_plies == DEFAULT_MAX_PLIES
    assert s.log_dir == Path("runs")


def test_environment_overrides(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("TAPATAN_DIFFICULTY", " Hard ")
    monkeypatch.setenv("TAPATAN_AI_SIDE", "x")
    monkeypatch.setenv("TAPATAN_MAX_PLIES", "12")
    monkeypatch.setenv("TAPATAN_LOG_DIR", str(tmp_path))
    s = load_settings()
    assert (s.difficulty, s.ai_side, s.max_plies, s.log_dir) == ("hard", X, 12, tmp_path)
    ctl = GameController.from_settings(s)
    assert ctl.difficulty == "hard" and ctl.ai_side == X


@pytest.mark.parametrize("name,value", [
    ("TAPATAN_DIFFICULTY", "brutal"),
    ("TAPATAN_AI_SIDE", "Z"),
    ("TAPATAN_MAX_PLIES", "ten"),
    ("TAPATAN_MAX_PLIES", "0"),
])
def test_invalid_values_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        load_settings()

import os
import subprocess
import sys
from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parents[1] / "src"


def _run_cli(args, cwd: Path, stdin: str = "", env_extra=None) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), env.get("PYTHONPATH")]))
    for name in ("TAPATAN_DIFFICULTY", "TAPATAN_AI_SIDE", "TAPATAN_MAX_PLIES", "TAPATAN_LOG_DIR"):
        env.pop(name, None)
    env.update(env_extra or {})
    exe = [sys.executable, "-m", "tapatan.cli"]
    return subprocess.run(exe + args, cwd=cwd, input=stdin, capture_output=True, text=True, env=env)


def test_cli_bestmove_takes_the_win(tmp_path: Path):
    r = _run_cli(["bestmove", "--board", "110220000", "--side", "X", "--difficulty", "easy"], cwd=tmp_path)
    assert r.returncode == 0
    s = r.stdout + r.stderr
    assert "move=place 2" in s and "to=2" in s


def test_cli_outcome(tmp_path: Path):
    r = _run_cli(["outcome", "--board", "111220200"], cwd=tmp_path)
    assert r.returncode == 0
    s = r.stdout + r.stderr
    assert "phase=terminal" in s and "winner=X" in s and "pattern=[0, 1, 2]" in s

    r = _run_cli(["outcome", "--board", "121200012", "--to-move", "X"], cwd=tmp_path)
    s = r.stdout + r.stderr
    assert "phase=moving" in s and "winner=None" in s and "draw=False" in s


def test_cli_tactics(tmp_path: Path):
    r = _run_cli(["tactics", "--board", "110020000", "--side", "O"], cwd=tmp_path)
    assert r.returncode == 0
    s = r.stdout + r.stderr
    assert "wins=[]" in s and "blocks=['place 2']" in s


@pytest.mark.parametrize("bad", ["abc", "01201", "0120120120", "12345678x", "221110010"])
def test_cli_error_invalid_boards(tmp_path: Path, bad: str):
    r = _run_cli(["bestmove", "--board", bad, "--side", "X"], cwd=tmp_path)
    assert r.returncode == 2
    r = _run_cli(["outcome", "--board", bad], cwd=tmp_path)
    assert r.returncode == 2


def test_cli_error_bad_side_and_env(tmp_path: Path):
    r = _run_cli(["tactics", "--board", "000000000", "--side", "Q"], cwd=tmp_path)
    assert r.returncode == 2
    r = _run_cli(["bestmove", "--board", "000000000", "--side", "X"], cwd=tmp_path,
                 env_extra={"TAPATAN_DIFFICULTY": "bogus"})
    assert r.returncode == 2


def test_cli_play_multiplayer(tmp_path: Path):
    r = _run_cli(["play", "--multiplayer", "--first", "X"], cwd=tmp_path, stdin="4\nabc\n4\nq\n")
    assert r.returncode == 0
    assert "O to move [placing]" in r.stdout
    assert r.stdout.count("Rejected") == 2


def test_cli_play_computer_moves_first(tmp_path: Path):
    r = _run_cli(["play", "--first", "O", "--difficulty", "easy"], cwd=tmp_path, stdin="q\n")
    assert r.returncode == 0
    assert "Computer plays place" in r.stdout
    assert "X to move" in r.stdout


def test_cli_play_coin_toss_with_seed(tmp_path: Path):
    a = _run_cli(["--seed", "3", "play", "--multiplayer"], cwd=tmp_path, stdin="q\n")
    b = _run_cli(["--seed", "3", "play", "--multiplayer"], cwd=tmp_path, stdin="q\n")
    assert a.returncode == 0
    assert "Coin toss:" in a.stdout
    assert a.stdout == b.stdout


def test_cli_match(tmp_path: Path):
    r = _run_cli(["match", "--x", "easy", "--o", "easy", "--games", "2", "--max-plies", "20"], cwd=tmp_path)
    assert r.returncode == 0
    assert "games=2" in r.stdout + r.stderr
    r = _run_cli(["match", "--games", "0"], cwd=tmp_path)
    assert r.returncode == 2


def test_cli_help_smoke(tmp_path: Path):
    for args in (
        ["--help"],
        ["play", "--help"],
        ["bestmove", "--help"],
        ["outcome", "--help"],
        ["tactics", "--help"],
        ["match", "--help"],
        ["--version"],
        [],
    ):
        r = _run_cli(args, cwd=tmp_path)
        assert r.returncode == 0
        assert r.stdout or r.stderr

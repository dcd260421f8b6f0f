from tapatan.board import X, deserialize_board, empty_board
from tapatan.rules import Phase
from tapatan.search import get_best_move


def test_benchmark_hard_opening(benchmark):
    move = benchmark.pedantic(
        get_best_move, args=(empty_board(), Phase.PLACING, X, "hard"), rounds=1, iterations=1
    )
    assert move.from_pos is None and 0 <= move.to <= 8


def test_benchmark_hard_moving(benchmark):
    board = deserialize_board("121200012")
    move = benchmark(get_best_move, board, Phase.MOVING, X, "hard")
    assert move.from_pos is not None

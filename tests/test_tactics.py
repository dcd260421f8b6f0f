from tapatan.board import O, X, deserialize_board, empty_board
from tapatan.moves import Move
from tapatan.tactics import blocking_moves, gives_opponent_immediate_win, immediate_winning_moves


def test_immediate_wins_placing():
    b = deserialize_board("110220000")
    assert immediate_winning_moves(b, X) == [Move(None, 2)]
    assert immediate_winning_moves(b, O) == [Move(None, 5)]
    assert immediate_winning_moves(empty_board(), X) == []


def test_immediate_wins_moving():
    b = deserialize_board("110221002")
    assert immediate_winning_moves(b, X) == [Move(5, 2)]


def test_no_wins_for_a_side_without_pieces_to_place():
    assert immediate_winning_moves(deserialize_board("110100220"), X) == []


def test_gives_opponent_immediate_win():
    b = deserialize_board("110020000")
    assert gives_opponent_immediate_win(b, O, Move(None, 3))
    assert not gives_opponent_immediate_win(b, O, Move(None, 2))


def test_blocking_moves():
    assert blocking_moves(deserialize_board("110020000"), O) == [Move(None, 2)]
    assert blocking_moves(empty_board(), O) == []

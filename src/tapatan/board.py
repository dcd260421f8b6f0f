"""
Board topology: positions, slide connections, winning lines, serialization.
Notes:
- Positions are 0..8, row-major (0,1,2 / 3,4,5 / 6,7,8).
- Cells: 0=empty, 1=X, 2=O. A board is a tuple of 9 cells.
- Connections follow the drawn lines: the outer ring plus spokes to the center.

    (0)---(1)---(2)
     | \   |   / |
    (3)---(4)---(5)
     | /   |   \ |
    (6)---(7)---(8)
"""
from typing import Dict, FrozenSet, Iterable, List, Tuple

EMPTY = 0
X = 1
O = 2
SIDES = (X, O)

POSITIONS = tuple(range(9))
CENTER = 4
PIECES_PER_SIDE = 3
MAX_PIECES = 2 * PIECES_PER_SIDE

ADJACENCY: Dict[int, FrozenSet[int]] = {
    0: frozenset({1, 3, 4}),
    1: frozenset({0, 2, 4}),
    2: frozenset({1, 4, 5}),
    3: frozenset({0, 4, 6}),
    4: frozenset({0, 1, 2, 3, 5, 6, 7, 8}),
    5: frozenset({2, 4, 8}),
    6: frozenset({3, 4, 7}),
    7: frozenset({4, 6, 8}),
    8: frozenset({4, 5, 7}),
}

WIN_PATTERNS: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

_SYMBOLS = {EMPTY: ".", X: "X", O: "O"}


def opponent(side: int) -> int:
    return O if side == X else X


def is_position(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 8


def neighbors(position: int) -> List[int]:
    """Adjacent positions in ascending order."""
    return sorted(ADJACENCY[position])


def empty_board() -> Tuple[int, ...]:
    return (EMPTY,) * 9


def as_board(cells: Iterable[int]) -> Tuple[int, ...]:
    board = tuple(cells)
    if len(board) != 9 or any(c not in (EMPTY, X, O) for c in board):
        raise ValueError(f"Board must be 9 cells of 0/1/2, got {board!r}")
    return board


def serialize_board(board: Iterable[int]) -> str:
    return ''.join(str(cell) for cell in board)


def deserialize_board(board_str: str) -> Tuple[int, ...]:
    raw = board_str.strip()
    if len(raw) != 9 or any(c not in "012" for c in raw):
        raise ValueError("Invalid board string. Must be 9 chars of 0/1/2.")
    return tuple(int(c) for c in raw)


def parse_side(token) -> int:
    """Accept 1/2 or X/O (any case)."""
    t = str(token).strip().upper()
    if t in ("1", "X"):
        return X
    if t in ("2", "O"):
        return O
    raise ValueError(f"Unknown side: {token!r} (expected X/O or 1/2)")


def side_symbol(side) -> str:
    return _SYMBOLS.get(side, "?")


def render_board(board: Iterable[int]) -> str:
    b = [_SYMBOLS[c] for c in board]
    rows = [
        f"{b[0]}---{b[1]}---{b[2]}",
        "| \\ | / |",
        f"{b[3]}---{b[4]}---{b[5]}",
        "| / | \\ |",
        f"{b[6]}---{b[7]}---{b[8]}",
    ]
    return "\n".join(rows)

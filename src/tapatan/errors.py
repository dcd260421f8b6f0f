"""Rejections raised by the rules engine and the game controller.

Both are recoverable: the action is refused and the game state is left as it was.
"""


class TapatanError(ValueError):
    pass


class IllegalMove(TapatanError):
    """Placement or slide that the rules do not allow (occupied, not adjacent,
    wrong phase, not the mover's piece, or a position outside 0..8)."""


class InvalidSelection(TapatanError):
    """Selecting an empty cell or a piece that does not belong to the mover."""

"""Exceptions raised by the engine to its callers."""


class InvalidPositionError(ValueError):
    """
    The supplied position cannot be interrogated by the rules engine.

    Raised for malformed FEN strings and for boards python-chess reports as
    invalid (missing kings, pawns on the back rank, the side not to move in
    check, ...). The engine never guesses a move for such a position.
    """

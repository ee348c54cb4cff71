"""
Exceptions raised for caller-supplied hands.

Every error is a ValueError so callers that only care about "bad input"
can catch that. A hand that simply does not win is not an error:
``score`` returns None for it.
"""


class HandError(ValueError):
    """Base class for invalid hand input"""


class NotationError(HandError):
    """Text could not be read as tile notation"""


class TileCountError(HandError):
    """A hand was built with the wrong number of tiles"""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"wrong number of tiles: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class TileNotFoundError(HandError, LookupError):
    """Tried to discard a tile the hand does not hold"""

    def __init__(self, tile):
        super().__init__(f"no such tile in hand: {tile}")
        self.tile = tile

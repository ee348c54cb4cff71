"""
Han (value) arithmetic.

Ordinary han saturates at 13. Yakuman values live on a separate track:
any yakuman outranks any ordinary value, and yakuman multipliers add up
to at most a double yakuman.
"""

from dataclasses import dataclass
from functools import total_ordering

HAN_LIMIT = 13
YAKUMAN_LIMIT = 2


@total_ordering
@dataclass(frozen=True, init=False)
class Han:
    """
    A scoring value.

    Attributes:
        value: Ordinary han, 0-13 (0 when the value is a yakuman)
        yakuman_count: Yakuman multiplier, 0 for ordinary values, else 1-2
    """
    value: int
    yakuman_count: int

    def __init__(self, value: int = 0, yakuman_count: int = 0):
        if value < 0 or yakuman_count < 0:
            raise ValueError(f"Han cannot be negative: {value}, {yakuman_count}")
        if yakuman_count:
            value = 0
        object.__setattr__(self, "value", min(value, HAN_LIMIT))
        object.__setattr__(self, "yakuman_count", min(yakuman_count, YAKUMAN_LIMIT))

    @classmethod
    def yakuman(cls, multiplier: int = 1) -> "Han":
        return cls(yakuman_count=multiplier)

    @classmethod
    def double_yakuman(cls) -> "Han":
        return cls(yakuman_count=2)

    @property
    def is_yakuman(self) -> bool:
        return self.yakuman_count > 0

    def _key(self):
        return (self.yakuman_count, self.value)

    def __add__(self, other):
        if isinstance(other, int) and other == 0:
            return self
        if not isinstance(other, Han):
            return NotImplemented
        if self.is_yakuman or other.is_yakuman:
            return Han(yakuman_count=self.yakuman_count + other.yakuman_count)
        return Han(self.value + other.value)

    # sum() starts from 0
    __radd__ = __add__

    def __lt__(self, other) -> bool:
        if not isinstance(other, Han):
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        if self.yakuman_count == 2:
            return "double yakuman"
        if self.yakuman_count == 1:
            return "yakuman"
        return f"{self.value} han"

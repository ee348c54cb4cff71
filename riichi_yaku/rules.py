"""
Evaluation Rules

Switches that control which hand shapes the engine recognises and how far
the shanten search is allowed to go. Scoring values themselves are fixed
(see yaku.py); there are no regional variants.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RuleSet:
    """
    Rule configuration for hand evaluation.

    Attributes:
        name: Label shown in logs
        check_chiitoitsu: Recognise the seven-pairs shape
        check_kokushi: Recognise the thirteen-orphans shape
        max_search_depth: Largest shanten the draw/discard search will
            try before giving up (a closed hand is at most 6 away)
        respect_tile_limit: Never draw a fifth copy of a tile the hand
            already holds four of
    """

    name: str = "Default"

    check_chiitoitsu: bool = True
    check_kokushi: bool = True

    max_search_depth: int = 8

    respect_tile_limit: bool = True

    def __post_init__(self):
        if self.max_search_depth < 0:
            raise ValueError(f"max_search_depth must be >= 0, got {self.max_search_depth}")


DEFAULT_RULES = RuleSet()

# Only the standard four-groups-and-a-pair shape
STANDARD_ONLY_RULES = RuleSet(
    name="Standard only",
    check_chiitoitsu=False,
    check_kokushi=False,
)

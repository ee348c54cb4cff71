"""
Riichi Mahjong Closed-Hand Evaluator
Decomposition, yaku scoring and shanten search for closed hands
"""

from .tiles import Tile, TileSuit, ALL_TILES
from .notation import parse_tiles, parse_tile, format_tiles
from .hand import ReadyHand, FullHand
from .blocks import Block, BlockType, Pattern
from .decompose import decompose
from .han import Han
from .yaku import Yaku, YakuKind
from .scoring import YakuScorer, ScoringResult, score, yakus
from .shanten import ShantenCalculator, ShantenResult, HandShape, analyze, calculate_shanten
from .rules import RuleSet, DEFAULT_RULES, STANDARD_ONLY_RULES
from .errors import HandError, NotationError, TileCountError, TileNotFoundError

__version__ = "0.1.0"
__all__ = [
    "Tile",
    "TileSuit",
    "ALL_TILES",
    "parse_tiles",
    "parse_tile",
    "format_tiles",
    "ReadyHand",
    "FullHand",
    "Block",
    "BlockType",
    "Pattern",
    "decompose",
    "Han",
    "Yaku",
    "YakuKind",
    "YakuScorer",
    "ScoringResult",
    "score",
    "yakus",
    "ShantenCalculator",
    "ShantenResult",
    "HandShape",
    "analyze",
    "calculate_shanten",
    "RuleSet",
    "DEFAULT_RULES",
    "STANDARD_ONLY_RULES",
    "HandError",
    "NotationError",
    "TileCountError",
    "TileNotFoundError",
]

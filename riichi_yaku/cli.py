#!/usr/bin/env python3
"""
Command-line front end.

Usage:
    # Score a hand after a draw
    riichi-yaku score "123456789p 1234m" 4m

    # Shanten, waits and progress tiles of a 13-tile hand
    riichi-yaku shanten "123456789p 238m hatsu"

    # Interactive draw/discard session
    riichi-yaku session "123p 456m 789s 11p 5s ton"
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import Callable, List, Optional

from .errors import HandError
from .hand import FullHand, ReadyHand
from .notation import format_tiles, parse_tile
from .rules import DEFAULT_RULES, STANDARD_ONLY_RULES, RuleSet
from .scoring import ScoringResult, YakuScorer
from .shanten import ShantenCalculator, ShantenResult

logger = logging.getLogger(__name__)

RULES = {
    "default": DEFAULT_RULES,
    "standard": STANDARD_ONLY_RULES,
}

QUIT_COMMANDS = ("q", "quit", "exit")

# The search cost grows steeply with distance; the session runs it every turn
DEFAULT_SEARCH_DEPTH = 3


def format_score(result: Optional[ScoringResult]) -> str:
    """Render a scoring result as one line per yaku plus the total"""
    if result is None:
        return "no decomposition"
    lines = [f"  {yaku} / {yaku.japanese_name} [{yaku.han}]" for yaku in result.yakus]
    if not lines:
        lines.append("  (no yaku)")
    lines.append(f"Total: {result.han}")
    return "\n".join(lines)


def format_shanten(result: ShantenResult) -> str:
    """Render a shanten analysis"""
    if result.is_tenpai:
        lines = ["Tenpai"]
        for tile, scored in result.waits:
            names = ", ".join(str(y) for y in scored.yakus) or "no yaku"
            lines.append(f"  wait {tile}: {names} ({scored.han})")
    else:
        lines = [f"Shanten: {result.distance}"]
        for outcome in result.outcomes:
            lines.append(f"  reachable: {', '.join(str(y) for y in outcome) or 'no yaku'}")
    if result.progress_tiles:
        lines.append(f"Progress tiles: {format_tiles(result.progress_tiles)}")
    return "\n".join(lines)


def score_hand(hand_text: str, draw_text: str, rules: RuleSet) -> str:
    hand = ReadyHand.from_string(hand_text)
    full = hand.draw(parse_tile(draw_text))
    return format_score(YakuScorer(rules).score(full))


def analyze_hand(hand_text: str, rules: RuleSet) -> str:
    hand = ReadyHand.from_string(hand_text)
    return format_shanten(ShantenCalculator(rules).analyze(hand))


def run_session(
    hand: ReadyHand,
    rules: RuleSet,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> ReadyHand:
    """
    Draw/discard loop: analyze, read a draw, score, read a discard.

    Bad tiles are reported and asked for again. Entering 'q' (or closing
    the input) ends the session.

    Returns:
        The hand held when the session ended
    """
    calculator = ShantenCalculator(rules)
    scorer = calculator.scorer

    def ask(prompt: str) -> Optional[str]:
        try:
            text = read(prompt).strip()
        except EOFError:
            return None
        return None if text.lower() in QUIT_COMMANDS else text

    while True:
        write(f"Hand: {hand}")
        write(format_shanten(calculator.analyze(hand)))

        full: Optional[FullHand] = None
        while full is None:
            text = ask("Draw: ")
            if text is None:
                return hand
            try:
                full = hand.draw(parse_tile(text))
            except HandError as e:
                write(f"Invalid tile: {e}")

        write(format_score(scorer.score(full)))

        while True:
            text = ask("Discard: ")
            if text is None:
                return hand
            try:
                hand = full.discard(parse_tile(text))
                break
            except HandError as e:
                write(f"Invalid discard: {e}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="riichi-yaku",
        description="Closed-hand riichi mahjong yaku and shanten calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Tile notation:
    123p 4m3 haku     -> 1p 2p 3p 4m 4m 4m haku
    Honors: ton nan shaa pei haku hatsu chun
        """
    )
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")
    parser.add_argument("--rules", type=str, default="default",
                        choices=sorted(RULES),
                        help="Which hand shapes to recognise")
    parser.add_argument("--max-depth", type=int, default=DEFAULT_SEARCH_DEPTH,
                        help="Largest shanten the draw/discard search tries "
                             "(farther hands report their lower bound)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    score_parser = subparsers.add_parser("score", help="Score a hand after a draw")
    score_parser.add_argument("hand", help="13 tiles, e.g. \"123456789p 1234m\"")
    score_parser.add_argument("draw", help="The drawn tile, e.g. 4m")

    shanten_parser = subparsers.add_parser("shanten", help="Analyze a 13-tile hand")
    shanten_parser.add_argument("hand", help="13 tiles")

    session_parser = subparsers.add_parser("session", help="Interactive draw/discard session")
    session_parser.add_argument("hand", help="Starting 13 tiles")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    if args.max_depth < 0:
        parser.error("--max-depth must be >= 0")
    rules = replace(RULES[args.rules], max_search_depth=args.max_depth)

    try:
        if args.command == "score":
            print(score_hand(args.hand, args.draw, rules))
        elif args.command == "shanten":
            print(analyze_hand(args.hand, rules))
        else:
            run_session(ReadyHand.from_string(args.hand), rules)
            print("Bye!")
    except HandError as e:
        logger.error(f"Invalid hand: {e}")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())

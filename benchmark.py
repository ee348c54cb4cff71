#!/usr/bin/env python3
"""
Benchmark for the closed-hand evaluator

Runs the shanten analysis on predefined hands, checks the distance and
waits against known answers, and times each case.

Scenarios tested:
1. Tenpai - waits of common and special shapes
2. Iishanten / Ryanshanten - search depth beyond tenpai
3. Scoring - best-pattern selection on ambiguous winning hands

Usage:
    python benchmark.py
    python benchmark.py --repeat 20 --rules standard
"""

import argparse
import time
from typing import Dict, List, Optional
from dataclasses import dataclass, field

import numpy as np

from riichi_yaku.cli import RULES
from riichi_yaku.hand import ReadyHand
from riichi_yaku.notation import format_tiles, parse_tile, parse_tiles
from riichi_yaku.rules import RuleSet
from riichi_yaku.scoring import YakuScorer
from riichi_yaku.shanten import ShantenCalculator


@dataclass
class TestCase:
    """A benchmark test case."""
    name: str
    description: str
    hand: str  # 13 tiles in notation
    expected_distance: int
    expected_waits: List[str] = field(default_factory=list)  # Only checked when tenpai
    draw: Optional[str] = None  # Score this draw instead of analyzing
    situation: str = "shanten"  # "shanten" or "scoring"


# Benchmark test cases
BENCHMARK_TESTS = [
    # =========================================
    # TENPAI
    # =========================================
    TestCase(
        name="Nine gates",
        description="Pure nine gates waits on every tile of the suit.",
        hand="1m3 2345678m 9m3",
        expected_distance=0,
        expected_waits="1m 2m 3m 4m 5m 6m 7m 8m 9m".split(),
    ),

    TestCase(
        name="Thirteen-sided orphans",
        description="Thirteen distinct orphans wait on all of them.",
        hand="19m 19p 19s ton nan shaa pei haku hatsu chun",
        expected_distance=0,
        expected_waits="1m 9m 1p 9p 1s 9s ton nan shaa pei haku hatsu chun".split(),
    ),

    TestCase(
        name="Seven pairs tanki",
        description="Six pairs and a single wait on the single.",
        hand="1p2 2s2 3m2 4p2 5s2 6m2 7p",
        expected_distance=0,
        expected_waits=["7p"],
    ),

    TestCase(
        name="Two-sided wait",
        description="Ryanmen wait with a finished pair.",
        hand="123456789p 23m 55s",
        expected_distance=0,
        expected_waits=["1m", "4m"],
    ),

    # =========================================
    # SEARCH
    # =========================================
    TestCase(
        name="Iishanten",
        description="One exchange from tenpai.",
        hand="123456789p 238m hatsu",
        expected_distance=1,
    ),

    TestCase(
        name="Ryanshanten",
        description="Two exchanges from tenpai.",
        hand="123456789p 1m 5m ton nan",
        expected_distance=2,
    ),

    # =========================================
    # SCORING
    # =========================================
    TestCase(
        name="Ambiguous triplets",
        description="Three readings of the same tiles; the suuankou one wins.",
        hand="1p3 2p3 3p3 4p3 haku",
        expected_distance=0,
        draw="haku",
        situation="scoring",
    ),
]


class BenchmarkRunner:
    """Run benchmark tests against the evaluator."""

    def __init__(self, rules: RuleSet, repeat: int = 1):
        self.rules = rules
        self.repeat = repeat
        self.results: List[Dict] = []

    def run_test(self, test: TestCase) -> Dict:
        """Run a single test case."""
        hand = ReadyHand(parse_tiles(test.hand))
        timings = []

        for _ in range(self.repeat):
            start = time.perf_counter()
            if test.draw is not None:
                outcome = YakuScorer(self.rules).score(hand.draw(parse_tile(test.draw)))
            else:
                # Fresh calculator each run so memoised distances do not carry over
                outcome = ShantenCalculator(self.rules).analyze(hand)
            timings.append(time.perf_counter() - start)

        if test.draw is not None:
            passed = outcome is not None
            detail = ", ".join(str(y) for y in outcome.yakus) if outcome else "no decomposition"
        else:
            passed = outcome.distance == test.expected_distance
            if passed and outcome.is_tenpai:
                passed = [str(t) for t in outcome.waiting_tiles] == test.expected_waits
            detail = f"distance {outcome.distance}"
            if outcome.is_tenpai:
                detail += f", waits {format_tiles(outcome.waiting_tiles)}"

        result = {
            "name": test.name,
            "situation": test.situation,
            "detail": detail,
            "passed": passed,
            "mean_ms": float(np.mean(timings)) * 1000,
            "max_ms": float(np.max(timings)) * 1000,
            "status": "✓ PASS" if passed else "✗ FAIL",
        }

        self.results.append(result)
        return result

    def run_all(self) -> float:
        """Run all benchmark tests."""
        print("\n" + "=" * 70)
        print(f"CLOSED-HAND EVALUATOR BENCHMARK ({self.rules.name} rules)")
        print("=" * 70 + "\n")

        for test in BENCHMARK_TESTS:
            result = self.run_test(test)

            print(f"{result['status']} {test.name}")
            print(f"   Hand:     {test.hand}" + (f" + {test.draw}" if test.draw else ""))
            print(f"   Result:   {result['detail']}")
            print(f"   Time:     {result['mean_ms']:.2f} ms mean, {result['max_ms']:.2f} ms max")
            print(f"   {test.description}")
            print()

        passed = sum(1 for r in self.results if r["passed"])
        pass_rate = passed / len(BENCHMARK_TESTS) if BENCHMARK_TESTS else 0

        print("=" * 70)
        print("SUMMARY")
        print("=" * 70)
        print(f"Total tests: {len(BENCHMARK_TESTS)}")
        print(f"Passed: {passed}")
        print(f"Failed: {len(BENCHMARK_TESTS) - passed}")
        print(f"Total time: {sum(r['mean_ms'] for r in self.results):.1f} ms per pass")
        print("=" * 70)

        # By situation
        print("\nBy Situation:")
        for situation in ["shanten", "scoring"]:
            sit_results = [r for r in self.results if r["situation"] == situation]
            if sit_results:
                sit_time = sum(r["mean_ms"] for r in sit_results)
                print(f"  {situation}: {sit_time:.1f} ms")

        return pass_rate


def main():
    parser = argparse.ArgumentParser(description="Benchmark the closed-hand evaluator")
    parser.add_argument("--repeat", type=int, default=5,
                        help="Runs per test case")
    parser.add_argument("--rules", type=str, default="default",
                        choices=sorted(RULES))

    args = parser.parse_args()

    runner = BenchmarkRunner(RULES[args.rules], repeat=args.repeat)
    pass_rate = runner.run_all()

    if pass_rate == 1.0:
        print("\n✓ All cases correct!")
    else:
        print("\n✗ Some cases are wrong")


if __name__ == "__main__":
    main()

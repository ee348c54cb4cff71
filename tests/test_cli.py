"""
Tests for the command-line front end
"""

import pytest

from riichi_yaku.cli import format_score, main, run_session
from riichi_yaku.hand import ReadyHand
from riichi_yaku.rules import DEFAULT_RULES


def scripted(lines):
    """Input function that replays lines, then reports end of input"""
    remaining = list(lines)

    def read(prompt):
        if not remaining:
            raise EOFError
        return remaining.pop(0)
    return read


class TestCommands:
    """Test one-shot subcommands"""

    def test_score(self, capsys):
        """Test scoring a winning hand"""
        assert main(["score", "123456789p 1234m", "4m"]) == 0
        out = capsys.readouterr().out
        assert "Ittsu" in out
        assert "Total: 2 han" in out
        assert "一気通貫" in out

    def test_score_not_winning(self, capsys):
        """Test scoring a non-winning hand"""
        assert main(["score", "123456789p 238m hatsu", "8m"]) == 0
        assert "no decomposition" in capsys.readouterr().out

    def test_shanten(self, capsys):
        """Test analyzing a tenpai hand"""
        assert main(["shanten", "123456789p 23m 55s"]) == 0
        out = capsys.readouterr().out
        assert "Tenpai" in out
        assert "wait 1m" in out
        assert "wait 4m" in out

    def test_far_hand_reports_bound(self, capsys):
        """Test a hand beyond the search depth reports its lower bound"""
        assert main(["shanten", "147m 258p 369s ton nan shaa pei"]) == 0
        out = capsys.readouterr().out
        assert "Shanten: 6" in out
        assert "reachable" not in out

    def test_max_depth_option(self, capsys):
        """Test the search depth can be lowered"""
        assert main(["--max-depth", "1", "shanten", "123456789p 1m 5m ton nan"]) == 0
        out = capsys.readouterr().out
        assert "Shanten: 2" in out
        assert "reachable" not in out
        with pytest.raises(SystemExit):
            main(["--max-depth", "-1", "shanten", "123456789p 1m 5m ton nan"])

    def test_rules_option(self, capsys):
        """Test standard-only rules"""
        assert main(["--rules", "standard", "score", "19m 19p 19s ton nan shaa pei haku hatsu chun", "1m"]) == 0
        assert "no decomposition" in capsys.readouterr().out

    def test_bad_hand_exits_2(self):
        """Test malformed input"""
        assert main(["score", "123p", "4m"]) == 2
        assert main(["score", "123456789p 1234m", "4x"]) == 2
        assert main(["shanten", "123456789p 1234q"]) == 2

    def test_missing_command(self):
        """Test argparse rejects a missing subcommand"""
        with pytest.raises(SystemExit):
            main([])

    def test_format_score_not_winning(self):
        """Test a non-winning hand renders as no decomposition"""
        assert format_score(None) == "no decomposition"


class TestSession:
    """Test the interactive draw/discard loop"""

    def test_session_to_win(self):
        """Test drawing into tenpai and then a winning tile"""
        output = []
        hand = run_session(
            ReadyHand.from_string("123456789p 238m hatsu"),
            DEFAULT_RULES,
            read=scripted(["1m", "8m", "hatsu", "q"]),
            write=output.append,
        )
        text = "\n".join(output)
        assert "Shanten: 1" in text
        assert "Tenpai" in text
        assert "Ittsu" in text
        assert hand == ReadyHand.from_string("123456789p 123m hatsu")

    def test_invalid_input_is_retried(self):
        """Test bad tiles are reported and asked again"""
        output = []
        hand = run_session(
            ReadyHand.from_string("123456789p 238m hatsu"),
            DEFAULT_RULES,
            read=scripted(["zz", "1m", "5s", "8m"]),
            write=output.append,
        )
        text = "\n".join(output)
        assert "Invalid tile" in text
        assert "Invalid discard" in text
        # Input ran out after the discard
        assert hand == ReadyHand.from_string("123456789p 123m hatsu")

    def test_quit_immediately(self):
        """Test 'q' ends the session with the hand unchanged"""
        start = ReadyHand.from_string("123456789p 23m 55s")
        assert run_session(start, DEFAULT_RULES, read=scripted(["q"]), write=lambda s: None) == start

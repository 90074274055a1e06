# tests/integration_tests/test_evaluate_rule.py
# This file is part of InfoBool - A cached boolean rule engine
#
# End-to-end tests for the evaluate_rule command-line tool

"""Integration tests for evaluate_rule.main.

Results are captured by replacing the logger's rule_result method, so the
tests do not depend on console formatting.
"""

import pytest
import evaluate_rule
from utils.logger import get_logger


@pytest.fixture
def results(monkeypatch):
    captured = []
    monkeypatch.setattr(
        get_logger(),
        "rule_result",
        lambda expression, value, frame_time=None: captured.append((expression, value, frame_time)),
    )
    return captured


@pytest.fixture
def conditions_file(tmp_path):
    path = tmp_path / "conditions.csv"
    path.write_text(
        "name,value,item_dependent\n"
        "player.playing,true,\n"
        "window.busy,false,\n"
        "skin.hidden,false,\n",
        encoding="utf-8",
    )
    return path


class TestEvaluateRuleCli:
    """Exit codes and reported values."""

    def test_expression_with_assignments(self, results):
        code = evaluate_rule.main(
            ["-e", "player.playing + !window.busy", "--set", "player.playing", "--set", "window.busy=false"]
        )

        assert code == 0
        assert results == [("player.playing + !window.busy", True, None)]

    def test_conditions_and_rules_file(self, tmp_path, conditions_file, results):
        rules = tmp_path / "rules.txt"
        rules.write_text(
            "# home screen\nplayer.playing\nwindow.busy | skin.hidden\n!(window.busy | skin.hidden)\n",
            encoding="utf-8",
        )

        code = evaluate_rule.main(["-f", str(rules), "-c", str(conditions_file), "--show-tree"])

        assert code == 0
        assert [(text, value) for text, value, _ in results] == [
            ("player.playing", True),
            ("window.busy | skin.hidden", False),
            ("!(window.busy | skin.hidden)", True),
        ]

    def test_multiple_frames(self, conditions_file, results):
        code = evaluate_rule.main(["-e", "player.playing", "-c", str(conditions_file), "--frames", "3"])

        assert code == 0
        assert [frame for _, _, frame in results] == [1, 2, 3]

    def test_malformed_rule_is_false_by_default(self, conditions_file, results, parse_failures):
        code = evaluate_rule.main(["-e", "player.playing + (", "-c", str(conditions_file)])

        assert code == 0
        assert results == [("player.playing + (", False, None)]
        assert len(parse_failures) == 1

    def test_strict_mode_fails_on_malformed_rule(self, conditions_file, results):
        code = evaluate_rule.main(["-e", "player.playing +", "-c", str(conditions_file), "--strict"])

        assert code == 2
        assert results == []

    def test_strict_mode_fails_on_unknown_condition(self, conditions_file):
        code = evaluate_rule.main(["-e", "player.paused", "-c", str(conditions_file), "--strict"])

        assert code == 2

    def test_missing_conditions_file(self, tmp_path):
        code = evaluate_rule.main(["-e", "a", "-c", str(tmp_path / "missing.csv")])

        assert code == 1

    def test_missing_rules_file(self, tmp_path):
        code = evaluate_rule.main(["-f", str(tmp_path / "missing.txt"), "--set", "a"])

        assert code == 3

    def test_no_rules_is_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            evaluate_rule.main(["--set", "a"])

        assert exc_info.value.code == 2

    def test_verbose_lists_conditions_and_summary(self, conditions_file, results, monkeypatch):
        messages = []
        monkeypatch.setattr(get_logger(), "info", lambda message, **kwargs: messages.append(message))

        code = evaluate_rule.main(
            ["-e", "player.playing", "-e", "window.busy", "-c", str(conditions_file), "-v"]
        )

        assert code == 0
        assert "   player.playing = True" in messages
        assert "   window.busy = False" in messages
        assert messages[-1] == "1 of 2 rules true"

    def test_quiet_by_default(self, conditions_file, results, monkeypatch):
        messages = []
        monkeypatch.setattr(get_logger(), "info", lambda message, **kwargs: messages.append(message))

        code = evaluate_rule.main(["-e", "player.playing", "-c", str(conditions_file)])

        assert code == 0
        assert messages == []
        assert len(results) == 1

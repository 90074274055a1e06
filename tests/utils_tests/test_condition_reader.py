# tests/utils_tests/test_condition_reader.py
# This file is part of InfoBool - A cached boolean rule engine
#
# Test suite for condition table and rule file readers

import pytest
from utils import ConditionFileError, ConditionRow, parse_assignment, read_conditions, read_rules
from utils.condition_reader import _parse_bool


class TestReadConditions:
    """CSV condition tables."""

    def test_reads_rows(self, tmp_path):
        path = tmp_path / "conditions.csv"
        path.write_text(
            "name,value,item_dependent\n"
            "player.playing,true,\n"
            "listitem.isfolder,no,yes\n"
            "window.busy,0,\n",
            encoding="utf-8",
        )

        rows = list(read_conditions(str(path)))

        assert rows == [
            ConditionRow("player.playing", True, False),
            ConditionRow("listitem.isfolder", False, True),
            ConditionRow("window.busy", False, False),
        ]

    def test_item_dependent_column_optional(self, tmp_path):
        path = tmp_path / "conditions.csv"
        path.write_text("name,value\na,1\n", encoding="utf-8")

        assert list(read_conditions(str(path))) == [ConditionRow("a", True)]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConditionFileError, match="not found"):
            list(read_conditions(str(tmp_path / "missing.csv")))

    def test_missing_headers(self, tmp_path):
        path = tmp_path / "conditions.csv"
        path.write_text("condition,state\na,1\n", encoding="utf-8")

        with pytest.raises(ConditionFileError, match="Missing required headers"):
            list(read_conditions(str(path)))

    def test_bad_value_reports_row(self, tmp_path):
        path = tmp_path / "conditions.csv"
        path.write_text("name,value\na,1\nb,maybe\n", encoding="utf-8")

        with pytest.raises(ConditionFileError, match="row 3"):
            list(read_conditions(str(path)))

    def test_empty_name(self, tmp_path):
        path = tmp_path / "conditions.csv"
        path.write_text("name,value\n ,1\n", encoding="utf-8")

        with pytest.raises(ConditionFileError, match="Empty condition name"):
            list(read_conditions(str(path)))


class TestReadRules:
    """Rule files, one rule per line."""

    def test_skips_blank_and_comment_lines(self, tmp_path):
        path = tmp_path / "rules.txt"
        path.write_text("# visibility\na + b\n\n  !c  \n# end\n", encoding="utf-8")

        assert read_rules(str(path)) == ["a + b", "!c"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConditionFileError, match="rules file"):
            read_rules(str(tmp_path / "missing.txt"))


class TestAssignments:
    """NAME=VALUE parsing and boolean spellings."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("a=true", ("a", True)),
            ("a = false", ("a", False)),
            ("player.playing", ("player.playing", True)),
            ("b=0", ("b", False)),
            ("b=ON", ("b", True)),
        ],
    )
    def test_parse_assignment(self, text, expected):
        assert parse_assignment(text) == expected

    @pytest.mark.parametrize("text", ["=true", "a=perhaps"])
    def test_invalid_assignment(self, text):
        with pytest.raises(ConditionFileError):
            parse_assignment(text)

    @pytest.mark.parametrize("text", ["1", "TRUE", " yes ", "on"])
    def test_true_spellings(self, text):
        assert _parse_bool(text) is True

    @pytest.mark.parametrize("text", ["0", "False", "no", "off", ""])
    def test_false_spellings(self, text):
        assert _parse_bool(text) is False

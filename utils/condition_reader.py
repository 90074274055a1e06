# utils/condition_reader.py
# This file is part of InfoBool - A cached boolean rule engine
#
# CSV condition table and rule file readers for the command-line tool

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Tuple
from utils.logger import get_logger


class ConditionFileError(Exception):
    """Exception raised when condition or rule files contain invalid data."""

    pass


@dataclass(frozen=True, slots=True)
class ConditionRow:
    """One condition read from a condition table.

    Attributes:
        name: Condition name as used in rules
        value: Constant value of the condition
        item_dependent: Condition is marked as varying per list item
    """

    name: str
    value: bool
    item_dependent: bool = False


_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off", ""}


def read_conditions(filepath: str) -> Iterator[ConditionRow]:
    """Read condition values from a CSV file.

    Expected CSV format:
        name,value,item_dependent
        player.playing,true,
        listitem.isfolder,false,yes

    The item_dependent column is optional.

    Args:
        filepath: Path to the CSV condition file

    Yields:
        ConditionRow: Parsed rows in file order

    Raises:
        ConditionFileError: If file format is invalid or a row cannot be parsed
    """
    logger = get_logger()
    path = Path(filepath)

    if not path.exists():
        raise ConditionFileError(f"Condition file not found: {filepath}")

    logger.debug(f"Reading condition file: {filepath}")

    try:
        with open(path, "r", newline="", encoding="utf-8") as file:
            reader = csv.DictReader(file)

            required_headers = {"name", "value"}
            if not required_headers.issubset(set(reader.fieldnames or [])):
                missing = required_headers - set(reader.fieldnames or [])
                raise ConditionFileError(f"Missing required headers: {missing}")

            for row_num, row in enumerate(reader, start=2):
                try:
                    condition = _parse_condition_row(row)
                except ConditionFileError as e:
                    raise ConditionFileError(f"Error parsing row {row_num}: {e}")
                logger.debug(f"Parsed condition {condition.name} from row {row_num}")
                yield condition

    except ConditionFileError:
        raise
    except OSError as e:
        raise ConditionFileError(f"Error reading condition file: {e}")


def read_rules(filepath: str) -> List[str]:
    """Read rule expressions, one per line.

    Blank lines and lines starting with '#' are skipped.

    Raises:
        ConditionFileError: If the file cannot be read
    """
    path = Path(filepath)
    try:
        with open(path, "r", encoding="utf-8") as file:
            lines = [line.strip() for line in file]
    except OSError as e:
        raise ConditionFileError(f"Error reading rules file: {e}")

    rules = [line for line in lines if line and not line.startswith("#")]
    get_logger().debug(f"Read {len(rules)} rules from {filepath}")
    return rules


def parse_assignment(text: str) -> Tuple[str, bool]:
    """Parse a NAME=VALUE command-line assignment.

    A bare NAME means true.

    Raises:
        ConditionFileError: If the name is empty or the value is not boolean
    """
    name, sep, value = text.partition("=")
    name = name.strip()
    if not name:
        raise ConditionFileError(f"Missing condition name in: {text}")
    return name, _parse_bool(value) if sep else True


def _parse_condition_row(row: dict) -> ConditionRow:
    name = (row.get("name") or "").strip()
    if not name:
        raise ConditionFileError("Empty condition name")

    return ConditionRow(
        name=name,
        value=_parse_bool(row.get("value") or ""),
        item_dependent=_parse_bool(row.get("item_dependent") or ""),
    )


def _parse_bool(text: str) -> bool:
    """Parse a boolean field.

    Args:
        text: String like 'true', 'no', '1'

    Returns:
        Parsed value, empty means False

    Raises:
        ConditionFileError: If the text is not a boolean spelling
    """
    word = text.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ConditionFileError(f"Invalid boolean value: {text}")

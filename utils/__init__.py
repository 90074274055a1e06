# utils/__init__.py
# This file is part of InfoBool - A cached boolean rule engine
#
# Utility module exports

from .condition_reader import (
    read_conditions,
    read_rules,
    parse_assignment,
    ConditionFileError,
    ConditionRow,
    _parse_bool,
)

__all__ = [
    "read_conditions",
    "read_rules",
    "parse_assignment",
    "ConditionFileError",
    "ConditionRow",
    "_parse_bool",
]

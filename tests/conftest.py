# tests/conftest.py
# This file is part of InfoBool - A cached boolean rule engine
#
# Test configuration and shared fixtures for pytest

"""Test configuration and shared fixtures for InfoBool tests.

Provides module path setup, a condition table with a handful of constant
conditions, and a recording resolver that logs every condition it is asked
about so tests can check short-circuiting and caching by call count.
"""

import sys
import pytest
from pathlib import Path

# Ensure project modules can be imported
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


class RecordingResolver:
    """Resolver wrapper that records the name of every resolved condition.

    Attributes:
        table: Underlying ConditionTable
        calls: Condition names in the order they were resolved
        items: Item passed with each call
    """

    def __init__(self, table):
        self.table = table
        self.calls = []
        self.items = []

    def resolve(self, condition_id, context, item=None):
        self.calls.append(self.table.name_of(condition_id))
        self.items.append(item)
        return self.table.resolve(condition_id, context, item)

    def reset(self):
        self.calls.clear()
        self.items.clear()


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Verify that the project packages are importable before any test runs."""
    try:
        import core
        import expr
        import utils
    except ImportError as e:
        pytest.skip(f"Cannot import required modules: {e}")

    yield


@pytest.fixture
def table():
    """Condition table with a..f set to true, false, true, false, true, false."""
    from core import ConditionTable

    conditions = ConditionTable()
    for name, value in zip("abcdef", [True, False, True, False, True, False]):
        conditions.set_value(name, value)
    return conditions


@pytest.fixture
def recorder(table):
    """Recording resolver over the shared condition table."""
    return RecordingResolver(table)


@pytest.fixture
def make_table():
    """Factory building a condition table from a name -> value mapping."""
    from core import ConditionTable

    def _make(values):
        conditions = ConditionTable()
        for name, value in values.items():
            conditions.set_value(name, value)
        return conditions

    return _make


@pytest.fixture
def parse_failures(monkeypatch):
    """Capture parse failure reports instead of logging them."""
    from utils.logger import get_logger

    reports = []
    monkeypatch.setattr(
        get_logger(),
        "parse_failure",
        lambda expression, context, reason, fallback: reports.append(
            (expression, context, reason, fallback)
        ),
    )
    return reports

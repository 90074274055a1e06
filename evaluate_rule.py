#!/usr/bin/env python3
# evaluate_rule.py
# This file is part of InfoBool - A cached boolean rule engine
#
# Command-line interface for evaluating UI rules against a condition table

import sys
import argparse
from pathlib import Path
from typing import List

from core import ConditionTable, ExpressionInstance, RuleRegistry
from expr import ParseError, compile_expression
from utils.condition_reader import (
    ConditionFileError,
    parse_assignment,
    read_conditions,
    read_rules,
)
from utils.logger import LogLevel, get_logger, set_log_level


def configure_logging_for_cli(debug: bool = False) -> None:
    """Configure logging levels for the rule evaluator.

    Results are reported at INFO level, so INFO stays enabled by default.

    Args:
        debug: Enable DEBUG level logging
    """
    set_log_level(LogLevel.DEBUG if debug else LogLevel.INFO)


def build_condition_table(conditions_path, assignments: List[str]) -> ConditionTable:
    """Create the condition table from a CSV file and NAME=VALUE assignments.

    Assignments are applied after the file and override it.

    Raises:
        ConditionFileError: File or assignment is invalid
    """
    table = ConditionTable()

    if conditions_path is not None:
        for row in read_conditions(str(conditions_path)):
            value = row.value
            table.register(row.name, lambda context, item, v=value: v, row.item_dependent)

    for assignment in assignments:
        name, value = parse_assignment(assignment)
        table.set_value(name, value)

    return table


def collect_rules(expressions: List[str], rules_path) -> List[str]:
    """Gather rule texts from the command line and the optional rules file."""
    rules = list(expressions)
    if rules_path is not None:
        rules.extend(read_rules(str(rules_path)))
    return rules


def report_condition_table(table: ConditionTable, context: int) -> None:
    """Log every condition with its current value."""
    logger = get_logger()
    logger.info(f"Condition table ({len(table)} conditions):")
    for name in table:
        condition_id = table.lookup(name)
        if table.is_item_dependent(condition_id):
            logger.info(f"   {name} = <per item>")
        else:
            logger.info(f"   {name} = {table.resolve(condition_id, context)}")


def evaluate_rules(
    registry: RuleRegistry,
    rules: List[str],
    context: int,
    frames: int,
    show_tree: bool,
) -> int:
    """Evaluate every rule once per frame and log the results.

    Returns:
        Number of rules that evaluated to True in the last frame
    """
    logger = get_logger()
    table = registry.lookup
    true_count = 0

    for frame_time in range(1, frames + 1):
        true_count = 0
        for text in rules:
            rule = registry.register(text, context)
            if rule is None:
                logger.warning("Skipping empty rule")
                continue

            value = rule.get(frame_time)
            true_count += value
            logger.rule_result(rule.source_text, value, frame_time if frames > 1 else None)

            if show_tree and frame_time == 1 and isinstance(rule, ExpressionInstance):
                logger.info(f"   tree: {rule.describe(table.name_of)}")

    return true_count


def validate_rules(rules: List[str], table: ConditionTable) -> None:
    """Compile every rule once, raising on the first failure.

    Raises:
        ParseError: A rule does not compile
    """
    logger = get_logger()
    for text in rules:
        try:
            compile_expression(text, table)
        except ParseError as e:
            raise ParseError(f"{text!r}: {e}") from e
        logger.debug(f"Rule is well-formed: {text}")


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser for command line interface.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="InfoBool UI rule evaluator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python evaluate_rule.py -e "player.playing + !window.busy" --set player.playing
  python evaluate_rule.py -f rules.txt -c conditions.csv --show-tree
  python evaluate_rule.py -f rules.txt -c conditions.csv --strict --debug

Condition file format:
  name,value,item_dependent
  player.playing,true,
  listitem.isfolder,false,yes

Rules file format:
  One rule per line, '#' starts a comment line.
        """,
    )

    parser.add_argument(
        "-e", "--expression", action="append", default=[], help="Rule to evaluate (repeatable)"
    )

    parser.add_argument("-f", "--rules-file", type=Path, help="File with one rule per line")

    parser.add_argument("-c", "--conditions", type=Path, help="CSV condition table")

    parser.add_argument(
        "--set",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Set a condition value (repeatable, bare NAME means true)",
    )

    parser.add_argument("--context", type=int, default=0, help="Context id of the rules")

    parser.add_argument(
        "--frames", type=int, default=1, help="Number of frames to evaluate (default: 1)"
    )

    parser.add_argument(
        "--show-tree", action="store_true", help="Print the compiled tree of each rule"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on malformed rules instead of evaluating them as false",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Also list the condition table and a summary of the results",
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output"
    )

    return parser


def main(argv=None) -> int:
    """Main entry point for the rule evaluator.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    configure_logging_for_cli(debug=args.debug)
    logger = get_logger()

    try:
        table = build_condition_table(args.conditions, args.set)
        logger.debug(f"Condition table holds {len(table)} conditions")
        if args.verbose:
            report_condition_table(table, args.context)

        try:
            rules = collect_rules(args.expression, args.rules_file)
        except ConditionFileError as e:
            logger.error(f"Rules file error: {e}")
            return 3
        if not rules:
            parser.error("no rules given, use -e or -f")

        if args.strict:
            validate_rules(rules, table)

        registry = RuleRegistry(table, table)
        true_count = evaluate_rules(
            registry, rules, args.context, max(args.frames, 1), args.show_tree
        )
        if args.verbose:
            logger.info(f"{true_count} of {len(rules)} rules true")
        return 0

    except ConditionFileError as e:
        logger.error(f"Condition file error: {e}")
        return 1

    except ParseError as e:
        logger.error(f"Rule parsing error: {e}")
        return 2

    except KeyboardInterrupt:
        logger.error("Evaluation interrupted by user")
        return 4


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
vecdist CLI - Evaluate distance operators from the command line

Usage:
    vecdist eval "[0, 1]" "[3, 2]" --op "<->"
    vecdist eval "[4, 4]" "[2, 2]" --metric cosine --json
    vecdist operators
    python -m metal0.vecdist --version

Without --op or --metric, eval uses the metric from VECDIST_METRIC.
"""

import argparse
import json
import logging
import math
import sys

from .config import configure_logging, load_settings
from .errors import VecdistError
from .metric import Metric
from .operators import default_registry

logger = logging.getLogger("metal0.vecdist.cli")


def _parse_vector(text):
    values = json.loads(text)
    if not isinstance(values, list):
        raise ValueError(f"expected a JSON array, got: {text}")
    return values


def cmd_eval(args, settings):
    """Evaluate one operator on two vectors and print the distance."""
    try:
        if args.op:
            op = default_registry().get(args.op)
        else:
            metric = Metric.parse(args.metric) if args.metric else settings.metric
            op = default_registry().get(metric.token)

        left = _parse_vector(args.left)
        right = _parse_vector(args.right)
        logger.debug("Evaluating %s on vectors of length %d and %d", op.token, len(left), len(right))
        value = op(left, right)
    except (VecdistError, ValueError, TypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({
            "operator": op.token,
            "metric": op.metric.name.lower() if op.metric else None,
            "function": op.name,
            "distance": value if math.isfinite(value) else None,
        }))
    else:
        print(value)
    return 0


def cmd_operators(args, settings):
    """List registered operators."""
    registry = default_registry()
    if args.json:
        print(json.dumps([
            {
                "operator": op.token,
                "function": op.name,
                "properties": op.properties,
                "description": op.description,
            }
            for op in registry
        ], indent=2))
    else:
        for op in registry:
            marker = "*" if op.metric is settings.metric else " "
            print(f"{marker} {op.token:<4} {op.name:<28} {', '.join(op.properties)}")
    return 0


def cmd_version(args, settings):
    """Show version."""
    from . import __version__
    print(f"vecdist {__version__}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='vecdist',
        description='Vector distance operators'
    )
    parser.add_argument('--version', '-v', action='store_true', help='Show version')
    parser.add_argument('--log-level', help='Logging level (overrides VECDIST_LOG_LEVEL)')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # eval command
    eval_parser = subparsers.add_parser('eval', help='Compute the distance between two vectors')
    eval_parser.add_argument('left', help='Left vector as a JSON array')
    eval_parser.add_argument('right', help='Right vector as a JSON array')
    which = eval_parser.add_mutually_exclusive_group()
    which.add_argument('--op', '-o', help='Operator token, e.g. "<->"')
    which.add_argument('--metric', '-m', help='Metric name, e.g. cosine')
    eval_parser.add_argument('--json', action='store_true', help='Output as JSON')

    # operators command
    ops_parser = subparsers.add_parser('operators', help='List registered operators')
    ops_parser.add_argument('--json', action='store_true', help='Output as JSON')

    args = parser.parse_args(argv)

    try:
        settings = load_settings()
        configure_logging(args.log_level or settings.log_level)
    except (VecdistError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.version:
        return cmd_version(args, settings)

    if args.command == 'eval':
        return cmd_eval(args, settings)
    elif args.command == 'operators':
        return cmd_operators(args, settings)
    else:
        parser.print_help()
        return 0


if __name__ == '__main__':
    sys.exit(main())

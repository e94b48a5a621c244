#!/usr/bin/env python3
"""Run the test suite under coverage and enforce a minimum threshold.

Usage:
    python scripts/run_coverage.py [OPTIONS]

Options:
    --threshold PERCENT    Minimum coverage percentage (default: 90)
    --html                 Generate HTML coverage report
    --xml                  Generate XML coverage report for CI tools
    --verbose              Show missing lines per module
    --module MODULE        Package to measure (default: avro_json)

Exit Codes:
    0 - Success, coverage threshold met
    1 - Tests failed
    2 - Coverage below threshold
    3 - Configuration or runtime error
"""

import argparse
import subprocess
import sys
from pathlib import Path


PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_THRESHOLD = 90
DEFAULT_MODULE = "avro_json"

# the threshold is checked by the report step, not by pytest-cov
_PYTEST_TESTS_FAILED = 1

COVERED_MODULES = [
    ("avro_json.schema", "Schema model"),
    ("avro_json.codec.primitive", "Scalars"),
    ("avro_json.codec.resolver", "Resolution"),
    ("avro_json.codec.defaults", "Defaults"),
    ("avro_json.codec.decoder", "Decoder"),
    ("avro_json.codec.encoder", "Encoder"),
    ("avro_json.codec.json_io", "JSON transport"),
    ("avro_json.config", "Configuration"),
    ("avro_json.logging", "Logging"),
]


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Run pytest with coverage validation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_THRESHOLD,
        help=f"Minimum coverage percentage (default: {DEFAULT_THRESHOLD})",
    )
    parser.add_argument("--html", action="store_true", help="Generate HTML report in htmlcov/")
    parser.add_argument("--xml", action="store_true", help="Generate coverage.xml")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show missing lines")
    parser.add_argument(
        "--module",
        default=DEFAULT_MODULE,
        help=f"Package to measure coverage for (default: {DEFAULT_MODULE})",
    )
    parser.add_argument(
        "--tests",
        default="tests/",
        help="Test directory or file pattern (default: tests/)",
    )
    return parser.parse_args()


def build_pytest_command(args: argparse.Namespace) -> list:
    cmd = [sys.executable, "-m", "pytest", f"--cov={args.module}"]
    cmd.append("--cov-report=term-missing" if args.verbose else "--cov-report=term")
    if args.html:
        cmd.append("--cov-report=html:htmlcov")
    if args.xml:
        cmd.append("--cov-report=xml:coverage.xml")
    cmd.append(args.tests)
    return cmd


def build_report_command(args: argparse.Namespace) -> list:
    cmd = [sys.executable, "-m", "coverage", "report", f"--fail-under={args.threshold}"]
    if args.verbose:
        cmd.append("--show-missing")
    return cmd


def run_coverage(args: argparse.Namespace) -> int:
    """Run the tests, then check the collected coverage.

    Returns:
        Exit code (0=success, 1=test failure, 2=coverage failure, 3=error)
    """
    cmd = build_pytest_command(args)

    print("=" * 70)
    print("AVRO JSON CODEC - COVERAGE VALIDATION")
    print("=" * 70)
    print(f"Module:    {args.module}")
    print(f"Threshold: {args.threshold}%")
    print(f"Command:   {' '.join(cmd)}")
    print("=" * 70)

    result = subprocess.run(cmd, cwd=PROJECT_ROOT)
    if result.returncode == _PYTEST_TESTS_FAILED:
        print("FAILURE: Tests failed")
        return 1
    if result.returncode != 0:
        print(f"ERROR: Unexpected exit code {result.returncode}")
        return 3

    report = subprocess.run(build_report_command(args), cwd=PROJECT_ROOT)
    if report.returncode != 0:
        print(f"FAILURE: Coverage below {args.threshold}% threshold")
        return 2

    print(f"SUCCESS: Coverage meets or exceeds {args.threshold}% threshold")
    return 0


def print_coverage_summary() -> None:
    print()
    print("Coverage by Module:")
    print("-" * 50)
    for module, description in COVERED_MODULES:
        print(f"  {description:<20} {module}")
    print("-" * 50)
    print()


def main() -> int:
    args = parse_args()

    try:
        import pytest  # noqa: F401
        import coverage  # noqa: F401
    except ImportError as e:
        print(f"ERROR: Required package not installed: {e}")
        print("Install with: pip install -e .[dev]")
        return 3

    if args.verbose:
        print_coverage_summary()

    return run_coverage(args)


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Bitsy Fixture Runner

Parses every Bitsy program fixture and checks the outcome against the
expected result stored next to it.

A fixture `name.bitsy` is paired with either:
    name.ast  - the expected syntax tree, as printed by `bitsy parse`
    name.err  - the expected error message

Usage:
    python run_fixtures.py [options]

Examples:
    python run_fixtures.py
    python run_fixtures.py --verbose --fail-fast
    python run_fixtures.py --fixtures-dir ./custom_fixtures
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from bitsy.core import Compiler
from bitsy.syntax import format_tree


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixtureResult:
    """Represents the result of a single fixture."""
    name: str
    passed: bool
    expected_output: str = ""
    actual_output: str = ""
    error_message: str = ""

    def __str__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        return f"[{status}] {self.name}"


@dataclass
class FixtureSuite:
    """Manages a collection of fixture results."""
    results: list[FixtureResult] = field(default_factory=list)

    @property
    def passed_count(self) -> int:
        """Return the number of passed fixtures."""
        return sum(1 for r in self.results if r.passed)

    @property
    def failed_count(self) -> int:
        """Return the number of failed fixtures."""
        return sum(1 for r in self.results if not r.passed)

    def add_result(self, result: FixtureResult) -> None:
        """Add a fixture result to the suite."""
        self.results.append(result)

    def print_summary(self) -> None:
        """Print a summary of all fixture results."""
        print("\n" + "=" * 50)
        print(f"Fixture Summary: {self.passed_count} passed, {self.failed_count} failed")
        print("=" * 50)

        if self.failed_count > 0:
            print("\nFailed fixtures:")
            for result in self.results:
                if not result.passed:
                    print(f"  - {result.name}: {result.error_message}")


def normalize_output(text: str) -> str:
    """Convert CRLF to LF and trim trailing whitespace."""
    return text.replace("\r\n", "\n").rstrip()


def render_outcome(compiler: Compiler, program_file: Path) -> str:
    """Parse a program file and render its tree or its error message."""
    result = compiler.load(program_file)
    if result.success:
        return format_tree(result.program)
    return result.error_message


class FixtureRunner:
    """
    Discovers fixtures and checks each against its expected outcome.
    """

    def __init__(
        self,
        fixtures_dir: Path,
        verbose: bool = False,
        fail_fast: bool = False
    ) -> None:
        """
        Initialize the fixture runner.

        Args:
            fixtures_dir: Directory containing fixtures
            verbose: Enable verbose output
            fail_fast: Stop on first failure
        """
        self.fixtures_dir = fixtures_dir.resolve()
        self.verbose = verbose
        self.fail_fast = fail_fast
        self.suite = FixtureSuite()
        self.compiler = Compiler()

        if self.verbose:
            logger.setLevel(logging.DEBUG)

    def discover_fixtures(self) -> Iterator[Path]:
        """
        Discover all program fixtures in the fixtures directory.

        Yields:
            Paths to `.bitsy` fixture files
        """
        if not self.fixtures_dir.exists():
            raise FileNotFoundError(f"Fixtures directory not found: {self.fixtures_dir}")

        fixture_files = sorted(self.fixtures_dir.glob("*.bitsy"))
        if not fixture_files:
            raise ValueError(f"No fixtures found in {self.fixtures_dir}")

        logger.debug(f"Discovered {len(fixture_files)} fixtures")
        yield from fixture_files

    def expected_file(self, program_file: Path) -> Path | None:
        """Return the `.ast` or `.err` file paired with a fixture."""
        for suffix in (".ast", ".err"):
            candidate = program_file.with_suffix(suffix)
            if candidate.exists():
                return candidate
        return None

    def run_single_fixture(self, program_file: Path) -> FixtureResult:
        """
        Run a single fixture.

        Args:
            program_file: Path to the `.bitsy` fixture

        Returns:
            FixtureResult containing the outcome
        """
        name = program_file.stem
        expected_file = self.expected_file(program_file)

        logger.debug(f"Fixture file: {program_file}")
        logger.debug(f"Expected file: {expected_file}")

        if expected_file is None:
            return FixtureResult(
                name=name,
                passed=False,
                error_message="Missing expected .ast or .err file"
            )

        expected = normalize_output(expected_file.read_text(encoding="utf-8"))
        actual = normalize_output(render_outcome(self.compiler, program_file))

        if actual == expected:
            print(f"[fixture] PASS: {name}")
            return FixtureResult(
                name=name,
                passed=True,
                expected_output=expected,
                actual_output=actual
            )

        print(f"[fixture] FAIL: {name}")
        if self.verbose:
            print("---- expected ----")
            print(expected)
            print("---- actual ----")
            print(actual)
        return FixtureResult(
            name=name,
            passed=False,
            expected_output=expected,
            actual_output=actual,
            error_message="Output mismatch"
        )

    def run_all_fixtures(self) -> int:
        """
        Run all discovered fixtures.

        Returns:
            Exit code (0 for success, 1 for failure)
        """
        print("=" * 50)
        print("Bitsy Fixture Runner")
        print("=" * 50)
        print(f"Fixtures directory: {self.fixtures_dir}")

        try:
            fixture_files = list(self.discover_fixtures())
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Fixture discovery failed: {e}")
            return 1

        print(f"\nFound {len(fixture_files)} fixture(s)")

        for program_file in fixture_files:
            result = self.run_single_fixture(program_file)
            self.suite.add_result(result)

            if not result.passed and self.fail_fast:
                logger.info("Fail-fast enabled, stopping after first failure")
                break

        self.suite.print_summary()

        return 0 if self.suite.failed_count == 0 else 1


def parse_arguments() -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="run_fixtures.py",
        description="Check Bitsy program fixtures against their expected trees",
    )

    parser.add_argument(
        "--fixtures-dir",
        type=Path,
        default=None,
        help="Directory containing fixtures (default: ../tests/fixtures)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--fail-fast", "-x",
        action="store_true",
        help="Stop on first failure"
    )

    return parser.parse_args()


def main() -> int:
    """
    Main entry point for the fixture runner.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = parse_arguments()

    repo_root = Path(__file__).parent.resolve().parent
    fixtures_dir = args.fixtures_dir or repo_root / "tests" / "fixtures"

    runner = FixtureRunner(
        fixtures_dir=fixtures_dir,
        verbose=args.verbose,
        fail_fast=args.fail_fast
    )

    return runner.run_all_fixtures()


if __name__ == "__main__":
    sys.exit(main())

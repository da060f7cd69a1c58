"""
Multi-case runner for the quadratic constant-term solver.

This script loads one or more test-case files, decodes their base-encoded
values, solves each for the constant term c and prints a report per case.
A failing case is reported and skipped; the remaining cases still run.

Usage:
    # Run the bundled samples
    python -m quadsolve.runners.run_test_cases

    # Custom files, JSONL results log, debug output
    python -m quadsolve.runners.run_test_cases cases/a.json cases/b.json \
        --results-log logs/results.jsonl --verbose

Output:
    - Console report per case (decoded points, method, c, verification)
    - Optionally appends one JSON record per case to --results-log
    - Exit status 1 if any case failed, 0 otherwise
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from quadsolve.core.point_types import format_points
from quadsolve.runners.kernel import solve_test_case_file
from quadsolve.runners.results import CaseDiagnostics, diagnostics_to_record
from quadsolve.solver.quadratic import DEVIATION_THRESHOLD


logger = logging.getLogger(__name__)


# Bundled sample cases, resolved against the repository root
DATA_DIR = Path(__file__).resolve().parents[2] / "data"
DEFAULT_CASE_PATHS = [DATA_DIR / "test_case_1.json", DATA_DIR / "test_case_2.json"]

# Points listed individually before "... and N more points"
DEFAULT_MAX_POINTS_SHOWN = 5


def print_case_report(
    diagnostics: CaseDiagnostics,
    case_number: int,
    max_points_shown: int = DEFAULT_MAX_POINTS_SHOWN,
) -> None:
    """
    Print a human-readable report for one case.

    Args:
        diagnostics: outcome of the case
        case_number: 1-based position in this run
        max_points_shown: points listed before the "... and N more" line
    """
    print("=" * 70)
    print(f"TEST CASE {case_number}: {diagnostics.case_name}")
    print("=" * 70)

    if diagnostics.n is not None:
        print(f"n={diagnostics.n}, k={diagnostics.k}")

    if diagnostics.points:
        print(f"Found {len(diagnostics.points)} points:")
        for line in format_points(diagnostics.points, max_shown=max_points_shown):
            print(f"  {line}")

    if diagnostics.status != "ok":
        print(f"[ERROR] {diagnostics.error_type}: {diagnostics.error_message}")
        print()
        return

    result = diagnostics.result
    print(f"Method: {result.method.value}")
    if result.determinant is not None:
        print(f"Determinant: {result.determinant}")
    if result.coefficients is not None:
        a, b, c = result.coefficients
        print(f"Coefficients: a={a}, b={b}, c={c}")

    print(f"Verification against f(x) = x^2 + c (threshold {DEVIATION_THRESHOLD}):")
    for dev in result.deviations:
        mark = "✗" if dev.flagged else "✓"
        print(f"  {mark} {dev.point} diff: {dev.deviation}")

    print(f"Constant c for {diagnostics.case_name}: {result.constant}")
    print()


def run_test_cases(
    paths: List[Path],
    results_log_path: Optional[Path] = None,
    max_points_shown: int = DEFAULT_MAX_POINTS_SHOWN,
) -> List[CaseDiagnostics]:
    """
    Solve each test-case file in order and report the outcomes.

    Each case is independent: a failure is logged and the loop continues.

    Args:
        paths: test-case JSON files
        results_log_path: optional JSONL file; one record per case is appended
        max_points_shown: points listed per case in the console report

    Returns:
        CaseDiagnostics per path, in the same order
    """
    results_log_file = None
    if results_log_path is not None:
        results_log_path.parent.mkdir(parents=True, exist_ok=True)
        results_log_file = results_log_path.open("a", encoding="utf-8")

    all_diagnostics = []
    try:
        for case_number, path in enumerate(paths, start=1):
            logger.info("Processing %s", path)
            diagnostics = solve_test_case_file(path)
            all_diagnostics.append(diagnostics)

            if diagnostics.status == "ok":
                logger.info("  ✓ c=%d for %s", diagnostics.constant, diagnostics.case_name)
                flagged = diagnostics.result.flagged_points
                if flagged:
                    logger.warning(
                        "  %d point(s) deviate from x^2 + c by more than %s",
                        len(flagged),
                        DEVIATION_THRESHOLD,
                    )
            else:
                logger.error(
                    "  ✗ %s failed: %s: %s",
                    diagnostics.case_name,
                    diagnostics.error_type,
                    diagnostics.error_message,
                )

            print_case_report(diagnostics, case_number, max_points_shown)

            if results_log_file is not None:
                results_log_file.write(json.dumps(diagnostics_to_record(diagnostics)) + "\n")
                results_log_file.flush()
    finally:
        if results_log_file is not None:
            results_log_file.close()

    num_ok = sum(1 for d in all_diagnostics if d.status == "ok")
    logger.info("=" * 70)
    logger.info("RUN SUMMARY")
    logger.info("Total cases: %d", len(all_diagnostics))
    logger.info("  OK: %d", num_ok)
    logger.info("  Failures: %d", len(all_diagnostics) - num_ok)
    logger.info("=" * 70)

    return all_diagnostics


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments for the multi-case runner.

    Returns:
        Parsed arguments with paths, results_log, max_points_shown and verbose
    """
    parser = argparse.ArgumentParser(
        description="Recover the constant term c of a quadratic from base-encoded test cases."
    )
    parser.add_argument(
        "paths",
        type=Path,
        nargs="*",
        default=DEFAULT_CASE_PATHS,
        help=f"Test-case JSON files (default: bundled samples in {DATA_DIR}).",
    )
    parser.add_argument(
        "--results-log",
        type=Path,
        default=None,
        help="Optional JSONL file where one result record per case is appended.",
    )
    parser.add_argument(
        "--max-points-shown",
        type=int,
        default=DEFAULT_MAX_POINTS_SHOWN,
        help="Number of decoded points listed per case.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging (per-entry decoding).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint; returns the process exit status."""
    args = parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s"
    )

    diagnostics = run_test_cases(
        paths=args.paths,
        results_log_path=args.results_log,
        max_points_shown=args.max_points_shown,
    )
    return 0 if all(d.status == "ok" for d in diagnostics) else 1


if __name__ == "__main__":
    sys.exit(main())

"""
Core kernel runner for the quadratic constant-term solver.

This module provides the main entrypoints for solving one test case:
  1. Load test case (keys + raw entries)
  2. Decode each entry's value from its base -> Point(x=index, y=value)
  3. Solve for c (Cramer's rule or simple fallback)
  4. Return diagnostics for reporting

solve_test_case propagates every error; solve_test_case_with_diagnostics
turns them into a status="error" record so one bad case never aborts a
multi-case run.
"""

from __future__ import annotations

import logging
from pathlib import Path

from quadsolve.core.case_io import TestCase, TestCaseFormatError, is_ascii_decimal, load_test_case
from quadsolve.core.point_types import Point, PointSet
from quadsolve.solver.decoding import DecodeError, UnsupportedBaseError, decode
from quadsolve.solver.quadratic import EmptyInputError, SolveResult, solve
from quadsolve.runners.results import CaseDiagnostics


logger = logging.getLogger(__name__)


def build_point_set(case: TestCase) -> PointSet:
    """
    Decode every raw entry of a test case into a Point.

    x is the entry index, y the value decoded in the entry's base.

    Args:
        case: parsed TestCase

    Returns:
        PointSet in entry (index) order

    Raises:
        DecodeError: if any entry fails to decode; no partial set is returned
    """
    points = []
    for entry in case.entries:
        if not is_ascii_decimal(entry.base):
            raise UnsupportedBaseError(entry.base)
        y = decode(entry.value, int(entry.base))
        logger.debug(
            "Decoded index %d: %s (base %s) = %d", entry.index, entry.value, entry.base, y
        )
        points.append(Point(x=entry.index, y=y))

    if len(points) != case.n:
        logger.warning(
            "Test case declares n=%d but has %d entries", case.n, len(points)
        )

    return points


def solve_test_case(case: TestCase) -> SolveResult:
    """
    Decode and solve a single test case.

    Args:
        case: parsed TestCase

    Returns:
        SolveResult for the decoded points

    Raises:
        DecodeError: if any entry fails to decode
        EmptyInputError: if the case has no entries
    """
    points = build_point_set(case)
    return solve(points)


def solve_test_case_with_diagnostics(
    case: TestCase,
    case_name: str = "<memory>",
) -> CaseDiagnostics:
    """
    Solve a test case and capture the outcome as CaseDiagnostics.

    Decoding and solving errors are recorded instead of raised; anything
    unexpected is logged with its traceback and recorded the same way.

    Args:
        case: parsed TestCase
        case_name: label stored in the diagnostics

    Returns:
        CaseDiagnostics with status "ok" or "error"
    """
    points: PointSet = []
    try:
        points = build_point_set(case)
        result = solve(points)
    except (DecodeError, EmptyInputError) as e:
        return CaseDiagnostics(
            case_name=case_name,
            status="error",
            n=case.n,
            k=case.k,
            points=points,
            error_type=type(e).__name__,
            error_message=str(e),
        )
    except Exception as e:
        logger.exception("Unexpected error while solving %s: %s", case_name, e)
        return CaseDiagnostics(
            case_name=case_name,
            status="error",
            n=case.n,
            k=case.k,
            points=points,
            error_type=type(e).__name__,
            error_message=f"Unexpected error: {e}",
        )

    return CaseDiagnostics(
        case_name=case_name,
        status="ok",
        n=case.n,
        k=case.k,
        points=points,
        result=result,
    )


def solve_test_case_file(path: Path) -> CaseDiagnostics:
    """
    Load a test-case file and solve it, never raising for bad input.

    Unreadable or malformed files become status="error" diagnostics.

    Args:
        path: path to a test-case JSON file

    Returns:
        CaseDiagnostics named after the file
    """
    case_name = Path(path).name
    try:
        case = load_test_case(path)
    except (OSError, TestCaseFormatError) as e:
        return CaseDiagnostics(
            case_name=case_name,
            status="error",
            error_type=type(e).__name__,
            error_message=str(e),
        )
    except Exception as e:
        logger.exception("Unexpected error while loading %s: %s", case_name, e)
        return CaseDiagnostics(
            case_name=case_name,
            status="error",
            error_type=type(e).__name__,
            error_message=f"Unexpected error: {e}",
        )

    logger.info("Parsing test case %s: n=%d, k=%d", case_name, case.n, case.k)
    return solve_test_case_with_diagnostics(case, case_name=case_name)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")

    print("Testing kernel runner on data/test_case_1.json...")
    print("=" * 70)

    diagnostics = solve_test_case_file(Path("data/test_case_1.json"))
    print(f"  status: {diagnostics.status}")
    print(f"  constant c: {diagnostics.constant}")

    print("\n" + "=" * 70)
    print("✓ Kernel runner self-test complete.")

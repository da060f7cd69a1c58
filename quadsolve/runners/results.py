"""
Result and diagnostics structures for the quadratic solver runners.

This module defines CaseDiagnostics, the single structured object that
captures everything about one test-case run, including failures. The CLI
prints it and the JSONL results log stores its serialized form.

Key components:
  - CaseDiagnostics: complete run record (status, points, solve result, error)
  - solve_result_to_dict: JSON-friendly view of a SolveResult
  - diagnostics_to_record: JSON-friendly view of a CaseDiagnostics
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

from quadsolve.core.point_types import Point
from quadsolve.solver.quadratic import SolveResult


# Status type for case runs
CaseStatus = Literal["ok", "error"]


@dataclass
class CaseDiagnostics:
    """
    Complete diagnostics for a single test-case run.

    Attributes:
        case_name: label of the case (usually the file name)
        status: "ok" when a constant was recovered, "error" otherwise
        n: declared entry count, None if the record could not be read
        k: declared k, passed through unchanged
        points: decoded points, in index order (empty on decode failure)
        result: SolveResult when status == "ok"
        error_type: exception class name when status == "error"
        error_message: exception message when status == "error"
    """
    case_name: str
    status: CaseStatus

    n: Optional[int] = None
    k: Optional[int] = None
    points: List[Point] = field(default_factory=list)

    result: Optional[SolveResult] = None

    # Debug / error information
    error_type: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def constant(self) -> Optional[int]:
        return self.result.constant if self.result is not None else None


def solve_result_to_dict(result: SolveResult) -> Dict[str, Any]:
    """
    Serialize a SolveResult into plain JSON types.

    Example:
        >>> solve_result_to_dict(result)["method"]
        'exact_system'
    """
    return {
        "constant": result.constant,
        "method": result.method.value,
        "constant_estimate": result.constant_estimate,
        "determinant": result.determinant,
        "coefficients": list(result.coefficients) if result.coefficients is not None else None,
        "deviations": [
            {
                "x": d.point.x,
                "y": d.point.y,
                "predicted": d.predicted,
                "deviation": d.deviation,
                "flagged": d.flagged,
            }
            for d in result.deviations
        ],
    }


def diagnostics_to_record(diagnostics: CaseDiagnostics) -> Dict[str, Any]:
    """
    Serialize CaseDiagnostics into a JSON-friendly dict (one JSONL line).

    y values are kept as ints; json handles the full 64-bit range.
    """
    return {
        "case_name": diagnostics.case_name,
        "status": diagnostics.status,
        "n": diagnostics.n,
        "k": diagnostics.k,
        "points": [[p.x, p.y] for p in diagnostics.points],
        "result": solve_result_to_dict(diagnostics.result) if diagnostics.result is not None else None,
        "error_type": diagnostics.error_type,
        "error_message": diagnostics.error_message,
    }

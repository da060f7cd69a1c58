"""
Core point types for the quadratic constant-term solver.

This module defines the sample representation shared by the decoder, the
solver and the runners.

Point:    one decoded sample (x, y) of the unknown polynomial
PointSet: ordered list of Point, in index order of discovery

x values need not be contiguous; gaps in the index sequence are expected.
"""

from dataclasses import dataclass
from typing import List, Sequence, TypeAlias


@dataclass(frozen=True)
class Point:
    """
    A decoded sample of f(x) = a*x^2 + b*x + c.

    Attributes:
        x: caller-assigned index (usually the record key, >= 1)
        y: value decoded from the record's base-encoded string
    """
    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


PointSet: TypeAlias = List[Point]


def make_point_set(pairs: Sequence[Sequence[int]]) -> PointSet:
    """
    Build a PointSet from (x, y) pairs, keeping their order.

    Args:
        pairs: sequence of 2-item (x, y) sequences

    Returns:
        List of Point in the same order

    Raises:
        ValueError: if any pair does not have exactly two items

    Example:
        >>> make_point_set([(1, 4), (2, 7)])
        [Point(x=1, y=4), Point(x=2, y=7)]
    """
    points = []
    for pair in pairs:
        if len(pair) != 2:
            raise ValueError(f"Expected (x, y) pair, got {pair!r}")
        x, y = pair
        points.append(Point(x=int(x), y=int(y)))
    return points


def format_points(points: Sequence[Point], max_shown: int = 5) -> List[str]:
    """
    Render points for console reports.

    Shows at most max_shown points and then a single "... and N more points"
    line for the remainder.

    Args:
        points: points to render
        max_shown: maximum number of points to list individually

    Returns:
        List of report lines (without indentation)
    """
    lines = [str(p) for p in points[:max_shown]]
    remaining = len(points) - max_shown
    if remaining > 0:
        lines.append(f"... and {remaining} more points")
    return lines


if __name__ == "__main__":
    pts = make_point_set([(1, 4), (2, 7), (3, 12), (6, 39)])
    for line in format_points(pts, max_shown=2):
        print(line)

    assert format_points(pts, max_shown=2)[-1] == "... and 2 more points"
    print("point_types self-test passed.")

"""
Test-case JSON IO utilities.

This module loads a quadratic test-case file and converts it into a
TestCase: the declared counts plus the ordered raw (index, base, value)
entries. Decoding the values is left to the solver.

Expected JSON structure:

test_case.json:
{
  "keys": {"n": 4, "k": 3},
  "1": {"base": "10", "value": "4"},
  "2": {"base": "2", "value": "111"},
  "3": {"base": "10", "value": "12"},
  "6": {"base": "4", "value": "213"}
}

Index keys may have gaps; entries come back sorted by numeric index.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List
import json


# Top-level key holding the declared counts
KEYS_FIELD = "keys"

# Largest index accepted as an x value (signed 64-bit)
MAX_INDEX = 2**63 - 1


class TestCaseFormatError(ValueError):
    """Raised when a test-case record does not match the expected layout."""
    # keep pytest from collecting this as a test class
    __test__ = False


@dataclass(frozen=True)
class RawEntry:
    """
    One undecoded sample as it appears in the record.

    Attributes:
        index: positive record key, used as x
        base: radix as written in the record (decimal digits, e.g. "16")
        value: digit string in that base
    """
    index: int
    base: str
    value: str


@dataclass
class TestCase:
    """
    A parsed test-case record.

    Attributes:
        n: declared number of entries (informational)
        k: declared k, passed through unchanged
        entries: raw entries sorted by index
    """
    __test__ = False

    n: int
    k: int
    entries: List[RawEntry] = field(default_factory=list)


def is_ascii_decimal(text: str) -> bool:
    """True for non-empty strings of ASCII digits 0-9 only."""
    return text.isascii() and text.isdecimal()


def _require_int(container: Dict[str, Any], key: str, where: str) -> int:
    if key not in container:
        raise TestCaseFormatError(f"Missing {key!r} in {where}")

    raw = container[key]
    if isinstance(raw, bool):
        raise TestCaseFormatError(f"{where}.{key} must be an integer, got {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and is_ascii_decimal(raw.strip()):
        return int(raw)
    raise TestCaseFormatError(f"{where}.{key} must be an integer, got {raw!r}")


def _parse_entry(key: str, raw: Any) -> RawEntry:
    significant = key.lstrip("0")
    if (
        not is_ascii_decimal(key)
        or len(significant) > len(str(MAX_INDEX))
        or not 1 <= int(significant or "0") <= MAX_INDEX
    ):
        raise TestCaseFormatError(
            f"Entry key must be a positive integer index up to {MAX_INDEX}, got {key!r}"
        )
    if not isinstance(raw, dict):
        raise TestCaseFormatError(f"Entry {key!r} must be an object, got {type(raw).__name__}")

    for name in ("base", "value"):
        if name not in raw:
            raise TestCaseFormatError(f"Entry {key!r} is missing {name!r}")

    base = raw["base"]
    if isinstance(base, int) and not isinstance(base, bool):
        base = str(base)
    if not isinstance(base, str) or not is_ascii_decimal(base):
        raise TestCaseFormatError(f"Entry {key!r} has non-numeric base {raw['base']!r}")

    value = raw["value"]
    if not isinstance(value, str):
        raise TestCaseFormatError(f"Entry {key!r} value must be a string, got {value!r}")

    return RawEntry(index=int(significant), base=base, value=value)


def parse_test_case(data: Dict[str, Any]) -> TestCase:
    """
    Convert an already-loaded JSON object into a TestCase.

    Args:
        data: top-level JSON object of a test-case file

    Returns:
        TestCase with entries sorted by index

    Raises:
        TestCaseFormatError: if keys, counts or entries are malformed
    """
    if not isinstance(data, dict):
        raise TestCaseFormatError(f"Test case must be a JSON object, got {type(data).__name__}")

    keys = data.get(KEYS_FIELD)
    if not isinstance(keys, dict):
        raise TestCaseFormatError(f"Missing or invalid {KEYS_FIELD!r} object")

    n = _require_int(keys, "n", KEYS_FIELD)
    k = _require_int(keys, "k", KEYS_FIELD)

    entries = [
        _parse_entry(key, raw)
        for key, raw in data.items()
        if key != KEYS_FIELD
    ]
    entries.sort(key=lambda e: e.index)

    seen = set()
    for entry in entries:
        if entry.index in seen:
            raise TestCaseFormatError(f"Duplicate entry index {entry.index}")
        seen.add(entry.index)

    return TestCase(n=n, k=k, entries=entries)


def load_test_case(path: Path) -> TestCase:
    """
    Load a test case from the given JSON file.

    Args:
        path: path to a test-case JSON file

    Returns:
        Parsed TestCase

    Raises:
        FileNotFoundError: if path does not exist
        TestCaseFormatError: if the file is not valid JSON or has the wrong layout

    Example:
        >>> case = load_test_case(Path("data/test_case_1.json"))
        >>> case.n, case.k, [e.index for e in case.entries]
        (4, 3, [1, 2, 3, 6])
    """
    with open(path, 'r', encoding="utf-8") as f:
        try:
            raw_data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise TestCaseFormatError(f"Invalid JSON in {path}: {e}") from e

    return parse_test_case(raw_data)


if __name__ == "__main__":
    # Self-test: load and inspect the bundled sample
    case_path = Path("data/test_case_1.json")

    print(f"Loading {case_path}...")
    case = load_test_case(case_path)
    print(f"  n={case.n}, k={case.k}")
    for entry in case.entries:
        print(f"  index {entry.index}: base={entry.base}, value={entry.value}")

"""
Smoke tests for test-case JSON loading.

Verifies that load_test_case / parse_test_case extract n, k and the raw
entries (sorted by index, gaps allowed) and reject malformed records with
TestCaseFormatError.
"""

import json
import tempfile
from pathlib import Path

from quadsolve.core.case_io import (
    RawEntry,
    TestCaseFormatError,
    load_test_case,
    parse_test_case,
)


REPO_ROOT = Path(__file__).resolve().parents[2]
DATA_DIR = REPO_ROOT / "data"


def _expect_format_error(data, label: str) -> None:
    try:
        parse_test_case(data)
        raise AssertionError(f"Should have raised TestCaseFormatError for {label}")
    except TestCaseFormatError as e:
        print(f"  ✓ Correctly rejected {label}: {e}")


def test_load_sample_case_1():
    """Bundled sample: n=4, k=3, entries 1, 2, 3, 6."""
    print("\n" + "=" * 70)
    print("TEST: load data/test_case_1.json")
    print("=" * 70)

    case = load_test_case(DATA_DIR / "test_case_1.json")

    assert case.n == 4
    assert case.k == 3
    assert case.entries == [
        RawEntry(index=1, base="10", value="4"),
        RawEntry(index=2, base="2", value="111"),
        RawEntry(index=3, base="10", value="12"),
        RawEntry(index=6, base="4", value="213"),
    ]

    print("  ✓ test_load_sample_case_1: PASSED")


def test_entries_sorted_numerically_with_gaps():
    data = {
        "12": {"base": "8", "value": "511"},
        "keys": {"n": 3, "k": 2},
        "2": {"base": "16", "value": "13"},
        "25": {"base": "10", "value": "7"},
    }
    case = parse_test_case(data)
    assert [e.index for e in case.entries] == [2, 12, 25]


def test_integer_fields_accepted():
    """Integer base and string counts are normalized."""
    case = parse_test_case({
        "keys": {"n": "1", "k": "1"},
        "1": {"base": 16, "value": "ff"},
    })
    assert (case.n, case.k) == (1, 1)
    assert case.entries == [RawEntry(index=1, base="16", value="ff")]


def test_keys_only_case_has_no_entries():
    case = parse_test_case({"keys": {"n": 0, "k": 0}})
    assert case.entries == []


def test_malformed_records_rejected():
    print("\n" + "=" * 70)
    print("TEST: malformed records")
    print("=" * 70)

    _expect_format_error([], "non-object record")
    _expect_format_error({"1": {"base": "10", "value": "4"}}, "missing keys")
    _expect_format_error({"keys": {"k": 3}}, "missing n")
    _expect_format_error({"keys": {"n": "four", "k": 3}}, "non-integer n")
    _expect_format_error({"keys": {"n": True, "k": 3}}, "boolean n")
    _expect_format_error(
        {"keys": {"n": 1, "k": 1}, "x": {"base": "10", "value": "4"}}, "non-numeric index"
    )
    _expect_format_error(
        {"keys": {"n": 1, "k": 1}, "0": {"base": "10", "value": "4"}}, "zero index"
    )
    _expect_format_error({"keys": {"n": 1, "k": 1}, "1": "4"}, "non-object entry")
    _expect_format_error({"keys": {"n": 1, "k": 1}, "1": {"value": "4"}}, "missing base")
    _expect_format_error({"keys": {"n": 1, "k": 1}, "1": {"base": "10"}}, "missing value")
    _expect_format_error(
        {"keys": {"n": 1, "k": 1}, "1": {"base": "1a", "value": "4"}}, "non-numeric base"
    )
    _expect_format_error(
        {"keys": {"n": 1, "k": 1}, "1": {"base": "10", "value": 4}}, "non-string value"
    )


def test_oversized_index_rejected():
    """Indices beyond the signed 64-bit range never reach the solver."""
    for key in ["1" + "0" * 200, "9223372036854775808", "0" * 5000 + "1" + "0" * 30]:
        _expect_format_error(
            {"keys": {"n": 1, "k": 1}, key: {"base": "10", "value": "4"}},
            f"index with {len(key)} digits",
        )

    case = parse_test_case({
        "keys": {"n": 2, "k": 1},
        "9223372036854775807": {"base": "10", "value": "4"},
        "0007": {"base": "10", "value": "5"},
    })
    assert [e.index for e in case.entries] == [7, 9223372036854775807]


def test_duplicate_numeric_index_rejected():
    """Keys "1" and "01" name the same x."""
    _expect_format_error(
        {
            "keys": {"n": 2, "k": 1},
            "1": {"base": "10", "value": "4"},
            "01": {"base": "10", "value": "9"},
        },
        "duplicate index",
    )


def test_non_ascii_digits_rejected():
    """Only ASCII 0-9 count as decimal digits in keys, bases and counts."""
    _expect_format_error(
        {"keys": {"n": 1, "k": 1}, "1": {"base": "\u0661\u0666", "value": "4"}},
        "Arabic-Indic base",
    )
    _expect_format_error(
        {"keys": {"n": 1, "k": 1}, "\u0661": {"base": "10", "value": "4"}},
        "Arabic-Indic index",
    )
    _expect_format_error({"keys": {"n": "\u0664", "k": 1}}, "Arabic-Indic n")


def test_invalid_json_file():
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "broken.json"
        path.write_text('{"keys": {"n": 1,', encoding="utf-8")

        try:
            load_test_case(path)
            raise AssertionError("Should have raised TestCaseFormatError for broken JSON")
        except TestCaseFormatError as e:
            assert isinstance(e.__cause__, json.JSONDecodeError)


def test_missing_file():
    try:
        load_test_case(DATA_DIR / "does_not_exist.json")
        raise AssertionError("Should have raised FileNotFoundError")
    except FileNotFoundError:
        pass


if __name__ == "__main__":
    test_load_sample_case_1()
    test_entries_sorted_numerically_with_gaps()
    test_integer_fields_accepted()
    test_keys_only_case_has_no_entries()
    test_malformed_records_rejected()
    test_oversized_index_rejected()
    test_duplicate_numeric_index_rejected()
    test_non_ascii_digits_rejected()
    test_invalid_json_file()
    test_missing_file()

    print("\n✓ All case_io tests passed")

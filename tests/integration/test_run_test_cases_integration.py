"""
Integration tests for the multi-case runner.

These tests drive run_test_cases / main end to end over the bundled
sample files plus a deliberately broken file, and verify:
  - every case is processed even when one fails
  - the JSONL results log gets one record per case
  - the exit status reflects failures
"""

import json
import tempfile
from pathlib import Path

from quadsolve.runners.run_test_cases import DEFAULT_CASE_PATHS, main, run_test_cases


REPO_ROOT = Path(__file__).resolve().parents[2]
CASE_1 = REPO_ROOT / "data" / "test_case_1.json"
CASE_2 = REPO_ROOT / "data" / "test_case_2.json"


def test_failure_isolated_between_cases():
    """A bad case in the middle does not stop the cases after it."""
    print("\n" + "=" * 70)
    print("RUNNER INTEGRATION TEST: failure isolation")
    print("=" * 70)

    with tempfile.TemporaryDirectory() as tmp:
        tmp_dir = Path(tmp)
        bad_case = tmp_dir / "bad_case.json"
        bad_case.write_text(json.dumps({
            "keys": {"n": 1, "k": 1},
            "1": {"base": "10", "value": "z"},
        }), encoding="utf-8")
        results_log = tmp_dir / "logs" / "results.jsonl"

        diagnostics = run_test_cases(
            [CASE_1, bad_case, CASE_2],
            results_log_path=results_log,
            max_points_shown=2,
        )

        assert [d.status for d in diagnostics] == ["ok", "error", "ok"]
        assert [d.constant for d in diagnostics] == [3, None, 5]
        assert diagnostics[1].error_type == "InvalidDigitError"

        lines = results_log.read_text(encoding="utf-8").splitlines()
        records = [json.loads(line) for line in lines]

    assert len(records) == 3
    assert [r["case_name"] for r in records] == [
        "test_case_1.json", "bad_case.json", "test_case_2.json",
    ]
    assert records[0]["result"]["constant"] == 3
    assert records[1]["result"] is None
    assert records[2]["result"]["constant"] == 5

    print("✓ Failure isolation integration test passed")


def test_oversized_index_does_not_abort_run():
    """A record keyed far beyond 64 bits fails alone; the next case still runs."""
    with tempfile.TemporaryDirectory() as tmp:
        tmp_dir = Path(tmp)
        huge_index = tmp_dir / "huge_index.json"
        huge_index.write_text(json.dumps({
            "keys": {"n": 1, "k": 1},
            "1" + "0" * 200: {"base": "10", "value": "5"},
        }), encoding="utf-8")
        results_log = tmp_dir / "results.jsonl"

        diagnostics = run_test_cases([huge_index, CASE_1], results_log_path=results_log)

        assert [d.status for d in diagnostics] == ["error", "ok"]
        assert diagnostics[0].error_type == "TestCaseFormatError"
        assert diagnostics[1].constant == 3

        lines = results_log.read_text(encoding="utf-8").splitlines()

    assert len(lines) == 2


def test_default_cases_found_outside_repo_root(monkeypatch, tmp_path):
    """Bundled defaults resolve against the repository, not the working directory."""
    monkeypatch.chdir(tmp_path)

    assert all(path.is_absolute() for path in DEFAULT_CASE_PATHS)
    assert main([]) == 0


def test_main_exit_status():
    assert main([str(CASE_1), str(CASE_2)]) == 0

    with tempfile.TemporaryDirectory() as tmp:
        missing = Path(tmp) / "missing.json"
        assert main([str(CASE_1), str(missing)]) == 1


def test_report_truncates_point_list(capsys):
    run_test_cases([CASE_2], max_points_shown=2)

    out = capsys.readouterr().out
    assert "Found 6 points:" in out
    assert "(1, 10)" in out
    assert "(2, 19)" in out
    assert "  (4, 49)\n" not in out
    assert "... and 4 more points" in out
    assert "Constant c for test_case_2.json: 5" in out


if __name__ == "__main__":
    test_failure_isolated_between_cases()
    test_oversized_index_does_not_abort_run()
    test_main_exit_status()
    print("\n✓ All runner integration tests passed")

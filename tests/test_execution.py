import sys
import tempfile
import unittest
from pathlib import Path

from karate_action.execution import (
    CmdResult,
    build_karate_command,
    evaluate_run,
    find_java,
    run_cmd,
    run_karate,
    split_test_files,
)


def _result(exit_code: int, stdout: str) -> CmdResult:
    return CmdResult(exit_code=exit_code, elapsed_seconds=0.1, command_str="java -jar karate.jar", stdout=stdout, stderr="")


class TestKarateCommand(unittest.TestCase):
    def test_build_command(self) -> None:
        cmd = build_karate_command(
            java_bin="/usr/bin/java",
            jar_name="karate.jar",
            test_files=["A.feature", "B.feature"],
            base_url="https://httpstat.us",
            auth_token="token123",
        )
        self.assertEqual(
            [
                "/usr/bin/java",
                "-DbaseUrl=https://httpstat.us",
                "-DAuthorization=token123",
                "-jar",
                "karate.jar",
                "A.feature",
                "B.feature",
            ],
            cmd,
        )

    def test_split_test_files(self) -> None:
        self.assertEqual(["A.feature", "B.feature"], split_test_files(" A.feature, ,B.feature "))
        self.assertEqual([], split_test_files(""))


class TestEvaluateRun(unittest.TestCase):
    def test_passes_with_exit_zero_and_marker(self) -> None:
        v = evaluate_run(_result(0, "scenarios:  1 | passed:  1 | failed:  0 | time: 0.5"))
        self.assertTrue(v.passed)

    def test_fails_without_marker(self) -> None:
        with self.assertLogs("karate_action.execution", level="ERROR") as cm:
            v = evaluate_run(_result(0, "scenarios:  1 | passed:  0 | failed:  1"))
        self.assertFalse(v.passed)
        self.assertTrue(v.exit_ok)
        self.assertFalse(v.marker_found)
        self.assertIn("Marking as failed due to missing pass confirmation", [r.getMessage() for r in cm.records])

    def test_marker_needs_two_spaces(self) -> None:
        with self.assertLogs("karate_action.execution", level="ERROR"):
            self.assertFalse(evaluate_run(_result(0, "failed: 0")).passed)

    def test_fails_on_non_zero_exit_even_with_marker(self) -> None:
        with self.assertLogs("karate_action.execution", level="INFO") as cm:
            v = evaluate_run(_result(1, "failed:  0"))
        self.assertFalse(v.passed)
        self.assertFalse(v.exit_ok)
        self.assertTrue(v.marker_found)
        self.assertEqual(["Output received: failed:  0"], [r.getMessage() for r in cm.records])


class TestRunCmd(unittest.TestCase):
    def test_run_cmd_captures_output(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            res = run_cmd(
                [sys.executable, "-c", "import os, sys; print(os.getcwd()); sys.stderr.write('err'); sys.exit(3)"],
                cwd=Path(td),
            )
            self.assertEqual(3, res.exit_code)
            self.assertEqual(Path(td).resolve(), Path(res.stdout.strip()).resolve())
            self.assertEqual("err", res.stderr)

    def test_run_karate_returns_verdict(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            res, verdict = run_karate([sys.executable, "-c", "print('passed:  2 | failed:  0')"], cwd=Path(td))
            self.assertEqual(0, res.exit_code)
            self.assertTrue(verdict.passed)

    def test_run_cmd_logs_failed_command(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertLogs("karate_action.execution.cmd", level="ERROR") as cm:
                res = run_cmd([sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(2)"], cwd=Path(td))
        self.assertFalse(res.ok)
        messages = [r.getMessage() for r in cm.records]
        self.assertTrue(messages[0].startswith("Error executing command: "))
        self.assertEqual("Stderr: boom", messages[1])

    def test_find_java(self) -> None:
        self.assertEqual(sys.executable, find_java(sys.executable))
        with self.assertRaisesRegex(FileNotFoundError, "Karate needs a JRE"):
            find_java("definitely-not-a-real-java-xyz")


if __name__ == "__main__":
    unittest.main()

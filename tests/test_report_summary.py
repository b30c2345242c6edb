import json
import tempfile
import unittest
from pathlib import Path
from typing import Any, Dict, List, Optional

from karate_action.report import (
    FAIL_ICON,
    PASS_ICON,
    RenderedSummary,
    SummarySink,
    qualified_name_for,
    render_summary,
    summary_path,
)


class RecordingSink(SummarySink):
    def __init__(self) -> None:
        self.emitted: List[RenderedSummary] = []

    def emit(self, summary: RenderedSummary) -> None:
        self.emitted.append(summary)


def _write_summary(base_dir: Path, data: Any) -> Path:
    p = summary_path(base_dir)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    return p


def _write_detail(base_dir: Path, qname: str, scenarios: List[Dict[str, Any]]) -> None:
    p = summary_path(base_dir).parent / f"{qname}.karate-json.txt"
    p.write_text(json.dumps({"scenarioResults": scenarios}), encoding="utf-8")


def _feature(name: str, failed: int, *, passed: int = 1, qname: Optional[str] = None) -> Dict[str, Any]:
    return {
        "relativePath": f"features/{name}.feature",
        "packageQualifiedName": qname or f"features.{name}",
        "name": name,
        "durationMillis": 1234.56,
        "passedCount": passed,
        "failedCount": failed,
    }


class TestRenderSummary(unittest.TestCase):
    def test_pass_and_fail_glyphs(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            base = Path(td)
            _write_summary(base, {"featureSummary": [_feature("users", 0), _feature("orders", 1, passed=0)]})
            sink = RecordingSink()

            out = render_summary(base, sink=sink, include_details=False)

            self.assertIsNotNone(out)
            self.assertEqual([out], sink.emitted)
            self.assertEqual(2, len(out.rows))
            status_col = out.header.index("Status")
            self.assertEqual(PASS_ICON, out.rows[0][status_col])
            self.assertEqual(FAIL_ICON, out.rows[1][status_col])
            self.assertEqual(["users", "", "1234", "1", "0", PASS_ICON, ""], out.rows[0])
            self.assertIn("## Test Results", out.markdown)
            self.assertIn("| users |  | 1234 | 1 | 0 | ✅ |  |", out.markdown)

    def test_missing_summary_logs_once_and_returns_none(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            base = Path(td) / "invalid" / "base"
            sink = RecordingSink()

            with self.assertLogs("karate_action.report", level="DEBUG") as cm:
                out = render_summary(base, sink=sink)

            self.assertIsNone(out)
            self.assertEqual([], sink.emitted)
            self.assertEqual(1, len(cm.records))
            self.assertEqual(
                f"Summary file {summary_path(base)} does not exist.", cm.records[0].getMessage()
            )

    def test_empty_content_is_treated_as_absent(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            base = Path(td)
            _write_summary(base, "  \n")
            with self.assertLogs("karate_action.report", level="ERROR") as cm:
                self.assertIsNone(render_summary(base))
            self.assertEqual(["No content found in summary file."], [r.getMessage() for r in cm.records])

    def test_feature_summary_not_a_list(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            base = Path(td)
            _write_summary(base, {"featureSummary": "notAnArray"})
            sink = RecordingSink()
            with self.assertLogs("karate_action.report", level="ERROR") as cm:
                self.assertIsNone(render_summary(base, sink=sink))
            self.assertEqual([], sink.emitted)
            self.assertEqual(
                ["featureSummary is not an array or not found in the summary data."],
                [r.getMessage() for r in cm.records],
            )

    def test_invalid_json_is_logged_not_raised(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            base = Path(td)
            _write_summary(base, "{not json")
            with self.assertLogs("karate_action.report", level="ERROR"):
                self.assertIsNone(render_summary(base))

    def test_undecodable_summary_is_logged_not_raised(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            base = Path(td)
            p = _write_summary(base, "")
            p.write_bytes(b"\xff\xfe")
            sink = RecordingSink()
            with self.assertLogs("karate_action.report", level="DEBUG") as cm:
                self.assertIsNone(render_summary(base, sink=sink))
            self.assertEqual([], sink.emitted)
            self.assertEqual(1, len(cm.records))
            self.assertEqual("ERROR", cm.records[0].levelname)
            self.assertTrue(cm.records[0].getMessage().startswith(f"Could not read summary file {p}: "))

    def test_empty_feature_list_renders_empty_table_without_errors(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            base = Path(td)
            _write_summary(base, {"featureSummary": []})
            out = render_summary(base)
            self.assertIsNotNone(out)
            self.assertEqual([], out.rows)

    def test_one_failing_detail_lookup_only_empties_that_feature(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            base = Path(td)
            _write_summary(
                base,
                {
                    "featureSummary": [
                        _feature("a", 1, passed=0),
                        _feature("b", 2, passed=0),
                        _feature("c", 1, passed=3),
                    ]
                },
            )
            _write_detail(base, "features.a", [{"name": "sa", "failed": True, "error": "boom a"}])
            _write_detail(
                base,
                "features.c",
                [
                    {"name": "ok", "failed": False, "error": ""},
                    {"name": "sc", "failed": True, "error": "status 500\nexpected 200"},
                ],
            )
            # features.b detail file is corrupt
            (summary_path(base).parent / "features.b.karate-json.txt").write_text("{", encoding="utf-8")

            with self.assertLogs("karate_action.report", level="WARNING"):
                out = render_summary(base)

            by_name = {f.name: f for f in out.features}
            self.assertEqual(["sa"], [e.name for e in by_name["a"].scenario_errors])
            self.assertEqual([], by_name["b"].scenario_errors)
            self.assertEqual(["sc"], [e.name for e in by_name["c"].scenario_errors])
            self.assertEqual("status 500\nexpected 200", by_name["c"].scenario_errors[0].error)

            # one row per failed scenario, one row for the feature without details
            self.assertEqual(3, len(out.rows))
            self.assertEqual(["c", "sc", "1234", "3", "1", FAIL_ICON, "status 500\nexpected 200"], out.rows[2])
            self.assertIn("| c | sc | 1234 | 3 | 1 | ❌ | status 500<br>expected 200 |", out.markdown)

    def test_non_object_entries_are_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            base = Path(td)
            _write_summary(base, {"featureSummary": ["junk", _feature("a", 0)]})
            out = render_summary(base, include_details=False)
            self.assertEqual(["a"], [f.name for f in out.features])

    def test_raw_json_block_is_optional(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            base = Path(td)
            _write_summary(base, {"featureSummary": [_feature("a", 0)], "version": "1.4.1"})
            self.assertNotIn("```json", render_summary(base).markdown)
            self.assertIn("```json", render_summary(base, include_raw_json=True).markdown)

    def test_unexpected_sink_failure_is_logged_and_raised(self) -> None:
        class BrokenSink(SummarySink):
            def emit(self, summary: RenderedSummary) -> None:
                raise RuntimeError("sink down")

        with tempfile.TemporaryDirectory() as td:
            base = Path(td)
            _write_summary(base, {"featureSummary": [_feature("a", 0)]})
            with self.assertLogs("karate_action.report", level="ERROR") as cm:
                with self.assertRaises(RuntimeError):
                    render_summary(base, sink=BrokenSink())
            self.assertEqual("Error generating test summary", cm.records[-1].getMessage())


class TestQualifiedName(unittest.TestCase):
    def test_prefers_package_qualified_name(self) -> None:
        self.assertEqual("x.y", qualified_name_for({"packageQualifiedName": "x.y", "relativePath": "a/b.feature"}))

    def test_falls_back_to_relative_path(self) -> None:
        self.assertEqual("features.users.get", qualified_name_for({"relativePath": "features/users/get.feature"}))
        self.assertEqual("", qualified_name_for({}))


if __name__ == "__main__":
    unittest.main()

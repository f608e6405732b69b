"""Tests for sinks and the JSON reporter."""

import io
import json

from unity_runner.output.json_reporter import JsonReporter
from unity_runner.output.sink import CollectingSink, ConsoleSink


def test_console_sink_writes_messages_and_tracebacks():
    out, err = io.StringIO(), io.StringIO()
    sink = ConsoleSink(out=out, err=err, prefix="[unity] ")

    sink.log("Building")
    try:
        raise OSError("disk full")
    except OSError as e:
        sink.log_exception(e)

    assert out.getvalue() == "[unity] Building\n"
    assert "[unity] ERROR: OSError: disk full" in err.getvalue()
    assert "Traceback" in err.getvalue()


def test_collecting_sink_forwards():
    inner = CollectingSink()
    sink = CollectingSink(forward=inner)

    sink.log("a")
    sink.log_exception(ValueError("b"))

    assert inner.messages == ["a"]
    assert len(sink.exceptions) == len(inner.exceptions) == 1


def test_failed_report_message_prefers_error(tmp_path):
    reporter = JsonReporter()
    report = reporter.generate("Unity", ["-quit"], exit_code=None, error="Timeout: 5s")

    flow = reporter.generate_flow_output(report, report_path="r.json")

    assert flow["success"] is False
    assert flow["message"] == "Build failed: Timeout: 5s"
    assert flow["data"]["report_path"] == "r.json"

    saved = reporter.save(report, tmp_path / "nested" / "r.json")
    assert json.loads(saved.read_text(encoding="utf-8")) == report
    assert json.loads(reporter.to_json_string(report, pretty=False)) == report

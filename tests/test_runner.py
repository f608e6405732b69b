"""Tests for UnityRunner orchestration."""

import pytest

from unity_runner.config.schema import RunConfiguration
from unity_runner.runner.unity_runner import RunnerState, UnityRunner

from .conftest import append, wait_until


def _stop(runner):
    runner.stop()
    runner.tailer.join(timeout=2)


def test_start_deletes_stale_log_and_follows_new_output(make_config, log_file, sink):
    append(log_file, "stale line from last run\n")
    runner = UnityRunner(make_config(), sink, poll_interval=0.01)

    runner.start()
    try:
        assert runner.state is RunnerState.STARTED
        assert not wait_until(lambda: "stale line from last run" in sink.messages, timeout=0.1)
        append(log_file, "Building player\n")
        assert wait_until(lambda: "Building player" in sink.messages)
    finally:
        _stop(runner)

    assert sink.messages[:3] == [
        "[Starting UnityRunner]",
        "[delete old log file]",
        f"[tailing log file: {log_file}]",
    ]
    assert runner.line_count == 1


def test_stop_messages_and_state(make_config, sink):
    runner = UnityRunner(make_config(), sink, poll_interval=0.01)
    runner.start()
    _stop(runner)

    assert runner.state is RunnerState.STOPPED
    assert sink.messages[-2:] == ["[log tail process end]", "[Stop UnityRunner]"]
    assert runner.tailer.stop_requested


def test_stop_before_start_raises(make_config, sink):
    with pytest.raises(RuntimeError):
        UnityRunner(make_config(), sink).stop()


def test_clear_before_prepares_output(make_config, tmp_path, sink):
    out = tmp_path / "Build"
    out.mkdir()
    (out / "old.bin").write_text("x")
    runner = UnityRunner(make_config(clear_before=True), sink, poll_interval=0.01)

    runner.start()
    _stop(runner)

    assert out.is_dir()
    assert list(out.iterdir()) == []


def test_clear_before_off_leaves_output(make_config, tmp_path, sink):
    out = tmp_path / "Build"
    out.mkdir()
    (out / "old.bin").write_text("x")
    runner = UnityRunner(make_config(), sink, poll_interval=0.01)

    runner.start()
    _stop(runner)

    assert (out / "old.bin").exists()


def test_marker_from_configuration(make_config, log_file, sink):
    config = make_config(ignore_log_before=True, ignore_log_before_text="[Build] begin")
    runner = UnityRunner(config, sink, poll_interval=0.01)

    runner.start()
    try:
        append(log_file, "license check\n[Build] begin\ncompiling\n")
        assert wait_until(lambda: "compiling" in sink.messages)
    finally:
        _stop(runner)

    assert "license check" not in sink.messages
    assert "[Build] begin" not in sink.messages


@pytest.mark.parametrize("clean_after,meta_left", [(True, False), (False, True)])
def test_cleanup_after_only_when_enabled(make_config, tmp_path, sink, clean_after, meta_left):
    out = tmp_path / "Build"
    out.mkdir()
    (out / "game.exe.meta").write_text("x")
    runner = UnityRunner(make_config(clean_after=clean_after), sink, poll_interval=0.01)

    runner.start()
    _stop(runner)
    runner.optionally_cleanup_after()

    assert (out / "game.exe.meta").exists() is meta_left
    assert runner.state is RunnerState.CLEANED_UP


def test_launch_command(make_config, sink):
    runner = UnityRunner(make_config(execute_method="Builds.Run"), sink)

    assert runner.get_executable() == "/opt/unity/Editor/Unity"
    args = runner.get_args()
    assert args[args.index("-executeMethod") + 1] == "Builds.Run"


def test_cleanup_without_build_path_leaves_working_directory(tmp_path, log_file, sink, monkeypatch):
    work = tmp_path / "work"
    (work / ".git").mkdir(parents=True)
    (work / ".git" / "HEAD").write_text("ref")
    (work / "Assets.meta").write_text("x")
    (work / "precious.txt").write_text("keep")
    monkeypatch.chdir(work)
    config = RunConfiguration(clear_before=True, clean_after=True, log_path=str(log_file))
    runner = UnityRunner(config, sink, poll_interval=0.01)

    runner.start()
    _stop(runner)
    runner.optionally_cleanup_after()

    assert (work / "precious.txt").exists()
    assert (work / ".git" / "HEAD").exists()
    assert (work / "Assets.meta").exists()
    assert sink.exceptions == []


def test_nothing_reaches_sink_after_stop(make_config, sink):
    runner = UnityRunner(make_config(), sink, poll_interval=0.001)
    runner.start()
    assert wait_until(lambda: "[waiting for log file]" in sink.messages)

    runner.stop()
    runner.tailer.join(timeout=2)

    assert sink.messages[-1] == "[Stop UnityRunner]"

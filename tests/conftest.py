"""Shared fixtures for unity_runner tests."""

import time

import pytest

from unity_runner.config.schema import RunConfiguration
from unity_runner.output.sink import CollectingSink


@pytest.fixture
def sink():
    return CollectingSink()


@pytest.fixture
def log_file(tmp_path):
    return tmp_path / "Logs" / "Editor.log"


@pytest.fixture
def make_config(tmp_path, log_file):
    """Build a RunConfiguration pointing at tmp_path."""
    def _make(**overrides):
        values = {
            "unity_path": "/opt/unity/Editor/Unity",
            "project_path": str(tmp_path / "Game"),
            "build_path": str(tmp_path / "Build"),
            "log_path": str(log_file),
        }
        values.update(overrides)
        return RunConfiguration(**values)
    return _make


def wait_until(predicate, timeout=5.0, interval=0.01):
    """Poll predicate until it is true or timeout expires."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


def append(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8", newline="") as f:
        f.write(text)

"""Tests for command line assembly."""

import pytest

from unity_runner.config.schema import RunConfiguration
from unity_runner.runner.args import build_args, resolve_executable


FULL = dict(
    batch_mode=True,
    no_graphics=True,
    quit=True,
    unity_serial="SN-1234",
    build_player="buildWindows64Player",
    build_path="C:/Build/Win64",
    project_path="C:/Game",
    execute_method="Builds.PerformBuild",
    build_target="Win64",
    use_cleaned_log=True,
    log_path="C:/Logs/unity.log",
    extra_opts="-force-free",
)


def test_full_configuration_order():
    config = RunConfiguration(**FULL)
    args = build_args(config)

    assert args == [
        "-batchmode",
        "-nographics",
        "-quit",
        "-serial", "SN-1234",
        "-buildWindows64Player", "C:/Build/Win64",
        "-projectPath", "C:/Game",
        "-executeMethod", "Builds.PerformBuild",
        "-buildTarget", "Win64",
        "-cleanedLogFile", config.cleaned_log_path,
        "-force-free",
    ]


def test_minimal_configuration_keeps_empty_extra_opts():
    config = RunConfiguration(batch_mode=False, quit=False)

    assert build_args(config) == [""]


@pytest.mark.parametrize("field_name,token", [
    ("batch_mode", "-batchmode"),
    ("no_graphics", "-nographics"),
    ("quit", "-quit"),
    ("use_cleaned_log", "-cleanedLogFile"),
])
def test_boolean_flags_appear_once_only_when_set(field_name, token):
    on = build_args(RunConfiguration(**{**FULL, field_name: True}))
    off = build_args(RunConfiguration(**{**FULL, field_name: False}))

    assert on.count(token) == 1
    assert token not in off


@pytest.mark.parametrize("field_name,token", [
    ("unity_serial", "-serial"),
    ("project_path", "-projectPath"),
    ("execute_method", "-executeMethod"),
    ("build_target", "-buildTarget"),
    ("build_player", "-buildWindows64Player"),
])
def test_valued_options_skipped_when_empty(field_name, token):
    args = build_args(RunConfiguration(**{**FULL, field_name: ""}))

    assert token not in args
    assert args[-1] == "-force-free"


def test_value_follows_its_flag():
    args = build_args(RunConfiguration(**FULL))

    assert args[args.index("-projectPath") + 1] == "C:/Game"
    assert args[args.index("-serial") + 1] == "SN-1234"


def test_build_player_without_path_still_passes_empty_value():
    args = build_args(RunConfiguration(build_player="buildLinux64Player"))

    i = args.index("-buildLinux64Player")
    assert args[i + 1] == ""


def test_extra_opts_passed_verbatim_as_single_token():
    args = build_args(RunConfiguration(extra_opts="-logFile - -accept-apiupdate"))

    assert args[-1] == "-logFile - -accept-apiupdate"


def test_resolve_executable_logs_version_and_path(sink):
    config = RunConfiguration(unity_version="2022.3.10f1", unity_path="/opt/Unity")

    assert resolve_executable(config, sink) == "/opt/Unity"
    assert sink.messages == [
        "Unity version requested: 2022.3.10f1",
        "Unity executable path: /opt/Unity",
    ]

import argparse
import logging

import pytest

from blink_twenty.config import Settings, INTERVAL_MS, REST_DURATION_MS, RESET_THRESHOLD_MS, FAST_ENV_VAR
from blink_twenty.errors import InvalidConfiguration
from blink_twenty.__main__ import build_parser, main


def _args(*argv):
    return build_parser().parse_args(list(argv))


def test_defaults_follow_twenty_twenty_twenty() -> None:
    settings = Settings.from_args(_args(), environ={})
    assert settings.interval_ms == INTERVAL_MS == 20 * 60 * 1000
    assert settings.rest_duration_ms == REST_DURATION_MS == 20 * 1000
    assert settings.reset_threshold_ms == RESET_THRESHOLD_MS == 5 * 60 * 1000
    assert settings.rest_steps == 20
    assert not settings.fast
    assert not settings.allow_skip


def test_fast_flag_uses_short_durations() -> None:
    settings = Settings.from_args(_args("--fast"), environ={})
    assert (settings.interval_ms, settings.rest_duration_ms, settings.reset_threshold_ms) == (10000, 5000, 2000)
    assert settings.fast


def test_fast_env_var() -> None:
    assert Settings.from_args(_args(), environ={FAST_ENV_VAR: "1"}).fast
    assert not Settings.from_args(_args(), environ={FAST_ENV_VAR: "0"}).fast


def test_overrides_and_flags() -> None:
    settings = Settings.from_args(
        _args("--interval-min", "30", "--rest-sec", "10", "--reset-min", "1.5", "--allow-skip", "--language", "zh"),
        environ={},
    )
    assert settings.interval_ms == 30 * 60 * 1000
    assert settings.rest_duration_ms == 10000
    assert settings.reset_threshold_ms == 90000
    assert settings.allow_skip
    assert settings.language == "zh"


@pytest.mark.parametrize(
    "values",
    [
        {"interval_ms": 0},
        {"rest_duration_ms": -5},
        {"reset_threshold_ms": 0},
        {"rest_duration_ms": 500},
    ],
)
def test_validate_rejects_bad_values(values) -> None:
    with pytest.raises(InvalidConfiguration):
        Settings(**values).validate()


def test_from_args_rejects_non_positive_interval() -> None:
    with pytest.raises(InvalidConfiguration):
        Settings.from_args(argparse.Namespace(interval_min=0), environ={})


@pytest.fixture
def quiet_logger(monkeypatch):
    monkeypatch.setattr("blink_twenty.__main__.setup_logger", lambda: logging.getLogger("BlinkTwentyTest"))


@pytest.mark.parametrize("flag", ["--rest-sec", "--interval-min", "--reset-min"])
@pytest.mark.parametrize("value", ["inf", "nan", "1e308"])
def test_non_finite_overrides_are_rejected(flag, value) -> None:
    with pytest.raises(InvalidConfiguration):
        Settings.from_args(_args(flag, value), environ={})


def test_main_exits_with_status_2_on_bad_config(quiet_logger, capsys) -> None:
    assert main(["--rest-sec", "0"]) == 2
    assert "invalid configuration" in capsys.readouterr().err


def test_main_rejects_infinite_rest_without_traceback(quiet_logger, capsys) -> None:
    assert main(["--rest-sec", "inf"]) == 2
    assert "must be finite" in capsys.readouterr().err

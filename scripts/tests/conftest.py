"""Pytest fixtures for routing and bd invocation tests."""

import pytest

import log
from tests.test_utils import TestTownEnvironment


@pytest.fixture(autouse=True)
def isolated_log(tmp_path_factory, monkeypatch):
    """Keep route_log output out of the real ~/.flow directory."""
    log_home = tmp_path_factory.mktemp("beadroute_home")
    monkeypatch.setattr(log, "BEADROUTE_HOME", log_home)
    monkeypatch.setattr(log, "LOG_FILE", log_home / "route.log")
    monkeypatch.setattr(log, "first_line", True)
    log.route_log_clear()
    yield log_home / "route.log"
    log.route_log_print()


@pytest.fixture(scope="function")
def town(tmp_path, monkeypatch):
    """Town with hq-/gt-/tr- routes and an initialized testrig store."""
    env = TestTownEnvironment(tmp_path)
    monkeypatch.setenv("FAKE_BD_CALLS", str(env.calls_file))
    monkeypatch.delenv("BEADS_DIR", raising=False)
    env.setup()
    print(f"Test town set up at: {env.town_root}")
    return env

"""Tests for StoreInvoker — bd runs in the context directory, never the caller's."""

import os
import sys

import pytest

import conf
from bd_store import StoreContext, StoreInvoker
from routing import (
    ContextMissingError,
    StoreCommandError,
    StoreExecutableNotFoundError,
    StoreTimeoutError,
)
from tests.test_utils import FAKE_BD_COMMAND


@pytest.fixture
def store_dir(tmp_path):
    d = tmp_path / "store"
    d.mkdir()
    return d


@pytest.fixture
def calls_file(tmp_path, monkeypatch):
    path = tmp_path / "calls.jsonl"
    monkeypatch.setenv("FAKE_BD_CALLS", str(path))
    return path


def _python_invoker(**kwargs) -> StoreInvoker:
    """Invoker whose 'bd' is ``python -c <code>``; operation becomes sys.argv[1]."""
    return StoreInvoker(command=[sys.executable, "-c", kwargs.pop("code")], **kwargs)


class TestBuildArgv:
    def test_argv(self):
        invoker = StoreInvoker(command=["bd"])
        assert invoker.build_argv("show", ["tr-1", "--json"]) == ["bd", "show", "tr-1", "--json"]

    def test_default_command_from_conf(self, monkeypatch):
        monkeypatch.setattr(conf, "BD_COMMAND", ["custom-bd", "--quiet"])
        assert StoreInvoker().build_argv("init") == ["custom-bd", "--quiet", "init"]


class TestTimeoutSetting:
    def test_timeout_from_env(self, monkeypatch):
        monkeypatch.setenv("BEADROUTE_BD_TIMEOUT", "2.5")
        assert StoreInvoker().timeout == 2.5

    def test_unset_timeout_waits_forever(self, monkeypatch):
        monkeypatch.delenv("BEADROUTE_BD_TIMEOUT", raising=False)
        assert StoreInvoker().timeout is None

    def test_non_numeric_timeout_rejected_on_use(self, monkeypatch):
        monkeypatch.setenv("BEADROUTE_BD_TIMEOUT", "abc")
        with pytest.raises(ValueError, match="BEADROUTE_BD_TIMEOUT"):
            StoreInvoker()

    def test_explicit_timeout_ignores_env(self, monkeypatch):
        monkeypatch.setenv("BEADROUTE_BD_TIMEOUT", "abc")
        assert StoreInvoker(timeout=3).timeout == 3


class TestWorkingDirectory:
    def test_runs_in_context_directory(self, store_dir, tmp_path, monkeypatch):
        other = tmp_path / "elsewhere"
        other.mkdir()
        monkeypatch.chdir(other)
        invoker = _python_invoker(code="import os; print(os.getcwd())")
        result = invoker.invoke("pwd", [], StoreContext.store(store_dir))
        assert os.path.samefile(result.stdout.strip(), store_dir)
        assert result.cwd == store_dir

    def test_missing_context_never_spawns(self, calls_file):
        invoker = StoreInvoker(command=FAKE_BD_COMMAND)
        with pytest.raises(ContextMissingError):
            invoker.invoke("show", ["tr-1", "--json"], None)
        with pytest.raises(ContextMissingError):
            invoker.invoke("show", ["tr-1", "--json"], "")
        assert not calls_file.exists()

    def test_town_context_without_beads_never_spawns(self, store_dir, calls_file):
        invoker = StoreInvoker(command=FAKE_BD_COMMAND)
        with pytest.raises(ContextMissingError):
            invoker.invoke("show", ["tr-1"], store_dir)
        assert not calls_file.exists()

    def test_strips_beads_dir_env(self, store_dir, calls_file, monkeypatch):
        monkeypatch.setenv("BEADS_DIR", str(store_dir / "hijack"))
        invoker = StoreInvoker(command=FAKE_BD_COMMAND)
        invoker.invoke("init", ["--prefix=tr"], StoreContext.store(store_dir))
        assert (store_dir / ".beads" / "config.json").exists()
        assert '"beads_dir_env": null' in calls_file.read_text(encoding="utf-8")

    def test_explicit_env_is_used(self, store_dir):
        invoker = _python_invoker(
            code="import os; print(os.environ.get('MARKER', ''))",
            env={**os.environ, "MARKER": "set", "BEADS_DB": "x"},
        )
        assert "BEADS_DB" not in invoker.child_env()
        result = invoker.invoke("env", [], StoreContext.store(store_dir))
        assert result.stdout.strip() == "set"


class TestResults:
    def test_success_captures_output(self, store_dir):
        invoker = _python_invoker(code="import sys; print('out'); sys.stderr.write('err')")
        result = invoker.invoke("op", ["a"], StoreContext.store(store_dir))
        assert result.ok
        assert result.returncode == 0
        assert result.stdout.strip() == "out"
        assert result.stderr == "err"
        assert result.argv[-2:] == ["op", "a"]

    def test_json_output(self, store_dir):
        invoker = _python_invoker(code="print('[{\"id\": \"tr-1\"}]')")
        result = invoker.invoke("show", [], StoreContext.store(store_dir))
        assert result.json() == [{"id": "tr-1"}]

    def test_non_zero_exit_raises_with_stderr(self, store_dir):
        invoker = _python_invoker(code="import sys; sys.stderr.write('boom'); sys.exit(3)")
        with pytest.raises(StoreCommandError) as exc_info:
            invoker.invoke("show", ["tr-1"], StoreContext.store(store_dir))
        err = exc_info.value
        assert err.returncode == 3
        assert err.stderr == "boom"
        assert err.cwd == store_dir
        assert "boom" in str(err)

    def test_non_zero_exit_without_check(self, store_dir):
        invoker = _python_invoker(code="import sys; sys.exit(1)")
        result = invoker.invoke("show", [], StoreContext.store(store_dir), check=False)
        assert not result.ok
        assert result.returncode == 1

    def test_executable_not_found(self, store_dir):
        invoker = StoreInvoker(command=[str(store_dir / "no-such-bd")])
        with pytest.raises(StoreExecutableNotFoundError):
            invoker.invoke("show", ["tr-1"], StoreContext.store(store_dir))

    def test_timeout_kills_process(self, store_dir):
        invoker = StoreInvoker(command=FAKE_BD_COMMAND, timeout=0.5)
        with pytest.raises(StoreTimeoutError) as exc_info:
            invoker.invoke("sleep", ["30"], StoreContext.store(store_dir))
        assert exc_info.value.timeout == 0.5
        assert exc_info.value.returncode is None

    def test_to_dict(self, store_dir):
        invoker = _python_invoker(code="pass")
        d = invoker.invoke("op", [], StoreContext.store(store_dir)).to_dict()
        assert d["returncode"] == 0
        assert d["cwd"] == str(store_dir)

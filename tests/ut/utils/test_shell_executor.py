"""shell.py 执行器与 run_cmd 单元测试"""

from __future__ import annotations

import os

import pytest

from gobuilder.core.exceptions import ExecutionError
from gobuilder.utils.shell import LocalExecutor, get_executor, run_cmd


class TestLocalExecutor:
    def test_success(self, tmp_path) -> None:
        r = LocalExecutor().execute(["echo", "hello"], cwd=str(tmp_path))
        assert r.success
        assert "hello" in r.stdout

    def test_string_command_is_split(self, tmp_path) -> None:
        r = LocalExecutor().execute("echo 'a b'", cwd=str(tmp_path))
        assert r.stdout.strip() == "a b"

    def test_stream_does_not_capture(self, tmp_path) -> None:
        r = LocalExecutor().execute(["true"], cwd=str(tmp_path), stream=True)
        assert r.success
        assert r.stdout == ""


class TestRunCmd:
    def test_success(self, tmp_path) -> None:
        r = run_cmd(["echo", "hello"], cwd=str(tmp_path), label="test", executor=LocalExecutor())
        assert r.returncode == 0

    def test_failure_raises(self, tmp_path) -> None:
        with pytest.raises(ExecutionError, match="cmd失败") as exc:
            run_cmd(["false"], cwd=str(tmp_path), executor=LocalExecutor())
        assert exc.value.returncode == 1

    def test_custom_label_in_error(self, tmp_path) -> None:
        with pytest.raises(ExecutionError, match="git clone失败"):
            run_cmd(["false"], cwd=str(tmp_path), label="git clone", executor=LocalExecutor())

    def test_env_passed(self, tmp_path) -> None:
        env = {**os.environ, "MY_TEST_VAR": "42"}
        r = run_cmd(["env"], cwd=str(tmp_path), env=env, executor=LocalExecutor())
        assert "MY_TEST_VAR=42" in r.stdout

    def test_uses_global_executor(self, fake_exec) -> None:
        fake_exec.on("go", "version", stdout="go1.21")
        r = run_cmd(["go", "version"])
        assert get_executor() is fake_exec
        assert r.stdout == "go1.21"
        assert fake_exec.commands() == [["go", "version"]]

    def test_stderr_in_message(self, fake_exec) -> None:
        fake_exec.on("git", returncode=128, stderr="fatal: not a git repository\n")
        with pytest.raises(ExecutionError, match="not a git repository"):
            run_cmd(["git", "status"], label="git status")

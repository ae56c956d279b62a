"""测试共享 fixture — 脚本化命令执行器 + 临时 GOPATH

FakeExecutor 替代真实子进程：记录每次调用，按规则返回结果，
规则可附带副作用（例如 git clone 时创建目录），测试无需安装 git / go。

用法:
    def test_xxx(fake_exec, gopath):
        fake_exec.on("git", "rev-parse", "--abbrev-ref", stdout="main\\n")
        ...
        assert fake_exec.commands() == [...]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import pytest

from gobuilder.core.config import reset_config
from gobuilder.utils import shell
from gobuilder.utils.shell import CommandResult


@dataclass
class Call:
    args: list[str]
    cwd: str
    env: dict[str, str] | None
    stream: bool


@dataclass
class Rule:
    prefix: tuple[str, ...]
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    when: Callable[[Call], bool] | None = None
    action: Callable[[Call], None] | None = None

    def matches(self, call: Call) -> bool:
        if tuple(call.args[:len(self.prefix)]) != self.prefix:
            return False
        return self.when is None or self.when(call)


@dataclass
class FakeExecutor:
    calls: list[Call] = field(default_factory=list)
    rules: list[Rule] = field(default_factory=list)

    def on(self, *prefix: str, **kwargs) -> Rule:
        """登记规则；后登记的规则优先匹配"""
        rule = Rule(prefix=prefix, **kwargs)
        self.rules.insert(0, rule)
        return rule

    def execute(self, cmd, *, cwd=".", env=None, stream=False) -> CommandResult:
        call = Call(args=list(cmd), cwd=str(cwd), env=env, stream=stream)
        self.calls.append(call)
        for rule in self.rules:
            if rule.matches(call):
                if rule.action is not None:
                    rule.action(call)
                return CommandResult(rule.returncode, rule.stdout, rule.stderr)
        return CommandResult(0, "", "")

    def commands(self) -> list[list[str]]:
        return [c.args for c in self.calls]

    def find(self, *prefix: str) -> list[Call]:
        return [c for c in self.calls if tuple(c.args[:len(prefix)]) == prefix]


@pytest.fixture(autouse=True)
def _clean_settings():
    reset_config()
    yield
    reset_config()


@pytest.fixture()
def fake_exec(monkeypatch: pytest.MonkeyPatch) -> FakeExecutor:
    """替换全局命令执行器"""
    fake = FakeExecutor()
    monkeypatch.setattr(shell, "_default_executor", fake)
    return fake


@pytest.fixture()
def gopath(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """单根临时 GOPATH"""
    root = tmp_path / "gopath"
    (root / "src").mkdir(parents=True)
    monkeypatch.setenv("GOPATH", str(root))
    return root

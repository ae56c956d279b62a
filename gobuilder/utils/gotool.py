"""Go 工具链命令封装"""

from __future__ import annotations

from pathlib import Path

from gobuilder.core.config import get_config
from gobuilder.utils.shell import CommandExecutor, run_cmd

DEPS_FORMAT = '{{join .Deps "\\n"}}'


def go(
    *args: str, cwd: str | Path = ".",
    env: dict[str, str] | None = None,
    stream: bool = True,
    label: str = "",
    executor: CommandExecutor | None = None,
) -> str:
    """执行 go 子命令，失败抛 ExecutionError

    label 为空时取 "go <子命令>"；调用方可带上项目、目标平台等上下文。
    """
    label = label or (f"go {args[0]}" if args else "go")
    r = run_cmd(
        [get_config().go_bin, *args], cwd=str(cwd), env=env,
        label=label, stream=stream, executor=executor,
    )
    return r.stdout


def go_get(url: str, *args: str, executor: CommandExecutor | None = None) -> None:
    go("get", *args, url, label=f"go get {url}", executor=executor)


def list_deps(work_dir: str | Path, executor: CommandExecutor | None = None) -> list[str]:
    """列出 work_dir 下程序的全部传递依赖导入路径"""
    out = go(
        "list", "-e", "-f", DEPS_FORMAT, ".",
        cwd=work_dir, stream=False, executor=executor,
    )
    return [line.strip() for line in out.splitlines() if line.strip()]

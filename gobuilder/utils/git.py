"""Git 命令封装

clone / checkout / pull 以及 detached 状态、commit、分支名查询。
失败统一抛 ExecutionError，由调用方决定是否致命。
"""

from __future__ import annotations

import re
from pathlib import Path

from gobuilder.core.config import get_config
from gobuilder.utils.shell import CommandExecutor, run_cmd

_REPO_NAME_RE = re.compile(r"[/:]([^/:]+?)(?:\.git)?/*$")


def repo_name(url: str) -> str:
    """从仓库地址解析仓库名，解析失败返回空串

    >>> repo_name("https://github.com/gogap/config.git")
    'config'
    >>> repo_name("git@github.com:gogap/config.git")
    'config'
    """
    m = _REPO_NAME_RE.search(url.strip())
    return m.group(1) if m else ""


def _git(
    args: list[str], cwd: str | Path, label: str,
    executor: CommandExecutor | None, stream: bool = False,
) -> str:
    r = run_cmd(
        [get_config().git_bin, *args], cwd=str(cwd),
        label=label, stream=stream, executor=executor,
    )
    return r.stdout.strip()


def clone(
    work_dir: str | Path, url: str, *args: str,
    executor: CommandExecutor | None = None,
) -> None:
    """在 work_dir 下 clone 仓库（目标目录名由 git 根据 url 决定）"""
    _git(["clone", *args, url], work_dir, f"git clone {url}", executor, stream=True)


def checkout(repo_dir: str | Path, revision: str, executor: CommandExecutor | None = None) -> None:
    _git(["checkout", revision], repo_dir, f"git checkout {revision}", executor)


def pull(repo_dir: str | Path, *args: str, executor: CommandExecutor | None = None) -> None:
    _git(["pull", *args], repo_dir, f"git pull ({repo_dir})", executor, stream=True)


def is_detached(repo_dir: str | Path, executor: CommandExecutor | None = None) -> bool:
    """HEAD 不在任何分支上时为 detached"""
    head = _git(["rev-parse", "--abbrev-ref", "HEAD"], repo_dir, "git rev-parse", executor)
    return head == "HEAD"


def commit_sha(repo_dir: str | Path, executor: CommandExecutor | None = None) -> str:
    return _git(["rev-parse", "HEAD"], repo_dir, "git rev-parse HEAD", executor)


def branch_or_tag_name(repo_dir: str | Path, executor: CommandExecutor | None = None) -> str:
    """当前分支名；detached 时取精确匹配的 tag"""
    head = _git(["rev-parse", "--abbrev-ref", "HEAD"], repo_dir, "git rev-parse", executor)
    if head != "HEAD":
        return head
    return _git(
        ["describe", "--tags", "--exact-match", "HEAD"], repo_dir, "git describe", executor,
    )

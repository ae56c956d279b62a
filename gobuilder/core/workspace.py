"""工作空间定位

在 GOPATH 搜索路径中查找包的本地副本，只做查找不做修改。
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from gobuilder.core.config import get_config
from gobuilder.core.exceptions import ConfigError


@dataclass(frozen=True)
class PackageLocation:
    """包在工作空间中的位置

    exists 为 False 时，root/path 指向第一个搜索根下的预期位置。
    """

    root: Path
    path: Path
    exists: bool


def go_path() -> str:
    """工作空间搜索路径（工具设置优先，其次环境变量 GOPATH）"""
    return get_config().gopath or os.environ.get("GOPATH", "")


def search_roots(gopath: str) -> list[Path]:
    return [Path(p) for p in gopath.split(os.pathsep) if p]


def find_package(gopath: str, package: str) -> PackageLocation:
    """按顺序在每个搜索根的 src 下查找 package

    搜索路径为空时抛 ConfigError。
    """
    roots = search_roots(gopath)
    if not roots:
        raise ConfigError("GOPATH 为空")
    for root in roots:
        candidate = root / "src" / package
        if candidate.is_dir():
            return PackageLocation(root=root, path=candidate, exists=True)
    return PackageLocation(root=roots[0], path=roots[0] / "src" / package, exists=False)

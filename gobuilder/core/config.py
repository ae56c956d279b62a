"""工具设置

集中管理 go / git 可执行文件路径和 GOPATH 覆盖等工具级设置，
与项目构建配置（见 configuration.py）分离。
支持从 YAML 文件加载 + 编程式覆盖。
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field

from gobuilder.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """工具全局设置"""

    # 可执行文件
    go_bin: str = "go"
    git_bin: str = "git"

    # 工作空间搜索路径，非空时覆盖环境变量 GOPATH
    gopath: str = ""

    # 放不到字段里的配置项
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = "configs/default.yml") -> Config:
        """从 YAML 文件加载设置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f for f in cls.__dataclass_fields__ if f != "extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        return cls(**matched, extra=extra)

    def to_dict(self) -> dict:
        return asdict(self)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前设置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = "configs/default.yml") -> Config:
    """从文件初始化全局设置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.debug("工具设置已加载: %s", path)
    return _current


def reset_config() -> None:
    """恢复为默认设置"""
    global _current  # noqa: PLW0603
    _current = None

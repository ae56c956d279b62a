"""YAML 读取工具

集中管理构建配置与工具设置的反序列化：统一 encoding="utf-8"、
空值保护，并拒绝重复键（重复的项目名会被静默覆盖，必须在加载时暴露）。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from gobuilder.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# YAML 文件最大大小限制 (10MB)
MAX_YAML_SIZE = 10 * 1024 * 1024


class UniqueKeyLoader(yaml.SafeLoader):
    """在 SafeLoader 基础上拒绝同一映射中的重复键"""

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        self.flatten_mapping(node)
        seen: set[Any] = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if key in seen:
                raise ConfigError(
                    f"重复的键: {key} (行 {key_node.start_mark.line + 1})",
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def parse_yaml(text: str, source: str = "<string>") -> dict[str, Any]:
    """解析 YAML 文本

    返回:
        dict: 解析后的字典；空文档返回空字典

    异常:
        ConfigError: YAML 格式错误、存在重复键或顶层不是映射
    """
    try:
        result = yaml.load(text, Loader=UniqueKeyLoader)  # noqa: S506
    except yaml.YAMLError as e:
        raise ConfigError(f"解析 YAML 失败: {source}: {e}") from e

    if result is None:
        return {}
    if not isinstance(result, dict):
        raise ConfigError(
            f"{source} 顶层必须是映射 (实际类型: {type(result).__name__})",
        )
    return result


def load_yaml(path: str | Path) -> dict[str, Any]:
    """安全读取 YAML 文件

    参数:
        path: YAML 文件路径

    返回:
        dict: 解析后的字典。文件不存在时返回空字典

    异常:
        ConfigError: 文件过大、格式错误或存在重复键
        OSError: 读取失败
    """
    p = Path(path)
    if not p.exists():
        return {}

    file_size = p.stat().st_size
    if file_size > MAX_YAML_SIZE:
        raise ConfigError(
            f"YAML 文件过大: {p} ({file_size} 字节), 超过限制 {MAX_YAML_SIZE} 字节",
        )

    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("读取文件失败: %s, 错误: %s", path, e)
        raise
    return parse_yaml(text, source=str(p))

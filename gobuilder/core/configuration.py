"""构建配置树

对 YAML 解析出的嵌套映射提供只读的键值查询，
路径用点号分隔，例如 ``build.args.go-get``。

顶层按项目名分组::

    myapp:
      fetchers: {git: {}, goget: {}}
      repos:
        config: {url: ..., fetcher: git, dir: github.com/gogap}
      packages: [github.com/gogap/config]
      build:
        args: {go-get: [], go-build: []}
        target: {linux: [amd64]}
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from gobuilder.utils.yaml_io import load_yaml, parse_yaml

_MISSING = object()


class Configuration:
    """嵌套配置的只读视图"""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def from_file(cls, path: str | Path) -> Configuration:
        return cls(load_yaml(path))

    @classmethod
    def from_string(cls, text: str) -> Configuration:
        return cls(parse_yaml(text))

    def __repr__(self) -> str:
        return f"Configuration({self._data!r})"

    def _lookup(self, path: str) -> Any:
        node: Any = self._data
        for part in path.split("."):
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def keys(self) -> list[str]:
        """顶层键，保持声明顺序"""
        return [str(k) for k in self._data]

    def is_empty(self) -> bool:
        return not self._data

    def get(self, path: str, default: Any = None) -> Any:
        value = self._lookup(path)
        return default if value is _MISSING else value

    def get_config(self, path: str) -> Configuration | None:
        """获取子配置；路径不存在或不是映射时返回 None

        值为 null 的键视为空映射。
        """
        value = self._lookup(path)
        if value is None:
            return Configuration()
        if not isinstance(value, dict):
            return None
        return Configuration(value)

    def get_string(self, path: str, default: str = "") -> str:
        value = self._lookup(path)
        if value is _MISSING or value is None:
            return default
        return str(value)

    def get_string_list(self, path: str) -> list[str]:
        """获取字符串列表；单个标量视为只有一个元素的列表"""
        value = self._lookup(path)
        if value is _MISSING or value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [str(v) for v in value]
        return [str(value)]

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

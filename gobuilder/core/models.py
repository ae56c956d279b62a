"""核心数据模型

构建过程中的临时值对象，均在一次 pull / build 调用内创建和丢弃。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gobuilder.core.configuration import Configuration


@dataclass
class PackageRevision:
    """构建时某个依赖包的版本快照"""

    package: str
    branch: str = ""
    revision: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"package": self.package, "branch": self.branch, "revision": self.revision}


@dataclass
class Metadata:
    """入口模板渲染上下文"""

    name: str
    packages: list[str] = field(default_factory=list)
    config: Configuration | None = None
    revisions: list[PackageRevision] = field(default_factory=list)

    def template_vars(self) -> dict[str, Any]:
        """模板中可见的字段

        ``Confing`` 与历史模板保持兼容，``Config`` 为同一对象。
        """
        return {
            "Name": self.name,
            "Packages": list(self.packages),
            "Confing": self.config,
            "Config": self.config,
            "Revisions": [r.to_dict() for r in self.revisions],
        }


@dataclass
class FetchResult:
    """单个代码仓拉取结果

    update_skipped: 请求了更新，但检出处于 detached 状态而被跳过
    """

    fetcher: str
    url: str
    revision: str = ""
    path: str = ""
    cloned: bool = False
    checked_out: bool = False
    updated: bool = False
    update_skipped: bool = False

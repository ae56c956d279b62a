"""代码仓 - 绑定一个依赖的地址、版本与拉取策略"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gobuilder.core.configuration import Configuration
from gobuilder.core.models import FetchResult

if TYPE_CHECKING:
    from gobuilder.fetcher import Fetcher


@dataclass
class Repo:
    """每次 pull 时由项目的 repos 配置临时构造"""

    url: str
    fetcher: Fetcher
    revision: str = ""
    need_update: bool = False
    repo_conf: Configuration = field(default_factory=Configuration)

    def pull(self) -> FetchResult:
        return self.fetcher.fetch(self.url, self.revision, self.need_update, self.repo_conf)

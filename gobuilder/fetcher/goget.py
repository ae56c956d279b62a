"""goget 拉取策略 - 由 go get 决定放置位置

代码仓配置:
  args: go get 附加参数
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gobuilder.core.configuration import Configuration
from gobuilder.core.models import FetchResult
from gobuilder.core.workspace import find_package, go_path
from gobuilder.fetcher.base import BaseFetcher
from gobuilder.utils import gotool
from gobuilder.utils.shell import CommandExecutor

if TYPE_CHECKING:
    from gobuilder.fetcher import FetcherRegistry


class GoGetFetcher(BaseFetcher):
    """go get / checkout / pull"""

    name = "goget"

    def _fetch(
        self, url: str, revision: str, update: bool, repo_conf: Configuration,
    ) -> FetchResult:
        loc = find_package(go_path(), url)
        result = FetchResult(fetcher=self.name, url=url, revision=revision, path=str(loc.path))

        if not loc.exists:
            gotool.go_get(url, *repo_conf.get_string_list("args"), executor=self.executor)
            result.cloned = True
            update = False
            self._log(logging.INFO, "已拉取", url, revision)

        return self._checkout_and_update(result, loc.path, update)


def new_goget_fetcher(conf: Configuration, executor: CommandExecutor | None = None) -> GoGetFetcher:
    return GoGetFetcher(conf, executor=executor)


def register(registry: FetcherRegistry) -> None:
    registry.register("goget", new_goget_fetcher)

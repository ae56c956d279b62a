"""git 拉取策略 - 直接 clone 到 GOPATH 下的指定命名空间

代码仓配置:
  dir:        目标命名空间，如 github.com/gogap（必填）
  args.clone: clone 附加参数
  args.pull:  pull 附加参数
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from gobuilder.core.configuration import Configuration
from gobuilder.core.exceptions import ConfigError
from gobuilder.core.models import FetchResult
from gobuilder.core.workspace import find_package, go_path
from gobuilder.fetcher.base import BaseFetcher
from gobuilder.utils import git
from gobuilder.utils.shell import CommandExecutor

if TYPE_CHECKING:
    from gobuilder.fetcher import FetcherRegistry


class GitFetcher(BaseFetcher):
    """git clone / checkout / pull"""

    name = "git"

    def _fetch(
        self, url: str, revision: str, update: bool, repo_conf: Configuration,
    ) -> FetchResult:
        name = git.repo_name(url)
        if not name:
            raise ConfigError(f"无法从地址解析仓库名: {url}")

        ns = repo_conf.get_string("dir")
        if not ns:
            raise ConfigError(f"代码仓未配置 dir: {url}")

        loc = find_package(go_path(), str(Path(ns) / name))
        result = FetchResult(fetcher=self.name, url=url, revision=revision, path=str(loc.path))

        if not loc.exists:
            work_dir = loc.root / "src" / ns
            try:
                work_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ConfigError(f"创建目录失败 {work_dir}: {e}") from e
            git.clone(work_dir, url, *repo_conf.get_string_list("args.clone"), executor=self.executor)
            result.cloned = True
            # 新 clone 的仓库已是最新
            update = False
            self._log(logging.INFO, "已拉取", url, revision)

        return self._checkout_and_update(
            result, loc.path, update, repo_conf.get_string_list("args.pull"),
        )


def new_git_fetcher(conf: Configuration, executor: CommandExecutor | None = None) -> GitFetcher:
    return GitFetcher(conf, executor=executor)


def register(registry: FetcherRegistry) -> None:
    registry.register("git", new_git_fetcher)

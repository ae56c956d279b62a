"""拉取策略公共逻辑

首次拉取之后的两步对所有策略相同：
  1. 指定了 revision 时检出该版本
  2. 请求更新且不处于 detached 状态时 git pull；detached 时跳过并告警
"""

from __future__ import annotations

import logging
from pathlib import Path

from gobuilder.core.configuration import Configuration
from gobuilder.core.exceptions import ExecutionError
from gobuilder.core.models import FetchResult
from gobuilder.utils import git
from gobuilder.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


class BaseFetcher:
    """拉取策略基类"""

    name = ""

    def __init__(self, conf: Configuration | None = None, executor: CommandExecutor | None = None) -> None:
        self.conf = conf or Configuration()
        self.executor = executor

    def fetch(
        self, url: str, revision: str, update: bool, repo_conf: Configuration,
    ) -> FetchResult:
        """拉取代码仓；命令失败时在错误信息中补充策略名与地址"""
        try:
            return self._fetch(url, revision, update, repo_conf)
        except ExecutionError as e:
            raise ExecutionError(
                f"{self.name}: 拉取 {url} 失败: {e}", returncode=e.returncode,
            ) from e

    def _fetch(
        self, url: str, revision: str, update: bool, repo_conf: Configuration,
    ) -> FetchResult:
        raise NotImplementedError

    def _log(self, level: int, event: str, url: str, revision: str) -> None:
        logger.log(level, "%s: fetcher=%s url=%s revision=%s", event, self.name, url, revision)

    def _checkout_and_update(
        self, result: FetchResult, pkg_dir: Path, update: bool,
        pull_args: list[str] | None = None,
    ) -> FetchResult:
        url, revision = result.url, result.revision

        if revision:
            git.checkout(pkg_dir, revision, executor=self.executor)
            result.checked_out = True
            self._log(logging.INFO, "已检出", url, revision)

        if update:
            if git.is_detached(pkg_dir, executor=self.executor):
                result.update_skipped = True
                self._log(logging.WARNING, "代码仓处于 detached 状态，跳过更新", url, revision)
            else:
                git.pull(pkg_dir, *(pull_args or []), executor=self.executor)
                result.updated = True
                self._log(logging.INFO, "已更新", url, revision)

        return result

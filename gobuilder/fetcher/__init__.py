"""拉取策略 - 可插拔的代码获取方式

每种策略（git / goget）实现 Fetcher 协议，并在自己的模块中提供
``register(registry)`` 函数把构造函数登记到 FetcherRegistry。

项目按注册表中的全部策略各实例化一个 Fetcher，
代码仓在拉取时通过配置中的策略名选择其一。
"""

from __future__ import annotations

import importlib
import logging
from typing import Callable, Protocol

from gobuilder.core.configuration import Configuration
from gobuilder.core.exceptions import FetcherNotFoundError
from gobuilder.core.models import FetchResult
from gobuilder.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)

BUILTIN_FETCHERS = ["gobuilder.fetcher.git", "gobuilder.fetcher.goget"]


class Fetcher(Protocol):
    """拉取策略协议"""

    def fetch(
        self, url: str, revision: str, update: bool, repo_conf: Configuration,
    ) -> FetchResult:
        """拉取代码仓到本地工作空间，按需检出版本和更新"""
        ...


FetcherFactory = Callable[..., Fetcher]


class FetcherRegistry:
    """策略名 → 构造函数 的注册表

    构造函数签名: ``factory(conf, executor=None) -> Fetcher``
    """

    def __init__(self) -> None:
        self._factories: dict[str, FetcherFactory] = {}

    def register(self, name: str, factory: FetcherFactory) -> None:
        """登记策略，同名重复登记以最后一次为准"""
        self._factories[name] = factory

    def names(self) -> list[str]:
        return list(self._factories)

    def __contains__(self, name: str) -> bool:
        return name in self._factories

    def create(
        self, name: str, conf: Configuration | None = None,
        executor: CommandExecutor | None = None,
    ) -> Fetcher:
        factory = self._factories.get(name)
        if factory is None:
            raise FetcherNotFoundError(name)
        return factory(conf or Configuration(), executor=executor)


def load_builtin_fetchers(registry: FetcherRegistry, modules: list[str] | None = None) -> None:
    """按模块名加载策略模块，调用其 register(registry)"""
    for name in modules or BUILTIN_FETCHERS:
        mod = importlib.import_module(name)
        mod.register(registry)
        logger.debug("拉取策略模块已加载: %s", name)


_registry: FetcherRegistry | None = None


def get_registry() -> FetcherRegistry:
    """进程级注册表，首次访问时登记内置策略"""
    global _registry  # noqa: PLW0603
    if _registry is None:
        _registry = FetcherRegistry()
        load_builtin_fetchers(_registry)
    return _registry


def register_fetcher(name: str, factory: FetcherFactory) -> None:
    get_registry().register(name, factory)


def fetchers() -> list[str]:
    return get_registry().names()


def new_fetcher(
    name: str, conf: Configuration | None = None,
    executor: CommandExecutor | None = None,
) -> Fetcher:
    return get_registry().create(name, conf, executor=executor)

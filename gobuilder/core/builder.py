"""构建器 - 持有配置中声明的全部项目

用法:
    builder = Builder(BuilderOptions(config_file="builder.yml", update_repo=True))
    builder.pull("myapp")
    builder.build({"Env": "prod"}, "myapp")
    builder.run(None, "myapp", ["--help"])
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jinja2

from gobuilder.core.configuration import Configuration
from gobuilder.core.exceptions import ConfigError, DuplicateProjectError
from gobuilder.core.models import FetchResult
from gobuilder.core.project import Project
from gobuilder.core.template import default_template
from gobuilder.fetcher import FetcherRegistry, get_registry
from gobuilder.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


@dataclass
class BuilderOptions:
    """构建器选项

    配置来源三选一，优先级: config > config_file > config_string。
    registry / executor 不传时使用进程级默认实例。
    """

    config: Configuration | None = None
    config_file: str = ""
    config_string: str = ""
    update_repo: bool = False
    template: jinja2.Template | None = None
    registry: FetcherRegistry | None = None
    executor: CommandExecutor | None = None

    def resolve_config(self) -> Configuration:
        if self.config is not None:
            return self.config
        if self.config_file:
            if not Path(self.config_file).exists():
                raise ConfigError(f"配置文件不存在: {self.config_file}")
            return Configuration.from_file(self.config_file)
        if self.config_string:
            return Configuration.from_string(self.config_string)
        raise ConfigError("未提供构建配置")


class Builder:
    """多项目构建器"""

    def __init__(self, options: BuilderOptions | None = None, **kwargs: Any) -> None:
        options = options or BuilderOptions(**kwargs)
        self.options = options
        self.config = options.resolve_config()
        self.registry = options.registry or get_registry()
        self.template = options.template or default_template()

        projects: dict[str, Project] = {}
        for name in self.config.keys():
            if name in projects:
                raise DuplicateProjectError(f"项目已存在: {name}")
            projects[name] = Project(name, self)

        self._projects = projects
        self._project_keys = list(projects)

    def list_projects(self) -> list[str]:
        """项目名列表，保持配置中的声明顺序"""
        return list(self._project_keys)

    def project(self, name: str) -> Project:
        proj = self._projects.get(name)
        if proj is None:
            raise ConfigError(f"项目不存在: {name}")
        return proj

    def build(self, data: dict[str, Any] | None, *projects: str) -> list[Path]:
        """依次构建指定项目，遇到第一个失败即停止"""
        outputs: list[Path] = []
        for name in projects:
            proj = self.project(name)
            logger.info("构建项目: %s", name)
            outputs.extend(proj.build(data, run=False))
        return outputs

    def run(self, data: dict[str, Any] | None, project: str, args: list[str] | None = None) -> None:
        """构建并立即运行单个项目"""
        proj = self.project(project)
        logger.info("构建并运行项目: %s", project)
        proj.build(data, run=True, run_args=list(args or []))

    def pull(self, *projects: str) -> list[FetchResult]:
        """依次拉取指定项目的全部代码仓，遇到第一个失败即停止"""
        results: list[FetchResult] = []
        for name in projects:
            proj = self.project(name)
            logger.info("拉取项目代码仓: %s", name)
            results.extend(proj.pull())
        return results

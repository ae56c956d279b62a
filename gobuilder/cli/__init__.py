"""gobuilder 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

import click

from gobuilder import __version__
from gobuilder.core.builder import Builder, BuilderOptions
from gobuilder.core.config import init_config
from gobuilder.core.exceptions import BuilderError
from gobuilder.core.template import load_template
from gobuilder.utils.logger import setup_logging


@dataclass
class CliState:
    """命令间共享的全局选项；Builder 在首次使用时才构造"""

    config_file: str
    template_file: str = ""
    update: bool = False
    _builder: Builder | None = field(default=None, repr=False)

    def builder(self) -> Builder:
        if self._builder is None:
            try:
                template = load_template(self.template_file) if self.template_file else None
                self._builder = Builder(BuilderOptions(
                    config_file=self.config_file,
                    update_repo=self.update,
                    template=template,
                ))
            except (BuilderError, OSError) as e:
                raise click.ClickException(str(e)) from e
        return self._builder


def _parse_kv_pairs(pairs: tuple[str, ...]) -> dict[str, str]:
    """解析 key=value 参数对"""
    result: dict[str, str] = {}
    for p in pairs:
        if "=" in p:
            k, v = p.split("=", 1)
            result[k.strip()] = v.strip()
    return result


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", "config_file", default="builder.yml", help="构建配置文件")
@click.option("--settings", default="configs/default.yml", help="工具设置文件（不存在则用默认值）")
@click.option("--template", "-t", "template_file", default="", help="main 源码模板文件")
@click.option("--update", "-u", is_flag=True, help="拉取时更新已存在的代码仓")
@click.pass_context
def main(ctx: click.Context, config_file: str, settings: str, template_file: str, update: bool) -> None:
    """gobuilder - 多项目 Go 构建编排工具"""
    setup_logging(
        level=os.getenv("GOBUILDER_LOG_LEVEL", "INFO"),
        json_output=os.getenv("GOBUILDER_LOG_JSON", "") == "1",
    )
    try:
        init_config(settings)
    except BuilderError as e:
        raise click.ClickException(str(e)) from e
    ctx.obj = CliState(config_file=config_file, template_file=template_file, update=update)


# 注册各领域子命令
from gobuilder.cli.cmd_build import register as _reg_build  # noqa: E402

_reg_build(main)

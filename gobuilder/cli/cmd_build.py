"""CLI — 项目列表 / 构建 / 运行 / 拉取命令"""

from __future__ import annotations

import click

from gobuilder.cli import CliState, _parse_kv_pairs
from gobuilder.core.exceptions import BuilderError


def register(group: click.Group) -> None:
    group.add_command(list_projects)
    group.add_command(build)
    group.add_command(run)
    group.add_command(pull)


@click.command(name="list")
@click.pass_obj
def list_projects(state: CliState) -> None:
    """列出配置中的全部项目"""
    names = state.builder().list_projects()
    if not names:
        click.echo("配置中没有项目。")
        return
    for name in names:
        click.echo(name)


@click.command()
@click.argument("projects", nargs=-1)
@click.option("--data", "-d", multiple=True, help="模板数据，格式: key=value（可多次指定）")
@click.pass_obj
def build(state: CliState, projects: tuple[str, ...], data: tuple[str, ...]) -> None:
    """构建项目（不指定则构建全部）"""
    builder = state.builder()
    names = projects or tuple(builder.list_projects())
    try:
        outputs = builder.build(_parse_kv_pairs(data), *names)
    except BuilderError as e:
        raise click.ClickException(str(e)) from e
    for path in outputs:
        click.echo(f"产物: {path}")


@click.command(context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False})
@click.argument("project")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.option("--data", "-d", multiple=True, help="模板数据，格式: key=value（可多次指定）")
@click.pass_obj
def run(state: CliState, project: str, args: tuple[str, ...], data: tuple[str, ...]) -> None:
    """构建并运行单个项目，PROJECT 之后的参数原样传给程序"""
    try:
        state.builder().run(_parse_kv_pairs(data), project, list(args))
    except BuilderError as e:
        raise click.ClickException(str(e)) from e


@click.command()
@click.argument("projects", nargs=-1)
@click.pass_obj
def pull(state: CliState, projects: tuple[str, ...]) -> None:
    """拉取项目依赖的代码仓（不指定则拉取全部）"""
    builder = state.builder()
    names = projects or tuple(builder.list_projects())
    try:
        results = builder.pull(*names)
    except BuilderError as e:
        raise click.ClickException(str(e)) from e
    for r in results:
        if r.update_skipped:
            state_text = "detached，未更新"
        elif r.cloned:
            state_text = "已拉取"
        elif r.updated:
            state_text = "已更新"
        else:
            state_text = "已存在"
        rev = f"@{r.revision}" if r.revision else ""
        click.echo(f"  [{r.fetcher:5s}] {r.url}{rev}  {state_text}")

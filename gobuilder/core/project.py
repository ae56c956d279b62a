"""项目 - 可构建的最小单元

一个项目由要导入的包、要拉取的代码仓、构建参数和可选的交叉编译目标组成。

构建流程（任一步失败立即中止并抛出）:
  1. packages 为空 → 直接返回
  2. 创建临时工作目录
  3. 写入空导入源文件（构建结束后删除）
  4. 收集依赖版本（尽力而为，失败只记日志）
  5. 渲染 main 源文件（保留在临时目录中便于排查）
  6. go get -d 预拉取
  7. go build：单目标 / 运行模式编译一次，否则按 OS × ARCH 矩阵逐个编译
"""

from __future__ import annotations

import logging
import os
import tempfile
import uuid
from pathlib import Path
from typing import TYPE_CHECKING, Any

import jinja2

from gobuilder.core.exceptions import BuilderError, ConfigError, ExecutionError, FetcherNotFoundError
from gobuilder.core.models import FetchResult, Metadata, PackageRevision
from gobuilder.core.repo import Repo
from gobuilder.core.template import render_imports, render_main
from gobuilder.core.workspace import find_package, go_path, search_roots
from gobuilder.utils import git, gotool
from gobuilder.utils.shell import CommandExecutor, run_cmd

if TYPE_CHECKING:
    from gobuilder.core.builder import Builder
    from gobuilder.fetcher import Fetcher

logger = logging.getLogger(__name__)

DEFAULT_FETCHER = "goget"


class Project:
    """单个项目的拉取与构建"""

    def __init__(self, name: str, builder: Builder) -> None:
        conf = builder.config.get_config(name)
        if conf is None or conf.is_empty():
            raise ConfigError(f"项目 {name} 初始化失败: 配置为空")

        fetchers_conf = conf.get_config("fetchers")
        if fetchers_conf is None:
            raise ConfigError(f"项目 {name} 初始化失败: 未配置 fetchers")

        registry = builder.registry
        self.fetchers: dict[str, Fetcher] = {
            fname: registry.create(
                fname, fetchers_conf.get_config(fname),
                executor=builder.options.executor,
            )
            for fname in registry.names()
        }
        self.name = name
        self.conf = conf
        self.builder = builder

    @property
    def _executor(self) -> CommandExecutor | None:
        return self.builder.options.executor

    # ---- 拉取 ----

    def pull(self) -> list[FetchResult]:
        """按声明顺序拉取全部代码仓"""
        return [repo.pull() for repo in self.fetch_repos()]

    def fetch_repos(self) -> list[Repo]:
        """根据 repos 配置构造代码仓列表

        全部校验通过后才返回，保证配置错误不会触发任何子进程。
        """
        repos_conf = self.conf.get_config("repos")
        if repos_conf is None:
            return []

        repos: list[Repo] = []
        for repo_name in repos_conf.keys():
            repo_conf = repos_conf.get_config(repo_name)
            if repo_conf is None:
                raise ConfigError(f"代码仓配置无效, project: {self.name}, repo: {repo_name}")

            url = repo_conf.get_string("url")
            if not url:
                raise ConfigError(f"代码仓 url 为空, project: {self.name}, repo: {repo_name}")

            fetcher_name = repo_conf.get_string("fetcher", DEFAULT_FETCHER)
            fetcher = self.fetchers.get(fetcher_name)
            if fetcher is None:
                raise FetcherNotFoundError(
                    fetcher_name,
                    f"拉取策略未注册: {fetcher_name}, project: {self.name}, repo: {repo_name}",
                )

            repos.append(Repo(
                url=url,
                fetcher=fetcher,
                revision=repo_conf.get_string("revision"),
                need_update=self.builder.options.update_repo,
                repo_conf=repo_conf,
            ))
        return repos

    # ---- 构建 ----

    def build(
        self, data: dict[str, Any] | None = None,
        run: bool = False, run_args: list[str] | None = None,
    ) -> list[Path]:
        """执行构建，返回产物路径列表（流程见模块文档）"""
        packages = self.conf.get_string_list("packages")
        if not packages:
            logger.info("项目 %s 未配置 packages，跳过构建", self.name)
            return []

        temp_dir = Path(tempfile.gettempdir()) / str(uuid.uuid4())
        temp_dir.mkdir(parents=True, exist_ok=True)

        main_file = temp_dir / f"main_{self.name}.go"
        imports_file = temp_dir / f"main_{self.name}_imports.go"

        _write(imports_file, render_imports(packages))
        try:
            metadata = Metadata(
                name=self.name,
                packages=packages,
                config=self.conf,
                revisions=self.revisions(temp_dir),
            )
            try:
                source = render_main(self.builder.template, data, metadata)
            except jinja2.TemplateError as e:
                raise ConfigError(f"渲染 main 模板失败, project: {self.name}: {e}") from e
            # main 文件不删除，留作排查
            _write(main_file, source)

            gotool.go(
                "get", "-d", *self.conf.get_string_list("build.args.go-get"),
                cwd=temp_dir, label=f"go get ({self.name})", executor=self._executor,
            )
            return self._compile(temp_dir, main_file, imports_file, run, run_args)
        finally:
            imports_file.unlink(missing_ok=True)

    def _compile(
        self, temp_dir: Path, main_file: Path, imports_file: Path,
        run: bool, run_args: list[str] | None,
    ) -> list[Path]:
        build_args = ["build", *self.conf.get_string_list("build.args.go-build")]
        sources = [str(main_file), str(imports_file)]
        target_conf = self.conf.get_config("build.target")
        cwd = Path.cwd()

        if run or target_conf is None or target_conf.is_empty():
            output = (temp_dir if run else cwd) / self.name
            gotool.go(
                *build_args, "-o", str(output), *sources,
                label=f"go build {self.name}", executor=self._executor,
            )
            if run:
                run_cmd(
                    [str(output), *(run_args or [])],
                    label=f"运行 {self.name}", stream=True, executor=self._executor,
                )
            else:
                logger.info("构建完成: %s -> %s", self.name, output)
            return [output]

        outputs: list[Path] = []
        for target_os in target_conf.keys():
            for target_arch in target_conf.get_string_list(target_os):
                output = cwd / f"{self.name}-{target_os}-{target_arch}"
                env = {**os.environ, "GOOS": target_os, "GOARCH": target_arch}
                gotool.go(
                    *build_args, "-o", str(output), *sources,
                    env=env, label=f"go build {self.name} {target_os}/{target_arch}",
                    executor=self._executor,
                )
                logger.info("构建完成: %s (%s/%s) -> %s", self.name, target_os, target_arch, output)
                outputs.append(output)
        return outputs

    # ---- 依赖版本 ----

    def revisions(self, work_dir: Path) -> list[PackageRevision]:
        """收集工作目录下程序全部传递依赖的当前版本

        版本信息只用于写入构建元数据，这里的任何失败都只记日志，不中止构建。
        同一导入路径只记录第一次出现。
        """
        try:
            packages = gotool.list_deps(work_dir, executor=self._executor)
        except ExecutionError as e:
            logger.warning("列出依赖失败，跳过版本记录, project: %s: %s", self.name, e)
            return []
        if not packages:
            return []

        gopath = go_path()
        if not search_roots(gopath):
            logger.warning("GOPATH 为空，跳过版本记录, project: %s", self.name)
            return []

        seen: set[str] = set()
        result: list[PackageRevision] = []
        for pkg in packages:
            if pkg in seen:
                continue
            seen.add(pkg)

            loc = find_package(gopath, pkg)
            if not loc.exists:
                logger.debug("未找到包: %s (project=%s, path=%s)", pkg, self.name, loc.path)
                continue

            try:
                sha = git.commit_sha(loc.path, executor=self._executor)
            except ExecutionError as e:
                logger.debug("获取 commit 失败: %s (project=%s): %s", pkg, self.name, e)
                continue

            try:
                branch = git.branch_or_tag_name(loc.path, executor=self._executor)
            except ExecutionError as e:
                logger.debug("获取分支/tag 失败: %s (project=%s): %s", pkg, self.name, e)
                branch = ""

            result.append(PackageRevision(package=pkg, branch=branch, revision=sha))
        return result


def _write(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise BuilderError(f"写入临时文件失败 {path}: {e}") from e

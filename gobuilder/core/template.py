"""入口源码生成

纯函数：输入包列表 / 模板 / 元数据，输出 Go 源码文本，不触碰文件系统。
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from gobuilder.core.models import Metadata

DEFAULT_MAIN_TEMPLATE = """\
package main

import (
	"fmt"
	"os"
)

func main() {
	if len(os.Args) > 1 && os.Args[1] == "version" {
		fmt.Println("{{ Metadata.Name }}")
{%- for rev in Metadata.Revisions %}
		fmt.Println("{{ rev.package }} {{ rev.branch }} {{ rev.revision }}")
{%- endfor %}
		return
	}
}
"""

_env = jinja2.Environment(
    keep_trailing_newline=True,
    undefined=jinja2.StrictUndefined,
)


def compile_template(source: str) -> jinja2.Template:
    return _env.from_string(source)


def load_template(path: str | Path) -> jinja2.Template:
    """从文件加载 main 模板"""
    return compile_template(Path(path).read_text(encoding="utf-8"))


def default_template() -> jinja2.Template:
    return compile_template(DEFAULT_MAIN_TEMPLATE)


def render_imports(packages: list[str]) -> str:
    """生成对每个包做空导入的源码，使其 init 副作用链接进程序"""
    lines = ["package main", ""]
    lines.extend(f'import _ "{pkg}"' for pkg in packages)
    return "\n".join(lines) + "\n"


def render_main(
    template: jinja2.Template,
    data: dict[str, Any] | None,
    metadata: Metadata,
) -> str:
    """渲染 main 源码；调用方数据与 Metadata 一同传入模板"""
    context = dict(data or {})
    context["Metadata"] = metadata.template_vars()
    return template.render(**context)

"""统一异常体系

所有业务异常继承 BuilderError，替代散落的 ValueError / RuntimeError。
CLI 层可据此输出友好提示并决定退出码。
"""

from __future__ import annotations


class BuilderError(Exception):
    """构建工具基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(BuilderError):
    """配置缺失或内容无效"""

    code = "CONFIG_ERROR"


class FetcherNotFoundError(ConfigError):
    """引用了未注册的拉取策略"""

    code = "FETCHER_NOT_FOUND"

    def __init__(self, name: str, message: str = "") -> None:
        super().__init__(message or f"拉取策略未注册: {name}")
        self.name = name


class DuplicateProjectError(ConfigError):
    """项目名重复"""

    code = "DUPLICATE_PROJECT"


class ExecutionError(BuilderError):
    """外部命令执行失败"""

    code = "EXECUTION_ERROR"

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode

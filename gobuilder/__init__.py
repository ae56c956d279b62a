"""gobuilder - 多项目 Go 构建编排工具"""

__version__ = "0.1.0"

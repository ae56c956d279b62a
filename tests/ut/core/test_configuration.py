"""Configuration 配置树单元测试"""

from __future__ import annotations

import pytest

from gobuilder.core.configuration import Configuration
from gobuilder.core.exceptions import ConfigError

SAMPLE = """
zeta:
  packages: [github.com/a/b]
alpha:
  fetchers:
    git:
  build:
    args:
      go-build: -v
    target:
      linux: [amd64, arm64]
"""


@pytest.fixture()
def conf() -> Configuration:
    return Configuration.from_string(SAMPLE)


class TestLookup:
    def test_keys_keep_declared_order(self, conf: Configuration) -> None:
        assert conf.keys() == ["zeta", "alpha"]

    def test_dotted_path(self, conf: Configuration) -> None:
        assert conf.get_string_list("alpha.build.target.linux") == ["amd64", "arm64"]

    def test_scalar_as_single_item_list(self, conf: Configuration) -> None:
        assert conf.get_string_list("alpha.build.args.go-build") == ["-v"]

    def test_missing_list_is_empty(self, conf: Configuration) -> None:
        assert conf.get_string_list("alpha.build.args.go-get") == []

    def test_get_string_default(self, conf: Configuration) -> None:
        assert conf.get_string("alpha.repos.x.fetcher", "goget") == "goget"

    def test_get_config_missing_returns_none(self, conf: Configuration) -> None:
        assert conf.get_config("alpha.repos") is None

    def test_get_config_null_is_empty(self, conf: Configuration) -> None:
        sub = conf.get_config("alpha.fetchers.git")
        assert sub is not None
        assert sub.is_empty()

    def test_get_config_on_scalar_returns_none(self, conf: Configuration) -> None:
        assert conf.get_config("alpha.build.args.go-build") is None


class TestLoading:
    def test_empty_string(self) -> None:
        assert Configuration.from_string("").is_empty()

    def test_duplicate_top_level_key_rejected(self) -> None:
        with pytest.raises(ConfigError, match="重复的键: app"):
            Configuration.from_string("app: {}\napp: {}\n")

    def test_from_missing_file_is_empty(self, tmp_path) -> None:
        assert Configuration.from_file(tmp_path / "none.yml").is_empty()

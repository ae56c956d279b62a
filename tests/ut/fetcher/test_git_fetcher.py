"""git 拉取策略单元测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from gobuilder.core.configuration import Configuration
from gobuilder.core.exceptions import ConfigError, ExecutionError
from gobuilder.fetcher.git import GitFetcher

URL = "https://github.com/gogap/config.git"


def _repo_conf(**extra) -> Configuration:
    return Configuration({"dir": "github.com/gogap", **extra})


def _make_clone(call) -> None:
    Path(call.cwd, "config").mkdir(parents=True)


@pytest.fixture()
def fetcher(fake_exec) -> GitFetcher:
    return GitFetcher(executor=fake_exec)


class TestClone:
    def test_clone_when_missing(self, fetcher, fake_exec, gopath: Path) -> None:
        fake_exec.on("git", "clone", action=_make_clone)
        result = fetcher.fetch(URL, "", False, _repo_conf(args={"clone": ["--depth", "1"]}))

        clone = fake_exec.find("git", "clone")
        assert len(clone) == 1
        assert clone[0].args == ["git", "clone", "--depth", "1", URL]
        assert clone[0].cwd == str(gopath / "src" / "github.com" / "gogap")
        assert result.cloned
        assert result.path == str(gopath / "src" / "github.com" / "gogap" / "config")

    def test_clone_subsumes_update(self, fetcher, fake_exec, gopath: Path) -> None:
        fake_exec.on("git", "clone", action=_make_clone)
        result = fetcher.fetch(URL, "", True, _repo_conf())
        assert fake_exec.find("git", "pull") == []
        assert fake_exec.find("git", "rev-parse") == []
        assert not result.updated
        assert not result.update_skipped

    def test_existing_no_clone(self, fetcher, fake_exec, gopath: Path) -> None:
        (gopath / "src" / "github.com" / "gogap" / "config").mkdir(parents=True)
        result = fetcher.fetch(URL, "", False, _repo_conf())
        assert fake_exec.calls == []
        assert not result.cloned

    def test_clone_failure_propagates(self, fetcher, fake_exec, gopath: Path) -> None:
        fake_exec.on("git", "clone", returncode=128, stderr="fatal: repository not found")
        with pytest.raises(ExecutionError, match="repository not found"):
            fetcher.fetch(URL, "v1.0.0", False, _repo_conf())
        assert fake_exec.find("git", "checkout") == []

    def test_failure_names_fetcher_and_url(self, fetcher, fake_exec, gopath: Path) -> None:
        (gopath / "src" / "github.com" / "gogap" / "config").mkdir(parents=True)
        fake_exec.on("git", "checkout", returncode=1, stderr="pathspec did not match")
        with pytest.raises(ExecutionError) as exc:
            fetcher.fetch(URL, "v9", False, _repo_conf())
        msg = str(exc.value)
        assert msg.startswith(f"git: 拉取 {URL} 失败")
        assert "git checkout v9失败 (rc=1)" in msg
        assert exc.value.returncode == 1


class TestCheckoutAndUpdate:
    @pytest.mark.parametrize("exists", [True, False])
    def test_revision_always_checked_out(self, fetcher, fake_exec, gopath: Path, exists: bool) -> None:
        pkg_dir = gopath / "src" / "github.com" / "gogap" / "config"
        if exists:
            pkg_dir.mkdir(parents=True)
        fake_exec.on("git", "clone", action=_make_clone)
        result = fetcher.fetch(URL, "v1.0.0", False, _repo_conf())

        checkout = fake_exec.find("git", "checkout")
        assert [c.args for c in checkout] == [["git", "checkout", "v1.0.0"]]
        assert checkout[0].cwd == str(pkg_dir)
        assert result.checked_out

    def test_update_on_branch_pulls(self, fetcher, fake_exec, gopath: Path) -> None:
        (gopath / "src" / "github.com" / "gogap" / "config").mkdir(parents=True)
        fake_exec.on("git", "rev-parse", "--abbrev-ref", stdout="master\n")
        result = fetcher.fetch(URL, "", True, _repo_conf(args={"pull": ["--rebase"]}))
        assert [c.args for c in fake_exec.find("git", "pull")] == [["git", "pull", "--rebase"]]
        assert result.updated

    def test_update_detached_skipped(self, fetcher, fake_exec, gopath: Path, caplog) -> None:
        (gopath / "src" / "github.com" / "gogap" / "config").mkdir(parents=True)
        fake_exec.on("git", "rev-parse", "--abbrev-ref", stdout="HEAD\n")
        with caplog.at_level("WARNING"):
            result = fetcher.fetch(URL, "v1.0.0", True, _repo_conf())
        assert fake_exec.find("git", "pull") == []
        assert result.update_skipped
        assert not result.updated
        assert "detached" in caplog.text


class TestConfigErrors:
    def test_missing_dir(self, fetcher, fake_exec, gopath: Path) -> None:
        with pytest.raises(ConfigError, match="dir"):
            fetcher.fetch(URL, "", False, Configuration())
        assert fake_exec.calls == []

    def test_bad_url(self, fetcher, fake_exec, gopath: Path) -> None:
        with pytest.raises(ConfigError, match="仓库名"):
            fetcher.fetch("config", "", False, _repo_conf())

    def test_empty_gopath(self, fetcher, fake_exec, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GOPATH", "")
        with pytest.raises(ConfigError, match="GOPATH"):
            fetcher.fetch(URL, "", False, _repo_conf())
        assert fake_exec.calls == []

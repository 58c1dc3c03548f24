import os

import pytest

from devbits import goenv


@pytest.fixture(autouse=True)
def _reset(monkeypatch):
    monkeypatch.delenv("GOPATH", raising=False)
    goenv.set_go_paths([])
    yield
    goenv.set_go_paths([])


@pytest.mark.parametrize(
    "version, expected",
    [("1.15.2", "1.15"), ("1.8", "1.8"), ("devel", "devel"), ("1.2.3.4", "1.2")],
)
def test_go_version_short(version, expected):
    assert goenv.go_version_short(version) == expected


def test_all_go_paths_from_env(monkeypatch, tmp_path):
    first, second = str(tmp_path / "a"), str(tmp_path / "b")
    monkeypatch.setenv("GOPATH", os.pathsep.join([first, second]))
    assert goenv.all_go_paths() == [first, second]


def test_all_go_paths_empty_env():
    assert goenv.all_go_paths() == []


def test_set_go_paths_overrides_env(monkeypatch, tmp_path):
    monkeypatch.setenv("GOPATH", str(tmp_path / "env"))
    goenv.set_go_paths([str(tmp_path / "set")])
    assert goenv.all_go_paths() == [str(tmp_path / "set")]


def test_dir_path_to_import_path(tmp_path):
    gopath = str(tmp_path)
    goenv.set_go_paths([gopath])
    dirpath = os.path.join(gopath, "src", "github.com", "x", "y")
    assert goenv.dir_path_to_import_path(dirpath) == os.path.join("github.com", "x", "y")


def test_dir_path_to_import_path_outside(tmp_path):
    goenv.set_go_paths([str(tmp_path / "gopath")])
    assert goenv.dir_path_to_import_path(str(tmp_path / "elsewhere")) == ""


def test_gopath_src_picks_existing(tmp_path):
    first, second = tmp_path / "one", tmp_path / "two"
    target = second / "src" / "tools" / "sql"
    target.mkdir(parents=True)
    goenv.set_go_paths([str(first), str(second)])
    assert goenv.gopath_src("tools", "sql") == str(target)


def test_gopath_src_none_existing_returns_last(tmp_path):
    first, second = tmp_path / "one", tmp_path / "two"
    goenv.set_go_paths([str(first), str(second)])
    assert goenv.gopath_src("pkg") == str(second / "src" / "pkg")


def test_gopath_src_without_paths():
    assert goenv.gopath_src("pkg") == ""


def test_gopath_src_github(tmp_path):
    target = tmp_path / "src" / "github.com" / "someone" / "num"
    target.mkdir(parents=True)
    goenv.set_go_paths([str(tmp_path)])
    assert goenv.gopath_src_github("someone", "num") == str(target)
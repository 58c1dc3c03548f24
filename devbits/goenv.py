"""Locating Go workspaces (GOPATH entries) and deriving import paths from them."""

from __future__ import annotations

import os
from typing import Iterable

_GO_PATHS: list[str] = []


def _split_list(value: str) -> list[str]:
    return value.split(os.pathsep) if value else []


def all_go_paths() -> list[str]:
    """Return the known Go paths, read from the GOPATH environment variable if none are set."""
    if not _GO_PATHS:
        _GO_PATHS[:] = _split_list(os.environ.get("GOPATH", ""))
    return list(_GO_PATHS)


def set_go_paths(paths: Iterable[str]) -> None:
    """Replace the known Go paths."""
    _GO_PATHS[:] = list(paths)


def go_version_short(version: str) -> str:
    """Cut a version such as `1.15.2` down to its major and minor part, `1.15`."""
    first = version.find(".")
    short = version
    last = short.rfind(".")
    while last > first:
        short = short[:last]
        last = short.rfind(".")
    return short


def dir_path_to_import_path(dirpath: str) -> str:
    """Return the import path of a package directory inside a Go path, or ""."""
    for gopath in all_go_paths():
        if dirpath.startswith(gopath):
            src = os.path.normpath(os.path.join(gopath, "src"))
            return dirpath[len(src) + 1:]
    return ""


def gopath_src(*sub_dir_names: str) -> str:
    """Return `<gopath>/src/<sub_dir_names...>` for the first Go path where that directory exists.

    If none exists, the path built from the last Go path is returned.
    """
    gps = ""
    for gopath in all_go_paths():
        gps = os.path.normpath(os.path.join(gopath, "src", *sub_dir_names))
        if os.path.isdir(gps):
            break
    return gps


def gopath_src_github(github_name: str, *sub_dir_names: str) -> str:
    """Return the directory of `github.com/<github_name>/<sub_dir_names...>` inside a Go path."""
    return gopath_src("github.com", github_name, *sub_dir_names)
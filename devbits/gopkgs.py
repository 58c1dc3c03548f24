"""An index of Go packages as reported by `go list -e -json all`."""

from __future__ import annotations

import json
import os
import re
import threading
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from devbits.goenv import all_go_paths
from devbits.srcmsg import SrcMsg, src_msgs_from_lns

_SCOPE_BREAKERS = set("*[](){}")


def _dir(path: str) -> str:
    parent = os.path.dirname(path)
    return os.path.normpath(parent) if parent else "."


def _atoi_or_zero(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


@dataclass
class PackageError:
    """An error loading a package, as reported by `go list`."""

    import_stack: list[str] = field(default_factory=list)
    pos: str = ""
    err: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PackageError":
        return cls(
            import_stack=list(data.get("ImportStack") or []),
            pos=data.get("Pos") or "",
            err=data.get("Err") or "",
        )

    def to_src_msgs(self) -> list[SrcMsg]:
        """Turn the error into source messages."""
        if self.err:
            return src_msgs_from_lns(self.err.split("\n"))
        errpos = self.pos.split(":")
        if len(errpos) >= 3:
            return [
                SrcMsg(
                    ref=errpos[0],
                    msg=self.err,
                    pos1_ln=_atoi_or_zero(errpos[1]) - 1,
                    pos1_ch=_atoi_or_zero(errpos[2]) - 1,
                )
            ]
        return [SrcMsg(ref=errpos[0], msg=self.err)]


@dataclass
class Pkg:
    """One Go package with the fields `go list -json` reports for it."""

    dir: str = ""
    import_path: str = ""
    name: str = ""
    doc: str = ""
    root: str = ""
    go_files: list[str] = field(default_factory=list)
    test_go_files: list[str] = field(default_factory=list)
    x_test_go_files: list[str] = field(default_factory=list)
    invalid_go_files: list[str] = field(default_factory=list)
    imports: list[str] = field(default_factory=list)
    deps: list[str] = field(default_factory=list)
    target: str = ""
    shlib: str = ""
    stale_reason: str = ""
    stale: bool = False
    standard: bool = False
    incomplete: bool = False
    error: Optional[PackageError] = None
    deps_errors: list[PackageError] = field(default_factory=list)
    errs: list[SrcMsg] = field(default_factory=list)
    approx_loc: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Pkg":
        if not isinstance(data, dict):
            raise ValueError("package entry must be a JSON object")
        error = data.get("Error")
        return cls(
            dir=data.get("Dir") or "",
            import_path=data.get("ImportPath") or "",
            name=data.get("Name") or "",
            doc=data.get("Doc") or "",
            root=data.get("Root") or "",
            go_files=list(data.get("GoFiles") or []),
            test_go_files=list(data.get("TestGoFiles") or []),
            x_test_go_files=list(data.get("XTestGoFiles") or []),
            invalid_go_files=list(data.get("InvalidGoFiles") or []),
            imports=list(data.get("Imports") or []),
            deps=list(data.get("Deps") or []),
            target=data.get("Target") or "",
            shlib=data.get("Shlib") or "",
            stale_reason=data.get("StaleReason") or "",
            stale=bool(data.get("Stale")),
            standard=bool(data.get("Standard")),
            incomplete=bool(data.get("Incomplete")),
            error=PackageError.from_dict(error) if error else None,
            deps_errors=[PackageError.from_dict(e) for e in data.get("DepsErrors") or []],
        )

    def __str__(self) -> str:
        return self.import_path

    def is_command(self) -> bool:
        return self.name == "main"

    def is_sorted_prior_to(self, other: "Pkg") -> bool:
        return self.import_path < other.import_path

    def is_sorted_prior_to_by_deps(self, other: "Pkg") -> bool:
        return other.import_path not in self.deps

    def go_file_paths(self, incl_tests: bool) -> list[str]:
        """Full paths of the package's Go files, optionally with its test files."""
        names = self.go_files + (self.test_go_files if incl_tests else [])
        return [os.path.join(self.dir, name) for name in names]

    def count_loc(self) -> int:
        """Approximately count the non-comment, non-blank lines of the non-test files."""
        count = 0
        for path in self.go_file_paths(False):
            try:
                with open(path, encoding="utf-8", errors="replace") as fh:
                    text = fh.read()
            except OSError:
                text = ""
            in_comment = False
            for ln in text.split("\n") if text else []:
                ln = ln.strip()
                if not ln:
                    continue
                if ln.endswith("*/"):
                    in_comment = False
                elif ln.startswith("/*"):
                    in_comment = True
                elif not in_comment and not ln.startswith("//"):
                    count += 1
        self.approx_loc = count
        return count


class PkgIndex:
    """Packages indexed by directory and by import path."""

    def __init__(self, pkgs: Iterable[Pkg] = ()) -> None:
        self.by_dir: dict[str, Pkg] = {}
        self.by_imp: dict[str, Pkg] = {}
        self.errs: list[Pkg] = []
        self._dependants: dict[str, list[str]] = {}
        self._importers: dict[str, list[str]] = {}
        self._lock = threading.Lock()
        self._shortener: Optional[re.Pattern[str]] = None
        for pkg in pkgs:
            self._add(pkg)

    def _add(self, pkg: Pkg) -> None:
        if os.name == "nt":
            pkg.dir = pkg.dir.lower()
        self.by_dir[pkg.dir] = pkg
        self.by_imp[pkg.import_path] = pkg
        if pkg.error is not None:
            pkg.errs = pkg.error.to_src_msgs()
            self.errs.append(pkg)
        self._shortener = None

    @classmethod
    def from_go_list_output(cls, output: str) -> "PkgIndex":
        """Build an index from the concatenated JSON objects that `go list -json` prints."""
        decoder = json.JSONDecoder()
        text = output.strip()
        pkgs = []
        idx = 0
        while idx < len(text):
            obj, idx = decoder.raw_decode(text, idx)
            pkgs.append(Pkg.from_dict(obj))
            while idx < len(text) and text[idx].isspace():
                idx += 1
        return cls(pkgs)

    def dependants(self, pkg: Pkg) -> list[str]:
        """Import paths of all packages that (recursively) depend on `pkg`."""
        with self._lock:
            if pkg.import_path not in self._dependants:
                self._dependants[pkg.import_path] = [
                    p.import_path for p in self.by_dir.values() if pkg.import_path in p.deps
                ]
            return list(self._dependants[pkg.import_path])

    def importers(self, pkg: Pkg) -> list[str]:
        """Import paths of all packages that directly import `pkg`."""
        with self._lock:
            if pkg.import_path not in self._importers:
                self._importers[pkg.import_path] = [
                    p.import_path for p in self.by_dir.values() if pkg.import_path in p.imports
                ]
            return list(self._importers[pkg.import_path])

    def shorten_imp_paths(self, text: str) -> str:
        """Replace every known import path in `text` with its package name."""
        if not self.by_imp:
            return text
        if self._shortener is None:
            keys = sorted((k for k in self.by_imp if k), key=len, reverse=True)
            if not keys:
                return text
            self._shortener = re.compile("|".join(re.escape(k) for k in keys))
        return self._shortener.sub(lambda m: self.by_imp[m.group(0)].name, text)

    def pkgs_for_files(self, *file_paths: str) -> tuple[list[Pkg], bool]:
        """Packages of the given files, and whether the index looks out of date for them."""
        pkgs: list[Pkg] = []
        should_refresh = False
        for fp in file_paths:
            dp = _dir(fp)
            if any(p.dir == dp for p in pkgs):
                continue
            pkg = self.by_dir.get(dp)
            if pkg is not None:
                pkgs.append(pkg)
            elif not should_refresh and os.path.splitext(fp)[1].lower() == ".go":
                should_refresh = any(
                    dp.startswith(os.path.normpath(os.path.join(gp, "src")))
                    for gp in all_go_paths()
                )
        return pkgs, should_refresh

    def _nearest_above(self, dirpath: str) -> Optional[Pkg]:
        dp, last = dirpath, ""
        while dp and dp != last:
            pkg = self.by_dir.get(dp)
            if pkg is not None:
                return pkg
            last, dp = dp, _dir(dp)
        return None

    def _scope_candidate(self, pkg: Pkg) -> Optional[Pkg]:
        if pkg.is_command() or pkg.test_go_files:
            return pkg
        prefix = pkg.dir + os.sep
        for sub in self.by_dir.values():
            if sub.dir.startswith(prefix) and (sub.is_command() or sub.test_go_files):
                return sub
        return None

    def guru_minimal_scope_for(self, go_file_path: str) -> tuple[str, bool]:
        """The import path of the smallest useful guru scope for a file, and the refresh hint."""
        pkgs, should_refresh = self.pkgs_for_files(go_file_path)
        pkg: Optional[Pkg] = pkgs[0] if pkgs else None
        if pkg is None:
            pkg = self._nearest_above(_dir(_dir(go_file_path)))
        while pkg is not None and self._scope_candidate(pkg) is None:
            pkg = self._nearest_above(_dir(pkg.dir))
        return (pkg.import_path if pkg is not None else ""), should_refresh

    def guru_scope_exclusions(self, excl_pkgs: dict[str, bool]) -> dict[str, bool]:
        """Add broken packages and their dependants to `excl_pkgs` and return it.

        Packages already covered by an excluded `.../...` pattern are not added.
        """
        pats = [key[:-3] for key, excl in excl_pkgs.items() if excl and key.endswith("/...")]
        broken: dict[str, bool] = {}
        for pkg in self.by_imp.values():
            if (
                pkg.error is not None
                or pkg.errs
                or pkg.deps_errors
                or pkg.incomplete
                or pkg.invalid_go_files
            ):
                broken[pkg.import_path] = True
                for dep in self.dependants(pkg):
                    broken[dep] = True
        for imppath in broken:
            covered = any(imppath.startswith(pat) or imppath == pat[:-1] for pat in pats)
            if not covered:
                excl_pkgs[imppath] = True
        return excl_pkgs

    def imp_paths_to_names_in_ln(self, ln: str, cur_pkg_dir: str) -> str:
        """Replace qualified import paths in `ln` by package names (or nothing, for `cur_pkg_dir`)."""
        isla = ln.find("/")
        if isla < 0:
            return ln
        isla1 = isla + 1
        idot = ln[isla1:].find(".")
        if idot <= 0:
            return ln
        imppath = ln[: isla1 + idot]
        ipos = 0
        for i, ch in enumerate(imppath):
            if ch == "/":
                break
            if ch in _SCOPE_BREAKERS or ch.isspace():
                ipos = i + 1
        imppath = imppath[ipos:]
        pkg = self.by_imp.get(imppath)
        if pkg is None:
            return ln
        replacement = pkg.name + "." if pkg.dir != cur_pkg_dir else ""
        ln = ln.replace(imppath + ".", replacement)
        return self.imp_paths_to_names_in_ln(ln, cur_pkg_dir)

    def pkgs_by_name(self, name: str) -> list[str]:
        """Import paths of all packages called `name`."""
        return [pkg.import_path for pkg in self.by_imp.values() if pkg.name == name]
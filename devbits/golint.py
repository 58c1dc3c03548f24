"""Running Go linters and collecting their findings as source messages."""

from __future__ import annotations

import functools
import subprocess

from devbits.goenv import go_version_short
from devbits.srcmsg import SrcMsg, cmd_exec_on_src

GOLINT_IGNORE_SUBSTRINGS = [
    " should have comment ",
    "ALL_CAPS",
    "underscore",
    "CamelCase",
    "it will be inferred from the right-hand side",
    'should be of the form "',
]


@functools.lru_cache(maxsize=1)
def _current_go_version_short() -> str:
    try:
        proc = subprocess.run(
            ["go", "version"],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError:
        return ""
    if proc.returncode != 0 or proc.stderr:
        return ""
    out = proc.stdout.decode("utf-8", errors="replace").strip()
    out = out.removeprefix("go version ") if hasattr(out, "removeprefix") else out
    if not out:
        return ""
    version = out.split(" ")[0].strip()
    if version.startswith("go"):
        version = version[2:]
    return go_version_short(version)


def golint_censored(msg: str) -> bool:
    """Tell whether a golint message is one of the kinds that are ignored."""
    if any(s in msg for s in GOLINT_IGNORE_SUBSTRINGS):
        return True
    words = msg.split(" ")
    return (
        len(words) >= 5
        and words[-3] == "should"
        and words[-2] == "be"
        and words[-1].lower() == words[-4].lower()
    )


def lint_check(cmdname: str, pkgimppath: str) -> list[SrcMsg]:
    """Run one of the `*check` linters on a package."""
    prefix = pkgimppath + ": "

    def reline(ln: str) -> str:
        return ln[len(prefix):] if ln.startswith(prefix) else ""

    msgs = []
    for srcref in cmd_exec_on_src(False, reline, cmdname, pkgimppath):
        if srcref.msg.startswith(pkgimppath + "."):
            srcref.msg = srcref.msg[len(pkgimppath) + 1:]
        if cmdname in ("varcheck", "structcheck"):
            srcref.msg = "unused & unexported: " + srcref.msg
        msgs.append(srcref)
    return msgs


def lint_ineff_assign(dirrelpath: str) -> list[SrcMsg]:
    return cmd_exec_on_src(False, None, "ineffassign", "-n", dirrelpath)


def lint_via_pkg_imp_path(cmdname: str, pkgimppath: str, incl_stderr: bool) -> list[SrcMsg]:
    return cmd_exec_on_src(incl_stderr, None, cmdname, pkgimppath)


def lint_mv_dan(cmdname: str, pkgimppath: str) -> list[SrcMsg]:
    if cmdname == "unindent":
        args = ["-exp.r", "3.01", pkgimppath]
    elif cmdname == "unparam":
        args = ["-exported", "-tests", "true", pkgimppath]
    else:
        args = [pkgimppath]
    return cmd_exec_on_src(False, None, cmdname, *args)


def lint_honnef(cmdname: str, pkgimppath: str) -> list[SrcMsg]:
    return cmd_exec_on_src(False, None, cmdname, "-go", _current_go_version_short(), pkgimppath)


def lint_go_const(dirpath: str) -> list[SrcMsg]:
    return cmd_exec_on_src(False, None, "goconst", "-match-constant", dirpath)


def lint_go_simple(pkgimppath: str) -> list[SrcMsg]:
    return cmd_exec_on_src(False, None, "gosimple", "-go", _current_go_version_short(), pkgimppath)


def lint_errcheck(pkgimppath: str) -> list[SrcMsg]:
    msgs = cmd_exec_on_src(
        False, None, "errcheck", "-abspath", "-asserts", "-blank", "-ignoretests", "false", pkgimppath
    )
    for m in msgs:
        m.msg = "Ignores a returned `error`: " + m.msg
    return msgs


def lint_golint(pkgimppathordirpath: str) -> list[SrcMsg]:
    return [
        m
        for m in cmd_exec_on_src(False, None, "golint", pkgimppathordirpath)
        if not golint_censored(m.msg)
    ]


def lint_go_vet(pkgimppath: str) -> list[SrcMsg]:
    def reline(ln: str) -> str:
        if ln.startswith("vet: ") or ln.startswith("exit status "):
            return ""
        return ln

    return cmd_exec_on_src(
        True, reline, "go", "vet", "-shadow=true", "-shadowstrict", "-all", pkgimppath
    )
"""Source-location messages parsed from the output of compilers and linters."""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

Reline = Optional[Callable[[str], str]]

_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass
class SrcMsg:
    """A message that refers to a position (or span) in a source file."""

    flag: int = 0
    ref: str = ""
    msg: str = ""
    misc: str = ""
    pos1_ln: int = 0
    pos1_ch: int = 0
    pos2_ln: int = 0
    pos2_ch: int = 0
    data: dict[str, Any] = field(default_factory=dict)


def _atoi(text: str) -> Optional[int]:
    if _INT_RE.fullmatch(text):
        return int(text)
    return None


def _split(text: str, sep: str) -> list[str]:
    return text.split(sep) if text else []


def ln_relify(ln: str, src_dir: str) -> str:
    """Return `ln` relative to `src_dir`, or "" if it does not start with it."""
    if ln.startswith(src_dir):
        return ln[len(src_dir):].lstrip("/\\")
    return ""


def src_msg_from_ln(ln: str) -> Optional[SrcMsg]:
    """Parse a `file:line:col: message` line, or return None if it is not one."""
    bits = _split(ln, ":")
    if len(bits) < 3 or not bits[0]:
        return None
    line_no = _atoi(bits[1])
    col_no = _atoi(bits[2])
    if line_no is None:
        msg_from = 1
    elif col_no is None:
        msg_from = 2
    else:
        msg_from = 3
    msg = ":".join(bits[msg_from:]).strip()
    return SrcMsg(
        msg=msg,
        ref=bits[0],
        pos1_ln=1 if line_no is None else line_no,
        pos1_ch=1 if col_no is None else col_no,
    )


def src_msgs_from_lns(lines: Iterable[str]) -> list[SrcMsg]:
    """Parse lines into messages; unparsable lines continue the previous message."""
    msgs: list[SrcMsg] = []
    for line in lines:
        item = src_msg_from_ln(line)
        if item is not None:
            msgs.append(item)
        elif msgs:
            msgs[-1].msg += "\n" + line
    return msgs


def sort_src_msgs(msgs: Iterable[SrcMsg]) -> list[SrcMsg]:
    """Return the messages ordered by their message text."""
    return sorted(msgs, key=lambda m: m.msg)


def cmd_exec_on_src_in(
    dir: str, incl_stderr: bool, reline: Reline, cmdname: str, *args: str
) -> list[SrcMsg]:
    """Run a command in `dir` and parse its output into messages."""
    try:
        proc = subprocess.run(
            [cmdname, *args],
            cwd=dir or None,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT if incl_stderr else subprocess.DEVNULL,
            check=False,
        )
        output = proc.stdout.decode("utf-8", errors="replace")
    except OSError:
        output = ""
    cmdout = output.strip()
    lines = _split(cmdout, "\n")
    if reline is not None:
        lines = [reline(line) for line in lines]
    msgs = src_msgs_from_lns(lines)
    if not msgs and cmdout and not dir and incl_stderr and reline is None:
        msgs.append(SrcMsg(msg=cmdout, pos1_ch=1, pos1_ln=1))
    return msgs


def cmd_exec_on_src(incl_stderr: bool, reline: Reline, cmdname: str, *args: str) -> list[SrcMsg]:
    """Run a command in the current directory and parse its output into messages."""
    return cmd_exec_on_src_in("", incl_stderr, reline, cmdname, *args)
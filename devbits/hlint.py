"""Running hlint and turning its JSON report into source messages."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Sequence

from devbits.srcmsg import SrcMsg

HLINT_IGNORE = ["Use infix", "Use camelCase", "Use String"]


@dataclass
class Hlint:
    """One suggestion from an hlint JSON report."""

    module: str = ""
    decl: str = ""
    severity: str = ""
    hint: str = ""
    file: str = ""
    start_line: int = 0
    start_column: int = 0
    end_line: int = 0
    end_column: int = 0
    from_: str = ""
    to: str = ""
    note: list[str] = field(default_factory=list)
    refactorings: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Hlint":
        if not isinstance(data, dict):
            raise TypeError("hlint entry must be a JSON object")
        return cls(
            module=data.get("module") or "",
            decl=data.get("decl") or "",
            severity=data.get("severity") or "",
            hint=data.get("hint") or "",
            file=data.get("file") or "",
            start_line=data.get("startLine") or 0,
            start_column=data.get("startColumn") or 0,
            end_line=data.get("endLine") or 0,
            end_column=data.get("endColumn") or 0,
            from_=data.get("from") or "",
            to=data.get("to") or "",
            note=list(data.get("note") or []),
            refactorings=data.get("refactorings") or "",
        )


def hlint_command(file_rel_paths: Sequence[str]) -> list[str]:
    """Return the hlint command line that checks the given files."""
    cmd = ["hlint", "--color=never", "--json", "-j", "--cross", "--no-exit-code", "-XHaskell2010"]
    for ign in HLINT_IGNORE:
        cmd += ["--ignore", ign]
    cmd += list(file_rel_paths)
    return cmd


def parse_hlint(json_output: str, file_rel_paths: Sequence[str]) -> list[SrcMsg]:
    """Turn hlint's JSON output into messages, skipping suggestions of severity Error."""
    json_output = json_output.strip()
    if not json_output:
        return []
    json_output = json_output.replace("\n", "").replace("\r", "")
    try:
        entries = json.loads(json_output)
        if not isinstance(entries, list):
            raise TypeError("expected a JSON array")
        hlints = [Hlint.from_dict(entry) for entry in entries]
    except (ValueError, TypeError) as err:
        return [
            SrcMsg(
                msg=f"Problematic HlintJSON: {err} ➜ {json_output}",
                ref=file_rel_paths[0],
                pos1_ln=1,
                pos1_ch=1,
            )
        ]
    msgs = []
    for hl in hlints:
        if hl.severity == "Error":
            continue
        msgs.append(
            SrcMsg(
                msg=hl.hint,
                ref=hl.file,
                pos1_ln=hl.start_line,
                pos1_ch=hl.start_column,
                pos2_ln=hl.end_line,
                pos2_ch=hl.end_column,
                misc=f"{hl.module}.{hl.decl}".strip("."),
                data={"rf": hl.from_, "rt": hl.to, "rn": hl.note},
            )
        )
    return msgs
"""Reading bower.json package manifests."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import SplitResult, urlsplit

_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*:")


@dataclass
class BowerRepository:
    type: str = ""
    url: str = ""


@dataclass
class BowerFile:
    """The fields of a bower.json manifest."""

    name: str = ""
    homepage: str = ""
    description: str = ""
    license: str = ""
    repository: BowerRepository = field(default_factory=BowerRepository)
    ignore: list[str] = field(default_factory=list)
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)
    version: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BowerFile":
        if not isinstance(data, dict):
            raise ValueError("bower manifest must be a JSON object")
        repo = data.get("repository") or {}
        return cls(
            name=data.get("name") or "",
            homepage=data.get("homepage") or "",
            description=data.get("description") or "",
            license=data.get("license") or "",
            repository=BowerRepository(type=repo.get("type") or "", url=repo.get("url") or ""),
            ignore=list(data.get("ignore") or []),
            dependencies=dict(data.get("dependencies") or {}),
            dev_dependencies=dict(data.get("devDependencies") or {}),
            version=data.get("version") or "",
        )

    def repository_url_parsed(self) -> Optional[SplitResult]:
        """Parse the repository URL as an absolute URI or path, or return None."""
        url = self.repository.url
        if not url or not (url.startswith("/") or _SCHEME_RE.match(url)):
            return None
        try:
            return urlsplit(url)
        except ValueError:
            return None


def load_from_file(json_file_path: Union[str, Path]) -> BowerFile:
    """Load a bower.json file."""
    with open(json_file_path, encoding="utf-8") as fh:
        return BowerFile.from_dict(json.load(fh))
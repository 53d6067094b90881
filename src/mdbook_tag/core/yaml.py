from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

_FM_PATTERN = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*\r?$\n?", re.DOTALL | re.MULTILINE)

@dataclass(frozen=True)
class Frontmatter:
    raw: Optional[str]     # YAML between the fences, untouched; None without front matter
    data: Dict[str, Any]
    body: str

    def title(self) -> Optional[str]:
        t = self.data.get("title")
        if t is None:
            return None
        t = str(t).strip()
        return t or None

    def render(self, body: str) -> str:
        if self.raw is None:
            return body
        return f"---\n{self.raw}---\n\n{body}"

def parse_frontmatter(md: str) -> Frontmatter:
    """
    Split a leading `---` fenced YAML block off a markdown source. The
    block is kept verbatim so it can be written back unchanged.
    """
    m = _FM_PATTERN.match(md)
    if m is None:
        if re.match(r"---[ \t]*\r?\n", md):
            raise ValueError("Malformed YAML frontmatter: missing closing '---'")
        return Frontmatter(raw=None, data={}, body=md)

    raw = m.group(1)
    body = md[m.end():].lstrip("\r\n")
    try:
        data = yaml.safe_load(raw) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Malformed YAML frontmatter: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("Malformed YAML frontmatter: top-level must be a mapping")
    return Frontmatter(raw=raw, data=data, body=body)

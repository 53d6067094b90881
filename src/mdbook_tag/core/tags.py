from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from mdbook_tag.core.book import Chapter

TAG_STRING_PREFIX = "tag:"

@dataclass(frozen=True)
class Tag:
    """Where an alias was found."""
    chapter_name: str
    path: Optional[str]
    parent_names: Tuple[str, ...] = ()

    def sort_key(self) -> List[str]:
        return [*self.parent_names, self.chapter_name]

@dataclass(frozen=True)
class AliasedTag:
    alias: str
    tag: Tag

    @classmethod
    def create(cls, alias: str, chapter: Chapter) -> "AliasedTag":
        return cls(
            alias=alias.lower(),
            tag=Tag(
                chapter_name=chapter.name,
                path=chapter.path,
                parent_names=tuple(chapter.parent_names),
            ),
        )

TagIndex = Dict[str, List[Tag]]

def match_tag_marker(code: str) -> Optional[str]:
    """
    Return the alias of an inline code span like `tag:hello`, or None.

    The prefix must open the stripped span and be followed by something;
    the alias keeps its case and inner whitespace.
    """
    code = (code or "").strip()
    if not code.startswith(TAG_STRING_PREFIX) or len(code) <= len(TAG_STRING_PREFIX):
        return None
    return code[len(TAG_STRING_PREFIX):].strip()

def group_tags(tags: Iterable[AliasedTag]) -> TagIndex:
    out: TagIndex = {}
    for t in tags:
        out.setdefault(t.alias, []).append(t.tag)
    return out

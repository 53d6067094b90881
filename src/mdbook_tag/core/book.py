from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

@dataclass
class Chapter:
    name: str
    content: str = ""
    number: Optional[List[int]] = None
    sub_items: List["BookItem"] = field(default_factory=list)
    path: Optional[str] = None        # relative output path; None for draft chapters
    source_path: Optional[str] = None
    parent_names: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)  # keys we don't model, kept for round-trips

@dataclass(frozen=True)
class Separator:
    pass

@dataclass(frozen=True)
class PartTitle:
    title: str

BookItem = Union[Chapter, Separator, PartTitle]

def _walk(items: List[BookItem]) -> Iterator[BookItem]:
    # mdbook order: a chapter's sub items come before the chapter itself
    for item in items:
        if isinstance(item, Chapter):
            yield from _walk(item.sub_items)
        yield item

@dataclass
class Book:
    sections: List[BookItem] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    def for_each_mut(self, func: Callable[[BookItem], None]) -> None:
        for item in list(_walk(self.sections)):
            func(item)

    def iter_chapters(self) -> Iterator[Chapter]:
        for item in _walk(self.sections):
            if isinstance(item, Chapter):
                yield item

    def push_item(self, item: BookItem) -> "Book":
        self.sections.append(item)
        return self

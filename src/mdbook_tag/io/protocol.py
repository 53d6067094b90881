from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, TextIO, Tuple

from mdbook_tag.core.book import Book, BookItem, Chapter, PartTitle, Separator

_CHAPTER_KEYS = ("name", "content", "number", "sub_items", "path", "source_path", "parent_names")

@dataclass(frozen=True)
class PreprocessorContext:
    root: str = ""
    config: Dict[str, Any] = field(default_factory=dict)
    renderer: str = "html"
    mdbook_version: str = ""

    def preprocessor_config(self, name: str) -> Optional[Mapping[str, Any]]:
        table = (self.config.get("preprocessor") or {}).get(name)
        return table if isinstance(table, dict) else None

# ---- decoding ----

def _chapter_from_json(obj: Mapping[str, Any]) -> Chapter:
    if not isinstance(obj.get("name"), str):
        raise ValueError("Malformed book JSON: chapter without a name")
    return Chapter(
        name=obj["name"],
        content=obj.get("content") or "",
        number=obj.get("number"),
        sub_items=[_item_from_json(x) for x in obj.get("sub_items") or []],
        path=obj.get("path"),
        source_path=obj.get("source_path"),
        parent_names=list(obj.get("parent_names") or []),
        extra={k: v for k, v in obj.items() if k not in _CHAPTER_KEYS},
    )

def _item_from_json(obj: Any) -> BookItem:
    if obj == "Separator":
        return Separator()
    if isinstance(obj, dict) and len(obj) == 1:
        (kind, value), = obj.items()
        if kind == "Chapter" and isinstance(value, dict):
            return _chapter_from_json(value)
        if kind == "PartTitle" and isinstance(value, str):
            return PartTitle(value)
    raise ValueError(f"Malformed book JSON: unknown item {obj!r:.80}")

def book_from_json(obj: Mapping[str, Any]) -> Book:
    if not isinstance(obj, dict) or not isinstance(obj.get("sections"), list):
        raise ValueError("Malformed book JSON: expected an object with 'sections'")
    return Book(
        sections=[_item_from_json(x) for x in obj["sections"]],
        extra={k: v for k, v in obj.items() if k != "sections"},
    )

def context_from_json(obj: Mapping[str, Any]) -> PreprocessorContext:
    if not isinstance(obj, dict):
        raise ValueError("Malformed preprocessor context: expected an object")
    return PreprocessorContext(
        root=str(obj.get("root", "")),
        config=obj.get("config") or {},
        renderer=str(obj.get("renderer", "html")),
        mdbook_version=str(obj.get("mdbook_version", "")),
    )

def parse_input(stream: TextIO) -> Tuple[PreprocessorContext, Book]:
    try:
        data = json.load(stream)
    except json.JSONDecodeError as e:
        raise ValueError(f"Unable to parse the input: {e}") from e
    if not isinstance(data, list) or len(data) != 2:
        raise ValueError("Unable to parse the input: expected [context, book]")
    return context_from_json(data[0]), book_from_json(data[1])

# ---- encoding ----

def _item_to_json(item: BookItem) -> Any:
    if isinstance(item, Separator):
        return "Separator"
    if isinstance(item, PartTitle):
        return {"PartTitle": item.title}
    out: Dict[str, Any] = dict(item.extra)
    out.update(
        name=item.name,
        content=item.content,
        number=item.number,
        sub_items=[_item_to_json(x) for x in item.sub_items],
        path=item.path,
        source_path=item.source_path,
        parent_names=list(item.parent_names),
    )
    return {"Chapter": out}

def book_to_json(book: Book) -> Dict[str, Any]:
    out: Dict[str, Any] = {"sections": [_item_to_json(x) for x in book.sections]}
    out.update(book.extra)
    return out

def write_book(book: Book, stream: TextIO) -> None:
    json.dump(book_to_json(book), stream, ensure_ascii=False)

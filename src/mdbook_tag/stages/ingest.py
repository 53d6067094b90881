from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Collection, Dict, List, Optional

from mdbook_tag.core.book import Book, BookItem, Chapter
from mdbook_tag.core.yaml import Frontmatter, parse_frontmatter
from mdbook_tag.io.fs import SourceDir, read_markdown, scan_book_dir
from mdbook_tag.logging import get_logger

log = get_logger()

@dataclass
class IngestResult:
    book: Book
    front_matter: Dict[str, Frontmatter] = field(default_factory=dict)  # chapter path -> front matter
    total: int = 0
    skipped: int = 0

def ingest(root: Path, *, exclude: Collection[str] = ()) -> IngestResult:
    """
    Load a directory as a book. A directory's README.md (or index.md) is
    the parent chapter of everything else in it; a directory without one
    gets a draft chapter named after it.
    """
    tree = scan_book_dir(root, skip={PurePosixPath(x) for x in exclude})
    res = IngestResult(book=Book(), total=tree.count())
    res.book.sections = _items(root, tree, [], res)
    return res

def _load(root: Path, rel: PurePosixPath, parents: List[str], res: IngestResult) -> Optional[Chapter]:
    rel_str = rel.as_posix()
    try:
        raw = read_markdown(root, rel)
    except UnicodeDecodeError:
        log.error(f"Non-UTF8 rejected: {rel_str}")
        res.skipped += 1
        return None

    try:
        fm = parse_frontmatter(raw)
    except ValueError as e:
        log.error(f"YAML error in {rel_str}: {e}")
        res.skipped += 1
        return None

    res.front_matter[rel_str] = fm
    return Chapter(
        name=fm.title() or rel.stem,
        content=fm.body,
        path=rel_str,
        source_path=rel_str,
        parent_names=list(parents),
    )

def _items(root: Path, d: SourceDir, parents: List[str], res: IngestResult) -> List[BookItem]:
    items: List[BookItem] = []
    for rel in d.files:
        chapter = _load(root, rel, parents, res)
        if chapter is not None:
            items.append(chapter)

    for sub in d.dirs:
        parent = _load(root, sub.index, parents, res) if sub.index is not None else None
        if parent is None:
            parent = Chapter(name=sub.rel.name, parent_names=list(parents))
        parent.sub_items = _items(root, sub, [*parents, parent.name], res)
        items.append(parent)
    return items

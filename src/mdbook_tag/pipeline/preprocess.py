from __future__ import annotations

from typing import List, Optional, Tuple

from mdbook_tag.config import PREPROCESSOR_NAME, TagConfig
from mdbook_tag.core.book import Book, BookItem, Chapter, Separator
from mdbook_tag.core.tags import AliasedTag, TagIndex, group_tags
from mdbook_tag.io.protocol import PreprocessorContext
from mdbook_tag.logging import get_logger
from mdbook_tag.stages.extract import process_chapter
from mdbook_tag.stages.index_page import build_tags_page

log = get_logger()

def tag_book(book: Book, cfg: TagConfig) -> Tuple[TagIndex, Optional[Chapter]]:
    """
    Rewrite the tag markers of every chapter and build the index page (None
    when no tag was found). The book itself is not extended.

    If any chapter or the index page fails, chapters already rewritten get
    their original content back and the error propagates.
    """
    originals: List[Tuple[Chapter, str]] = []
    raw_tags: List[AliasedTag] = []

    def visit(item: BookItem) -> None:
        if not isinstance(item, Chapter):
            return
        originals.append((item, item.content))
        found = process_chapter(item, output_filename=cfg.filename)
        if found:
            log.debug("%s: %d tag(s)", item.path or item.name, len(found))
        raw_tags.extend(found)

    try:
        book.for_each_mut(visit)
        tags = group_tags(raw_tags)
        tag_page = build_tags_page(tags, output_filename=cfg.filename) if tags else None
    except Exception:
        for chapter, content in originals:
            chapter.content = content
        log.warning("tagging aborted; restored %d chapter(s)", len(originals))
        raise

    return tags, tag_page

class TagPreprocessor:
    name = PREPROCESSOR_NAME

    def supports_renderer(self, renderer: str) -> bool:
        # only markdown goes out, so any renderer will do
        return True

    def run(self, ctx: PreprocessorContext, book: Book) -> Book:
        cfg = TagConfig.from_table(ctx.preprocessor_config(self.name))
        tags, tag_page = tag_book(book, cfg)
        if tag_page is None:
            return book

        log.info(
            "tagged %d occurrence(s) of %d alias(es) -> %s",
            sum(len(v) for v in tags.values()), len(tags), cfg.filename,
        )
        book.push_item(Separator())
        book.push_item(tag_page)
        return book

from __future__ import annotations

from dataclasses import dataclass

from mdbook_tag.config import BuildConfig, TagConfig
from mdbook_tag.io.fs import write_markdown
from mdbook_tag.logging import get_logger
from mdbook_tag.pipeline.preprocess import tag_book
from mdbook_tag.stages.ingest import ingest

log = get_logger()

@dataclass(frozen=True)
class BuildStats:
    total: int
    processed: int
    skipped: int
    aliases: int
    occurrences: int

def build(cfg: BuildConfig) -> BuildStats:
    """
    Tag a directory of markdown files the way the preprocessor tags a book
    and write the result, plus the index page, to the output directory.
    """
    res = ingest(cfg.input_dir, exclude=[cfg.filename])
    tags, tag_page = tag_book(res.book, TagConfig(filename=cfg.filename))

    for chapter in res.book.iter_chapters():
        if chapter.path is None:
            continue  # directory without a README
        if cfg.dry_run:
            log.info(f"[dry-run] would write: {chapter.path}")
            continue
        fm = res.front_matter[chapter.path]
        write_markdown(cfg.output_dir, chapter.path, fm.render(chapter.content))

    if tag_page is not None:
        if cfg.dry_run:
            log.info(f"[dry-run] would write: {cfg.filename}")
        else:
            write_markdown(cfg.output_dir, cfg.filename, tag_page.content)

    return BuildStats(
        total=res.total,
        processed=len(res.front_matter),
        skipped=res.skipped,
        aliases=len(tags),
        occurrences=sum(len(v) for v in tags.values()),
    )

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from mdbook_tag.config import DEFAULT_FILENAME, BuildConfig
from mdbook_tag.errors import TagError
from mdbook_tag.io.protocol import parse_input, write_book
from mdbook_tag.logging import get_logger
from mdbook_tag.pipeline.build import build
from mdbook_tag.pipeline.preprocess import TagPreprocessor

log = get_logger()

def _preprocess(pre: TagPreprocessor, stdin=None, stdout=None) -> int:
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    ctx, book = parse_input(stdin)
    book = pre.run(ctx, book)
    write_book(book, stdout)
    return 0

def main(argv=None, stdin=None, stdout=None) -> int:
    p = argparse.ArgumentParser(prog="mdbook-tag", description="mdbook preprocessor that links `tag:` markers to a tag index")
    sub = p.add_subparsers(dest="cmd")

    s = sub.add_parser("supports", help="Check whether a renderer is supported (used by mdbook)")
    s.add_argument("renderer", help="Renderer name, e.g. html")

    b = sub.add_parser("build", help="Tag a directory of markdown files without mdbook")
    b.add_argument("src", help="Path to the input directory")
    b.add_argument("--output", required=True, help="Path to the output directory")
    b.add_argument("--filename", default=DEFAULT_FILENAME, help=f"Index page file name (default: {DEFAULT_FILENAME})")
    b.add_argument("--dry-run", action="store_true", help="No writes; report actions")

    args = p.parse_args(argv)
    pre = TagPreprocessor()

    if args.cmd == "supports":
        return 0 if pre.supports_renderer(args.renderer) else 1

    try:
        if args.cmd == "build":
            cfg = BuildConfig(
                input_dir=Path(args.src).expanduser().resolve(),
                output_dir=Path(args.output).expanduser().resolve(),
                filename=args.filename,
                dry_run=bool(args.dry_run),
            )
            stats = build(cfg)
            log.info(
                "done: total=%d processed=%d skipped=%d aliases=%d occurrences=%d output=%s",
                stats.total, stats.processed, stats.skipped, stats.aliases, stats.occurrences, cfg.output_dir,
            )
            return 0
        return _preprocess(pre, stdin, stdout)
    except (TagError, ValueError) as e:
        log.error(f"{pre.name}: {e}")
        return 1

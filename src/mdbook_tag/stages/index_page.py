from __future__ import annotations

from typing import List

from markdown_it.token import Token

from mdbook_tag.config import DEFAULT_FILENAME
from mdbook_tag.core.book import Chapter
from mdbook_tag.core.markdown import code_token, heading, link_tokens, paragraph, render, text_token
from mdbook_tag.core.tags import Tag, TagIndex
from mdbook_tag.errors import PathResolutionError

TAGS_PAGE_TITLE = "Tags"

def _breadcrumb(parent_names) -> str:
    if not parent_names:
        return "/"
    return "/" + "/".join(parent_names) + "/"

def _path_str(tag: Tag) -> str:
    if tag.path is None:
        raise PathResolutionError(f"Couldn't build output path for chapter {tag.chapter_name!r}: no path")
    path = str(tag.path)
    try:
        path.encode("utf-8")
    except UnicodeEncodeError as e:
        raise PathResolutionError(f"Couldn't build output path for chapter {tag.chapter_name!r}: {e}") from e
    return path

def _entry(tag: Tag) -> List[Token]:
    path = _path_str(tag)
    return paragraph([
        text_token(_breadcrumb(tag.parent_names)),
        *link_tokens(path, tag.chapter_name, [text_token(tag.chapter_name)]),
    ])

def build_tags_page(tags_map: TagIndex, *, output_filename: str = DEFAULT_FILENAME) -> Chapter:
    """
    Render the index page: one section per alias (sorted), each listing the
    chapters the alias appears in, ordered by their place in the book.
    """
    contents: List[Token] = heading(1, [text_token(TAGS_PAGE_TITLE)])

    for alias, tags in sorted(tags_map.items(), key=lambda kv: kv[0]):
        contents += heading(2, [code_token(alias)])
        for tag in sorted(tags, key=Tag.sort_key):
            contents += _entry(tag)

    return Chapter(
        name=TAGS_PAGE_TITLE,
        content=render(contents),
        path=f"./{output_filename}",
    )

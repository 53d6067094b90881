from __future__ import annotations

from typing import Iterable, Iterator, List

from markdown_it.token import Token

from mdbook_tag.config import DEFAULT_FILENAME
from mdbook_tag.core.book import Chapter
from mdbook_tag.core.markdown import code_token, iter_inline, link_tokens, parse, path_to_root, render
from mdbook_tag.core.tags import AliasedTag, match_tag_marker

def _tag_link(alias: str, chapter: Chapter, output_filename: str) -> List[Token]:
    hash_ = f"#{alias}"
    href = f"{path_to_root(chapter.path)}{output_filename}{hash_}"
    return link_tokens(href, f"Tag: {alias}", [code_token(hash_)])

def _rewrite_children(
    children: Iterable[Token],
    chapter: Chapter,
    output_filename: str,
    found: List[AliasedTag],
) -> Iterator[Token]:
    for tok in children:
        if tok.type == "image" and tok.children:
            # alt text is inline markdown too
            tok.children = list(_rewrite_children(tok.children, chapter, output_filename, found))
            yield tok
            continue
        if tok.type != "code_inline":
            yield tok
            continue
        alias = match_tag_marker(tok.content)
        if alias is None:
            yield tok
            continue
        found.append(AliasedTag.create(alias, chapter))
        yield from _tag_link(alias, chapter, output_filename)

def process_chapter(chapter: Chapter, *, output_filename: str = DEFAULT_FILENAME) -> List[AliasedTag]:
    """
    Replace every `tag:<alias>` code span in the chapter with a link to the
    alias's entry on the index page. The chapter content is rewritten in
    place; the tags are returned in document order.

    Raises SerializationError if the rewritten tokens cannot be rendered.
    """
    mdit, tokens, env = parse(chapter.content)
    found: List[AliasedTag] = []

    for inline in iter_inline(tokens):
        if inline.children:
            inline.children = list(_rewrite_children(inline.children, chapter, output_filename, found))

    chapter.content = render(tokens, mdit, env)
    return found

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

import mdformat.plugins
from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdformat.renderer import MDRenderer, RenderContext, RenderTreeNode

from mdbook_tag.errors import SerializationError

# mdbook's parser turns on tables, strikethrough, task lists and footnotes;
# "gfm" covers the first three (and pulls in "tables").
MDFORMAT_EXTENSIONS = ("gfm", "footnote")

def _link_destination(uri: str) -> str:
    if not uri or any(c in uri for c in " <>()"):
        return f"<{uri}>"
    return uri

def _image(node: RenderTreeNode, context: RenderContext) -> str:
    # mdformat renders alt text as plain text and drops code spans
    description = "".join(child.render(context) for child in node.children)
    ref_label = node.meta.get("label")
    if ref_label:
        context.env["used_refs"].add(ref_label)
        ref_label_repr = ref_label.lower()
        if description.lower() == ref_label_repr:
            return f"![{description}]"
        return f"![{description}][{ref_label_repr}]"
    uri = _link_destination(str(node.attrs["src"]))
    title = node.attrs.get("title")
    if title is None:
        return f"![{description}]({uri})"
    title = str(title).replace('"', '\\"')
    return f'![{description}]({uri} "{title}")'

class _InlineAlt:
    """mdformat extension that keeps inline markup inside image alt text."""
    RENDERERS: Mapping[str, Any] = {"image": _image}
    POSTPROCESSORS: Mapping[str, Any] = {}

    @staticmethod
    def update_mdit(mdit: MarkdownIt) -> None:
        pass

def new_parser() -> MarkdownIt:
    mdit = MarkdownIt("commonmark")
    # keep reference-style links as references when rendering back
    mdit.options["store_labels"] = True
    mdit.options["mdformat"] = {"wrap": "keep", "number": True, "end_of_line": "lf"}
    mdit.options["parser_extension"] = []
    for name in MDFORMAT_EXTENSIONS:
        plugin = mdformat.plugins.PARSER_EXTENSIONS[name]
        if plugin not in mdit.options["parser_extension"]:
            mdit.options["parser_extension"].append(plugin)
            plugin.update_mdit(mdit)
    # last, so it wins over any image renderer a plugin brings
    mdit.options["parser_extension"].append(_InlineAlt)
    return mdit

def parse(md: str) -> Tuple[MarkdownIt, List[Token], Dict[str, Any]]:
    mdit = new_parser()
    env: Dict[str, Any] = {}
    tokens = mdit.parse(md or "", env)
    return mdit, tokens, env

def render(tokens: List[Token], mdit: Optional[MarkdownIt] = None, env: Optional[Dict[str, Any]] = None) -> str:
    mdit = mdit or new_parser()
    env = {} if env is None else env
    try:
        return MDRenderer().render(tokens, mdit.options, env)
    except Exception as e:
        raise SerializationError(f"Markdown serialization failed: {e}") from e

def iter_inline(tokens: Iterable[Token]) -> Iterator[Token]:
    for tok in tokens:
        if tok.type == "inline":
            yield tok

def path_to_root(path: Optional[str]) -> str:
    """
    Relative prefix from a chapter's output path back to the book root:
    "chapter.md" -> "", "./sub/chapter.md" -> "../".
    """
    if not path:
        return ""
    parts = [p for p in PurePosixPath(str(path).replace("\\", "/")).parent.parts if p not in (".", "/")]
    return "../" * len(parts)

# ---- token builders ----

def text_token(content: str) -> Token:
    return Token("text", "", 0, content=content)

def code_token(content: str) -> Token:
    return Token("code_inline", "code", 0, content=content, markup="`")

def link_tokens(href: str, title: str, children: List[Token]) -> List[Token]:
    return [
        Token("link_open", "a", 1, attrs={"href": href, "title": title}),
        *children,
        Token("link_close", "a", -1),
    ]

def block(kind: str, tag: str, children: List[Token], *, markup: str = "") -> List[Token]:
    inline = Token("inline", "", 0, content="", children=children)
    return [
        Token(f"{kind}_open", tag, 1, markup=markup, block=True),
        inline,
        Token(f"{kind}_close", tag, -1, markup=markup, block=True),
    ]

def heading(level: int, children: List[Token]) -> List[Token]:
    return block("heading", f"h{level}", children, markup="#" * level)

def paragraph(children: List[Token]) -> List[Token]:
    return block("paragraph", "p", children)

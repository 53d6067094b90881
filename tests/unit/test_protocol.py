import io
import json

import pytest

from mdbook_tag.core.book import Chapter, PartTitle, Separator
from mdbook_tag.io.protocol import book_from_json, book_to_json, parse_input

BOOK = {
    "sections": [
        {"PartTitle": "Guide"},
        {
            "Chapter": {
                "name": "Intro",
                "content": "# Intro\n",
                "number": [1],
                "sub_items": [
                    {
                        "Chapter": {
                            "name": "Setup",
                            "content": "",
                            "number": [1, 1],
                            "sub_items": [],
                            "path": "intro/setup.md",
                            "source_path": "intro/setup.md",
                            "parent_names": ["Intro"],
                        }
                    }
                ],
                "path": "intro.md",
                "source_path": "intro.md",
                "parent_names": [],
                "future_field": True,
            }
        },
        "Separator",
    ],
    "__non_exhaustive": None,
}

CTX = {
    "root": "/book",
    "config": {"book": {"title": "Book"}, "preprocessor": {"tag": {"filename": "index.md"}}},
    "renderer": "html",
    "mdbook_version": "0.4.40",
}

def test_decode() -> None:
    book = book_from_json(BOOK)

    assert book.sections[0] == PartTitle("Guide")
    assert isinstance(book.sections[2], Separator)
    intro = book.sections[1]
    assert isinstance(intro, Chapter)
    assert intro.number == [1]
    assert intro.extra == {"future_field": True}
    assert intro.sub_items[0].parent_names == ["Intro"]

def test_round_trip_keeps_unknown_keys() -> None:
    assert book_to_json(book_from_json(BOOK)) == BOOK

def test_parse_input() -> None:
    ctx, book = parse_input(io.StringIO(json.dumps([CTX, BOOK])))

    assert ctx.renderer == "html"
    assert ctx.mdbook_version == "0.4.40"
    assert ctx.preprocessor_config("tag") == {"filename": "index.md"}
    assert ctx.preprocessor_config("other") is None
    assert len(book.sections) == 3

@pytest.mark.parametrize("raw", ["not json", "[]", '[{}, {"sections": 1}]', '[{}, {"sections": [{"Bogus": 1}]}]'])
def test_malformed_input(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_input(io.StringIO(raw))

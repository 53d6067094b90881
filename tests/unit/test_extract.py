from mdbook_tag.core.book import Chapter
from mdbook_tag.core.markdown import path_to_root
from mdbook_tag.core.tags import AliasedTag, Tag
from mdbook_tag.stages.extract import process_chapter

CHAPTER_NAME = "Test Chapter"
SOURCE = "# Chapter\n\n`tag:hello`"
EXPECTED = '# Chapter\n\n[`#hello`](tags.md#hello "Tag: hello")\n'

def _chapter(content: str = SOURCE, path: str = "./chapter.md", parents=None) -> Chapter:
    return Chapter(name=CHAPTER_NAME, content=content, path=path, parent_names=list(parents or []))

def test_simple_chapter() -> None:
    chapter = _chapter()
    tags = process_chapter(chapter)

    assert tags == [AliasedTag("hello", Tag(CHAPTER_NAME, "./chapter.md", ()))]
    assert chapter.content == EXPECTED

def test_sub_dir_chapter() -> None:
    chapter = _chapter(path="./subchapter/chapter.md")
    process_chapter(chapter)

    assert chapter.content == '# Chapter\n\n[`#hello`](../tags.md#hello "Tag: hello")\n'

def test_parents_do_not_change_links() -> None:
    chapter = _chapter(parents=["Parent One", "Parent Two"])
    tags = process_chapter(chapter)

    assert chapter.content == EXPECTED
    assert tags[0].tag.parent_names == ("Parent One", "Parent Two")

def test_alias_is_trimmed_and_lowercased() -> None:
    chapter = _chapter(content="Some `tag:  Hello World ` text\n")
    tags = process_chapter(chapter)

    assert [t.alias for t in tags] == ["hello world"]
    assert '"Tag: Hello World"' in chapter.content
    assert "`#Hello World`" in chapter.content

def test_custom_filename() -> None:
    chapter = _chapter()
    process_chapter(chapter, output_filename="my_tags.md")

    assert "(my_tags.md#hello " in chapter.content

def test_every_occurrence_is_recorded() -> None:
    chapter = _chapter(content="`tag:a` and `tag:b` and `tag:A`\n")
    tags = process_chapter(chapter)

    assert [t.alias for t in tags] == ["a", "b", "a"]
    assert chapter.content.count("Tag: ") == 3

def test_bare_prefix_is_left_alone() -> None:
    chapter = _chapter(content="Text `tag:` here\n")
    tags = process_chapter(chapter)

    assert tags == []
    assert chapter.content == "Text `tag:` here\n"

def test_other_code_spans_are_left_alone() -> None:
    chapter = _chapter(content="`Tag:hello` and `x tag:hello` and `print()`\n")
    tags = process_chapter(chapter)

    assert tags == []
    assert chapter.content == "`Tag:hello` and `x tag:hello` and `print()`\n"

def test_markers_outside_code_spans_are_ignored() -> None:
    chapter = _chapter(content="tag:hello in text\n\n```\ntag:hello\n```\n")
    assert process_chapter(chapter) == []

def test_second_pass_is_a_no_op() -> None:
    chapter = _chapter()
    process_chapter(chapter)
    once = chapter.content

    assert process_chapter(chapter) == []
    assert chapter.content == once

def test_path_to_root() -> None:
    assert path_to_root(None) == ""
    assert path_to_root("") == ""
    assert path_to_root("chapter.md") == ""
    assert path_to_root("./chapter.md") == ""
    assert path_to_root("./sub/chapter.md") == "../"
    assert path_to_root("a/b/chapter.md") == "../../"

MIXED_CHAPTER = """# Title

Some *em*, **strong**, ~~gone~~ and `print()` with a [link](https://example.com "Example").

See [the docs][docs] and a footnote[^1].

![the `main()` function](img/main.png)

- one
- two

Tasks:

- [ ] todo
- [x] done

1. first
2. second
3. third

> quoted

| aaa | bbb |
| --- | --- |
| 111 | 222 |

<div>html</div>

```rust
fn main() {}
```

[^1]: the note with several words

[docs]: https://example.com/docs
"""

def test_untagged_chapter_survives_unchanged() -> None:
    chapter = _chapter(content=MIXED_CHAPTER)

    assert process_chapter(chapter) == []
    assert chapter.content == MIXED_CHAPTER

def test_footnotes_tables_and_task_lists_are_kept() -> None:
    chapter = _chapter(content="~~gone~~ and a[^1] note\n\n- [ ] todo\n- [x] done\n\n[^1]: the note\n")
    process_chapter(chapter)

    assert chapter.content == "~~gone~~ and a[^1] note\n\n- [ ] todo\n- [x] done\n\n[^1]: the note\n"

def test_ordered_list_numbers_are_kept() -> None:
    chapter = _chapter(content="1. a\n2. b\n")
    process_chapter(chapter)

    assert chapter.content == "1. a\n2. b\n"

def test_code_in_image_alt_is_kept() -> None:
    chapter = _chapter(content="![the `main()` function](f.png)\n")

    assert process_chapter(chapter) == []
    assert chapter.content == "![the `main()` function](f.png)\n"

def test_marker_in_image_alt() -> None:
    chapter = _chapter(content="![`tag:img`](pic.png)\n")
    tags = process_chapter(chapter)

    assert [t.alias for t in tags] == ["img"]
    assert chapter.content == '![[`#img`](tags.md#img "Tag: img")](pic.png)\n'

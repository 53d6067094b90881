from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Collection, List, Optional

# a directory's own chapter, like mdbook's README.md convention
INDEX_NAMES = ("README.md", "index.md")

@dataclass
class SourceDir:
    rel: PurePosixPath
    index: Optional[PurePosixPath] = None
    files: List[PurePosixPath] = field(default_factory=list)
    dirs: List["SourceDir"] = field(default_factory=list)

    def count(self) -> int:
        own = len(self.files) + (1 if self.index is not None else 0)
        return own + sum(d.count() for d in self.dirs)

def scan_book_dir(
    root: Path,
    *,
    skip: Collection[PurePosixPath] = (),
    rel: PurePosixPath = PurePosixPath("."),
) -> SourceDir:
    """
    Collect the markdown sources under root, sorted, as a tree of
    directories. Hidden directories and directories without any markdown
    are left out; paths in `skip` are ignored.
    """
    here = SourceDir(rel=rel)
    is_root = rel == PurePosixPath(".")

    for p in sorted((root / rel).iterdir()):
        r = rel / p.name
        if p.is_dir():
            if p.name.startswith("."):
                continue
            sub = scan_book_dir(root, skip=skip, rel=r)
            if sub.count():
                here.dirs.append(sub)
        elif p.is_file() and p.suffix == ".md" and r not in skip:
            # the book root has no parent chapter to hold its README
            if not is_root and here.index is None and p.name in INDEX_NAMES:
                here.index = r
            else:
                here.files.append(r)
    return here

def read_markdown(root: Path, rel: PurePosixPath) -> str:
    # strict: mdbook rejects non-UTF-8 sources as well
    return (root / rel).read_bytes().decode("utf-8")

def write_markdown(root: Path, rel: str, text: str) -> Path:
    out = root / PurePosixPath(rel)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8", newline="\n")
    return out

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

PREPROCESSOR_NAME = "tag"
DEFAULT_FILENAME = "tags.md"

@dataclass(frozen=True)
class TagConfig:
    filename: str = DEFAULT_FILENAME  # output file of the generated index page

    @classmethod
    def from_table(cls, table: Optional[Mapping[str, Any]]) -> "TagConfig":
        """
        Read the `[preprocessor.tag]` table. A missing or non-string
        `filename` falls back to the default; strings are kept as given.
        """
        if not table:
            return cls()
        filename = table.get("filename")
        if not isinstance(filename, str):
            return cls()
        return cls(filename=filename)

@dataclass(frozen=True)
class BuildConfig:
    input_dir: Path
    output_dir: Path
    filename: str = DEFAULT_FILENAME
    dry_run: bool = False

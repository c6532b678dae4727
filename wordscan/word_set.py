"""
Forbidden word list parsing for WordScan.

Words are supplied as a single blob separated by newlines, carriage
returns, commas, or semicolons. Entries are trimmed; empty entries are
dropped. Duplicates are kept and matching stays case-sensitive.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

_DELIMITERS = re.compile(r"[\r\n,;]")


@dataclass(frozen=True)
class WordSet:
    """Ordered, immutable collection of forbidden words."""

    words: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for word in self.words:
            if not word or not word.strip():
                raise ValueError("WordSet entries must be non-empty")

    @classmethod
    def from_iterable(cls, words: Iterable[str]) -> "WordSet":
        return cls(tuple(w.strip() for w in words if w and w.strip()))

    def __iter__(self) -> Iterator[str]:
        return iter(self.words)

    def __len__(self) -> int:
        return len(self.words)

    def __bool__(self) -> bool:
        return bool(self.words)


def parse_words(raw: str | None) -> WordSet:
    """Split a delimiter-separated blob into a WordSet. Never raises on empty input."""
    if not raw:
        return WordSet()
    return WordSet.from_iterable(_DELIMITERS.split(raw))


def load_words_file(path: Path) -> WordSet:
    """Read a UTF-8 word list file and parse it."""
    with open(path, encoding="utf-8-sig") as f:
        return parse_words(f.read())

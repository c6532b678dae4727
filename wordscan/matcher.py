"""
Literal match-and-mask engine for WordScan.

Each forbidden word is counted and masked in turn, in WordSet order,
against the content as left by the previous word. A word that only
occurred inside an earlier word's match is therefore never counted.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from wordscan.errors import ConfigurationError
from wordscan.word_set import WordSet

DEFAULT_MASK_CHAR = "*"


@dataclass(frozen=True)
class MaskConfig:
    """Configuration for the mask applied to matched words."""

    char: str = DEFAULT_MASK_CHAR


@dataclass
class MaskResult:
    """Masked content together with the number of replacements made."""

    content: str
    replacements: int = 0
    counts: dict[str, int] = field(default_factory=dict)

    @property
    def has_matches(self) -> bool:
        return self.replacements > 0


def apply_mask(content: str, words: WordSet, mask_char: str = DEFAULT_MASK_CHAR) -> MaskResult:
    """
    Count and mask every forbidden word in content.

    Occurrences are non-overlapping and literal. The returned total is the
    sum of per-word counts taken at the time each word was processed.
    """
    if len(mask_char) != 1:
        raise ValueError(f"mask_char must be a single character, got {mask_char!r}")

    total = 0
    counts: dict[str, int] = {}

    for word in words:
        count = content.count(word)
        if count:
            content = content.replace(word, mask_char * len(word))
            total += count
        counts[word] = counts.get(word, 0) + count

    return MaskResult(content=content, replacements=total, counts=counts)


def build_mask_config(mask_cfg: dict) -> MaskConfig:
    """Construct MaskConfig from the parsed config mask block."""
    char = mask_cfg.get("char", DEFAULT_MASK_CHAR)
    if not isinstance(char, str) or len(char) != 1:
        raise ConfigurationError(f"mask.char must be a single character, got {char!r}")
    return MaskConfig(char=char)

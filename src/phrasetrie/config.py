from __future__ import annotations
from dataclasses import dataclass, field
from typing import FrozenSet

from pypinyin import Style

# Built-in stop words. Entries are matched verbatim against tokens, so the
# mixed-case "I" never matches a lowercased phrase.
STOP_WORDS: tuple[str, ...] = (
    "I", "a", "about", "an", "are", "as", "at", "be", "by", "com",
    "for", "from", "how", "in", "is", "it", "of", "on", "or", "that",
    "the", "this", "to", "was", "what", "when", "where", "who", "will",
    "with", "the", "www",
)

# Toneless syllables, one per Han character
PINYIN_STYLE: Style = Style.NORMAL

# Progress printing interval for verbose builds
PROGRESS_EVERY_PHRASES: int = 10_000


@dataclass(frozen=True)
class IndexConfig:
    """
    Per-index settings, fixed at construction.

    stop_words_enabled : drop tokens found in `stop_words` on insert and find.
    stop_words         : the stop set; only consulted when enabled.
    pinyin_style       : pypinyin style used to transliterate Han phrases.
    """
    stop_words_enabled: bool = False
    stop_words: FrozenSet[str] = field(default_factory=lambda: frozenset(STOP_WORDS))
    pinyin_style: Style = PINYIN_STYLE

    @property
    def active_stop_words(self) -> FrozenSet[str]:
        return self.stop_words if self.stop_words_enabled else frozenset()

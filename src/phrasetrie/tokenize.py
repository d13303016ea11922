from __future__ import annotations
import re
from typing import AbstractSet, Iterable, List

from pypinyin import Style, lazy_pinyin

from .config import PINYIN_STYLE
from .models import Script

# Han script: radicals, ideographic marks, CJK unified ideographs and extensions
_HAN_RE = re.compile(
    "[\u2e80-\u2e99\u2e9b-\u2ef3\u2f00-\u2fd5\u3005\u3007\u3021-\u3029\u3038-\u303b"
    "\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufa6d\ufa70-\ufad9"
    "\U00020000-\U0002fa1f\U00030000-\U000323af]"
)


def is_han(ch: str) -> bool:
    return bool(_HAN_RE.match(ch))


def detect_script(phrase: str) -> Script:
    """Classify a phrase by its first character only; mixed phrases follow their lead char."""
    if phrase and is_han(phrase[0]):
        return Script.HAN
    return Script.LATIN


def transliterate(text: str, style: Style = PINYIN_STYLE) -> List[str]:
    """Han text -> ordered pinyin syllables; characters without a reading are dropped."""
    return lazy_pinyin(text, style=style, errors="ignore")


def tokenize(phrase: str, style: Style = PINYIN_STYLE) -> List[str]:
    """
    Split a phrase into the token path used by the trie.

    Latin phrases split on the single space character (no collapsing, so
    "a  b" yields an empty token in the middle). Han phrases become their
    pinyin syllables. An empty phrase has no tokens.
    """
    if not phrase:
        return []
    if detect_script(phrase) is Script.HAN:
        return transliterate(phrase, style)
    return phrase.split(" ")


def filter_stop_words(tokens: Iterable[str], stop_words: AbstractSet[str], enabled: bool) -> List[str]:
    if not enabled:
        return list(tokens)
    return [t for t in tokens if t not in stop_words]

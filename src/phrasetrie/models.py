from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


class Script(Enum):
    LATIN = "en"
    HAN = "chs"


@dataclass(eq=False, repr=False)
class TrieNode:
    children: Dict[str, "TrieNode"] = field(default_factory=dict)  # token -> child
    contained_ids: List[int] = field(default_factory=list)         # every phrase passing through

    def __eq__(self, other: object) -> bool:
        # Iterative: a path is as deep as its phrase is long
        if not isinstance(other, TrieNode):
            return NotImplemented
        stack = [(self, other)]
        while stack:
            a, b = stack.pop()
            if a.contained_ids != b.contained_ids or a.children.keys() != b.children.keys():
                return False
            stack.extend((child, b.children[tok]) for tok, child in a.children.items())
        return True

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"TrieNode(contained_ids={self.contained_ids!r}, children={list(self.children)!r})"


class PhraseTrieError(Exception):
    """Base class for errors raised by phrasetrie."""


class IngestError(PhraseTrieError):
    """The phrase source failed while it was being read; no index was built."""


class DecodeError(PhraseTrieError, ValueError):
    """Persisted index data is truncated or malformed."""

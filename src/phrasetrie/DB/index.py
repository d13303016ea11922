from __future__ import annotations
import logging
from collections import deque
from typing import Iterable, Iterator, List, Optional, Tuple

from ..config import IndexConfig
from ..models import TrieNode
from ..tokenize import tokenize, filter_stop_words

log = logging.getLogger(__name__)


class TrieIndex:
    """
    Token-level prefix trie over an ordered list of phrases.

    Every node keeps the IDs of all phrases whose token path passes through it,
    so any prefix of a phrase already names the set of candidates. Build once
    (insert_phrase per phrase, ID = position), optionally compact, then serve
    find() read-only. There is no locking: concurrent find() calls are fine
    only once mutation has stopped.
    """

    def __init__(self, config: Optional[IndexConfig] = None, root: Optional[TrieNode] = None) -> None:
        self.config = config or IndexConfig()
        self.root = root if root is not None else TrieNode()
        self.phrase_count = 0

    # ---- Build ----
    def insert(self, tokens: Iterable[str], phrase_id: int) -> None:
        """Walk/extend the path for an already-filtered token sequence."""
        node = self.root
        for tok in tokens:
            child = node.children.get(tok)
            if child is None:
                child = TrieNode(contained_ids=[phrase_id])
                node.children[tok] = child
            else:
                child.contained_ids.append(phrase_id)
            node = child

    def insert_phrase(self, phrase: str, phrase_id: int) -> None:
        tokens = tokenize(phrase, self.config.pinyin_style)
        tokens = filter_stop_words(tokens, self.config.stop_words, self.config.stop_words_enabled)
        self.insert(tokens, phrase_id)
        self.phrase_count = max(self.phrase_count, phrase_id + 1)

    # ---- Query ----
    def find(self, text: str) -> List[int]:
        """
        Greedy single pass over the query's words.

        A word with no child under the current node is skipped when we are at
        the root, otherwise matching restarts at the root with the same word.
        Descending into a node that holds exactly one ID returns it at once.
        Han queries must already be transliterated and space-joined.
        """
        stop = self.config.active_stop_words
        root = self.root
        node = root
        words = text.lower().split(" ")

        i = 0
        while i < len(words):
            w = words[i]
            if w in stop:
                i += 1
                continue
            child = node.children.get(w)
            if child is not None:
                if len(child.contained_ids) == 1:
                    return list(child.contained_ids)
                node = child
                i += 1
                continue
            if node is root:
                i += 1
                continue
            node = root

        if node is not root and node.contained_ids:
            log.debug("find(%r) -> %s", text, node.contained_ids)
            return list(node.contained_ids)
        return []

    # ---- Diagnostics ----
    def walk(self) -> Iterator[Tuple[int, str]]:
        """Breadth-first (depth, token) pairs; depth of the root's children is 1."""
        queue = deque([(self.root, 0)])
        while queue:
            node, depth = queue.popleft()
            for tok, child in node.children.items():
                yield depth + 1, tok
                queue.append((child, depth + 1))

    def dump(self) -> str:
        """One line per depth level, tokens space separated."""
        levels: List[List[str]] = []
        for depth, tok in self.walk():
            if depth > len(levels):
                levels.append([])
            levels[depth - 1].append(tok)
        return "\n".join(" ".join(level) for level in levels)

    def node_count(self) -> int:
        """Number of nodes below the root."""
        return sum(1 for _ in self.walk())

    def __len__(self) -> int:
        return self.phrase_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TrieIndex):
            return NotImplemented
        return self.config == other.config and self.root == other.root

    def __repr__(self) -> str:
        return (f"TrieIndex(phrases={self.phrase_count}, "
                f"stop_words_enabled={self.config.stop_words_enabled})")

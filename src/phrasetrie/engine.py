# phrasetrie/engine.py
from __future__ import annotations

import os
import logging
from typing import List, Optional

from .config import IndexConfig
from .loader import PhraseSource, build
from .models import Script
from .tokenize import detect_script, transliterate
from .DB.index import TrieIndex
from .DB.compact import compact
from .DB.storage import save_index, load_index

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - phrase ingestion (loader.build),
      - the token trie (TrieIndex) and its compaction pass,
      - binary persistence (DB.storage).

    Public API:
      * build(source, ...): ingest -> index -> (optional) compact -> (optional) persist
      * load(path):         load a persisted index
      * complete(query):    phrase IDs matching a partial query
      * shutdown():         drop the index
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self.index: Optional[TrieIndex] = None

    # /* ~~~ Build an index from a phrase file (or iterable of lines) ~~~ */
    def build(
        self,
        source: PhraseSource,
        *,
        stop_words: Optional[bool] = None,
        config: Optional[IndexConfig] = None,   # full settings; must agree with stop_words
        compress: bool = False,                 # prune single-phrase subtrees
        out: Optional[str] = None,              # persist to this path when given
        verbose: bool = False,
    ) -> TrieIndex:
        if verbose:
            logging.basicConfig(level=logging.INFO)

        log.info("Loading phrases from %s", source if isinstance(source, (str, os.PathLike)) else "<lines>")
        idx = build(source, stop_words, config=config, verbose=verbose)

        if compress:
            compact(idx)
        if out:
            save_index(idx, out)

        # Commit engine state only once everything above succeeded
        self.index = idx
        log.info("Engine build() complete: phrases=%d", len(idx))
        return idx

    # /* ~~~ Load an already-built index ~~~ */
    def load(self, path: str, *, verbose: bool = False) -> TrieIndex:
        if verbose:
            logging.basicConfig(level=logging.INFO)
        if not os.path.exists(path):
            raise FileNotFoundError(path)
        idx = load_index(path)
        self.index = idx
        log.info("Engine load() complete: phrases=%d", len(idx))
        return idx

    def save(self, path: str) -> None:
        if self.index is None:
            raise RuntimeError("Engine not initialized. Call build() or load() first.")
        save_index(self.index, path)

    # ------------- query -------------

    # /* ~~~ Han queries are transliterated here; find() only splits on spaces ~~~ */
    def complete(self, query: str) -> List[int]:
        if self.index is None:
            raise RuntimeError("Engine not initialized. Call build() or load() first.")
        if detect_script(query) is Script.HAN:
            query = " ".join(transliterate(query, self.index.config.pinyin_style))
        return self.index.find(query)

    def dump(self) -> str:
        if self.index is None:
            raise RuntimeError("Engine not initialized. Call build() or load() first.")
        return self.index.dump()

    # ------------- teardown -------------

    def shutdown(self) -> None:
        self.index = None
        log.info("Engine shutdown complete")

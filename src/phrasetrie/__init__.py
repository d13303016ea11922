"""
Phrase Completion Trie

This package answers "which phrase does this partial input refer to" by
walking a prefix tree keyed on whole tokens rather than characters. Latin
phrases are split on spaces; Han phrases are converted to toneless pinyin
syllables first, so one tree serves both.

The package is split into small pieces:
- Tokenization (script detection, pinyin, stop-word filtering)
- The TrieIndex with insert/find and a breadth-first diagnostic walk
- A compaction pass that prunes subtrees below single-phrase nodes
- A binary save/load format

Main Functions:
    build(source, stop_words_enabled): index a phrase file, ID = line number
    compact(index): prune in place
    save_index(index, path) / load_index(path): persistence

Example Usage:
    from phrasetrie import build, compact, save_index, load_index

    idx = build("phrases.txt", stop_words_enabled=True)
    compact(idx)
    save_index(idx, "phrases.ptx")

    idx = load_index("phrases.ptx")
    print(idx.find("the batman"))   # e.g. [0, 7]
"""

# src/phrasetrie/__init__.py
from .config import IndexConfig, STOP_WORDS
from .models import Script, TrieNode, PhraseTrieError, IngestError, DecodeError
from .tokenize import detect_script, tokenize, transliterate, filter_stop_words
from .loader import build, iter_phrases
from .engine import Engine
from .DB.index import TrieIndex
from .DB.compact import compact
from .DB.storage import save_index, load_index, dumps, loads

__version__ = "1.0.0"
__all__ = [
    "IndexConfig", "STOP_WORDS",
    "Script", "TrieNode", "PhraseTrieError", "IngestError", "DecodeError",
    "detect_script", "tokenize", "transliterate", "filter_stop_words",
    "build", "iter_phrases", "Engine",
    "TrieIndex", "compact", "save_index", "load_index", "dumps", "loads",
]

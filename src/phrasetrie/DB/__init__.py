from .index import TrieIndex
from .compact import compact
from .storage import save_index, load_index, dumps, loads

__all__ = ["TrieIndex", "compact", "save_index", "load_index", "dumps", "loads"]

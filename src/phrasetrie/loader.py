from __future__ import annotations
import logging
import os
from typing import Iterable, Iterator, Optional, Union

from .config import IndexConfig, PROGRESS_EVERY_PHRASES
from .models import IngestError
from .DB.index import TrieIndex

PhraseSource = Union[str, os.PathLike, Iterable[str]]

log = logging.getLogger(__name__)


def _iter_lines(lines: Iterable[str]) -> Iterator[str]:
    it = iter(lines)
    while True:
        try:
            raw = next(it)
        except StopIteration:
            return
        except (OSError, UnicodeDecodeError) as e:
            raise IngestError(f"read phrase line error: {e}") from e
        yield raw.rstrip("\r\n")


def iter_phrases(source: PhraseSource) -> Iterator[str]:
    """
    Yield phrases one per line, trailing newline stripped, in file order.

    `source` is a path to a UTF-8 text file or any iterable of lines (an open
    text file, io.StringIO, a list). Failing to open a path raises OSError;
    failing mid-read raises IngestError.
    """
    if isinstance(source, (str, os.PathLike)):
        with open(source, "r", encoding="utf-8") as f:
            yield from _iter_lines(f)
    else:
        yield from _iter_lines(source)


def build(source: PhraseSource, stop_words_enabled: Optional[bool] = None, *,
          config: Optional[IndexConfig] = None, verbose: bool = False) -> TrieIndex:
    """
    Build a TrieIndex from a phrase source; phrase ID = 0-based line number.

    Phrases are lowercased before tokenization. The index is returned only
    once the whole source has been consumed; any read failure raises.
    Pass either `stop_words_enabled` or a full `config`; giving both with
    different stop-word settings raises ValueError.
    """
    if config is None:
        config = IndexConfig(stop_words_enabled=bool(stop_words_enabled))
    elif stop_words_enabled is not None and stop_words_enabled != config.stop_words_enabled:
        raise ValueError(
            f"stop_words_enabled={stop_words_enabled} conflicts with "
            f"config.stop_words_enabled={config.stop_words_enabled}"
        )
    idx = TrieIndex(config)
    pid = 0
    for phrase in iter_phrases(source):
        idx.insert_phrase(phrase.lower(), pid)
        pid += 1
        if verbose and pid % PROGRESS_EVERY_PHRASES == 0:
            print(f"[indexed] phrases={pid:,}")
    idx.phrase_count = pid
    log.info("Built phrase index: phrases=%d nodes=%d", pid, idx.node_count())
    return idx

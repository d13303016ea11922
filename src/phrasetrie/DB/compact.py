from __future__ import annotations
import logging
from typing import Union

from ..models import TrieNode
from .index import TrieIndex

log = logging.getLogger(__name__)


def compact_node(node: TrieNode) -> None:
    """Drop every subtree hanging below a node that already names a single phrase."""
    work = [node]
    while work:
        n = work.pop()
        if len(n.contained_ids) == 1:
            n.children.clear()
            continue
        work.extend(n.children.values())


def compact(target: Union[TrieIndex, TrieNode]) -> None:
    """
    Prune an index (or a bare subtree) in place. Idempotent.

    find() never descends past a single-ID node, so answers are unchanged;
    only the stored size shrinks. Run it after the build and before save.
    """
    if isinstance(target, TrieIndex):
        before = target.node_count()
        compact_node(target.root)
        log.info("Compacted index: nodes %d -> %d", before, target.node_count())
        return
    compact_node(target)

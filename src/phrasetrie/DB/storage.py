from __future__ import annotations
import io
import logging
import os
import struct
from typing import BinaryIO, Tuple

from pypinyin import Style

from ..config import IndexConfig
from ..models import TrieNode, DecodeError
from .index import TrieIndex

# File format (little-endian):
#   0..3   : b"PTX1"
#   4      : flags (u8), bit0 = stop words enabled
#   5..8   : phrase_count (u32)
#   9      : pinyin style (u8)
#   stop_count (u32) | stop_count * (len:u16 | utf8)
#   node   : id_count:u32 | id_count * u32
#            child_count:u32 | child_count * (len:u16 | utf8 key | node)
# Nodes are written depth-first, children in dict order.

_MAGIC = b"PTX1"
_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")

_FLAG_STOP_WORDS = 0x01

log = logging.getLogger(__name__)


# ---- encode ----
def _write_str(f: BinaryIO, s: str) -> None:
    b = s.encode("utf-8")
    if len(b) > 0xFFFF:
        raise ValueError(f"token too long to store ({len(b)} bytes)")
    f.write(_U16.pack(len(b))); f.write(b)


def _write_header(f: BinaryIO, node: TrieNode) -> None:
    ids = node.contained_ids
    f.write(_U32.pack(len(ids)))
    if ids:
        f.write(struct.pack(f"<{len(ids)}I", *ids))
    f.write(_U32.pack(len(node.children)))


def _write_tree(f: BinaryIO, root: TrieNode) -> None:
    # Explicit stack of child iterators; paths can be thousands of tokens deep
    _write_header(f, root)
    stack = [iter(root.children.items())]
    while stack:
        nxt = next(stack[-1], None)
        if nxt is None:
            stack.pop()
            continue
        tok, child = nxt
        _write_str(f, tok)
        _write_header(f, child)
        stack.append(iter(child.children.items()))


def dumps(index: TrieIndex) -> bytes:
    cfg = index.config
    buf = io.BytesIO()
    buf.write(_MAGIC)
    buf.write(_U8.pack(_FLAG_STOP_WORDS if cfg.stop_words_enabled else 0))
    buf.write(_U32.pack(index.phrase_count))
    buf.write(_U8.pack(int(cfg.pinyin_style)))
    stop = sorted(cfg.stop_words)
    buf.write(_U32.pack(len(stop)))
    for w in stop:
        _write_str(buf, w)
    try:
        _write_tree(buf, index.root)
    except struct.error as e:
        raise ValueError(f"phrase id out of range for storage: {e}") from e
    return buf.getvalue()


# ---- decode ----
def _read_str(b: bytes, pos: int) -> Tuple[str, int]:
    ln = _U16.unpack_from(b, pos)[0]; pos += 2
    if pos + ln > len(b):
        raise DecodeError("truncated string")
    return b[pos:pos + ln].decode("utf-8"), pos + ln


def _read_header(b: bytes, pos: int) -> Tuple[TrieNode, int, int]:
    n_ids = _U32.unpack_from(b, pos)[0]; pos += 4
    ids = list(struct.unpack_from(f"<{n_ids}I", b, pos)); pos += 4 * n_ids
    n_children = _U32.unpack_from(b, pos)[0]; pos += 4
    return TrieNode(contained_ids=ids), n_children, pos


def _read_tree(b: bytes, pos: int) -> Tuple[TrieNode, int]:
    root, n_children, pos = _read_header(b, pos)
    stack = [[root, n_children]]  # [node, children still to read]
    while stack:
        top = stack[-1]
        if top[1] == 0:
            stack.pop()
            continue
        top[1] -= 1
        tok, pos = _read_str(b, pos)
        if tok in top[0].children:
            raise DecodeError(f"duplicate child token {tok!r}")
        child, n_children, pos = _read_header(b, pos)
        top[0].children[tok] = child
        stack.append([child, n_children])
    return root, pos


def loads(data: bytes) -> TrieIndex:
    """Decode bytes produced by dumps(); raises DecodeError on anything malformed."""
    if data[:4] != _MAGIC:
        raise DecodeError("Invalid phrase index (bad magic)")
    try:
        pos = 4
        flags = _U8.unpack_from(data, pos)[0]; pos += 1
        phrase_count = _U32.unpack_from(data, pos)[0]; pos += 4
        style = Style(_U8.unpack_from(data, pos)[0]); pos += 1
        n_stop = _U32.unpack_from(data, pos)[0]; pos += 4
        stop = []
        for _ in range(n_stop):
            w, pos = _read_str(data, pos)
            stop.append(w)
        root, pos = _read_tree(data, pos)
    except DecodeError:
        raise
    except (struct.error, UnicodeDecodeError, ValueError) as e:
        raise DecodeError(f"Invalid phrase index: {e}") from e
    if pos != len(data):
        raise DecodeError(f"Invalid phrase index: {len(data) - pos} trailing bytes")

    cfg = IndexConfig(
        stop_words_enabled=bool(flags & _FLAG_STOP_WORDS),
        stop_words=frozenset(stop),
        pinyin_style=style,
    )
    idx = TrieIndex(cfg, root=root)
    idx.phrase_count = phrase_count
    return idx


# ---- files ----
def save_index(index: TrieIndex, path: str) -> None:
    """Write the index to path, replacing whatever was there."""
    data = dumps(index)
    tmp = f"{path}.tmp"
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    try:
        with open(tmp, "wb") as f:
            f.write(data)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise
    log.info("Saved phrase index to %s (%d bytes)", path, len(data))


def load_index(path: str) -> TrieIndex:
    with open(path, "rb") as f:
        data = f.read()
    idx = loads(data)
    log.info("Loaded phrase index from %s: phrases=%d", path, idx.phrase_count)
    return idx

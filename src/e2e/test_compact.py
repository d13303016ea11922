import copy

from phrasetrie import build, compact, TrieNode
from phrasetrie.DB.compact import compact_node

PHRASES = [
    "the batman", "superman", "american idol", "american pie",
    "wonder years", "wonder woman", "a robin hood", "the batman returns",
    "new york city", "new york state",
]


def _single_id_nodes(node):
    for child in node.children.values():
        if len(child.contained_ids) == 1:
            yield child
        yield from _single_id_nodes(child)


def test_single_id_nodes_lose_their_children():
    idx = build(PHRASES, stop_words_enabled=True)
    assert any(n.children for n in _single_id_nodes(idx.root))
    compact(idx)
    assert all(not n.children for n in _single_id_nodes(idx.root))


def test_multi_id_paths_are_kept():
    idx = build(PHRASES, stop_words_enabled=True)
    compact(idx)
    york = idx.root.children["new"].children["york"]
    assert york.contained_ids == [8, 9]
    assert set(york.children) == {"city", "state"}


def test_compact_preserves_exact_phrase_answers():
    idx = build(PHRASES, stop_words_enabled=True)
    before = {p: idx.find(p) for p in PHRASES}
    compact(idx)
    assert {p: idx.find(p) for p in PHRASES} == before


def test_compact_is_idempotent():
    idx = build(PHRASES, stop_words_enabled=True)
    compact(idx)
    once = copy.deepcopy(idx.root)
    compact(idx)
    assert idx.root == once


def test_compact_shrinks_node_count():
    idx = build(PHRASES, stop_words_enabled=True)
    n = idx.node_count()
    compact(idx)
    assert idx.node_count() < n


def test_root_survives_empty_build():
    idx = build([])
    compact(idx)
    assert idx.root == TrieNode()


def test_compact_bare_subtree():
    node = TrieNode(contained_ids=[3], children={"x": TrieNode(contained_ids=[3])})
    compact_node(node)
    assert node.children == {}


def test_compact_very_long_phrases():
    long_phrase = " ".join(f"w{i}" for i in range(5000))
    idx = build([long_phrase, long_phrase, "w0 other"])
    compact(idx)
    shared = idx.root.children["w0"].children["w1"]
    assert shared.contained_ids == [0, 1]
    assert idx.root.children["w0"].children["other"].children == {}
    assert idx.find("w0") == [0, 1, 2]
    assert idx.find("w0 w1") == [0, 1]


def test_node_equality_on_deep_paths():
    long_phrase = " ".join(f"w{i}" for i in range(5000))
    a = build([long_phrase, long_phrase])
    b = build([long_phrase, long_phrase])
    assert a == b
    b.root.children["w0"].children["w1"].contained_ids.append(9)
    assert a != b

import numpy as np
import pytest

from tanabe_zhang import show_outparam_docs
from tanabe_zhang.matrix import (CB, INDEX, NUM_NODES, join_state, node_index,
                                 remove_bodyname, split_state)


def test_node_index_layout():
    assert node_index(0, 0) == 0
    assert node_index("Chest", "skin") == 7
    assert node_index("LFoot", "skin") == CB - 1
    assert node_index(8, "core") in INDEX["core"]
    with pytest.raises(ValueError):
        node_index(16, 0)


def test_layer_index_covers_tissue_once():
    nodes = np.concatenate([INDEX[k] for k in ("core", "muscle", "fat", "skin")])
    assert sorted(nodes) == list(range(CB))
    assert list(INDEX["cb"]) == [CB]


def test_split_and_join_state():
    y = np.arange(NUM_NODES, dtype=float)
    tissue, tcb = split_state(y)
    assert tissue.shape == (16, 4)
    assert tissue[2, 3] == node_index(2, 3)
    assert tcb == CB
    assert np.array_equal(join_state(tissue, tcb), y)
    with pytest.raises(ValueError):
        split_state(np.zeros(64))


@pytest.mark.parametrize("text, expected", [
    ("TskHead", ("Tsk", "Head")),
    ("LSRHand", ("LS", "RHand")),
    ("BFskLFoot", ("BFsk", "LFoot")),
    ("TskMean", ("TskMean", None)),
    ("Head", ("Head", None)),
])
def test_remove_bodyname(text, expected):
    assert remove_bodyname(text) == expected


def test_outparam_docs_lists_every_key():
    docs = show_outparam_docs()
    for key in ("Tsk", "LS", "OS", "LC", "OC", "LoadApplied"):
        assert any(line.startswith(key + " ") for line in docs.splitlines())

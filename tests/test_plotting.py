import pytest

import plotting
from huffman import build_huffman_tree
from pipeline import run_pipeline


def test_layout_hello_world():
    result = run_pipeline("hello world")
    positions = plotting.layout_tree(result.tree)
    leaves = {n: p for n, p in positions.items() if n.startswith("leaf-")}
    assert sorted(x for x, _ in leaves.values()) == [0.0, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0]
    assert positions[result.tree.id] == (pytest.approx(3.1875), 0)
    assert max(depth for _, depth in positions.values()) == 4


def test_layout_empty_and_single():
    assert plotting.layout_tree(None) == {}
    assert plotting.layout_tree(build_huffman_tree({"a": 2})) == {"single-node": (0.0, 0)}


def test_plots_are_written(tmp_path):
    result = run_pipeline("abracadabra")
    plotting.plot_tree(result.tree, result.codes, tmp_path / "tree.png")
    plotting.plot_frequencies(result.frequencies, tmp_path / "freq.png")
    assert (tmp_path / "tree.png").stat().st_size > 0
    assert (tmp_path / "freq.png").stat().st_size > 0


def test_layout_deep_skewed_tree():
    freqs = [(chr(0x4E00 + i), 2 ** max(0, i - 1)) for i in range(1200)]
    root = build_huffman_tree(freqs)
    positions = plotting.layout_tree(root)
    assert len(positions) == 2 * 1200 - 1
    assert positions[root.id][1] == 0
    assert max(depth for _, depth in positions.values()) == 1199

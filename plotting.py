from pathlib import Path
from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.lines import Line2D
from matplotlib.patches import Circle

import huffman as huff


def _label(symbol: str) -> str:
    return {" ": "SPACE", "\n": "\\n", "\t": "\\t"}.get(symbol, symbol)


def layout_tree(root: Optional[huff.HuffmanNode]) -> Dict[str, Tuple[float, int]]:
    """
    Node id -> (x, depth). Post-order: leaves take consecutive x slots from
    left to right, internal nodes sit midway between their children.
    """
    positions: Dict[str, Tuple[float, int]] = {}
    next_leaf_x = 0

    # iterative post-order, skewed trees can exceed the recursion limit
    stack = [(root, 0, False)] if root is not None else []
    while stack:
        node, depth, children_done = stack.pop()
        if node.is_leaf:
            positions[node.id] = (float(next_leaf_x), depth)
            next_leaf_x += 1
        elif children_done:
            x = (positions[node.left.id][0] + positions[node.right.id][0]) / 2
            positions[node.id] = (x, depth)
        else:
            stack.append((node, depth, True))
            stack.append((node.right, depth + 1, False))
            stack.append((node.left, depth + 1, False))
    return positions


def plot_tree(root: Optional[huff.HuffmanNode], code_map: Dict[str, str], out_path: Path,
              title: str = "Huffman Tree (left=0, right=1)") -> None:
    positions = layout_tree(root)

    fig, ax = plt.subplots(figsize=(max(6, len(code_map) * 0.9), max(4, huff.tree_depth(root) * 1.2)))

    for node in huff.iter_nodes(root):
        if node.is_leaf:
            continue
        x1, y1 = positions[node.id]
        for child, bit in ((node.left, "0"), (node.right, "1")):
            x2, y2 = positions[child.id]
            ax.add_line(Line2D([x1, x2], [-y1, -y2], color="darkblue"))
            ax.text((x1 + x2) / 2, (-y1 - y2) / 2 + 0.08, bit, fontsize=9, ha="center", va="bottom", color="darkblue")

    for node in huff.iter_nodes(root):
        x, y = positions[node.id]
        face = "seagreen" if node.is_leaf else "navy"
        ax.add_patch(Circle((x, -y), 0.22, facecolor=face, edgecolor="black"))
        ax.text(x, -y, str(node.frequency), fontsize=8, ha="center", va="center", color="white")
        if node.is_leaf:
            ax.text(x, -y - 0.35, f"'{_label(node.symbol)}'\n{code_map.get(node.symbol, '')}",
                    fontsize=8, ha="center", va="top")

    ax.set_title(title)
    ax.set_aspect("equal")
    ax.axis("off")
    if positions:
        xs = [p[0] for p in positions.values()]
        ys = [-p[1] for p in positions.values()]
        ax.set_xlim(min(xs) - 0.8, max(xs) + 0.8)
        ax.set_ylim(min(ys) - 1.0, max(ys) + 0.5)

    fig.tight_layout()
    fig.savefig(out_path, dpi=200)
    plt.close(fig)


def plot_frequencies(frequencies: List[Tuple[str, int]], out_path: Path,
                     title: str = "Symbol Frequencies") -> None:
    symbols = [_label(s) for s, _ in frequencies]
    counts = [f for _, f in frequencies]

    plt.figure()
    plt.bar(range(len(counts)), counts, color="steelblue")
    plt.xticks(range(len(symbols)), symbols)
    plt.xlabel("Symbol")
    plt.ylabel("Count")
    plt.title(title)
    plt.tight_layout()
    plt.savefig(out_path, dpi=200)
    plt.close()

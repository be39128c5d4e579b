"""Text rendering of a tree, for debugging."""

from typing import List, Sequence, Tuple

from flatmerkle.core.errors import EmptyTreeRenderError
from flatmerkle.core.tree.indexing import left_child_index, right_child_index
from flatmerkle.crypto import bytes_to_hex


def render_tree(tree: Sequence[bytes]) -> str:
    """
    Render a tree depth-first, one node per line.
    
    Each line is ``<index>) <0x-hex>`` prefixed with branch glyphs, e.g.::
    
        0) 0x...
        ├─ 1) 0x...
        │  ├─ 3) 0x...
        │  └─ 4) 0x...
        └─ 2) 0x...
    """
    if len(tree) == 0:
        raise EmptyTreeRenderError("Expected non-zero number of nodes in merkle tree")
    
    # path entries: 1 = more siblings follow at that depth, 0 = last child
    stack: List[Tuple[int, List[int]]] = [(0, [])]
    lines = []
    
    while stack:
        i, path = stack.pop()
        
        prefix = "".join("│  " if p else "   " for p in path[:-1])
        if path:
            prefix += "├─ " if path[-1] else "└─ "
        
        lines.append(f"{prefix}{i}) {bytes_to_hex(tree[i])}")
        
        if right_child_index(i) < len(tree):
            stack.append((right_child_index(i), path + [0]))
            stack.append((left_child_index(i), path + [1]))
    
    return "\n".join(lines)


__all__ = ["render_tree"]

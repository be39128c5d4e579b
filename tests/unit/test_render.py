"""Unit tests for tree rendering."""

import pytest

from flatmerkle.core.errors import EmptyTreeRenderError
from flatmerkle.core.tree import build_tree, render_tree
from flatmerkle.crypto import sha256, sha256_node_hash


ZERO = bytes(32)
ZERO_HEX = "0x" + "00" * 32


class TestRenderTree:
    
    def test_single_node(self):
        assert render_tree([ZERO]) == f"0) {ZERO_HEX}"
    
    def test_two_leaves(self):
        tree = build_tree([ZERO, ZERO], sha256_node_hash)
        
        assert render_tree(tree).splitlines() == [
            f"0) 0x{tree[0].hex()}",
            f"├─ 1) {ZERO_HEX}",
            f"└─ 2) {ZERO_HEX}",
        ]
    
    def test_depth_first_with_ancestry_glyphs(self):
        leaves = [sha256(bytes([i])) for i in range(3)]
        tree = build_tree(leaves, sha256_node_hash)
        
        lines = render_tree(tree).splitlines()
        prefixes = [line.split(")")[0] for line in lines]
        
        assert prefixes == ["0", "├─ 1", "│  ├─ 3", "│  └─ 4", "└─ 2"]
    
    def test_blank_prefix_under_last_child(self):
        """Descendants of a last child get a blank column."""
        tree = build_tree([sha256(bytes([i])) for i in range(4)], sha256_node_hash)
        
        lines = render_tree(tree).splitlines()
        
        assert lines[-2].startswith("   ├─ 5)")
        assert lines[-1].startswith("   └─ 6)")
    
    def test_every_node_rendered_once(self):
        tree = build_tree([sha256(bytes([i])) for i in range(9)], sha256_node_hash)
        assert len(render_tree(tree).splitlines()) == len(tree)
    
    def test_empty_tree(self):
        with pytest.raises(EmptyTreeRenderError, match="Expected non-zero number of nodes"):
            render_tree([])

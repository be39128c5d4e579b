"""Flat-array Merkle tree algebra: build, prove, verify, validate, render"""
from flatmerkle.core.tree.indexing import (
    left_child_index,
    right_child_index,
    parent_index,
    sibling_index,
    is_tree_node,
    is_internal_node,
    is_leaf_node,
    leaf_tree_index,
    leaf_count,
)
from flatmerkle.core.tree.builder import make_merkle_tree, build_tree
from flatmerkle.core.tree.proof import get_proof, process_proof
from flatmerkle.core.tree.multiproof import MultiProof, get_multiproof, process_multiproof
from flatmerkle.core.tree.validate import is_valid_tree
from flatmerkle.core.tree.render import render_tree

__all__ = [
    "left_child_index",
    "right_child_index",
    "parent_index",
    "sibling_index",
    "is_tree_node",
    "is_internal_node",
    "is_leaf_node",
    "leaf_tree_index",
    "leaf_count",
    "make_merkle_tree",
    "build_tree",
    "get_proof",
    "process_proof",
    "MultiProof",
    "get_multiproof",
    "process_multiproof",
    "is_valid_tree",
    "render_tree",
]

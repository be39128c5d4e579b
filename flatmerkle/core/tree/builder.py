"""
Tree construction.

A tree over n leaves is a list of 2n - 1 nodes. The k-th input leaf is stored
at position ``len - 1 - k`` and every internal node is
``node_hash(tree[left], tree[right])`` in structural order; nothing is sorted
here. Agreement with proof verification (which does sort) therefore relies on
the node hash being symmetric.
"""

from typing import Callable, List, Sequence, TypeVar

from flatmerkle.core.errors import (
    EmptyTreeError,
    InvalidLeafLengthError,
    InvalidNodeHashError,
)
from flatmerkle.core.tree.indexing import left_child_index, right_child_index
from flatmerkle.crypto import NodeHash, bytes_to_hex
from flatmerkle.utils.logger import get_logger
from flatmerkle.utils.validation import validate_hash

logger = get_logger("tree")

T = TypeVar("T")


def make_merkle_tree(leaves: Sequence[T], node_hash: Callable[[T, T], T]) -> List[T]:
    """
    Build a tree over arbitrary payloads without validating them.
    
    Args:
        leaves: Ordered leaf values
        node_hash: Combines (left, right) into the parent value
        
    Returns:
        Flat heap-ordered list of 2n - 1 nodes (root at index 0)
    """
    if len(leaves) == 0:
        raise EmptyTreeError("Expected non-zero number of leaves")
    
    tree: List[T] = [leaves[0]] * (2 * len(leaves) - 1)
    tree_len = len(tree)
    
    for i, leaf in enumerate(leaves):
        tree[tree_len - 1 - i] = leaf
    
    for i in reversed(range(tree_len - len(leaves))):
        tree[i] = node_hash(tree[left_child_index(i)], tree[right_child_index(i)])
    
    return tree


def build_tree(leaves: Sequence[bytes], node_hash: NodeHash) -> List[bytes]:
    """
    Build a tree over 32-byte leaf hashes.
    
    Args:
        leaves: Ordered leaf hashes, each exactly 32 bytes
        node_hash: Combines two 32-byte children into a 32-byte parent
        
    Returns:
        Flat heap-ordered list of 2n - 1 hashes
        
    Raises:
        EmptyTreeError: no leaves given
        InvalidLeafLengthError: a leaf is not 32 bytes
        InvalidNodeHashError: node_hash returned something other than 32 bytes
    """
    if len(leaves) == 0:
        raise EmptyTreeError("Expected non-zero number of leaves")
    
    for i, leaf in enumerate(leaves):
        valid, err = validate_hash(leaf, f"leaf[{i}]")
        if not valid:
            logger.warning(f"Rejected leaf: {err}")
            raise InvalidLeafLengthError(f"Expected valid merkle node: {err}")
    
    def checked_node_hash(left: bytes, right: bytes) -> bytes:
        parent = node_hash(left, right)
        valid, err = validate_hash(parent, "node_hash result")
        if not valid:
            raise InvalidNodeHashError(f"node_hash must produce 32-byte hash: {err}")
        return bytes(parent)
    
    tree = make_merkle_tree([bytes(leaf) for leaf in leaves], checked_node_hash)
    
    logger.debug(f"Built tree: leaves={len(leaves)}, nodes={len(tree)}, root={bytes_to_hex(tree[0])[:18]}")
    return tree


__all__ = ["make_merkle_tree", "build_tree"]

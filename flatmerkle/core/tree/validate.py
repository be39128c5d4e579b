"""Structural validation of a full tree."""

from typing import Sequence

from flatmerkle.core.tree.indexing import left_child_index, right_child_index
from flatmerkle.crypto import NodeHash
from flatmerkle.utils.logger import get_logger
from flatmerkle.utils.validation import validate_hash

logger = get_logger("validate")


def is_valid_tree(tree: Sequence[bytes], node_hash: NodeHash) -> bool:
    """
    Check that every internal node is the hash of its two children.
    
    Children are combined in structural (left, right) order, the same way
    build_tree does. Never raises: malformed input, a bad node-hash result
    or an exception from node_hash all report False.
    
    Args:
        tree: Flat heap-ordered tree
        node_hash: Node-hash function the tree was built with
        
    Returns:
        True if the tree is non-empty and internally consistent
    """
    for i, node in enumerate(tree):
        valid, err = validate_hash(node, f"tree[{i}]")
        if not valid:
            logger.debug(f"Invalid tree: {err}")
            return False
    
    tree_len = len(tree)
    for i, node in enumerate(tree):
        left = left_child_index(i)
        right = right_child_index(i)
        
        if right >= tree_len:
            # a node with only a left child cannot come out of build_tree
            if left < tree_len:
                logger.debug(f"Invalid tree: node {i} has a single child")
                return False
            continue
        
        try:
            expected = node_hash(bytes(tree[left]), bytes(tree[right]))
        except Exception as e:
            logger.debug(f"Invalid tree: node_hash failed at node {i}: {e}")
            return False
        
        valid, _ = validate_hash(expected, "node_hash result")
        if not valid or bytes(node) != bytes(expected):
            logger.debug(f"Invalid tree: node {i} does not match its children")
            return False
    
    return tree_len > 0


__all__ = ["is_valid_tree"]

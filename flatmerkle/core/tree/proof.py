"""
Single-leaf inclusion proofs.

A proof is the list of sibling hashes met walking from a leaf up to the root,
bottom-up. Verification folds the leaf with each sibling, always putting the
byte-wise smaller value first, so the verifier does not need to know on which
side the sibling sat.
"""

from typing import List, Sequence

from flatmerkle.core.errors import (
    InvalidLeafLengthError,
    InvalidNodeHashError,
    InvalidProofNodeLengthError,
    NotALeafIndexError,
)
from flatmerkle.core.tree.indexing import is_leaf_node, parent_index, sibling_index
from flatmerkle.crypto import NodeHash
from flatmerkle.utils.logger import get_logger
from flatmerkle.utils.validation import validate_hash, validate_hashes, validate_index

logger = get_logger("proof")


def assert_leaf_node(tree_len: int, index: int) -> None:
    """Raise NotALeafIndexError unless ``index`` is a leaf position."""
    valid, err = validate_index(index)
    if not valid:
        raise NotALeafIndexError(f"Expected leaf node index: {err}")
    if not is_leaf_node(index, tree_len):
        raise NotALeafIndexError(f"Expected leaf node at index {index}")


def get_proof(tree: Sequence[bytes], leaf_index: int) -> List[bytes]:
    """
    Collect the sibling path of a leaf.
    
    Args:
        tree: Flat heap-ordered tree
        leaf_index: Array position of the leaf (not the input order)
        
    Returns:
        Sibling hashes from the leaf level up to just below the root
    """
    assert_leaf_node(len(tree), leaf_index)
    
    proof = []
    index = leaf_index
    
    while index > 0:
        s = sibling_index(index)
        if s < len(tree):
            valid, err = validate_hash(tree[s], f"tree[{s}]")
            if not valid:
                raise InvalidProofNodeLengthError(f"Expected valid merkle node: {err}")
            proof.append(bytes(tree[s]))
        index = parent_index(index)
    
    logger.debug(f"Proof for index {leaf_index}: {len(proof)} siblings")
    return proof


def process_proof(leaf: bytes, proof: Sequence[bytes], node_hash: NodeHash) -> bytes:
    """
    Recompute the root implied by a leaf and its sibling path.
    
    The caller compares the result against the root it trusts.
    
    Args:
        leaf: 32-byte leaf hash
        proof: Sibling hashes as returned by get_proof
        node_hash: Combines two 32-byte children into a 32-byte parent
        
    Returns:
        Candidate root (32 bytes)
    """
    valid, err = validate_hash(leaf, "leaf")
    if not valid:
        raise InvalidLeafLengthError(f"Expected valid merkle node: {err}")
    valid, err = validate_hashes(proof, "proof")
    if not valid:
        raise InvalidProofNodeLengthError(f"Expected valid merkle node: {err}")
    
    computed = bytes(leaf)
    for sibling in proof:
        sibling = bytes(sibling)
        if computed <= sibling:
            parent = node_hash(computed, sibling)
        else:
            parent = node_hash(sibling, computed)
        
        valid, err = validate_hash(parent, "node_hash result")
        if not valid:
            raise InvalidNodeHashError(f"node_hash must produce 32-byte hash: {err}")
        computed = bytes(parent)
    
    return computed


__all__ = ["assert_leaf_node", "get_proof", "process_proof"]

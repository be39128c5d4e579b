"""
Multiproofs - one compact proof for several leaves at once.

Conceptual Background:
---------------------
Proving k leaves with k independent proofs repeats every sibling the paths
share. A multiproof instead carries:

- leaves: the requested leaf hashes, ordered by descending tree index
- proof: only the sibling hashes that cannot be derived from the leaves
- proof_flags: one boolean per reduction step

Reconstruction keeps a FIFO of derived values seeded with the leaves. Each
step pops one value and pairs it with either the next derived value
(flag True) or the next proof hash (flag False), then appends the parent.

Generation walks the same queue in tree order: sorting the indices
descending means siblings become adjacent in the queue exactly when both are
known, and parents are appended in the order the verifier will derive them.

Invariant:
    len(leaves) + len(proof) == len(proof_flags) + 1
    proof_flags.count(False) <= len(proof)

Reconstruction does NOT sort pairs (single-leaf verification does). The
two only agree with the tree because the node hash is symmetric.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, List

from flatmerkle.core.errors import (
    DuplicateIndexError,
    EmptyTreeError,
    InvalidLeafLengthError,
    InvalidNodeHashError,
    InvalidProofNodeLengthError,
    InvariantViolationError,
)
from flatmerkle.core.tree.indexing import parent_index, sibling_index
from flatmerkle.core.tree.proof import assert_leaf_node
from flatmerkle.crypto import NodeHash
from flatmerkle.utils.logger import get_logger
from flatmerkle.utils.validation import validate_hash, validate_hashes

logger = get_logger("multiproof")


# =============================================================================
# MultiProof
# =============================================================================


@dataclass
class MultiProof:
    """
    Compacted inclusion proof for several leaves.
    
    Attributes:
        leaves: Requested leaf hashes (descending tree index)
        proof: Extra sibling hashes, in consumption order
        proof_flags: True = pair with a derived value, False = pair with proof
    """
    leaves: List[bytes] = field(default_factory=list)
    proof: List[bytes] = field(default_factory=list)
    proof_flags: List[bool] = field(default_factory=list)
    
    def check_invariants(self) -> None:
        """Raise InvariantViolationError if the counts cannot reconstruct a root."""
        required_proofs = sum(1 for flag in self.proof_flags if not flag)
        if (
            len(self.proof) < required_proofs
            or len(self.leaves) + len(self.proof) != len(self.proof_flags) + 1
        ):
            raise InvariantViolationError(
                "Invariant error: "
                f"leaves={len(self.leaves)}, proof={len(self.proof)}, "
                f"proof_flags={len(self.proof_flags)}, required_proofs={required_proofs}"
            )


# =============================================================================
# Generation
# =============================================================================


def get_multiproof(tree: List[bytes], leaf_indices: Iterable[int]) -> MultiProof:
    """
    Build a multiproof for a set of leaf positions.
    
    Args:
        tree: Flat heap-ordered tree
        leaf_indices: Array positions of the leaves to prove
        
    Returns:
        MultiProof; for an empty request the proof is just the root
        
    Raises:
        NotALeafIndexError: a position is not a leaf
        DuplicateIndexError: a position appears twice
        EmptyTreeError: nothing requested from an empty tree
    """
    indices = list(leaf_indices)
    for i in indices:
        assert_leaf_node(len(tree), i)
    indices.sort(reverse=True)
    
    for prev, cur in zip(indices, indices[1:]):
        if prev == cur:
            raise DuplicateIndexError(f"Cannot prove duplicated index {cur}")
    
    queue = deque(indices)
    proof: List[bytes] = []
    proof_flags: List[bool] = []
    
    while queue and queue[0] > 0:
        j = queue.popleft()
        s = sibling_index(j)
        p = parent_index(j)
        
        if queue and queue[0] == s:
            proof_flags.append(True)
            queue.popleft()
        else:
            proof_flags.append(False)
            proof.append(_read_node(tree, s))
        queue.append(p)
    
    if not indices:
        if not tree:
            raise EmptyTreeError("Expected non-zero number of nodes in merkle tree")
        proof.append(_read_node(tree, 0))
    
    leaves = [_read_node(tree, i) for i in indices]
    
    logger.debug(
        f"Multiproof: leaves={len(leaves)}, proof={len(proof)}, flags={len(proof_flags)}"
    )
    return MultiProof(leaves=leaves, proof=proof, proof_flags=proof_flags)


def _read_node(tree: List[bytes], index: int) -> bytes:
    valid, err = validate_hash(tree[index], f"tree[{index}]")
    if not valid:
        raise InvalidProofNodeLengthError(f"Expected valid merkle node: {err}")
    return bytes(tree[index])


# =============================================================================
# Verification
# =============================================================================


def process_multiproof(multiproof: MultiProof, node_hash: NodeHash) -> bytes:
    """
    Replay a multiproof and return the candidate root.
    
    Args:
        multiproof: Proof to replay
        node_hash: Combines two 32-byte children into a 32-byte parent;
            applied in pop order, without sorting
            
    Returns:
        Candidate root (32 bytes)
        
    Raises:
        InvariantViolationError: counts are inconsistent, or more or fewer
            than one value remains after replay
    """
    multiproof.check_invariants()
    
    valid, err = validate_hashes(multiproof.leaves, "leaves")
    if not valid:
        raise InvalidLeafLengthError(f"Expected valid merkle node: {err}")
    valid, err = validate_hashes(multiproof.proof, "proof")
    if not valid:
        raise InvalidProofNodeLengthError(f"Expected valid merkle node: {err}")
    
    stack = deque(bytes(leaf) for leaf in multiproof.leaves)
    proof = deque(bytes(p) for p in multiproof.proof)
    
    for flag in multiproof.proof_flags:
        if not stack:
            raise InvariantViolationError("Invariant error: derived stack exhausted")
        a = stack.popleft()
        if flag:
            if not stack:
                raise InvariantViolationError("Invariant error: derived stack exhausted")
            b = stack.popleft()
        else:
            if not proof:
                raise InvariantViolationError("Invariant error: proof exhausted")
            b = proof.popleft()
        
        parent = node_hash(a, b)
        valid, err = validate_hash(parent, "node_hash result")
        if not valid:
            raise InvalidNodeHashError(f"node_hash must produce 32-byte hash: {err}")
        stack.append(bytes(parent))
    
    if len(stack) + len(proof) != 1:
        raise InvariantViolationError(
            f"Invariant error: {len(stack) + len(proof)} values left after replay"
        )
    
    return stack.popleft() if stack else proof.popleft()


__all__ = ["MultiProof", "get_multiproof", "process_multiproof"]

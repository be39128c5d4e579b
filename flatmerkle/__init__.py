"""
flatmerkle

Merkle trees over 32-byte leaf hashes stored as a flat binary heap:
- Tree construction with a caller-supplied node hash
- Single-leaf inclusion proofs
- Multiproofs (compact proofs for many leaves)
- Structural validation and text rendering
"""

from flatmerkle.core.errors import (
    MerkleError,
    EmptyTreeError,
    InvalidLeafLengthError,
    InvalidProofNodeLengthError,
    InvalidNodeHashError,
    NotALeafIndexError,
    DuplicateIndexError,
    InvariantViolationError,
    EmptyTreeRenderError,
)
from flatmerkle.core.tree import (
    MultiProof,
    make_merkle_tree,
    build_tree,
    get_proof,
    process_proof,
    get_multiproof,
    process_multiproof,
    is_valid_tree,
    render_tree,
)
from flatmerkle.crypto import sha256_node_hash, keccak256_node_hash, get_node_hash
from flatmerkle.api import StandardMerkleTree

__version__ = "0.1.0"

__all__ = [
    "MerkleError",
    "EmptyTreeError",
    "InvalidLeafLengthError",
    "InvalidProofNodeLengthError",
    "InvalidNodeHashError",
    "NotALeafIndexError",
    "DuplicateIndexError",
    "InvariantViolationError",
    "EmptyTreeRenderError",
    "MultiProof",
    "make_merkle_tree",
    "build_tree",
    "get_proof",
    "process_proof",
    "get_multiproof",
    "process_multiproof",
    "is_valid_tree",
    "render_tree",
    "sha256_node_hash",
    "keccak256_node_hash",
    "get_node_hash",
    "StandardMerkleTree",
]

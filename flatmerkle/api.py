"""
Standard Merkle tree facade.

Binds the tree algebra to one of the built-in symmetric node hashes and
accepts the byte-ish values callers usually have at hand (bytes, bytearray,
memoryview, lists of ints, hex strings).

Example:
    >>> tree = StandardMerkleTree.of([leaf_a, leaf_b, leaf_c])
    >>> proof = tree.get_proof(1)
    >>> tree.verify(leaf_b, proof)
    True
"""

from typing import Any, Iterable, List, Optional, Sequence

from flatmerkle.core.serialization import TreeDocument, tree_to_document
from flatmerkle.core.tree import (
    MultiProof,
    build_tree,
    get_multiproof as _get_multiproof,
    get_proof as _get_proof,
    is_valid_tree,
    leaf_count,
    leaf_tree_index,
    process_multiproof as _process_multiproof,
    process_proof as _process_proof,
    render_tree,
)
from flatmerkle.crypto import DEFAULT_HASH_ALGORITHM, NodeHash, get_node_hash, hex_to_bytes


# =============================================================================
# Conversion
# =============================================================================


def to_hash(value: Any, name: str = "value") -> bytes:
    """
    Convert a byte-ish value to bytes.

    Length is not checked here; the tree code rejects non-32-byte nodes.

    Raises:
        TypeError: value has no byte interpretation
        ValueError: malformed hex string or ints outside 0..255
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return hex_to_bytes(value)
    if isinstance(value, (list, tuple)):
        return bytes(value)
    raise TypeError(f"{name} must be bytes-like, hex str or list of ints, got {type(value).__name__}")


def _to_hashes(values: Iterable[Any], name: str) -> List[bytes]:
    return [to_hash(v, f"{name}[{i}]") for i, v in enumerate(values)]


def _resolve(hash_algorithm: Optional[str]) -> NodeHash:
    return get_node_hash(hash_algorithm or DEFAULT_HASH_ALGORITHM)


# =============================================================================
# Module-level helpers
# =============================================================================


def make_merkle_tree(leaves: Sequence[Any], hash_algorithm: Optional[str] = None) -> List[bytes]:
    return build_tree(_to_hashes(leaves, "leaves"), _resolve(hash_algorithm))


def get_proof(tree: Sequence[Any], leaf_index: int) -> List[bytes]:
    return _get_proof(_to_hashes(tree, "tree"), leaf_index)


def process_proof(leaf: Any, proof: Sequence[Any], hash_algorithm: Optional[str] = None) -> bytes:
    return _process_proof(to_hash(leaf, "leaf"), _to_hashes(proof, "proof"), _resolve(hash_algorithm))


def get_multiproof(tree: Sequence[Any], leaf_indices: Iterable[int]) -> MultiProof:
    return _get_multiproof(_to_hashes(tree, "tree"), leaf_indices)


def process_multiproof(multiproof: MultiProof, hash_algorithm: Optional[str] = None) -> bytes:
    converted = MultiProof(
        leaves=_to_hashes(multiproof.leaves, "leaves"),
        proof=_to_hashes(multiproof.proof, "proof"),
        proof_flags=list(multiproof.proof_flags),
    )
    return _process_multiproof(converted, _resolve(hash_algorithm))


def is_valid_merkle_tree(tree: Sequence[Any], hash_algorithm: Optional[str] = None) -> bool:
    try:
        nodes = _to_hashes(tree, "tree")
    except (TypeError, ValueError):
        return False
    return is_valid_tree(nodes, _resolve(hash_algorithm))


def render_merkle_tree(tree: Sequence[Any]) -> str:
    return render_tree(_to_hashes(tree, "tree"))


# =============================================================================
# StandardMerkleTree
# =============================================================================


class StandardMerkleTree:
    """
    Immutable tree bound to a named node hash.
    
    Leaf positions in this API are input positions (0 = first leaf passed
    to ``of``); tree positions are the array indices of the flat layout.
    
    Attributes:
        tree: Flat heap-ordered node list
        hash_algorithm: Name of the node hash
    """
    
    def __init__(self, tree: Sequence[bytes], hash_algorithm: str = DEFAULT_HASH_ALGORITHM):
        self._tree: List[bytes] = list(tree)
        self.hash_algorithm = hash_algorithm.lower()
        self._node_hash = get_node_hash(self.hash_algorithm)
    
    @classmethod
    def of(cls, leaves: Sequence[Any], hash_algorithm: str = DEFAULT_HASH_ALGORITHM) -> "StandardMerkleTree":
        """Build a tree from leaf hashes."""
        return cls(make_merkle_tree(leaves, hash_algorithm), hash_algorithm)
    
    @classmethod
    def from_document(cls, document: TreeDocument) -> "StandardMerkleTree":
        return cls(document.to_tree(), document.hash_algorithm)
    
    def to_document(self) -> TreeDocument:
        return tree_to_document(self._tree, self.hash_algorithm)
    
    @property
    def tree(self) -> List[bytes]:
        return list(self._tree)
    
    @property
    def root(self) -> bytes:
        return self._tree[0]
    
    def leaf_tree_index(self, leaf_position: int) -> int:
        """Array position of the leaf passed at ``leaf_position``."""
        if not 0 <= leaf_position < len(self):
            raise IndexError(f"Leaf position {leaf_position} out of range")
        return leaf_tree_index(leaf_position, len(self))
    
    def get_leaf(self, leaf_position: int) -> bytes:
        return self._tree[self.leaf_tree_index(leaf_position)]
    
    def get_proof(self, leaf_position: int) -> List[bytes]:
        return _get_proof(self._tree, self.leaf_tree_index(leaf_position))
    
    def get_multiproof(self, leaf_positions: Iterable[int]) -> MultiProof:
        return _get_multiproof(self._tree, [self.leaf_tree_index(p) for p in leaf_positions])
    
    def verify(self, leaf: Any, proof: Sequence[Any]) -> bool:
        """
        Check a single-leaf proof against this tree's root.
        
        Malformed leaves or proof entries count as a failed proof.
        """
        try:
            return process_proof(leaf, proof, self.hash_algorithm) == self.root
        except (TypeError, ValueError):
            return False
    
    def verify_multiproof(self, multiproof: MultiProof) -> bool:
        """Check a multiproof against this tree's root."""
        try:
            return process_multiproof(multiproof, self.hash_algorithm) == self.root
        except (TypeError, ValueError):
            return False
    
    def validate(self) -> bool:
        return is_valid_tree(self._tree, self._node_hash)
    
    def render(self) -> str:
        return render_tree(self._tree)
    
    def __len__(self) -> int:
        return leaf_count(len(self._tree))
    
    def __contains__(self, leaf: Any) -> bool:
        try:
            value = to_hash(leaf)
        except (TypeError, ValueError):
            return False
        n = len(self)
        return value in self._tree[len(self._tree) - n:]
    
    def __repr__(self) -> str:
        return f"StandardMerkleTree(leaves={len(self)}, hash_algorithm={self.hash_algorithm!r}, root=0x{self.root.hex()})"


__all__ = [
    "to_hash",
    "make_merkle_tree",
    "get_proof",
    "process_proof",
    "get_multiproof",
    "process_multiproof",
    "is_valid_merkle_tree",
    "render_merkle_tree",
    "StandardMerkleTree",
]

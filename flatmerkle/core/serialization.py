"""
JSON documents for trees and proofs.

Hashes travel as 0x-prefixed hex strings. The models only check the wire
shape (hex, 32 bytes, field names); structural checks stay in the tree code.
"""

from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from flatmerkle.core.tree.multiproof import MultiProof
from flatmerkle.crypto import DEFAULT_HASH_ALGORITHM, NODE_HASHES, bytes_to_hex, hex_to_bytes
from flatmerkle.utils.validation import HASH_SIZE, validate_hex_string


def _check_hex(value: str, name: str) -> str:
    valid, err = validate_hex_string(value, name, expected_bytes=HASH_SIZE)
    if not valid:
        raise ValueError(err)
    return bytes_to_hex(hex_to_bytes(value))


def _check_algorithm(value: str) -> str:
    value = value.lower()
    if value not in NODE_HASHES:
        raise ValueError(f"unknown hash algorithm {value!r}")
    return value


class TreeDocument(BaseModel):
    """A full tree, root first."""

    model_config = ConfigDict(extra="forbid")

    hash_algorithm: str = Field(
        default=DEFAULT_HASH_ALGORITHM,
        description="Node hash the tree was built with",
    )
    nodes: List[str] = Field(
        ...,
        description="Heap-ordered node hashes",
        min_length=1,
    )

    @field_validator("hash_algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        return _check_algorithm(v)

    @field_validator("nodes")
    @classmethod
    def validate_nodes(cls, v: List[str]) -> List[str]:
        return [_check_hex(node, f"nodes[{i}]") for i, node in enumerate(v)]

    def to_tree(self) -> List[bytes]:
        return [hex_to_bytes(node) for node in self.nodes]


class ProofDocument(BaseModel):
    """A single-leaf proof."""

    model_config = ConfigDict(extra="forbid")

    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    leaf: str
    proof: List[str] = Field(default_factory=list)
    root: Optional[str] = None

    @field_validator("hash_algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        return _check_algorithm(v)

    @field_validator("leaf", "root")
    @classmethod
    def validate_hash_fields(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _check_hex(v, "hash")

    @field_validator("proof")
    @classmethod
    def validate_proof(cls, v: List[str]) -> List[str]:
        return [_check_hex(p, f"proof[{i}]") for i, p in enumerate(v)]

    def proof_bytes(self) -> List[bytes]:
        return [hex_to_bytes(p) for p in self.proof]


class MultiProofDocument(BaseModel):
    """A multiproof."""

    model_config = ConfigDict(extra="forbid")

    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    leaves: List[str] = Field(default_factory=list)
    proof: List[str] = Field(default_factory=list)
    proof_flags: List[bool] = Field(default_factory=list)
    root: Optional[str] = None

    @field_validator("hash_algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        return _check_algorithm(v)

    @field_validator("leaves", "proof")
    @classmethod
    def validate_hash_lists(cls, v: List[str]) -> List[str]:
        return [_check_hex(h, f"hash[{i}]") for i, h in enumerate(v)]

    @field_validator("root")
    @classmethod
    def validate_root(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _check_hex(v, "root")


# =============================================================================
# Converters
# =============================================================================


def tree_to_document(tree: Sequence[bytes], hash_algorithm: str = DEFAULT_HASH_ALGORITHM) -> TreeDocument:
    return TreeDocument(hash_algorithm=hash_algorithm, nodes=[bytes_to_hex(n) for n in tree])


def proof_to_document(
    leaf: bytes,
    proof: Sequence[bytes],
    root: Optional[bytes] = None,
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
) -> ProofDocument:
    return ProofDocument(
        hash_algorithm=hash_algorithm,
        leaf=bytes_to_hex(leaf),
        proof=[bytes_to_hex(p) for p in proof],
        root=bytes_to_hex(root) if root is not None else None,
    )


def multiproof_to_document(
    multiproof: MultiProof,
    root: Optional[bytes] = None,
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
) -> MultiProofDocument:
    return MultiProofDocument(
        hash_algorithm=hash_algorithm,
        leaves=[bytes_to_hex(leaf) for leaf in multiproof.leaves],
        proof=[bytes_to_hex(p) for p in multiproof.proof],
        proof_flags=list(multiproof.proof_flags),
        root=bytes_to_hex(root) if root is not None else None,
    )


def multiproof_from_document(document: MultiProofDocument) -> MultiProof:
    return MultiProof(
        leaves=[hex_to_bytes(leaf) for leaf in document.leaves],
        proof=[hex_to_bytes(p) for p in document.proof],
        proof_flags=list(document.proof_flags),
    )


DOCUMENT_TYPES = {
    "tree": TreeDocument,
    "proof": ProofDocument,
    "multiproof": MultiProofDocument,
}


def dump_document(document: BaseModel) -> str:
    """Serialize a document to indented JSON."""
    return document.model_dump_json(indent=2, exclude_none=True)


def load_document(kind: str, text: str) -> BaseModel:
    """
    Parse a JSON document of the given kind.
    
    Raises:
        ValueError: unknown kind
        pydantic.ValidationError: malformed document
    """
    try:
        model = DOCUMENT_TYPES[kind]
    except KeyError:
        raise ValueError(f"Unknown document kind {kind!r}") from None
    return model.model_validate_json(text)


__all__ = [
    "TreeDocument",
    "ProofDocument",
    "MultiProofDocument",
    "tree_to_document",
    "proof_to_document",
    "multiproof_to_document",
    "multiproof_from_document",
    "dump_document",
    "load_document",
]

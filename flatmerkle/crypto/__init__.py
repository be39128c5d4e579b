"""
Hash primitives for flatmerkle.

This module provides:
- Hashing functions (SHA-256, Keccak-256)
- Symmetric node-hash functions for combining two children
- Hex conversion helpers

Design Notes:
-------------
The tree algebra in flatmerkle.core.tree never picks a digest; it is handed a
node-hash function. The ones defined here sort their two inputs byte-wise
before hashing, so node_hash(a, b) == node_hash(b, a). Construction,
single-proof verification and multiproof verification only agree on the
root when the node hash has this property.

SHA-256 is the default. Keccak-256 matches EVM-side verifiers
(OpenZeppelin MerkleProof and friends).
"""

import hashlib
from typing import Callable, Dict

from Crypto.Hash import keccak


NodeHash = Callable[[bytes, bytes], bytes]


# =============================================================================
# Hashing
# =============================================================================


def sha256(data: bytes) -> bytes:
    """Compute SHA-256 hash."""
    return hashlib.sha256(data).digest()


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash (Ethereum-style).
    
    Note: this is the original Keccak padding, not NIST SHA3-256.
    """
    k = keccak.new(digest_bits=256)
    k.update(data)
    return k.digest()


# =============================================================================
# Node Hashes
# =============================================================================


def _sorted_pair(a: bytes, b: bytes):
    return (a, b) if a <= b else (b, a)


def sha256_node_hash(a: bytes, b: bytes) -> bytes:
    """SHA-256 over the byte-wise sorted concatenation of two children."""
    left, right = _sorted_pair(bytes(a), bytes(b))
    return sha256(left + right)


def keccak256_node_hash(a: bytes, b: bytes) -> bytes:
    """Keccak-256 over the byte-wise sorted concatenation of two children."""
    left, right = _sorted_pair(bytes(a), bytes(b))
    return keccak256(left + right)


NODE_HASHES: Dict[str, NodeHash] = {
    "sha256": sha256_node_hash,
    "keccak256": keccak256_node_hash,
}

DEFAULT_HASH_ALGORITHM = "sha256"


def get_node_hash(name: str = DEFAULT_HASH_ALGORITHM) -> NodeHash:
    """
    Resolve a hash algorithm name to its node-hash function.
    
    Raises:
        ValueError: if the name is not registered
    """
    try:
        return NODE_HASHES[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown hash algorithm {name!r}, expected one of {sorted(NODE_HASHES)}"
        ) from None


# =============================================================================
# Utility Functions
# =============================================================================


def bytes_to_hex(data: bytes) -> str:
    """Convert bytes to hex string with 0x prefix."""
    return "0x" + bytes(data).hex()


def hex_to_bytes(hex_str: str) -> bytes:
    """Convert hex string (with or without 0x prefix) to bytes."""
    if hex_str.startswith("0x") or hex_str.startswith("0X"):
        hex_str = hex_str[2:]
    return bytes.fromhex(hex_str)


__all__ = [
    "NodeHash",
    "sha256",
    "keccak256",
    "sha256_node_hash",
    "keccak256_node_hash",
    "NODE_HASHES",
    "DEFAULT_HASH_ALGORITHM",
    "get_node_hash",
    "bytes_to_hex",
    "hex_to_bytes",
]

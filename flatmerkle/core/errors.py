"""
Error types raised by the tree algebra.

All of them are precondition or postcondition failures detected before any
partial result is produced. They subclass ValueError so existing
``except ValueError`` handlers keep working; ``kind`` is a stable name a
binding layer can map without isinstance chains.
"""


class MerkleError(ValueError):
    """Base class for all flatmerkle failures."""

    kind = "MerkleError"


class EmptyTreeError(MerkleError):
    """Tree construction requested with zero leaves."""

    kind = "EmptyTree"


class InvalidLeafLengthError(MerkleError):
    """A leaf is not exactly 32 bytes."""

    kind = "InvalidLeafLength"


class InvalidProofNodeLengthError(MerkleError):
    """A proof entry (or a tree node read into a proof) is not 32 bytes."""

    kind = "InvalidProofNodeLength"


class InvalidNodeHashError(MerkleError):
    """The node-hash function returned something other than 32 bytes."""

    kind = "InvalidNodeHash"


class NotALeafIndexError(MerkleError, IndexError):
    """A proof was requested for a position that is not a leaf."""

    kind = "NotALeafIndex"


class DuplicateIndexError(MerkleError):
    """A multiproof was requested with a repeated leaf position."""

    kind = "DuplicateIndex"


class InvariantViolationError(MerkleError):
    """A multiproof is structurally inconsistent."""

    kind = "InvariantViolation"


class EmptyTreeRenderError(MerkleError):
    """Rendering was requested for an empty tree."""

    kind = "EmptyTreeRender"


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
]

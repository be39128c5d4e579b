"""
Input Validation - byte-level checks for tree nodes and proof entries.

Every hash that enters the tree algebra goes through these helpers first.
They never raise; callers turn the error message into the matching
MerkleError.
"""

from typing import Any, Iterable, Optional, Tuple

# =============================================================================
# Constants
# =============================================================================

HASH_SIZE = 32


# =============================================================================
# Validation Functions
# =============================================================================


def validate_bytes(
    data: Any,
    name: str,
    expected_length: Optional[int] = None,
) -> Tuple[bool, str]:
    """
    Validate bytes input.
    
    Args:
        data: Data to validate
        name: Field name for error messages
        expected_length: Exact expected length
        
    Returns:
        (is_valid, error_message)
    """
    if not isinstance(data, (bytes, bytearray)):
        return False, f"{name} must be bytes, got {type(data).__name__}"
    
    if expected_length is not None and len(data) != expected_length:
        return False, f"{name} must be {expected_length} bytes, got {len(data)}"
    
    return True, ""


def validate_hash(hash_value: Any, name: str = "hash") -> Tuple[bool, str]:
    """Validate a 32-byte merkle node."""
    return validate_bytes(hash_value, name, expected_length=HASH_SIZE)


def validate_hashes(values: Iterable[Any], name: str) -> Tuple[bool, str]:
    """
    Validate every entry of a sequence of hashes.

    Error messages carry the position of the first bad entry, e.g.
    ``proof[3] must be 32 bytes, got 31``.
    """
    for i, value in enumerate(values):
        valid, err = validate_hash(value, f"{name}[{i}]")
        if not valid:
            return False, err
    return True, ""


def validate_index(value: Any, name: str = "index") -> Tuple[bool, str]:
    """Validate a non-negative integer tree position."""
    # bool is an int subclass but never a meaningful position
    if isinstance(value, bool) or not isinstance(value, int):
        return False, f"{name} must be int, got {type(value).__name__}"
    
    if value < 0:
        return False, f"{name} must be >= 0, got {value}"
    
    return True, ""


def validate_hex_string(value: Any, name: str, expected_bytes: Optional[int] = None) -> Tuple[bool, str]:
    """
    Validate a hex string (with or without 0x prefix).
    
    Args:
        value: Value to validate
        name: Field name
        expected_bytes: Expected byte length when decoded
        
    Returns:
        (is_valid, error_message)
    """
    if not isinstance(value, str):
        return False, f"{name} must be str, got {type(value).__name__}"
    
    hex_str = value[2:] if value.startswith(("0x", "0X")) else value
    
    if len(hex_str) % 2 != 0:
        return False, f"{name} has odd length, invalid hex"
    
    try:
        bytes.fromhex(hex_str)
    except ValueError:
        return False, f"{name} contains invalid hex characters"
    
    if expected_bytes is not None:
        actual_bytes = len(hex_str) // 2
        if actual_bytes != expected_bytes:
            return False, f"{name} must be {expected_bytes} bytes, got {actual_bytes}"
    
    return True, ""


# =============================================================================
# Module Exports
# =============================================================================

__all__ = [
    "validate_bytes",
    "validate_hash",
    "validate_hashes",
    "validate_index",
    "validate_hex_string",
    "HASH_SIZE",
]

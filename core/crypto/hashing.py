"""
Hashing Utilities
Keccak-256 hashing and hex helpers for the distribution tree.

This module provides:
- Keccak-256 hashing for raw bytes (the EVM/ink! convention, NOT sha3_256)
- Pair hashing for parent nodes
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Hash raw bytes exactly as given, no padding or length prefixes
- The same function is used at every tree level (no leaf/node domain tag)
- All operations are deterministic
"""
from __future__ import annotations

from eth_utils import keccak


# Digest width in bytes
HASH_SIZE: int = 32


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 digest of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=bytes(data))


def hash_pair(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two nodes: keccak256(left || right).

    Used for every parent node in the tree and by the verifier when
    folding a proof. Order matters: the caller decides which node is left.

    Args:
        left: Left child digest (32 bytes)
        right: Right child digest (32 bytes)

    Returns:
        32-byte parent digest
    """
    return keccak256(left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hex string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a 0x-prefixed hex string to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "HASH_SIZE",
    "keccak256",
    "hash_pair",
    "to_hex",
    "from_hex",
]

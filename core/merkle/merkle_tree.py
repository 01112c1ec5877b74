"""
Merkle Tree Construction
Deterministic, immutable binary Merkle tree over leaf digests.

Canonical Commitment Rules (Hard Contracts):
1. Leaf digests come from core.merkle.leaf.encode_leaf()
2. Parent hashing: parent = keccak256(left || right), identical at every level
3. Padding rule: an odd level pairs its last node with itself
4. Empty leaves: rejected (there is no empty-tree root)
5. Single leaf: root = leaf, proof is empty

These rules are fixed by the claim-side verifier that stores the root.
Do not add domain separation or change the padding rule here; any change
produces roots that verifier will reject.

Determinism Notes:
- No randomness or non-deterministic ordering
- Leaf order is the caller's input order; index in level 0 is the
  entry's identity
- This module never sorts leaves
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from core.crypto.hashing import HASH_SIZE, hash_pair
from core.schemas.errors import EmptyInputException


logger = logging.getLogger(__name__)

TreeLevel = tuple[bytes, ...]


@dataclass(frozen=True)
class MerkleTree:
    """
    A fully materialized Merkle tree.

    Attributes:
        levels: Digests per level, levels[0] = leaves, levels[-1] = (root,)
    """
    levels: tuple[TreeLevel, ...]

    @property
    def root(self) -> bytes:
        """The single digest at the top of the tree."""
        return self.levels[-1][0]

    @property
    def leaves(self) -> TreeLevel:
        """The bottom level, in input order."""
        return self.levels[0]

    @property
    def leaf_count(self) -> int:
        return len(self.levels[0])

    @property
    def depth(self) -> int:
        """Number of levels including leaves and root (1 for a single leaf)."""
        return len(self.levels)


def next_level(level: Sequence[bytes]) -> TreeLevel:
    """
    Hash one level into its parent level.

    Example: [a, b, c] -> [parent(a, b), parent(c, c)]
    """
    parents: list[bytes] = []
    for i in range(0, len(level), 2):
        left = level[i]
        right = level[i + 1] if i + 1 < len(level) else left
        parents.append(hash_pair(left, right))
    return tuple(parents)


def build_merkle_tree(leaves: Sequence[bytes]) -> MerkleTree:
    """
    Build the full tree from an ordered sequence of leaf digests.

    Algorithm:
    1. level = leaves
    2. While more than one node remains, pair adjacent nodes and hash
       them; an unpaired last node is hashed with itself
    3. Keep every level so proofs can be read off without rehashing

    Args:
        leaves: Leaf digests (32 bytes each). Order matters and is preserved.

    Returns:
        MerkleTree holding every level

    Raises:
        EmptyInputException: If leaves is empty
        ValueError: If a leaf is not a 32-byte digest
    """
    if len(leaves) == 0:
        raise EmptyInputException()

    for i, leaf in enumerate(leaves):
        if len(leaf) != HASH_SIZE:
            raise ValueError(
                f"Leaf {i} must be a {HASH_SIZE}-byte digest, got {len(leaf)} bytes"
            )

    # Copy into a tuple so the caller's sequence is never aliased
    level: TreeLevel = tuple(bytes(leaf) for leaf in leaves)
    levels: list[TreeLevel] = [level]

    while len(level) > 1:
        level = next_level(level)
        levels.append(level)
        logger.debug("Built tree level %d with %d nodes", len(levels) - 1, len(level))

    return MerkleTree(levels=tuple(levels))


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """Compute only the root for a sequence of leaf digests."""
    return build_merkle_tree(leaves).root


__all__ = [
    "MerkleTree",
    "TreeLevel",
    "next_level",
    "build_merkle_tree",
    "build_merkle_root",
]

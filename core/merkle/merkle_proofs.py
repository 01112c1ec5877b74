"""
Merkle Proofs
Proof generation over a built MerkleTree and tree-free proof verification.

Verification folds the proof exactly like the claim-side verifier:
    computed = leaf
    for sibling in proof:
        computed = hash(computed, sibling) if index is even else hash(sibling, computed)
        index //= 2
    return computed == root
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Sequence

from core.crypto.hashing import hash_pair
from core.merkle.merkle_tree import MerkleTree
from core.schemas.errors import IndexOutOfRangeException


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle inclusion proof for a single leaf.

    Attributes:
        leaf: The leaf digest being proven
        index: 0-based index of the leaf in the bottom level
        siblings: Sibling digests from bottom to top of tree
        root: The root this proof is against
    """
    leaf: bytes
    index: int
    siblings: list[bytes] = field(default_factory=list)
    root: bytes = b""

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")


def get_proof(tree: MerkleTree, index: int) -> list[bytes]:
    """
    Collect the sibling path for the leaf at `index`.

    At each level below the root the sibling is `index ^ 1`. When that
    position does not exist (last node of an odd level) the node itself
    is pushed, mirroring the builder's self-duplication.

    Args:
        tree: A built tree
        index: 0-based leaf index

    Returns:
        Sibling digests ordered leaf -> root

    Raises:
        IndexOutOfRangeException: If index is not a position in level 0
    """
    if index < 0 or index >= tree.leaf_count:
        raise IndexOutOfRangeException(index, tree.leaf_count)

    siblings: list[bytes] = []
    current_index = index

    for level in tree.levels[:-1]:
        sibling_index = current_index ^ 1
        if sibling_index < len(level):
            siblings.append(level[sibling_index])
        else:
            siblings.append(level[current_index])
        current_index //= 2

    return siblings


def get_proofs(tree: MerkleTree, workers: int = 1) -> list[list[bytes]]:
    """
    Proofs for every leaf, position-aligned with tree.leaves.

    With workers > 1 the per-leaf work is spread over a thread pool;
    executor.map yields results in submission order, so proofs[i]
    always belongs to leaf i.
    """
    indices = range(tree.leaf_count)
    if workers <= 1 or tree.leaf_count < 2:
        return [get_proof(tree, i) for i in indices]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(lambda i: get_proof(tree, i), indices))


def build_merkle_proof(tree: MerkleTree, index: int) -> MerkleProof:
    """Bundle leaf, index, siblings and root for the leaf at `index`."""
    siblings = get_proof(tree, index)
    return MerkleProof(
        leaf=tree.leaves[index],
        index=index,
        siblings=siblings,
        root=tree.root,
    )


def compute_root(leaf: bytes, proof: Sequence[bytes], index: int) -> bytes:
    """
    Fold a proof into the root it implies.

    Raises:
        ValueError: If index is negative
    """
    if index < 0:
        raise ValueError(f"Leaf index must be non-negative, got {index}")

    computed = leaf
    current_index = index
    for sibling in proof:
        if current_index % 2 == 0:
            # Current node is left child
            computed = hash_pair(computed, sibling)
        else:
            # Current node is right child
            computed = hash_pair(sibling, computed)
        current_index //= 2
    return computed


def verify_proof(leaf: bytes, proof: Sequence[bytes], index: int, root: bytes) -> bool:
    """
    Check that `leaf` at `index` is committed to by `root`.

    Needs no tree: only the leaf, its proof, its index and the root.

    Returns:
        True iff the recomputed root byte-equals `root`
    """
    return compute_root(leaf, proof, index) == root


def verify_merkle_proof(proof: MerkleProof) -> bool:
    """Verify a bundled MerkleProof."""
    return verify_proof(proof.leaf, proof.siblings, proof.index, proof.root)


__all__ = [
    "MerkleProof",
    "get_proof",
    "get_proofs",
    "build_merkle_proof",
    "compute_root",
    "verify_proof",
    "verify_merkle_proof",
]

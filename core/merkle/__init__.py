"""
Merkle Tree and Commitments
Leaf encoding, tree construction, proof generation and verification.

Canonical Commitment Rules:
1. Leaf hashing: keccak256(recipient(20) || amount_be(32))
2. Parent hashing: keccak256(left || right)
3. Padding: Pair the last node with itself if a level is odd
4. Empty tree: rejected
5. Single leaf: root = leaf

Usage:
    from core.merkle import LeafRecord, build_merkle_tree, get_proof, verify_proof

    leaves = [record.digest() for record in records]
    tree = build_merkle_tree(leaves)
    proof = get_proof(tree, 2)
    assert verify_proof(leaves[2], proof, 2, tree.root)
"""
from .leaf import (
    ADDRESS_SIZE,
    AMOUNT_SIZE,
    LeafRecord,
    encode_leaf,
    parse_address,
    parse_amount,
)

from .merkle_tree import (
    MerkleTree,
    TreeLevel,
    next_level,
    build_merkle_tree,
    build_merkle_root,
)

from .merkle_proofs import (
    MerkleProof,
    get_proof,
    get_proofs,
    build_merkle_proof,
    compute_root,
    verify_proof,
    verify_merkle_proof,
)


__all__ = [
    # Leaves
    "ADDRESS_SIZE",
    "AMOUNT_SIZE",
    "LeafRecord",
    "encode_leaf",
    "parse_address",
    "parse_amount",
    # Tree
    "MerkleTree",
    "TreeLevel",
    "next_level",
    "build_merkle_tree",
    "build_merkle_root",
    # Proofs
    "MerkleProof",
    "get_proof",
    "get_proofs",
    "build_merkle_proof",
    "compute_root",
    "verify_proof",
    "verify_merkle_proof",
]

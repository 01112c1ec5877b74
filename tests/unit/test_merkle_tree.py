"""
Merkle Tree Unit Tests
Tests for core/merkle/merkle_tree.py

Required behavior:
1. Root determinism - same leaves give the same root across runs
2. Padding correctness - odd level pairs its last node with itself
3. Empty leaves - rejected
4. Single leaf - root equals leaf
5. Known roots for the two- and three-entry distributions
"""
import pytest

from core.crypto.hashing import from_hex, hash_pair, keccak256, to_hex
from core.merkle.merkle_tree import (
    MerkleTree,
    next_level,
    build_merkle_tree,
    build_merkle_root,
)
from core.schemas.errors import EmptyInputException, ErrorCodes
from fixtures.vectors import (
    ALICE_LEAF,
    BOB_LEAF,
    CREATOR_LEAF,
    CREATOR_SELF_PAIR,
    ROOT_AB,
    ROOT_ABC,
)


def _leaves(n: int) -> list[bytes]:
    return [keccak256(f"leaf {i}".encode()) for i in range(n)]


class TestEmptyTree:
    """Tests for empty tree behavior."""

    def test_empty_leaves_raise(self):
        with pytest.raises(EmptyInputException) as exc_info:
            build_merkle_tree([])
        assert exc_info.value.code == ErrorCodes.EMPTY_INPUT

    def test_empty_is_value_error(self):
        with pytest.raises(ValueError):
            build_merkle_root([])


class TestSingleLeaf:
    """Tests for single leaf tree behavior."""

    def test_single_leaf_root_equals_leaf(self):
        leaf = keccak256(b"single leaf")
        assert build_merkle_root([leaf]) == leaf

    def test_single_leaf_shape(self):
        tree = build_merkle_tree([keccak256(b"only one")])
        assert tree.depth == 1
        assert tree.leaf_count == 1
        assert len(tree.levels) == 1


class TestKnownRoots:
    """Roots for the fixed Alice/Bob/Creator distributions."""

    def test_two_entries(self):
        leaves = [from_hex(ALICE_LEAF), from_hex(BOB_LEAF)]
        assert to_hex(build_merkle_root(leaves)) == ROOT_AB

    def test_two_entries_is_plain_pair_hash(self):
        left, right = from_hex(ALICE_LEAF), from_hex(BOB_LEAF)
        assert build_merkle_root([left, right]) == hash_pair(left, right)

    def test_three_entries_levels(self):
        leaves = [from_hex(ALICE_LEAF), from_hex(BOB_LEAF), from_hex(CREATOR_LEAF)]
        tree = build_merkle_tree(leaves)

        assert [to_hex(node) for node in tree.levels[1]] == [ROOT_AB, CREATOR_SELF_PAIR]
        assert to_hex(tree.root) == ROOT_ABC

    def test_three_entries_self_pair(self):
        creator = from_hex(CREATOR_LEAF)
        assert to_hex(hash_pair(creator, creator)) == CREATOR_SELF_PAIR


class TestPadding:
    """Tests for the duplicate-last padding rule."""

    def test_next_level_odd(self):
        a, b, c = _leaves(3)
        assert next_level([a, b, c]) == (hash_pair(a, b), hash_pair(c, c))

    def test_next_level_even(self):
        a, b, c, d = _leaves(4)
        assert next_level([a, b, c, d]) == (hash_pair(a, b), hash_pair(c, d))

    def test_five_leaves(self):
        a, b, c, d, e = _leaves(5)
        level1 = (hash_pair(a, b), hash_pair(c, d), hash_pair(e, e))
        level2 = (hash_pair(level1[0], level1[1]), hash_pair(level1[2], level1[2]))
        expected_root = hash_pair(level2[0], level2[1])

        tree = build_merkle_tree([a, b, c, d, e])

        assert tree.levels[1] == level1
        assert tree.levels[2] == level2
        assert tree.root == expected_root

    def test_trailing_duplicate_shares_root(self):
        """[a, b, c] and [a, b, c, c] share a root; the leaf count tells them apart."""
        a, b, c = _leaves(3)
        odd = build_merkle_tree([a, b, c])
        even = build_merkle_tree([a, b, c, c])
        assert odd.root == even.root
        assert odd.leaf_count != even.leaf_count


class TestTreeShape:
    """Tests for level sizes and accessors."""

    @pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 7, 8, 9, 16, 33])
    def test_level_sizes(self, n):
        tree = build_merkle_tree(_leaves(n))
        for lower, upper in zip(tree.levels, tree.levels[1:]):
            assert len(upper) == (len(lower) + 1) // 2
        assert len(tree.levels[-1]) == 1

    def test_leaves_preserve_order(self):
        leaves = _leaves(6)
        tree = build_merkle_tree(leaves)
        assert list(tree.leaves) == leaves

    def test_order_matters(self):
        leaves = _leaves(4)
        assert build_merkle_root(leaves) != build_merkle_root(list(reversed(leaves)))

    def test_input_not_aliased(self):
        leaves = _leaves(3)
        tree = build_merkle_tree(leaves)
        leaves.append(keccak256(b"late"))
        assert tree.leaf_count == 3

    def test_tree_is_frozen(self):
        tree = build_merkle_tree(_leaves(2))
        assert isinstance(tree, MerkleTree)
        with pytest.raises(AttributeError):
            tree.levels = ()

    def test_wrong_leaf_size_rejected(self):
        with pytest.raises(ValueError, match="32-byte"):
            build_merkle_tree([keccak256(b"ok"), b"short"])


class TestRootDeterminism:
    """Tests for deterministic root computation."""

    def test_same_leaves_same_root(self):
        leaves = _leaves(10)
        assert build_merkle_root(leaves) == build_merkle_root(list(leaves))

    def test_any_leaf_change_changes_root(self):
        leaves = _leaves(5)
        original = build_merkle_root(leaves)
        for i in range(len(leaves)):
            modified = list(leaves)
            modified[i] = keccak256(b"tampered")
            assert build_merkle_root(modified) != original


class TestTreeDepth:
    """Tests for MerkleTree.depth."""

    @pytest.mark.parametrize("n,expected", [
        (1, 1),
        (2, 2),
        (3, 3),
        (4, 3),
        (5, 4),
        (8, 4),
        (9, 5),
    ])
    def test_depth(self, n, expected):
        assert build_merkle_tree(_leaves(n)).depth == expected

"""
Leaf Encoding Unit Tests
Tests for core/merkle/leaf.py

Covers the packed (address, uint256) leaf rule, bounds on amounts,
and the textual address/amount parsers used by ingestion.
"""
import pytest

from core.crypto.hashing import keccak256, to_hex
from core.merkle.leaf import (
    LeafRecord,
    encode_leaf,
    parse_address,
    parse_amount,
)
from core.schemas.distribution import UINT256_MAX
from core.schemas.errors import (
    AmountOverflowException,
    ErrorCodes,
    InvalidAddressException,
    ValidationException,
)
from fixtures.vectors import (
    ALICE,
    ALICE_AMOUNT,
    ALICE_LEAF,
    BOB,
    BOB_AMOUNT,
    BOB_LEAF,
    CREATOR,
    CREATOR_AMOUNT,
    CREATOR_LEAF,
    CREATOR_SMALL_AMOUNT,
    CREATOR_SMALL_LEAF,
    LITTLE_ENDIAN_ALICE_LEAF,
)


class TestEncodeLeaf:
    """Tests for encode_leaf()."""

    @pytest.mark.parametrize("address,amount,expected", [
        (ALICE, ALICE_AMOUNT, ALICE_LEAF),
        (BOB, BOB_AMOUNT, BOB_LEAF),
        (CREATOR, CREATOR_AMOUNT, CREATOR_LEAF),
        (CREATOR, CREATOR_SMALL_AMOUNT, CREATOR_SMALL_LEAF),
    ])
    def test_known_leaves(self, address, amount, expected):
        assert to_hex(encode_leaf(parse_address(address), amount)) == expected

    def test_packed_layout(self):
        """20 address bytes followed by a 32-byte big-endian amount."""
        recipient = bytes(range(20))
        amount = 0x0102
        expected = keccak256(recipient + b"\x00" * 30 + b"\x01\x02")
        assert encode_leaf(recipient, amount) == expected

    def test_little_endian_amount_rejected(self):
        """The legacy frontend leaf packs the amount little-endian; the contract does not."""
        recipient = parse_address(ALICE)
        legacy = keccak256(recipient + ALICE_AMOUNT.to_bytes(32, "little"))
        assert to_hex(legacy) == LITTLE_ENDIAN_ALICE_LEAF
        assert to_hex(encode_leaf(recipient, ALICE_AMOUNT)) != LITTLE_ENDIAN_ALICE_LEAF

    def test_zero_amount_allowed(self):
        assert len(encode_leaf(bytes(20), 0)) == 32

    def test_max_amount_allowed(self):
        leaf = encode_leaf(bytes(20), UINT256_MAX)
        assert leaf == keccak256(bytes(20) + b"\xff" * 32)

    def test_amount_changes_leaf(self):
        recipient = parse_address(ALICE)
        assert encode_leaf(recipient, 1) != encode_leaf(recipient, 2)

    def test_recipient_changes_leaf(self):
        assert encode_leaf(parse_address(ALICE), 1) != encode_leaf(parse_address(BOB), 1)

    def test_deterministic(self):
        recipient = parse_address(ALICE)
        assert encode_leaf(recipient, ALICE_AMOUNT) == encode_leaf(recipient, ALICE_AMOUNT)

    @pytest.mark.parametrize("recipient", [b"", bytes(19), bytes(21), bytes(32)])
    def test_wrong_recipient_size_rejected(self, recipient):
        with pytest.raises(InvalidAddressException):
            encode_leaf(recipient, 1)

    def test_amount_overflow_rejected(self):
        with pytest.raises(AmountOverflowException) as exc_info:
            encode_leaf(bytes(20), UINT256_MAX + 1)
        assert exc_info.value.code == ErrorCodes.AMOUNT_OVERFLOW

    def test_amount_overflow_is_overflow_error(self):
        with pytest.raises(OverflowError):
            encode_leaf(bytes(20), 2**256)

    def test_negative_amount_rejected(self):
        with pytest.raises(AmountOverflowException):
            encode_leaf(bytes(20), -1)

    def test_bool_amount_rejected(self):
        with pytest.raises(AmountOverflowException):
            encode_leaf(bytes(20), True)


class TestParseAddress:
    """Tests for parse_address()."""

    def test_lowercase_with_prefix(self):
        assert parse_address(ALICE) == bytes.fromhex(ALICE[2:])

    def test_without_prefix(self):
        assert parse_address(ALICE[2:]) == parse_address(ALICE)

    def test_uppercase_prefix_and_digits(self):
        assert parse_address("0X" + ALICE[2:].upper()) == parse_address(ALICE)

    def test_surrounding_whitespace(self):
        assert parse_address(f"  {ALICE}\t") == parse_address(ALICE)

    def test_mixed_case_checksum_not_enforced(self):
        # Deliberately wrong EIP-55 casing
        mixed = "0x" + "".join(
            c.upper() if i % 2 else c for i, c in enumerate(ALICE[2:])
        )
        assert parse_address(mixed) == parse_address(ALICE)

    @pytest.mark.parametrize("text", [
        "",
        "0x",
        "0x1234",
        ALICE + "00",
        "0x" + "g" * 40,
        "not an address",
    ])
    def test_invalid_rejected(self, text):
        with pytest.raises(InvalidAddressException):
            parse_address(text)

    def test_invalid_is_value_error(self):
        with pytest.raises(ValueError):
            parse_address("0x1234")


class TestParseAmount:
    """Tests for parse_amount()."""

    def test_decimal(self):
        assert parse_amount("100000000") == 100000000

    def test_whitespace_trimmed(self):
        assert parse_amount(" 42 ") == 42

    def test_beyond_float_precision(self):
        text = "123456789012345678901234567890"
        assert parse_amount(text) == int(text)

    def test_uint256_max(self):
        assert parse_amount(str(UINT256_MAX)) == UINT256_MAX

    def test_overflow(self):
        with pytest.raises(AmountOverflowException):
            parse_amount(str(UINT256_MAX + 1))

    def test_too_many_digits_is_overflow(self):
        with pytest.raises(AmountOverflowException) as exc_info:
            parse_amount("9" * 5000)
        assert exc_info.value.details["digits"] == 5000

    def test_leading_zeros_do_not_count(self):
        assert parse_amount("0" * 100 + "7") == 7

    def test_overflow_error_model_in_cli_shape(self):
        error = AmountOverflowException("amount exceeds uint256 capacity", row_index=3).to_error_model()
        assert error.model_dump() == {
            "code": ErrorCodes.AMOUNT_OVERFLOW,
            "message": "Invalid row 3: amount exceeds uint256 capacity",
            "details": {"row_index": 3},
        }

    def test_missing(self):
        with pytest.raises(ValidationException, match="missing"):
            parse_amount("")

    def test_negative(self):
        with pytest.raises(ValidationException, match="non-negative"):
            parse_amount("-5")

    @pytest.mark.parametrize("text", ["1.5", "1e6", "abc", "0x10", "+5", "1 000", "²"])
    def test_non_decimal(self, text):
        with pytest.raises(ValidationException, match="not a decimal integer"):
            parse_amount(text)


class TestLeafRecord:
    """Tests for the LeafRecord value type."""

    def test_from_strings(self):
        record = LeafRecord.from_strings(ALICE, str(ALICE_AMOUNT))
        assert record.recipient == bytes.fromhex(ALICE[2:])
        assert record.amount == ALICE_AMOUNT

    def test_address_is_lowercase_hex(self):
        record = LeafRecord.from_strings(ALICE.upper().replace("0X", "0x"), "1")
        assert record.address == ALICE

    def test_digest_matches_encode_leaf(self):
        record = LeafRecord.from_strings(BOB, str(BOB_AMOUNT))
        assert to_hex(record.digest()) == BOB_LEAF

    def test_frozen(self):
        record = LeafRecord.from_strings(ALICE, "1")
        with pytest.raises(AttributeError):
            record.amount = 2

    def test_wrong_size_recipient_rejected(self):
        with pytest.raises(InvalidAddressException):
            LeafRecord(recipient=bytes(19), amount=1)

    def test_overflow_rejected(self):
        with pytest.raises(AmountOverflowException):
            LeafRecord(recipient=bytes(20), amount=UINT256_MAX + 1)

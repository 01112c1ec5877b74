"""
Leaf Encoding
Maps one (recipient, amount) entitlement to its 32-byte leaf digest.

Leaf rule (must match the claim-side verifier bit for bit):
    leaf = keccak256(recipient(20 bytes) || amount(32 bytes, big-endian))

This is the packed (address, uint256) encoding: fixed width, no length
prefixes, no domain tag. The address is concatenated as its raw 20 bytes,
never as text or left-padded to 32 bytes.
"""
from __future__ import annotations

from dataclasses import dataclass

from eth_utils import is_hex_address, to_canonical_address

from core.crypto.hashing import keccak256, to_hex
from core.schemas.distribution import UINT256_MAX
from core.schemas.errors import (
    AmountOverflowException,
    InvalidAddressException,
    ValidationException,
)


ADDRESS_SIZE: int = 20
AMOUNT_SIZE: int = 32
UINT256_MAX_DIGITS: int = len(str(UINT256_MAX))


def _check_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise AmountOverflowException(
            f"Amount must be an integer, got {type(amount).__name__}"
        )
    if amount < 0:
        raise AmountOverflowException(
            f"Amount must be non-negative, got {amount}",
            details={"amount": str(amount)},
        )
    if amount > UINT256_MAX:
        raise AmountOverflowException(
            "Amount exceeds uint256 capacity",
            details={"amount": str(amount)},
        )


def encode_leaf(recipient: bytes, amount: int) -> bytes:
    """
    Compute the leaf digest for one entitlement.

    Args:
        recipient: Raw 20-byte address
        amount: Claimable amount, 0 <= amount < 2**256

    Returns:
        32-byte leaf digest

    Raises:
        InvalidAddressException: If recipient is not exactly 20 bytes
        AmountOverflowException: If amount is negative or wider than 256 bits
    """
    if not isinstance(recipient, (bytes, bytearray)) or len(recipient) != ADDRESS_SIZE:
        size = len(recipient) if isinstance(recipient, (bytes, bytearray)) else None
        raise InvalidAddressException(
            f"Recipient must be exactly {ADDRESS_SIZE} bytes",
            details={"size": size},
        )
    _check_amount(amount)
    return keccak256(bytes(recipient) + amount.to_bytes(AMOUNT_SIZE, byteorder="big"))


def parse_address(text: str) -> bytes:
    """
    Parse a textual address into its 20 raw bytes.

    Accepts an optional 0x prefix and either letter case; checksum
    casing is not enforced.

    Raises:
        InvalidAddressException: If the text is not 40 hex characters
    """
    if not isinstance(text, str):
        raise InvalidAddressException(
            f"Address must be a string, got {type(text).__name__}"
        )
    candidate = text.strip()
    if candidate[:2].lower() != "0x":
        candidate = "0x" + candidate
    else:
        candidate = "0x" + candidate[2:]
    if not is_hex_address(candidate):
        raise InvalidAddressException(
            f"Address is not a valid 20-byte hex value: {text!r}",
            details={"address": text},
        )
    return to_canonical_address(candidate)


def parse_amount(text: str) -> int:
    """
    Parse a decimal amount string into an arbitrary-precision integer.

    Raises:
        ValidationException: If the text is empty, negative or non-numeric
        AmountOverflowException: If the value does not fit in 256 bits
    """
    candidate = text.strip() if isinstance(text, str) else ""
    if not candidate:
        raise ValidationException("amount is missing")
    if candidate.startswith("-") and candidate[1:].isdigit():
        raise ValidationException(f"amount must be non-negative, got {candidate!r}")
    # isdigit() alone accepts unicode digits such as superscripts
    if not (candidate.isascii() and candidate.isdigit()):
        raise ValidationException(f"amount is not a decimal integer: {candidate!r}")
    # Wider values cannot fit; checked before int() so huge inputs never hit
    # the interpreter's integer string conversion limit
    if len(candidate.lstrip("0")) > UINT256_MAX_DIGITS:
        raise AmountOverflowException(
            "amount exceeds uint256 capacity",
            details={"amount": candidate[:UINT256_MAX_DIGITS] + "...", "digits": len(candidate)},
        )
    amount = int(candidate)
    if amount > UINT256_MAX:
        raise AmountOverflowException(
            "amount exceeds uint256 capacity",
            details={"amount": candidate},
        )
    return amount


@dataclass(frozen=True)
class LeafRecord:
    """
    One (recipient, amount) entitlement.

    Attributes:
        recipient: Raw 20-byte address
        amount: Claimable amount (uint256)
    """
    recipient: bytes
    amount: int

    def __post_init__(self) -> None:
        if len(self.recipient) != ADDRESS_SIZE:
            raise InvalidAddressException(
                f"Recipient must be exactly {ADDRESS_SIZE} bytes, got {len(self.recipient)}"
            )
        _check_amount(self.amount)

    @classmethod
    def from_strings(cls, address: str, amount: str) -> "LeafRecord":
        """Build a record from textual address and decimal amount."""
        return cls(recipient=parse_address(address), amount=parse_amount(amount))

    @property
    def address(self) -> str:
        """Lowercase 0x-prefixed hex form of the recipient."""
        return to_hex(self.recipient)

    def digest(self) -> bytes:
        """The leaf digest for this record."""
        return encode_leaf(self.recipient, self.amount)


__all__ = [
    "ADDRESS_SIZE",
    "AMOUNT_SIZE",
    "LeafRecord",
    "encode_leaf",
    "parse_address",
    "parse_amount",
]

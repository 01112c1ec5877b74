"""
Schemas
File: errors.py

Purpose: Standard error taxonomy for the distribution builder.
Defines a Pydantic model for structured error reporting (CLI --json output)
and Python exceptions for control flow.

Every failure aborts the current run; nothing here is retryable.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Input validation
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_ADDRESS = "INVALID_ADDRESS"
    AMOUNT_OVERFLOW = "AMOUNT_OVERFLOW"

    # Tree construction
    EMPTY_INPUT = "EMPTY_INPUT"
    EMPTY_DISTRIBUTION = "EMPTY_DISTRIBUTION"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"

    # Merkle & commitment
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"

    # Artifact IO
    IO_ERROR = "IO_ERROR"
    ARTIFACT_FORMAT_ERROR = "ARTIFACT_FORMAT_ERROR"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class AirdropError(BaseModel):
    """
    Serializable form of an AirdropException.

    Used by the CLI to print machine-readable errors.
    """

    model_config = ConfigDict(extra="forbid")

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.VALIDATION_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AirdropException(Exception):
    """
    Base exception for all distribution builder errors.

    Carries structured error information and can be converted to an
    AirdropError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "AIRDROP_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> AirdropError:
        """Convert this exception to an AirdropError model."""
        return AirdropError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ValidationException(AirdropException, ValueError):
    """Raised when an input row (or the input header) is malformed."""

    def __init__(
        self,
        reason: str,
        row_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if row_index is not None:
            full_details["row_index"] = row_index
            message = f"Invalid row {row_index}: {reason}"
        else:
            message = reason
        full_details["reason"] = reason
        super().__init__(
            message=message,
            code=ErrorCodes.VALIDATION_ERROR,
            details=full_details,
        )
        self.row_index = row_index
        self.reason = reason


class InvalidAddressException(AirdropException, ValueError):
    """Raised when a recipient is not a 20-byte address."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_ADDRESS,
            details=details,
        )


class AmountOverflowException(AirdropException, OverflowError):
    """Raised when an amount (or the total supply) does not fit in uint256."""

    def __init__(
        self,
        message: str,
        row_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if row_index is not None:
            full_details["row_index"] = row_index
            message = f"Invalid row {row_index}: {message}"
        super().__init__(
            message=message,
            code=ErrorCodes.AMOUNT_OVERFLOW,
            details=full_details,
        )
        self.row_index = row_index


class EmptyInputException(AirdropException, ValueError):
    """Raised when a tree is requested over zero leaves."""

    def __init__(
        self,
        message: str = "Cannot build a Merkle tree from an empty leaf list",
        details: dict[str, Any] | None = None,
        code: str = ErrorCodes.EMPTY_INPUT,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            details=details,
        )


class EmptyDistributionException(EmptyInputException):
    """Raised when the recipient list contains no entries."""

    def __init__(
        self,
        message: str = "Recipient list contains no valid entries",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            details=details,
            code=ErrorCodes.EMPTY_DISTRIBUTION,
        )


class IndexOutOfRangeException(AirdropException, IndexError):
    """Raised when a proof is requested for a nonexistent leaf."""

    def __init__(self, index: int, leaf_count: int) -> None:
        super().__init__(
            message=f"Leaf index {index} out of range for {leaf_count} leaves",
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details={"index": index, "leaf_count": leaf_count},
        )
        self.index = index
        self.leaf_count = leaf_count


class MerkleVerificationException(AirdropException):
    """Raised when a generated proof fails to verify against its root."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            details=full_details,
        )


class ArtifactIOException(AirdropException, OSError):
    """Raised when reading the input or reading/writing the artifact fails."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if path is not None:
            details["path"] = str(path)
            message = f"{message}: {path}"
        if cause is not None:
            details["cause"] = f"{type(cause).__name__}: {cause}"
            message = f"{message} ({cause})"
        super().__init__(
            message=message,
            code=ErrorCodes.IO_ERROR,
            details=details,
        )
        self.path = path


class ArtifactFormatException(AirdropException, ValueError):
    """Raised when an artifact file is not valid JSON or violates the schema."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.ARTIFACT_FORMAT_ERROR,
            details=details,
        )

"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Error models and exceptions
from .errors import (
    AirdropError,
    AirdropException,
    AmountOverflowException,
    ArtifactFormatException,
    ArtifactIOException,
    EmptyDistributionException,
    EmptyInputException,
    ErrorCodes,
    IndexOutOfRangeException,
    InvalidAddressException,
    MerkleVerificationException,
    ValidationException,
)

# Verification results
from .verification import (
    CheckResult,
    CheckSeverity,
    VerificationResult,
)

# Distribution artifact
from .distribution import (
    UINT256_MAX,
    ArtifactLeaf,
    DistributionArtifact,
)

__all__ = [
    # Errors
    "AirdropError",
    "AirdropException",
    "AmountOverflowException",
    "ArtifactFormatException",
    "ArtifactIOException",
    "EmptyDistributionException",
    "EmptyInputException",
    "ErrorCodes",
    "IndexOutOfRangeException",
    "InvalidAddressException",
    "MerkleVerificationException",
    "ValidationException",
    # Verification
    "CheckResult",
    "CheckSeverity",
    "VerificationResult",
    # Distribution
    "UINT256_MAX",
    "ArtifactLeaf",
    "DistributionArtifact",
]

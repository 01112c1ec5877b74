"""
Schemas
File: distribution.py

Purpose: The distribution artifact, the pipeline's sole output.

Wire format (key order is part of the format):
    {
      "root": "0x<64 hex>",
      "totalSupply": "<decimal>",
      "leaves": [
        {"recipient": "0x<40 hex>", "value": "<decimal>", "index": 0, "proof": ["0x<64 hex>", ...]}
      ]
    }

Amounts are decimal strings because they routinely exceed 2**53.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Largest value representable as a uint256
UINT256_MAX: int = 2**256 - 1

HEX_DIGEST_PATTERN = r"^0x[0-9a-fA-F]{64}$"
HEX_ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"
DECIMAL_PATTERN = r"^[0-9]+$"

_HEX_DIGEST_RE = re.compile(HEX_DIGEST_PATTERN)


def _check_uint256(value: str) -> str:
    if int(value) > UINT256_MAX:
        raise ValueError("value exceeds uint256 capacity")
    return value


class ArtifactLeaf(BaseModel):
    """One recipient entry with the proof needed to claim it."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    recipient: str = Field(
        ...,
        description="Recipient address, 0x + 40 hex chars",
        pattern=HEX_ADDRESS_PATTERN,
    )
    value: str = Field(
        ...,
        description="Claimable amount as a decimal string",
        pattern=DECIMAL_PATTERN,
    )
    index: int = Field(
        ...,
        description="Position of the leaf in the bottom tree level",
        ge=0,
    )
    proof: tuple[str, ...] = Field(
        default=(),
        description="Sibling digests ordered leaf -> root",
    )

    @field_validator("value")
    @classmethod
    def _value_fits_uint256(cls, v: str) -> str:
        return _check_uint256(v)

    @field_validator("proof")
    @classmethod
    def _proof_items_are_digests(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        for i, item in enumerate(v):
            if not _HEX_DIGEST_RE.match(item):
                raise ValueError(f"proof[{i}] is not a 0x-prefixed 32-byte hex digest")
        return v

    @property
    def amount(self) -> int:
        """The claimable amount as an integer."""
        return int(self.value)


class DistributionArtifact(BaseModel):
    """
    Root, total supply and every recipient's proof.

    Produced once per run and never mutated afterwards.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    root: str = Field(
        ...,
        description="Merkle root, 0x + 64 hex chars",
        pattern=HEX_DIGEST_PATTERN,
    )
    total_supply: str = Field(
        ...,
        alias="totalSupply",
        description="Sum of all amounts as a decimal string",
        pattern=DECIMAL_PATTERN,
    )
    leaves: tuple[ArtifactLeaf, ...] = Field(
        default=(),
        description="Recipient entries in tree order",
    )

    @field_validator("total_supply")
    @classmethod
    def _total_fits_uint256(cls, v: str) -> str:
        return _check_uint256(v)

    @property
    def total_supply_amount(self) -> int:
        """The total supply as an integer."""
        return int(self.total_supply)

    @property
    def entry_count(self) -> int:
        return len(self.leaves)

    def to_json_dict(self) -> dict[str, Any]:
        """Dump with wire-format key names."""
        return self.model_dump(mode="json", by_alias=True)


__all__ = [
    "UINT256_MAX",
    "HEX_DIGEST_PATTERN",
    "HEX_ADDRESS_PATTERN",
    "DECIMAL_PATTERN",
    "ArtifactLeaf",
    "DistributionArtifact",
]

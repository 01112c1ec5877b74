"""
Recipient List Ingestion

Reads the `address,amount` CSV into LeafRecords.

Validation policy: the first malformed row aborts the whole run. A
partially loaded list would silently change who is entitled to what,
so there is no skip-and-continue mode.
"""
from __future__ import annotations

import csv
import logging
from collections import Counter
from pathlib import Path
from typing import Iterable

from core.merkle.leaf import LeafRecord, parse_address, parse_amount
from core.schemas.errors import (
    AirdropException,
    AmountOverflowException,
    ArtifactIOException,
    ValidationException,
)


logger = logging.getLogger(__name__)

ADDRESS_COLUMN = "address"
AMOUNT_COLUMN = "amount"
REQUIRED_COLUMNS = (ADDRESS_COLUMN, AMOUNT_COLUMN)


def _normalize_header(fieldnames: list[str] | None) -> list[str]:
    if not fieldnames:
        raise ValidationException(
            f"Input has no header; expected columns: {','.join(REQUIRED_COLUMNS)}"
        )
    header = [(name or "").strip().lower() for name in fieldnames]
    missing = [col for col in REQUIRED_COLUMNS if col not in header]
    if missing:
        raise ValidationException(
            f"Input header is missing required columns: {', '.join(missing)}",
            details={"header": header},
        )
    return header


def parse_rows(lines: Iterable[str]) -> list[LeafRecord]:
    """
    Parse CSV text lines into records, preserving row order.

    Blank lines are skipped and values are trimmed. The row index in
    errors is the 0-based position the entry would take in the tree.

    Raises:
        ValidationException: On a missing header column or a malformed row
        AmountOverflowException: On an amount wider than 256 bits
    """
    reader = csv.reader(lines)
    header: list[str] | None = None
    records: list[LeafRecord] = []

    while True:
        try:
            row = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            raise ValidationException(
                f"unreadable CSV row: {e}",
                row_index=len(records) if header is not None else None,
                details={"line": reader.line_num},
            ) from e

        if not row or all(not cell.strip() for cell in row):
            continue
        if header is None:
            header = _normalize_header(row)
            address_col = header.index(ADDRESS_COLUMN)
            amount_col = header.index(AMOUNT_COLUMN)
            continue

        row_index = len(records)
        line = reader.line_num
        address_text = row[address_col].strip() if address_col < len(row) else ""
        amount_text = row[amount_col].strip() if amount_col < len(row) else ""

        if not address_text:
            raise ValidationException("address is missing", row_index=row_index, details={"line": line})

        try:
            record = LeafRecord(
                recipient=parse_address(address_text),
                amount=parse_amount(amount_text),
            )
        except AmountOverflowException as e:
            raise AmountOverflowException(
                e.message,
                row_index=row_index,
                details={**e.details, "line": line},
            ) from e
        except AirdropException as e:
            raise ValidationException(
                e.message,
                row_index=row_index,
                details={**e.details, "line": line},
            ) from e

        records.append(record)

    if header is None:
        _normalize_header(None)

    _warn_duplicates(records)
    return records


def load_records(path: str | Path) -> list[LeafRecord]:
    """
    Read and validate the recipient CSV at `path`.

    Raises:
        ArtifactIOException: If the file cannot be read
        ValidationException / AmountOverflowException: On malformed content
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            records = parse_rows(f)
    except OSError as e:
        raise ArtifactIOException("Cannot read recipient list", path=str(path), cause=e) from e
    except UnicodeDecodeError as e:
        raise ArtifactIOException("Recipient list is not valid UTF-8", path=str(path), cause=e) from e

    logger.info("Loaded %d recipients from %s", len(records), path)
    return records


def _warn_duplicates(records: list[LeafRecord]) -> None:
    counts = Counter(record.recipient for record in records)
    for recipient, count in counts.items():
        if count > 1:
            logger.warning(
                "Recipient %s appears %d times; only one entry can be claimed on-chain",
                "0x" + recipient.hex(),
                count,
            )


__all__ = [
    "ADDRESS_COLUMN",
    "AMOUNT_COLUMN",
    "REQUIRED_COLUMNS",
    "parse_rows",
    "load_records",
]

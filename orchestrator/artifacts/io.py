"""
Artifact IO
File: io.py

Purpose: Save and load the distribution artifact to/from disk.

The artifact is written atomically: content goes to a temporary file in
the destination directory and is moved into place with os.replace(), so
a failed run never leaves a truncated or partial artifact behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from core.config.runtime import DEFAULT_OUTPUT_DIR, DEFAULT_OUTPUT_FILE
from core.schemas.distribution import DistributionArtifact
from core.schemas.errors import ArtifactFormatException, ArtifactIOException


logger = logging.getLogger(__name__)


def default_output_path() -> Path:
    """Default artifact location relative to the working directory."""
    return Path(DEFAULT_OUTPUT_DIR) / DEFAULT_OUTPUT_FILE


def dump_artifact(artifact: DistributionArtifact) -> str:
    """
    Serialize the artifact to its on-disk JSON text.

    Keys keep model field order (root, totalSupply, leaves) so the same
    input always produces byte-identical output.
    """
    return json.dumps(artifact.to_json_dict(), indent=2) + "\n"


def _umask_file_mode() -> int:
    """Mode a plain open() would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def save_artifact(artifact: DistributionArtifact, path: str | Path) -> Path:
    """
    Write the artifact to `path`, creating parent directories as needed.

    Args:
        artifact: The artifact to persist
        path: Destination file path

    Returns:
        The path written

    Raises:
        ArtifactIOException: If the directory or file cannot be written
    """
    out_path = Path(path)
    content = dump_artifact(artifact)

    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ArtifactIOException("Cannot create output directory", path=str(out_path.parent), cause=e) from e

    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=out_path.parent,
            prefix=f".{out_path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
        # NamedTemporaryFile creates 0600; use the mode open() would have given
        os.chmod(tmp_name, _umask_file_mode())
        os.replace(tmp_name, out_path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ArtifactIOException("Cannot write artifact", path=str(out_path), cause=e) from e

    logger.debug("Wrote %d bytes to %s", len(content), out_path)
    return out_path


def parse_artifact(text: str) -> DistributionArtifact:
    """
    Parse artifact JSON text.

    Raises:
        ArtifactFormatException: If the text is not JSON or violates the schema
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ArtifactFormatException(
            f"Artifact is not valid JSON: {e.msg} (line {e.lineno})",
            details={"line": e.lineno, "column": e.colno},
        ) from e

    try:
        return DistributionArtifact.model_validate(data)
    except ValidationError as e:
        raise ArtifactFormatException(
            f"Artifact does not match the expected format ({e.error_count()} errors)",
            details={"errors": [
                {"loc": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
                for err in e.errors()
            ]},
        ) from e


def load_artifact(path: str | Path) -> DistributionArtifact:
    """
    Load and validate an artifact file.

    Raises:
        ArtifactIOException: If the file is missing or unreadable
        ArtifactFormatException: If the content is malformed
    """
    path = Path(path)
    if not path.is_file():
        raise ArtifactIOException("Artifact not found", path=str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ArtifactIOException("Cannot read artifact", path=str(path), cause=e) from e

    return parse_artifact(text)


__all__ = [
    "default_output_path",
    "dump_artifact",
    "save_artifact",
    "parse_artifact",
    "load_artifact",
]

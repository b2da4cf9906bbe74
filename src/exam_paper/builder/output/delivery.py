"""
Module: builder.output.delivery

Purpose:
    Hand rendered artifacts to the user. The default deliverer writes
    each artifact into a directory with an atomic replace, so a reader
    never sees a partially written file. Writes into the same directory
    are serialised with a cross-process lock.

Key Classes:
    - ExportArtifact: Rendered bytes plus suggested filename
    - Deliverer: Protocol for save/download primitives
    - DirectoryDeliverer: Atomic file writes into a directory
    - DeliveryFailure: Exception for failed deliveries

Dependencies:
    - portalocker: Cross-platform directory lock
    - tempfile / os (std): Atomic writes

Used By:
    - builder.controller: Dual export
"""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Generator, Optional, Protocol

import portalocker

logger = logging.getLogger(__name__)

# Held while writing into an output directory
LOCK_FILENAME = ".exam_paper.lock"


class Variant(Enum):
    """The two paper variants produced by every export."""

    QUESTIONS_ONLY = "questions_only"
    WITH_ANSWERS = "questions_with_answers"

    @property
    def show_answers(self) -> bool:
        return self is Variant.WITH_ANSWERS


class DeliveryFailure(Exception):
    """Save/download primitive failed for an artifact."""
    pass


@dataclass(frozen=True)
class ExportArtifact:
    """
    Rendered document ready for delivery (immutable).

    Attributes:
        variant: Which paper variant this is
        filename: Suggested filename, e.g. "questions_only.pdf"
        data: Rendered bytes (format opaque to the exporter)
    """

    variant: Variant
    filename: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"ExportArtifact({self.filename!r}, {self.size} bytes)"


class Deliverer(Protocol):
    """Save/download primitive. Returns where the artifact ended up, if known."""

    def deliver(self, artifact: ExportArtifact) -> Optional[Path]:
        ...


class DirectoryDeliverer:
    """
    Write artifacts into a directory.

    Existing files with the same name are replaced atomically.

    Example:
        >>> deliverer = DirectoryDeliverer(Path("out"))
        >>> deliverer.deliver(artifact)
        PosixPath('out/questions_only.pdf')
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def deliver(self, artifact: ExportArtifact) -> Path:
        """
        Write artifact to output_dir/artifact.filename.

        Raises:
            DeliveryFailure: If the file cannot be written
        """
        target = self.output_dir / artifact.filename
        try:
            with directory_lock(self.output_dir):
                _write_bytes_atomic(artifact.data, target)
        except (OSError, portalocker.LockException) as e:
            raise DeliveryFailure(f"Could not save {artifact.filename}: {e}") from e

        logger.info(f"Saved {artifact.filename} ({artifact.size} bytes) to {target}")
        return target


def _write_bytes_atomic(data: bytes, path: Path) -> None:
    """Write to a temp file in the same directory, then replace."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="wb",
        dir=path.parent,
        prefix=f".{path.stem}_",
        suffix=".tmp",
        delete=False,
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        except OSError:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise

    try:
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


@contextmanager
def directory_lock(directory: Path) -> Generator[None, None, None]:
    """
    Exclusive cross-process lock on an output directory.

    Example:
        >>> with directory_lock(Path("out")):
        ...     write_files()
    """
    directory.mkdir(parents=True, exist_ok=True)
    with open(directory / LOCK_FILENAME, "a", encoding="utf-8") as f:
        portalocker.lock(f, portalocker.LOCK_EX)
        try:
            yield
        finally:
            portalocker.unlock(f)

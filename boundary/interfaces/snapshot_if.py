"""
Snapshot loading.

Reads a project snapshot document (YAML or an already-parsed mapping),
validates it and returns the internal DTOs the engine runs on.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from boundary.helpers.dto.reference_dto import Reference
from boundary.helpers.dto.view_dto import ProjectSnapshot
from boundary.helpers.exceptions import SnapshotError
from boundary.interfaces.types.snapshot_types import SnapshotDocument

logger = logging.getLogger(__name__)


def parse_snapshot(document: Any) -> tuple[ProjectSnapshot, list[Reference]]:
    """
    Validate a parsed snapshot document.

    Args:
        document: Mapping with main_app, modules, declarations, references

    Returns:
        (snapshot, references)

    Raises:
        SnapshotError: If the document doesn't match the snapshot shape
    """
    if not isinstance(document, dict):
        raise SnapshotError("Snapshot document must be a mapping")

    try:
        parsed = SnapshotDocument.model_validate(document)
        return parsed.to_snapshot(), parsed.to_references()
    except ValidationError as e:
        raise SnapshotError(f"Invalid snapshot document: {e}") from e
    except ValueError as e:
        raise SnapshotError(str(e)) from e


def load_snapshot(path: str | Path) -> tuple[ProjectSnapshot, list[Reference]]:
    """
    Load and validate a YAML snapshot document.

    Raises:
        SnapshotError: If the file is not valid YAML or not a valid snapshot
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SnapshotError(f"Invalid YAML in {path}: {e}") from e

    snapshot, references = parse_snapshot(document)
    logger.debug(
        f"Loaded snapshot {path}: {len(snapshot.modules)} modules, "
        f"{len(snapshot.declarations)} declarations, {len(references)} references"
    )
    return snapshot, references

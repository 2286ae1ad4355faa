"""Utility functions for writing generated artifacts.

This module writes the generated TypeScript source and the metadata
document, creating missing output directories on the way.
"""

import json
from pathlib import Path
from typing import Any

from .logging_config import get_logger

logger = get_logger(__name__)

METADATA_FILENAME = "metadata.json"


class OutputWriteError(Exception):
    """Raised when an output file or directory cannot be written."""

    pass


def ensure_parent_directory(file_path: str | Path) -> Path:
    """Create the parent directory of a file if it doesn't exist.

    Args:
        file_path: Path of the file about to be written.

    Returns:
        The file path as a Path.

    Raises:
        OutputWriteError: If the directory cannot be created.
    """
    file_path = Path(file_path)
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Cannot create directory {file_path.parent}: {e}")
        raise OutputWriteError(
            f"Cannot create directory {file_path.parent}: {e}"
        ) from e
    return file_path


def write_text_file(file_path: str | Path, text: str) -> Path:
    """Write text to a file as UTF-8, replacing any existing content.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    file_path = ensure_parent_directory(file_path)
    try:
        file_path.write_text(text, encoding="utf-8")
    except OSError as e:
        logger.error(f"Error writing file {file_path}: {e}", exc_info=True)
        raise OutputWriteError(f"Error writing file {file_path}: {e}") from e

    logger.info(f"Wrote {file_path}")
    return file_path


def write_metadata_file(directory: str | Path, metadata: dict[str, Any]) -> Path:
    """Write the metadata document as ``metadata.json`` inside a directory.

    Args:
        directory: Target directory, created when missing.
        metadata: JSON-serializable metadata document.

    Returns:
        Path of the written file.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    text = json.dumps(metadata, indent=2, ensure_ascii=False) + "\n"
    return write_text_file(Path(directory) / METADATA_FILENAME, text)

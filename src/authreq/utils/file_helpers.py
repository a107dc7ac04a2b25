"""File utilities for loading and saving client configuration.

- require_file_exists: Fail early with a readable message
- load_validated_json: JSON + Pydantic validation with per-field errors
- set_secure_permissions: Owner-only permissions for config files
"""

from __future__ import annotations

__all__ = [
    "load_validated_json",
    "require_file_exists",
    "set_secure_permissions",
]

import json
import sys
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar("T", bound=BaseModel)


def set_secure_permissions(path: Path, *, is_directory: bool = False) -> None:
    """Restrict a file (0o600) or directory (0o700) to its owner.

    Does nothing on Windows.

    Args:
        path: Path to file or directory.
        is_directory: If True, use directory permissions (0o700).
    """
    if sys.platform == "win32":
        return

    try:
        path.chmod(0o700 if is_directory else 0o600)
    except OSError:
        pass  # Some filesystems refuse chmod


def require_file_exists(file_path: Path, file_type: str = "file") -> None:
    """Raise FileNotFoundError with a readable message if file doesn't exist.

    Args:
        file_path: Path to check.
        file_type: Description for error message (e.g., "configuration").

    Raises:
        FileNotFoundError: If file doesn't exist.
    """
    if file_path.exists():
        return
    raise FileNotFoundError(f"{file_type.capitalize()} file not found at {file_path}.")


def load_validated_json(
    file_path: Path,
    model_class: type[T],
    file_type: str = "file",
    encoding: str = "utf-8",
) -> T:
    """Load JSON file and validate against Pydantic model.

    Args:
        file_path: Path to JSON file.
        model_class: Pydantic model class to validate against.
        file_type: Description for error messages (e.g., "config").
        encoding: File encoding.

    Returns:
        Validated Pydantic model instance.

    Raises:
        ValueError: If JSON is invalid or validation fails.
    """
    try:
        with open(file_path, "r", encoding=encoding) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_type} file {file_path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Could not read {file_type} file {file_path}: {e}") from e

    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        errors = [
            f"  - {'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        ]
        raise ValueError(f"Invalid {file_type} in {file_path}:\n" + "\n".join(errors)) from e

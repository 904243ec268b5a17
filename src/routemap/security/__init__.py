"""
Input validation module for RouteMap

Validates user-supplied scan inputs (project root, framework tag) before any
scanning starts, and guards per-file resource limits during indexing.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

__version__ = "1.0.0"

FRAMEWORKS = ("hono", "express", "fastify", "nextjs", "unknown")


class SecurityValidationError(ValueError):
    """Raised when input validation fails"""
    pass


class PreconditionError(SecurityValidationError):
    """Raised when the project root cannot be scanned at all"""
    pass


# ============================================================================
# PYDANTIC MODELS FOR INPUT VALIDATION
# ============================================================================

class ProjectRootModel(BaseModel):
    """Validate the directory a scan starts from"""
    path: str

    @field_validator('path')
    @classmethod
    def validate_path(cls, v):
        if not v or not isinstance(v, str):
            raise ValueError("Path must be a non-empty string")

        if len(v) > 4096:
            raise ValueError("Path is too long")

        if "\x00" in v:
            raise ValueError("Null byte in path")

        return v

    def get_safe_path(self) -> Path:
        """Get validated path as a resolved, readable directory"""
        path = Path(self.path).resolve()

        if not path.exists():
            raise PreconditionError(f"Project root does not exist: {path}")
        if not path.is_dir():
            raise PreconditionError(f"Project root is not a directory: {path}")
        if not os.access(path, os.R_OK | os.X_OK):
            raise PreconditionError(f"Project root is not readable: {path}")

        return path


class FrameworkModel(BaseModel):
    """Validate framework tags"""
    framework: str = Field(..., min_length=1, max_length=32)

    @field_validator('framework')
    @classmethod
    def validate_framework(cls, v):
        tag = v.strip().lower()
        if tag not in FRAMEWORKS:
            raise ValueError(f"Unknown framework. Expected one of: {', '.join(FRAMEWORKS)}")
        return tag


# ============================================================================
# VALIDATION FUNCTIONS
# ============================================================================

def validate_project_root(path: str) -> Path:
    """
    Validate and return the project root

    Args:
        path: Directory to scan

    Returns:
        Resolved Path of the directory

    Raises:
        PreconditionError: If the root is malformed, missing, or unreadable
    """
    try:
        model = ProjectRootModel(path=str(path))
    except ValidationError as e:
        logger.error(f"Project root validation failed: {e}")
        raise PreconditionError(f"Invalid project root: {path!r}") from e
    return model.get_safe_path()


def validate_framework(framework: Optional[str]) -> str:
    """
    Validate framework tag

    Args:
        framework: Framework tag, None meaning "unknown"

    Returns:
        Normalized lowercase tag

    Raises:
        SecurityValidationError: If the tag is not supported
    """
    if framework is None:
        return "unknown"
    try:
        model = FrameworkModel(framework=framework)
        return model.framework
    except ValidationError as e:
        logger.error(f"Framework validation failed: {e}")
        raise SecurityValidationError(f"Invalid framework: {framework}") from e


def validate_file_size(filepath: Path, max_size: int = 2 * 1024 * 1024) -> int:
    """
    Validate file size to prevent resource exhaustion

    Args:
        filepath: Path to file
        max_size: Maximum file size in bytes (default: 2MB)

    Returns:
        File size in bytes

    Raises:
        SecurityValidationError: If file is too large or missing
    """
    try:
        size = filepath.stat().st_size
    except FileNotFoundError:
        raise SecurityValidationError(f"File not found: {filepath}")
    except OSError as e:
        raise SecurityValidationError(f"Cannot validate file: {e}")
    if size > max_size:
        raise SecurityValidationError(
            f"File size ({size} bytes) exceeds maximum ({max_size} bytes)"
        )
    return size


__all__ = [
    "FRAMEWORKS",
    "PreconditionError",
    "SecurityValidationError",
    "validate_file_size",
    "validate_framework",
    "validate_project_root",
]

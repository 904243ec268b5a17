from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


@dataclass(frozen=True)
class RouteRecord:
    method: str
    path: str
    file_path: str  # relative to the project root, "/" separated
    description: Optional[str] = None

    @property
    def key(self) -> str:
        """Manifest join key, e.g. "GET /products"."""
        return f"{self.method} {self.path}"

    @property
    def display_description(self) -> str:
        return self.description or self.key


def relative_file_path(path: str, project_root: Path) -> str:
    try:
        return Path(path).relative_to(project_root).as_posix()
    except ValueError:
        return Path(path).as_posix()

#!/usr/bin/env python3
"""
Framework Detector

Reads a project's package.json to pick the route discovery strategy and
notes which ORM the project uses.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

# Checked in order; the first dependency present wins.
FRAMEWORK_PACKAGES = {
    "hono": "hono",
    "next": "nextjs",
    "express": "express",
    "fastify": "fastify",
    "@hono/node-server": "hono",
}


@dataclass
class DetectedProject:
    framework: str = "unknown"
    orm: str = "none"
    orm_schema_path: Optional[str] = None


class FrameworkDetector:
    """Detect the web framework and ORM of a JavaScript/TypeScript project."""

    def __init__(self, project_root: str):
        self.project_root = Path(project_root)

    def parse_package_json(self) -> Dict[str, str]:
        """Merged dependencies and devDependencies from package.json."""
        package_file = self.project_root / "package.json"
        if not package_file.exists():
            logger.info(f"No package.json in {self.project_root}")
            return {}

        try:
            with open(package_file, 'r', encoding='utf-8') as f:
                package_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not parse package.json: {e}")
            return {}

        if not isinstance(package_data, dict):
            return {}

        dependencies: Dict[str, str] = {}
        for section in ['dependencies', 'devDependencies']:
            dependencies.update(package_data.get(section) or {})
        return dependencies

    def detect_framework(self, dependencies: Dict[str, str]) -> str:
        for package, framework in FRAMEWORK_PACKAGES.items():
            if package in dependencies:
                return framework
        return "unknown"

    def detect_orm(self, dependencies: Dict[str, str]):
        if "prisma" in dependencies or "@prisma/client" in dependencies:
            schema_path = "prisma/schema.prisma"
            if (self.project_root / schema_path).exists():
                return "prisma", schema_path
            return "prisma", None

        if "drizzle-orm" in dependencies:
            config_path = "drizzle.config.ts"
            if (self.project_root / config_path).exists():
                return "drizzle", config_path
            return "drizzle", None

        return "none", None

    def detect(self) -> DetectedProject:
        dependencies = self.parse_package_json()
        orm, schema_path = self.detect_orm(dependencies)
        detected = DetectedProject(
            framework=self.detect_framework(dependencies),
            orm=orm,
            orm_schema_path=schema_path,
        )
        logger.debug(f"Detected {detected} for {self.project_root}")
        return detected


def detect_framework(project_root: str) -> DetectedProject:
    return FrameworkDetector(project_root).detect()

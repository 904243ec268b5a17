#!/usr/bin/env python3
"""
Configuration management for RouteMap

Settings live in a YAML file: --config, else $ROUTEMAP_CONFIG, else
~/.routemap/config.yaml. String values may reference the environment as
${VAR} or ${VAR:-default}.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ROUTEMAP_CONFIG"

_ENV_REFERENCE = re.compile(r'\$\{(?P<name>[^}:]+)(?::-(?P<default>[^}]*))?\}')


@dataclass
class ScanConfig:
    """Settings for one route discovery scan"""
    extra_skip_dirs: List[str] = field(default_factory=list)
    source_extensions: List[str] = field(default_factory=lambda: [".ts", ".tsx", ".js", ".jsx"])
    routes_root: Optional[str] = None
    max_prefix_iterations: int = 10
    max_file_size_bytes: int = 2 * 1024 * 1024


@dataclass
class RouteMapConfig:
    version: int = 1
    scan: ScanConfig = field(default_factory=ScanConfig)
    default_framework: Optional[str] = None
    output_path: str = "routes.json"
    log_level: str = "WARNING"


DEFAULT_CONFIG_TEXT = """# RouteMap Configuration
version: 1

# Framework used when --framework is not given and detection is skipped.
# One of: hono, express, fastify, nextjs, unknown
default_framework: ${ROUTEMAP_FRAMEWORK:-""}

output_path: routes.json
log_level: WARNING

scan:
  # Directory names pruned in addition to node_modules, dist, build, .next, ...
  extra_skip_dirs:
    - coverage
  source_extensions: [".ts", ".tsx", ".js", ".jsx"]
  # Convention routing root (Next.js); defaults to app/ or src/app/
  routes_root: null
  max_prefix_iterations: 10
  max_file_size_bytes: 2097152
"""


def expand_env(value: Any) -> Any:
    """
    Replace ${VAR} and ${VAR:-default} references inside strings, recursing
    through lists and mappings. An unset ${VAR} without a default is left as
    written. A quoted default such as ${VAR:-""} loses its quotes.
    """
    if isinstance(value, dict):
        return {key: expand_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env(item) for item in value]
    if not isinstance(value, str):
        return value

    def _lookup(match):
        name, default = match.group("name"), match.group("default")
        if default is None:
            if name not in os.environ:
                logger.warning(f"Environment variable {name} not set")
                return match.group(0)
            return os.environ[name]
        if len(default) >= 2 and default[0] == default[-1] == '"':
            default = default[1:-1]
        return os.environ.get(name, default)

    return _ENV_REFERENCE.sub(_lookup, value)


class ConfigLoader:
    """Loads and caches the RouteMap configuration file"""

    def __init__(self, config_path: Optional[str] = None):
        if config_path:
            self.config_path = Path(config_path)
        elif os.getenv(CONFIG_ENV_VAR):
            self.config_path = Path(os.environ[CONFIG_ENV_VAR])
        else:
            self.config_path = Path.home() / ".routemap" / "config.yaml"

        self._config: Optional[RouteMapConfig] = None

    def load_config(self) -> RouteMapConfig:
        """
        Read the config file, falling back to defaults when it is absent

        Raises:
            yaml.YAMLError: If the file is not valid YAML
            ValueError: If a setting has the wrong shape or an invalid value
        """
        if not self.config_path.exists():
            logger.warning(f"Config file not found: {self.config_path}, using defaults")
            return RouteMapConfig()

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                document = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in {self.config_path}: {e}")

        if not document:
            logger.warning(f"Config file {self.config_path} is empty, using defaults")
            return RouteMapConfig()

        try:
            config = self._parse_config(expand_env(document))
        except (AttributeError, TypeError, ValueError) as e:
            raise ValueError(f"Bad configuration in {self.config_path}: {e}")

        self._config = config
        logger.info(f"Loaded configuration from {self.config_path}")
        return config

    def get_config(self) -> RouteMapConfig:
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def _parse_config(self, data: Dict[str, Any]) -> RouteMapConfig:
        defaults = ScanConfig()
        scan_data = data.get('scan') or {}
        scan = ScanConfig(
            extra_skip_dirs=list(scan_data.get('extra_skip_dirs') or []),
            source_extensions=list(scan_data.get('source_extensions') or defaults.source_extensions),
            routes_root=scan_data.get('routes_root') or None,
            max_prefix_iterations=int(scan_data.get('max_prefix_iterations', defaults.max_prefix_iterations)),
            max_file_size_bytes=int(scan_data.get('max_file_size_bytes', defaults.max_file_size_bytes)),
        )
        if scan.max_prefix_iterations < 1:
            raise ValueError("scan.max_prefix_iterations must be at least 1")

        return RouteMapConfig(
            version=int(data.get('version', 1)),
            scan=scan,
            default_framework=data.get('default_framework') or None,
            output_path=data.get('output_path') or 'routes.json',
            log_level=str(data.get('log_level', 'WARNING')).upper(),
        )

    def create_default_config(self) -> None:
        """Write the commented default config to config_path"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(DEFAULT_CONFIG_TEXT, encoding='utf-8')
        print(f"📝 Wrote default configuration to {self.config_path}")


_config_loader: Optional[ConfigLoader] = None


def get_config_loader(config_path: Optional[str] = None) -> ConfigLoader:
    """Shared loader; an explicit path replaces it."""
    global _config_loader
    if _config_loader is None or config_path:
        _config_loader = ConfigLoader(config_path)
    return _config_loader

"""
FeatWeaver Configuration

Loads configuration from YAML file or environment variables.
Supports multiple game installations and custom output paths.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)


# Default configuration file locations (checked in order)
CONFIG_SEARCH_PATHS = [
    Path.home() / ".featweaver" / "config.yaml",
    Path(__file__).parent / "config.yaml",
]


DEFAULT_CONFIG = {
    # Directories searched for packages
    "game_install_paths": [
        r"C:\Program Files (x86)\Steam\steamapps\common\Baldurs Gate 3\Data",
        str(Path.home() / "AppData" / "Local" / "Larian Studios" / "Baldur's Gate 3" / "Mods"),
    ],
    "output_path": "./generated",

    # Package archives picked up besides unpacked package directories
    "package_patterns": ["*.zip"],

    # Weaving
    "anchor_modules": ["Shared", "SharedDev"],
    "base_spell_container": "E6_Shout_EpicFeats",
    "file_prefix": "E6_Gen_",
    "max_generated_leaves": 100_000,   # Fail fast on runaway selector combinations
}


class FeatWeaverConfig:
    """Configuration for a weaving run."""

    def __init__(self, config_path: Optional[Path] = None):
        self._config: Dict[str, Any] = dict(DEFAULT_CONFIG)
        self._config_path: Optional[Path] = None

        # Load from file if found
        self._load_config(config_path)

        # Override with environment variables
        self._apply_env_overrides()

    def _load_config(self, explicit_path: Optional[Path] = None) -> None:
        """Load configuration from YAML file."""
        search_paths = [Path(explicit_path)] if explicit_path else CONFIG_SEARCH_PATHS

        for config_path in search_paths:
            if config_path and config_path.exists():
                try:
                    with open(config_path, 'r', encoding='utf-8') as f:
                        user_config = yaml.safe_load(f) or {}
                    if not isinstance(user_config, dict):
                        logger.warning("Ignoring config %s: expected a mapping, got %s",
                                       config_path, type(user_config).__name__)
                        continue
                    self._config.update(user_config)
                    self._config_path = config_path
                    return
                except (OSError, yaml.YAMLError) as e:
                    logger.warning("Failed to load config from %s: %s", config_path, e)

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        if "FEATWEAVER_GAME_PATHS" in os.environ:
            paths = os.environ["FEATWEAVER_GAME_PATHS"].split(os.pathsep)
            self._config["game_install_paths"] = [p for p in paths if p]

        if "FEATWEAVER_OUTPUT_PATH" in os.environ:
            self._config["output_path"] = os.environ["FEATWEAVER_OUTPUT_PATH"]

        if "FEATWEAVER_MAX_LEAVES" in os.environ:
            try:
                self._config["max_generated_leaves"] = int(os.environ["FEATWEAVER_MAX_LEAVES"])
            except ValueError:
                logger.warning("Ignoring non-integer FEATWEAVER_MAX_LEAVES=%s",
                               os.environ["FEATWEAVER_MAX_LEAVES"])

    @property
    def config_path(self) -> Optional[Path]:
        """Path to loaded config file, or None if using defaults."""
        return self._config_path

    @property
    def game_install_paths(self) -> List[Path]:
        return [Path(p) for p in self._config.get("game_install_paths") or []]

    @game_install_paths.setter
    def game_install_paths(self, paths: List[Path]) -> None:
        self._config["game_install_paths"] = [str(p) for p in paths]

    @property
    def output_path(self) -> Path:
        return Path(self._config["output_path"])

    @output_path.setter
    def output_path(self, path: Path) -> None:
        self._config["output_path"] = str(path)

    @property
    def package_patterns(self) -> List[str]:
        return list(self._config.get("package_patterns") or [])

    @property
    def anchor_modules(self) -> List[str]:
        return list(self._config.get("anchor_modules") or [])

    @property
    def base_spell_container(self) -> str:
        return self._config.get("base_spell_container", DEFAULT_CONFIG["base_spell_container"])

    @property
    def file_prefix(self) -> str:
        return self._config.get("file_prefix", DEFAULT_CONFIG["file_prefix"])

    @property
    def max_generated_leaves(self) -> int:
        return int(self._config.get("max_generated_leaves", DEFAULT_CONFIG["max_generated_leaves"]))

    def to_dict(self) -> Dict[str, Any]:
        """Export current configuration as dict."""
        return {
            "game_install_paths": [str(p) for p in self.game_install_paths],
            "output_path": str(self.output_path),
            "package_patterns": self.package_patterns,
            "anchor_modules": self.anchor_modules,
            "base_spell_container": self.base_spell_container,
            "file_prefix": self.file_prefix,
            "max_generated_leaves": self.max_generated_leaves,
            "config_file": str(self._config_path) if self._config_path else None,
        }


# Global config instance (lazy-loaded)
_config: Optional[FeatWeaverConfig] = None


def get_config(config_path: Optional[Path] = None) -> FeatWeaverConfig:
    """Get the global config instance, loading if needed."""
    global _config
    if _config is None or config_path is not None:
        _config = FeatWeaverConfig(config_path)
    return _config


def write_default_config(path: Optional[Path] = None) -> Path:
    """
    Write a default configuration file.

    Returns the path where config was written.
    """
    if path is None:
        path = Path.home() / ".featweaver" / "config.yaml"

    path.parent.mkdir(parents=True, exist_ok=True)

    config_content = """# FeatWeaver Configuration
#
# Paths and limits for generating feat spells.
# You can override any setting here or via environment variables
# (FEATWEAVER_GAME_PATHS, FEATWEAVER_OUTPUT_PATH, FEATWEAVER_MAX_LEAVES).

# Directories searched for packages (unpacked package folders and archives)
game_install_paths:
  - "C:\\\\Program Files (x86)\\\\Steam\\\\steamapps\\\\common\\\\Baldurs Gate 3\\\\Data"

# Where generated stat files and the wiring json are written
output_path: "./generated"

# Archive patterns to read besides unpacked package folders
package_patterns:
  - "*.zip"

# Modules that always load first
anchor_modules:
  - "Shared"
  - "SharedDev"

# Generated names
base_spell_container: "E6_Shout_EpicFeats"
file_prefix: "E6_Gen_"

# Stop if selector combinations produce more leaves than this
max_generated_leaves: 100000
"""

    with open(path, 'w', encoding='utf-8') as f:
        f.write(config_content)

    return path

"""
Ifacemaker User Configuration

Hierarchical config system with global defaults + local overrides:
- Global: ~/.ifacemaker/config.json (cross-project settings)
- Local: .ifacemaker/config.json (project-specific overrides)

Config structure:
{
  "defaults": {
    "comment": "Code generated by ifacemaker; DO NOT EDIT.",
    "copy_docs": true,          // Copy method docs (-d)
    "copy_type_doc": false,     // Copy the struct's doc (-D)
    "with_promoted": false      // Include promoted methods (-P)
  },
  "formatter": {
    "external_command": null    // e.g. "goimports"
  }
}
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

from ifacemaker.exceptions import ConfigError
from ifacemaker.logging_config import logger
from ifacemaker.synthesis.config import DEFAULT_COMMENT


# Default configuration
DEFAULT_CONFIG = {
    "defaults": {
        "comment": DEFAULT_COMMENT,
        "copy_docs": True,
        "copy_type_doc": False,
        "with_promoted": False,
    },
    "formatter": {
        "external_command": None,
    },
}


class UserConfig:
    """
    Manages hierarchical user configuration.

    Load order (with override):
    1. Default config (hardcoded)
    2. Global config (~/.ifacemaker/config.json)
    3. Local config (.ifacemaker/config.json)
    """

    def __init__(self, project_root: Optional[Path] = None, home: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            project_root: Project root directory (defaults to CWD)
            home: Home directory holding the global config (defaults to the user's home)
        """
        self.project_root = project_root or Path.cwd()
        self.global_config_path = (home or Path.home()) / ".ifacemaker" / "config.json"
        self.local_config_path = self.project_root / ".ifacemaker" / "config.json"

        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration with hierarchical override.

        Returns:
            Merged configuration dictionary

        Raises:
            ConfigError: If a config file is not valid JSON
        """
        config = copy.deepcopy(DEFAULT_CONFIG)

        for label, path in (("global", self.global_config_path), ("local", self.local_config_path)):
            if not path.exists():
                continue
            try:
                with open(path, 'r') as f:
                    loaded = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(f"Invalid {label} config {path}: {e}") from e
            except OSError as e:
                logger.warning(f"Failed to load {label} config: {e}")
                continue

            if not isinstance(loaded, dict):
                raise ConfigError(f"Invalid {label} config {path}: expected a JSON object")
            config = self._deep_merge(config, loaded)
            logger.debug(f"Loaded {label} config from {path}")

        return config

    def _deep_merge(self, base: Dict, override: Dict) -> Dict:
        """
        Deep merge two dictionaries, with override taking precedence.
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a config value by dot-separated key.

        Examples:
            config.get("defaults.copy_docs")  # True
            config.get("formatter.external_command")  # None
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def formatter_config(self) -> Dict[str, Any]:
        """Overrides for FORMATTER_CONFIG."""
        formatter = self.get("formatter", {})
        return dict(formatter) if isinstance(formatter, dict) else {}

    @property
    def config(self) -> Dict[str, Any]:
        """Get the full merged config."""
        return copy.deepcopy(self._config)


# Global singleton
_config: Optional[UserConfig] = None


def get_user_config(project_root: Optional[Path] = None) -> UserConfig:
    """
    Get the user configuration singleton.

    Args:
        project_root: Optional project root override
    """
    global _config
    if project_root is not None:
        return UserConfig(project_root)
    if _config is None:
        _config = UserConfig()
    return _config


def reset_user_config() -> None:
    """Reset the global config singleton (for testing)."""
    global _config
    _config = None

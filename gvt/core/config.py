"""Configuration management for GVT."""

import logging
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, asdict

from .interfaces import IConfigManager
from ..storage.layout import RepositoryLayout


logger = logging.getLogger(__name__)

HISTORY_STYLES = ['plain', 'table']
LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass
class DisplayConfig:
    """Display and output configuration."""
    history_style: str = "plain"
    color: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "WARNING"


@dataclass
class GitIntegrationConfig:
    """Git integration configuration."""
    update_gitignore: bool = True


@dataclass
class GvtConfig:
    """Complete configuration for GVT."""
    display: DisplayConfig
    logging: LoggingConfig
    git_integration: GitIntegrationConfig

    def __init__(self):
        self.display = DisplayConfig()
        self.logging = LoggingConfig()
        self.git_integration = GitIntegrationConfig()


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or written."""
    pass


class ConfigManager(IConfigManager):
    """Manages configuration loading, saving, and validation."""

    def __init__(self, project_root: Optional[Path] = None):
        self.project_root = project_root or Path.cwd()
        self.config_path = RepositoryLayout(self.project_root).config_path

    def load_config(self, config_path: Optional[Path] = None) -> Dict[str, Any]:
        """Load configuration from YAML file, merged over the defaults.

        A missing file yields the defaults.

        Raises:
            ConfigError: If the file exists but cannot be read or parsed
        """
        path = config_path or self.config_path

        if not path.exists():
            return self.get_default_config()

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load config from {path}: {e}")
            raise ConfigError(f"Failed to load config from {path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        # Merge with defaults to ensure all keys are present
        return self._merge_configs(self.get_default_config(), config_data)

    def save_config(self, config: Dict[str, Any], config_path: Optional[Path] = None) -> bool:
        """Save configuration to YAML file."""
        path = config_path or self.config_path

        try:
            path.parent.mkdir(parents=True, exist_ok=True)

            with open(path, 'w', encoding='utf-8') as f:
                yaml.dump(config, f, default_flow_style=False, indent=2)

            return True
        except OSError as e:
            logger.error(f"Failed to save config to {path}: {e}")
            return False

    def get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values."""
        default_config = GvtConfig()
        return {
            'display': asdict(default_config.display),
            'logging': asdict(default_config.logging),
            'git_integration': asdict(default_config.git_integration),
        }

    def validate_config(self, config: Dict[str, Any]) -> List[str]:
        """Validate configuration and return any errors."""
        errors = []

        for section in self.get_default_config():
            if not isinstance(config.get(section, {}), dict):
                errors.append(f"{section} must be a mapping")
                config = {**config, section: {}}

        display = config.get('display', {})
        history_style = display.get('history_style', 'plain')
        if history_style not in HISTORY_STYLES:
            errors.append("display.history_style must be 'plain' or 'table'")

        if not isinstance(display.get('color', True), bool):
            errors.append("display.color must be true or false")

        level = config.get('logging', {}).get('level', 'WARNING')
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            errors.append(f"logging.level must be one of {', '.join(LOG_LEVELS)}")

        git_integration = config.get('git_integration', {})
        if not isinstance(git_integration.get('update_gitignore', True), bool):
            errors.append("git_integration.update_gitignore must be true or false")

        return errors

    def _merge_configs(self, default: Dict[str, Any], user: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge user config with default config."""
        result = default.copy()

        for key, value in user.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def create_default_config_file(self) -> bool:
        """Create a default configuration file."""
        return self.save_config(self.get_default_config())

    def get_config_path(self) -> Path:
        """Get the path to the configuration file."""
        return self.config_path

"""Configuration loading and option resolution for modulartype"""

import json
import os
import platform
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .core.models import ScaleConfig
from .core.validation import ConfigurationError
from .utils.logging import ModularTypeLogger

CONFIG_FILENAMES = ("modulartype.yaml", "modulartype.yml", "modulartype.json")

# Option names as spelled by the PostCSS plugin
CAMEL_CASE_OPTIONS = {
    "minScreenWidth": "min_screen_width",
    "maxScreenWidth": "max_screen_width",
    "minFontSize": "min_font_size",
    "maxFontSize": "max_font_size",
    "minRatio": "min_ratio",
    "maxRatio": "max_ratio",
    "minStep": "min_step",
    "maxStep": "max_step",
    "rootFontSize": "root_font_size",
    "precision": "precision",
    "prefix": "prefix",
    "suffixType": "suffix_type",
    "suffixValues": "suffix_values",
    "unit": "unit",
    "replaceInline": "replace_inline",
    "generatorDirective": "generator_directive",
}

OPTION_NAMES = {f.name for f in fields(ScaleConfig)}


class DataManager:
    """Manages default option files with user override support"""

    DEFAULTS_FILE = "defaults.yaml"

    def __init__(self):
        # Package data directory (built-in defaults)
        self.package_data_dir = Path(__file__).parent / "data"

        # User config directory (overrides)
        self.user_data_dir = self._get_user_data_dir()

    def _get_user_data_dir(self) -> Path:
        """Get user config directory based on OS or environment variable"""
        if custom_dir := os.environ.get("MODULARTYPE_CONFIG_DIR"):
            return Path(custom_dir).expanduser()

        system = platform.system()

        if system == "Darwin":  # macOS
            return Path.home() / "Library" / "Application Support" / "modulartype"
        elif system == "Windows":
            app_data = os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming")
            return Path(app_data) / "modulartype"
        else:  # Linux and others
            xdg_config = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
            return Path(xdg_config) / "modulartype"

    @property
    def logs_dir(self) -> Path:
        """Run logs written by the command line tool"""
        return self.user_data_dir / "logs"

    def load_defaults(self) -> Dict[str, Any]:
        """Packaged defaults with the user's defaults file merged on top"""
        defaults: Dict[str, Any] = {}

        package_file = self.package_data_dir / self.DEFAULTS_FILE
        if package_file.exists():
            defaults.update(load_config_file(package_file))

        user_file = self.user_data_dir / self.DEFAULTS_FILE
        if user_file.exists():
            ModularTypeLogger.info(f"Using user defaults from {user_file}")
            defaults.update(load_config_file(user_file))

        return defaults


# Singleton instance
_data_manager = None


def get_data_manager() -> DataManager:
    """Get or create the data manager singleton"""
    global _data_manager
    if _data_manager is None:
        _data_manager = DataManager()
    return _data_manager


def load_config_file(filepath: Union[str, Path]) -> Dict[str, Any]:
    """Load options from a JSON or YAML file based on extension

    Raises:
        ConfigurationError: If the file cannot be read or does not hold a mapping
    """
    filepath = Path(filepath)
    try:
        with open(filepath, encoding="utf-8") as f:
            if filepath.suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif filepath.suffix == ".json":
                content = f.read()
                data = json.loads(content) if content.strip() else None
            else:
                # Try YAML first, then JSON
                content = f.read()
                try:
                    data = yaml.safe_load(content)
                except yaml.YAMLError:
                    data = json.loads(content)
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Error loading config file {filepath}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {filepath} must contain a mapping of options, got {type(data).__name__}"
        )
    return data


def discover_config(start_dir: Union[str, Path]) -> Optional[Path]:
    """Find a modulartype config file in the given directory"""
    start_dir = Path(start_dir)
    for name in CONFIG_FILENAMES:
        candidate = start_dir / name
        if candidate.is_file():
            return candidate
    return None


def normalize_options(options: Mapping[str, Any]) -> Dict[str, Any]:
    """Map camelCase option names to field names and drop None values

    Raises:
        ConfigurationError: On an unknown option name, or suffix_values given
            as a single string
    """
    normalized = {}
    for key, value in options.items():
        name = CAMEL_CASE_OPTIONS.get(key, key)
        if name not in OPTION_NAMES:
            raise ConfigurationError(f"Unknown option '{key}'")
        if value is None:
            continue
        if name == "suffix_values":
            if isinstance(value, str):
                raise ConfigurationError(
                    f"Option '{key}' must be a list of suffixes, not the string '{value}'"
                )
            value = tuple(value)
        normalized[name] = value
    return normalized


def resolve_config(options: Optional[Mapping[str, Any]] = None, **overrides) -> ScaleConfig:
    """Merge options over a fresh copy of the defaults

    Keyword overrides win over `options`. A ScaleConfig passed as `options`
    is used as the base instead of the defaults.
    """
    if isinstance(options, ScaleConfig):
        merged = options.to_dict()
    else:
        merged = {}
        merged.update(normalize_options(options or {}))
    merged.update(normalize_options(overrides))
    return ScaleConfig(**normalize_options(merged))

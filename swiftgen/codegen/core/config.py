"""
Generator settings for swiftgen.

Settings come from built-in defaults, an optional JSON file and explicit
overrides, merged in that order. Keys the generator does not know are kept
in ``custom`` and reported by validation.
"""

import copy
import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...logging_config import get_logger

logger = get_logger(__name__)

REQUIRED_MATCH_MODES = {"raw", "pascal"}
FIELD_ORDERS = {"document", "sorted"}


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Configuration for the Swift generator."""

    # Output settings
    output_file: Optional[str] = None
    root_name: str = "Root"

    # Code style settings
    indent_size: int = 4
    use_tabs: bool = True
    line_ending: str = "\n"
    field_keyword: str = "let"
    conformances: List[str] = field(default_factory=lambda: ["Codable"])

    # Required entries are raw schema property names ("raw") or the
    # converted PascalCase field names ("pascal")
    required_match: str = "raw"

    # "document" keeps input order, "sorted" sorts by property name
    field_order: str = "document"

    # Additional metadata
    add_comments: bool = True

    # Schema type tag -> Swift type name
    type_overrides: Dict[str, str] = field(default_factory=dict)

    # Unrecognized settings
    custom: Dict[str, Any] = field(default_factory=dict)

    @property
    def indent(self) -> str:
        return "\t" if self.use_tabs else " " * self.indent_size


DEFAULT_CONFIG: Dict[str, Any] = asdict(GeneratorConfig())


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = dict(DEFAULT_CONFIG)

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration: defaults, then file, then overrides
        """
        base_config = copy.deepcopy(self._defaults)

        if config_file:
            file_config = self._load_config_file(config_file)
            base_config.update(file_config)
            logger.debug(f"Loaded configuration from {config_file}")

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom") or {})
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.required_match not in REQUIRED_MATCH_MODES:
            warnings.append(f"Invalid required_match: {config.required_match}")

        if config.field_order not in FIELD_ORDERS:
            warnings.append(f"Invalid field_order: {config.field_order}")

        if config.field_keyword not in {"let", "var"}:
            warnings.append(f"Invalid field_keyword: {config.field_keyword}")

        if not isinstance(config.indent_size, int) or config.indent_size < 0:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        if not config.root_name:
            warnings.append("root_name must not be empty")

        for key in config.custom:
            warnings.append(f"Unknown setting: {key}")

        return warnings


_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    return get_config_manager().get_config(custom_config, config_file)


EXAMPLE_CONFIG = {
    "root_name": "Model",
    "use_tabs": False,
    "indent_size": 4,
    "field_keyword": "var",
    "conformances": ["Codable", "Equatable"],
    "required_match": "raw",
    "field_order": "sorted",
    "type_overrides": {"integer": "Int64"},
}

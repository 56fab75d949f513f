"""
Configuration management for configuration generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import asdict, dataclass, field

from .classifier import AUDIT_FIELD_NAMES
from .rules import DEFAULT_STRING_LENGTH


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Base configuration for configuration generators."""

    # Output settings
    output_dir: Optional[str] = None
    namespace: Optional[str] = None  # Overrides the declaration namespace

    # Naming of generated types
    base_class_name: str = "AuditEntityConfiguration"
    entity_suffix: str = "CommonConfiguration"

    # Audit fields
    audit_fields_file: str = "AuditFields.txt"
    audit_field_names: List[str] = field(
        default_factory=lambda: list(AUDIT_FIELD_NAMES)
    )

    # Mapping rules
    default_string_length: int = DEFAULT_STRING_LENGTH

    # Code style settings
    add_comments: bool = True

    # Custom template directory (replaces the target's templates)
    template_dir: Optional[str] = None

    # Custom settings (target-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    def entity_artifact_name(self, entity_name: str) -> str:
        """Artifact name for an entity configuration."""
        return f"{entity_name}{self.entity_suffix}"


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported targets."""
        self._configs["csharp"] = {
            "base_class_name": "AuditEntityConfiguration",
            "entity_suffix": "CommonConfiguration",
            "audit_fields_file": "AuditFields.txt",
            "add_comments": True,
            "custom": {
                "file_suffix": ".g.cs",
                "builder_type": "EntityTypeBuilder",
            },
        }

    def get_config(
        self,
        target: Optional[str] = None,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a target.

        Args:
            target: Target name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the target
        """
        # Start with defaults; copy nested dicts so overrides don't leak back
        defaults = self._configs.get((target or "").lower(), {})
        base_config = json.loads(json.dumps(defaults))

        if config_file:
            file_config = self._load_config_file(config_file)
            self._merge(base_config, file_config)

        if custom_config:
            self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    @staticmethod
    def _merge(base: Dict[str, Any], overrides: Dict[str, Any]):
        """Merge overrides into base, combining the custom sections."""
        for key, value in overrides.items():
            if key == "custom" and isinstance(value, dict):
                base.setdefault("custom", {}).update(value)
            else:
                base[key] = value

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
            raise ConfigError(
                f"Invalid JSON in configuration file {path}: {str(e)}"
            ) from e
        except OSError as e:
            raise ConfigError(
                f"Failed to load configuration file {path}: {str(e)}"
            ) from e

        if not isinstance(config, dict):
            raise ConfigError(
                f"Configuration file must contain a JSON object: {path}"
            )

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = set(GeneratorConfig.__dataclass_fields__)

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys land in the custom dict
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)
        config_dict = asdict(config)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}") from e

    def list_targets(self) -> List[str]:
        """Get list of targets with default configurations."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if not config.base_class_name.isidentifier():
            warnings.append(f"Invalid base_class_name: {config.base_class_name}")

        if config.entity_suffix and not config.entity_suffix.isidentifier():
            warnings.append(f"Invalid entity_suffix: {config.entity_suffix}")

        if not isinstance(config.default_string_length, int) or (
            config.default_string_length <= 0
        ):
            warnings.append(
                f"Invalid default_string_length: {config.default_string_length}"
            )

        if config.namespace is not None:
            parts = config.namespace.split(".")
            if not all(part.isidentifier() for part in parts):
                warnings.append(f"Invalid namespace: {config.namespace}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    target: Optional[str] = None,
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        target: Target name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the target
    """
    manager = get_config_manager()
    return manager.get_config(target, custom_config, config_file)

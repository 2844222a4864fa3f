"""
Generator settings.

Settings come from three layers, later ones winning: per-target defaults,
an optional JSON file, and explicit overrides. Config files may use
camelCase keys and may hold a shared section plus one section per target::

    {"buttonLabel": "Add entry", "acf": {"locationStrategy": "post-type-template"}}
"""

import copy
import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class ConfigError(Exception):
    """A configuration file is missing, unreadable or malformed."""

    pass


LOCATION_STRATEGIES = ("page-param", "post-type-template")


@dataclass
class GeneratorConfig:
    """Settings shared by the export generators."""

    # ACF location binding
    location_strategy: str = "page-param"
    page_template_format: str = "page-{slug}.php"

    # ACF structural defaults
    repeater_layout: str = "table"
    group_layout: str = "block"
    layout_display: str = "block"
    button_label: str = "Add Row"

    # Output
    output_file: Optional[str] = None
    json_indent: int = 2
    export_version: str = "1.0.0"

    max_fetch_workers: int = 8

    # Unrecognised keys, e.g. graphql media_type or template_dir
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Builds GeneratorConfig objects from defaults, files and overrides."""

    def __init__(self):
        self._defaults: Dict[str, Dict[str, Any]] = {
            "acf": {"location_strategy": "page-param", "json_indent": 2},
            "graphql": {"custom": {"media_type": "MediaItem"}},
        }

    def get_config(
        self,
        target: Optional[str] = None,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Resolve the settings for one target.

        Args:
            target: ``acf``, ``graphql`` or None for the shared defaults only
            custom_config: Overrides applied last
            config_file: Optional JSON settings file

        Raises:
            ConfigError: If the file cannot be used
        """
        merged = copy.deepcopy(self._defaults.get(target or "", {}))

        if config_file:
            file_config = self._read_file(config_file)
            merged.update(
                _snake_keys(
                    {k: v for k, v in file_config.items() if k not in self._defaults}
                )
            )
            section = file_config.get(target) if target else None
            if isinstance(section, dict):
                merged.update(_snake_keys(section))

        if custom_config:
            merged.update(_snake_keys(custom_config))

        return self._build(merged)

    def _read_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")
        if path.suffix.lower() != ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read configuration file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")
        return data

    def _build(self, values: Dict[str, Any]) -> GeneratorConfig:
        """Split known settings from custom ones and build the dataclass."""
        known = {f.name for f in fields(GeneratorConfig)}
        kwargs: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}

        for key, value in values.items():
            key = _snake_key(key)
            (kwargs if key in known else extra)[key] = value

        if extra:
            kwargs["custom"] = {**(kwargs.get("custom") or {}), **extra}
        return GeneratorConfig(**kwargs)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Write settings as a flat JSON object that get_config can read back."""
        data = asdict(config)
        data.update(data.pop("custom"))
        path = Path(output_path)
        try:
            path.write_text(
                json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8"
            )
        except OSError as e:
            raise ConfigError(f"Cannot write configuration to {path}: {e}") from e

    def list_targets(self) -> List[str]:
        return list(self._defaults)

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """Return human readable problems; an empty list means usable."""
        problems = []

        if config.location_strategy not in LOCATION_STRATEGIES:
            problems.append(f"Invalid location_strategy: {config.location_strategy}")
        if "{slug}" not in config.page_template_format:
            problems.append(
                "page_template_format does not contain '{slug}'; "
                "every page will share one template"
            )
        if config.json_indent is not None and config.json_indent < 0:
            problems.append(f"Invalid json_indent: {config.json_indent}")
        if config.max_fetch_workers < 1:
            problems.append(f"Invalid max_fetch_workers: {config.max_fetch_workers}")

        return problems


def _snake_key(key: str) -> str:
    """``locationStrategy`` -> ``location_strategy``; snake keys pass through."""
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in key)


def _snake_keys(values: Dict[str, Any]) -> Dict[str, Any]:
    return {_snake_key(key): value for key, value in values.items()}


_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    global _manager
    if _manager is None:
        _manager = ConfigManager()
    return _manager


def load_config(
    target: Optional[str] = None,
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """Resolve settings through the shared ConfigManager."""
    return get_config_manager().get_config(target, custom_config, config_file)

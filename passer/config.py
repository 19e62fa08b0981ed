"""
Config system - layered dispatch configuration with validation.
"""

from typing import Any, Dict, Optional, Type, get_type_hints, get_origin, get_args
from dataclasses import dataclass, fields, MISSING
from pathlib import Path
import json
import logging
import os
import types

from dotenv import dotenv_values

from .controller.convention import DEFAULT_ROOT_NAMESPACE, join_namespace
from .cors import CORSPolicy
from .faults import ConfigInvalidFault

logger = logging.getLogger("passer.config")


class ConfigError(ConfigInvalidFault):
    """Raised when configuration validation fails."""


@dataclass(frozen=True)
class DispatchConfig:
    """
    Settings the dispatch core reads.

    Attributes:
        root_namespace: Namespace prepended to every parsed controller name
        controllers_package: Python package the root namespace maps to
        strict_callbacks: Raise on callbacks that are neither strings nor
            callable; when False such routes render None
        cors: Policy forwarded to the renderer, if any
    """
    root_namespace: str = DEFAULT_ROOT_NAMESPACE
    controllers_package: Optional[str] = "app.controllers"
    strict_callbacks: bool = True
    cors: Optional[CORSPolicy] = None


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources with precedence:
    overrides > environment variables > .env files > config files > defaults
    """

    def __init__(self, env_prefix: str = "PASSER_"):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        paths: Optional[list[str]] = None,
        env_prefix: str = "PASSER_",
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> "ConfigLoader":
        """
        Load configuration from multiple sources.

        Merge order (later overrides earlier):
        1. Config files (JSON or YAML, glob patterns supported)
        2. .env file (only keys carrying the prefix)
        3. Environment variables (PASSER_* prefix, ``__`` nests keys)
        4. Manual overrides

        Example:
            PASSER_DISPATCH__ROOT_NAMESPACE="Shop\\Controllers"
            -> {"dispatch": {"root_namespace": "Shop\\Controllers"}}
        """
        loader = cls(env_prefix=env_prefix)

        for pattern in paths or []:
            loader._load_from_files(pattern)

        if env_file:
            loader._load_env_file(env_file)

        loader._load_from_env()

        if overrides:
            loader._merge_dict(loader.config_data, overrides)

        return loader

    def _load_from_files(self, pattern: str):
        """Load config from JSON or YAML files."""
        from glob import glob

        for path_str in sorted(glob(pattern)):
            path = Path(path_str)
            if path.suffix == ".json":
                self._load_json_file(path)
            elif path.suffix in (".yaml", ".yml"):
                self._load_yaml_file(path)
            else:
                logger.warning("Ignoring config file with unknown extension: %s", path)

    def _load_json_file(self, path: Path):
        with open(path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ConfigError(str(path), "top-level JSON value must be an object")
        self._merge_dict(self.config_data, data)

    def _load_yaml_file(self, path: Path):
        import yaml
        with open(path) as f:
            data = yaml.safe_load(f)
        if data:
            if not isinstance(data, dict):
                raise ConfigError(str(path), "top-level YAML value must be a mapping")
            self._merge_dict(self.config_data, data)

    def _load_env_file(self, path: str):
        """Load prefixed keys from a .env file."""
        env_path = Path(path)
        if not env_path.exists():
            return

        for key, value in dotenv_values(env_path).items():
            if value is not None and key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _load_from_env(self):
        for key, value in os.environ.items():
            if key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _set_nested(self, key: str, value: str):
        """Convert PASSER_DISPATCH__ROOT_NAMESPACE to nested dict."""
        key = key[len(self.env_prefix):]
        parts = key.lower().split("__")

        current = self.config_data
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        current[parts[-1]] = self._parse_value(value)

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "yes", "1"):
            return True
        if value.lower() in ("false", "no", "0"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        if value.startswith(("{", "[")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def _merge_dict(self, target: dict, source: dict):
        """Deep merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._merge_dict(target[key], value)
            else:
                target[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get config value by dot-separated path."""
        current = self.config_data
        for part in path.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    def dispatch_config(self) -> DispatchConfig:
        """Validated ``DispatchConfig`` built from the ``dispatch`` section."""
        data = dict(self.get("dispatch", {}) or {})

        cors = data.get("cors")
        if isinstance(cors, dict):
            try:
                data["cors"] = CORSPolicy.from_dict(cors)
            except (TypeError, ValueError) as exc:
                raise ConfigError("dispatch.cors", str(exc)) from exc
        elif cors is not None and not isinstance(cors, CORSPolicy):
            raise ConfigError("dispatch.cors", f"expected a mapping, got {type(cors).__name__}")

        config = self._instantiate_dataclass(DispatchConfig, data)

        root = join_namespace(config.root_namespace)
        if not root:
            raise ConfigError("dispatch.root_namespace", "must not be empty")

        logger.debug("Dispatch config: root=%s package=%s", root, config.controllers_package)
        return DispatchConfig(
            root_namespace=root,
            controllers_package=config.controllers_package,
            strict_callbacks=config.strict_callbacks,
            cors=config.cors,
        )

    def _instantiate_dataclass(self, config_class: Type, data: dict):
        """Instantiate dataclass config with validation."""
        hints = get_type_hints(config_class)
        kwargs = {}

        for field_info in fields(config_class):
            field_name = field_info.name
            field_type = hints.get(field_name, field_info.type)

            if field_name in data:
                value = data[field_name]
                if not self._check_type(value, field_type):
                    raise ConfigError(
                        field_name,
                        f"expected {field_type}, got {type(value).__name__}",
                    )
                kwargs[field_name] = value
            elif field_info.default is not MISSING:
                kwargs[field_name] = field_info.default
            elif field_info.default_factory is not MISSING:
                kwargs[field_name] = field_info.default_factory()
            else:
                raise ConfigError(field_name, "required field not provided")

        unknown = sorted(set(data) - {f.name for f in fields(config_class)})
        if unknown:
            logger.warning("Ignoring unknown %s keys: %s", config_class.__name__, unknown)

        return config_class(**kwargs)

    def _check_type(self, value: Any, expected_type: Any) -> bool:
        """Basic type checking."""
        origin = get_origin(expected_type)
        if origin is types.UnionType or str(origin) == "typing.Union":
            if value is None:
                return type(None) in get_args(expected_type)
            return any(
                self._check_type(value, arg)
                for arg in get_args(expected_type)
                if arg is not type(None)
            )

        if origin:
            return isinstance(value, origin)

        if expected_type is bool:
            return isinstance(value, bool)

        if isinstance(expected_type, type):
            return isinstance(value, expected_type)

        return True

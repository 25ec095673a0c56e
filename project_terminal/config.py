"""Layered YAML settings for the pt CLI."""

from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger()

CONFIG_DIR_NAME = ".project-terminal"
CONFIG_FILE_NAME = "config.yaml"
STORE_FILE_NAME = "projects.yaml"

DEFAULTS: dict[str, Any] = {
    "user.id": "local-user",
    "cache.ttl_seconds": 300,
    "cache.max_size": 1000,
    "batch.max_commands": 10,
}


def _read_settings(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, "r") as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load config", path=str(path), error=str(e))
        raise ValueError(f"Failed to load config from {path}: {e}") from e


class Config:
    """Settings read from the working directory, then the home directory, then ``DEFAULTS``.

    Writes always go to this instance's own file. With ``use_global`` that is
    ``~/.project-terminal/config.yaml`` and the home layer is not consulted twice.
    """

    def __init__(self, use_global: bool = False, config_dir: Path | None = None) -> None:
        home_dir = Path.home() / CONFIG_DIR_NAME
        if config_dir is not None:
            self.config_dir = Path(config_dir)
        else:
            self.config_dir = home_dir if use_global else Path.cwd() / CONFIG_DIR_NAME
        self.is_global = use_global
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_file = self.config_dir / CONFIG_FILE_NAME

        self._config = _read_settings(self.config_file)
        self._global_config: dict[str, Any] = {}
        global_file = home_dir / CONFIG_FILE_NAME
        if not self.is_global and global_file != self.config_file:
            try:
                self._global_config = _read_settings(global_file)
            except ValueError:
                logger.warning("Ignoring unreadable global config", path=str(global_file))

        logger.debug("Config initialized", config_file=str(self.config_file), keys=sorted(self._config))

    def _save(self) -> None:
        try:
            with open(self.config_file, "w") as f:
                yaml.safe_dump(self._config, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            logger.error("Failed to save config", error=str(e))
            raise ValueError(f"Failed to save config to {self.config_file}: {e}") from e

    def get(self, key: str, default: Any = None) -> Any:
        for layer in (self._config, self._global_config, DEFAULTS):
            if key in layer:
                return layer[key]
        return default

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Read a numeric setting such as ``cache.max_size``.

        Values set from the command line are stored as strings and parsed here.

        Raises:
            ValueError: if the value is not an integer
        """
        value = self.get(key, default)
        if value is None or isinstance(value, int) and not isinstance(value, bool):
            return value
        try:
            return int(str(value).strip())
        except ValueError:
            raise ValueError(f"Config value for {key} must be an integer, got {value!r}") from None

    def set(self, key: str, value: str) -> None:
        logger.debug("Setting config value", key=key)
        self._config[key] = value
        self._save()

    def unset(self, key: str) -> None:
        if self._config.pop(key, None) is not None:
            logger.debug("Unset config value", key=key)
            self._save()

    def list(self, include_defaults: bool = False) -> dict[str, Any]:
        """Settings stored in files, local values overriding global ones."""
        merged = dict(DEFAULTS) if include_defaults else {}
        merged.update(self._global_config)
        merged.update(self._config)
        return merged

    @property
    def store_path(self) -> Path:
        """Where ``YamlStore`` keeps projects; ``store.path`` overrides the config directory."""
        configured = self.get("store.path")
        if configured:
            return Path(configured).expanduser()
        return self.config_dir / STORE_FILE_NAME


def get_config(use_global: bool = False) -> Config:
    return Config(use_global=use_global)

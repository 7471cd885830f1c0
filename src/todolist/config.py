"""Configuration management for todolist."""

import json
import os
from pathlib import Path
from typing import Any, Literal, Optional

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError

from todolist.utils.logger import get_logger

# Environment variable -> dot-separated config key
ENV_OVERRIDES = {
    "PORT": "server.port",
    "TODOLIST_HOST": "server.host",
    "TODOLIST_DB_BACKEND": "database.backend",
    "TODOLIST_DB_PATH": "database.path",
    "TODOLIST_API_ENDPOINT": "api.endpoint",
    "TODOLIST_LOG_LEVEL": "logging.level",
}


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=5000)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class DatabaseConfig(BaseModel):
    """Task store configuration."""

    backend: Literal["sqlite", "memory"] = Field(default="sqlite")
    path: Optional[str] = Field(default=None)  # None -> platform data dir


class APIConfig(BaseModel):
    """API client configuration."""

    endpoint: str = Field(default="http://localhost:5000/api")
    timeout: int = Field(default=30)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO")


class Config(BaseModel):
    """Main configuration."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _set_in_dict(data: dict[str, Any], key: str, value: Any) -> None:
    keys = key.split(".")
    current = data
    for k in keys[:-1]:
        if k not in current or not isinstance(current[k], dict):
            current[k] = {}
        current = current[k]
    current[keys[-1]] = value


def is_known_key(key: str) -> bool:
    """Check that a dot-separated key names a field of Config."""
    model: Any = Config
    for k in key.split("."):
        if not (isinstance(model, type) and issubclass(model, BaseModel)):
            return False
        if k not in model.model_fields:
            return False
        model = model.model_fields[k].annotation
    return True


def _parse_value(raw: str) -> Any:
    """Interpret a string from the command line or environment as JSON if it can."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


class ConfigManager:
    """Manages todolist configuration files."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir("todolist"))
        self.config_file = self.config_dir / f"{profile}.json"

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration, environment overrides applied."""
        if self._config is None:
            self._config = self.apply_env_overrides(self.load_config())
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r") as f:
                    data = json.load(f)
                return Config(**data)
            except (OSError, ValueError) as e:
                # If config is corrupted, return default
                get_logger().warning("ignoring unreadable config %s: %s", self.config_file, e)
                return Config()
        return Config()

    def apply_env_overrides(self, config: Config) -> Config:
        """Return a copy of ``config`` with environment overrides applied.

        An override that does not validate is skipped with a warning.
        """
        for env_name, key in ENV_OVERRIDES.items():
            raw = os.environ.get(env_name)
            if not raw:
                continue
            config_dict = config.model_dump()
            # pydantic coerces the raw strings, e.g. "8000" -> 8000
            _set_in_dict(config_dict, key, raw)
            try:
                config = Config(**config_dict)
            except ValidationError as e:
                get_logger().warning(
                    "ignoring invalid %s=%r: %s", env_name, raw, e.errors()[0]["msg"]
                )
        return config

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        with open(self.config_file, "w") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name an existing setting
            pydantic.ValidationError: If the value has the wrong type
        """
        if not is_known_key(key):
            raise KeyError(key)
        if isinstance(value, str):
            value = _parse_value(value)

        config_dict = self.load_config().model_dump()
        _set_in_dict(config_dict, key, value)

        # Validate before anything is written
        new_config = Config(**config_dict)
        self.save_config(new_config)
        self._config = self.apply_env_overrides(new_config)

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration to defaults."""
        if key is None:
            self.save_config(Config())
            self._config = None
        else:
            # Reset specific key to default
            default_value = self.get_from_config(Config(), key)
            self.set(key, default_value)

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        keys = key.split(".")
        value: Any = config
        for k in keys:
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value


# Config manager instances by profile
_config_managers: dict[str, ConfigManager] = {}


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the config manager for a profile."""
    if profile not in _config_managers:
        _config_managers[profile] = ConfigManager(profile)
    return _config_managers[profile]


def reset_config_managers() -> None:
    """Forget cached config managers (used by tests)."""
    _config_managers.clear()

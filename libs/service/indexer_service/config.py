import os
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import get_args

import yaml
from dotenv import find_dotenv, load_dotenv

from indexer_service.errors import ConfigError

CONFIG_PATH_ENV = "M24_SERVICE_CONFIG_PATH"
DEFAULT_CONFIG_PATH = Path.home() / ".m24" / "service.yaml"


@dataclass
class LoggingConfig:
    """Logging configuration for the service manager's own logs."""
    log_dir: str = "~/.m24/logs"
    level: str = "INFO"
    enable_console: bool = False
    enable_syslog: bool = False


@dataclass
class ServiceConfig:
    """Launch agent configuration.

    Relative paths describe the app bundle layout and are resolved against
    the running executable's directory.
    """
    label: str = "com.m24.tools.indexer"
    launch_agents_dir: str = "~/Library/LaunchAgents"
    log_dir: str = "~/Library/Logs"
    stdout_log_name: str = "m24-indexer.log"
    stderr_log_name: str = "m24-indexer.err.log"
    bin_dir_env_var: str = "M24_BIN_DIR"
    process_type: str = "Background"
    resources_relpath: str = "../Resources"
    worker_entry_relpath: str = "app/indexer/worker/main.py"
    bin_dir_relpath: str = "app.unpacked/bin"
    # None means "detect from sys.frozen".
    packaged: bool | None = None
    launchctl_timeout: float | None = None
    rebuild_on_restart: bool = False
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self):
        if isinstance(self.logging, dict):
            self.logging = _build(LoggingConfig, self.logging, "logging")
        if self.launchctl_timeout is not None and self.launchctl_timeout <= 0:
            raise ConfigError("launchctl_timeout must be positive")

    @property
    def launch_agents_path(self) -> Path:
        return Path(self.launch_agents_dir).expanduser()

    @property
    def log_path(self) -> Path:
        return Path(self.log_dir).expanduser()


def _check_type(key: str, value, expected) -> None:
    if is_dataclass(expected) and isinstance(value, dict):
        return

    declared = get_args(expected) or (expected,)
    allowed = declared + (int,) if float in declared else declared
    # bool is an int subclass; only accept it where bool is declared.
    if isinstance(value, bool) and bool not in allowed:
        allowed = ()

    if not isinstance(value, allowed):
        names = " or ".join("null" if t is type(None) else t.__name__ for t in declared)
        raise ConfigError(f"{key} must be {names}, got {type(value).__name__}")


def _build(cls, data: dict, section: str):
    types = {f.name: f.type for f in fields(cls)}
    unknown = sorted(set(data) - set(types))
    if unknown:
        raise ConfigError(f"Unknown {section} keys: {', '.join(unknown)}")

    for key, value in data.items():
        _check_type(key, value, types[key])
    return cls(**data)


class ConfigManager:
    """Loads ``ServiceConfig`` from YAML.

    The file location comes from ``M24_SERVICE_CONFIG_PATH`` (a ``.env``
    file is honoured) and defaults to ``~/.m24/service.yaml``. A missing
    file yields the defaults.
    """

    def __init__(self, config_path: Path | None = None):
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path)

        env_path = os.getenv(CONFIG_PATH_ENV)
        if config_path is None:
            config_path = Path(env_path).expanduser() if env_path else DEFAULT_CONFIG_PATH

        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self) -> ServiceConfig:
        if not self.config_path.exists():
            return ServiceConfig()

        try:
            with open(self.config_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read {self.config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{self.config_path} must contain a mapping")

        return _build(ServiceConfig, data, "service")

    def save_config(self, config: ServiceConfig):
        data = {
            f.name: getattr(config, f.name)
            for f in fields(config)
            if f.name != "logging"
        }
        data["logging"] = {f.name: getattr(config.logging, f.name) for f in fields(config.logging)}

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False)

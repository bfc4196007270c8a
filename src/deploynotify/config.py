"""Configuration management for deploynotify."""

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml

from deploynotify.dtos.deploy import Application, Target


@dataclass
class ServerConfig:
    """Public address of the deployment dashboard."""

    host: str = "localhost:8080"
    ssl_enabled: bool = False


@dataclass
class NotifierConfig:
    """Webhook delivery tuning."""

    timeout: Optional[float] = None
    max_workers: Optional[int] = None
    template: Optional[str] = None


@dataclass
class DatabaseConfig:
    """Storage connection configuration."""

    url: str = "sqlite:///deploynotify.db"


@dataclass
class Config:
    """Main configuration container."""

    server: ServerConfig = field(default_factory=ServerConfig)
    notifier: NotifierConfig = field(default_factory=NotifierConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    applications: List[Application] = field(default_factory=list)

    def find_application(self, name: str) -> Optional[Application]:
        """Return the configured application called ``name``."""
        for application in self.applications:
            if application.name == name:
                return application
        return None


DEFAULT_CONFIG: Dict[str, Any] = {
    "server": {
        "host": "localhost:8080",
        "ssl_enabled": False,
    },
    "notifier": {
        "timeout": None,
        "max_workers": None,
        "template": None,
    },
    "database": {
        "url": "sqlite:///deploynotify.db",
    },
    "applications": [],
}


def find_config_file() -> Optional[Path]:
    """Search for config file in current directory and parent directories."""
    current = Path.cwd()

    config_names = [".deploynotify.toml", "deploynotify.toml", ".deploynotify"]

    for parent in [current] + list(current.parents):
        for name in config_names:
            config_path = parent / name
            if config_path.exists():
                return config_path

    return None


def _build_application(data: Dict[str, Any]) -> Application:
    targets = [
        Target(name=str(t["name"]), slack_url=str(t.get("slack_url") or ""))
        for t in data.get("targets", [])
    ]
    return Application(
        name=str(data["name"]),
        github_owner=str(data.get("github_owner", "")),
        github_repo=str(data.get("github_repo", "")),
        targets=targets,
    )


def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration from TOML file or use defaults."""

    path: Optional[Path]
    if config_path:
        path = Path(config_path)
    else:
        path = find_config_file()

    config_data: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
    if path is not None and path.exists():
        try:
            user_config = toml.load(path)

            # Deep merge
            for section in user_config:
                if isinstance(config_data.get(section), dict):
                    config_data[section].update(user_config[section])
                else:
                    config_data[section] = user_config[section]
        except Exception as e:
            print(f"Warning: Error loading config file: {e}")
            config_data = copy.deepcopy(DEFAULT_CONFIG)

    return Config(
        server=ServerConfig(**config_data["server"]),
        notifier=NotifierConfig(**config_data["notifier"]),
        database=DatabaseConfig(**config_data["database"]),
        applications=[_build_application(app) for app in config_data["applications"]],
    )

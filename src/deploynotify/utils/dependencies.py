import logging
from concurrent.futures import Executor
from pathlib import Path
from typing import Annotated, Optional

from typer import Option

from deploynotify.config import Config, load_config
from deploynotify.core.storage import SqlStorage
from deploynotify.notifications.dispatcher import NotificationDispatcher

ConfigOption = Annotated[Optional[Path], Option("--config", "-c", help="Path to config file")]


def get_config(config_file: ConfigOption = None) -> Config:
    return load_config(str(config_file) if config_file else None)


def build_dispatcher(config: Config, executor: Optional[Executor] = None) -> NotificationDispatcher:
    storage = SqlStorage.from_url(config.database.url)
    return NotificationDispatcher.from_config(config, storage, executor=executor)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

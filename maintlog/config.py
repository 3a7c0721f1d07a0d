"""Settings read from the environment."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DATA_FILE = "maintlog.yaml"
DEFAULT_SECRET_KEY = "dev-secret-key-change-in-prod"


@dataclass
class Settings:
    data_file: Path
    secret_key: str
    log_level: str

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            data_file=Path(env.get("MAINTLOG_DATA_FILE", DEFAULT_DATA_FILE)),
            secret_key=env.get("MAINTLOG_SECRET_KEY", DEFAULT_SECRET_KEY),
            log_level=env.get("MAINTLOG_LOG_LEVEL", "WARNING").upper(),
        )


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

# Shiptivity: configuration
# Override settings via a YAML file, environment variables or CLI args.

import logging
import os
import yaml
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

CONFIG_PATH = Path("shiptivity.yaml")


@dataclass
class Config:
    """Runtime configuration for the Shiptivity server."""

    # Storage
    db_path: str = "./clients.db"

    # HTTP
    host: str = "127.0.0.1"
    port: int = 3001

    # Empty = writes are not key-protected
    api_secret: str = ""

    log_level: str = "INFO"

    def apply_env(self):
        """Environment variables win over file values."""
        db = os.environ.get("SHIPTIVITY_DB")
        if db:
            self.db_path = db
        secret = os.environ.get("SHIPTIVITY_API_SECRET")
        if secret:
            self.api_secret = secret
        self.db_path = str(Path(self.db_path).expanduser())

        try:
            self.port = int(self.port)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring invalid port {self.port!r}, using {Config.port}")
            self.port = Config.port

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """Load config from YAML file, falling back to defaults."""
        cfg_path = Path(path) if path else CONFIG_PATH
        if cfg_path.exists():
            try:
                with open(cfg_path, "r") as f:
                    data = yaml.safe_load(f) or {}
                cfg = cls(**{k: v for k, v in data.items() if hasattr(cls, k)})
            except (OSError, yaml.YAMLError, TypeError, AttributeError) as e:
                logger.warning(f"Ignoring unreadable config {cfg_path}: {e}")
                cfg = cls()
        else:
            cfg = cls()
        cfg.apply_env()
        return cfg

# config_loader.py
import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "HUFFZIP_CONFIG"


@dataclass
class Settings:
    """Runtime settings for the service and the command line."""
    host: str = "127.0.0.1"
    port: int = 8080
    upload_dir: str = "./uploads"
    max_upload_bytes: int = 16 * 1024 * 1024
    processing_timeout: float = 30.0
    use_rle: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Create settings from a parsed YAML mapping, ignoring unknown keys"""
        data = dict(data)
        server = data.pop("server", None) or {}
        if not isinstance(server, dict):
            raise ValueError("'server' section must be a mapping")
        data = {**server, **data}

        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                logger.warning("Ignoring unknown config key: %s", key)
                continue
            values[key] = value

        settings = cls(**values)
        settings.port = int(settings.port)
        settings.max_upload_bytes = int(settings.max_upload_bytes)
        settings.processing_timeout = float(settings.processing_timeout)
        settings.use_rle = bool(settings.use_rle)
        settings.log_level = str(settings.log_level).upper()
        return settings

    def with_overrides(self, **overrides) -> "Settings":
        """Copy with the given non-None values replaced"""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load settings from a YAML file.

    The path is taken from the argument, then from the HUFFZIP_CONFIG
    environment variable; without either the defaults are returned.
    """
    config_path = config_path or os.environ.get(CONFIG_ENV_VAR)
    if not config_path:
        return Settings()

    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ValueError(f"Configuration in {config_path} must be a mapping")

    logger.debug("Loaded configuration from %s", config_path)
    return Settings.from_dict(config)

# src/j2c/settings.py
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from j2c.constants import CSV_ENCODING, INPUT_ENCODING
from j2c.schemas import ConvertOptions

CONFIG_ENV_VAR = "J2C_CONFIG"


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    format: str = "human"  # "json" or "human"
    structured: bool = False


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="J2C_",
        env_nested_delimiter="__",
        extra="ignore",
    )
    convert: ConvertOptions = ConvertOptions()
    logging: LoggingConfig = LoggingConfig()
    input_encoding: str = INPUT_ENCODING
    csv_encoding: str = CSV_ENCODING

    @staticmethod
    def _deep_update(d: dict, u: dict) -> dict:
        # Recursively update dict d with values from u
        for k, v in u.items():
            if isinstance(v, dict) and isinstance(d.get(k), dict):
                d[k] = Settings._deep_update(d[k], v)
            else:
                d[k] = v
        return d

    @staticmethod
    def _read_yaml(path: Path) -> dict:
        with open(path, "r", encoding=INPUT_ENCODING) as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Settings":
        """Build settings from an optional YAML file plus the environment.

        A `base.yaml` next to `path` is applied first, then `path` itself.
        YAML values act as defaults: `J2C_*` environment variables override
        them.
        """
        path = path or os.getenv(CONFIG_ENV_VAR)
        if not path:
            return cls()

        cfg_path = Path(path)
        merged: dict = {}
        base_path = cfg_path.parent / "base.yaml"
        if base_path.exists() and base_path.resolve() != cfg_path.resolve():
            merged = cls._read_yaml(base_path)
        merged = cls._deep_update(merged, cls._read_yaml(cfg_path))
        return cls(**merged)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # YAML values arrive as init kwargs; let the environment win over them.
        return env_settings, dotenv_settings, init_settings, file_secret_settings

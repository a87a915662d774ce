from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="HAMLBUILD_", case_sensitive=False)

    node_binary: str = "node"
    node_path: Path = Path("node_modules")
    config_path: Path = Path("hamlbuild.yaml")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

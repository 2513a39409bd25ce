from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from domain.placement import DEFAULT_SUGGESTION_LIMIT

DEFAULT_CONFIG_PATH = Path("config/paper/app.yaml")


class PaperSettings(BaseModel):
    title: str = "Rolling Paper"
    storage: Literal["memory", "filesystem"] = "filesystem"
    data_dir: Path = Path("data/paper")
    lock_timeout_seconds: float = Field(default=10.0, gt=0)
    suggestion_limit: int = Field(default=DEFAULT_SUGGESTION_LIMIT, ge=0)
    log_level: str = "INFO"

    @field_validator("storage", mode="before")
    @classmethod
    def normalize_storage(cls, value: object) -> str:
        return str(value).strip().lower() if value else "filesystem"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> str:
        level = str(value or "INFO").strip().upper()
        if level not in logging.getLevelNamesMapping():
            msg = f"paper.log_level is not a logging level: {value}"
            raise ValueError(msg)
        return level


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RP_", env_nested_delimiter="__")

    paper: PaperSettings = PaperSettings()

    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def load_settings(config_path: Path | None = None) -> AppSettings:
    env_path = os.getenv("RP_CONFIG_PATH")
    resolved_path: Path | None = None

    if config_path is not None:
        resolved_path = config_path
    elif env_path:
        resolved_path = Path(env_path)
    elif DEFAULT_CONFIG_PATH.exists():
        resolved_path = DEFAULT_CONFIG_PATH

    previous = AppSettings._yaml_path
    try:
        if resolved_path is not None:
            if not resolved_path.exists():
                msg = f"Config file not found: {resolved_path}"
                raise FileNotFoundError(msg)
            AppSettings._yaml_path = resolved_path
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous


def configure_logging(settings: AppSettings) -> None:
    logging.basicConfig(
        level=settings.paper.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

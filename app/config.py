from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

DEFAULT_CONFIG_PATH = Path("config/lift_scene.yaml")
OUTPUT_FORMATS = ("scene", "excalidraw")


class RenderSettings(BaseModel):
    input_dir: Path = Path("data/ir")
    output_dir: Path = Path("data/scenes")
    output_format: str = "scene"
    unit_size: PositiveInt = 20
    log_level: str = "WARNING"

    @field_validator("output_format", mode="before")
    @classmethod
    def normalize_output_format(cls, value: object) -> str:
        normalized = str(value or "scene").strip().lower()
        if normalized not in OUTPUT_FORMATS:
            msg = f"render.output_format must be one of {', '.join(OUTPUT_FORMATS)}"
            raise ValueError(msg)
        return normalized

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> str:
        normalized = str(value or "WARNING").strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            msg = f"render.log_level is not a logging level: {value}"
            raise ValueError(msg)
        return normalized


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LIFT_SCENE_", env_nested_delimiter="__")

    render: RenderSettings = RenderSettings()

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
    env_path = os.getenv("LIFT_SCENE_CONFIG_PATH")
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

from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path

import orjson
import pytest

from app.config import AppSettings, RenderSettings


def _clear_lift_scene_env() -> None:
    for key in list(os.environ):
        if key.startswith("LIFT_SCENE_"):
            os.environ.pop(key, None)


_clear_lift_scene_env()


@pytest.fixture(autouse=True)
def clear_lift_scene_env() -> Generator[None, None, None]:
    _clear_lift_scene_env()
    yield
    _clear_lift_scene_env()


@pytest.fixture
def render_settings(tmp_path: Path) -> RenderSettings:
    return RenderSettings(
        input_dir=tmp_path / "ir",
        output_dir=tmp_path / "scenes",
        output_format="scene",
        unit_size=10,
        log_level="WARNING",
    )


@pytest.fixture
def app_settings(render_settings: RenderSettings) -> AppSettings:
    return AppSettings(render=render_settings)


@pytest.fixture
def write_ir(tmp_path: Path) -> Callable[..., Path]:
    def _write(name: str, payload: dict, directory: Path | None = None) -> Path:
        target_dir = directory or tmp_path / "ir"
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / f"{name}.json"
        path.write_bytes(orjson.dumps(payload))
        return path

    return _write

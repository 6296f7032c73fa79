from __future__ import annotations

from pathlib import Path
from typing import Any

from adapters.filesystem.json_utils import load_json, write_json_atomic
from domain.models import SceneDocument
from domain.ports.repositories import SceneRepository


class FileSystemSceneRepository(SceneRepository):
    def load(self, path: Path) -> dict[str, Any]:
        return load_json(path)

    def save(self, document: SceneDocument, path: Path) -> None:
        write_json_atomic(path, document.to_dict())

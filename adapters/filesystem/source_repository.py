from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from adapters.filesystem.json_utils import load_json
from domain.models import RenderRequest
from domain.ports.repositories import SourceRepository


class FileSystemSourceRepository(SourceRepository):
    def load_all_with_paths(self, directory: Path) -> list[tuple[Path, RenderRequest]]:
        return [(path, self.load_by_path(path)) for path in self.iter_paths(directory)]

    def load_by_path(self, path: Path) -> RenderRequest:
        data = load_json(path)
        data.setdefault("name", path.stem)
        return RenderRequest.model_validate(data)

    def iter_paths(self, directory: Path) -> Iterable[Path]:
        return sorted(directory.glob("*.json"))

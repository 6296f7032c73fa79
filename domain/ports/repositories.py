from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from domain.models import ExcalidrawDocument, RenderRequest, SceneDocument


class SourceRepository(Protocol):
    def load_all_with_paths(self, directory: Path) -> Sequence[tuple[Path, RenderRequest]]: ...

    def load_by_path(self, path: Path) -> RenderRequest: ...


class SceneRepository(Protocol):
    def save(self, document: SceneDocument, path: Path) -> None: ...


class ExcalidrawRepository(Protocol):
    def save(self, document: ExcalidrawDocument, path: Path) -> None: ...

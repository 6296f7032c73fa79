from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from adapters.excalidraw.repository import FileSystemExcalidrawRepository
from adapters.filesystem.scene_repository import FileSystemSceneRepository
from adapters.filesystem.source_repository import FileSystemSourceRepository
from app.config import OUTPUT_FORMATS, AppSettings, load_settings
from domain.errors import SceneError
from domain.models import FloatNode, GridArrayNode, LinearArrayNode, MapNode, Node
from domain.services.convert_scene_to_excalidraw import SceneToExcalidrawConverter
from domain.services.render_scene import SceneRenderer
from domain.services.scene_metrics import node_height, node_width

app = typer.Typer(no_args_is_help=True)
console = Console()
logger = logging.getLogger(__name__)


def _setup(config_path: Optional[Path]) -> AppSettings:
    settings = load_settings(config_path)
    logging.basicConfig(
        level=settings.render.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return settings


@app.command("render")
def render(
    input_dir: Optional[Path] = typer.Option(None, help="Directory with IR JSON files."),
    output_dir: Optional[Path] = typer.Option(None, help="Directory to write rendered scenes."),
    output_format: Optional[str] = typer.Option(
        None, "--format", help=f"Output format: {', '.join(OUTPUT_FORMATS)}."
    ),
    unit_size: Optional[int] = typer.Option(
        None, min=1, help="Pixels per grid unit for Excalidraw."
    ),
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
) -> None:
    settings = _setup(config)
    source_dir = input_dir or settings.render.input_dir
    target_dir = output_dir or settings.render.output_dir
    fmt = (output_format or settings.render.output_format).lower()
    if fmt not in OUTPUT_FORMATS:
        console.print(f"[red]Unknown format:[/] {fmt}")
        raise typer.Exit(code=2)

    source_repo = FileSystemSourceRepository()
    paths = list(source_repo.iter_paths(source_dir)) if source_dir.exists() else []
    if not paths:
        console.print(f"[yellow]No IR files found in {source_dir}[/]")
        raise typer.Exit(code=0)

    renderer = SceneRenderer()
    scene_repo = FileSystemSceneRepository()
    excal_repo = FileSystemExcalidrawRepository()
    converter: SceneToExcalidrawConverter | None = None
    if fmt == "excalidraw":
        converter = SceneToExcalidrawConverter(
            settings.render.unit_size if unit_size is None else unit_size
        )

    failures = 0
    for path in paths:
        try:
            request = source_repo.load_by_path(path)
            scene = renderer.render(request)
        except (SceneError, ValidationError, ValueError) as exc:
            failures += 1
            logger.warning("Failed to render %s: %s", path, exc)
            console.print(f"[red]Failed[/] {path}: {exc}")
            continue
        if converter is not None:
            target_path = target_dir / f"{path.stem}.excalidraw"
            excal_repo.save(converter.convert(scene), target_path)
        else:
            target_path = target_dir / f"{path.stem}.scene.json"
            scene_repo.save(scene, target_path)
        console.print(f"[green]Wrote[/] {target_path}")

    if failures:
        raise typer.Exit(code=1)


@app.command("inspect")
def inspect_scene(
    input_path: Path = typer.Argument(..., help="IR file to inspect."),
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
) -> None:
    _setup(config)
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)
    try:
        request = FileSystemSourceRepository().load_by_path(input_path)
        node = SceneRenderer().build_node(request)
    except (SceneError, ValidationError, ValueError) as exc:
        console.print(f"[red]Cannot build scene:[/] {exc}")
        raise typer.Exit(code=1) from exc
    tree = Tree(f"[bold]{escape(request.name)}[/]")
    _add_tree_node(tree, node)
    console.print(tree)


def _add_tree_node(parent: Tree, node: Node) -> None:
    size = f"{node_width(node)}x{node_height(node)}"
    if isinstance(node, FloatNode):
        parent.add(f"Float {size}")
    elif isinstance(node, LinearArrayNode):
        branch = parent.add(f"LinearArray[{node.size}] {size}")
        _add_tree_node(branch, node.element)
    elif isinstance(node, GridArrayNode):
        branch = parent.add(f"GridArray[{node.width}x{node.height}] {size}")
        _add_tree_node(branch, node.element)
    elif isinstance(node, MapNode):
        branch = parent.add(f"Map[{node.size}] {size}")
        _add_tree_node(branch.add("input"), node.input_element)
        _add_tree_node(branch.add("output"), node.output_element)


@app.command("validate")
def validate(input_path: Path = typer.Argument(..., help="IR file to validate.")) -> None:
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)
    try:
        FileSystemSourceRepository().load_by_path(input_path)
    except (ValidationError, ValueError) as exc:
        console.print(f"[red]Validation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Valid IR file:[/] {input_path}")


if __name__ == "__main__":
    app()

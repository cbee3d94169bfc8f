"""CLI for idef0-svg."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from idef0_svg import __version__
from idef0_svg.errors import ModelError
from idef0_svg.parser import Process, parse_statements
from idef0_svg.render import render_view
from idef0_svg.themes import THEMES

DIAGRAM_VIEWS = ["schematic", "decompose", "focus"]


def _fail(message: str) -> None:
    click.echo(f"Rendering error: {message}", err=True)
    raise SystemExit(1)


def _load(input_file: Path) -> Process:
    """Parse a statement file into its process tree, or exit with an error."""
    try:
        return Process.parse(parse_statements(input_file.read_text()))
    except ModelError as e:
        _fail(str(e))


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log layout decisions to stderr.")
def cli(verbose: bool) -> None:
    """idef0-svg: Generate IDEF0 process diagrams as SVG from plain statements."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output SVG file path. Defaults to <input>.svg")
@click.option("--view", type=click.Choice(DIAGRAM_VIEWS), default="decompose",
              help="Which diagram to draw (default: decompose)")
@click.option("--process", "process_name", default=None,
              help="Process to draw (default: the top-level process)")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="classic",
              help="Visual theme (default: classic)")
def render(
    input_file: Path,
    output: Path | None,
    view: str,
    process_name: str | None,
    theme: str,
) -> None:
    """Render an IDEF0 statement file to SVG."""
    root = _load(input_file)
    if process_name is not None and root.find(process_name) is None:
        _fail(f"No process named {process_name!r}")

    try:
        svg = render_view(root, view, process=process_name, theme=THEMES[theme])
    except ModelError as e:
        _fail(str(e))

    if output is None:
        output = input_file.with_suffix(".svg")

    output.write_text(svg)
    target = process_name or root.name
    click.echo(f"Rendered {view} of {target} -> {output}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def validate(input_file: Path) -> None:
    """Lay out every view of every process and report unsatisfied ICOMs."""
    root = _load(input_file)

    diagrams = [root.schematic()]
    for process in _walk(root):
        diagrams.append(process.decompose())
        diagrams.append(process.focus())

    unsatisfied: list[str] = []
    for diagram in diagrams:
        for line in diagram.unsatisfied_lines:
            box = line.target if line.source is diagram else line.source
            entry = f"{diagram.name}: {box.name} {line.kind.icom} {line.name}"
            if entry not in unsatisfied:
                unsatisfied.append(entry)

    if unsatisfied:
        click.echo("Unsatisfied ICOMs:")
        for entry in unsatisfied:
            click.echo(f"  - {entry}")

    processes = sum(1 for _ in _walk(root))
    click.echo(f"Valid: {processes} processes, "
               f"{len(diagrams)} diagrams, "
               f"{len(unsatisfied)} unsatisfied ICOMs")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def info(input_file: Path) -> None:
    """Show information about an IDEF0 statement file."""
    root = _load(input_file)
    processes = list(_walk(root))

    click.echo(f"Root: {root.name}")
    click.echo(f"Processes: {len(processes)}")
    click.echo(f"Leaves: {sum(1 for _ in root.leaves())}")
    click.echo(f"Depth: {_depth(root)}")
    for process in processes:
        counts = {side.value: len(names) for side, names in process.dependencies.items()}
        summary = ", ".join(f"{side} {count}" for side, count in counts.items())
        click.echo(f"  {process.name}: {summary or 'no ICOMs'}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("--process", "process_name", default=None,
              help="Start the outline at this process")
def toc(input_file: Path, process_name: str | None) -> None:
    """Print the process hierarchy as an indented outline."""
    root = _load(input_file)
    if process_name is not None and root.find(process_name) is None:
        _fail(f"No process named {process_name!r}")
    click.echo(render_view(root, "toc", process=process_name), nl=False)


def _walk(process: Process):
    yield process
    for child in process.children:
        yield from _walk(child)


def _depth(process: Process) -> int:
    return 1 + max((_depth(child) for child in process.children), default=0)

"""Main CLI application."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from fobz.core.document import FobzDocument
from fobz.errors import FobzError

app = typer.Typer(
    name="fobz",
    help="Inspect and create .fobz document archives.",
    add_completion=False,
)

console = Console()


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging",
        ),
    ] = False,
) -> None:
    """Inspect and create .fobz document archives."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


@app.command()
def info(
    archive_path: Annotated[
        Path,
        typer.Argument(
            help="Path to the .fobz archive",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
) -> None:
    """Display document metadata and its tables."""
    try:
        document = FobzDocument.open(archive_path)
    except FobzError as e:
        console.print(f"[red]Error reading archive: {escape(str(e))}[/]")
        raise typer.Exit(1)

    manifest = document.get_manifest()
    info_lines = [
        f"[bold]{escape(manifest.title) or 'Untitled'}[/]",
        "",
        f"[dim]Author:[/] {escape(manifest.author) or 'Unknown'}",
        f"[dim]Version:[/] {escape(manifest.version)}",
        f"[dim]Tags:[/] {escape(', '.join(manifest.tags)) or '-'}",
        f"[dim]Index:[/] {escape(manifest.index)}",
        f"[dim]Cover:[/] {escape(manifest.cover)}",
    ]
    if manifest.description:
        info_lines += ["", escape(manifest.description)]

    console.print()
    console.print(
        Panel(
            "\n".join(info_lines),
            title="Document Information",
            border_style="green",
        )
    )

    contents = Table(title="Table of Contents", show_header=True, header_style="bold cyan")
    contents.add_column("#", style="dim", width=4)
    contents.add_column("Title", style="white")
    contents.add_column("Path", style="dim")
    for i, content in enumerate(document.toc, 1):
        contents.add_row(
            str(i), escape(content.title), _path_cell(content.path, document.contents)
        )

    resources = Table(title="Resources", show_header=True, header_style="bold cyan")
    resources.add_column("Name", style="white")
    resources.add_column("Path", style="dim")
    resources.add_column("Size", justify="right", style="green")
    for resource in document.tor:
        data = document.resources.get(resource.path)
        resources.add_row(
            escape(resource.name),
            _path_cell(resource.path, document.resources),
            f"{len(data):,}" if data is not None else "-",
        )

    styles = Table(title="Styles", show_header=True, header_style="bold cyan")
    styles.add_column("Path", style="dim")
    for style in document.tos:
        styles.add_row(_path_cell(style.path, document.styles))

    for table in (contents, resources, styles):
        console.print()
        console.print(table)
    console.print()


@app.command()
def new(
    output: Annotated[
        Path,
        typer.Argument(help="Output path (.fobz is appended if missing)"),
    ],
    title: Annotated[str, typer.Option("--title", "-t", help="Document title")] = "",
    author: Annotated[str, typer.Option("--author", "-a", help="Document author")] = "",
    description: Annotated[
        str,
        typer.Option("--description", "-d", help="Short description"),
    ] = "",
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", help="Tag to add (repeatable)"),
    ] = None,
) -> None:
    """Create an empty document."""
    document = FobzDocument(title, author, description, tags or [])
    try:
        path = document.save_to(output)
    except FobzError as e:
        console.print(f"[red]Error writing archive: {escape(str(e))}[/]")
        raise typer.Exit(1)

    console.print(f"[green]Created {escape(str(path))}[/]")


def _path_cell(path: str, payloads: dict) -> str:
    """Render a table path, flagging entries with no payload."""
    if path in payloads:
        return escape(path)
    return f"{escape(path)} [red](missing)[/]"


if __name__ == "__main__":
    app()

"""
CLI Main - Typer command-line interface.
========================================

Commands:
- search: Search the bibliography
- expand: Quick preview of one text
- read: Full generated document with keyword highlighting
- info: Show system information
- gui: Launch the Streamlit interface
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from textos_perio.shared.logging import get_logger
from textos_perio.shared.utils import normalize_text

logger = get_logger(__name__)

app = typer.Typer(
    name="textosperio",
    help="""📚 Textos Perio - Bibliography search for FPyCS (UNLP) courses

Every result, preview and document is generated on demand by Gemini.

COMMANDS OVERVIEW:

  search   Search the bibliography
           -t, --type         Libro / Artículo Académico
           -c, --carrera      Academic program (name or label)
           --year-from/--year-to  Publication year range
           --json             Print raw JSON

  expand   Quick preview of one text (quotation + key concepts)

  read     Full generated text, with keywords highlighted
           -k, --keyword      Keyword to highlight (repeatable)

  info     Show configuration

  gui      Launch the Streamlit web interface

QUICK START:

  textosperio search "análisis del discurso" -c COMUNICACION_SOCIAL
  textosperio read "La semiosis social" "Eliseo Verón" -k semiosis
""",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


def _parse_enum(enum_cls: type[Enum], value: Optional[str], option: str):
    """Match an enum member by name or value, ignoring case and accents."""
    if value is None:
        return None

    wanted = normalize_text(value)
    for member in enum_cls:
        if wanted in (normalize_text(member.name), normalize_text(member.value)):
            return member

    choices = ", ".join(member.name for member in enum_cls)
    raise typer.BadParameter(f"'{value}' is not one of: {choices}", param_hint=option)


# ─────────────────────────────────────────────────────────────────────────────
# Search Command
# ─────────────────────────────────────────────────────────────────────────────


@app.command()
def search(
    query: str = typer.Argument(..., help="What to search for (wrap in quotes)."),
    text_type: Optional[str] = typer.Option(
        None,
        "--type", "-t",
        help="Text type: LIBRO or ARTICULO (or their labels).",
    ),
    carrera: Optional[str] = typer.Option(
        None,
        "--carrera", "-c",
        help="Academic program, e.g. PERIODISMO_DEPORTIVO or 'Comunicación Digital'.",
    ),
    year_from: Optional[int] = typer.Option(None, "--year-from", help="Earliest publication year."),
    year_to: Optional[int] = typer.Option(None, "--year-to", help="Latest publication year."),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON."),
):
    """
    🔍 Search the bibliography.

    Examples:
        textosperio search "semiótica"
        textosperio search "periodismo deportivo" -t LIBRO
        textosperio search "opinión pública" --year-from 1990 --year-to 2010
    """
    from pydantic import ValidationError

    from textos_perio.catalog.client import CatalogClient, GenerationError
    from textos_perio.shared.schemas import Carrera, SearchFilters, TextType

    if not query.strip():
        raise typer.BadParameter("Query must not be blank.", param_hint="QUERY")

    try:
        filters = SearchFilters(
            type=_parse_enum(TextType, text_type, "--type"),
            carrera=_parse_enum(Carrera, carrera, "--carrera"),
            year_from=year_from,
            year_to=year_to,
        )
    except ValidationError as e:
        raise typer.BadParameter(str(e.errors()[0]["msg"]), param_hint="--year-from/--year-to")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Searching bibliography...", total=None)
        try:
            results = CatalogClient().search(query, filters)
        except GenerationError as e:
            console.print(f"[red]Search failed:[/red] {e}")
            raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps([r.model_dump(mode="json") for r in results], ensure_ascii=False))
        return

    if not results:
        console.print("[yellow]Ups, sin resultados.[/yellow] Prueba con palabras clave de tu materia.")
        return

    title = f"Resultados encontrados ({len(results)})"
    if filters.carrera:
        title += f" · {filters.carrera.value}"

    table = Table(title=title, show_lines=True)
    table.add_column("ID", style="dim")
    table.add_column("Tipo")
    table.add_column("Año", justify="right")
    table.add_column("Título", style="bold")
    table.add_column("Autor", style="green")
    table.add_column("Cátedra")

    for r in results:
        table.add_row(r.id, r.type.value, str(r.year), r.title, r.author, r.location)

    console.print(table)


# ─────────────────────────────────────────────────────────────────────────────
# Expand Command
# ─────────────────────────────────────────────────────────────────────────────


@app.command()
def expand(
    title: str = typer.Argument(..., help="Title of the text."),
    author: str = typer.Argument(..., help="Author of the text."),
):
    """
    👁️ Quick preview: a representative quotation and three key concepts.
    """
    from textos_perio.catalog.client import CatalogClient

    with console.status("Generating preview..."):
        detail = CatalogClient().expand_abstract(title, author)

    console.print(Panel(escape(detail), title=escape(f"{title} · {author}"), border_style="green"))


# ─────────────────────────────────────────────────────────────────────────────
# Read Command
# ─────────────────────────────────────────────────────────────────────────────


@app.command()
def read(
    title: str = typer.Argument(..., help="Title of the text."),
    author: str = typer.Argument(..., help="Author of the text."),
    text_type: str = typer.Option("LIBRO", "--type", "-t", help="Text type: LIBRO or ARTICULO."),
    keywords: Optional[List[str]] = typer.Option(
        None,
        "--keyword", "-k",
        help="Keyword to highlight. Repeat for several.",
    ),
    raw: bool = typer.Option(False, "--raw", help="Print the generated text without rendering."),
):
    """
    📖 Read the full generated text of a work.

    Examples:
        textosperio read "La semiosis social" "Eliseo Verón" -k semiosis -k discurso
    """
    from textos_perio.catalog.client import CatalogClient
    from textos_perio.reader.render import blocks_to_rich, render_document
    from textos_perio.shared.schemas import TextType

    parsed_type = _parse_enum(TextType, text_type, "--type")

    with console.status("Loading document..."):
        content = CatalogClient().generate_document(title, author, parsed_type)

    if raw:
        console.print(content, markup=False, highlight=False)
        return

    console.print(Panel(f"[bold]{escape(title)}[/bold]\n{escape(author)}", title=parsed_type.value, border_style="blue"))
    console.print(blocks_to_rich(render_document(content, keywords or [])))
    console.print("\n[dim]Fin del fragmento[/dim]")


# ─────────────────────────────────────────────────────────────────────────────
# Info Command
# ─────────────────────────────────────────────────────────────────────────────


@app.command()
def info():
    """
    ℹ️ Show system information and configuration.
    """
    from textos_perio import __version__
    from textos_perio.shared.config import DEFAULT_CONFIG_FILE, get_settings
    from textos_perio.shared.schemas import Carrera

    settings = get_settings()
    key_status = "[green]set[/green]" if settings.has_api_key else "[red]missing[/red]"

    console.print(Panel(
        f"[bold]Textos Perio[/bold]\n"
        f"Version: {__version__}\n"
        f"Config: {DEFAULT_CONFIG_FILE}\n"
        f"Model: {settings.get_effective_model()}\n"
        f"Catalog: {settings.catalog.site_name} ({settings.catalog.site_url})\n"
        f"API key: {key_status}",
        title="ℹ️ Info",
    ))

    table = Table(title="Carreras")
    table.add_column("Option")
    table.add_column("Name")
    for c in Carrera:
        table.add_row(c.name, c.value)

    console.print(table)


# ─────────────────────────────────────────────────────────────────────────────
# GUI Command
# ─────────────────────────────────────────────────────────────────────────────


@app.command()
def gui():
    """
    🖥️ Launch Streamlit web interface.

    The GUI runs at http://localhost:8501 by default.
    Press Ctrl+C to stop the server.
    """
    import subprocess
    import sys

    app_path = Path(__file__).parent.parent / "app" / "streamlit_app.py"

    console.print("[bold]🚀 Launching Textos Perio GUI...[/bold]")
    console.print(f"[dim]Running: streamlit run {app_path}[/dim]\n")

    subprocess.run([sys.executable, "-m", "streamlit", "run", str(app_path)])


# ─────────────────────────────────────────────────────────────────────────────
# Entry Point
# ─────────────────────────────────────────────────────────────────────────────


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    """Configure logging before any command runs."""
    from textos_perio.shared.logging import setup_logging_from_settings

    setup_logging_from_settings()
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        for handler in logging.getLogger().handlers:
            handler.setLevel(logging.DEBUG)


def cli():
    """CLI entry point."""
    app()


if __name__ == "__main__":
    cli()

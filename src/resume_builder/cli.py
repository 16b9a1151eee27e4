"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from resume_builder.clients.parsing_client import ParsingClient, UnsupportedFileError
from resume_builder.clients.suggestion_client import SuggestionClient, section_tips
from resume_builder.config import load_config
from resume_builder.editor.sections import InvalidSectionOrderError, SectionOrder
from resume_builder.export import ExportError, export_pdf, export_word, word_filename
from resume_builder.models.job import INDUSTRIES, JobDetails, JobDetailsError
from resume_builder.models.resume import ResumeData, default_resume
from resume_builder.templates.catalog import TemplateNotFoundError, get_template, list_templates
from resume_builder.templates.docx_renderer import generate_docx
from resume_builder.templates.renderer import render_markdown, render_resume

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="resume-builder",
    help="Template-based resume builder",
    no_args_is_help=True,
)
console = Console()

EXPORT_FORMATS = ("pdf", "doc", "docx", "html", "md")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(message: str) -> None:
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def load_resume(path: Path) -> ResumeData:
    """Read a résumé from a JSON or YAML file."""
    if not path.exists():
        _fail(f"File not found: {path}")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return ResumeData.model_validate(raw)
    except (yaml.YAMLError, ValidationError) as e:
        _fail(f"Invalid resume file {path}: {e}")


def _parse_order(order: str | None) -> SectionOrder:
    if not order:
        return SectionOrder()
    try:
        return SectionOrder().reorder([s.strip() for s in order.split(",") if s.strip()])
    except InvalidSectionOrderError as e:
        _fail(str(e))


@app.command()
def templates(
    category: str = typer.Option(None, "--category", "-c", help="minimal or colorful"),
) -> None:
    """List the available templates."""
    found = list_templates(category)
    if not found:
        console.print("[yellow]No templates found.[/yellow]")
        return

    table = Table("id", "name", "category", "description")
    for t in found:
        table.add_row(t.id, t.name, t.category, t.description)
    console.print(table)


@app.command()
def seed(
    output: Path = typer.Option(None, "--output", "-o", help="Write to file instead of stdout"),
) -> None:
    """Print the starter resume as JSON."""
    text = json.dumps(default_resume().model_dump(by_alias=True), indent=2, ensure_ascii=False)
    if output is None:
        console.print_json(text)
        return
    output.write_text(text + "\n", encoding="utf-8")
    console.print(f"[green]Saved: {output}[/green]")


@app.command()
def render(
    file: Path = typer.Argument(help="Resume JSON/YAML file"),
    template: str = typer.Option("classic-chrono", "--template", "-t", help="Template id"),
    output: Path = typer.Option(None, "--output", "-o", help="Output .html path"),
    order: str = typer.Option(None, "--order", help="Comma-separated section order"),
    preview: bool = typer.Option(False, "--preview", help="Render as a thumbnail"),
) -> None:
    """Render a resume file to standalone HTML."""
    data = load_resume(file)
    section_order = _parse_order(order)
    config = load_config()
    try:
        tmpl = get_template(template)
    except TemplateNotFoundError as e:
        _fail(str(e.args[0]))

    html = render_resume(
        tmpl,
        data,
        section_order,
        mode="preview" if preview else "full",
        limits=config.preview,
    )
    output = output or file.with_suffix(".html")
    output.write_text(html, encoding="utf-8")
    console.print(f"[green]HTML saved: {output}[/green]")


@app.command()
def export(
    file: Path = typer.Argument(help="Resume JSON/YAML file"),
    fmt: str = typer.Option("pdf", "--format", "-f", help="pdf, doc, docx, html or md"),
    template: str = typer.Option("classic-chrono", "--template", "-t", help="Template id"),
    output: Path = typer.Option(None, "--output", "-o", help="Output path"),
    order: str = typer.Option(None, "--order", help="Comma-separated section order"),
) -> None:
    """Export a resume file to PDF, Word or Markdown."""
    if fmt not in EXPORT_FORMATS:
        _fail(f"Unknown format: {fmt} (choose from {', '.join(EXPORT_FORMATS)})")
    data = load_resume(file)
    section_order = _parse_order(order)
    config = load_config()
    try:
        tmpl = get_template(template)
    except TemplateNotFoundError as e:
        _fail(str(e.args[0]))

    html = render_resume(tmpl, data, section_order)
    if output is None:
        default = config.export.pdf_filename if fmt == "pdf" else f"resume.{fmt}"
        output = file.parent / default
    if fmt == "doc":
        output = Path(word_filename(str(output)))

    try:
        if fmt == "pdf":
            output.write_bytes(export_pdf(html, config.export.element_id, config.export))
        elif fmt == "doc":
            output.write_bytes(export_word(html, config.export.element_id))
        elif fmt == "docx":
            generate_docx(data, section_order, output)
        elif fmt == "html":
            output.write_text(html, encoding="utf-8")
        else:
            output.write_text(render_markdown(data, section_order), encoding="utf-8")
    except ExportError:
        logger.exception("Export failed")
        _fail("Export failed. Please try again.")

    console.print(f"[green]Saved: {output}[/green]")


@app.command()
def suggest(
    section: str = typer.Argument(help="Section to improve"),
    title: str = typer.Option(..., "--title", help="Target job title"),
    industry: str = typer.Option("Technology", "--industry", help="Target industry"),
    prompt: str = typer.Option("Improve this section", "--prompt", "-p"),
) -> None:
    """Ask the writing assistant for a suggestion."""
    try:
        job = JobDetails(title=title, industry=industry).validate_required()
    except JobDetailsError as e:
        _fail(str(e))
    if industry not in INDUSTRIES:
        console.print(f"[yellow]Unlisted industry: {industry}[/yellow]")

    config = load_config()
    client = SuggestionClient(delay=config.mock.suggestion_delay)
    with console.status("Thinking..."):
        reply = asyncio.run(client.suggest(section, prompt, job))

    for tip in section_tips(section):
        console.print(f"[dim]- {tip}[/dim]")
    if reply is not None:
        console.print(Panel(reply.content, title=f"Suggestion: {section}", border_style="magenta"))


@app.command("import")
def import_resume(
    file: Path = typer.Argument(help="Existing resume (PDF/DOCX/DOC/TXT)"),
    output: Path = typer.Option(None, "--output", "-o", help="Write parsed resume JSON"),
) -> None:
    """Import an existing resume file."""
    if not file.exists():
        _fail(f"File not found: {file}")
    config = load_config()
    client = ParsingClient(delay=config.mock.parse_delay, upload=config.upload)
    try:
        with console.status("Parsing resume..."):
            parsed = asyncio.run(client.parse(file.name, file.read_bytes()))
    except UnsupportedFileError as e:
        _fail(str(e))

    data = parsed.to_resume_data()
    text = json.dumps(data.model_dump(by_alias=True), indent=2, ensure_ascii=False)
    if output is None:
        console.print_json(text)
        return
    output.write_text(text + "\n", encoding="utf-8")
    console.print(f"[green]Saved: {output}[/green]")


if __name__ == "__main__":
    app()

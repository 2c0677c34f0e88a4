"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
import webbrowser
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from resume_studio.clients.llm_client import LLMClient
from resume_studio.config import AppConfig, load_config
from resume_studio.errors import CompletionError, ExtractionError, RenderError
from resume_studio.export.html_preview import render_html_preview
from resume_studio.export.templates import TemplateId, list_templates
from resume_studio.models.resume import ResumeData
from resume_studio.parsers.resume_parser import parse_resume
from resume_studio.pipeline.orchestrator import DocumentPipeline
from resume_studio.pipeline.resume_analyzer import ResumeAnalyzer
from resume_studio.pipeline.resume_builder import ResumeBuilder, resume_data_to_markdown

app = typer.Typer(
    name="resume-studio",
    help="AI resume builder and ATS analyzer",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    config = load_config()
    level = "DEBUG" if verbose else config.logging.level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _require_file(path: Path) -> None:
    if not path.exists():
        console.print(f"[red]File not found: {path}[/red]")
        raise typer.Exit(1)


def _pipeline(config: AppConfig) -> DocumentPipeline:
    llm = LLMClient(timeout=config.llm.timeout)
    return DocumentPipeline(
        builder=ResumeBuilder(
            llm,
            model=config.llm.model,
            temperature=config.builder.resume_temperature,
            keyword_model=config.llm.fast_model,
        ),
        analyzer=ResumeAnalyzer(
            llm, model=config.llm.model, temperature=config.builder.rectify_temperature
        ),
    )


def _save_pdf(
    pipeline: DocumentPipeline,
    markdown: str,
    template: TemplateId,
    filename: str,
    config: AppConfig,
) -> None:
    try:
        path = pipeline.save(markdown, template, filename, config.export.resolved_output_dir)
    except RenderError as exc:
        console.print(f"[red]Sorry, could not generate the PDF: {exc}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]PDF saved: {path}[/green]")


@app.command()
def extract(
    resume: Path = typer.Argument(help="Resume file (PDF/DOCX/TXT/MD)"),
    output: Path = typer.Option(None, "--output", "-o", help="Write text to this file"),
) -> None:
    """Extract plain text from a resume in reading order."""
    _require_file(resume)
    try:
        text = parse_resume(resume)
    except (ExtractionError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    if output is None:
        console.print(text, markup=False, highlight=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    console.print(f"[green]Text saved: {output}[/green]")


@app.command()
def render(
    markdown_file: Path = typer.Argument(help="Resume Markdown file"),
    template: TemplateId = typer.Option(None, "--template", "-t", help="PDF template"),
    filename: str = typer.Option(None, "--output", "-o", help="PDF file name"),
) -> None:
    """Render a resume Markdown file to a styled PDF."""
    _require_file(markdown_file)
    config = load_config()
    template = template or TemplateId(config.export.default_template)
    markdown = markdown_file.read_text(encoding="utf-8")
    _save_pdf(DocumentPipeline(), markdown, template, filename or markdown_file.stem, config)


@app.command()
def preview(
    markdown_file: Path = typer.Argument(help="Resume Markdown file"),
    template: TemplateId = typer.Option(TemplateId.CLASSIC, "--template", "-t", help="Template"),
    output: Path = typer.Option(None, "--output", "-o", help="HTML output path"),
    open_browser: bool = typer.Option(False, "--open", help="Open in the browser"),
) -> None:
    """Render the resume to HTML for on-screen preview."""
    _require_file(markdown_file)
    html_path = output or markdown_file.with_suffix(".html")
    html_path.parent.mkdir(parents=True, exist_ok=True)
    html = render_html_preview(markdown_file.read_text(encoding="utf-8"), template)
    html_path.write_text(html, encoding="utf-8")
    console.print(f"[green]HTML saved: {html_path}[/green]")
    if open_browser:
        webbrowser.open(html_path.resolve().as_uri())


@app.command()
def templates() -> None:
    """List the available PDF templates."""
    table = Table(title="Templates")
    table.add_column("id", style="bold")
    table.add_column("name")
    table.add_column("sections")
    table.add_column("description")
    for tmpl in list_templates():
        table.add_row(tmpl.id.value, tmpl.name, ", ".join(tmpl.section_order), tmpl.description)
    console.print(table)


@app.command()
def build(
    data_file: Path = typer.Argument(help="Resume data (YAML or JSON)"),
    role: str = typer.Option("", "--role", "-r", help="Target role"),
    template: TemplateId = typer.Option(None, "--template", "-t", help="PDF template"),
    filename: str = typer.Option(None, "--output", "-o", help="PDF file name"),
    no_ai: bool = typer.Option(False, "--no-ai", help="Lay out the data as-is, without AI"),
) -> None:
    """Generate an ATS-optimised resume with AI and save it as PDF."""
    _require_file(data_file)
    config = load_config()
    template = template or TemplateId(config.export.default_template)
    raw = yaml.safe_load(data_file.read_text(encoding="utf-8")) or {}
    resume_data = ResumeData.model_validate(raw)

    if no_ai:
        pipeline = DocumentPipeline()
        markdown = resume_data_to_markdown(resume_data)
    else:
        if not role:
            console.print("[red]--role is required unless --no-ai is given[/red]")
            raise typer.Exit(1)
        pipeline = _pipeline(config)
        try:
            with console.status("Writing resume..."):
                markdown = asyncio.run(pipeline.build(resume_data, role))
        except CompletionError as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(1)

    name = filename or (resume_data.full_name.strip().replace(" ", "-") + "-Resume")
    md_path = config.export.resolved_output_dir / f"{Path(name).stem}.md"
    md_path.parent.mkdir(parents=True, exist_ok=True)
    md_path.write_text(markdown, encoding="utf-8")
    console.print(f"[green]Markdown saved: {md_path}[/green]")
    _save_pdf(pipeline, markdown, template, name, config)


@app.command()
def keywords(
    resume: Path = typer.Argument(help="Resume file (PDF/DOCX/TXT/MD)"),
    role: str = typer.Option(..., "--role", "-r", help="Target role"),
) -> None:
    """Suggest ATS keywords that would strengthen a resume for a role."""
    _require_file(resume)
    try:
        text = parse_resume(resume)
    except (ExtractionError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    pipeline = _pipeline(load_config())
    with console.status("Finding keywords..."):
        suggestions = asyncio.run(pipeline.suggest_keywords(text, role))
    if not suggestions:
        console.print("[yellow]No keyword suggestions available.[/yellow]")
        return
    console.print(f"[bold]Suggested keywords for {role}:[/bold]")
    for keyword in suggestions:
        console.print(f"  - {keyword}", markup=False)


@app.command()
def analyze(
    resume: Path = typer.Argument(help="Resume PDF"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw analysis as JSON"),
    rectify: Path = typer.Option(None, "--rectify", help="Write an improved resume data YAML"),
) -> None:
    """Score a resume against ATS heuristics."""
    _require_file(resume)
    config = load_config()
    pipeline = _pipeline(config)

    async def _run():
        text, analysis = await pipeline.analyze(resume.read_bytes())
        improved = await pipeline.rectify(text, analysis) if rectify else None
        return analysis, improved

    try:
        with console.status("Analyzing resume..."):
            analysis, improved = asyncio.run(_run())
    except (ExtractionError, CompletionError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(analysis.model_dump(by_alias=True)))
    else:
        score_color = "green" if analysis.ats_score >= 80 else "yellow"
        breakdown = " | ".join(f"{b.category}: {b.score}" for b in analysis.score_breakdown)
        console.print(
            Panel(
                f"[bold {score_color}]ATS score: {analysis.ats_score}[/bold {score_color}]\n{breakdown}",
                title="ATS analysis",
            )
        )
        for label, items in (
            ("Strengths", analysis.strengths),
            ("Weaknesses", analysis.weaknesses),
            ("Suggestions", analysis.suggestions),
        ):
            if items:
                console.print(f"\n[bold]{label}:[/bold]")
                for item in items:
                    console.print(f"  - {item}")
        if analysis.skills_gap:
            gaps = ", ".join(f"{g.skill} ({g.importance}/5)" for g in analysis.skills_gap)
            console.print(f"\n[yellow]Missing skills:[/yellow] {gaps}")

    if improved is not None:
        rectify.parent.mkdir(parents=True, exist_ok=True)
        rectify.write_text(
            yaml.safe_dump(improved.model_dump(by_alias=True), allow_unicode=True, sort_keys=False),
            encoding="utf-8",
        )
        console.print(f"\n[green]Improved resume data saved: {rectify}[/green]")


if __name__ == "__main__":
    app()

"""CLI entrypoints for CV Builder."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .assembler import render_document
from .config import Config, load_config
from .content import CVDocument, DocumentLoadError, InvalidDocumentError, load_document
from .i18n import available_languages, language_display_name
from .pages import PageTemplateError, publish_languages, write_site
from .scaffold import ScaffoldError, scaffold_project
from .validation import DocumentIssue, IssueSeverity, lint_file
from .verify import VerificationReport, verify_site

console = Console()
app = typer.Typer(help="Render a multi-language CV into a static site.")

ConfigPathOption = Annotated[
    str,
    typer.Option("--config", "-c", help="Path to configuration file or project directory."),
]
LanguageOption = Annotated[
    str | None,
    typer.Option("--language", "-l", help="Language code to render (defaults to the configured default)."),
]
ForceFlag = Annotated[
    bool,
    typer.Option("--force", "-f", help="Overwrite existing files if they already exist."),
]


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug diagnostics from the renderer."),
    ] = False,
) -> None:
    """Configure logging shared by every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@app.command()
def init(
    target: Annotated[Path, typer.Argument(help="Directory to create the project in.")],
    name: Annotated[str, typer.Option("--name", "-n", help="Name shown in the CV header.")] = "Your Name",
    force: ForceFlag = False,
) -> None:
    """Create a starter project with a config file and sample data."""
    try:
        result = scaffold_project(target, name=name, force=force)
    except ScaffoldError as exc:
        console.print(f"[bold red]Cannot scaffold[/]: {exc}")
        raise typer.Exit(code=1) from exc

    console.print(f"[bold green]Project ready[/]: {_display_path(target)}")
    for path in result.created:
        console.print(f"- {_display_path(path)} (new)")
    for path in result.updated:
        console.print(f"- {_display_path(path)} (updated)")
    for note in result.notes:
        console.print(f"[bold blue]Next[/]: {note}")


@app.command()
def build(
    config_path: ConfigPathOption = "cvbuilder.yml",
    output_dir: Annotated[
        str | None,
        typer.Option("--output-dir", "-o", help="Override the output directory (relative to the project)."),
    ] = None,
) -> None:
    """Render every published language into the output directory."""
    config = _load(config_path)
    if output_dir:
        override = Path(output_dir)
        config.output_dir = override if override.is_absolute() else (_project_root(config_path) / override).resolve()

    document = _load_cv(config)
    try:
        written = write_site(config, document)
    except PageTemplateError as exc:
        console.print(f"[bold red]Build failed[/]: {exc}")
        raise typer.Exit(code=1) from exc

    for path in written:
        console.print(f"- {_display_path(path)}")
    console.print(
        f"[bold green]Build complete[/]: {len(written)} page(s) written to {_display_path(config.output_dir)}"
    )


@app.command()
def render(
    config_path: ConfigPathOption = "cvbuilder.yml",
    language: LanguageOption = None,
) -> None:
    """Print the rendered table of contents and content as an HTML fragment."""
    config = _load(config_path)
    document = _load_cv(config)
    output = render_document(document, language or config.default_language, toc_title=config.toc_title)
    typer.echo(output.to_html())


@app.command()
def check(
    config_path: ConfigPathOption = "cvbuilder.yml",
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Treat warnings as errors."),
    ] = False,
) -> None:
    """Validate the CV data file and report missing translations."""
    config = _load(config_path)
    languages = config.languages or None
    if languages is None:
        try:
            languages = available_languages(load_document(config.data_file)) or None
        except (DocumentLoadError, InvalidDocumentError):
            languages = None
    report = lint_file(config.data_file, languages=languages)

    if not report.issues:
        console.print(f"[bold green]Check clean[/]: {report.block_count} block(s), no issues detected.")
        raise typer.Exit()

    for issue in sorted(report.issues, key=_issue_sort_key):
        style = "red" if issue.severity is IssueSeverity.ERROR else "yellow"
        location = issue.source_path
        if issue.pointer:
            location = f"{location} :: {issue.pointer}"
        console.print(f"[bold {style}]{issue.severity.name}[/] {location} - {escape(issue.message)}")

    console.print(
        f"[bold blue]Summary[/]: {report.error_count} error(s), {report.warning_count} warning(s) "
        f"across {report.block_count} block(s)."
    )
    exit_code = 0
    if report.error_count > 0 or (strict and report.warning_count > 0):
        exit_code = 1
    raise typer.Exit(code=exit_code)


@app.command()
def languages(config_path: ConfigPathOption = "cvbuilder.yml") -> None:
    """List the languages found in the CV data."""
    config = _load(config_path)
    document = _load_cv(config)
    detected = available_languages(document)
    if not detected:
        console.print("[bold yellow]No localized text found[/]: every field is a plain string.")
    for code in detected:
        marker = " (default)" if code == config.default_language else ""
        console.print(f"- {code}: {language_display_name(code)}{marker}")
    console.print(f"[bold blue]Published[/]: {', '.join(publish_languages(config, document))}")


@app.command()
def verify(config_path: ConfigPathOption = "cvbuilder.yml") -> None:
    """Check the generated site for broken links and anchors."""
    config = _load(config_path)
    output_dir = config.output_dir
    if not output_dir.exists():
        console.print(f"[bold red]Site directory not found[/]: {_display_path(output_dir)}")
        raise typer.Exit(code=1)

    report = verify_site(output_dir)
    _print_verification_report(report)
    raise typer.Exit(code=1 if report.error_count else 0)


def _print_verification_report(report: VerificationReport) -> None:
    if not report.issues:
        console.print(
            "[bold green]Verification complete[/]: "
            f"{report.scanned_files} HTML file(s) scanned; no issues found."
        )
        return

    console.print(
        "[bold red]Verification issues[/]: "
        f"{len(report.issues)} issue(s) detected across {report.scanned_files} file(s)."
    )
    for issue in report.issues:
        color = "yellow" if issue.kind == "warning" else "red"
        console.print(
            f"[bold {color}]{issue.kind}[/] "
            f"{_display_path(issue.source)} -> {issue.target} :: {issue.message}"
        )


def _issue_sort_key(issue: DocumentIssue) -> tuple[int, str]:
    severity_rank = 0 if issue.severity is IssueSeverity.ERROR else 1
    return severity_rank, issue.pointer or ""


def _display_path(path: Path) -> str:
    try:
        return path.resolve().relative_to(Path.cwd()).as_posix()
    except ValueError:
        return path.as_posix()


def _project_root(config_path: str) -> Path:
    candidate = Path(config_path)
    return candidate.resolve() if candidate.is_dir() else candidate.resolve().parent


def _load(path: str) -> Config:
    try:
        return load_config(path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Config file not found: {path}") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _load_cv(config: Config) -> CVDocument:
    try:
        return load_document(config.data_file)
    except (DocumentLoadError, InvalidDocumentError) as exc:
        console.print(f"[bold red]Cannot load CV data[/]: {exc}")
        raise typer.Exit(code=1) from exc

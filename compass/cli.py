"""CLI entry point for Compass."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from compass.config import CompassConfig, load_config
from compass.config.loader import DEFAULT_CONFIG_TEMPLATE
from compass.drafter import (
    GenerationError,
    InputError,
    IssueRequest,
    IssueValidator,
    PRRequest,
    PRWriter,
    ValidationReport,
    load_requirements,
)
from compass.drafter.issue_validator import INVALID_REPO_MESSAGE
from compass.drafter.pr_writer import DEFAULT_OUTPUT_NAME
from compass.editor import EditBuffer, FormatAction, apply_format, text_stats
from compass.llm import create_llm_provider
from compass.vcs import ContextAggregator, create_source, parse_repo_url

app = typer.Typer(
    name="compass",
    help="Open Source Compass: check issues for duplicates and draft PR descriptions.",
)

config_app = typer.Typer(help="Manage Compass configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: CompassConfig | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

_STATUS_STYLES = {
    "Unique": "green",
    "Potential Duplicate": "yellow",
    "Duplicate": "red",
}


def _get_config() -> CompassConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to compass.yaml")
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    level = logging.DEBUG if verbose else _LOG_LEVELS[_config.log_level]
    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(asctime)s %(name)s - %(message)s",
    )


def _build_aggregator(cfg: CompassConfig) -> ContextAggregator:
    try:
        source = create_source(cfg.vcs)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    return ContextAggregator(source, cfg.vcs)


def _display_report(report: ValidationReport) -> None:
    style = _STATUS_STYLES.get(report.status, "white")
    panel_text = (
        f"[bold {style}]{report.status}[/bold {style}]\n\n"
        f"{report.uniqueness_feedback}\n\n"
        f"[dim]Project context:[/dim] {report.project_context_feedback or '-'}"
    )
    rprint(Panel(panel_text, title=report.headline, border_style=style))

    if not report.related_issues:
        return
    table = Table(title=f"Related Issues ({len(report.related_issues)})")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Title")
    table.add_column("Status")
    table.add_column("Date")
    table.add_column("Relevance", style="yellow")
    for issue in report.related_issues:
        table.add_row(
            str(issue.number), issue.title, issue.status, issue.date, issue.relevance
        )
    rprint(table)


@app.command()
def context(
    repo_url: str = typer.Argument(..., help="Repository URL, e.g. https://github.com/owner/repo"),
) -> None:
    """Show the issue and file context gathered for a repository."""
    cfg = _get_config()
    ref = parse_repo_url(repo_url)
    if ref is None:
        rprint(f"[red]Error:[/red] {INVALID_REPO_MESSAGE}")
        raise typer.Exit(1)

    aggregator = _build_aggregator(cfg)
    rprint(f"[bold]Gathering context[/bold] for {ref.full_name}...")
    bundle = asyncio.run(aggregator.gather(ref))
    rprint(Panel(bundle.tree_summary, title="Project Files", border_style="blue"))
    rprint(Panel(bundle.issues_summary, title="Existing Issues", border_style="blue"))


@app.command()
def issue(
    repo_url: str = typer.Argument(..., help="Repository URL"),
    title: Annotated[str, typer.Option("--title", "-t", help="Proposed issue title")] = "",
    description: Annotated[
        str, typer.Option("--description", "-d", help="Proposed issue description")
    ] = "",
    as_json: Annotated[bool, typer.Option("--json", help="Print the raw report as JSON")] = False,
) -> None:
    """Check a proposed issue against the repository's existing issues."""
    cfg = _get_config()
    request = IssueRequest(repo_link=repo_url, title=title, description=description)

    try:
        llm = create_llm_provider(cfg.llm)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    validator = IssueValidator(llm, _build_aggregator(cfg))
    try:
        report = asyncio.run(validator.validate(request))
    except InputError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except GenerationError as e:
        rprint(f"[red]Validation failed:[/red] {e}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(report.model_dump_json(indent=2))
    else:
        _display_report(report)


@app.command()
def pr(
    link: Annotated[str, typer.Option("--link", "-l", help="Related issue or PR link")] = "",
    problem: Annotated[str, typer.Option("--problem", help="What problem does this solve?")] = "",
    changes: Annotated[str, typer.Option("--changes", help="What did you change?")] = "",
    testing: Annotated[str, typer.Option("--testing", help="How was this tested?")] = "",
    limitations: Annotated[
        str, typer.Option("--limitations", help="Breaking changes or known limitations")
    ] = "",
    requirements_file: Annotated[
        str | None,
        typer.Option("--requirements-file", "-r", help='JSON file with a "requirements" key'),
    ] = None,
    summary: Annotated[bool | None, typer.Option("--summary/--no-summary")] = None,
    checklist: Annotated[bool | None, typer.Option("--checklist/--no-checklist")] = None,
    breaking_changes: Annotated[
        bool | None, typer.Option("--breaking-changes/--no-breaking-changes")
    ] = None,
    screenshots: Annotated[bool | None, typer.Option("--screenshots/--no-screenshots")] = None,
    linked_issues: Annotated[
        bool | None, typer.Option("--linked-issues/--no-linked-issues")
    ] = None,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help=f"Write markdown to file (e.g. {DEFAULT_OUTPUT_NAME})"),
    ] = None,
) -> None:
    """Generate a structured pull request description."""
    cfg = _get_config()

    structure = cfg.pr.sections.model_dump(exclude_unset=True)
    flags = {
        "summary": summary,
        "checklist": checklist,
        "breaking_changes": breaking_changes,
        "screenshots": screenshots,
        "linked_issues": linked_issues,
    }
    structure.update({k: v for k, v in flags.items() if v is not None})

    req_path = requirements_file or cfg.pr.requirements_file
    requirements = load_requirements(req_path) if req_path else cfg.pr.requirements

    request = PRRequest(
        pr_link=link,
        problem=problem,
        changes=changes,
        testing=testing,
        limitations=limitations,
        project_requirements=requirements,
        structure=structure,
    )

    try:
        llm = create_llm_provider(cfg.llm)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    try:
        description = asyncio.run(PRWriter(llm).generate(request))
    except InputError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except GenerationError as e:
        rprint(f"[red]Generation failed:[/red] {e}")
        raise typer.Exit(1)

    if output:
        Path(output).write_text(description.markdown)
        rprint(f"[green]Written to[/green] {output} ({text_stats(description.markdown).label()})")
    else:
        rprint(Syntax(description.markdown, "markdown", theme="monokai"))


@app.command("format")
def format_text(
    file: str = typer.Argument(..., help="Markdown file to edit"),
    action: str = typer.Argument(..., help="bold, italic, strikethrough, code, link, heading, ul, checklist, quote"),
    start: Annotated[int, typer.Option("--start", "-s", help="Selection start offset")] = 0,
    end: Annotated[int | None, typer.Option("--end", "-e", help="Selection end offset")] = None,
    in_place: Annotated[bool, typer.Option("--in-place", "-i", help="Rewrite the file")] = False,
) -> None:
    """Apply a Markdown formatting action to a selection in a file."""
    path = Path(file)
    try:
        text = path.read_text()
    except OSError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    try:
        fmt = FormatAction(action)
        buffer = EditBuffer(
            text=text, selection_start=start, selection_end=start if end is None else end
        )
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    result = apply_format(buffer, fmt)
    if in_place:
        path.write_text(result.text)
    else:
        typer.echo(result.text)
    rprint(
        f"[dim]Selection:[/dim] {result.selection_start}-{result.selection_end}  "
        f"[dim]{text_stats(result.text).label()}[/dim]"
    )


@app.command()
def stats(file: str = typer.Argument(..., help="Text file to count")) -> None:
    """Show word and character counts for a file."""
    try:
        text = Path(file).read_text()
    except OSError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    rprint(text_stats(text).label())


@config_app.command("show")
def config_show() -> None:
    """Display current configuration."""
    cfg = _get_config()
    yaml_str = yaml.dump(cfg.model_dump(), default_flow_style=False, sort_keys=False)
    rprint(Syntax(yaml_str, "yaml", theme="monokai"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create a default compass.yaml in current directory."""
    dest = Path("compass.yaml")
    if dest.exists() and not force:
        rprint(f"[yellow]{dest} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    dest.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {dest}")


if __name__ == "__main__":
    app()

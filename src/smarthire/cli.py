"\"\"\"Typer CLI entrypoint for resume scoring and history management.\"\"\""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError

from .container import ScoringContainer, create_container
from .extraction import UnsupportedFormatError
from .logging import configure_logging
from .schemas.config import load_config
from .validation import ResumeValidationError

app = typer.Typer(help="Resume scoring CLI.")
history_app = typer.Typer(help="Inspect, export or clear the evaluation history.")
app.add_typer(history_app, name="history")


@app.callback()
def main_options(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
    database_url: Optional[str] = typer.Option(
        None,
        envvar="DATABASE_URL",
        help="SQLAlchemy URL of the history database.",
    ),
) -> None:
    """Score resumes against target roles and keep a history of results."""
    settings: dict[str, Any] = {}
    if config:
        with config.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
        if not isinstance(loaded, dict):
            raise typer.BadParameter("Config file must be a YAML object", param_hint="--config")
        try:
            settings = load_config(loaded).to_settings()
        except ValidationError as exc:
            raise typer.BadParameter(str(exc), param_hint="--config") from exc

    configure_logging(log_level)
    ctx.obj = create_container(settings=settings, database_url=database_url)


@app.command()
def evaluate(
    ctx: typer.Context,
    resume: Path = typer.Argument(..., help="Resume file (.pdf, .docx, .txt or .md)."),
    role: str = typer.Option("Software Engineer", "--role", "-r", help="Target role."),
    job_description: Optional[str] = typer.Option(None, help="Job description text."),
    job_description_file: Optional[Path] = typer.Option(
        None, exists=True, readable=True, dir_okay=False, help="File containing the job description."
    ),
    report: Optional[Path] = typer.Option(None, dir_okay=False, help="Write the JSON report to this path."),
    as_json: bool = typer.Option(False, "--json", help="Print the full JSON report."),
    save: bool = typer.Option(True, "--save/--no-save", help="Record the result in the history."),
) -> None:
    """Score a resume and print the breakdown."""
    if job_description and job_description_file:
        raise typer.BadParameter("Use either --job-description or --job-description-file, not both.")
    if job_description_file:
        job_description = job_description_file.read_text(encoding="utf-8")

    pipeline = _container(ctx).pipeline()
    try:
        payload = pipeline.run(
            resume_path=resume,
            target_role=role,
            job_description=job_description,
            report_path=report,
            persist=save,
        )
    except FileNotFoundError as exc:
        typer.echo(f"Resume not found: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    except (UnsupportedFormatError, ResumeValidationError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    typer.echo(f"{payload['filename']}: {payload['score']}/100 ({payload['tier']}), top job: {payload['top_job']}")
    for category, value in payload["breakdown"].items():
        typer.echo(f"  {category:<13}{value:>4}")
    if payload["similarity"] is not None:
        typer.echo(f"  {'similarity':<13}{payload['similarity']:>4}")
    for flag, suggestion in zip(payload["flags"], payload["suggestions"]):
        typer.echo(f"- {flag}: {suggestion}")
    for tip in payload["feedback"]:
        typer.echo(f"* {tip}")


@app.command()
def roles(ctx: typer.Context) -> None:
    """List recognized target roles."""
    for name in _container(ctx).role_catalog().roles():
        typer.echo(name)


@history_app.command("list")
def history_list(
    ctx: typer.Context,
    limit: Optional[int] = typer.Option(None, min=1, help="Show at most this many entries."),
    as_json: bool = typer.Option(False, "--json", help="Print entries as JSON."),
) -> None:
    """Show past evaluations, newest first."""
    entries = _container(ctx).history_store().list_entries(limit=limit)
    if as_json:
        typer.echo(json.dumps([entry.model_dump() for entry in entries], ensure_ascii=False, indent=2))
        return
    if not entries:
        typer.echo("No history available.")
        return
    for entry in entries:
        typer.echo(f"{entry.id}\t{entry.created_at}\t{entry.score}\t{entry.top_job}\t{entry.filename}")


@history_app.command("clear")
def history_clear(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """Delete every history entry."""
    if not yes:
        typer.confirm("Delete all history entries?", abort=True)
    removed = _container(ctx).history_store().clear()
    typer.echo(f"History cleared ({removed} entries removed).")


@history_app.command("export")
def history_export(
    ctx: typer.Context,
    output: Path = typer.Argument(..., dir_okay=False, help="CSV output path."),
) -> None:
    """Export the history as CSV."""
    rows = _container(ctx).history_store().export_csv(output)
    typer.echo(f"Exported {rows} entries to {output}.")


def _container(ctx: typer.Context) -> ScoringContainer:
    container = ctx.find_root().obj
    if container is None:
        container = create_container()
    return container


def main() -> None:
    app()


if __name__ == "__main__":
    main()

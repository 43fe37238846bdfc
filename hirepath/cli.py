"""
HirePath Command Line Interface

Provides CLI commands for job recommendations and the application
lifecycle, backed by the configured MongoDB database.
"""

from typing import Optional

import typer
from pymongo.errors import PyMongoError
from rich.console import Console
from rich.table import Table

from hirepath.utils.constants import APP_DISPLAY_NAME, ActorRole, ApplicationStatus

app = typer.Typer(
    name="hirepath",
    help=f"{APP_DISPLAY_NAME} CLI",
    add_completion=False,
)
console = Console()


@app.callback()
def main():
    """Configure logging before any command runs."""
    from hirepath.utils.logger import setup_logging

    setup_logging()


def _require_connection() -> None:
    from hirepath.data.database import get_database_manager

    if not get_database_manager().ping():
        console.print("[red]Error: Could not connect to MongoDB. Run 'init-db' first.[/red]")
        raise typer.Exit(1)


def _application_service():
    from hirepath.core.applications import ApplicationService
    from hirepath.data.repositories import get_application_repository, get_job_repository

    return ApplicationService(get_application_repository(), get_job_repository())


def _print_failure(error) -> None:
    console.print(f"[red]Error ({error.code}): {error.message}[/red]")


def _print_application(application) -> None:
    table = Table(title=f"Application {application.id}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Job", application.job_id)
    table.add_row("Candidate", application.candidate_id)
    table.add_row("Status", application.current_status.value)
    table.add_row("Notes", application.notes or "-")
    table.add_row("Version", str(application.version))

    console.print(table)


@app.command()
def version():
    """Show application version."""
    from hirepath import __app_name__, __version__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show system information and configuration."""
    from hirepath.utils.config import get_settings

    settings = get_settings()

    table = Table(title="HirePath Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Database Host", settings.database.host)
    table.add_row("Database Name", settings.database.name)
    table.add_row("Default Limit", str(settings.matching.default_limit))
    table.add_row("Scoring Workers", str(settings.matching.max_workers))
    table.add_row("Lock Timeout", f"{settings.workflow.lock_timeout_seconds}s")
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


@app.command()
def init_db():
    """Create the application and job indexes."""
    import asyncio

    from hirepath.data.database import get_database_manager

    manager = get_database_manager()
    console.print(f"[yellow]Initializing '{manager.database_name}'...[/yellow]")

    if not manager.ping():
        console.print("[red]Error: Could not connect to MongoDB.[/red]")
        console.print("[dim]Check the DB_* settings and that the server is running.[/dim]")
        raise typer.Exit(1)

    try:
        created = asyncio.run(manager.ensure_indexes())
    except PyMongoError as e:
        console.print(f"[red]Error creating indexes: {e}[/red]")
        raise typer.Exit(1)
    finally:
        manager.close()

    console.print(f"  [green]✓[/green] {created} indexes ensured")


@app.command()
def recommend(
    candidate_id: str = typer.Argument(..., help="Candidate to recommend jobs for"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Number of jobs (1-20)"),
    min_score: int = typer.Option(0, "--min-score", "-m", help="Hide results below this score"),
):
    """Recommend open jobs for a candidate."""
    from hirepath.core.errors import ApplicationError
    from hirepath.core.ranking import RecommendationRanker
    from hirepath.data.repositories import (
        get_application_repository,
        get_candidate_repository,
        get_job_repository,
    )

    _require_connection()

    ranker = RecommendationRanker(
        get_job_repository(),
        get_candidate_repository(),
        get_application_repository(),
    )

    try:
        results = [r for r in ranker.recommend(candidate_id, limit) if r.score >= min_score]
    except ApplicationError as e:
        _print_failure(e)
        raise typer.Exit(1)

    if not results:
        console.print("[yellow]No matching open jobs found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Recommendations for {candidate_id}")
    table.add_column("Rank", style="dim", width=4)
    table.add_column("Job", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Matched Skills")
    table.add_column("Reason")

    for i, result in enumerate(results, 1):
        score_color = "green" if result.score >= 70 else "yellow" if result.score >= 40 else "red"
        table.add_row(
            str(i),
            result.job_id,
            f"[{score_color}]{result.score}[/{score_color}]",
            ", ".join(result.to_payload()["matched_skills"]) or "-",
            result.reason,
        )

    console.print(table)


@app.command()
def apply(
    job_id: str = typer.Argument(..., help="Job to apply to"),
    candidate_id: str = typer.Argument(..., help="Applying candidate"),
    resume_ref: str = typer.Option(..., "--resume", "-r", help="Reference to the stored resume"),
    cover_letter: Optional[str] = typer.Option(None, "--cover-letter", help="Cover letter text"),
):
    """Submit an application for a job."""
    _require_connection()

    result = _application_service().submit(job_id, candidate_id, resume_ref, cover_letter)
    if not result.success:
        _print_failure(result.error)
        raise typer.Exit(1)

    console.print("[green]✓ Application submitted[/green]")
    _print_application(result.application)


@app.command()
def transition(
    application_id: str = typer.Argument(..., help="Application to update"),
    status: ApplicationStatus = typer.Argument(..., help="Target status"),
    actor_id: str = typer.Option(..., "--actor", "-a", help="ID of the acting user"),
    role: ActorRole = typer.Option(ActorRole.ADMINISTRATOR, "--role", help="Role of the acting user"),
    notes: Optional[str] = typer.Option(None, "--notes", help="Notes to record with the change"),
):
    """Move an application to a new status."""
    _require_connection()

    result = _application_service().transition(application_id, actor_id, role, status, notes)
    if not result.success:
        _print_failure(result.error)
        raise typer.Exit(1)

    console.print(f"[green]✓ Application moved to {status.value}[/green]")
    _print_application(result.application)


@app.command()
def history(
    application_id: str = typer.Argument(..., help="Application to show"),
):
    """Show the status history of an application."""
    _require_connection()

    result = _application_service().get(application_id)
    if not result.success:
        _print_failure(result.error)
        raise typer.Exit(1)

    application = result.application
    table = Table(title=f"History of {application_id} ({application.current_status.value})")
    table.add_column("When", style="dim")
    table.add_column("Status", style="cyan")
    table.add_column("Actor")
    table.add_column("Role")
    table.add_column("Notes")

    for change in application.history:
        table.add_row(
            change.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            str(change.status),
            change.actor_id,
            str(change.actor_role),
            change.notes or "",
        )

    console.print(table)


if __name__ == "__main__":
    app()

"""ACTS CLI: astronaut career tracking from the terminal.

Commands:
  init-db    create database tables
  seed       load people and duty history from the YAML seed file
  serve      run the REST API
  people     list people with their current snapshot
  duties     show one person's duty history
  assign     assign a new duty through the transition rules
  status     database health and record counts
"""
from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table


app = typer.Typer(
    name="acts",
    help="Astronaut Career Tracking System.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("init-db")
def init_db_command():
    """Create database tables (safe to re-run)."""
    from acts.database import init_db

    try:
        with console.status("[bold]Creating database..."):
            init_db()
    except Exception as e:
        console.print(f"[red]Database setup failed: {e}[/red]")
        raise typer.Exit(1)
    console.print("[green]Database ready.[/green]")


@app.command("seed")
def seed(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Seed YAML (default: SEED_DATA setting)"),
):
    """Load people and duty history from a YAML file."""
    from acts.config import settings
    from acts.database import SessionLocal, init_db
    from acts.seed import load_seed_file, resolve_seed_path, seed_people

    path = file if file is not None else resolve_seed_path(settings.SEED_DATA)
    if path is None or not Path(path).exists():
        console.print(f"[red]Seed file not found: {file or settings.SEED_DATA}[/red]")
        raise typer.Exit(1)

    init_db()
    db = SessionLocal()
    try:
        with console.status("[bold]Seeding people..."):
            result = seed_people(db, load_seed_file(Path(path)))
    finally:
        db.close()

    console.print(
        f"Created: {result['created']}  |  Skipped: {result['skipped']}  |  Duties: {result['duties']}"
    )
    for err in result["errors"]:
        console.print(f"  [yellow]{err}[/yellow]")


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", "--host"),
    port: int = typer.Option(8000, "--port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the REST API."""
    import uvicorn

    console.print(f"API running at [cyan]http://{host}:{port}[/cyan], press Ctrl+C to stop")
    uvicorn.run("acts.main:app", host=host, port=port, reload=reload)


@app.command("people")
def people():
    """List all people with their current astronaut snapshot."""
    from acts.database import SessionLocal
    from acts.modules.mediator import build_mediator
    from acts.modules.people import GetPeople

    db = SessionLocal()
    try:
        result = build_mediator(db).send(GetPeople())
    finally:
        db.close()

    if not result.data:
        console.print("[dim]No people recorded yet.[/dim]")
        return

    table = Table(title=f"People ({len(result.data)})")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Rank")
    table.add_column("Duty Title")
    table.add_column("Career Start")
    table.add_column("Career End")
    for p in result.data:
        table.add_row(
            str(p.person_id),
            p.name,
            p.current_rank or "-",
            p.current_duty_title or "-",
            str(p.career_start_date) if p.career_start_date else "-",
            str(p.career_end_date) if p.career_end_date else "-",
        )
    console.print(table)


@app.command("duties")
def duties(name: str = typer.Argument(..., help="Exact person name")):
    """Show a person's duty history, newest first."""
    from acts.database import SessionLocal
    from acts.modules.duties import GetAstronautDutiesByName
    from acts.modules.mediator import build_mediator

    db = SessionLocal()
    try:
        result = build_mediator(db).send(GetAstronautDutiesByName(name=name))
    finally:
        db.close()

    if not result.success:
        console.print(f"[red]{result.message}: {name}[/red]")
        raise typer.Exit(1)

    person = result.data.person
    console.print(
        f"[bold]{person.name}[/bold]  {person.current_rank or '-'} / {person.current_duty_title or '-'}"
    )
    table = Table(title=f"Duty History ({len(result.data.astronaut_duties)})")
    table.add_column("Rank", style="cyan")
    table.add_column("Duty Title")
    table.add_column("Start")
    table.add_column("End")
    for d in result.data.astronaut_duties:
        table.add_row(
            d.rank,
            d.duty_title,
            str(d.duty_start_date),
            str(d.duty_end_date) if d.duty_end_date else "[green]current[/green]",
        )
    console.print(table)


@app.command("assign")
def assign(
    name: str = typer.Argument(..., help="Exact person name"),
    rank: str = typer.Argument(...),
    duty_title: str = typer.Argument(...),
    start: Optional[str] = typer.Option(None, "--start", help="Duty start date YYYY-MM-DD (default: today)"),
):
    """Assign a new duty. The current duty ends the day before START."""
    from acts.database import SessionLocal
    from acts.errors import ActsError
    from acts.modules.duties import CreateAstronautDuty
    from acts.modules.mediator import build_mediator

    try:
        start_date = date.fromisoformat(start) if start else date.today()
    except ValueError:
        console.print(f"[red]Invalid date: {start}[/red]")
        raise typer.Exit(1)

    db = SessionLocal()
    try:
        result = build_mediator(db).send(CreateAstronautDuty(
            name=name, rank=rank, duty_title=duty_title, duty_start_date=start_date,
        ))
    except ActsError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1)
    finally:
        db.close()

    if not result.success:
        console.print(f"[red]{result.message}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Assigned {rank} {duty_title} to {name} from {start_date}.[/green]")


@app.command("status")
def status():
    """Show database health and record counts."""
    from sqlalchemy import text
    from acts.config import settings
    from acts.database import SessionLocal
    from acts.models.astronaut_duty import AstronautDuty
    from acts.models.log_entry import LogEntry
    from acts.models.person import Person

    db = SessionLocal()
    try:
        console.print("[bold]System[/bold]")
        console.print(f"  Version: {settings.VERSION}")
        try:
            db.execute(text("SELECT 1"))
        except Exception as e:
            console.print(f"  Database: [red]unreachable ({e})[/red]")
            raise typer.Exit(1)
        console.print("  Database: [green]OK[/green]")

        console.print("\n[bold]Records[/bold]")
        console.print(f"  People: {db.query(Person).count():,}")
        open_duties = db.query(AstronautDuty).filter(AstronautDuty.duty_end_date.is_(None)).count()
        console.print(f"  Duties: {db.query(AstronautDuty).count():,} ({open_duties:,} current)")
        console.print(f"  Log entries: {db.query(LogEntry).count():,}")
    finally:
        db.close()


if __name__ == "__main__":
    app()

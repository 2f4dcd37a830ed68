"""Command line interface for the cricket scoring service."""

import logging
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..api.auth import issue_token as sign_token
from ..config import settings
from ..database import configure_database, create_tables, drop_tables, get_session_local, session_scope
from ..qa.consistency import ConsistencyChecker
from ..roster import load_roster, read_roster_file
from ..scoring import AuthContext, Role, ScoringError, ScoringService

# Initialize rich console
console = Console()


# Configure logging
def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """Route stdlib logging and loguru through the same rich handler."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    console_handler = RichHandler(console=console, show_time=True, show_path=False)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    handlers = [console_handler]
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
        force=True
    )

    # The scoring core logs through loguru
    logger.remove()
    for handler in handlers:
        logger.add(handler, level=log_level, format="{message}")


app = typer.Typer(
    name="cricket-scoring",
    help="Cricket Scoring - ball-by-ball innings scoring service",
    no_args_is_help=True
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Log file path"),
    database_url: Optional[str] = typer.Option(None, "--database-url", help="Override the configured database URL"),
):
    """Cricket Scoring - ball-by-ball innings scoring service."""
    log_level = "DEBUG" if verbose else settings.logging.level
    setup_logging(log_level, log_file or settings.logging.file)

    if database_url:
        configure_database(database_url, echo=settings.database.echo)


@app.command()
def setup_db(force: bool = typer.Option(False, "--force", help="Force recreation of tables")):
    """Initialize database schema."""
    console.print("[bold]Setting up database schema...[/bold]")

    try:
        if force:
            console.print("Dropping existing tables...")
            drop_tables()

        console.print("Creating database tables...")
        create_tables()

        console.print("[green]✅ Database schema initialized successfully![/green]")

    except Exception as e:
        console.print(f"[red]❌ Database setup failed: {e}[/red]")
        raise typer.Exit(1)


@app.command("seed-roster")
def seed_roster(path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file with teams and players")):
    """Load teams and their squads from a JSON file."""
    try:
        teams = read_roster_file(path)
        with session_scope() as session:
            loaded = load_roster(session, teams)
            table = Table(title="Teams Loaded")
            table.add_column("ID", style="cyan")
            table.add_column("Team", style="green")
            table.add_column("Players", style="magenta")
            for team in loaded:
                table.add_row(team.id, team.name, str(len(team.players)))
        console.print(table)
        console.print(f"[green]✅ Loaded {len(loaded)} teams[/green]")
    except Exception as e:
        console.print(f"[red]❌ Roster load failed: {e}[/red]")
        raise typer.Exit(1)


@app.command("issue-token")
def issue_token(
    subject: str = typer.Argument(..., help="User ID the token is issued to"),
    role: Role = typer.Option(Role.UMPIRE, "--role", case_sensitive=False, help="Caller role"),
    ttl_hours: Optional[int] = typer.Option(None, "--ttl-hours", help="Token lifetime"),
):
    """Sign a bearer token for local testing."""
    console.print(sign_token(subject, role, ttl_hours=ttl_hours), soft_wrap=True, highlight=False)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port"),
):
    """Run the HTTP API."""
    import uvicorn

    from ..api.app import create_app

    bind_host = host or settings.api.host
    bind_port = port or settings.api.port
    console.print(f"[bold]Serving on http://{bind_host}:{bind_port}[/bold]")
    uvicorn.run(create_app(), host=bind_host, port=bind_port, log_config=None)


@app.command()
def scoreboard(match_id: str = typer.Argument(..., help="Match ID")):
    """Print the current state of a match."""
    service = ScoringService(session_factory=get_session_local())
    try:
        state = service.get_match_state(AuthContext.anonymous(), match_id)
    except ScoringError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold blue]{state.name}[/bold blue]  [{state.status.value}]")
    names = {}
    teams = {}
    for team in (state.team_a, state.team_b):
        if team is not None:
            teams[team.id] = team.name
            names.update({p.id: p.name for p in team.players})

    for innings in state.innings:
        summary = Table(title=f"Innings {innings.innings_number}: {teams.get(innings.team_id, innings.team_id)}")
        summary.add_column("Score", style="green")
        summary.add_column("Overs", style="cyan")
        summary.add_column("Run Rate", style="magenta")
        summary.add_column("Extras", style="yellow")
        summary.add_column("Status")
        summary.add_row(
            f"{innings.total_runs}/{innings.total_wickets}",
            innings.overs_display,
            f"{innings.run_rate:.2f}",
            str(innings.extras_total),
            innings.status.value,
        )
        console.print(summary)

        batting = Table(title="Batting")
        batting.add_column("Batter", style="cyan")
        batting.add_column("R", justify="right")
        batting.add_column("B", justify="right")
        batting.add_column("4s", justify="right")
        batting.add_column("6s", justify="right")
        batting.add_column("SR", justify="right")
        for row in innings.batting_stats:
            if row.balls_faced == 0 and row.runs == 0:
                continue
            batting.add_row(
                names.get(row.player_id, row.player_id), str(row.runs), str(row.balls_faced),
                str(row.fours), str(row.sixes), f"{row.strike_rate:.2f}",
            )
        console.print(batting)

        bowling = Table(title="Bowling")
        bowling.add_column("Bowler", style="cyan")
        bowling.add_column("O", justify="right")
        bowling.add_column("R", justify="right")
        bowling.add_column("W", justify="right")
        bowling.add_column("Econ", justify="right")
        for row in innings.bowling_stats:
            bowling.add_row(
                names.get(row.player_id, row.player_id), row.overs_display, str(row.runs),
                str(row.wickets), f"{row.economy_rate:.2f}",
            )
        console.print(bowling)

    if state.result is not None:
        console.print(f"[bold green]{state.result.text}[/bold green]")


@app.command("check-consistency")
def check_consistency(
    match_id: Optional[str] = typer.Option(None, "--match-id", help="Only check this match"),
):
    """Recompute every aggregate from the ledgers and report mismatches."""
    console.print("[bold]Running consistency checks...[/bold]")

    try:
        results = ConsistencyChecker(get_session_local()).check(match_id)
    except Exception as e:
        console.print(f"[red]❌ Consistency check failed: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Consistency Results")
    table.add_column("Check", style="cyan")
    table.add_column("Score", style="green")
    table.add_column("Issues", style="red")
    for name, check in results["checks"].items():
        table.add_row(name, str(check["quality_score"]), str(len(check["issues"])))
    console.print(table)
    console.print(f"Innings checked: {results['innings_checked']}  Overall score: {results['overall_score']}")

    if not results["consistent"]:
        for name, check in results["checks"].items():
            for issue in check["issues"]:
                console.print(f"[yellow]⚠️  {name}: {issue}[/yellow]")
        raise typer.Exit(1)

    console.print("[green]✅ All aggregates match their ledgers[/green]")


if __name__ == "__main__":
    app()

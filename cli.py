import typer
from rich.console import Console
from rich.table import Table
from rich.markup import escape
from typing import Optional, List
from datetime import datetime
import json

from pydantic import ValidationError

from review_scheduler.database import SessionLocal, init_db
from review_scheduler.crud import (
    ReviewItemStore, StudyEventSource,
    record_study_log, get_review_items,
    record_review_session, get_review_sessions, get_recent_review_sessions
)
from review_scheduler.errors import ReviewSchedulerError
from review_scheduler.forgetting_curve import ForgettingCurve
from review_scheduler.logging_config import configure_logging
from review_scheduler.review_schedule import ReviewScheduleGenerator, ReviewCompletionHandler
from review_scheduler.schemas import StudyLogCreate, ReviewCompletion, ReviewSessionCreate, ReviewItemResponse

app = typer.Typer(help="Review Scheduler CLI - forgetting-curve review planning")
console = Console()

def _parse_date(value: Optional[str]) -> datetime:
    if not value:
        return datetime.now()
    return datetime.strptime(value, "%Y-%m-%d")

def _fail(message: str):
    console.print(f"[red]✗[/red] {escape(message)}")
    raise typer.Exit(code=1)

@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level")):
    """Configure logging before any command runs"""
    configure_logging(level="DEBUG" if verbose else None)

@app.command()
def init():
    """Initialize database tables"""
    init_db()
    console.print("[green]✓[/green] Database initialized successfully!")

@app.command()
def log_study(
    user_id: int = typer.Option(..., prompt="User ID"),
    subject: str = typer.Option(..., prompt="Subject"),
    topics: str = typer.Option(..., prompt="Topics (comma-separated)"),
    understanding: int = typer.Option(..., prompt="Understanding (1-5)"),
    study_time: int = typer.Option(..., prompt="Study time (minutes)"),
    study_date: Optional[str] = typer.Option(None, help="Study date (YYYY-MM-DD), default: now"),
    memo: Optional[str] = typer.Option(None, help="Optional memo")
):
    """Record a study event; its topics are picked up by the next schedule run"""
    db = SessionLocal()
    try:
        try:
            log_data = StudyLogCreate(
                user_id=user_id,
                date=_parse_date(study_date),
                subject=subject.strip(),
                topics=[t.strip() for t in topics.split(",") if t.strip()],
                study_time=study_time,
                understanding=understanding,
                memo=memo
            )
        except (ValidationError, ValueError) as e:
            _fail(f"Invalid study log: {e}")

        log = record_study_log(db, log_data)
        console.print(f"[green]✓[/green] Study log recorded! ID: {log.id}")
        console.print(f"  [cyan]{escape(log.subject)}[/cyan] {escape(', '.join(log.topics))}")
    finally:
        db.close()

@app.command()
def schedule(
    user_id: int = typer.Option(..., prompt="User ID"),
    as_json: bool = typer.Option(False, "--json", help="Print the schedule as JSON")
):
    """Discover new topics and show review items due today, most urgent first"""
    db = SessionLocal()
    try:
        generator = ReviewScheduleGenerator(ReviewItemStore(db), StudyEventSource(db))
        try:
            due_items = generator.generate_schedule(user_id)
        except ReviewSchedulerError as e:
            _fail(f"Error: {e}")

        if as_json:
            payload = [ReviewItemResponse.model_validate(item).model_dump(mode="json") for item in due_items]
            console.print_json(json.dumps(payload))
            return

        if not due_items:
            console.print(f"[yellow]No reviews due today for user {user_id}[/yellow]")
            return

        console.print(f"\n[bold]Reviews due today ({len(due_items)})[/bold]\n")
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Subject", style="cyan")
        table.add_column("Topic", style="green")
        table.add_column("Priority", style="red", justify="right")
        table.add_column("Stage", justify="right")
        table.add_column("Days Overdue", style="yellow", justify="right")

        today = datetime.now()
        for item in due_items:
            days_overdue = ForgettingCurve.days_overdue(item.next_review_date, today)
            table.add_row(
                str(item.id),
                escape(item.subject),
                escape(item.topic[:50]),
                str(item.priority),
                f"{item.forgetting_curve_stage}/7",
                str(days_overdue) if days_overdue > 0 else "Today"
            )

        console.print(table)
    finally:
        db.close()

@app.command()
def complete(
    item_id: int = typer.Option(..., prompt="Review item ID"),
    understanding: int = typer.Option(..., prompt="Understanding (1-5)"),
    study_time: int = typer.Option(0, help="Minutes spent on the review")
):
    """Complete a review and move the item along the forgetting curve"""
    db = SessionLocal()
    try:
        try:
            completion = ReviewCompletion(item_id=item_id, understanding=understanding, study_time=study_time)
        except ValidationError as e:
            _fail(f"Invalid review: {e}")

        handler = ReviewCompletionHandler(ReviewItemStore(db))
        try:
            item = handler.complete_review(completion.item_id, completion.understanding, completion.study_time)
        except ReviewSchedulerError as e:
            _fail(f"Error: {e}")

        console.print(f"[green]✓[/green] Review completed!")
        console.print(f"  Topic: [cyan]{escape(item.subject)}[/cyan] {escape(item.topic)}")
        console.print(f"  Stage: {item.forgetting_curve_stage}/7")
        console.print(f"  Next review: {item.next_review_date:%Y-%m-%d} (in {item.interval_days} days)")
        console.print(f"  Priority: {item.priority}")
    finally:
        db.close()

@app.command()
def items(user_id: int):
    """List every tracked review item for a user"""
    db = SessionLocal()
    try:
        all_items = get_review_items(db, user_id)
        if not all_items:
            console.print(f"[yellow]No review items for user {user_id}[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Subject", style="cyan")
        table.add_column("Topic", style="green")
        table.add_column("Next Review", style="yellow")
        table.add_column("Reviews", justify="right")
        table.add_column("Priority", style="red", justify="right")
        table.add_column("Status")

        for item in all_items:
            table.add_row(
                str(item.id),
                escape(item.subject),
                escape(item.topic[:50]),
                f"{item.next_review_date:%Y-%m-%d}",
                str(item.review_count),
                str(item.priority),
                "retired" if item.is_completed else "active"
            )

        console.print(table)
    finally:
        db.close()

def _set_completed(item_id: int, completed: bool):
    db = SessionLocal()
    try:
        try:
            item = ReviewItemStore(db).set_completed(item_id, completed)
        except ReviewSchedulerError as e:
            _fail(f"Error: {e}")
        state = "retired" if item.is_completed else "reopened"
        console.print(f"[green]✓[/green] [cyan]{escape(item.subject)}[/cyan] {escape(item.topic)} {state}")
    finally:
        db.close()

@app.command()
def retire(item_id: int):
    """Retire a review item so it is no longer scheduled"""
    _set_completed(item_id, True)

@app.command()
def reopen(item_id: int):
    """Reopen a retired review item"""
    _set_completed(item_id, False)

@app.command()
def delete_item(item_id: int):
    """Delete a review item (WARNING: irreversible!)"""
    confirm = typer.confirm(f"⚠️  Delete review item {item_id}?")
    if not confirm:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    db = SessionLocal()
    try:
        try:
            ReviewItemStore(db).delete_item(item_id)
        except ReviewSchedulerError as e:
            _fail(f"Error: {e}")
        console.print(f"[green]✓[/green] Review item {item_id} deleted")
    finally:
        db.close()

@app.command()
def log_session(
    user_id: int = typer.Option(..., prompt="User ID"),
    total_items: int = typer.Option(..., prompt="Items in session"),
    completed_items: int = typer.Option(..., prompt="Items completed"),
    duration: int = typer.Option(..., prompt="Session duration (minutes)"),
    understanding: List[int] = typer.Option([], help="Understanding per completed item (repeatable)"),
    session_date: Optional[str] = typer.Option(None, help="Session date (YYYY-MM-DD), default: now")
):
    """Record a review session summary"""
    db = SessionLocal()
    try:
        average = sum(understanding) / len(understanding) if understanding else 0.0
        try:
            session_data = ReviewSessionCreate(
                user_id=user_id,
                session_date=_parse_date(session_date),
                total_items=total_items,
                completed_items=completed_items,
                session_duration=duration,
                average_understanding=average
            )
        except (ValidationError, ValueError) as e:
            _fail(f"Invalid session: {e}")

        session = record_review_session(db, session_data)
        console.print(f"[green]✓[/green] Review session recorded! ID: {session.id}")
        console.print(f"  {session.completed_items}/{session.total_items} items in {session.session_duration} min")
    finally:
        db.close()

@app.command()
def sessions(user_id: int, days: Optional[int] = typer.Option(None, help="Only the last N days")):
    """View review session history"""
    db = SessionLocal()
    try:
        if days is not None:
            history = get_recent_review_sessions(db, user_id, days, datetime.now())
        else:
            history = get_review_sessions(db, user_id)

        if not history:
            console.print(f"[yellow]No review sessions found for user {user_id}[/yellow]")
            return

        console.print(f"\n[cyan]Review Sessions:[/cyan]")
        for session in history:
            console.print(
                f"  {session.session_date:%Y-%m-%d} - {session.completed_items}/{session.total_items} items, "
                f"{session.session_duration} min (avg understanding: {session.average_understanding:.1f})"
            )
    finally:
        db.close()

if __name__ == "__main__":
    app()

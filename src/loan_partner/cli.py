"""Interactive CLI — click entry point + interactive dashboard loop.

Session startup:
  1. Load the sidebar widgets from the data directory.
  2. Start a loan session with one default collateral item.
  3. Enter the interactive loop.

Dashboard loop:
  - Display the total loan limit, location, and collateral table.
  - Let the user change the location, add/open/edit/delete collateral,
    manage todos and schedules, refresh news, ask the AI consultant, or exit.
  - AI requests run on a background worker; the loop stays usable meanwhile.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .assistant import AssistantError, consult_or_fallback, fetch_latest_news
from .calculator import evaluate, format_amount
from .categories import MAJOR_CATEGORIES, minor_categories_of
from .config import NEWS_EMPTY_MESSAGE, data_dir
from .regions import cities, districts_of, neighborhoods_of, villages_of
from .registry import Property
from .session import LoanSession
from .storage import LocalStore
from .widgets import EXTERNAL_LINKS, WidgetBoard

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True, style="bold red")

UNIT = "천원"

# ──────────────────────────────────────────────────────────────────────────────
# Display
# ──────────────────────────────────────────────────────────────────────────────

def display_banner(session: LoanSession) -> None:
    now = datetime.now()
    console.print(Panel(
        f"[bold]{now:%Y년 %m월 %d일 %H:%M}[/bold]   "
        f"총 심사 한도: [bold green]{format_amount(session.total_limit())}[/bold green] {UNIT}",
        expand=False,
    ))


def display_collateral(session: LoanSession) -> None:
    console.print(f"[bold]소재지:[/bold] {session.location.label()}")
    console.print(f"[dim]지도: {session.location.map_search_url()}[/dim]")

    t = Table(box=box.SIMPLE, show_header=True, padding=(0, 1))
    t.add_column("#", justify="right", style="dim")
    t.add_column("지번/호수", style="cyan")
    t.add_column("종류")
    t.add_column("감정가", justify="right")
    t.add_column("LTV", justify="right")
    t.add_column("심사한도", justify="right", style="green")

    for index, limit in enumerate(session.limits(), start=1):
        prop = limit.property
        marker = "▶" if prop.id == session.selected_property_id else str(index)
        t.add_row(
            marker,
            prop.lot_number or "(미입력)",
            prop.minor_category,
            format_amount(prop.appraisal_value),
            f"{format_amount(prop.item_ltv)}%",
            format_amount(limit.final_amt),
        )
    console.print(t)


def display_property(prop: Property) -> None:
    limit = evaluate(prop)
    t = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
    t.add_column("Field", style="cyan")
    t.add_column("Value", justify="right")
    t.add_row("lot_number", prop.lot_number or "(미입력)")
    t.add_row("usage", prop.usage)
    t.add_row("major_category", prop.major_category)
    t.add_row("minor_category", prop.minor_category)
    t.add_row("appraisal_value", f"{format_amount(prop.appraisal_value)} {UNIT}")
    t.add_row("item_ltv", f"{format_amount(prop.item_ltv)}%")
    t.add_row("senior_deduction", f"{format_amount(prop.senior_deduction)} {UNIT}")
    t.add_row("  └ calculated", f"{format_amount(limit.calculated_amt)} {UNIT}")
    t.add_row("  └ final", f"[bold green]{format_amount(limit.final_amt)}[/bold green] {UNIT}")
    console.print(Panel(t, title=f"담보 정보 · {prop.id}", expand=False))


def display_widgets(board: WidgetBoard) -> None:
    t = Table(title="할 일", box=box.SIMPLE, show_header=False, padding=(0, 1))
    t.add_column("#", justify="right", style="dim")
    t.add_column("Todo")
    for index, todo in enumerate(board.todos, start=1):
        mark = "☑ " if todo.completed else "☐ "
        t.add_row(str(index), Text(mark + todo.text, style="strike dim" if todo.completed else ""))
    console.print(t)

    s = Table(title="일정", box=box.SIMPLE, show_header=False, padding=(0, 1))
    s.add_column("Date", style="green")
    s.add_column("Title")
    for item in board.schedules:
        s.add_row(item.date[5:], item.title)
    console.print(s)


def display_news(board: WidgetBoard) -> None:
    if not board.news:
        console.print("[dim]No news yet.[/dim]")
        return
    for item in board.news:
        console.print("  •", Text(item.content), Text(f"({item.timestamp})", style="dim"))


def display_links() -> None:
    t = Table(title="업무 링크", box=box.SIMPLE, show_header=False, padding=(0, 1))
    t.add_column("Name", style="cyan")
    t.add_column("URL")
    for name, url in EXTERNAL_LINKS:
        t.add_row(name, url)
    console.print(t)


# ──────────────────────────────────────────────────────────────────────────────
# Input helpers
# ──────────────────────────────────────────────────────────────────────────────

def _prompt_choice(label: str, options: list[str], current: str = "") -> Optional[str]:
    """Pick from *options* by number or name. Blank input keeps *current* (returns None)."""
    for index, option in enumerate(options, start=1):
        marker = "*" if option == current else " "
        console.print(f"  {marker}{index:>2}. {option}")
    while True:
        raw = console.input(f"[bold]{label} (Enter to keep): [/bold]").strip()
        if not raw:
            return None
        if raw.isdigit() and 1 <= int(raw) <= len(options):
            return options[int(raw) - 1]
        if raw in options:
            return raw
        err_console.print(f"  Unknown option '{raw}'.")


def _resolve_property_id(session: LoanSession, raw: str) -> Optional[str]:
    """Accept either a table row number or a collateral id."""
    limits = session.limits()
    if raw.isdigit() and 1 <= int(raw) <= len(limits) and raw not in session.registry:
        return limits[int(raw) - 1].property.id
    if raw in session.registry:
        return raw
    return None


def _confirm_delete(prop: Property) -> bool:
    answer = console.input(
        f"[bold]Delete collateral {prop.lot_number or prop.id}? (y/n): [/bold]"
    ).strip().lower()
    return answer == "y"


# ──────────────────────────────────────────────────────────────────────────────
# Actions
# ──────────────────────────────────────────────────────────────────────────────

def _change_location(session: LoanSession) -> None:
    loc = session.location
    city = _prompt_choice("City", cities(), loc.city)
    if city is not None:
        session.select_city(city)
    district = _prompt_choice("District", districts_of(loc.city), loc.district)
    if district is not None:
        session.select_district(district)
    neighborhood = _prompt_choice("Neighborhood", neighborhoods_of(loc.city, loc.district), loc.neighborhood)
    if neighborhood is not None:
        session.select_neighborhood(neighborhood)
    if loc.village_enabled:
        village = _prompt_choice("Village (리)", villages_of(loc.neighborhood), loc.village)
        if village is not None:
            session.select_village(village)
    console.print(f"  [green]소재지: {loc.label()}[/green]")


_EDITABLE_FIELDS = (
    "lot_number", "usage", "major_category", "minor_category",
    "appraisal_value", "item_ltv", "senior_deduction",
)


def _edit_selected(session: LoanSession) -> None:
    prop = session.selected_property()
    if prop is None:
        err_console.print("Open a collateral item first.")
        return
    console.print(f"  Fields: {', '.join(_EDITABLE_FIELDS)}")
    field = console.input("[bold]Field to update: [/bold]").strip().lower()
    if field not in _EDITABLE_FIELDS:
        err_console.print(f"  Unknown field '{field}'.")
        return

    if field == "major_category":
        value = _prompt_choice("Major category", list(MAJOR_CATEGORIES), prop.major_category)
    elif field == "minor_category":
        value = _prompt_choice("Minor category", minor_categories_of(prop.major_category), prop.minor_category)
    else:
        value = console.input(f"[bold]New {field}: [/bold]").strip()
    if value is None:
        return
    session.update_selected({field: value})
    display_property(prop)


def _drain(pending: dict[str, Future], board: WidgetBoard, *, wait: bool = False) -> None:
    """Print whatever background results have landed."""
    for kind in list(pending):
        future = pending[kind]
        if not (wait or future.done()):
            continue
        del pending[kind]
        try:
            text = future.result()
        except AssistantError as exc:
            # Consultations map their own failures; only news can land here.
            logger.warning("%s request failed: %s", kind, exc)
            err_console.print(NEWS_EMPTY_MESSAGE)
            continue
        if kind == "news":
            board.replace_news(text)
            console.print(Panel("[bold]여신 뉴스[/bold]", expand=False))
            display_news(board)
        else:
            console.print(Panel(Text(text), title="여신 컨설팅 분석 리포트", expand=False))


# ──────────────────────────────────────────────────────────────────────────────
# Interactive loop
# ──────────────────────────────────────────────────────────────────────────────

def interactive_loop(
    session: LoanSession,
    board: WidgetBoard,
    extra_context: str = "",
    fetch_news: bool = True,
) -> None:
    pending: dict[str, Future] = {}
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="genai")
    if fetch_news and not board.news:
        pending["news"] = executor.submit(fetch_latest_news)

    display_banner(session)
    display_collateral(session)

    try:
        while True:
            _drain(pending, board)
            console.print()
            console.print(
                "[bold]Actions:[/bold] "
                "[cyan]location[/cyan] · [cyan]add[/cyan] · [cyan]open[/cyan] · [cyan]edit[/cyan] · "
                "[cyan]close[/cyan] · [cyan]delete[/cyan] · [cyan]todo[/cyan] · [cyan]done[/cyan] · "
                "[cyan]schedule[/cyan] · [cyan]news[/cyan] · [cyan]ask[/cyan] · [cyan]answer[/cyan] · "
                "[cyan]links[/cyan] · [cyan]show[/cyan] · [cyan]exit[/cyan]"
            )
            action = console.input("[bold]> [/bold]").strip().lower()

            if action in ("exit", "quit", "q"):
                console.print("Goodbye.")
                break

            elif action == "show":
                display_banner(session)
                display_collateral(session)
                display_widgets(board)
                display_news(board)

            elif action == "location":
                _change_location(session)

            elif action == "add":
                property_id = session.add_property()
                console.print(f"  [green]Added collateral {property_id}[/green]")
                display_property(session.selected_property())

            elif action == "open":
                raw = console.input("[bold]Row number or id: [/bold]").strip()
                property_id = _resolve_property_id(session, raw)
                if property_id is None or not session.open(property_id):
                    err_console.print(f"  No collateral '{raw}'.")
                    continue
                display_property(session.selected_property())

            elif action == "edit":
                _edit_selected(session)

            elif action == "close":
                session.close()
                display_banner(session)
                display_collateral(session)

            elif action == "delete":
                if session.selected_property_id is None:
                    err_console.print("Open a collateral item first.")
                    continue
                if session.remove_property(session.selected_property_id, _confirm_delete):
                    console.print("  [green]Deleted.[/green]")
                    display_banner(session)
                    display_collateral(session)

            elif action == "todo":
                text = console.input("[bold]New todo: [/bold]")
                if board.add_todo(text) is None:
                    err_console.print("  Empty todo ignored.")

            elif action == "done":
                raw = console.input("[bold]Todo number to toggle: [/bold]").strip()
                if raw.isdigit() and 1 <= int(raw) <= len(board.todos):
                    board.toggle_todo(board.todos[int(raw) - 1].id)
                else:
                    err_console.print(f"  No todo '{raw}'.")
                display_widgets(board)

            elif action == "schedule":
                on = console.input("[bold]Date (YYYY-MM-DD): [/bold]")
                title = console.input("[bold]일정: [/bold]")
                if board.add_schedule(on, title) is None:
                    err_console.print("  Schedule needs a valid date and a title.")
                else:
                    display_widgets(board)

            elif action == "news":
                if "news" in pending:
                    console.print("  News request already pending.")
                else:
                    pending["news"] = executor.submit(fetch_latest_news)
                    console.print("  Fetching news in the background…")

            elif action == "ask":
                if "consult" in pending:
                    console.print("  A consultation is already pending; use 'answer' to wait for it.")
                    continue
                prompt = console.input("[bold]Question: [/bold]").strip()
                if not prompt:
                    continue
                pending["consult"] = executor.submit(consult_or_fallback, prompt, extra_context)
                console.print("  Consulting in the background…")

            elif action == "answer":
                if not pending:
                    console.print("  Nothing pending.")
                _drain(pending, board, wait=True)

            elif action == "links":
                display_links()

            else:
                err_console.print(f"  Unknown action '{action}'.")
    finally:
        if any(not future.done() for future in pending.values()):
            console.print("  Waiting for the AI request in flight to finish or time out…")
        executor.shutdown(wait=False, cancel_futures=True)


# ──────────────────────────────────────────────────────────────────────────────
# Click entry point
# ──────────────────────────────────────────────────────────────────────────────

@click.command()
@click.option(
    "--data-dir", "data_directory", type=click.Path(file_okay=False, path_type=Path),
    default=None, help="Where todos, schedules and news are kept (default: ~/.loan_partner)",
)
@click.option(
    "--context-file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None, help="Plain-text lending guidance passed to the AI consultant",
)
@click.option("--fetch-news/--no-fetch-news", default=True, show_default=True,
              help="Fetch news on start when none is cached")
@click.option("--verbose", is_flag=True, help="Log mutations and warnings")
def main(
    data_directory: Optional[Path],
    context_file: Optional[Path],
    fetch_news: bool,
    verbose: bool,
) -> None:
    """NH Loan Partner — collateral loan-limit dashboard.

    AI requests run in the background. Exiting waits for one that is already
    in flight, for at most its timeout (15 s for news, 30 s for a consultation).
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    console.print(Panel("[bold green]NH 여신 파트너[/bold green] · Loan Partner", expand=False))

    extra_context = ""
    if context_file is not None:
        try:
            extra_context = context_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            err_console.print(f"Could not read {context_file}: {exc}")

    board = WidgetBoard(LocalStore(data_directory or data_dir()))
    session = LoanSession()

    try:
        interactive_loop(session, board, extra_context, fetch_news)
    except (KeyboardInterrupt, EOFError):
        console.print("\nSession ended.")

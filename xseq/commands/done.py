"""Komenda: xseq done — oznaczenie zadania jako wykonanego."""

from __future__ import annotations

import argparse
from typing import cast

from rich.console import Console

from procedure_model import ElementKind, ProcedureError, Task, format_element_id
from xseq._load import add_source_arguments, load_session, parse_id, save_session

console = Console()


def run(args: argparse.Namespace) -> None:
    task_id = parse_id(args.task_id)
    session = load_session(args)

    try:
        next_id = session.mark_task_done(task_id)
    except ProcedureError as e:
        console.print(f"[red]Błąd:[/red] {e}")
        raise SystemExit(1)

    console.print(f"[green]Wykonane:[/green] {format_element_id(task_id)}")
    save_session(session, args)

    if next_id is not None:
        task = cast(Task, session.element(next_id))
        console.print(f"Następne: [bold cyan]{format_element_id(next_id)}[/bold cyan]  {task.text}")
    else:
        console.print("[dim]Brak kolejnych zadań w tej grupie.[/dim]")

    if session.is_name_group_done(task_id):
        step_id = session.ancestor_of_kind(task_id, ElementKind.STEP)
        if session.is_procedure_done():
            console.print("[bold green]Procedura ukończona.[/bold green]")
        elif session.is_section_done(task_id):
            console.print("[green]Sekcja ukończona.[/green]")
        elif session.is_step_done(task_id):
            console.print(f"[green]Krok {format_element_id(step_id)} ukończony.[/green]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "done",
        help="Oznacza zadanie jako wykonane i pokazuje następne.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Oznacza zadanie jako wykonane (idempotentnie) i wypisuje następne zadanie
tego samego uczestnika w tej samej grupie. Z --db stan jest zapisywany
w bazie, żeby widzieli go pozostali uczestnicy.

Przykłady:
  xseq done upgrade.xml n4
  xseq done upgrade.xml n4 --db --key upgrade-2024
        """,
    )
    add_source_arguments(p)
    p.add_argument(
        "task_id",
        metavar="ID",
        help="Identyfikator zadania, np. n4.",
    )
    p.set_defaults(func=run)

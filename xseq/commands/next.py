"""Komenda: xseq next — następne niewykonane zadanie uczestnika."""

from __future__ import annotations

import argparse
from typing import cast

from rich.console import Console

from procedure_model import ProcedureError, Task, format_element_id
from xseq._load import add_source_arguments, default_who, load_session, parse_id

console = Console()


def run(args: argparse.Namespace) -> None:
    who = default_who(args)
    if not who:
        console.print("[red]Podaj uczestnika: --who albo zmienna XSEQ_WHO.[/red]")
        raise SystemExit(1)

    session = load_session(args)
    scope = parse_id(args.scope) if args.scope else None

    try:
        task_id = session.next_open_task(who, scope)
    except ProcedureError as e:
        console.print(f"[red]Błąd:[/red] {e}")
        raise SystemExit(1)

    if task_id is None:
        console.print(f"[green]Brak niewykonanych zadań dla [bold]{who}[/bold].[/green]")
        return

    task = cast(Task, session.element(task_id))
    console.print(f"[bold cyan]{format_element_id(task_id)}[/bold cyan]  {task.text}")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "next",
        help="Pokazuje następne niewykonane zadanie uczestnika.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wyszukuje (w kolejności dokumentu) pierwsze niewykonane zadanie uczestnika,
w całej procedurze albo w podanym zakresie (sekcja / krok / grupa).

Przykłady:
  xseq next upgrade.xml --who joe
  XSEQ_WHO=fred xseq next upgrade.xml --scope n2 --db
        """,
    )
    add_source_arguments(p)
    p.add_argument(
        "--who",
        metavar="UCZESTNIK",
        default=None,
        help="Uczestnik (domyślnie: $XSEQ_WHO).",
    )
    p.add_argument(
        "--scope",
        metavar="ID",
        default=None,
        help="Zakres wyszukiwania, np. n2 (domyślnie: cała procedura).",
    )
    p.set_defaults(func=run)

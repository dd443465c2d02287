"""Komenda: xseq tasks — listowanie zadań procedury (opcjonalnie jednego uczestnika)."""

from __future__ import annotations

import argparse
from typing import cast

from rich.console import Console
from rich.table import Table
from rich import box
from rich.text import Text

from procedure_model import ElementKind, Step, Task, format_element_id
from sequencer import descendants
from xseq._load import add_source_arguments, default_who, load_session

console = Console()


def run(args: argparse.Namespace) -> None:
    session = load_session(args)
    who = default_who(args)
    table_ = session.table

    rows = [
        t for t in descendants(table_, session.root, ElementKind.TASK)
        if who is None or session.is_task_mine(t, who)
    ]
    if not rows:
        suffix = f" dla [bold]{who}[/bold]" if who else ""
        console.print(f"[yellow]Brak zadań{suffix}.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("ID",     no_wrap=True, style="bold cyan")
    table.add_column("KROK",   no_wrap=True)
    table.add_column("KTO",    no_wrap=True)
    table.add_column("STAN",   no_wrap=True)
    table.add_column("ZADANIE", no_wrap=False, max_width=80)

    for task_id in rows:
        task = cast(Task, session.element(task_id))
        # zadanie zawsze leży pod krokiem
        step_id = session.ancestor_of_kind(task_id, ElementKind.STEP)
        step = cast(Step, session.element(step_id))
        step_txt = step.num or format_element_id(step_id)
        state = Text("✔", style="green") if task.done else Text("·", style="dim")
        table.add_row(
            format_element_id(task_id),
            step_txt,
            session.assignee_of(task_id) or "-",
            state,
            task.text,
        )

    console.print()
    console.print(table)
    done = sum(1 for t in rows if session.is_task_done(t))
    console.print(f"  [dim]{done}/{len(rows)} wykonanych[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "tasks",
        help="Listuje zadania procedury (wszystkie lub jednego uczestnika).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Listuje zadania w kolejności dokumentu z identyfikatorem, uczestnikiem i stanem.

Przykłady:
  xseq tasks upgrade.xml
  xseq tasks upgrade.xml --who joe --db
        """,
    )
    add_source_arguments(p)
    p.add_argument(
        "--who",
        metavar="UCZESTNIK",
        default=None,
        help="Tylko zadania tego uczestnika (domyślnie: $XSEQ_WHO lub wszyscy).",
    )
    p.set_defaults(func=run)

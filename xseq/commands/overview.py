"""Komenda: xseq overview — przegląd sekcji i kroków procedury ze stanem ukończenia."""

from __future__ import annotations

import argparse
from typing import cast

from rich.console import Console
from rich.table import Table
from rich import box
from rich.text import Text

from procedure_model import Section, Step, format_element_id
from sequencer import ProcedureSession
from xseq._load import add_source_arguments, load_session

console = Console()


def _state(session: ProcedureSession, element_id: int) -> Text:
    if session.is_done(element_id):
        return Text("gotowe", style="green")
    done, _ = session.progress(element_id)
    if done:
        return Text("w toku", style="yellow")
    return Text("—", style="dim")


def _show_table(session: ProcedureSession) -> None:
    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        expand=False,
    )
    table.add_column("ID",     no_wrap=True, style="dim")
    table.add_column("NR",     justify="right", no_wrap=True)
    table.add_column("TYTUŁ",  no_wrap=False, max_width=70)
    table.add_column("POSTĘP", justify="right", no_wrap=True)
    table.add_column("STAN",   no_wrap=True)

    for section_id in session.sections():
        section = cast(Section, session.element(section_id))
        title = Text(section.title or "(bez tytułu)", style="bold")
        if section.precis:
            title.append("\n" + section.precis, style="italic dim")
        done, total = session.progress(section_id)
        table.add_row(
            format_element_id(section_id),
            section.num,
            title,
            f"{done}/{total}",
            _state(session, section_id),
        )
        for step_id in session.table.children(section_id):
            step = cast(Step, session.element(step_id))
            done, total = session.progress(step_id)
            table.add_row(
                format_element_id(step_id),
                step.num,
                "  " + (step.title or "(bez tytułu)"),
                f"{done}/{total}",
                _state(session, step_id),
            )

    console.print()
    if session.document.title:
        console.print(f"[bold]{session.document.title}[/bold]")
    console.print(table)
    done, total = session.progress(session.root)
    status = "[green]procedura ukończona[/green]" if session.is_procedure_done() else "w toku"
    console.print(f"  [dim]{done}/{total} zadań[/dim] — {status}\n")


def run(args: argparse.Namespace) -> None:
    session = load_session(args)
    if not session.sections():
        console.print("[yellow]Procedura nie zawiera sekcji.[/yellow]")
        return
    _show_table(session)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "overview",
        help="Przegląd sekcji i kroków procedury ze stanem ukończenia.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wyświetla sekcje (z numerem, tytułem i streszczeniem) oraz ich kroki,
z liczbą wykonanych zadań.

Przykłady:
  xseq overview upgrade.xml
  xseq overview upgrade.xml --db
  xseq overview --url http://intranet/procedures/upgrade.xml
        """,
    )
    add_source_arguments(p)
    p.set_defaults(func=run)

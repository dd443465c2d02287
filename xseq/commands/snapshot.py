"""Komendy: xseq snapshot / xseq apply-snapshot — migawki stanu zadań (JSON)."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from rich.console import Console

from procedure_model import ProcedureError, format_element_id
from sequencer import Snapshot
from xseq._load import add_source_arguments, load_session, save_session

console = Console()


# ---------------------------------------------------------------------------
# snapshot
# ---------------------------------------------------------------------------

def run_snapshot(args: argparse.Namespace) -> None:
    session = load_session(args)
    data = json.dumps(session.snapshot().to_dict(), ensure_ascii=False, indent=2)

    if args.out:
        out_path = Path(args.out)
        out_path.write_text(data, encoding="utf-8")
        console.print(f"[green]JSON:[/green] {out_path}")
    else:
        print(data)


# ---------------------------------------------------------------------------
# apply-snapshot
# ---------------------------------------------------------------------------

def run_apply(args: argparse.Namespace) -> None:
    snap_path = Path(args.snapshot_file)
    if not snap_path.exists():
        console.print(f"[red]Plik nie istnieje:[/red] {snap_path}")
        raise SystemExit(1)

    try:
        snap = Snapshot.from_dict(json.loads(snap_path.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, ValueError) as e:
        console.print(f"[red]Nieprawidłowa migawka:[/red] {e}")
        raise SystemExit(1)

    session = load_session(args)
    try:
        flipped = session.apply_snapshot(snap)
    except ProcedureError as e:
        console.print(f"[red]Nie można zastosować migawki:[/red] {e}")
        raise SystemExit(1)

    if flipped:
        ids = ", ".join(format_element_id(i) for i in flipped)
        console.print(f"[green]Oznaczono jako wykonane:[/green] {ids}")
    else:
        console.print("[dim]Migawka nie zmienia stanu zadań.[/dim]")
    save_session(session, args)


# ---------------------------------------------------------------------------
# Rejestracja parserów
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "snapshot",
        help="Wypisuje migawkę stanu zadań (JSON).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wypisuje migawkę (fingerprint + pary id/done dla wszystkich zadań),
gotową do przesłania innym uczestnikom.

Przykłady:
  xseq snapshot upgrade.xml --db
  xseq snapshot upgrade.xml --out stan.json
        """,
    )
    add_source_arguments(p)
    p.add_argument(
        "--out",
        metavar="PLIK.json",
        default=None,
        help="Zapisz migawkę do pliku zamiast na stdout.",
    )
    p.set_defaults(func=run_snapshot)

    p = subparsers.add_parser(
        "apply-snapshot",
        help="Dokłada do procedury flagi done z migawki JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Odtwarza flagi done z migawki w procedurze (bez zmiany identyfikatorów).
Flagi są jednokierunkowe — migawka nie cofa wykonanych zadań.

Przykłady:
  xseq apply-snapshot upgrade.xml stan.json --db
        """,
    )
    add_source_arguments(p)
    p.add_argument(
        "snapshot_file",
        metavar="MIGAWKA.json",
        help="Plik migawki (wynik xseq snapshot).",
    )
    p.set_defaults(func=run_apply)

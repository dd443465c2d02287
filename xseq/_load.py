"""Wspólne dla komend: źródło procedury, opcjonalny stan z bazy, zapis stanu."""

from __future__ import annotations

import argparse
import os
from pathlib import Path

import requests
from rich.console import Console

from procedure_model import ElementId, MalformedDocument, ProcedureError, parse_element_id
from procedure_xml import parse_procedure_file, parse_procedure_url
from sequencer import ProcedureSession

console = Console()


def add_source_arguments(p: argparse.ArgumentParser, db: bool = True) -> None:
    """Rejestruje argumenty źródła procedury (plik / --url) oraz --db / --key."""
    p.add_argument(
        "procedure_file",
        metavar="PROCEDURA.xml",
        nargs="?",
        default=None,
        help="Ścieżka do pliku XML procedury.",
    )
    p.add_argument(
        "--url",
        metavar="URL",
        default=None,
        help="Pobierz procedurę z URL zamiast z pliku.",
    )
    if db:
        p.add_argument(
            "--db",
            action="store_true",
            help="Wczytaj (i zapisz) stan zadań z bazy PostgreSQL.",
        )
        p.add_argument(
            "--key",
            metavar="KLUCZ",
            default=None,
            help="Klucz procedury w bazie (domyślnie: nazwa pliku bez .xml).",
        )
        p.add_argument(
            "--reset",
            action="store_true",
            help="Z --db: porzuć w bazie stan innej wersji dokumentu zapisany pod tym kluczem.",
        )


def default_who(args: argparse.Namespace) -> str | None:
    """Uczestnik z --who lub ze zmiennej XSEQ_WHO."""
    return getattr(args, "who", None) or os.getenv("XSEQ_WHO") or None


def procedure_key(args: argparse.Namespace) -> str:
    if getattr(args, "key", None):
        return args.key
    if args.procedure_file:
        return Path(args.procedure_file).stem
    return args.url


def parse_id(text: str) -> ElementId:
    try:
        return parse_element_id(text)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)


def load_session(args: argparse.Namespace) -> ProcedureSession:
    """Wczytuje procedurę; z --db dokłada zapisany w bazie stan zadań."""
    if bool(args.procedure_file) == bool(args.url):
        console.print("[red]Podaj dokładnie jedno źródło: PROCEDURA.xml albo --url.[/red]")
        raise SystemExit(1)

    try:
        if args.url:
            document = parse_procedure_url(args.url)
        else:
            path = Path(args.procedure_file)
            if not path.exists():
                console.print(f"[red]Plik nie istnieje:[/red] {path}")
                raise SystemExit(1)
            document = parse_procedure_file(path)
        session = ProcedureSession(document)
    except MalformedDocument as e:
        console.print(f"[red]Nieprawidłowy dokument procedury:[/red] {e}")
        raise SystemExit(1)
    except requests.RequestException as e:
        console.print(f"[red]Błąd pobierania procedury:[/red] {e}")
        raise SystemExit(1)

    if getattr(args, "db", False):
        _merge_from_db(session, procedure_key(args), getattr(args, "reset", False))
    return session


def _merge_from_db(session: ProcedureSession, key: str, reset: bool = False) -> None:
    """
    Dokłada do sesji stan zadań zapisany w bazie.

    Gdy pod kluczem leży stan innej wersji dokumentu, komenda jest przerywana
    (bez --reset), żeby kolejny zapis nie nadpisał cudzego postępu.
    """
    from xseq._db import get_connection
    from xseq._store import load_snapshot, stored_fingerprints

    fingerprint = session.table.fingerprint
    try:
        conn = get_connection()
    except Exception as e:
        console.print(f"[red]Błąd połączenia z bazą:[/red] {e}")
        raise SystemExit(1)

    with conn:
        foreign = [fp for fp in stored_fingerprints(conn, key) if fp != fingerprint]
        stored = load_snapshot(conn, key, fingerprint)
    conn.close()

    if foreign and not reset:
        console.print(
            f"[red]W bazie pod kluczem [bold]{key}[/bold] zapisano stan innej wersji "
            f"procedury[/red] (fingerprint {foreign[0][:12]}). "
            "Użyj innego --key albo --reset, żeby go porzucić."
        )
        raise SystemExit(1)

    if stored is None:
        return
    try:
        session.apply_snapshot(stored)
    except ProcedureError as e:
        console.print(f"[red]Nie można zastosować stanu z bazy dla [bold]{key}[/bold]:[/red] {e}")
        raise SystemExit(1)


def save_session(session: ProcedureSession, args: argparse.Namespace) -> None:
    """Zapisuje migawkę stanu zadań do bazy (tylko z --db)."""
    if not getattr(args, "db", False):
        return
    from xseq._db import get_connection
    from xseq._store import save_snapshot

    key = procedure_key(args)
    try:
        conn = get_connection()
    except Exception as e:
        console.print(f"[red]Błąd połączenia z bazą:[/red] {e}")
        raise SystemExit(1)

    n = save_snapshot(conn, key, session.snapshot(), reset=getattr(args, "reset", False))
    conn.close()
    console.print(f"[green]DB:[/green] zapisano stan {n} zadań dla [cyan]{key}[/cyan]")

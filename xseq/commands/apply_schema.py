"""Komenda: xseq apply-schema — aplikuje schema.sql pakietu xseq do bazy danych."""

from __future__ import annotations

import argparse
import pathlib

from rich.console import Console

from xseq._db import get_connection

console = Console()

# schemat jest instalowany razem z pakietem (package-data)
SCHEMA_PATH = pathlib.Path(__file__).resolve().parent.parent / "schema.sql"


def _split_statements(sql: str) -> list[str]:
    """
    Dzieli SQL na pojedyncze instrukcje zakończone średnikiem na końcu linii.

    Linie komentarzy (--) przed instrukcją są do niej dołączane; puste
    wyniki i same komentarze są pomijane.
    """
    stmts: list[str] = []
    buf:   list[str] = []

    for line in sql.splitlines(keepends=True):
        buf.append(line)
        if line.rstrip().endswith(";"):
            stmts.append("".join(buf).strip())
            buf = []

    remaining = "".join(buf).strip()
    if remaining:
        stmts.append(remaining)

    return [s for s in stmts if _has_code(s)]


def _has_code(stmt: str) -> bool:
    return any(
        line.strip() and not line.strip().startswith("--")
        for line in stmt.splitlines()
    )


def run(args: argparse.Namespace) -> None:
    if not SCHEMA_PATH.exists():
        console.print(f"[red]Brak pliku schematu:[/red] {SCHEMA_PATH}")
        raise SystemExit(1)

    sql = SCHEMA_PATH.read_text(encoding="utf-8")

    try:
        conn = get_connection()
    except Exception as e:
        console.print(f"[red]Błąd połączenia z bazą:[/red] {e}")
        raise SystemExit(1)

    # schema.sql jest idempotentny (IF NOT EXISTS)
    conn.autocommit = True
    stmts = _split_statements(sql)
    try:
        with conn.cursor() as cur:
            for stmt in stmts:
                cur.execute(stmt)
    except Exception as e:
        console.print(f"[red]Błąd wykonania schematu:[/red] {e}")
        conn.close()
        raise SystemExit(1)

    conn.close()
    console.print(f"[green]Schemat zastosowany:[/green] {SCHEMA_PATH} ({len(stmts)} instrukcji)")
    console.print("[dim]Gotowe.[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "apply-schema",
        help="Aplikuje schema.sql pakietu xseq do bazy danych (idempotentne).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wykonuje plik schema.sql pakietu xseq przeciwko skonfigurowanej bazie PostgreSQL
(zmienne PGHOST, PGPORT, PGDATABASE, PGUSER, PGPASSWORD).

Wszystkie instrukcje używają IF NOT EXISTS — bezpieczne do wielokrotnego uruchomienia.

Przykład:
  xseq apply-schema
        """,
    )
    p.set_defaults(func=run)

"""
xseq — narzędzie CLI do prowadzenia procedur.

Użycie:
  xseq <komenda> [opcje]

Komendy:
  overview        Przegląd sekcji i kroków procedury ze stanem ukończenia.
  tasks           Listuje zadania procedury (wszystkie lub jednego uczestnika).
  next            Pokazuje następne niewykonane zadanie uczestnika.
  done            Oznacza zadanie jako wykonane i pokazuje następne.
  snapshot        Wypisuje migawkę stanu zadań (JSON).
  apply-snapshot  Dokłada do procedury flagi done z migawki JSON.
  apply-schema    Aplikuje schema.sql pakietu xseq do bazy danych (idempotentne).
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252 — wymuszamy UTF-8, żeby polskie znaki
# w tekstach pomocy argparse były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from xseq import __version__
from xseq.commands import overview as cmd_overview
from xseq.commands import tasks as cmd_tasks
from xseq.commands import next as cmd_next
from xseq.commands import done as cmd_done
from xseq.commands import snapshot as cmd_snapshot
from xseq.commands import apply_schema as cmd_apply_schema


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xseq",
        description="xseq — prowadzenie procedur krok po kroku.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"xseq {__version__}"
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_overview.add_parser(subparsers)
    cmd_tasks.add_parser(subparsers)
    cmd_next.add_parser(subparsers)
    cmd_done.add_parser(subparsers)
    cmd_snapshot.add_parser(subparsers)
    cmd_apply_schema.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()

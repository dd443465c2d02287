"""
procedure_model/elements.py — warianty elementów dokumentu procedury.

Hierarchia jest ścisła (cztery poziomy + liść):

  Procedure ⊇ Section ⊇ Step ⊇ NameGroup ⊇ Task

Jedynym polem zmienianym w trakcie sesji jest Task.done (tylko False → True).
Stan ukończenia poziomów wyższych nie jest przechowywany — liczy go
sequencer.completion przy każdym zapytaniu.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar

# ---------------------------------------------------------------------------
# Aliasy typów
# ---------------------------------------------------------------------------

# Indeks elementu w arenie IdentifierTable; korzeń (Procedure) ma zawsze 0.
type ElementId = int


# ---------------------------------------------------------------------------
# ElementKind
# ---------------------------------------------------------------------------

class ElementKind(StrEnum):
    """Rodzaj elementu strukturalnego. Wartości = nazwy tagów XML."""
    PROCEDURE = "procedure"
    SECTION   = "section"
    STEP      = "step"
    NAME      = "name"
    TASK      = "task"


# ---------------------------------------------------------------------------
# Warianty
# ---------------------------------------------------------------------------

@dataclass(slots=True, eq=False)
class Task:
    """
    Atomowa jednostka pracy (liść).

    - text: opis zadania
    - done: jedyna przechowywana flaga ukończenia
    """
    kind: ClassVar[ElementKind] = ElementKind.TASK

    text: str = ""
    done: bool = False

    @property
    def children(self) -> list:
        return []


@dataclass(slots=True, eq=False)
class NameGroup:
    """
    Przydział zadań jednego uczestnika w ramach kroku.

    - who:   token uczestnika (porównywany dokładnie, z rozróżnianiem wielkości liter)
    - tasks: zadania w kolejności dokumentu
    """
    kind: ClassVar[ElementKind] = ElementKind.NAME

    who: str
    tasks: list[Task] = field(default_factory=list)

    @property
    def children(self) -> list[Task]:
        return self.tasks


@dataclass(slots=True, eq=False)
class Step:
    """Krok: numer porządkowy, tytuł, grupy uczestników."""
    kind: ClassVar[ElementKind] = ElementKind.STEP

    num: str = ""
    title: str = ""
    names: list[NameGroup] = field(default_factory=list)

    @property
    def children(self) -> list[NameGroup]:
        return self.names


@dataclass(slots=True, eq=False)
class Section:
    """
    Sekcja: grupa powiązanych kroków.

    - num:    numer porządkowy do wyświetlenia (np. "3")
    - title:  tytuł
    - precis: opcjonalne streszczenie (białe znaki już znormalizowane)
    """
    kind: ClassVar[ElementKind] = ElementKind.SECTION

    num: str = ""
    title: str = ""
    precis: str | None = None
    steps: list[Step] = field(default_factory=list)

    @property
    def children(self) -> list[Step]:
        return self.steps


@dataclass(slots=True, eq=False)
class Procedure:
    """Cały dokument procedury (runbook)."""
    kind: ClassVar[ElementKind] = ElementKind.PROCEDURE

    title: str = ""
    sections: list[Section] = field(default_factory=list)

    @property
    def children(self) -> list[Section]:
        return self.sections


type Element = Procedure | Section | Step | NameGroup | Task

# Oczekiwany typ dzieci dla każdego wariantu.
CHILD_TYPE: dict[ElementKind, type | None] = {
    ElementKind.PROCEDURE: Section,
    ElementKind.SECTION:   Step,
    ElementKind.STEP:      NameGroup,
    ElementKind.NAME:      Task,
    ElementKind.TASK:      None,
}


# ---------------------------------------------------------------------------
# Zapis identyfikatorów dla ludzi
# ---------------------------------------------------------------------------

_ID_RE = re.compile(r"^n?(\d+)$")


def format_element_id(element_id: ElementId) -> str:
    """4 → "n4"."""
    return f"n{element_id}"


def parse_element_id(text: str) -> ElementId:
    """
    Parsuje identyfikator w postaci "n4" lub "4".

    Raises:
        ValueError jeśli format jest nieprawidłowy.
    """
    m = _ID_RE.match(text.strip())
    if not m:
        raise ValueError(f"Nieprawidłowy identyfikator elementu: '{text}'")
    return int(m.group(1))

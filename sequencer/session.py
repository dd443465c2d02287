"""
sequencer/session.py — ProcedureSession: właściciel jednego zaindeksowanego drzewa.

Sesja indeksuje dokument raz, w konstruktorze. Wczytanie innej procedury
oznacza nową sesję (nowa przestrzeń identyfikatorów). Kolaboranci (UI,
warstwa synchronizacji) dostają referencję do sesji zamiast sięgać do
stanu globalnego.

Sesja jest jednowątkowa i nie ma blokad: warstwa współpracy musi
serializować wywołania mark_task_done przed dotarciem tutaj.
"""

from __future__ import annotations

from procedure_model import Element, ElementId, ElementKind, Procedure

from . import assignment, completion, navigation, snapshot
from .indexer import IdentifierTable, index
from .snapshot import Snapshot


class ProcedureSession:
    """Fasada nad IdentifierTable i czystymi funkcjami sequencera."""

    def __init__(self, document: Procedure) -> None:
        self.table: IdentifierTable = index(document)

    @property
    def document(self) -> Procedure:
        return self.table.document

    @property
    def root(self) -> ElementId:
        return self.table.root

    def element(self, element_id: ElementId) -> Element:
        return self.table.element(element_id)

    def kind(self, element_id: ElementId) -> ElementKind:
        return self.table.kind(element_id)

    def sections(self) -> tuple[ElementId, ...]:
        """Identyfikatory sekcji w kolejności dokumentu."""
        return self.table.children(self.table.root)

    # ------------------------------------------------------------------
    # Nawigacja
    # ------------------------------------------------------------------

    def ancestor_of_kind(self, element_id: ElementId, kind: ElementKind) -> ElementId | None:
        return navigation.ancestor_of_kind(self.table, element_id, kind)

    def first_task(self, scope_id: ElementId, assignee: str | None = None) -> ElementId | None:
        return navigation.first_task(self.table, scope_id, assignee)

    def next_sibling_of_kind(self, element_id: ElementId, kind: ElementKind) -> ElementId | None:
        return navigation.next_sibling_of_kind(self.table, element_id, kind)

    def next_step(self, step_id: ElementId) -> ElementId | None:
        return navigation.next_sibling_of_kind(self.table, step_id, ElementKind.STEP)

    def next_section(self, section_id: ElementId) -> ElementId | None:
        return navigation.next_sibling_of_kind(self.table, section_id, ElementKind.SECTION)

    def next_open_task(self, assignee: str, scope_id: ElementId | None = None) -> ElementId | None:
        """Pierwsze niewykonane zadanie uczestnika w zakresie (domyślnie cała procedura)."""
        scope = self.table.root if scope_id is None else scope_id
        candidates = (
            (scope,) if self.table.kind(scope) is ElementKind.TASK
            else navigation.descendants(self.table, scope, ElementKind.TASK)
        )
        for task_id in candidates:
            if (
                assignment.is_task_mine(self.table, task_id, assignee)
                and not completion.is_task_done(self.table, task_id)
            ):
                return task_id
        return None

    # ------------------------------------------------------------------
    # Ukończenie
    # ------------------------------------------------------------------

    def mark_task_done(self, task_id: ElementId) -> ElementId | None:
        return completion.mark_task_done(self.table, task_id)

    def is_task_done(self, task_id: ElementId) -> bool:
        return completion.is_task_done(self.table, task_id)

    def is_name_group_done(self, element_id: ElementId) -> bool:
        return completion.is_name_group_done(self.table, element_id)

    def is_step_done(self, element_id: ElementId) -> bool:
        return completion.is_step_done(self.table, element_id)

    def is_section_done(self, element_id: ElementId) -> bool:
        return completion.is_section_done(self.table, element_id)

    def is_procedure_done(self, element_id: ElementId | None = None) -> bool:
        return completion.is_procedure_done(
            self.table, self.table.root if element_id is None else element_id
        )

    def is_done(self, element_id: ElementId) -> bool:
        return completion.is_done(self.table, element_id)

    def progress(self, element_id: ElementId) -> tuple[int, int]:
        return completion.progress(self.table, element_id)

    # ------------------------------------------------------------------
    # Uczestnicy
    # ------------------------------------------------------------------

    def is_task_mine(self, task_id: ElementId, assignee: str) -> bool:
        return assignment.is_task_mine(self.table, task_id, assignee)

    def assignee_of(self, element_id: ElementId) -> str | None:
        return assignment.assignee_of(self.table, element_id)

    def assignees(self) -> list[str]:
        return assignment.assignees(self.table)

    # ------------------------------------------------------------------
    # Migawki
    # ------------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        return snapshot.take_snapshot(self.table)

    def apply_snapshot(self, snap: Snapshot) -> list[ElementId]:
        return snapshot.apply_snapshot(self.table, snap)

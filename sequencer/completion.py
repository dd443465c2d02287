"""
sequencer/completion.py — oznaczanie zadań i wyliczanie stanu ukończenia.

Flaga done istnieje tylko na Task. Ukończenie grupy <name>, kroku, sekcji
i całej procedury to koniunkcja flag wszystkich zadań-potomków, liczona
przy każdym zapytaniu (bez cache), więc nie może się zdezaktualizować.

Predykaty is_*_done przyjmują identyfikator z dowolnej głębokości: najpierw
rozwiązują go w górę do elementu docelowego rodzaju (resolve_scope).
"""

from __future__ import annotations

from procedure_model import ElementId, ElementKind, Task, WrongKind

from .indexer import IdentifierTable
from .navigation import descendants, next_sibling_of_kind, resolve_scope


def _task(table: IdentifierTable, task_id: ElementId) -> Task:
    element = table.element(task_id)
    if not isinstance(element, Task):
        raise WrongKind(task_id, ElementKind.TASK, element.kind)
    return element


# ---------------------------------------------------------------------------
# Zadania
# ---------------------------------------------------------------------------

def mark_task_done(table: IdentifierTable, task_id: ElementId) -> ElementId | None:
    """
    Oznacza zadanie jako wykonane i zwraca następne zadanie tego samego
    uczestnika w tej samej grupie <name> (niezależnie od jego stanu).

    Operacja idempotentna: ponowne oznaczenie nie jest błędem i zwraca
    ten sam wynik. Zadanie ma zawsze za rodzica swoją grupę <name>, więc
    następne rodzeństwo-zadanie nie wychodzi poza tę grupę.

    Raises:
        UnknownIdentifier, WrongKind (id nie wskazuje zadania)
    """
    _task(table, task_id).done = True
    return next_sibling_of_kind(table, task_id, ElementKind.TASK)


def is_task_done(table: IdentifierTable, task_id: ElementId) -> bool:
    """Przechowywana flaga zadania."""
    return _task(table, task_id).done


# ---------------------------------------------------------------------------
# Koniunkcja po poddrzewie
# ---------------------------------------------------------------------------

def _all_tasks_done(table: IdentifierTable, scope_id: ElementId) -> bool:
    # pusty zakres jest ukończony (vacuously true)
    return all(
        _task(table, t).done
        for t in descendants(table, scope_id, ElementKind.TASK)
    )


def is_done(table: IdentifierTable, element_id: ElementId) -> bool:
    """Stan ukończenia samego elementu: flaga dla zadania, koniunkcja dla reszty."""
    if table.kind(element_id) is ElementKind.TASK:
        return is_task_done(table, element_id)
    return _all_tasks_done(table, element_id)


def _is_scope_done(table: IdentifierTable, element_id: ElementId, kind: ElementKind) -> bool:
    return _all_tasks_done(table, resolve_scope(table, element_id, kind))


def is_name_group_done(table: IdentifierTable, element_id: ElementId) -> bool:
    return _is_scope_done(table, element_id, ElementKind.NAME)


def is_step_done(table: IdentifierTable, element_id: ElementId) -> bool:
    return _is_scope_done(table, element_id, ElementKind.STEP)


def is_section_done(table: IdentifierTable, element_id: ElementId) -> bool:
    return _is_scope_done(table, element_id, ElementKind.SECTION)


def is_procedure_done(table: IdentifierTable, element_id: ElementId) -> bool:
    return _is_scope_done(table, element_id, ElementKind.PROCEDURE)


def progress(table: IdentifierTable, element_id: ElementId) -> tuple[int, int]:
    """(wykonane, wszystkie) zadania w elemencie (zadanie liczy się samo)."""
    if table.kind(element_id) is ElementKind.TASK:
        return int(is_task_done(table, element_id)), 1
    tasks = [_task(table, t) for t in descendants(table, element_id, ElementKind.TASK)]
    return sum(1 for t in tasks if t.done), len(tasks)

"""sequencer/assignment.py — przypisanie zadań do uczestników."""

from __future__ import annotations

from typing import cast

from procedure_model import ElementId, ElementKind, NameGroup, WrongKind

from .indexer import IdentifierTable


def assignee_of(table: IdentifierTable, element_id: ElementId) -> str | None:
    """Uczestnik (who) grupy <name> w elemencie lub powyżej; None dla poziomów wyższych."""
    current: ElementId | None = element_id
    while current is not None:
        if table.kind(current) is ElementKind.NAME:
            return cast(NameGroup, table.element(current)).who
        current = table.parent(current)
    return None


def is_task_mine(table: IdentifierTable, task_id: ElementId, assignee: str) -> bool:
    """
    Czy zadanie należy do uczestnika?

    Porównanie dokładne, z rozróżnianiem wielkości liter — tokeny uczestników
    są nieprzezroczyste, to nie są nazwy do wyświetlania.

    Raises:
        WrongKind gdy task_id nie wskazuje zadania.
    """
    actual = table.kind(task_id)
    if actual is not ElementKind.TASK:
        raise WrongKind(task_id, ElementKind.TASK, actual)
    return assignee_of(table, task_id) == assignee


def assignees(table: IdentifierTable) -> list[str]:
    """Lista uczestników w kolejności pierwszego wystąpienia w dokumencie."""
    seen: dict[str, None] = {}
    for group_id in table.ids_of_kind(ElementKind.NAME):
        seen.setdefault(cast(NameGroup, table.element(group_id)).who, None)
    return list(seen)

"""
sequencer/navigation.py — zapytania nawigacyjne po zaindeksowanym drzewie.

Publiczne API (wszystkie funkcje są czyste, bez stanu):
  ancestor_of_kind(table, id, kind)          -> id | None
  first_task(table, scope_id, assignee=None) -> id | None
  next_sibling_of_kind(table, id, kind)      -> id | None
  descendants(table, id, kind=None)          -> iterator id (kolejność dokumentu)
  resolve_scope(table, id, kind)             -> id  (id lub jego przodek danego rodzaju)

Nieznany identyfikator → UnknownIdentifier.
"""

from __future__ import annotations

from collections.abc import Iterator

from procedure_model import ElementId, ElementKind, WrongKind

from .assignment import is_task_mine
from .indexer import IdentifierTable


def ancestor_of_kind(
    table:      IdentifierTable,
    element_id: ElementId,
    kind:       ElementKind,
) -> ElementId | None:
    """
    Idzie w górę łańcucha rodziców aż do przodka danego rodzaju.

    Zwraca None dla korzenia lub gdy rodzaj nie występuje powyżej.
    Sam element nie jest brany pod uwagę (tylko przodkowie właściwi).
    """
    current = table.parent(element_id)
    while current is not None:
        if table.kind(current) is kind:
            return current
        current = table.parent(current)
    return None


def resolve_scope(
    table:      IdentifierTable,
    element_id: ElementId,
    kind:       ElementKind,
) -> ElementId:
    """
    Zwraca element_id jeśli sam jest rodzaju `kind`, w przeciwnym razie
    jego przodka tego rodzaju.

    Raises:
        WrongKind gdy rodzaj nie występuje ani w elemencie, ani powyżej
        (np. zapytanie o krok dla identyfikatora sekcji).
    """
    actual = table.kind(element_id)
    if actual is kind:
        return element_id
    found = ancestor_of_kind(table, element_id, kind)
    if found is None:
        raise WrongKind(element_id, kind, actual)
    return found


def descendants(
    table:      IdentifierTable,
    element_id: ElementId,
    kind:       ElementKind | None = None,
) -> Iterator[ElementId]:
    """Potomkowie elementu (bez niego samego) w kolejności dokumentu, opcjonalnie tylko danego rodzaju."""
    stack = list(reversed(table.children(element_id)))
    while stack:
        current = stack.pop()
        if kind is None or table.kind(current) is kind:
            yield current
        stack.extend(reversed(table.children(current)))


def first_task(
    table:    IdentifierTable,
    scope_id: ElementId,
    assignee: str | None = None,
) -> ElementId | None:
    """
    Pierwsze (w kolejności dokumentu) zadanie w zakresie scope_id.

    Jeśli podano assignee — tylko zadania, których grupa <name> ma
    who == assignee. Zadanie jako zakres jest swoim jedynym kandydatem.
    """
    if table.kind(scope_id) is ElementKind.TASK:
        candidates: Iterator[ElementId] = iter((scope_id,))
    else:
        candidates = descendants(table, scope_id, ElementKind.TASK)

    for task_id in candidates:
        if assignee is None or is_task_mine(table, task_id, assignee):
            return task_id
    return None


def next_sibling_of_kind(
    table:      IdentifierTable,
    element_id: ElementId,
    kind:       ElementKind,
) -> ElementId | None:
    """
    Następne rodzeństwo tego samego rodzaju (w obrębie wspólnego rodzica).

    None gdy element jest ostatnim rodzeństwem danego rodzaju, gdy jest
    korzeniem, albo gdy sam nie jest rodzaju `kind`.
    """
    parent = table.parent(element_id)
    if parent is None or table.kind(element_id) is not kind:
        return None

    siblings = [c for c in table.children(parent) if table.kind(c) is kind]
    pos = siblings.index(element_id)
    if pos + 1 < len(siblings):
        return siblings[pos + 1]
    return None

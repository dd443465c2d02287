"""
sequencer/indexer.py — nadawanie identyfikatorów elementom procedury.

index(document) przechodzi drzewo jednokrotnie w kolejności dokumentu
(pre-order), licząc WSZYSTKIE elementy strukturalne, i buduje
IdentifierTable:
  _elements: id -> element
  _ids:      id(element) -> id   (po tożsamości obiektu)
  _parents:  id -> id rodzica | None
  _children: id -> krotka id dzieci

Identyfikatory są gęste (0..N-1), korzeń dostaje 0. Po zbudowaniu tabela
jest tylko do odczytu — jedyną mutacją w sesji jest Task.done.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterator

from procedure_model import (
    CHILD_TYPE,
    Element,
    ElementId,
    ElementKind,
    MalformedDocument,
    NameGroup,
    Procedure,
    Task,
    UnknownIdentifier,
)


# ---------------------------------------------------------------------------
# IdentifierTable
# ---------------------------------------------------------------------------

class IdentifierTable:
    """
    Dwukierunkowe mapowanie identyfikator ↔ element dla jednego dokumentu.

    Atrybuty publiczne:
      root        — id korzenia (zawsze 0)
      document    — wczytany obiekt Procedure
      fingerprint — sha256 kształtu drzewa (rodzaje, rodzice, uczestnicy);
                    nie zależy od flag done ani tekstów
    """

    __slots__ = ("document", "root", "fingerprint", "_elements", "_ids", "_parents", "_children")

    def __init__(
        self,
        document:  Procedure,
        elements:  list[Element],
        parents:   list[ElementId | None],
        children:  list[tuple[ElementId, ...]],
    ) -> None:
        self.document = document
        self.root: ElementId = 0
        self._elements: tuple[Element, ...] = tuple(elements)
        self._parents: tuple[ElementId | None, ...] = tuple(parents)
        self._children: tuple[tuple[ElementId, ...], ...] = tuple(children)
        self._ids: dict[int, ElementId] = {id(e): i for i, e in enumerate(elements)}
        self.fingerprint: str = _fingerprint(self._elements, self._parents)

    # ------------------------------------------------------------------
    # Rozmiar / przynależność
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, element_id: object) -> bool:
        return (
            isinstance(element_id, int)
            and not isinstance(element_id, bool)
            and 0 <= element_id < len(self._elements)
        )

    def _check(self, element_id: ElementId) -> ElementId:
        if element_id not in self:
            raise UnknownIdentifier(element_id)
        return element_id

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def element(self, element_id: ElementId) -> Element:
        """Element o podanym identyfikatorze."""
        return self._elements[self._check(element_id)]

    def id_of(self, element: Element) -> ElementId:
        """Identyfikator elementu (po tożsamości obiektu, nie po równości)."""
        try:
            return self._ids[id(element)]
        except KeyError:
            raise UnknownIdentifier(element) from None

    def kind(self, element_id: ElementId) -> ElementKind:
        return self._elements[self._check(element_id)].kind

    def parent(self, element_id: ElementId) -> ElementId | None:
        """Id rodzica lub None dla korzenia."""
        return self._parents[self._check(element_id)]

    def children(self, element_id: ElementId) -> tuple[ElementId, ...]:
        """Id dzieci w kolejności dokumentu."""
        return self._children[self._check(element_id)]

    def ids(self) -> range:
        """Wszystkie identyfikatory w kolejności nadania."""
        return range(len(self._elements))

    def ids_of_kind(self, kind: ElementKind) -> Iterator[ElementId]:
        return (i for i, e in enumerate(self._elements) if e.kind is kind)

    def __repr__(self) -> str:
        return f"IdentifierTable({len(self)} elementów, fingerprint={self.fingerprint[:12]})"


def _fingerprint(
    elements: tuple[Element, ...],
    parents:  tuple[ElementId | None, ...],
) -> str:
    h = hashlib.sha256()
    for element, parent in zip(elements, parents):
        who = element.who if isinstance(element, NameGroup) else ""
        h.update(f"{element.kind}\t{'' if parent is None else parent}\t{who}\n".encode("utf-8"))
    return h.hexdigest()


# ---------------------------------------------------------------------------
# Walidacja atrybutów
# ---------------------------------------------------------------------------

def _check_attributes(element: Element, path: str) -> None:
    if isinstance(element, NameGroup):
        if not isinstance(element.who, str) or not element.who:
            raise MalformedDocument("Grupa <name> bez wymaganego atrybutu 'who'", path)
    elif isinstance(element, Task):
        if not isinstance(element.done, bool):
            raise MalformedDocument(
                f"Flaga done zadania musi być typu bool, otrzymano {type(element.done).__name__}",
                path,
            )


# ---------------------------------------------------------------------------
# index
# ---------------------------------------------------------------------------

def index(document: Procedure) -> IdentifierTable:
    """
    Nadaje identyfikatory wszystkim elementom dokumentu (pre-order).

    Raises:
        MalformedDocument gdy zagnieżdżenie nie odpowiada sekwencji
        Procedure ⊇ Section ⊇ Step ⊇ NameGroup ⊇ Task, gdy brakuje
        wymaganego atrybutu albo gdy ten sam obiekt występuje w drzewie dwukrotnie.
    """
    if not isinstance(document, Procedure):
        raise MalformedDocument(
            f"Korzeń dokumentu musi być typu Procedure, otrzymano {type(document).__name__}",
            "/",
        )

    elements: list[Element] = []
    parents:  list[ElementId | None] = []
    children: list[list[ElementId]] = []
    seen:     set[int] = set()

    # stos: (element, id rodzica, ścieżka)
    stack: list[tuple[Element, ElementId | None, str]] = [(document, None, "/procedure")]
    while stack:
        element, parent_id, path = stack.pop()
        if id(element) in seen:
            raise MalformedDocument("Ten sam element występuje w drzewie więcej niż raz", path)
        seen.add(id(element))
        _check_attributes(element, path)

        element_id = len(elements)
        elements.append(element)
        parents.append(parent_id)
        children.append([])
        if parent_id is not None:
            children[parent_id].append(element_id)

        expected = CHILD_TYPE[element.kind]
        kids = element.children
        if expected is None:
            continue
        for pos, child in enumerate(kids):
            if not isinstance(child, expected):
                raise MalformedDocument(
                    f"Oczekiwano elementu '{expected.kind}', otrzymano {type(child).__name__}",
                    f"{path}/{expected.kind}[{pos}]",
                )
        # odwrotnie, żeby pierwsze dziecko zostało zdjęte ze stosu jako pierwsze
        for pos in range(len(kids) - 1, -1, -1):
            stack.append((kids[pos], element_id, f"{path}/{expected.kind}[{pos}]"))

    return IdentifierTable(
        document,
        elements,
        parents,
        [tuple(c) for c in children],
    )

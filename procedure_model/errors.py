"""
procedure_model/errors.py — wyjątki modelu procedury.

MalformedDocument  — naruszenie zagnieżdżenia lub brak wymaganego atrybutu
                     (wykrywane tylko przy ładowaniu; ładowanie jest przerywane)
UnknownIdentifier  — identyfikator spoza bieżącej tabeli (błąd wywołującego)
WrongKind          — operacja wymaga innego rodzaju elementu (błąd wywołującego)
"""

from __future__ import annotations

from .elements import ElementId, ElementKind, format_element_id


class ProcedureError(Exception):
    """Wspólna baza wyjątków modelu procedury."""


class MalformedDocument(ProcedureError):
    """Dokument nie spełnia oczekiwanej struktury Procedure/Section/Step/Name/Task."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(f"{message} (w {path})" if path else message)


class UnknownIdentifier(ProcedureError):
    """Identyfikator nie występuje w tabeli identyfikatorów."""

    def __init__(self, element_id: object) -> None:
        self.element_id = element_id
        shown = format_element_id(element_id) if isinstance(element_id, int) else repr(element_id)
        super().__init__(f"Nieznany identyfikator elementu: {shown}")


class WrongKind(ProcedureError):
    """Element ma inny rodzaj niż wymagany przez operację."""

    def __init__(
        self,
        element_id: ElementId,
        expected: ElementKind,
        actual: ElementKind,
    ) -> None:
        self.element_id = element_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Element {format_element_id(element_id)} jest typu '{actual}', "
            f"oczekiwano '{expected}'"
        )

"""
procedure_model — struktury danych dokumentu procedury xseq.

Użycie:
  from procedure_model import Procedure, Section, Step, NameGroup, Task, ...

Moduły:
  elements — ElementKind, ElementId, Procedure, Section, Step, NameGroup, Task,
             format_element_id, parse_element_id
  errors   — ProcedureError, MalformedDocument, UnknownIdentifier, WrongKind

Hierarchia (w kolejności dokumentu):
  procedure   → Procedure  (title)
  section     → Section    (num, title, precis)
  step        → Step       (num, title)
  name        → NameGroup  (who)
  task        → Task       (text, done)
"""

from .elements import (
    ElementId,
    ElementKind,
    Element,
    Procedure,
    Section,
    Step,
    NameGroup,
    Task,
    CHILD_TYPE,
    format_element_id,
    parse_element_id,
)
from .errors import (
    ProcedureError,
    MalformedDocument,
    UnknownIdentifier,
    WrongKind,
)

__all__ = [
    # elements
    "ElementId",
    "ElementKind",
    "Element",
    "Procedure",
    "Section",
    "Step",
    "NameGroup",
    "Task",
    "CHILD_TYPE",
    "format_element_id",
    "parse_element_id",
    # errors
    "ProcedureError",
    "MalformedDocument",
    "UnknownIdentifier",
    "WrongKind",
]

"""
sequencer/snapshot.py — migawka flag done dla warstwy współpracy.

Snapshot to para (fingerprint, [(id zadania, done), ...]) dla wszystkich
zadań w kolejności id. Warstwa współpracy porównuje migawki i przesyła je
innym uczestnikom; apply_snapshot odtwarza zdalne flagi w lokalnym drzewie
bez ponownego indeksowania — identyfikatory pozostają te same.

Format JSON::

    {
        "fingerprint": "9f2c…",
        "tasks": [
            {"id": 4, "done": true},
            {"id": 5, "done": false}
        ]
    }
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, cast

from procedure_model import ElementId, ElementKind, MalformedDocument, Task, WrongKind

from .indexer import IdentifierTable


@dataclass(frozen=True)
class TaskState:
    """Stan jednego zadania w migawce."""
    id:   ElementId
    done: bool


@dataclass(frozen=True)
class Snapshot:
    """Migawka flag done wszystkich zadań jednego dokumentu."""
    fingerprint: str
    tasks:       tuple[TaskState, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "fingerprint": self.fingerprint,
            "tasks": [{"id": t.id, "done": t.done} for t in self.tasks],
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Snapshot":
        """
        Buduje migawkę z już wczytanego słownika.

        Raises:
            ValueError gdy brakuje kluczy lub typy się nie zgadzają.
        """
        try:
            fingerprint = raw["fingerprint"]
            tasks = tuple(
                TaskState(id=t["id"], done=t["done"])
                for t in raw["tasks"]
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Nieprawidłowy format migawki: {e}") from e
        if not isinstance(fingerprint, str):
            raise ValueError("Nieprawidłowy format migawki: fingerprint musi być tekstem")
        for t in tasks:
            if isinstance(t.id, bool) or not isinstance(t.id, int) or not isinstance(t.done, bool):
                raise ValueError(f"Nieprawidłowy wpis migawki: {t}")
        return cls(fingerprint=fingerprint, tasks=tasks)


def take_snapshot(table: IdentifierTable) -> Snapshot:
    """Migawka wszystkich zadań w kolejności identyfikatorów."""
    states: list[TaskState] = []
    for task_id in table.ids_of_kind(ElementKind.TASK):
        task = cast(Task, table.element(task_id))
        states.append(TaskState(id=task_id, done=task.done))
    return Snapshot(fingerprint=table.fingerprint, tasks=tuple(states))


def apply_snapshot(table: IdentifierTable, snapshot: Snapshot) -> list[ElementId]:
    """
    Odtwarza zdalne flagi done w lokalnym drzewie.

    Flagi są jednokierunkowe: zdalne False nigdy nie kasuje lokalnego True.
    Cała migawka jest walidowana przed pierwszą zmianą (wszystko albo nic).

    Returns:
        Identyfikatory zadań, które właśnie zmieniły stan na wykonane.

    Raises:
        MalformedDocument  — migawka dotyczy innego dokumentu (inny fingerprint)
        UnknownIdentifier  — id spoza tabeli
        WrongKind          — id nie wskazuje zadania
    """
    if snapshot.fingerprint != table.fingerprint:
        raise MalformedDocument(
            "Migawka dotyczy innej procedury "
            f"(fingerprint {snapshot.fingerprint[:12]} ≠ {table.fingerprint[:12]})"
        )

    tasks: list[tuple[Task, TaskState]] = []
    for state in snapshot.tasks:
        element = table.element(state.id)
        if not isinstance(element, Task):
            raise WrongKind(state.id, ElementKind.TASK, element.kind)
        tasks.append((element, state))

    flipped: list[ElementId] = []
    for task, state in tasks:
        if state.done and not task.done:
            task.done = True
            flipped.append(state.id)
    return flipped

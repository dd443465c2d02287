"""
sequencer — silnik zapytań nad dokumentem procedury xseq.

Publiczne API:
  index(document)                          → IdentifierTable
  ProcedureSession(document)               właściciel jednego drzewa (fasada)

  ancestor_of_kind(table, id, kind)        → id | None
  first_task(table, scope_id, assignee)    → id | None
  next_sibling_of_kind(table, id, kind)    → id | None
  descendants(table, id, kind)             → iterator id
  resolve_scope(table, id, kind)           → id

  mark_task_done(table, id)                → następne zadanie | None
  is_task_done / is_name_group_done / is_step_done /
  is_section_done / is_procedure_done      → bool
  is_done(table, id), progress(table, id)

  is_task_mine(table, task_id, assignee)   → bool
  assignee_of(table, id), assignees(table)

  take_snapshot(table)                     → Snapshot
  apply_snapshot(table, snapshot)          → lista id zmienionych na done

Typowe użycie:
    from procedure_xml import parse_procedure_file
    from sequencer import ProcedureSession

    session = ProcedureSession(parse_procedure_file("upgrade.xml"))
    task_id = session.first_task(session.root, "joe")
    next_id = session.mark_task_done(task_id)
"""

from .indexer import IdentifierTable, index
from .navigation import (
    ancestor_of_kind,
    descendants,
    first_task,
    next_sibling_of_kind,
    resolve_scope,
)
from .completion import (
    is_done,
    is_name_group_done,
    is_procedure_done,
    is_section_done,
    is_step_done,
    is_task_done,
    mark_task_done,
    progress,
)
from .assignment import assignee_of, assignees, is_task_mine
from .snapshot import Snapshot, TaskState, apply_snapshot, take_snapshot
from .session import ProcedureSession

__all__ = [
    "IdentifierTable",
    "index",
    "ancestor_of_kind",
    "descendants",
    "first_task",
    "next_sibling_of_kind",
    "resolve_scope",
    "is_done",
    "is_name_group_done",
    "is_procedure_done",
    "is_section_done",
    "is_step_done",
    "is_task_done",
    "mark_task_done",
    "progress",
    "assignee_of",
    "assignees",
    "is_task_mine",
    "Snapshot",
    "TaskState",
    "apply_snapshot",
    "take_snapshot",
    "ProcedureSession",
]

import pytest

from procedure_model import NameGroup, Procedure, Section, Step, UnknownIdentifier, WrongKind
from sequencer import (
    index,
    is_done,
    is_name_group_done,
    is_procedure_done,
    is_section_done,
    is_step_done,
    is_task_done,
    mark_task_done,
    progress,
)


def test_task_siblings(table):
    assert mark_task_done(table, 4) == 5
    assert mark_task_done(table, 5) is None


def test_next_task_ignores_done_state(table):
    mark_task_done(table, 8)
    assert mark_task_done(table, 7) == 8


def test_mark_is_idempotent(table):
    first = mark_task_done(table, 4)
    second = mark_task_done(table, 4)
    assert first == second == 5
    assert is_task_done(table, 4)


def test_is_task_done(table):
    assert not is_task_done(table, 4)
    mark_task_done(table, 4)
    assert is_task_done(table, 4)
    assert not is_task_done(table, 5)


def test_is_name_done(table):
    assert not is_name_group_done(table, 4)
    assert not is_name_group_done(table, 5)
    mark_task_done(table, 4)
    assert not is_name_group_done(table, 4)
    assert not is_name_group_done(table, 5)
    mark_task_done(table, 5)
    assert is_name_group_done(table, 4)
    assert is_name_group_done(table, 5)
    assert is_name_group_done(table, 3)
    assert not is_name_group_done(table, 7)


def test_is_step_done(table):
    ids = (4, 5, 7, 8)
    assert not any(is_step_done(table, i) for i in ids)

    mark_task_done(table, 4)
    mark_task_done(table, 5)
    assert not any(is_step_done(table, i) for i in ids)

    mark_task_done(table, 7)
    assert not any(is_step_done(table, i) for i in ids)

    mark_task_done(table, 8)
    assert all(is_step_done(table, i) for i in ids)
    assert is_step_done(table, 2)
    assert not is_step_done(table, 9)


def test_section_and_procedure_done(table):
    for t in (4, 5, 7, 8):
        mark_task_done(table, t)
    assert not is_section_done(table, 4)
    assert not is_procedure_done(table, 4)

    mark_task_done(table, 11)
    for t in (4, 5, 7, 8, 11):
        assert is_section_done(table, t)
        assert is_procedure_done(table, t)
    assert is_procedure_done(table, 0)
    assert is_section_done(table, 1)


def test_completion_is_monotonic(table):
    seen_true: set[tuple[str, int]] = set()
    predicates = {
        "name": is_name_group_done,
        "step": is_step_done,
        "section": is_section_done,
        "procedure": is_procedure_done,
    }
    for t in (4, 5, 7, 8, 11):
        mark_task_done(table, t)
        for name, pred in predicates.items():
            for i in (4, 5, 7, 8, 11):
                if pred(table, i):
                    seen_true.add((name, i))
        for name, i in seen_true:
            assert predicates[name](table, i)
    assert ("procedure", 4) in seen_true


def test_completion_follows_flags_without_cache(table, sample):
    assert not is_name_group_done(table, 11)
    sample.sections[0].steps[1].names[0].tasks[0].done = True
    assert is_name_group_done(table, 11)


def test_empty_group_is_vacuously_done():
    table = index(Procedure(sections=[Section(steps=[Step(names=[NameGroup(who="nobody")])])]))
    assert is_name_group_done(table, 3)
    assert is_step_done(table, 3)
    assert is_procedure_done(table, 0)


def test_mark_wrong_kind(table):
    with pytest.raises(WrongKind) as exc:
        mark_task_done(table, 3)
    assert exc.value.element_id == 3
    with pytest.raises(WrongKind):
        is_task_done(table, 2)


def test_predicate_target_must_be_at_or_above(table):
    with pytest.raises(WrongKind):
        is_step_done(table, 1)
    with pytest.raises(WrongKind):
        is_name_group_done(table, 0)


def test_unknown_identifier(table):
    with pytest.raises(UnknownIdentifier):
        mark_task_done(table, 42)
    with pytest.raises(UnknownIdentifier):
        is_section_done(table, 42)


def test_is_done_and_progress(table):
    assert progress(table, 0) == (0, 5)
    mark_task_done(table, 7)
    assert progress(table, 6) == (1, 2)
    assert progress(table, 7) == (1, 1)
    assert is_done(table, 7)
    assert not is_done(table, 6)
    mark_task_done(table, 8)
    assert is_done(table, 6)
    assert not is_done(table, 2)

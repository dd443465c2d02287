import pytest

from procedure_model import (
    ElementKind,
    MalformedDocument,
    NameGroup,
    Procedure,
    Section,
    Step,
    Task,
    UnknownIdentifier,
)
from sequencer import index


def _count(doc: Procedure) -> int:
    n = 1
    for section in doc.sections:
        n += 1
        for step in section.steps:
            n += 1
            for group in step.names:
                n += 1 + len(group.tasks)
    return n


def test_identifier_count_matches_elements(table, sample):
    assert len(table) == _count(sample) == 12
    assert list(table.ids()) == list(range(12))


def test_ids_follow_document_order(table):
    kinds = [table.kind(i) for i in table.ids()]
    assert kinds == [
        ElementKind.PROCEDURE,
        ElementKind.SECTION,
        ElementKind.STEP,
        ElementKind.NAME, ElementKind.TASK, ElementKind.TASK,
        ElementKind.NAME, ElementKind.TASK, ElementKind.TASK,
        ElementKind.STEP,
        ElementKind.NAME, ElementKind.TASK,
    ]
    assert table.root == 0
    assert table.element(0) is table.document


def test_bidirectional_mapping(table, sample):
    joe = sample.sections[0].steps[0].names[0]
    assert table.id_of(joe) == 3
    assert table.element(3) is joe
    for i in table.ids():
        assert table.id_of(table.element(i)) == i


def test_parent_and_children(table):
    assert table.parent(0) is None
    assert table.parent(4) == 3
    assert table.parent(9) == 1
    assert table.children(2) == (3, 6)
    assert table.children(1) == (2, 9)
    assert table.children(11) == ()


def test_unknown_identifier(table):
    with pytest.raises(UnknownIdentifier):
        table.element(12)
    with pytest.raises(UnknownIdentifier):
        table.parent(-1)
    with pytest.raises(UnknownIdentifier):
        table.id_of(Task("obcy"))
    assert True not in table


def test_empty_procedure_has_single_identifier():
    table = index(Procedure(title="pusta"))
    assert len(table) == 1
    assert table.children(0) == ()


def test_wrong_nesting_is_malformed():
    doc = Procedure(sections=[Section(steps=[NameGroup(who="joe")])])  # type: ignore[list-item]
    with pytest.raises(MalformedDocument) as exc:
        index(doc)
    assert "step" in str(exc.value)


def test_root_must_be_procedure():
    with pytest.raises(MalformedDocument):
        index(Section())  # type: ignore[arg-type]


def test_missing_assignee_is_malformed():
    doc = Procedure(sections=[Section(steps=[Step(names=[NameGroup(who="", tasks=[Task()])])])])
    with pytest.raises(MalformedDocument):
        index(doc)


def test_non_bool_done_is_malformed():
    doc = Procedure(sections=[Section(steps=[Step(names=[
        NameGroup(who="joe", tasks=[Task("x", done=None)]),  # type: ignore[arg-type]
    ])])])
    with pytest.raises(MalformedDocument):
        index(doc)


def test_shared_element_is_malformed():
    task = Task("dwa razy")
    doc = Procedure(sections=[Section(steps=[Step(names=[NameGroup(who="joe", tasks=[task, task])])])])
    with pytest.raises(MalformedDocument):
        index(doc)


def test_reindex_gives_fresh_identical_space(make_procedure):
    first = index(make_procedure())
    second = index(make_procedure())
    assert len(first) == len(second)
    assert first.fingerprint == second.fingerprint
    assert first.element(4) is not second.element(4)


def test_fingerprint_ignores_done_flags_and_text(sample):
    before = index(sample).fingerprint
    sample.sections[0].steps[0].names[0].tasks[0].done = True
    sample.sections[0].steps[0].names[0].tasks[1].text = "inny tekst"
    assert index(sample).fingerprint == before


def test_fingerprint_depends_on_structure(sample):
    before = index(sample).fingerprint
    sample.sections[0].steps[1].names[0].who = "rhett"
    assert index(sample).fingerprint != before

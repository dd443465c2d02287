import json

import pytest

from procedure_model import MalformedDocument, UnknownIdentifier, WrongKind
from sequencer import Snapshot, TaskState, apply_snapshot, index, is_task_done, mark_task_done, take_snapshot


def test_snapshot_lists_every_task(table):
    mark_task_done(table, 5)
    snap = take_snapshot(table)
    assert snap.fingerprint == table.fingerprint
    assert snap.tasks == (
        TaskState(4, False),
        TaskState(5, True),
        TaskState(7, False),
        TaskState(8, False),
        TaskState(11, False),
    )


def test_apply_replays_into_other_copy(table, make_procedure):
    mark_task_done(table, 4)
    mark_task_done(table, 11)
    remote = take_snapshot(table)

    local = index(make_procedure())
    flipped = apply_snapshot(local, remote)

    assert flipped == [4, 11]
    assert is_task_done(local, 4)
    assert is_task_done(local, 11)
    assert not is_task_done(local, 5)
    # identyfikatory się nie zmieniają
    assert take_snapshot(local) == remote


def test_apply_never_clears_done(table, make_procedure):
    local = index(make_procedure())
    mark_task_done(local, 7)
    flipped = apply_snapshot(local, take_snapshot(table))
    assert flipped == []
    assert is_task_done(local, 7)


def test_apply_rejects_other_procedure(table, sample, make_procedure):
    other = make_procedure()
    other.sections[0].steps[0].names[0].who = "jim"
    with pytest.raises(MalformedDocument):
        apply_snapshot(index(other), take_snapshot(table))


def test_apply_is_all_or_nothing(table):
    snap = Snapshot(
        fingerprint=table.fingerprint,
        tasks=(TaskState(4, True), TaskState(3, True)),
    )
    with pytest.raises(WrongKind):
        apply_snapshot(table, snap)
    assert not is_task_done(table, 4)

    snap = Snapshot(fingerprint=table.fingerprint, tasks=(TaskState(4, True), TaskState(40, True)))
    with pytest.raises(UnknownIdentifier):
        apply_snapshot(table, snap)
    assert not is_task_done(table, 4)


def test_dict_round_trip_through_json(table):
    mark_task_done(table, 8)
    snap = take_snapshot(table)
    raw = json.loads(json.dumps(snap.to_dict()))
    assert raw["tasks"][3] == {"id": 8, "done": True}
    assert Snapshot.from_dict(raw) == snap


@pytest.mark.parametrize(
    "raw",
    [
        {},
        {"fingerprint": "x"},
        {"fingerprint": 1, "tasks": []},
        {"fingerprint": "x", "tasks": [{"id": "n4", "done": True}]},
        {"fingerprint": "x", "tasks": [{"id": 4, "done": "yes"}]},
        {"fingerprint": "x", "tasks": [{"id": 4}]},
    ],
)
def test_from_dict_rejects_bad_input(raw):
    with pytest.raises(ValueError):
        Snapshot.from_dict(raw)

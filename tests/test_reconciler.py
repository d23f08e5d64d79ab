from dataclasses import FrozenInstanceError, replace

import pytest

from attendance_pro.reconciliation import RecordReconciler, merge


def test_empty_new_returns_existing_unchanged(make_record):
    existing = [make_record(), make_record(labourName="Suresh")]
    assert merge(existing, []) == existing


def test_new_keys_are_appended_in_order(make_record):
    existing = [make_record()]
    new = [make_record(labourName="Suresh"), make_record(labourName="Anil")]

    merged = merge(existing, new)

    assert [r.labour_name for r in merged] == ["Ravi", "Suresh", "Anil"]
    assert merged[1].id == new[0].id


def test_merge_is_idempotent(make_record):
    existing = [make_record(labourName="Anil")]
    new = [make_record(), make_record(labourName="Suresh", otHours=1)]

    once = merge(existing, new)
    twice = merge(once, new)

    assert twice == once
    assert len(twice) == 3


def test_changed_ot_hours_refreshes_in_place_and_keeps_id(make_record):
    original = make_record(otHours=2)
    other = make_record(labourName="Suresh")
    correction = make_record(otHours=0)

    merged = merge([original, other], [correction])

    assert [r.labour_name for r in merged] == ["Ravi", "Suresh"]
    assert merged[0].id == original.id
    assert merged[0].ot_hours == 0
    assert merged[0].ot_amount == 0
    assert merged[0].total_payable == 800


def test_unchanged_record_keeps_its_state(make_record):
    original = replace(make_record(), is_confirmed=False)
    repeat = make_record()

    merged = merge([original], [repeat])

    assert merged[0] is original
    assert merged[0].is_confirmed is False
    assert merged[0].timestamp == original.timestamp


def test_salary_and_day_changes_are_detected(make_record):
    original = make_record()

    salary = merge([original], [make_record(baseSalary=850)])
    day = merge([original], [make_record(day=0.5)])

    assert salary[0].base_salary == 850 and salary[0].id == original.id
    assert day[0].day == 0.5 and day[0].total_payable == 600


def test_different_site_is_a_different_key(make_record):
    merged = merge([make_record()], [make_record(siteName="Site B")])
    assert len(merged) == 2


def test_inputs_are_not_mutated(make_record):
    existing = [make_record()]
    new = [make_record(otHours=5), make_record(labourName="Suresh")]
    snapshot = list(existing)

    merge(existing, new)

    assert existing == snapshot
    assert existing[0].ot_hours == 2


def test_duplicate_existing_keys_last_one_wins(make_record):
    first = make_record()
    second = make_record()
    correction = make_record(otHours=3)

    merged = merge([first, second], [correction])

    assert merged[0] is first
    assert merged[1].id == second.id
    assert merged[1].ot_hours == 3


def test_report_counts(make_record):
    existing = [make_record(), make_record(labourName="Suresh")]
    new = [
        make_record(),
        make_record(labourName="Suresh", otHours=1),
        make_record(labourName="Anil"),
    ]

    report = RecordReconciler().merge(existing, new)

    assert report.to_dict() == {"added": 1, "updated": 1, "unchanged": 1}
    assert len(report.records) == 3


def test_repeated_key_in_batch_is_idempotent(make_record):
    existing = [make_record(otHours=2)]
    batch = [make_record(otHours=3), make_record(otHours=4)]

    once = merge(existing, batch)
    twice = merge(once, batch)

    assert [r.ot_hours for r in once] == [4]
    assert [r.ot_hours for r in twice] == [4]
    assert twice[0].id == existing[0].id


def test_records_are_immutable(make_record):
    record = make_record()
    with pytest.raises(FrozenInstanceError):
        record.ot_hours = 9

import pytest

from attendance_pro.extraction import ExtractionResponse
from attendance_pro.utils.helpers import today_iso


def test_computes_ot_amount_and_total(calculator):
    record = calculator.calculate(
        {"date": "2024-01-01", "labourName": "Ravi", "siteName": "Site A",
         "baseSalary": 800, "day": 1, "otHours": 2}
    )
    assert record.ot_amount == 200
    assert record.total_payable == 1000


def test_half_day_with_overtime(calculator):
    record = calculator.calculate({"baseSalary": 600, "day": 0.5, "otHours": 3})
    assert record.ot_amount == pytest.approx(225.0)
    assert record.total_payable == pytest.approx(525.0)


def test_empty_candidate_gets_defaults(calculator):
    record = calculator.calculate({})
    assert record.base_salary == 0
    assert record.ot_hours == 0
    assert record.day == 1
    assert record.ot_amount == 0
    assert record.total_payable == 0
    assert record.labour_name == "Unknown Labour"
    assert record.site_name == "Unknown Site"
    assert record.date == today_iso()


def test_zero_day_counts_as_missing(calculator):
    record = calculator.calculate({"baseSalary": 500, "day": 0})
    assert record.day == 1
    assert record.total_payable == 500


def test_numeric_strings_are_coerced(calculator):
    record = calculator.calculate({"baseSalary": "800", "otHours": "1.5"})
    assert record.base_salary == 800.0
    assert record.ot_hours == 1.5
    assert record.ot_amount == pytest.approx(150.0)


def test_non_numeric_values_fall_back_to_defaults(calculator):
    record = calculator.calculate({"baseSalary": "eight hundred", "day": None, "otHours": True})
    assert record.base_salary == 0
    assert record.day == 1
    assert record.ot_hours == 0


def test_empty_names_use_sentinels(calculator):
    record = calculator.calculate({"labourName": "", "siteName": None})
    assert record.labour_name == "Unknown Labour"
    assert record.site_name == "Unknown Site"


def test_batch_source_and_confirmation(calculator):
    response = ExtractionResponse(
        records=[{"labourName": "Ravi"}, {"labourName": "Suresh"}],
        uncertainties=["Which site?"]
    )
    records = calculator.calculate_batch(response, has_images=True)

    assert [r.labour_name for r in records] == ["Ravi", "Suresh"]
    assert all(r.source == "image" for r in records)
    assert all(r.is_confirmed is False for r in records)
    assert len({r.id for r in records}) == 2


def test_batch_without_uncertainties_is_confirmed(calculator):
    response = ExtractionResponse(records=[{"labourName": "Ravi"}], uncertainties=[])
    records = calculator.calculate_batch(response, has_images=False)
    assert records[0].source == "text"
    assert records[0].is_confirmed is True


def test_ids_are_unique_across_batches(calculator):
    response = ExtractionResponse(records=[{"labourName": "Ravi"}])
    first = calculator.calculate_batch(response, has_images=False)
    second = calculator.calculate_batch(response, has_images=False)
    assert first[0].id != second[0].id


def test_recalculate_refreshes_derived_fields(make_record, calculator):
    from dataclasses import replace

    record = make_record()
    edited = replace(record, ot_hours=4)
    assert edited.ot_amount == 200  # stale until recalculated

    fixed = calculator.recalculate(edited)
    assert fixed.ot_amount == 400
    assert fixed.total_payable == 1200
    assert fixed.id == record.id

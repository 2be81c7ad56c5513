import pytest
from openpyxl import Workbook

from statement_core.config import CANONICAL_COLUMNS, HEADER_SIGNATURE
from statement_core.errors import ReconciliationError
from statement_core.header_locator import HeaderLocation
from statement_core.reconcile import (
    CanonicalRecord,
    SourceRow,
    is_continuation_row,
    read_source_rows,
    reconcile_rows,
)
from tests.helpers.grids import continuation, source_rows, txn

CLASSIFICATION = ("item", "category", "place", "freq", "for_")


def test_primary_row_maps_fields_explicitly():
    row = txn(
        serial=7,
        value_date="02/04/2024",
        txn_date="01/04/2024",
        cheque="000123",
        remarks="UPI/AMAZON",
        withdrawal=499.0,
        deposit=None,
        balance=10.0,
    )
    records, stats = reconcile_rows(source_rows(row), mop="ICICI_DC_Savings")

    assert stats.primary_rows == 1
    rec = records[0]
    assert rec.as_dict() == {
        "Date": "02/04/2024",
        "Narration": "UPI/AMAZON",
        "Item": "",
        "Category": "",
        "Place": "",
        "Freq": "",
        "For": "",
        "MOP": "ICICI_DC_Savings",
        "Amt(Dr)": 499.0,
        "Chq./Ref.No.": "000123",
        "Value Dt": "01/04/2024",
        "Amt(Cr)": None,
    }
    assert list(rec.as_dict()) == list(CANONICAL_COLUMNS)


def test_continuations_append_in_order_without_separator():
    rows = source_rows(txn(remarks="NEFT-"), continuation("HDFC0001"), continuation("/RENT"))
    records, stats = reconcile_rows(rows, mop="M")

    assert [r.narration for r in records] == ["NEFT-HDFC0001/RENT"]
    assert stats.merged_rows == 2


def test_continuation_text_is_appended_verbatim():
    rows = source_rows(txn(remarks="Grocery"), continuation(" store "))
    records, _ = reconcile_rows(rows, mop="M")
    assert records[0].narration == "Grocery store "


def test_numeric_continuation_text_is_stringified():
    records, _ = reconcile_rows(source_rows(txn(remarks="REF "), continuation(42)), mop="M")
    assert records[0].narration == "REF 42"


def test_leading_continuation_rows_are_dropped_and_counted():
    rows = source_rows(continuation("orphan"), continuation("again"), start=10)
    records, stats = reconcile_rows(rows, mop="M")

    assert records == []
    assert stats.dropped_rows == 2
    assert stats.dropped_row_numbers == [10, 11]


def test_leading_continuation_does_not_leak_into_first_record():
    rows = source_rows(continuation("orphan"), txn(remarks="First"))
    records, _ = reconcile_rows(rows, mop="M")
    assert [r.narration for r in records] == ["First"]


def test_continuation_only_extends_the_most_recent_record():
    rows = source_rows(txn(remarks="A"), txn(serial=2, remarks="B"), continuation("-more"))
    records, _ = reconcile_rows(rows, mop="M")
    assert [r.narration for r in records] == ["A", "B-more"]


def test_reset_substring_forces_all_classification_fields():
    records, stats = reconcile_rows(source_rows(txn(remarks="Salary RESET")), mop="M")
    rec = records[0]
    assert all(getattr(rec, f) == "RESET" for f in CLASSIFICATION)
    assert stats.reset_rows == 1


def test_reset_match_is_case_sensitive():
    records, _ = reconcile_rows(source_rows(txn(remarks="monthly reset")), mop="M")
    assert all(getattr(records[0], f) == "" for f in CLASSIFICATION)


def test_reset_in_continuation_text_does_not_reclassify():
    rows = source_rows(txn(remarks="Transfer "), continuation("RESET"))
    records, _ = reconcile_rows(rows, mop="M")
    assert records[0].narration == "Transfer RESET"
    assert records[0].item == ""


def test_primary_row_with_blank_remarks_still_creates_a_record():
    records, _ = reconcile_rows(source_rows(txn(remarks=None)), mop="M")
    assert len(records) == 1
    assert records[0].narration == ""


def test_fully_blank_row_is_a_primary_row():
    blank = (None,) * len(HEADER_SIGNATURE)
    records, stats = reconcile_rows(source_rows(txn(remarks="A"), blank), mop="M")
    assert len(records) == 2
    assert stats.merged_rows == 0


def test_whitespace_only_fields_count_as_blank_for_continuations():
    row = ("  ", None, "", None, "wrapped", None, None, " ")
    assert is_continuation_row(SourceRow(1, dict(zip(HEADER_SIGNATURE, row))))


def test_whitespace_only_remarks_row_is_a_continuation_not_a_new_record():
    rows = source_rows(txn(remarks="NEFT-"), continuation("  "), continuation("HDFC"))
    records, stats = reconcile_rows(rows, mop="M")

    assert [r.narration for r in records] == ["NEFT-  HDFC"]
    assert stats.primary_rows == 1
    assert stats.merged_rows == 2


def test_empty_string_remarks_row_is_primary():
    row = (None, None, None, None, "", None, None, None)
    assert not is_continuation_row(SourceRow(1, dict(zip(HEADER_SIGNATURE, row))))


def test_row_with_any_other_field_is_primary():
    row = (None, None, None, None, "text", None, None, 5.0)
    assert not is_continuation_row(SourceRow(1, dict(zip(HEADER_SIGNATURE, row))))


def test_mop_is_identical_across_records():
    rows = source_rows(txn(remarks="A"), txn(serial=2, remarks="B"), txn(serial=3, remarks="C"))
    records, _ = reconcile_rows(rows, mop="ICICI_DC_Card")
    assert {r.mop for r in records} == {"ICICI_DC_Card"}


def test_unexpected_fault_is_wrapped_with_row_number():
    class Exploding:
        row_number = 9

        def get(self, label):
            raise RuntimeError("bad cell")

    with pytest.raises(ReconciliationError) as exc:
        reconcile_rows([Exploding()], mop="M")
    assert exc.value.row_number == 9
    assert "row 9" in str(exc.value)


def test_read_source_rows_aligns_to_location_and_pads():
    wb = Workbook()
    ws = wb.active
    ws.append(["junk"])
    ws.append([None, None] + list(HEADER_SIGNATURE))
    ws.append([None, None, 1, "d1", "d1", None, "Salary"])
    ws.append([None, None, None, None, None, None, "more", None, None, None, "ignored"])

    rows = list(read_source_rows(ws, HeaderLocation(3, 3)))

    assert [r.row_number for r in rows] == [3, 4]
    assert rows[0].get("Transaction Remarks") == "Salary"
    assert rows[0].get("Balance (INR )") is None
    assert len(rows[1].values) == len(HEADER_SIGNATURE)
    assert "ignored" not in rows[1].values.values()


def test_read_source_rows_when_header_is_last_row():
    wb = Workbook()
    wb.active.append(list(HEADER_SIGNATURE))
    assert list(read_source_rows(wb.active, HeaderLocation(2, 1))) == []


def test_canonical_record_defaults():
    rec = CanonicalRecord()
    assert rec.to_row()[2:7] == ["", "", "", "", ""]

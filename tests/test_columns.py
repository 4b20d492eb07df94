from fincat.columns import detect_columns
from fincat.models import ColumnMap


def test_paid_in_paid_out_layout():
    cols = detect_columns(["Date", "Description", "Paid In", "Paid Out"])
    assert cols == ColumnMap(date=0, description=1, paid_in=2, paid_out=3)
    assert cols.amount is None


def test_signed_amount_layout_with_bank_metadata():
    headers = [
        "Transaction Date",
        "Transaction Type",
        "Sort Code",
        "Account Number",
        "Transaction Description",
        "Debit Amount",
        "Credit Amount",
        "Balance",
    ]
    cols = detect_columns(headers)
    assert cols.date == 0
    assert cols.transaction_type == 1
    assert cols.description == 4
    assert cols.paid_out == 5
    assert cols.paid_in == 6
    assert cols.amount is None
    assert cols.category is None


def test_amount_requires_exact_header_or_transaction_amount():
    assert detect_columns(["Date", "Amount"]).amount == 1
    assert detect_columns(["Date", " AMOUNT "]).amount == 1
    assert detect_columns(["Date", "Transaction Amount (GBP)"]).amount == 1
    assert detect_columns(["Date", "Amount (GBP)"]).amount is None


def test_category_excludes_sub_category():
    cols = detect_columns(["Date", "Sub Category", "Category"])
    assert cols.category == 2
    assert cols.sub_category == 1

    cols = detect_columns(["Date", "Subcategory"])
    assert cols.category is None
    assert cols.sub_category == 1


def test_payee_and_reference_triggers():
    cols = detect_columns(["Date", "Payee Name", "Ref", "Narrative"])
    assert cols.payer_payee == 1
    assert cols.reference == 2
    assert cols.description == 3


def test_first_matching_header_wins():
    cols = detect_columns(["Posting Date", "Value Date", "Details", "Description"])
    assert cols.date == 0
    assert cols.description == 2


def test_none_and_blank_headers_are_ignored():
    cols = detect_columns([None, "", "Date"])
    assert cols.date == 2
    assert cols.mapped() == {"date": 2}


def test_no_headers():
    assert detect_columns([]) == ColumnMap()

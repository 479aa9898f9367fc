"""Search and filter composition over the working set."""
from pcctrack.core.models import DateType, DeliveryStatus, RecordFilter, StatusFilter
from pcctrack.core.query import filter_records, select_records


def _two_records(make_record):
    pending = make_record(status=DeliveryStatus.PENDING, total_amount=500.0, due_amount=500.0, entry_date="2024-01-01")
    delivered = make_record(
        status=DeliveryStatus.DELIVERED,
        total_amount=800.0,
        paid_amount=800.0,
        due_amount=0.0,
        entry_date="2024-01-02",
        delivery_date="2024-01-02",
    )
    return pending, delivered


def test_due_filter_keeps_only_outstanding_balances(make_record):
    pending, delivered = _two_records(make_record)
    assert filter_records([pending, delivered], RecordFilter(status_filter=StatusFilter.DUE)) == [pending]


def test_entry_date_filter_matches_exactly(make_record):
    pending, delivered = _two_records(make_record)
    result = filter_records(
        [pending, delivered],
        RecordFilter(date_type=DateType.ENTRY, date_value="2024-01-02"),
    )
    assert result == [delivered]


def test_concrete_status_filter(make_record):
    pending, delivered = _two_records(make_record)
    records = [pending, delivered]
    assert filter_records(records, RecordFilter(status_filter=StatusFilter.PENDING)) == [pending]
    assert filter_records(records, RecordFilter(status_filter=StatusFilter.DELIVERED)) == [delivered]
    assert filter_records(records, RecordFilter(status_filter="ALL")) == records


def test_delivery_date_filter_skips_records_without_delivery(make_record):
    pending, delivered = _two_records(make_record)
    result = filter_records(
        [pending, delivered],
        RecordFilter(date_type=DateType.DELIVERY, date_value="2024-01-01"),
    )
    assert result == []


def test_search_is_case_insensitive_across_fields(make_record):
    by_passport = make_record(pcc_number="BX0099881")
    by_holder = make_record(pcc_holder_name="Nusrat Jahan")
    by_reference = make_record(customer_name="Agent Kamal 01711")
    by_serial = make_record(serial_no="315")
    records = [by_passport, by_holder, by_reference, by_serial]

    assert filter_records(records, RecordFilter(search_text="bx00")) == [by_passport]
    assert filter_records(records, RecordFilter(search_text="NUSRAT")) == [by_holder]
    assert filter_records(records, RecordFilter(search_text=" kamal ")) == [by_reference]
    assert filter_records(records, RecordFilter(search_text="315")) == [by_serial]


def test_search_tolerates_missing_optional_fields(make_record):
    legacy = make_record(customer_name=None, pcc_holder_name=None)
    assert filter_records([legacy], RecordFilter(search_text="anything")) == []
    assert filter_records([legacy], RecordFilter(search_text="")) == [legacy]


def test_filters_compose_and_preserve_order(make_record):
    first = make_record(pcc_holder_name="Rafi", due_amount=100.0, entry_date="2024-02-01")
    second = make_record(pcc_holder_name="Rafiq", due_amount=50.0, entry_date="2024-02-01")
    third = make_record(pcc_holder_name="Rafiq", due_amount=0.0, entry_date="2024-02-01")
    other_day = make_record(pcc_holder_name="Rafi", due_amount=100.0, entry_date="2024-02-02")

    result = filter_records(
        [first, second, third, other_day],
        RecordFilter(search_text="rafi", status_filter=StatusFilter.DUE, date_value="2024-02-01"),
    )

    assert result == [first, second]


def test_no_filter_returns_everything(make_record):
    records = [make_record(), make_record()]
    assert filter_records(records) == records


def test_select_records_follows_working_set_order(make_record):
    records = [make_record(), make_record(), make_record()]
    chosen = select_records(records, {records[2].id, records[0].id, "missing"})
    assert chosen == [records[0], records[2]]

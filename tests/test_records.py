"""Record creation, edits, and the delivery transition."""
import pytest

from pcctrack.core.models import DeliveryStatus, ServiceType
from pcctrack.core.records import create_record, deliver_record, edit_record


def test_create_record_derives_due_from_normalized_amounts(today, now):
    record = create_record(
        {"pcc_number": " a1234567 ", "total_amount": "5,000", "paid_amount": 1500, "due_amount": 99},
        serial_no="4",
        now=now,
        today=today,
    )

    assert record.pcc_number == "A1234567"
    assert record.total_amount == 5000
    assert record.paid_amount == 1500
    assert record.due_amount == record.total_amount - record.paid_amount == 3500
    assert record.serial_no == "4"
    assert record.created_at == now
    assert record.entry_date == today
    assert record.status is DeliveryStatus.PENDING
    assert record.service_type is ServiceType.NORMAL
    assert record.id


def test_create_record_treats_missing_amounts_as_zero(today):
    record = create_record({"pcc_number": "B1", "total_amount": "n/a"}, serial_no="1", today=today)
    assert (record.total_amount, record.paid_amount, record.due_amount) == (0, 0, 0)


def test_create_record_requires_document_number():
    with pytest.raises(ValueError, match="pcc_number"):
        create_record({"pcc_number": "   ", "total_amount": 100}, serial_no="1")


def test_create_record_rejects_unknown_fields():
    with pytest.raises(ValueError, match="Unknown record fields"):
        create_record({"pcc_number": "B1", "colour": "red"}, serial_no="1")


def test_create_record_assigns_distinct_ids():
    first = create_record({"pcc_number": "B1"}, serial_no="1")
    second = create_record({"pcc_number": "B1"}, serial_no="2")
    assert first.id != second.id


def test_edit_record_keeps_unspecified_fields(make_record):
    record = make_record(customer_name="Rahim 017", total_amount=1000.0, paid_amount=200.0, due_amount=800.0)

    updated = edit_record(record, {"pcc_holder_name": "Karim", "customer_name": None})

    assert updated.pcc_holder_name == "Karim"
    assert updated.customer_name == "Rahim 017"
    assert updated.due_amount == 800
    assert updated.id == record.id
    assert updated.serial_no == record.serial_no


def test_edit_record_rederives_due_and_ignores_supplied_due(make_record):
    record = make_record(total_amount=1000.0, paid_amount=200.0, due_amount=800.0)

    updated = edit_record(record, {"paid_amount": "৳600", "due_amount": 0})

    assert updated.paid_amount == 600
    assert updated.due_amount == updated.total_amount - updated.paid_amount == 400


def test_edit_record_cannot_change_identity_fields(make_record):
    record = make_record()
    updated = edit_record(record, {"id": "other", "serial_no": "999", "created_at": "x"})
    assert (updated.id, updated.serial_no, updated.created_at) == (record.id, record.serial_no, record.created_at)


def test_edit_record_leaves_delivery_fields_alone(make_record):
    record = make_record(status=DeliveryStatus.DELIVERED, delivery_date="2024-02-02", received_by="Self")
    updated = edit_record(record, {"customer_name": "New ref"})
    assert updated.delivery_date == "2024-02-02"
    assert updated.received_by == "Self"


def test_edit_record_refuses_status_changes(make_record):
    record = make_record(status=DeliveryStatus.DELIVERED)
    with pytest.raises(ValueError, match="deliver_record"):
        edit_record(record, {"status": "Pending"})


def test_deliver_with_clear_due_settles_balance(make_record):
    record = make_record(total_amount=2000.0, paid_amount=500.0, due_amount=1500.0, entry_date="2024-01-01")

    delivered = deliver_record(record, clear_due=True, received_by="Brother", delivery_date="2024-03-15")

    assert delivered.status is DeliveryStatus.DELIVERED
    assert delivered.paid_amount == delivered.total_amount == 2000
    assert delivered.due_amount == 0
    assert delivered.delivery_date == "2024-03-15"
    assert delivered.entry_date == delivered.delivery_date
    assert delivered.received_by == "Brother"


def test_deliver_without_clear_due_keeps_amounts(make_record, today):
    record = make_record(total_amount=2000.0, paid_amount=500.0, due_amount=1500.0)
    delivered = deliver_record(record, clear_due=False, today=today)
    assert (delivered.paid_amount, delivered.due_amount) == (500, 1500)
    assert delivered.delivery_date == today


def test_deliver_keeps_previous_receiver_when_blank(make_record, today):
    record = make_record(received_by="Father")
    delivered = deliver_record(record, clear_due=False, received_by="  ", today=today)
    assert delivered.received_by == "Father"


def test_redelivery_overwrites_delivery_dates_only(make_record):
    record = make_record()
    first = deliver_record(record, clear_due=False, delivery_date="2024-03-01")
    second = deliver_record(first, clear_due=False, delivery_date="2024-03-09")

    assert second.delivery_date == second.entry_date == "2024-03-09"
    assert (second.id, second.serial_no) == (record.id, record.serial_no)

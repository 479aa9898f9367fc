"""Data models for service-order records and the shop profile."""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional

from pcctrack.core.normalize import clean_text, to_amount

logger = logging.getLogger(__name__)

# "সম্পন্ন" is Bengali for "completed".
DELIVERED_TOKENS = ("DELIVERED", "DONE", "COLLECTED", "সম্পন্ন")


class DeliveryStatus(str, Enum):
    """Lifecycle state of a record. DELIVERED is terminal."""

    PENDING = "Pending"
    DELIVERED = "Delivered"


class ServiceType(str, Enum):
    NORMAL = "Normal"
    URGENT = "Urgent"


class StatusFilter(str, Enum):
    """Filter selector for record views; not a record status."""

    ALL = "ALL"
    DUE = "DUE"
    PENDING = "PENDING"
    DELIVERED = "DELIVERED"


class DateType(str, Enum):
    ENTRY = "ENTRY"
    DELIVERY = "DELIVERY"


def _coerce_enum(enum_cls, value, default):
    """Accept an enum member, its value, or its name (case-insensitive)."""

    if isinstance(value, enum_cls):
        return value
    if value is None or str(value).strip() == "":
        return default
    text = str(value).strip().upper()
    for member in enum_cls:
        if text in (member.name, str(member.value).upper()):
            return member
    raise ValueError(f"{value!r} is not a valid {enum_cls.__name__}")


def coerce_status(value: Any) -> DeliveryStatus:
    return _coerce_enum(DeliveryStatus, value, DeliveryStatus.PENDING)


def coerce_service_type(value: Any) -> ServiceType:
    return _coerce_enum(ServiceType, value, ServiceType.NORMAL)


def normalize_status(value: Any) -> DeliveryStatus:
    """Read free-form status text; anything without a delivered token is pending."""

    text = clean_text(value).upper()
    if any(token in text for token in DELIVERED_TOKENS):
        return DeliveryStatus.DELIVERED
    return DeliveryStatus.PENDING


def _stored_status(value: Any) -> DeliveryStatus:
    try:
        return coerce_status(value)
    except ValueError:
        status = normalize_status(value)
        logger.warning("Unknown stored status %r read as %s", value, status.value)
        return status


def _stored_service_type(value: Any) -> ServiceType:
    try:
        return coerce_service_type(value)
    except ValueError:
        logger.warning("Unknown stored service type %r read as %s", value, ServiceType.NORMAL.value)
        return ServiceType.NORMAL


# Attribute name -> persisted key. The persisted shape matches the backup
# documents written by earlier versions of the app.
RECORD_KEYS: Dict[str, str] = {
    "id": "id",
    "serial_no": "serialNo",
    "pcc_number": "pccNumber",
    "customer_name": "customerName",
    "pcc_holder_name": "pccHolderName",
    "total_amount": "totalAmount",
    "paid_amount": "paidAmount",
    "due_amount": "dueAmount",
    "status": "status",
    "service_type": "serviceType",
    "received_by": "receivedBy",
    "entry_date": "entryDate",
    "delivery_date": "deliveryDate",
    "created_at": "createdAt",
}

_AMOUNT_FIELDS = ("total_amount", "paid_amount", "due_amount")


@dataclass(frozen=True)
class Record:
    """One tracked service order with payment and delivery state.

    Instances are immutable; lifecycle operations return updated copies so a
    working set can be replaced wholesale after each mutation.
    """

    id: str
    serial_no: str
    pcc_number: str
    entry_date: str
    created_at: str
    pcc_holder_name: str = ""
    customer_name: str = ""
    total_amount: float = 0.0
    paid_amount: float = 0.0
    due_amount: float = 0.0
    status: DeliveryStatus = DeliveryStatus.PENDING
    service_type: ServiceType = ServiceType.NORMAL
    received_by: Optional[str] = None
    delivery_date: Optional[str] = None

    @property
    def is_delivered(self) -> bool:
        return self.status is DeliveryStatus.DELIVERED

    def to_dict(self) -> Dict[str, Any]:
        """Return the persisted (camelCase) representation."""

        data: Dict[str, Any] = {}
        for attr, key in RECORD_KEYS.items():
            value = getattr(self, attr)
            if isinstance(value, Enum):
                value = value.value
            if value is None:
                continue
            data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Record":
        """Rebuild a record from its persisted form.

        Legacy documents may lack optional fields; those fall back to the
        dataclass defaults. A stored due amount is trusted as-is so a restore
        reproduces the document exactly; when it is absent it is derived from
        the total and paid amounts. Unrecognised status or service text is
        read leniently and logged.
        """

        values: Dict[str, Any] = {}
        for attr, key in RECORD_KEYS.items():
            if key in data and data[key] is not None:
                values[attr] = data[key]
        for attr in _AMOUNT_FIELDS:
            if attr in values:
                values[attr] = to_amount(values[attr])
        if "due_amount" not in values:
            values["due_amount"] = values.get("total_amount", 0.0) - values.get("paid_amount", 0.0)
        values["status"] = _stored_status(values.get("status"))
        values["service_type"] = _stored_service_type(values.get("service_type"))
        for attr in ("id", "serial_no", "pcc_number", "entry_date", "created_at"):
            values[attr] = str(values.get(attr, ""))
        return cls(**values)


RECORD_FIELDS = tuple(field.name for field in fields(Record))


@dataclass(frozen=True)
class BusinessProfile:
    """Shop identity printed on invoices and statements."""

    shop_name: str = "PCC Track Pro"
    address: str = "Shop Address"
    phone: str = "01XXXXXXXXX"
    last_backup_date: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"shopName": self.shop_name, "address": self.address, "phone": self.phone}
        if self.last_backup_date:
            data["lastBackupDate"] = self.last_backup_date
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BusinessProfile":
        default = cls()
        return cls(
            shop_name=data.get("shopName") or default.shop_name,
            address=data.get("address") or default.address,
            phone=data.get("phone") or default.phone,
            last_backup_date=data.get("lastBackupDate"),
        )


@dataclass(frozen=True)
class RecordFilter:
    """Search and filter settings for a record view."""

    search_text: str = ""
    status_filter: StatusFilter = StatusFilter.ALL
    date_type: DateType = DateType.ENTRY
    date_value: Optional[str] = None


@dataclass(frozen=True)
class DashboardStats:
    total_records: int = 0
    total_pending: int = 0
    total_delivered: int = 0
    total_due_amount: float = 0.0
    total_billed_amount: float = 0.0
    today_entries: int = 0
    today_deliveries: int = 0

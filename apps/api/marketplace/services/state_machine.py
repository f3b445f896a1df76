from datetime import datetime

from marketplace.models.logistics import Logistics, LogisticsStatus

# Any status may follow any other; entering one of these stamps the field once.
STAMP_ON_ENTRY: dict[LogisticsStatus, str] = {
    LogisticsStatus.IN_TRANSIT: "actual_pickup_date",
    LogisticsStatus.DELIVERED: "actual_delivery_date",
}


def apply_status(record: Logistics, next_status: LogisticsStatus, now: datetime) -> list[str]:
    """Set ``next_status`` on ``record``; returns the timestamp fields stamped by this call."""
    record.status = next_status

    field = STAMP_ON_ENTRY.get(next_status)
    if field is None or getattr(record, field) is not None:
        return []
    setattr(record, field, now)
    return [field]

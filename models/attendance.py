from datetime import datetime

from utils.db import repository
from utils.errors import ValidationError
from utils.forms import clean

STATUSES = ["present", "absent", "late", "leave"]
DATE_FORMAT = "%Y-%m-%d"


def parse_day(value, field="date"):
    """Parse a YYYY-MM-DD string and return it zero-padded, the form records are stored in."""
    try:
        return datetime.strptime(value, DATE_FORMAT).date().isoformat()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}: {value!r} (expected YYYY-MM-DD)")


class Attendance:
    """One record per staff member per day. Dates are stored as YYYY-MM-DD strings."""

    COLLECTION = "staff_attendance"

    @classmethod
    def repository(cls):
        return repository(cls.COLLECTION)

    def __init__(self, staff_id, date, status="present", check_in_time="",
                 check_out_time="", notes=""):
        self.staff_id = staff_id
        self.date = date
        self.status = status or "present"
        self.check_in_time = check_in_time
        self.check_out_time = check_out_time
        self.notes = notes

    @classmethod
    def from_form(cls, form):
        return cls(
            staff_id=clean(form.get("staff_id")),
            date=clean(form.get("date")),
            status=clean(form.get("status")) or "present",
            check_in_time=clean(form.get("check_in_time")),
            check_out_time=clean(form.get("check_out_time")),
            notes=clean(form.get("notes")),
        )

    def validate(self):
        if not self.staff_id:
            raise ValidationError("Staff member is required")
        if not self.date:
            raise ValidationError("Date is required")
        self.date = parse_day(self.date)
        if self.status not in STATUSES:
            raise ValidationError(f"Unknown attendance status: {self.status}")

    def to_dict(self):
        return {
            "staff_id": self.staff_id,
            "date": self.date,
            "status": self.status,
            "check_in_time": self.check_in_time,
            "check_out_time": self.check_out_time,
            "notes": self.notes,
        }

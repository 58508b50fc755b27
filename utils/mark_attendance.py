import logging
from concurrent.futures import ThreadPoolExecutor

from models.attendance import parse_day
from utils.errors import ValidationError
from utils.repository import Query

logger = logging.getLogger(__name__)

UNKNOWN_STAFF = "Unknown"


# ============================
# MARKING
# ============================
def mark_attendance(repo, record):
    """
    Create or update the attendance of one staff member for one day.

    The store does not enforce uniqueness of (staff_id, date), so the
    existing record is looked up first and updated in place. Returns
    (document, created).
    """
    record.validate()

    existing = repo.list(
        [Query.equal("staff_id", record.staff_id), Query.equal("date", record.date)],
        limit=1,
    )

    if existing:
        changes = {"status": record.status, "notes": record.notes}
        if record.check_in_time:
            changes["check_in_time"] = record.check_in_time
        if record.check_out_time:
            changes["check_out_time"] = record.check_out_time
        doc = repo.update(existing[0]["id"], changes)
        logger.info("Updated attendance %s for staff %s on %s", doc["id"], record.staff_id, record.date)
        return doc, False

    doc = repo.create(record.to_dict())
    logger.info("Marked attendance %s for staff %s on %s", doc["id"], record.staff_id, record.date)
    return doc, True


# ============================
# READING
# ============================
def check_range(start, end):
    start = parse_day(start, "start date")
    end = parse_day(end, "end date")
    if start > end:
        raise ValidationError("Start date must not be after end date")
    return start, end


def list_range(repo, start, end):
    """Records with start <= date <= end, newest day first."""
    start, end = check_range(start, end)
    return repo.list(
        [Query.between("date", start, end)],
        sort=[Query.order_desc("date"), Query.order_desc("created_at")],
    )


def attendance_with_roster(attendance_repo, staff_repo, start, end, roster_limit=100):
    """Fetch the attendance range and the staff roster in parallel."""
    start, end = check_range(start, end)
    with ThreadPoolExecutor(max_workers=2) as pool:
        records = pool.submit(list_range, attendance_repo, start, end)
        roster = pool.submit(staff_repo.list, None, [Query.order_asc("name")], roster_limit)
        return records.result(), roster.result()


def staff_names(roster):
    return {member["id"]: member.get("name", UNKNOWN_STAFF) for member in roster}


def staff_name(names, staff_id):
    return names.get(staff_id, UNKNOWN_STAFF)

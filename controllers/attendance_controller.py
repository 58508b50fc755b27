from datetime import date

from flask import Blueprint, render_template, request, redirect, url_for, flash, send_file, current_app

from models.attendance import STATUSES, Attendance
from models.staff import StaffMember
from utils.auth import login_required
from utils.errors import AdminError
from utils.mark_attendance import attendance_with_roster, mark_attendance, staff_name, staff_names
from utils.reports import (
    ATTENDANCE_COLUMNS, CSV_MIMETYPE, EXCEL_MIMETYPE, PDF_MIMETYPE,
    attendance_pdf, attendance_rows, report_filename, to_csv, to_excel,
)

attendance_bp = Blueprint("attendance", __name__, url_prefix="/attendance")

REPORT_PREFIX = "Attendance_Report"


def _period():
    today = date.today().isoformat()
    start = request.args.get("start") or today
    end = request.args.get("end") or today
    return start, end


def _load(start, end):
    return attendance_with_roster(
        Attendance.repository(),
        StaffMember.repository(),
        start,
        end,
        current_app.config.get("STAFF_ROSTER_LIMIT", 100),
    )


# ==========================================================
# VIEW ATTENDANCE
# ==========================================================
@attendance_bp.route("/")
@login_required
def view_attendance():
    start, end = _period()
    records, roster = [], []
    try:
        records, roster = _load(start, end)
    except AdminError as e:
        flash(f"Error fetching attendance: {e}", "danger")

    names = staff_names(roster)
    for rec in records:
        rec["staff_name"] = staff_name(names, rec.get("staff_id"))

    return render_template(
        "attendance/viewAttendance.html",
        records=records,
        staff=roster,
        statuses=STATUSES,
        start=start,
        end=end,
        today=date.today().isoformat(),
    )


# ==========================================================
# MARK ATTENDANCE
# ==========================================================
@attendance_bp.route("/mark", methods=["POST"])
@login_required
def mark():
    record = Attendance.from_form(request.form)
    try:
        _, created = mark_attendance(Attendance.repository(), record)
        flash("Attendance marked." if created else "Attendance updated.", "success")
    except AdminError as e:
        flash(f"Error marking attendance: {e}", "danger")

    return redirect(url_for(
        "attendance.view_attendance",
        start=request.form.get("start") or record.date or None,
        end=request.form.get("end") or record.date or None,
    ))


# ==========================================================
# DELETE RECORD
# ==========================================================
@attendance_bp.route("/delete/<record_id>", methods=["POST"])
@login_required
def delete_record(record_id):
    try:
        Attendance.repository().delete(record_id)
        flash("Attendance record deleted.", "success")
    except AdminError as e:
        flash(f"Error deleting record: {e}", "danger")
    return redirect(url_for(
        "attendance.view_attendance",
        start=request.form.get("start") or None,
        end=request.form.get("end") or None,
    ))


# ==========================================================
# EXPORTS
# ==========================================================
@attendance_bp.route("/export/<fmt>")
@login_required
def export(fmt):
    start, end = _period()
    try:
        records, roster = _load(start, end)
    except AdminError as e:
        flash(f"Error exporting attendance: {e}", "danger")
        return redirect(url_for("attendance.view_attendance", start=start, end=end))

    rows = attendance_rows(records, staff_names(roster))

    if fmt == "csv":
        output, mimetype, ext = to_csv(ATTENDANCE_COLUMNS, rows), CSV_MIMETYPE, "csv"
    elif fmt == "excel":
        output, mimetype, ext = to_excel(ATTENDANCE_COLUMNS, rows, "Attendance"), EXCEL_MIMETYPE, "xlsx"
    elif fmt == "pdf":
        output, mimetype, ext = attendance_pdf(rows, start, end), PDF_MIMETYPE, "pdf"
    else:
        flash(f"Unknown export format: {fmt}", "danger")
        return redirect(url_for("attendance.view_attendance", start=start, end=end))

    return send_file(output, mimetype=mimetype, as_attachment=True,
                     download_name=report_filename(REPORT_PREFIX, start, end, ext))

"""
utils/reports.py
-----------------
CSV, Excel and PDF exports for the attendance and order screens.
Every exporter returns an in-memory file ready for send_file().
"""

import csv
import io

from openpyxl import Workbook
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from utils.mark_attendance import staff_name

ATTENDANCE_COLUMNS = ["Staff Name", "Date", "Status", "Check In", "Check Out", "Notes"]
ORDER_COLUMNS = ["Order ID", "User ID", "Type", "Check-in Date", "Days", "Items", "Total Amount", "Status", "Created"]

CSV_MIMETYPE = "text/csv"
EXCEL_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MIMETYPE = "application/pdf"


def attendance_rows(records, names):
    return [
        [
            staff_name(names, rec.get("staff_id")),
            rec.get("date", ""),
            rec.get("status", ""),
            rec.get("check_in_time") or "-",
            rec.get("check_out_time") or "-",
            rec.get("notes") or "-",
        ]
        for rec in records
    ]


def order_rows(orders):
    rows = []
    for order in orders:
        created = order.get("created_at")
        rows.append([
            order["id"],
            order.get("user_id", ""),
            order.get("order_type", ""),
            order.get("check_in_date", ""),
            order.get("number_of_days", ""),
            len(order.get("items") or []),
            order.get("total_amount", 0),
            order.get("status", ""),
            created.strftime("%Y-%m-%d %H:%M") if created else "",
        ])
    return rows


# ---------------- CSV ----------------
def to_csv(header, rows):
    si = io.StringIO()
    cw = csv.writer(si)
    cw.writerow(header)
    cw.writerows(rows)

    output = io.BytesIO()
    output.write(si.getvalue().encode("utf-8"))
    output.seek(0)
    return output


# ---------------- Excel ----------------
def to_excel(header, rows, title="Report"):
    wb = Workbook()
    ws = wb.active
    ws.title = title[:31]
    ws.append(header)
    for row in rows:
        ws.append(row)

    output = io.BytesIO()
    wb.save(output)
    output.seek(0)
    return output


# ---------------- PDF ----------------
ATTENDANCE_PDF_COLUMNS = [40, 150, 220, 290, 360, 430]


def attendance_pdf(rows, start, end):
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4

    def header(y):
        c.setFont("Helvetica-Bold", 10)
        for x, label in zip(ATTENDANCE_PDF_COLUMNS, ATTENDANCE_COLUMNS):
            c.drawString(x, y, label)
        c.setFont("Helvetica", 10)
        return y - 18

    y = height - 50
    c.setFont("Helvetica-Bold", 18)
    c.drawString(40, y, "Attendance Report")
    y -= 22
    c.setFont("Helvetica", 11)
    c.drawString(40, y, f"Period: {start} to {end}")
    y = header(y - 28)

    for row in rows:
        if y < 50:
            c.showPage()
            y = header(height - 50)
        for x, value in zip(ATTENDANCE_PDF_COLUMNS, row):
            # Notes may be long; keep them inside the page
            c.drawString(x, y, str(value)[:28])
        y -= 16

    c.save()
    buffer.seek(0)
    return buffer


def report_filename(prefix, start, end, extension):
    return f"{prefix}_{start}_{end}.{extension}"

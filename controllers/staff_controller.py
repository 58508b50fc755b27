from flask import Blueprint, render_template, request, redirect, url_for, flash, current_app

from models.staff import StaffMember
from utils.attachments import save_with_image
from utils.auth import login_required
from utils.errors import AdminError
from utils.repository import Query

staff_bp = Blueprint("staff", __name__, url_prefix="/staff")


# -------------------------------------------------------------
# VIEW STAFF
# -------------------------------------------------------------
@staff_bp.route("/")
@login_required
def view_staff():
    try:
        staff = StaffMember.repository().list(sort=[Query.order_desc("created_at")])
    except AdminError as e:
        flash(f"Error fetching staff: {e}", "danger")
        staff = []
    return render_template("staff/viewStaff.html", staff=staff)


# -------------------------------------------------------------
# ADD / EDIT STAFF MEMBER
# -------------------------------------------------------------
@staff_bp.route("/add", methods=["GET", "POST"], defaults={"staff_id": None})
@staff_bp.route("/edit/<staff_id>", methods=["GET", "POST"])
@login_required
def manage_staff(staff_id):
    member = None
    if staff_id:
        try:
            member = StaffMember.repository().get(staff_id)
        except AdminError as e:
            flash(str(e), "danger")
            return redirect(url_for("staff.view_staff"))

    if request.method == "POST":
        form_member = StaffMember.from_form(request.form)
        try:
            form_member.validate()
            save_with_image(
                StaffMember.repository(),
                form_member.to_dict(),
                doc_id=staff_id,
                file=request.files.get("photo"),
                folder=StaffMember.PHOTO_FOLDER,
                field="photo_url",
            )
        except AdminError as e:
            flash(f"Error saving staff member: {e}", "danger")
            member = dict(form_member.to_dict(), id=staff_id)
            return render_template("staff/manageStaff.html", member=member)

        flash("Staff member saved successfully!", "success")
        return redirect(url_for("staff.view_staff"))

    return render_template("staff/manageStaff.html", member=member)


# -------------------------------------------------------------
# DELETE STAFF MEMBER
# -------------------------------------------------------------
@staff_bp.route("/delete/<staff_id>", methods=["POST"])
@login_required
def delete_staff(staff_id):
    try:
        StaffMember.repository().delete(staff_id)
        flash("Staff member deleted successfully!", "success")
    except AdminError as e:
        flash(f"Error deleting staff member: {e}", "danger")
    return redirect(url_for("staff.view_staff"))


# -------------------------------------------------------------
# PRINTABLE ID CARDS
# -------------------------------------------------------------
@staff_bp.route("/id-cards", methods=["GET", "POST"])
@login_required
def id_cards():
    values = request.values
    ids = values.getlist("ids")
    if not ids:
        flash("Select at least one staff member.", "warning")
        return redirect(url_for("staff.view_staff"))

    try:
        members = StaffMember.repository().list([Query.one_of("id", ids)])
    except AdminError as e:
        flash(f"Error loading staff: {e}", "danger")
        return redirect(url_for("staff.view_staff"))

    return render_template(
        "staff/idCards.html",
        members=members,
        company={
            "name": current_app.config.get("COMPANY_NAME", ""),
            "address": current_app.config.get("COMPANY_ADDRESS", ""),
            "contact": current_app.config.get("COMPANY_CONTACT", ""),
        },
    )

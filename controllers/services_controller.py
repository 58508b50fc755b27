from flask import Blueprint, render_template, request, redirect, url_for, flash

from models.services import Service
from utils.attachments import save_with_image
from utils.auth import login_required
from utils.errors import AdminError

services_bp = Blueprint("services", __name__, url_prefix="/services")


# View Services
@services_bp.route("/")
@login_required
def view_services():
    try:
        services = Service.repository().list()
    except AdminError as e:
        flash(f"Error fetching services: {e}", "danger")
        services = []
    return render_template("services/viewServices.html", services=services)


# Add / Edit Service
@services_bp.route("/add", methods=["GET", "POST"], defaults={"service_id": None})
@services_bp.route("/edit/<service_id>", methods=["GET", "POST"])
@login_required
def manage_service(service_id):
    service = None
    if service_id:
        try:
            service = Service.repository().get(service_id)
        except AdminError as e:
            flash(str(e), "danger")
            return redirect(url_for("services.view_services"))

    if request.method == "POST":
        form_service = Service.from_form(request.form)
        try:
            form_service.validate()
            save_with_image(
                Service.repository(),
                form_service.to_dict(),
                doc_id=service_id,
                file=request.files.get("image"),
                folder=Service.IMAGE_FOLDER,
            )
        except AdminError as e:
            flash(str(e), "danger")
            service = dict(form_service.to_dict(), id=service_id)
            return render_template("services/manageService.html", service=service)

        flash("Service updated successfully!" if service_id else "Service added successfully!", "success")
        return redirect(url_for("services.view_services"))

    return render_template("services/manageService.html", service=service)


# Delete Service
@services_bp.route("/delete/<service_id>", methods=["POST"])
@login_required
def delete_service(service_id):
    try:
        Service.repository().delete(service_id)
        flash("Service deleted successfully!", "success")
    except AdminError as e:
        flash(f"Error deleting service: {e}", "danger")
    return redirect(url_for("services.view_services"))

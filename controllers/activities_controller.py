from flask import Blueprint, render_template, request, redirect, url_for, flash

from models.activities import Activity
from utils.attachments import save_with_image
from utils.auth import login_required
from utils.errors import AdminError
from utils.repository import Query

activities_bp = Blueprint("activities", __name__, url_prefix="/activities")


@activities_bp.route("/")
@login_required
def view_activities():
    try:
        activities = Activity.repository().list(sort=[Query.order_asc("name")])
    except AdminError as e:
        flash(f"Error fetching activities: {e}", "danger")
        activities = []
    return render_template("activities/viewActivities.html", activities=activities)


@activities_bp.route("/add", methods=["GET", "POST"], defaults={"activity_id": None})
@activities_bp.route("/edit/<activity_id>", methods=["GET", "POST"])
@login_required
def manage_activity(activity_id):
    activity = None
    if activity_id:
        try:
            activity = Activity.repository().get(activity_id)
        except AdminError as e:
            flash(str(e), "danger")
            return redirect(url_for("activities.view_activities"))

    if request.method == "POST":
        form_activity = Activity.from_form(request.form)
        try:
            form_activity.validate()
            save_with_image(
                Activity.repository(),
                form_activity.to_dict(),
                doc_id=activity_id,
                file=request.files.get("image"),
                folder=Activity.IMAGE_FOLDER,
            )
        except AdminError as e:
            flash(str(e), "danger")
            activity = dict(form_activity.to_dict(), id=activity_id)
            return render_template("activities/manageActivity.html", activity=activity)

        flash("Activity saved successfully!", "success")
        return redirect(url_for("activities.view_activities"))

    return render_template("activities/manageActivity.html", activity=activity)


@activities_bp.route("/delete/<activity_id>", methods=["POST"])
@login_required
def delete_activity(activity_id):
    try:
        Activity.repository().delete(activity_id)
        flash("Activity deleted successfully!", "success")
    except AdminError as e:
        flash(f"Error deleting activity: {e}", "danger")
    return redirect(url_for("activities.view_activities"))

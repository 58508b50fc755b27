from flask import Blueprint, render_template, request, redirect, url_for, flash

from models.users import ROLES, SUPPORT_TYPES, UserProfile
from utils.auth import login_required
from utils.db import get_identity
from utils.errors import AdminError
from utils.provisioning import provision_user

users_bp = Blueprint("users", __name__, url_prefix="/users")


# -----------------------------
# VIEW USERS
# -----------------------------
@users_bp.route("/")
@login_required
def view_users():
    try:
        users = UserProfile.repository().list()
    except AdminError as e:
        flash(f"Error fetching users: {e}", "danger")
        users = []
    return render_template("users/viewUsers.html", users=users, roles=ROLES, support_types=SUPPORT_TYPES)


# -----------------------------
# ADD USER
# -----------------------------
@users_bp.route("/add", methods=["GET", "POST"])
@login_required
def add_user():
    if request.method == "POST":
        form = request.form
        try:
            provision_user(
                get_identity(),
                UserProfile.repository(),
                username=form.get("username"),
                display_name=form.get("display_name"),
                email=form.get("email"),
                password=form.get("password"),
                role=form.get("role"),
                support_type=form.get("support_type"),
                location=form.get("location"),
            )
        except AdminError as e:
            flash(str(e), "danger")
            return render_template("users/manageUser.html", user=None, form=form,
                                   roles=ROLES, support_types=SUPPORT_TYPES)

        flash(f"User \"{form.get('display_name')}\" created successfully!", "success")
        return redirect(url_for("users.view_users"))

    return render_template("users/manageUser.html", user=None, form={},
                           roles=ROLES, support_types=SUPPORT_TYPES)


# -----------------------------
# EDIT USER
# -----------------------------
@users_bp.route("/edit/<user_id>", methods=["GET", "POST"])
@login_required
def edit_user(user_id):
    try:
        user = UserProfile.repository().get(user_id)
    except AdminError as e:
        flash(str(e), "danger")
        return redirect(url_for("users.view_users"))

    if request.method == "POST":
        try:
            UserProfile.repository().update(user_id, UserProfile.edit_fields(request.form))
        except AdminError as e:
            flash(str(e), "danger")
            return render_template("users/manageUser.html", user=user, form=request.form,
                                   roles=ROLES, support_types=SUPPORT_TYPES)

        flash("User updated successfully!", "success")
        return redirect(url_for("users.view_users"))

    return render_template("users/manageUser.html", user=user, form=user,
                           roles=ROLES, support_types=SUPPORT_TYPES)


# -----------------------------
# DELETE USER
# -----------------------------
@users_bp.route("/delete/<user_id>", methods=["POST"])
@login_required
def delete_user(user_id):
    try:
        UserProfile.repository().delete(user_id)
        flash("User deleted successfully!", "success")
    except AdminError as e:
        flash(f"Error deleting user: {e}", "danger")
    return redirect(url_for("users.view_users"))

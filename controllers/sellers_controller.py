from flask import Blueprint, render_template, request, redirect, url_for, flash

from models.users import UserProfile
from utils.auth import login_required
from utils.db import get_identity
from utils.errors import AdminError, NotFoundError
from utils.forms import clean
from utils.provisioning import provision_user
from utils.repository import Query

sellers_bp = Blueprint("sellers", __name__, url_prefix="/sellers")

SELLER_FILTER = [Query.equal("role", "support"), Query.equal("support_type", "seller")]


def _get_seller(seller_id):
    sellers = UserProfile.repository().list(SELLER_FILTER + [Query.equal("id", seller_id)], limit=1)
    if not sellers:
        raise NotFoundError(f"Seller {seller_id} not found")
    return sellers[0]


@sellers_bp.route("/")
@login_required
def view_sellers():
    try:
        sellers = UserProfile.repository().list(SELLER_FILTER)
    except AdminError as e:
        flash(f"Error fetching sellers: {e}", "danger")
        sellers = []
    return render_template("sellers/viewSellers.html", sellers=sellers)


@sellers_bp.route("/add", methods=["GET", "POST"])
@login_required
def add_seller():
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
                role="support",
                support_type="seller",
                location=form.get("location"),
            )
        except AdminError as e:
            flash(str(e) or "Failed to create seller", "danger")
            return render_template("sellers/manageSeller.html", seller=None, form=form)

        flash(
            f"Seller \"{form.get('display_name')}\" created successfully! "
            f"They can now log in with email: {form.get('email')}",
            "success",
        )
        return redirect(url_for("sellers.view_sellers"))

    return render_template("sellers/manageSeller.html", seller=None, form={})


@sellers_bp.route("/edit/<seller_id>", methods=["GET", "POST"])
@login_required
def edit_seller(seller_id):
    try:
        seller = _get_seller(seller_id)
    except AdminError as e:
        flash(str(e), "danger")
        return redirect(url_for("sellers.view_sellers"))

    if request.method == "POST":
        try:
            UserProfile.repository().update(seller_id, {
                "display_name": clean(request.form.get("display_name")),
                "location": clean(request.form.get("location")),
            })
        except AdminError as e:
            flash(str(e), "danger")
            return render_template("sellers/manageSeller.html", seller=seller, form=request.form)

        flash("Seller updated successfully!", "success")
        return redirect(url_for("sellers.view_sellers"))

    return render_template("sellers/manageSeller.html", seller=seller, form=seller)


@sellers_bp.route("/delete/<seller_id>", methods=["POST"])
@login_required
def delete_seller(seller_id):
    try:
        UserProfile.repository().delete(seller_id)
        flash("Seller deleted successfully!", "success")
    except AdminError as e:
        flash(f"Error deleting seller: {e}", "danger")
    return redirect(url_for("sellers.view_sellers"))

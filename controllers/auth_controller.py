from flask import Blueprint, render_template, request, redirect, url_for, flash

from utils.auth import is_logged_in, login_user, logout_user
from utils.errors import AdminError

auth_bp = Blueprint("auth", __name__)


# Login
@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "POST":
        email = request.form.get("email", "")
        password = request.form.get("password", "")

        try:
            account = login_user(email, password)
        except AdminError as e:
            flash(str(e), "danger")
            return render_template("auth-login.html", email=email), 401

        flash(f"Welcome {account['name'] or account['email']}!", "success")
        return redirect(url_for("dashboard.index"))

    if is_logged_in():
        return redirect(url_for("dashboard.index"))
    return render_template("auth-login.html", email="")


# Logout
@auth_bp.route("/logout", methods=["GET", "POST"])
def logout():
    return logout_user()

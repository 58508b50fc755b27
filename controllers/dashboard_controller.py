import logging

from flask import Blueprint, render_template, flash

from models import Activity, MinimartItem, Order, Room, Service, StaffMember, UserProfile
from utils.auth import login_required
from utils.errors import AdminError
from utils.repository import Query

logger = logging.getLogger(__name__)

dashboard_bp = Blueprint("dashboard", __name__)

# Navigation cards: (title, endpoint, description, collection model)
CARDS = [
    ("Users", "users.view_users", "Manage users, roles, and support types", UserProfile),
    ("Sellers", "sellers.view_sellers", "Create and manage seller accounts", None),
    ("Staff", "staff.view_staff", "Staff directory and printable ID cards", StaffMember),
    ("Attendance", "attendance.view_attendance", "Mark attendance and export reports", None),
    ("Orders", "orders.view_orders", "View and manage all orders", Order),
    ("Rooms", "rooms.view_rooms", "Manage rooms and pricing", Room),
    ("Services", "services.view_services", "Create, update, delete hotel services", Service),
    ("Minimart", "minimart.view_items", "Minimart inventory", MinimartItem),
    ("Activities", "activities.view_activities", "Activities, events, schedules", Activity),
]


# ======================================
# DASHBOARD
# ======================================
@dashboard_bp.route("/")
@login_required
def index():
    cards = []
    for title, endpoint, desc, model in CARDS:
        count = None
        if model is not None:
            try:
                count = model.repository().count()
            except AdminError as e:
                logger.error("Could not count %s: %s", model.COLLECTION, e)
        cards.append({"title": title, "endpoint": endpoint, "desc": desc, "count": count})

    pending_orders = None
    try:
        pending_orders = Order.repository().count([Query.equal("status", "pending")])
    except AdminError as e:
        flash(f"Error loading order summary: {e}", "danger")

    return render_template("dashboard.html", cards=cards, pending_orders=pending_orders)

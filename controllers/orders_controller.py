from datetime import date

from flask import Blueprint, render_template, request, redirect, url_for, flash, send_file

from models.orders import STATUSES, Order
from utils.auth import login_required
from utils.errors import AdminError
from utils.repository import Query
from utils.reports import CSV_MIMETYPE, ORDER_COLUMNS, order_rows, to_csv

orders_bp = Blueprint("orders", __name__, url_prefix="/orders")


def _list_orders(status):
    filters = []
    if status and status != "all":
        filters.append(Query.equal("status", status))
    return Order.repository().list(filters, sort=[Query.order_desc("created_at")])


@orders_bp.route("/")
@login_required
def view_orders():
    status = request.args.get("status", "all")
    try:
        orders = _list_orders(status)
    except AdminError as e:
        flash(f"Error fetching orders: {e}", "danger")
        orders = []
    return render_template("orders/viewOrders.html", orders=orders, statuses=STATUSES, status=status)


@orders_bp.route("/status/<order_id>", methods=["POST"])
@login_required
def update_status(order_id):
    try:
        new_status = Order.check_status(request.form.get("status"))
        Order.repository().update(order_id, {"status": new_status})
        flash("Order status updated.", "success")
    except AdminError as e:
        flash(f"Error updating order: {e}", "danger")
    return redirect(url_for("orders.view_orders", status=request.form.get("filter", "all")))


@orders_bp.route("/delete/<order_id>", methods=["POST"])
@login_required
def delete_order(order_id):
    try:
        Order.repository().delete(order_id)
        flash("Order deleted.", "success")
    except AdminError as e:
        flash(f"Error deleting order: {e}", "danger")
    return redirect(url_for("orders.view_orders", status=request.form.get("filter", "all")))


# Export CSV of the current filter
@orders_bp.route("/export/csv")
@login_required
def export_csv():
    status = request.args.get("status", "all")
    try:
        orders = _list_orders(status)
    except AdminError as e:
        flash(f"Error exporting orders: {e}", "danger")
        return redirect(url_for("orders.view_orders", status=status))

    output = to_csv(ORDER_COLUMNS, order_rows(orders))
    return send_file(output, mimetype=CSV_MIMETYPE, as_attachment=True,
                     download_name=f"Orders_{status}_{date.today().isoformat()}.csv")

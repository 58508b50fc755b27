from flask import Blueprint, render_template, request, redirect, url_for, flash

from models.minimart import MinimartItem
from utils.attachments import save_with_image
from utils.auth import login_required
from utils.errors import AdminError
from utils.repository import Query

minimart_bp = Blueprint("minimart", __name__, url_prefix="/minimart")


# -------------------------------------------------------------
# VIEW ITEMS
# -------------------------------------------------------------
@minimart_bp.route("/")
@login_required
def view_items():
    try:
        items = MinimartItem.repository().list(sort=[Query.order_asc("name")])
    except AdminError as e:
        flash(f"Error fetching items: {e}", "danger")
        items = []
    return render_template("minimart/viewItems.html", items=items)


# -------------------------------------------------------------
# ADD / EDIT ITEM
# -------------------------------------------------------------
@minimart_bp.route("/add", methods=["GET", "POST"], defaults={"item_id": None})
@minimart_bp.route("/edit/<item_id>", methods=["GET", "POST"])
@login_required
def manage_item(item_id):
    item = None
    if item_id:
        try:
            item = MinimartItem.repository().get(item_id)
        except AdminError as e:
            flash(str(e), "danger")
            return redirect(url_for("minimart.view_items"))

    if request.method == "POST":
        form_item = MinimartItem.from_form(request.form)
        try:
            form_item.validate()
            save_with_image(
                MinimartItem.repository(),
                form_item.to_dict(),
                doc_id=item_id,
                file=request.files.get("image_file"),
                folder=MinimartItem.IMAGE_FOLDER,
                field="image",
            )
        except AdminError as e:
            flash(str(e), "danger")
            return render_template("minimart/manageItem.html", item=dict(form_item.to_dict(), id=item_id))

        flash("Item saved successfully!", "success")
        return redirect(url_for("minimart.view_items"))

    return render_template("minimart/manageItem.html", item=item)


# -------------------------------------------------------------
# DELETE ITEM
# -------------------------------------------------------------
@minimart_bp.route("/delete/<item_id>", methods=["POST"])
@login_required
def delete_item(item_id):
    try:
        MinimartItem.repository().delete(item_id)
        flash("Item deleted successfully!", "success")
    except AdminError as e:
        flash(f"Error deleting item: {e}", "danger")
    return redirect(url_for("minimart.view_items"))

from flask import Blueprint, render_template, request, redirect, url_for, flash

from models.rooms import Room
from utils.attachments import save_with_images
from utils.auth import login_required
from utils.errors import AdminError

rooms_bp = Blueprint("rooms", __name__, url_prefix="/rooms")


# -----------------------------
# VIEW ROOMS
# -----------------------------
@rooms_bp.route("/")
@login_required
def view_rooms():
    try:
        rooms = Room.repository().list()
    except AdminError as e:
        flash(f"Error fetching rooms: {e}", "danger")
        rooms = []
    return render_template("rooms/viewRooms.html", rooms=rooms)


def _save_room(room_id=None):
    room = Room.from_form(request.form)
    room.validate()
    return save_with_images(
        Room.repository(),
        room.to_dict(),
        doc_id=room_id,
        files=request.files.getlist("files"),
        folder=Room.IMAGE_FOLDER,
    )


# -----------------------------
# ADD ROOM
# -----------------------------
@rooms_bp.route("/add", methods=["GET", "POST"])
@login_required
def add_room():
    if request.method == "POST":
        try:
            _save_room()
        except AdminError as e:
            flash(str(e), "danger")
            return render_template("rooms/manageRoom.html", room=Room.from_form(request.form).to_dict())

        flash("Room added successfully!", "success")
        return redirect(url_for("rooms.view_rooms"))

    return render_template("rooms/manageRoom.html", room=None)


# -----------------------------
# EDIT ROOM
# -----------------------------
@rooms_bp.route("/edit/<room_id>", methods=["GET", "POST"])
@login_required
def edit_room(room_id):
    try:
        room = Room.repository().get(room_id)
    except AdminError as e:
        flash(str(e), "danger")
        return redirect(url_for("rooms.view_rooms"))

    if request.method == "POST":
        try:
            _save_room(room_id)
        except AdminError as e:
            flash(str(e), "danger")
            form_room = Room.from_form(request.form).to_dict()
            form_room["id"] = room_id
            return render_template("rooms/manageRoom.html", room=form_room)

        flash("Room updated successfully!", "success")
        return redirect(url_for("rooms.view_rooms"))

    return render_template("rooms/manageRoom.html", room=room)


# -----------------------------
# DELETE ROOM
# -----------------------------
@rooms_bp.route("/delete/<room_id>", methods=["POST"])
@login_required
def delete_room(room_id):
    try:
        Room.repository().delete(room_id)
        flash("Room deleted successfully!", "success")
    except AdminError as e:
        flash(f"Error deleting room: {e}", "danger")
    return redirect(url_for("rooms.view_rooms"))

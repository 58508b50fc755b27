import logging

from flask import Blueprint, jsonify, request

from models.users import UserProfile
from utils.db import get_identity
from utils.errors import AdminError, ValidationError
from utils.provisioning import provision_user

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__, url_prefix="/api")


@api_bp.route("/users/create", methods=["POST"])
def create_user():
    """
    Provision an identity account plus its profile document.

    Body: {username, displayName, email, password, role?, supportType?, location?}
    Returns 400 for missing fields and 500 for any other failure.
    """
    body = request.get_json(silent=True) or {}
    try:
        profile, account = provision_user(
            get_identity(),
            UserProfile.repository(),
            username=body.get("username"),
            display_name=body.get("displayName"),
            email=body.get("email"),
            password=body.get("password"),
            role=body.get("role"),
            support_type=body.get("supportType"),
            location=body.get("location"),
        )
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except AdminError as e:
        logger.error("Error creating user: %s", e)
        return jsonify({"error": str(e) or "Failed to create user"}), 500

    return jsonify({"success": True, "user": profile, "accountId": account["id"]})

from utils.db import repository
from utils.errors import ValidationError
from utils.forms import clean

ROLES = ["user", "manager", "support", "admin", "super_admin"]
SUPPORT_TYPES = ["reception", "kitchen", "services", "seller"]


class UserProfile:
    """Profile document stored in "users", keyed by the identity account id."""

    COLLECTION = "users"

    @classmethod
    def repository(cls):
        return repository(cls.COLLECTION)

    def __init__(self, username, display_name, email, role="user", support_type=None,
                 branch_assigned_id="", preferred_branch_id="", location=""):
        self.username = username
        self.display_name = display_name
        self.email = email
        self.role = role or "user"
        # Only support users carry a support type
        self.support_type = support_type if self.role == "support" else None
        self.branch_assigned_id = branch_assigned_id
        self.preferred_branch_id = preferred_branch_id
        self.location = location

    def to_dict(self):
        return {
            "username": self.username,
            "display_name": self.display_name,
            "email": self.email,
            "role": self.role,
            "support_type": self.support_type,
            "branch_assigned_id": self.branch_assigned_id,
            "preferred_branch_id": self.preferred_branch_id,
            "location": self.location,
        }

    @staticmethod
    def edit_fields(form):
        """Fields an admin may change on an existing profile."""
        role = clean(form.get("role")) or "user"
        if role not in ROLES:
            raise ValidationError(f"Unknown role: {role}")

        support_type = clean(form.get("support_type")) or None
        if role == "support" and not support_type:
            raise ValidationError("Support Type is required for support users")
        if support_type and support_type not in SUPPORT_TYPES:
            raise ValidationError(f"Unknown support type: {support_type}")

        return {
            "display_name": clean(form.get("display_name")),
            "role": role,
            "support_type": support_type if role == "support" else None,
        }

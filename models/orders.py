from utils.db import repository
from utils.errors import ValidationError

STATUSES = ["pending", "confirmed", "in_progress", "completed", "cancelled"]


class Order:
    """Orders are placed by the guest apps; the console only reviews them."""

    COLLECTION = "orders"

    @classmethod
    def repository(cls):
        return repository(cls.COLLECTION)

    def __init__(self, user_id, branch_id="", order_type="", items=None, check_in_date="",
                 number_of_days=0, total_amount=0, status="pending"):
        self.user_id = user_id
        self.branch_id = branch_id
        self.order_type = order_type
        self.items = items or []
        self.check_in_date = check_in_date
        self.number_of_days = number_of_days
        self.total_amount = total_amount
        self.status = status

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "branch_id": self.branch_id,
            "order_type": self.order_type,
            "items": self.items,
            "check_in_date": self.check_in_date,
            "number_of_days": self.number_of_days,
            "total_amount": self.total_amount,
            "status": self.status,
        }

    @staticmethod
    def check_status(status):
        if status not in STATUSES:
            raise ValidationError(f"Unknown order status: {status}")
        return status

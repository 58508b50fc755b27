# models/__init__.py

from .users import UserProfile
from .staff import StaffMember
from .attendance import Attendance
from .orders import Order
from .rooms import Room
from .services import Service
from .minimart import MinimartItem
from .activities import Activity

__all__ = [
    "UserProfile",
    "StaffMember",
    "Attendance",
    "Order",
    "Room",
    "Service",
    "MinimartItem",
    "Activity"
]

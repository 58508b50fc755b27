from utils.db import repository
from utils.errors import ValidationError
from utils.forms import clean, to_bool


class StaffMember:

    COLLECTION = "staff_members"
    PHOTO_FOLDER = "staff_photos"

    @classmethod
    def repository(cls):
        return repository(cls.COLLECTION)

    def __init__(self, name, email="", phone="", department="", position="",
                 employee_id="", description="", photo_url="", active=True):
        self.name = name
        self.email = email
        self.phone = phone
        self.department = department
        self.position = position
        self.employee_id = employee_id
        self.description = description
        self.photo_url = photo_url
        self.active = active

    @classmethod
    def from_form(cls, form):
        return cls(
            name=clean(form.get("name")),
            email=clean(form.get("email")),
            phone=clean(form.get("phone")),
            department=clean(form.get("department")),
            position=clean(form.get("position")),
            employee_id=clean(form.get("employee_id")),
            description=clean(form.get("description")),
            photo_url=clean(form.get("photo_url")),
            active=to_bool(form.get("active")),
        )

    def validate(self):
        if not self.name:
            raise ValidationError("Full Name is required")

    def to_dict(self):
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "department": self.department,
            "position": self.position,
            "employee_id": self.employee_id,
            "description": self.description,
            "photo_url": self.photo_url,
            "active": self.active,
        }

from utils.db import repository
from utils.errors import ValidationError
from utils.forms import clean


class Service:

    COLLECTION = "services"
    IMAGE_FOLDER = "services"

    @classmethod
    def repository(cls):
        return repository(cls.COLLECTION)

    def __init__(self, name, description="", icon="", image_url="", branch_id=""):
        self.name = name
        self.description = description
        self.icon = icon
        self.image_url = image_url
        self.branch_id = branch_id

    @classmethod
    def from_form(cls, form):
        return cls(
            name=clean(form.get("name")),
            description=clean(form.get("description")),
            icon=clean(form.get("icon")),
            image_url=clean(form.get("image_url")),
        )

    def validate(self):
        if not self.name:
            raise ValidationError("Name is required")

    def to_dict(self):
        return {
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "image_url": self.image_url,
            "branch_id": self.branch_id,
        }

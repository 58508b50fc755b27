from utils.db import repository
from utils.errors import ValidationError
from utils.forms import clean, is_blank, to_bool, to_float


class Activity:

    COLLECTION = "activities_hotel"
    IMAGE_FOLDER = "activities_hotel"

    @classmethod
    def repository(cls):
        return repository(cls.COLLECTION)

    def __init__(self, name, price, description="", category="General", available=True, image_url=""):
        self.name = name
        self.description = description
        self.category = category or "General"
        self.price = price
        self.available = available
        self.image_url = image_url

    @classmethod
    def from_form(cls, form):
        price = form.get("price")
        return cls(
            name=clean(form.get("name")),
            description=clean(form.get("description")),
            category=clean(form.get("category")),
            price=None if is_blank(price) else to_float(price),
            available=to_bool(form.get("available")),
            image_url=clean(form.get("image_url")),
        )

    def validate(self):
        if not self.name or self.price is None:
            raise ValidationError("Name and Price are required")

    def to_dict(self):
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "price": self.price,
            "available": self.available,
            "image_url": self.image_url,
        }

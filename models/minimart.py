from utils.db import repository
from utils.errors import ValidationError
from utils.forms import clean, is_blank, to_bool, to_float


class MinimartItem:

    COLLECTION = "mini_mart_items"
    IMAGE_FOLDER = "minimart"

    @classmethod
    def repository(cls):
        return repository(cls.COLLECTION)

    def __init__(self, name, price, category, available=True, image="", description=""):
        self.name = name
        self.price = price
        self.category = category
        self.available = available
        self.image = image
        self.description = description

    @classmethod
    def from_form(cls, form):
        price = form.get("price")
        return cls(
            name=clean(form.get("name")),
            price=None if is_blank(price) else to_float(price),
            category=clean(form.get("category")),
            available=to_bool(form.get("available")),
            # Cleared by the "remove image" checkbox
            image="" if to_bool(form.get("remove_image")) else clean(form.get("image")),
            description=clean(form.get("description")),
        )

    def validate(self):
        if not self.name or self.price is None or not self.category:
            raise ValidationError("Name, Price and Category are required")

    def to_dict(self):
        return {
            "name": self.name,
            "price": self.price,
            "category": self.category,
            "available": self.available,
            "image": self.image,
            "description": self.description,
        }

from utils.db import repository
from utils.errors import ValidationError
from utils.forms import clean, is_blank, split_list, to_bool, to_float, to_int


class Room:

    COLLECTION = "rooms"
    IMAGE_FOLDER = "room_images"

    @classmethod
    def repository(cls):
        return repository(cls.COLLECTION)

    def __init__(self, name, price, description="", capacity=1, quantity=1,
                 amenities=None, images=None, branch_id="", available=True):
        self.name = name
        self.description = description
        self.price = price
        self.capacity = capacity
        self.quantity = quantity
        self.amenities = amenities or []
        self.images = images or []
        self.branch_id = branch_id
        self.available = available

    @classmethod
    def from_form(cls, form):
        price = form.get("price")
        return cls(
            name=clean(form.get("name")),
            description=clean(form.get("description")),
            price=None if is_blank(price) else to_float(price),
            capacity=to_int(form.get("capacity"), 1) or 1,
            quantity=to_int(form.get("quantity"), 1) or 1,
            amenities=split_list(form.get("amenities")),
            # Existing image URLs the admin chose to keep
            images=split_list(form.getlist("images") if hasattr(form, "getlist") else form.get("images")),
            available=to_bool(form.get("available")),
        )

    def validate(self):
        if not self.name or self.price is None:
            raise ValidationError("Name and Price are required")

    def to_dict(self):
        return {
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "capacity": self.capacity,
            "quantity": self.quantity,
            "amenities": self.amenities,
            "images": self.images,
            "branch_id": self.branch_id,
            "available": self.available,
        }

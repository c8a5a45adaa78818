import re

from bson import ObjectId
from marshmallow import ValidationError


HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


def validate_objectid(value):
    if not ObjectId.is_valid(value):
        raise ValidationError(f"{value} is not a valid ID. Ensure you add a valid Item ID.")

def validate_hex_color(value):
    if not HEX_COLOR_RE.match(value or ""):
        raise ValidationError("Color value must be a hex code like #ffffff or #fff.")

def validate_not_blank(value):
    if value is None or not str(value).strip():
        raise ValidationError("Field may not be blank.")

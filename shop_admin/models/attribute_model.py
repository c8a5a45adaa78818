from .base_model import BaseModel
from ..utils.helpers import to_object_id


class Size(BaseModel):
    """A size option (e.g. name "Large", value "L") variations can use."""

    collection_name = "sizes"
    reference_field = "size_id"

    def __init__(self, store_id, name, value):
        super().__init__(store_id=store_id, name=name, value=value)

    @classmethod
    def is_in_use(cls, record_id):
        from .product_model import ProductVariation
        return ProductVariation.exists({cls.reference_field: to_object_id(record_id)})


class Color(Size):
    """A color option; `value` is a hex code."""

    collection_name = "colors"
    reference_field = "color_id"

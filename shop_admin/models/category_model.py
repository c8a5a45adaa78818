from .base_model import BaseModel
from .billboard_model import Billboard
from ..utils.helpers import to_object_id


class Category(BaseModel):
    """
    A category groups the products of a store and points at the billboard
    shown on its storefront page.
    """

    collection_name = "categories"
    object_id_fields = ("store_id", "billboard_id")

    def __init__(self, store_id, name, billboard_id):
        super().__init__(store_id=store_id, name=name, billboard_id=billboard_id)

    @classmethod
    def get_with_billboard(cls, category_id, store_id):
        category = cls.get_by_id(category_id, store_id)
        if not category:
            return None
        category["billboard"] = Billboard.get_by_id(category.get("billboard_id"))
        return category

    @classmethod
    def is_in_use(cls, category_id):
        from .product_model import Product
        return Product.exists({"category_id": to_object_id(category_id)})

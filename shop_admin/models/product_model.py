# shop_admin/models/product_model.py
from datetime import datetime

from pymongo import UpdateOne

from ..utils.helpers import to_object_id
from ..utils.logger import Log
from .base_model import BaseModel
from .attribute_model import Size, Color
from .category_model import Category


class Product(BaseModel):
    """
    A product sold by a store. Images and variations live in their own
    collections, keyed by `product_id`.
    """

    collection_name = "products"
    object_id_fields = ("store_id", "category_id")

    # Scalar fields a PATCH may overwrite
    UPDATABLE_FIELDS = ("name", "price", "category_id", "is_featured", "is_archived")

    def __init__(self, store_id, name, price, category_id, is_featured=False, is_archived=False):
        super().__init__(
            store_id=store_id,
            name=name,
            price=float(price),
            category_id=category_id,
            is_featured=bool(is_featured),
            is_archived=bool(is_archived),
        )

    @classmethod
    def get_with_relations(cls, product_id, store_id=None):
        """
        Product with its category, images and variations (each variation
        carrying its color and size).
        """
        product = cls.get_by_id(product_id, store_id)
        if not product:
            return None

        product["category"] = Category.get_by_id(product.get("category_id"))
        product["images"] = ProductImage.get_by_product_id(product["_id"])

        variations = ProductVariation.get_by_product_id(product["_id"])
        for variation in variations:
            variation["color"] = Color.get_by_id(variation.get("color_id"))
            variation["size"] = Size.get_by_id(variation.get("size_id"))
        product["product_variations"] = variations
        return product

    @classmethod
    def list_for_store(cls, store_id, category_id=None, color_id=None, size_id=None,
                       is_featured=None, include_archived=False):
        extra_query = {}
        if category_id:
            extra_query["category_id"] = to_object_id(category_id)
        if is_featured is not None:
            extra_query["is_featured"] = is_featured
        if not include_archived:
            extra_query["is_archived"] = False

        # Color/size filters match through the variations collection
        variation_query = {}
        if color_id:
            variation_query["color_id"] = to_object_id(color_id)
        if size_id:
            variation_query["size_id"] = to_object_id(size_id)
        if variation_query:
            product_ids = ProductVariation.collection().distinct("product_id", variation_query)
            extra_query["_id"] = {"$in": [pid for pid in product_ids if pid is not None]}

        products = cls.get_by_store_id(store_id, extra_query=extra_query)
        for product in products:
            product["category"] = Category.get_by_id(product.get("category_id"))
            product["images"] = ProductImage.get_by_product_id(product["_id"])
        return products


class ProductImage(BaseModel):
    """An image hosted on Cloudinary, attached to a product."""

    collection_name = "images"
    object_id_fields = ("product_id",)

    def __init__(self, product_id, url, cloudinary_public_id):
        super().__init__(product_id=product_id, url=url, cloudinary_public_id=cloudinary_public_id)

    @classmethod
    def get_by_product_id(cls, product_id):
        cursor = cls.collection().find({"product_id": to_object_id(product_id)}).sort([("position", 1)])
        return list(cursor)

    @classmethod
    def create_many(cls, product_id, images):
        documents = []
        for position, image in enumerate(images or []):
            document = cls(product_id, image["url"], image["cloudinary_public_id"]).to_dict()
            document["position"] = position
            documents.append(document)
        if documents:
            cls.collection().insert_many(documents)
        return documents

    @classmethod
    def delete_for_product(cls, product_id):
        result = cls.collection().delete_many({"product_id": to_object_id(product_id)})
        return result.deleted_count

    @classmethod
    def replace_for_product(cls, product_id, images):
        """
        Swap the product's image records for `images`. The new records are
        written before the old ones are removed.
        """
        old_ids = [doc["_id"] for doc in cls.collection().find({"product_id": to_object_id(product_id)}, {"_id": 1})]
        created = cls.create_many(product_id, images)
        if old_ids:
            cls.collection().delete_many({"_id": {"$in": old_ids}})
        return created


class ProductVariation(BaseModel):
    """
    A sellable color/size combination of a product with its stock quantity.
    A variation whose `product_id` is None has been disconnected from its
    product but is still referenced by delivered order items.
    """

    collection_name = "product_variations"
    object_id_fields = ("product_id", "store_id", "color_id", "size_id")

    UPDATABLE_FIELDS = ("color_id", "size_id", "quantity")

    def __init__(self, product_id, store_id, color_id, size_id, quantity=0):
        super().__init__(
            product_id=product_id,
            store_id=store_id,
            color_id=color_id,
            size_id=size_id,
            quantity=int(quantity),
        )

    @classmethod
    def get_by_product_id(cls, product_id):
        cursor = cls.collection().find({"product_id": to_object_id(product_id)}).sort([("created_at", 1)])
        return list(cursor)

    @classmethod
    def create_many(cls, product_id, store_id, variations):
        documents = [
            cls(
                product_id,
                store_id,
                variation["color_id"],
                variation["size_id"],
                variation.get("quantity", 0),
            ).to_dict()
            for variation in variations or []
        ]
        if documents:
            cls.collection().insert_many(documents)
        return documents

    @classmethod
    def update_many(cls, variations):
        """Write back the editable fields of already persisted variations."""
        operations = []
        now = datetime.now()
        for variation in variations:
            updates = {}
            for key in cls.UPDATABLE_FIELDS:
                if key in variation:
                    value = variation[key]
                    updates[key] = to_object_id(value) if key.endswith("_id") else value
            updates["updated_at"] = now
            operations.append(UpdateOne({"_id": to_object_id(variation["id"])}, {"$set": updates}))

        if not operations:
            return 0
        result = cls.collection().bulk_write(operations, ordered=False)
        return result.modified_count

    @classmethod
    def disconnect_many(cls, variation_ids):
        """Unlink variations from their product without deleting them."""
        ids = [to_object_id(vid) for vid in variation_ids]
        if not ids:
            return 0
        result = cls.collection().update_many(
            {"_id": {"$in": ids}},
            {"$set": {"product_id": None, "updated_at": datetime.now()}},
        )
        Log.info(f"[product_model.py][ProductVariation][disconnect_many] unlinked={result.modified_count}")
        return result.modified_count

    @classmethod
    def delete_many(cls, variation_ids):
        ids = [to_object_id(vid) for vid in variation_ids]
        if not ids:
            return 0
        result = cls.collection().delete_many({"_id": {"$in": ids}})
        return result.deleted_count

# shop_admin/models/order_model.py

from ..utils.helpers import to_object_id
from .base_model import BaseModel
from .product_model import Product, ProductVariation


class Order(BaseModel):
    """
    An order placed on the storefront. Orders are created by the checkout
    flow; the back office only reads them and flips `is_paid`/`delivered`.
    """

    collection_name = "orders"

    def __init__(self, store_id, phone="", address="", is_paid=False, delivered=False):
        super().__init__(
            store_id=store_id,
            phone=phone,
            address=address,
            is_paid=bool(is_paid),
            delivered=bool(delivered),
        )

    @classmethod
    def attach_items(cls, order):
        """Embed items, their variation and product name, and the order total."""
        items = OrderItem.get_by_order_id(order["_id"])
        total = 0.0
        for item in items:
            variation = ProductVariation.get_by_id(item.get("product_variation_id"))
            product = None
            if variation:
                product = Product.get_by_id(item.get("product_id") or variation.get("product_id"))
            elif item.get("product_id"):
                product = Product.get_by_id(item.get("product_id"))

            item["product_variation"] = variation
            item["product_name"] = product.get("name") if product else None

            # Price captured at checkout wins over the current product price
            unit_price = item.get("unit_price")
            if unit_price is None and product:
                unit_price = product.get("price", 0)
            total += float(unit_price or 0) * int(item.get("quantity", 1))

        order["order_items"] = items
        order["total_price"] = round(total, 2)
        return order

    @classmethod
    def get_with_items(cls, order_id, store_id):
        order = cls.get_by_id(order_id, store_id)
        if not order:
            return None
        return cls.attach_items(order)

    @classmethod
    def list_with_items(cls, store_id):
        return [cls.attach_items(order) for order in cls.get_by_store_id(store_id)]


class OrderItem(BaseModel):
    """One line of an order, pointing at the product variation that was bought."""

    collection_name = "order_items"
    object_id_fields = ("order_id", "product_variation_id", "product_id")

    def __init__(self, order_id, product_variation_id, quantity=1, product_id=None, unit_price=None):
        super().__init__(
            order_id=order_id,
            product_variation_id=product_variation_id,
            product_id=product_id,
            quantity=int(quantity),
            unit_price=unit_price,
        )

    @classmethod
    def get_by_order_id(cls, order_id):
        return list(cls.collection().find({"order_id": to_object_id(order_id)}))

    @classmethod
    def find_by_variation_ids(cls, variation_ids):
        """
        Order items referencing any of the given variations, each with its
        parent order embedded under `order`.
        """
        ids = [to_object_id(vid) for vid in variation_ids]
        if not ids:
            return []

        items = list(cls.collection().find({"product_variation_id": {"$in": ids}}))
        order_ids = list({item["order_id"] for item in items if item.get("order_id")})
        orders = {
            order["_id"]: order
            for order in Order.collection().find({"_id": {"$in": order_ids}})
        }
        for item in items:
            item["order"] = orders.get(item.get("order_id"))
        return items

# shop_admin/services/product_service.py
from ..models.product_model import Product, ProductImage, ProductVariation
from ..models.order_model import OrderItem
from ..tasks.media_tasks import enqueue_image_cleanup
from ..utils.logger import Log
from .variation_reconciler import reconcile_variations


def removed_image_public_ids(persisted_images, incoming_images, deleted_images=None):
    """
    Public ids to delete from the CDN: persisted images missing from the
    incoming list, plus whatever the client reported as deleted.
    """
    keep = {image.get("cloudinary_public_id") for image in incoming_images or []}
    ids = [
        image.get("cloudinary_public_id")
        for image in persisted_images or []
        if image.get("cloudinary_public_id") not in keep
    ]
    ids.extend(image.get("cloudinary_public_id") for image in deleted_images or [])
    return [pid for pid in dict.fromkeys(ids) if pid]


def create_product(store_id, product_data):
    product = Product(
        store_id=store_id,
        name=product_data["name"],
        price=product_data["price"],
        category_id=product_data["category_id"],
        is_featured=product_data.get("is_featured", False),
        is_archived=product_data.get("is_archived", False),
    ).save()

    ProductImage.create_many(product["_id"], product_data.get("images"))
    ProductVariation.create_many(product["_id"], store_id, product_data.get("product_variations"))
    return Product.get_with_relations(product["_id"], store_id)


def update_product(product, product_data, deleted_images, log_tag):
    """
    Apply a PATCH to a loaded product (with `images` and `product_variations`).

    Raises VariationInUseError before anything is written when a removed
    variation is still used by an undelivered order. Writes run additive
    first (images, product fields, kept and new variations) and removals
    last; CDN cleanup is queued only once every write has gone through.
    """
    plan = reconcile_variations(
        product.get("product_variations", []),
        product_data.get("product_variations", []),
        OrderItem.find_by_variation_ids,
    )
    Log.info(
        f"{log_tag} variations new={len(plan.new)} existing={len(plan.existing)} "
        f"disconnect={len(plan.disconnect)} delete={len(plan.delete)}"
    )

    product_id = product["_id"]
    store_id = product["store_id"]
    incoming_images = product_data.get("images", [])

    ProductImage.replace_for_product(product_id, incoming_images)

    updates = {key: product_data[key] for key in Product.UPDATABLE_FIELDS if key in product_data}
    if "price" in updates:
        updates["price"] = float(updates["price"])
    Product.update(product_id, store_id, **updates)

    ProductVariation.update_many(plan.existing)
    ProductVariation.create_many(product_id, store_id, plan.new)
    ProductVariation.disconnect_many(plan.disconnect_ids)
    ProductVariation.delete_many(plan.delete_ids)

    enqueue_image_cleanup(
        removed_image_public_ids(product.get("images"), incoming_images, deleted_images),
        "[PRODUCT_PATCH]",
    )

    return Product.get_with_relations(product_id, store_id)


def delete_product(product, log_tag):
    """
    Remove a product, its image records and its variations.

    Same rule as an update that drops every variation: undelivered orders
    block the delete (VariationInUseError), variations used only by
    delivered orders are unlinked, the rest are deleted. The product record
    goes first so a later failure never leaves a visible half-deleted
    product; CDN cleanup is queued last.
    """
    product_id = product["_id"]

    plan = reconcile_variations(
        ProductVariation.get_by_product_id(product_id),
        [],
        OrderItem.find_by_variation_ids,
    )
    images = ProductImage.get_by_product_id(product_id)

    deleted = Product.delete(product_id, product["store_id"])

    ProductImage.delete_for_product(product_id)
    ProductVariation.disconnect_many(plan.disconnect_ids)
    ProductVariation.delete_many(plan.delete_ids)

    enqueue_image_cleanup([image.get("cloudinary_public_id") for image in images], "[PRODUCT_DELETE]")

    Log.info(
        f"{log_tag} product deleted images={len(images)} "
        f"disconnected={len(plan.disconnect)} deleted_variations={len(plan.delete)}"
    )
    return deleted

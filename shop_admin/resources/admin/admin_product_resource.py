# resources/admin/admin_product_resource.py
import time

from flask import request
from flask.views import MethodView
from flask_smorest import Blueprint
from marshmallow import ValidationError
from pymongo.errors import PyMongoError

from ...security.auth import token_required, current_user_id, get_owned_store
from ...utils.rate_limits import crud_read_limiter, crud_write_limiter, crud_delete_limiter
from ...utils.helpers import make_log_tag
from ...utils.json_response import prepared_response, entity_response
from ...utils.logger import Log
from ...models.product_model import Product
from ...models.category_model import Category
from ...models.attribute_model import Size, Color
from ...schemas.admin.product_schema import (
    ProductSchema,
    ProductUpdateSchema,
    ProductQuerySchema,
)
from ...services.product_service import create_product, update_product, delete_product
from ...services.variation_reconciler import VariationInUseError
from ...constants.service_code import ERROR_MESSAGES


blp_product = Blueprint("Products", __name__, description="Product management operations")


def _missing_references(store_id, product_data):
    """Category, colors and sizes must all belong to the store."""
    errors = {}
    if not Category.get_by_id(product_data["category_id"], store_id):
        errors["category_id"] = ["Category not found in this store."]

    for variation in product_data.get("product_variations", []):
        if not Color.get_by_id(variation["color_id"], store_id):
            errors.setdefault("product_variations", []).append(f"Color {variation['color_id']} not found.")
        if not Size.get_by_id(variation["size_id"], store_id):
            errors.setdefault("product_variations", []).append(f"Size {variation['size_id']} not found.")
    return errors


@blp_product.route("/stores/<string:store_id>/products")
class ProductsResource(MethodView):

    @crud_read_limiter("product")
    @blp_product.arguments(ProductQuerySchema, location="query")
    @blp_product.doc(
        summary="List the products of a store",
        description="Archived products are excluded unless `include_archived=true`.",
    )
    def get(self, query_args, store_id):
        log_tag = make_log_tag("admin_product_resource.py", "ProductsResource", "get", request.remote_addr, None, store_id)

        try:
            products = Product.list_for_store(store_id, **query_args)
            Log.info(f"{log_tag} returning {len(products)} product(s)")
            return entity_response(products)
        except Exception as e:
            Log.error(f"[PRODUCT_GET] {log_tag} {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["INTERNAL_ERROR"])

    @token_required
    @crud_write_limiter("product")
    @blp_product.doc(
        summary="Create a new product",
        description="Create a product with its images (already uploaded to Cloudinary) and variations.",
        requestBody={
            "required": True,
            "content": {"application/json": {"schema": ProductSchema}},
        },
        security=[{"Bearer": []}],
    )
    def post(self, store_id):
        """Handle the POST request to create a new product."""
        log_tag = make_log_tag(
            "admin_product_resource.py", "ProductsResource", "post", request.remote_addr, current_user_id(), store_id
        )

        try:
            product_data = ProductSchema().load(request.get_json(silent=True) or {})
        except ValidationError as err:
            Log.info(f"{log_tag} invalid product data: {err.messages}")
            return prepared_response(False, "BAD_REQUEST", ERROR_MESSAGES["INVALID_PRODUCT_DATA"], errors=err.messages)

        try:
            if not get_owned_store(store_id):
                Log.info(f"{log_tag} store not owned by user")
                return prepared_response(False, "FORBIDDEN", ERROR_MESSAGES["UNAUTHORIZED"])

            errors = _missing_references(store_id, product_data)
            if errors:
                return prepared_response(False, "BAD_REQUEST", ERROR_MESSAGES["INVALID_PRODUCT_DATA"], errors=errors)

            start_time = time.time()
            product = create_product(store_id, product_data)
            Log.info(f"{log_tag} product created with id={product['_id']} in {time.time() - start_time:.2f}s")
            return entity_response(product)

        except PyMongoError as e:
            Log.error(f"[PRODUCT_POST] {log_tag} PyMongoError {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["INTERNAL_ERROR"])
        except Exception as e:
            Log.error(f"[PRODUCT_POST] {log_tag} {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["INTERNAL_ERROR"])


@blp_product.route("/stores/<string:store_id>/products/<string:product_id>")
class ProductResource(MethodView):

    @crud_read_limiter("product")
    @blp_product.doc(summary="Retrieve a product with its category, images and variations")
    def get(self, store_id, product_id):
        log_tag = make_log_tag(
            "admin_product_resource.py", "ProductResource", "get", request.remote_addr, None, store_id,
            product_id=product_id,
        )

        if not product_id:
            return prepared_response(False, "BAD_REQUEST", ERROR_MESSAGES["PRODUCT_ID_REQUIRED"])

        try:
            product = Product.get_with_relations(product_id, store_id)
            if not product:
                return prepared_response(False, "NOT_FOUND", f"Product with ID {product_id} not found")
            return entity_response(product)
        except Exception as e:
            Log.error(f"[PRODUCT_GET] {log_tag} {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["INTERNAL_ERROR"])

    @token_required
    @crud_write_limiter("product")
    @blp_product.doc(
        summary="Update a product, its images and its variations",
        description="""
            Replaces the product's images with `product_data.images` and reconciles
            `product_data.product_variations` against the stored variations:

            • variations without `id` are created;
            • variations with a known `id` are updated;
            • stored variations missing from the list are deleted, or unlinked when
              only delivered orders reference them.

            Removing a variation still used by an undelivered order answers 400 with
            code P2014 and changes nothing. Images that disappear, and those listed in
            `deleted_images`, are removed from Cloudinary in the background.
        """,
        requestBody={
            "required": True,
            "content": {"application/json": {"schema": ProductUpdateSchema}},
        },
        security=[{"Bearer": []}],
    )
    def patch(self, store_id, product_id):
        log_tag = make_log_tag(
            "admin_product_resource.py", "ProductResource", "patch", request.remote_addr, current_user_id(), store_id,
            product_id=product_id,
        )

        try:
            payload = ProductUpdateSchema().load(request.get_json(silent=True) or {})
        except ValidationError as err:
            Log.info(f"{log_tag} invalid product data: {err.messages}")
            return prepared_response(False, "BAD_REQUEST", ERROR_MESSAGES["INVALID_PRODUCT_DATA"], errors=err.messages)

        product_data = payload["product_data"]

        try:
            if not get_owned_store(store_id):
                Log.info(f"{log_tag} store not owned by user")
                return prepared_response(False, "FORBIDDEN", ERROR_MESSAGES["UNAUTHORIZED"])

            product = Product.get_with_relations(product_id, store_id)
            if not product:
                return prepared_response(False, "NOT_FOUND", f"Product with ID {product_id} not found")

            errors = _missing_references(store_id, product_data)
            if errors:
                return prepared_response(False, "BAD_REQUEST", ERROR_MESSAGES["INVALID_PRODUCT_DATA"], errors=errors)

            start_time = time.time()
            updated = update_product(product, product_data, payload.get("deleted_images"), log_tag)
            Log.info(f"{log_tag} product updated in {time.time() - start_time:.2f}s")
            return entity_response(updated)

        except VariationInUseError:
            # answered as P2014 by the app error handler
            raise
        except PyMongoError as e:
            Log.error(f"[PRODUCT_PATCH] {log_tag} PyMongoError {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["INTERNAL_ERROR"])
        except Exception as e:
            Log.error(f"[PRODUCT_PATCH] {log_tag} {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["INTERNAL_ERROR"])

    @token_required
    @crud_delete_limiter("product")
    @blp_product.doc(
        summary="Delete a product",
        description="Deletes the product with its image records; its Cloudinary images are removed in the background.",
        security=[{"Bearer": []}],
    )
    def delete(self, store_id, product_id):
        log_tag = make_log_tag(
            "admin_product_resource.py", "ProductResource", "delete", request.remote_addr, current_user_id(), store_id,
            product_id=product_id,
        )

        try:
            if not get_owned_store(store_id):
                Log.info(f"{log_tag} store not owned by user")
                return prepared_response(False, "FORBIDDEN", ERROR_MESSAGES["UNAUTHORIZED"])

            product = Product.get_by_id(product_id, store_id)
            if not product:
                return prepared_response(False, "NOT_FOUND", f"Product with ID {product_id} not found")

            deleted = delete_product(product, log_tag)
            return entity_response(deleted)

        except VariationInUseError:
            # answered as P2014 by the app error handler
            raise
        except Exception as e:
            Log.error(f"[PRODUCT_DELETE] {log_tag} {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["INTERNAL_ERROR"])

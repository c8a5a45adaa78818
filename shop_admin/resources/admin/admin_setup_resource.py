# resources/admin/admin_setup_resource.py
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
from ...constants.service_code import ERROR_MESSAGES

# schemas
from ...schemas.admin.setup_schema import (
    BillboardSchema, CategorySchema, SizeSchema, ColorSchema
)

# models
from ...models.billboard_model import Billboard
from ...models.category_model import Category
from ...models.attribute_model import Size, Color


blp_billboard = Blueprint("Billboard", __name__, description="Billboard Management")
blp_category = Blueprint("Category", __name__, description="Category Management")
blp_size = Blueprint("Size", __name__, description="Size Management")
blp_color = Blueprint("Color", __name__, description="Color Management")


def _internal_error(tag, log_tag, error):
    Log.error(f"[{tag}] {log_tag} {error}")
    return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["INTERNAL_ERROR"])


def _forbidden(log_tag):
    Log.info(f"{log_tag} store not owned by user")
    return prepared_response(False, "FORBIDDEN", ERROR_MESSAGES["UNAUTHORIZED"])


# BEGINNING OF BILLBOARD
@blp_billboard.route("/stores/<string:store_id>/billboards")
class BillboardsResource(MethodView):

    @crud_read_limiter("billboard")
    @blp_billboard.doc(summary="List the billboards of a store")
    def get(self, store_id):
        log_tag = make_log_tag("admin_setup_resource.py", "BillboardsResource", "get", request.remote_addr, None, store_id)
        try:
            return entity_response(Billboard.get_by_store_id(store_id))
        except Exception as e:
            return _internal_error("BILLBOARD_GET", log_tag, e)

    @token_required
    @crud_write_limiter("billboard")
    @blp_billboard.doc(
        summary="Create a billboard",
        requestBody={
            "required": True,
            "content": {"application/json": {
                "schema": BillboardSchema,
                "example": {"label": "Summer sale", "image_url": "https://res.cloudinary.com/demo/image/upload/sale.png"},
            }},
        },
        security=[{"Bearer": []}],
    )
    def post(self, store_id):
        log_tag = make_log_tag(
            "admin_setup_resource.py", "BillboardsResource", "post", request.remote_addr, current_user_id(), store_id
        )

        try:
            item_data = BillboardSchema().load(request.get_json(silent=True) or {})
        except ValidationError as err:
            Log.info(f"{log_tag} invalid billboard data: {err.messages}")
            return prepared_response(False, "BAD_REQUEST", ERROR_MESSAGES["INVALID_BILLBOARD_DATA"], errors=err.messages)

        try:
            if not get_owned_store(store_id):
                return _forbidden(log_tag)

            billboard = Billboard(store_id=store_id, **item_data).save()
            Log.info(f"{log_tag} billboard created with id={billboard['_id']}")
            return entity_response(billboard)

        except Exception as e:
            return _internal_error("BILLBOARD_POST", log_tag, e)


@blp_billboard.route("/stores/<string:store_id>/billboards/<string:billboard_id>")
class BillboardResource(MethodView):

    @crud_read_limiter("billboard")
    @blp_billboard.doc(summary="Retrieve a billboard")
    def get(self, store_id, billboard_id):
        log_tag = make_log_tag(
            "admin_setup_resource.py", "BillboardResource", "get", request.remote_addr, None, store_id,
            billboard_id=billboard_id,
        )
        try:
            billboard = Billboard.get_by_id(billboard_id, store_id)
            if not billboard:
                return prepared_response(False, "NOT_FOUND", f"Billboard with ID {billboard_id} not found")
            return entity_response(billboard)
        except Exception as e:
            return _internal_error("BILLBOARD_GET", log_tag, e)

    @token_required
    @crud_write_limiter("billboard")
    @blp_billboard.doc(summary="Update a billboard", security=[{"Bearer": []}])
    def patch(self, store_id, billboard_id):
        log_tag = make_log_tag(
            "admin_setup_resource.py", "BillboardResource", "patch", request.remote_addr, current_user_id(), store_id,
            billboard_id=billboard_id,
        )

        try:
            item_data = BillboardSchema().load(request.get_json(silent=True) or {}, partial=True)
        except ValidationError as err:
            return prepared_response(False, "BAD_REQUEST", ERROR_MESSAGES["INVALID_BILLBOARD_DATA"], errors=err.messages)

        try:
            if not get_owned_store(store_id):
                return _forbidden(log_tag)

            billboard = Billboard.update(billboard_id, store_id, **item_data)
            if not billboard:
                return prepared_response(False, "NOT_FOUND", f"Billboard with ID {billboard_id} not found")
            return entity_response(billboard)

        except Exception as e:
            return _internal_error("BILLBOARD_PATCH", log_tag, e)

    @token_required
    @crud_delete_limiter("billboard")
    @blp_billboard.doc(summary="Delete a billboard", security=[{"Bearer": []}])
    def delete(self, store_id, billboard_id):
        log_tag = make_log_tag(
            "admin_setup_resource.py", "BillboardResource", "delete", request.remote_addr, current_user_id(), store_id,
            billboard_id=billboard_id,
        )

        try:
            if not get_owned_store(store_id):
                return _forbidden(log_tag)

            if Billboard.is_in_use(billboard_id):
                Log.info(f"{log_tag} billboard still used by categories")
                return prepared_response(False, "CONFLICT", "Remove all categories using this billboard first.")

            billboard = Billboard.delete(billboard_id, store_id)
            if not billboard:
                return prepared_response(False, "NOT_FOUND", f"Billboard with ID {billboard_id} not found")
            return entity_response(billboard)

        except Exception as e:
            return _internal_error("BILLBOARD_DELETE", log_tag, e)


# BEGINNING OF CATEGORY
@blp_category.route("/stores/<string:store_id>/categories")
class CategoriesResource(MethodView):

    @crud_read_limiter("category")
    @blp_category.doc(summary="List the categories of a store")
    def get(self, store_id):
        log_tag = make_log_tag("admin_setup_resource.py", "CategoriesResource", "get", request.remote_addr, None, store_id)

        if not store_id:
            return prepared_response(False, "BAD_REQUEST", ERROR_MESSAGES["STORE_ID_REQUIRED"])

        try:
            return entity_response(Category.get_by_store_id(store_id))
        except Exception as e:
            return _internal_error("CATEGORY_GET", log_tag, e)

    @token_required
    @crud_write_limiter("category")
    @blp_category.doc(
        summary="Create a new category",
        description="""
            Create a category for a store owned by the authenticated user.

            • The body is validated before ownership is checked (400 "Invalid category data").
            • A store not owned by the caller answers 403.
            • `billboard_id` must reference a billboard of the same store.
        """,
        requestBody={
            "required": True,
            "content": {
                "application/json": {
                    "schema": CategorySchema,
                    "example": {
                        "name": "Shoes",
                        "billboard_id": "60a6b938d4d8c24fa0804d62"
                    }
                }
            }
        },
        security=[{"Bearer": []}],
    )
    def post(self, store_id):
        """Handle the POST request to create a new category."""
        client_ip = request.remote_addr
        user_id = current_user_id()
        log_tag = make_log_tag("admin_setup_resource.py", "CategoriesResource", "post", client_ip, user_id, store_id)

        # 1. validate the body
        try:
            item_data = CategorySchema().load(request.get_json(silent=True) or {})
        except ValidationError as err:
            Log.info(f"{log_tag} invalid category data: {err.messages}")
            return prepared_response(False, "BAD_REQUEST", ERROR_MESSAGES["INVALID_CATEGORY_DATA"], errors=err.messages)

        try:
            # 2. store must belong to the caller
            if not get_owned_store(store_id):
                return _forbidden(log_tag)

            # 3. billboard must belong to the same store
            if not Billboard.get_by_id(item_data["billboard_id"], store_id):
                Log.info(f"{log_tag} billboard {item_data['billboard_id']} not found in store")
                return prepared_response(
                    False, "BAD_REQUEST", ERROR_MESSAGES["INVALID_CATEGORY_DATA"],
                    errors={"billboard_id": ["Billboard not found in this store."]},
                )

            # 4. create
            start_time = time.time()
            category = Category(
                store_id=store_id,
                name=item_data["name"],
                billboard_id=item_data["billboard_id"],
            ).save()

            duration = time.time() - start_time
            Log.info(f"{log_tag} category created with id={category['_id']} in {duration:.2f} seconds")

            return entity_response(category)

        except PyMongoError as e:
            return _internal_error("CATEGORY_POST", log_tag, f"PyMongoError {e}")
        except Exception as e:
            return _internal_error("CATEGORY_POST", log_tag, e)


@blp_category.route("/stores/<string:store_id>/categories/<string:category_id>")
class CategoryResource(MethodView):

    @crud_read_limiter("category")
    @blp_category.doc(summary="Retrieve a category with its billboard")
    def get(self, store_id, category_id):
        log_tag = make_log_tag(
            "admin_setup_resource.py", "CategoryResource", "get", request.remote_addr, None, store_id,
            category_id=category_id,
        )
        try:
            category = Category.get_with_billboard(category_id, store_id)
            if not category:
                return prepared_response(False, "NOT_FOUND", f"Category with ID {category_id} not found")
            return entity_response(category)
        except Exception as e:
            return _internal_error("CATEGORY_GET", log_tag, e)

    @token_required
    @crud_write_limiter("category")
    @blp_category.doc(
        summary="Update a category",
        requestBody={
            "required": True,
            "content": {"application/json": {
                "schema": CategorySchema,
                "example": {"name": "Sneakers", "billboard_id": "60a6b938d4d8c24fa0804d62"},
            }},
        },
        security=[{"Bearer": []}],
    )
    def patch(self, store_id, category_id):
        log_tag = make_log_tag(
            "admin_setup_resource.py", "CategoryResource", "patch", request.remote_addr, current_user_id(), store_id,
            category_id=category_id,
        )

        try:
            item_data = CategorySchema().load(request.get_json(silent=True) or {})
        except ValidationError as err:
            Log.info(f"{log_tag} invalid category data: {err.messages}")
            return prepared_response(False, "BAD_REQUEST", ERROR_MESSAGES["INVALID_CATEGORY_DATA"], errors=err.messages)

        try:
            if not get_owned_store(store_id):
                return _forbidden(log_tag)

            if not Billboard.get_by_id(item_data["billboard_id"], store_id):
                return prepared_response(
                    False, "BAD_REQUEST", ERROR_MESSAGES["INVALID_CATEGORY_DATA"],
                    errors={"billboard_id": ["Billboard not found in this store."]},
                )

            category = Category.update(category_id, store_id, **item_data)
            if not category:
                return prepared_response(False, "NOT_FOUND", f"Category with ID {category_id} not found")

            Log.info(f"{log_tag} category updated")
            return entity_response(category)

        except Exception as e:
            return _internal_error("CATEGORY_PATCH", log_tag, e)

    @token_required
    @crud_delete_limiter("category")
    @blp_category.doc(summary="Delete a category", security=[{"Bearer": []}])
    def delete(self, store_id, category_id):
        log_tag = make_log_tag(
            "admin_setup_resource.py", "CategoryResource", "delete", request.remote_addr, current_user_id(), store_id,
            category_id=category_id,
        )

        try:
            if not get_owned_store(store_id):
                return _forbidden(log_tag)

            if Category.is_in_use(category_id):
                Log.info(f"{log_tag} category still used by products")
                return prepared_response(False, "CONFLICT", "Remove all products using this category first.")

            category = Category.delete(category_id, store_id)
            if not category:
                return prepared_response(False, "NOT_FOUND", f"Category with ID {category_id} not found")

            Log.info(f"{log_tag} category deleted")
            return entity_response(category)

        except Exception as e:
            return _internal_error("CATEGORY_DELETE", log_tag, e)


# BEGINNING OF SIZE / COLOR
def _register_attribute_routes(blp, model, schema_cls, entity, invalid_message):
    """Sizes and colors share the same shape and rules."""
    collection_path = f"/stores/<string:store_id>/{model.collection_name}"
    label = entity.capitalize()
    tag = entity.upper()

    @blp.route(collection_path)
    class AttributesResource(MethodView):

        @crud_read_limiter(entity)
        @blp.doc(summary=f"List the {model.collection_name} of a store")
        def get(self, store_id):
            log_tag = make_log_tag("admin_setup_resource.py", f"{label}sResource", "get", request.remote_addr, None, store_id)
            try:
                return entity_response(model.get_by_store_id(store_id))
            except Exception as e:
                return _internal_error(f"{tag}_GET", log_tag, e)

        @token_required
        @crud_write_limiter(entity)
        @blp.doc(summary=f"Create a {entity}", security=[{"Bearer": []}])
        def post(self, store_id):
            log_tag = make_log_tag(
                "admin_setup_resource.py", f"{label}sResource", "post", request.remote_addr, current_user_id(), store_id
            )

            try:
                item_data = schema_cls().load(request.get_json(silent=True) or {})
            except ValidationError as err:
                return prepared_response(False, "BAD_REQUEST", invalid_message, errors=err.messages)

            try:
                if not get_owned_store(store_id):
                    return _forbidden(log_tag)

                record = model(store_id=store_id, **item_data).save()
                Log.info(f"{log_tag} {entity} created with id={record['_id']}")
                return entity_response(record)

            except Exception as e:
                return _internal_error(f"{tag}_POST", log_tag, e)

    @blp.route(f"{collection_path}/<string:record_id>")
    class AttributeResource(MethodView):

        @crud_read_limiter(entity)
        @blp.doc(summary=f"Retrieve a {entity}")
        def get(self, store_id, record_id):
            log_tag = make_log_tag("admin_setup_resource.py", f"{label}Resource", "get", request.remote_addr, None, store_id)
            try:
                record = model.get_by_id(record_id, store_id)
                if not record:
                    return prepared_response(False, "NOT_FOUND", f"{label} with ID {record_id} not found")
                return entity_response(record)
            except Exception as e:
                return _internal_error(f"{tag}_GET", log_tag, e)

        @token_required
        @crud_write_limiter(entity)
        @blp.doc(summary=f"Update a {entity}", security=[{"Bearer": []}])
        def patch(self, store_id, record_id):
            log_tag = make_log_tag(
                "admin_setup_resource.py", f"{label}Resource", "patch", request.remote_addr, current_user_id(), store_id
            )

            try:
                item_data = schema_cls().load(request.get_json(silent=True) or {}, partial=True)
            except ValidationError as err:
                return prepared_response(False, "BAD_REQUEST", invalid_message, errors=err.messages)

            try:
                if not get_owned_store(store_id):
                    return _forbidden(log_tag)

                record = model.update(record_id, store_id, **item_data)
                if not record:
                    return prepared_response(False, "NOT_FOUND", f"{label} with ID {record_id} not found")
                return entity_response(record)

            except Exception as e:
                return _internal_error(f"{tag}_PATCH", log_tag, e)

        @token_required
        @crud_delete_limiter(entity)
        @blp.doc(summary=f"Delete a {entity}", security=[{"Bearer": []}])
        def delete(self, store_id, record_id):
            log_tag = make_log_tag(
                "admin_setup_resource.py", f"{label}Resource", "delete", request.remote_addr, current_user_id(), store_id
            )

            try:
                if not get_owned_store(store_id):
                    return _forbidden(log_tag)

                if model.is_in_use(record_id):
                    Log.info(f"{log_tag} {entity} still used by product variations")
                    return prepared_response(
                        False, "CONFLICT", f"Remove all product variations using this {entity} first."
                    )

                record = model.delete(record_id, store_id)
                if not record:
                    return prepared_response(False, "NOT_FOUND", f"{label} with ID {record_id} not found")
                return entity_response(record)

            except Exception as e:
                return _internal_error(f"{tag}_DELETE", log_tag, e)

    return AttributesResource, AttributeResource


SizesResource, SizeResource = _register_attribute_routes(
    blp_size, Size, SizeSchema, "size", ERROR_MESSAGES["INVALID_SIZE_DATA"]
)
ColorsResource, ColorResource = _register_attribute_routes(
    blp_color, Color, ColorSchema, "color", ERROR_MESSAGES["INVALID_COLOR_DATA"]
)

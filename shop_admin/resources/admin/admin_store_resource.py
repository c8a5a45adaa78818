# resources/admin/admin_store_resource.py
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
from ...models.store_model import Store
from ...schemas.admin.setup_schema import StoreSchema
from ...constants.service_code import ERROR_MESSAGES


blp_store = Blueprint("Store", __name__, description="Store settings management")


@blp_store.route("/stores")
class StoresResource(MethodView):

    @token_required
    @crud_write_limiter("store")
    @blp_store.doc(
        summary="Create a new store",
        description="Create a store owned by the authenticated user.",
        requestBody={
            "required": True,
            "content": {"application/json": {"schema": StoreSchema, "example": {"name": "My Store"}}},
        },
        security=[{"Bearer": []}],
    )
    def post(self):
        user_id = current_user_id()
        log_tag = make_log_tag("admin_store_resource.py", "StoresResource", "post", request.remote_addr, user_id, None)

        try:
            item_data = StoreSchema().load(request.get_json(silent=True) or {})
        except ValidationError as err:
            Log.info(f"{log_tag} invalid store data: {err.messages}")
            return prepared_response(False, "BAD_REQUEST", ERROR_MESSAGES["INVALID_STORE_DATA"], errors=err.messages)

        try:
            start_time = time.time()
            store = Store(name=item_data["name"], user_id=user_id).save()
            Log.info(f"{log_tag} store created with id={store['_id']} in {time.time() - start_time:.2f}s")
            return entity_response(store, "CREATED")

        except Exception as e:
            Log.error(f"[STORE_POST] {log_tag} {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["INTERNAL_ERROR"])

    @token_required
    @crud_read_limiter("store")
    @blp_store.doc(summary="List the authenticated user's stores", security=[{"Bearer": []}])
    def get(self):
        user_id = current_user_id()
        log_tag = make_log_tag("admin_store_resource.py", "StoresResource", "get", request.remote_addr, user_id, None)

        try:
            return entity_response(Store.get_by_user_id(user_id))
        except Exception as e:
            Log.error(f"[STORE_GET] {log_tag} {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["INTERNAL_ERROR"])


@blp_store.route("/stores/<string:store_id>")
class StoreResource(MethodView):

    @crud_read_limiter("store")
    @blp_store.doc(summary="Retrieve a store by id")
    def get(self, store_id):
        log_tag = make_log_tag("admin_store_resource.py", "StoreResource", "get", request.remote_addr, None, store_id)

        try:
            store = Store.get_by_id(store_id)
            if not store:
                return prepared_response(False, "NOT_FOUND", f"Store with ID {store_id} not found")
            return entity_response(store)

        except Exception as e:
            Log.error(f"[STORE_GET] {log_tag} {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["INTERNAL_ERROR"])

    @token_required
    @crud_write_limiter("store")
    @blp_store.doc(
        summary="Rename a store",
        requestBody={
            "required": True,
            "content": {"application/json": {"schema": StoreSchema, "example": {"name": "Renamed Store"}}},
        },
        security=[{"Bearer": []}],
    )
    def patch(self, store_id):
        user_id = current_user_id()
        log_tag = make_log_tag("admin_store_resource.py", "StoreResource", "patch", request.remote_addr, user_id, store_id)

        try:
            item_data = StoreSchema().load(request.get_json(silent=True) or {})
        except ValidationError as err:
            Log.info(f"{log_tag} invalid store data: {err.messages}")
            return prepared_response(False, "BAD_REQUEST", ERROR_MESSAGES["INVALID_STORE_DATA"], errors=err.messages)

        try:
            if not get_owned_store(store_id):
                Log.info(f"{log_tag} store not owned by user")
                return prepared_response(False, "FORBIDDEN", ERROR_MESSAGES["UNAUTHORIZED"])

            store = Store.update(store_id, name=item_data["name"])
            Log.info(f"{log_tag} store updated")
            return entity_response(store)

        except PyMongoError as e:
            Log.error(f"[STORE_PATCH] {log_tag} PyMongoError {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["INTERNAL_ERROR"])
        except Exception as e:
            Log.error(f"[STORE_PATCH] {log_tag} {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["INTERNAL_ERROR"])

    @token_required
    @crud_delete_limiter("store")
    @blp_store.doc(
        summary="Delete a store",
        description="Rejected with 409 while the store still has products, categories, billboards, sizes or colors.",
        security=[{"Bearer": []}],
    )
    def delete(self, store_id):
        user_id = current_user_id()
        log_tag = make_log_tag("admin_store_resource.py", "StoreResource", "delete", request.remote_addr, user_id, store_id)

        try:
            if not get_owned_store(store_id):
                Log.info(f"{log_tag} store not owned by user")
                return prepared_response(False, "FORBIDDEN", ERROR_MESSAGES["UNAUTHORIZED"])

            dependents = Store.dependent_collections(store_id)
            if dependents:
                Log.info(f"{log_tag} store still has {dependents}")
                return prepared_response(
                    False,
                    "CONFLICT",
                    f"Remove all {', '.join(dependents)} before deleting the store.",
                )

            store = Store.delete(store_id)
            Log.info(f"{log_tag} store deleted")
            return entity_response(store)

        except Exception as e:
            Log.error(f"[STORE_DELETE] {log_tag} {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["INTERNAL_ERROR"])

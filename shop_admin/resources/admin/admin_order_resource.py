# resources/admin/admin_order_resource.py
from flask import request
from flask.views import MethodView
from flask_smorest import Blueprint
from marshmallow import ValidationError

from ...security.auth import token_required, current_user_id, get_owned_store
from ...utils.rate_limits import crud_read_limiter, crud_write_limiter
from ...utils.helpers import make_log_tag
from ...utils.json_response import prepared_response, entity_response
from ...utils.logger import Log
from ...models.order_model import Order
from ...schemas.admin.order_schema import OrderUpdateSchema
from ...constants.service_code import ERROR_MESSAGES


blp_order = Blueprint("Orders", __name__, description="Order management operations")


@blp_order.route("/stores/<string:store_id>/orders")
class OrdersResource(MethodView):

    @token_required
    @crud_read_limiter("order")
    @blp_order.doc(summary="List a store's orders with their items and totals", security=[{"Bearer": []}])
    def get(self, store_id):
        log_tag = make_log_tag("admin_order_resource.py", "OrdersResource", "get", request.remote_addr, current_user_id(), store_id)

        try:
            if not get_owned_store(store_id):
                return prepared_response(False, "FORBIDDEN", ERROR_MESSAGES["UNAUTHORIZED"])

            return entity_response(Order.list_with_items(store_id))
        except Exception as e:
            Log.error(f"[ORDER_GET] {log_tag} {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["INTERNAL_ERROR"])


@blp_order.route("/stores/<string:store_id>/orders/<string:order_id>")
class OrderResource(MethodView):

    @token_required
    @crud_read_limiter("order")
    @blp_order.doc(summary="Retrieve one order", security=[{"Bearer": []}])
    def get(self, store_id, order_id):
        log_tag = make_log_tag(
            "admin_order_resource.py", "OrderResource", "get", request.remote_addr, current_user_id(), store_id,
            order_id=order_id,
        )

        try:
            if not get_owned_store(store_id):
                return prepared_response(False, "FORBIDDEN", ERROR_MESSAGES["UNAUTHORIZED"])

            order = Order.get_with_items(order_id, store_id)
            if not order:
                return prepared_response(False, "NOT_FOUND", f"Order with ID {order_id} not found")
            return entity_response(order)
        except Exception as e:
            Log.error(f"[ORDER_GET] {log_tag} {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["INTERNAL_ERROR"])

    @token_required
    @crud_write_limiter("order")
    @blp_order.doc(
        summary="Mark an order delivered and/or paid",
        requestBody={
            "required": True,
            "content": {"application/json": {"schema": OrderUpdateSchema, "example": {"delivered": True}}},
        },
        security=[{"Bearer": []}],
    )
    def patch(self, store_id, order_id):
        log_tag = make_log_tag(
            "admin_order_resource.py", "OrderResource", "patch", request.remote_addr, current_user_id(), store_id,
            order_id=order_id,
        )

        try:
            updates = OrderUpdateSchema().load(request.get_json(silent=True) or {})
        except ValidationError as err:
            return prepared_response(False, "BAD_REQUEST", ERROR_MESSAGES["INVALID_ORDER_DATA"], errors=err.messages)

        try:
            if not get_owned_store(store_id):
                return prepared_response(False, "FORBIDDEN", ERROR_MESSAGES["UNAUTHORIZED"])

            order = Order.update(order_id, store_id, **updates)
            if not order:
                return prepared_response(False, "NOT_FOUND", f"Order with ID {order_id} not found")

            Log.info(f"{log_tag} order updated {updates}")
            return entity_response(Order.attach_items(order))
        except Exception as e:
            Log.error(f"[ORDER_PATCH] {log_tag} {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["INTERNAL_ERROR"])

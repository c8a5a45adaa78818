from marshmallow import Schema, fields, validate

from ...utils.validation import validate_objectid, validate_hex_color, validate_not_blank


# Store Schema Class
class StoreSchema(Schema):
    id = fields.Str(dump_only=True)

    name = fields.Str(
        required=True,
        validate=[validate.Length(min=1, max=200), validate_not_blank],
        error_messages={"required": "Store name is required"}
    )
    user_id = fields.Str(dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)


# Billboard schemas
class BillboardSchema(Schema):
    id = fields.Str(dump_only=True)

    label = fields.Str(
        required=True,
        validate=[validate.Length(min=1, max=200), validate_not_blank],
        error_messages={"required": "Billboard label is required"}
    )
    image_url = fields.Url(
        required=True,
        error_messages={"required": "Billboard image_url is required", "invalid": "image_url must be a URL"}
    )
    store_id = fields.Str(dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)


# Category schemas
class CategorySchema(Schema):
    id = fields.Str(dump_only=True)

    name = fields.Str(
        required=True,
        validate=[validate.Length(min=1, max=100), validate_not_blank],
        error_messages={"required": "Category name is required", "invalid": "Category name"}
    )
    billboard_id = fields.Str(
        required=True,
        validate=[validate.Length(min=1), validate_objectid],
        error_messages={"required": "billboard_id is required", "invalid": "Billboard id"}
    )
    store_id = fields.Str(dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)


# Size / color schemas
class SizeSchema(Schema):
    id = fields.Str(dump_only=True)

    name = fields.Str(
        required=True,
        validate=[validate.Length(min=1, max=100), validate_not_blank],
        error_messages={"required": "Size name is required"}
    )
    value = fields.Str(
        required=True,
        validate=[validate.Length(min=1, max=50), validate_not_blank],
        error_messages={"required": "Size value is required"}
    )
    store_id = fields.Str(dump_only=True)


class ColorSchema(SizeSchema):
    value = fields.Str(
        required=True,
        validate=validate_hex_color,
        error_messages={"required": "Color value is required"}
    )

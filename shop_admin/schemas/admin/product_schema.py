# schemas/admin/product_schema.py
from marshmallow import (
    Schema, fields, validate, validates_schema, ValidationError
)

from ...utils.validation import validate_objectid, validate_not_blank


class ProductImageSchema(Schema):
    url = fields.Url(required=True)
    cloudinary_public_id = fields.Str(required=True, validate=validate.Length(min=1))


class ProductVariationSchema(Schema):
    """Variations sent without `id` are new; with `id` they edit a persisted one."""

    id = fields.Str(load_default=None, allow_none=True, validate=validate_objectid)
    color_id = fields.Str(required=True, validate=validate_objectid)
    size_id = fields.Str(required=True, validate=validate_objectid)
    quantity = fields.Int(load_default=0, validate=validate.Range(min=0))


class ProductSchema(Schema):
    """Schema for creating a product, and for the `product_data` of an update."""

    id = fields.Str(dump_only=True)

    name = fields.Str(required=True, validate=[validate.Length(min=1, max=200), validate_not_blank])
    price = fields.Float(required=True, validate=validate.Range(min=0))
    category_id = fields.Str(required=True, validate=validate_objectid)
    is_featured = fields.Bool(load_default=False)
    is_archived = fields.Bool(load_default=False)

    images = fields.List(
        fields.Nested(ProductImageSchema),
        required=True,
        validate=validate.Length(min=1, error="At least one image is required."),
    )
    product_variations = fields.List(
        fields.Nested(ProductVariationSchema),
        required=True,
        validate=validate.Length(min=1, error="At least one variation is required."),
    )

    @validates_schema
    def validate_unique_variations(self, data, **kwargs):
        """A color/size pair may appear only once per product."""
        seen = set()
        for variation in data.get("product_variations") or []:
            pair = (variation.get("color_id"), variation.get("size_id"))
            if pair in seen:
                raise ValidationError(
                    {"product_variations": ["Each color/size combination may appear only once."]}
                )
            seen.add(pair)


class ProductUpdateSchema(Schema):
    """PATCH body: the full product plus the images the client removed."""

    product_data = fields.Nested(ProductSchema, required=True)
    deleted_images = fields.List(fields.Nested(ProductImageSchema), load_default=list)


class ProductQuerySchema(Schema):
    category_id = fields.Str(required=False, validate=validate_objectid)
    color_id = fields.Str(required=False, validate=validate_objectid)
    size_id = fields.Str(required=False, validate=validate_objectid)
    is_featured = fields.Bool(required=False)
    include_archived = fields.Bool(load_default=False)

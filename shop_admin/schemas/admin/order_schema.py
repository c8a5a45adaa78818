from marshmallow import Schema, fields, validates_schema, ValidationError


class OrderUpdateSchema(Schema):
    delivered = fields.Bool(required=False)
    is_paid = fields.Bool(required=False)

    @validates_schema
    def require_one_field(self, data, **kwargs):
        if not data:
            raise ValidationError("Provide delivered and/or is_paid.")

# wellnest/api/decor/schemas.py
from marshmallow import Schema, fields, validate

from wellnest.models.decor import DecorType


class DecorQuerySchema(Schema):
    decor_type = fields.Str(load_default=None, validate=validate.OneOf([e.value for e in DecorType]))


class DecorInventoryQuerySchema(Schema):
    equipped = fields.Bool(load_default=False)


class BuyDecorSchema(Schema):
    decor_id = fields.Str(required=True, validate=validate.Length(min=1))


class DecorItemResponseSchema(Schema):
    decor_id = fields.Str()
    decor_name = fields.Str()
    decor_type = fields.Str()
    decor_description = fields.Str(allow_none=True)
    decor_image_url = fields.Str(allow_none=True)
    decor_price = fields.Int()


class DecorInventoryResponseSchema(Schema):
    inventory_id = fields.Str()
    decor_id = fields.Str()
    is_equipped = fields.Bool()
    acquired_at = fields.DateTime()
    decor = fields.Nested(DecorItemResponseSchema)

# wellnest/api/food/schemas.py
from marshmallow import Schema, fields, validate

from wellnest.api.pets.schemas import PetResponseSchema


class BuyFoodSchema(Schema):
    """POST /api/v1/pets/food/buy 요청 스키마."""
    food_id = fields.Str(required=True, validate=validate.Length(min=1))
    quantity = fields.Int(load_default=1, validate=validate.Range(min=1, max=99))


class FeedPetSchema(Schema):
    """POST /api/v1/pets/food/feed 요청 스키마."""
    food_id = fields.Str(required=True, validate=validate.Length(min=1))


class PetFoodResponseSchema(Schema):
    food_id = fields.Str()
    food_name = fields.Str()
    food_description = fields.Str(allow_none=True)
    xp_gain = fields.Int()
    hunger_fill_amount = fields.Int()
    food_price = fields.Int()
    food_image_url = fields.Str(allow_none=True)


class FoodInventoryResponseSchema(Schema):
    inventory_id = fields.Str()
    food_id = fields.Str()
    quantity = fields.Int()
    acquired_at = fields.DateTime()
    food = fields.Nested(PetFoodResponseSchema)


class BuyFoodResponseSchema(Schema):
    pet = fields.Nested(PetResponseSchema)
    inventory = fields.Nested(FoodInventoryResponseSchema)
    total_cost = fields.Int()

# wellnest/models/food.py
from wellnest.core.database import db
from wellnest.models.base import generate_uuid, utcnow


class PetFood(db.Model):
    """상점에서 판매하는 음식 카탈로그 항목."""
    __tablename__ = 'pet_foods'

    food_id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    food_name = db.Column(db.String(100), nullable=False, unique=True)
    food_description = db.Column(db.Text, nullable=True)
    xp_gain = db.Column(db.Integer, nullable=False, default=0)
    hunger_fill_amount = db.Column(db.Integer, nullable=False, default=0)
    food_price = db.Column(db.Integer, nullable=False, default=0)
    food_image_url = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)


class FoodInventory(db.Model):
    """사용자별 음식 보유 수량. 수량이 0이 되면 행을 삭제합니다."""
    __tablename__ = 'food_inventories'
    __table_args__ = (
        db.UniqueConstraint('owner_id', 'food_id', name='uq_food_inventory_owner_food'),
    )

    inventory_id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    owner_id = db.Column(db.String(64), nullable=False, index=True)
    food_id = db.Column(db.String(36), db.ForeignKey('pet_foods.food_id', ondelete='CASCADE'), nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=0)
    acquired_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    food = db.relationship('PetFood', lazy='joined')

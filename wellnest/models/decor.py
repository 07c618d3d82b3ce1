# wellnest/models/decor.py
from enum import Enum

from wellnest.core.database import db
from wellnest.models.base import generate_uuid, utcnow


class DecorType(Enum):
    CLOCK = "clock"
    CHAIR = "chair"
    DESK = "desk"
    WALLPAPER = "wallpaper"
    TILES = "tiles"


class DecorItem(db.Model):
    """반려동물 방을 꾸미는 장식 아이템 카탈로그."""
    __tablename__ = 'decor_items'

    decor_id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    decor_name = db.Column(db.String(100), nullable=False, unique=True)
    decor_type = db.Column(db.String(20), nullable=False, index=True)
    decor_description = db.Column(db.Text, nullable=True)
    decor_image_url = db.Column(db.String(500), nullable=True)
    decor_price = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


class DecorInventory(db.Model):
    """사용자가 보유한 장식 아이템. 같은 아이템은 한 번만 보유할 수 있습니다."""
    __tablename__ = 'decor_inventories'
    __table_args__ = (
        db.UniqueConstraint('owner_id', 'decor_id', name='uq_decor_inventory_owner_decor'),
    )

    inventory_id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    owner_id = db.Column(db.String(64), nullable=False, index=True)
    decor_id = db.Column(db.String(36), db.ForeignKey('decor_items.decor_id', ondelete='CASCADE'), nullable=False)
    is_equipped = db.Column(db.Boolean, nullable=False, default=False)
    acquired_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    decor = db.relationship('DecorItem', lazy='joined')

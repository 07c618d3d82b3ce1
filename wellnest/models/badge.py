# wellnest/models/badge.py
from wellnest.core.database import db
from wellnest.models.base import generate_uuid, utcnow


class Badge(db.Model):
    __tablename__ = 'badges'

    badge_id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    name = db.Column(db.String(100), nullable=False, unique=True)
    description = db.Column(db.Text, nullable=True)
    icon_url = db.Column(db.String(500), nullable=True)
    event_trigger = db.Column(db.String(50), nullable=True)
    threshold = db.Column(db.Integer, nullable=True)
    condition_type = db.Column(db.String(50), nullable=True)
    level = db.Column(db.Integer, nullable=False, default=1)


class UserBadge(db.Model):
    """사용자에게 수여된 배지. 수여 로직은 이 서비스의 범위 밖입니다."""
    __tablename__ = 'user_badges'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'badge_id', name='uq_user_badge_user_badge'),
    )

    user_badge_id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    badge_id = db.Column(db.String(36), db.ForeignKey('badges.badge_id', ondelete='CASCADE'), nullable=False)
    awarded_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    badge = db.relationship('Badge', lazy='joined')

# wellnest/models/gratitude_entry.py
from wellnest.core.database import db
from wellnest.models.base import generate_uuid, utcnow


class GratitudeEntry(db.Model):
    """감사 항아리 항목. 본문은 암호화되어 저장됩니다."""
    __tablename__ = 'gratitude_entries'

    gratitude_id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    content_encrypted = db.Column(db.JSON, nullable=False)
    is_deleted = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

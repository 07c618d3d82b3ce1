# wellnest/models/journal_entry.py
from wellnest.core.database import db
from wellnest.models.base import generate_uuid, utcnow


class JournalEntry(db.Model):
    """마음 거울(일기) 항목. 제목과 본문은 암호화된 {iv, content, tag} 형태로 저장됩니다."""
    __tablename__ = 'journal_entries'

    journal_id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    title_encrypted = db.Column(db.JSON, nullable=False)
    content_encrypted = db.Column(db.JSON, nullable=False)
    wellness_state = db.Column(db.JSON, nullable=True)
    is_deleted = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

# wellnest/models/mood_check_in.py
from wellnest.core.database import db
from wellnest.models.base import generate_uuid, utcnow

# 체크인에서 선택할 수 있는 감정 목록
VALID_MOODS = (
    "happy", "excited", "grateful", "calm", "relaxed", "proud", "hopeful", "loved",
    "confident", "content", "tired", "bored", "confused", "nervous", "anxious",
    "stressed", "sad", "lonely", "angry", "frustrated", "overwhelmed", "scared",
)


class MoodCheckIn(db.Model):
    """하루 한 번 기록하는 감정 체크인. mood_1은 필수, mood_2/mood_3은 선택."""
    __tablename__ = 'mood_check_ins'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'check_in_date', name='uq_mood_check_in_user_date'),
    )

    check_in_id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    mood_1 = db.Column(db.String(30), nullable=False)
    mood_2 = db.Column(db.String(30), nullable=True)
    mood_3 = db.Column(db.String(30), nullable=True)
    checked_in_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    # 서버 타임존 기준 체크인 날짜
    check_in_date = db.Column(db.Date, nullable=False)

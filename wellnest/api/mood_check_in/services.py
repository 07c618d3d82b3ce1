# wellnest/api/mood_check_in/services.py
import logging
from typing import Optional, List

from sqlalchemy.exc import IntegrityError

from wellnest.core.database import db
from wellnest.core.errors import AppError
from wellnest.models.mood_check_in import MoodCheckIn, VALID_MOODS
from wellnest.utils.datetime_utils import DateTimeUtils


class MoodCheckInService:
    """하루 한 번 감정 체크인을 기록하는 서비스 클래스."""
    def __init__(self, timezone: str = 'UTC'):
        self.timezone = timezone
        logging.info("MoodCheckInService initialized.")

    @staticmethod
    def _normalize_moods(mood_1: str, mood_2: Optional[str], mood_3: Optional[str]) -> List[Optional[str]]:
        moods = [m.strip().lower() if isinstance(m, str) and m.strip() else None for m in (mood_1, mood_2, mood_3)]
        if moods[0] is None:
            raise AppError(400, "INVALID_MOOD", "첫 번째 감정은 필수입니다.")

        selected = [m for m in moods if m is not None]
        invalid = [m for m in selected if m not in VALID_MOODS]
        if invalid:
            raise AppError(400, "INVALID_MOOD", f"알 수 없는 감정입니다: {', '.join(invalid)}")
        if len(selected) != len(set(selected)):
            raise AppError(400, "DUPLICATE_MOODS", "같은 감정을 중복해서 선택할 수 없습니다.")
        return moods

    def get_check_in_for_today(self, user_id: str) -> Optional[MoodCheckIn]:
        start, end = DateTimeUtils.day_bounds(self.timezone)
        return (
            MoodCheckIn.query
            .filter(
                MoodCheckIn.user_id == user_id,
                MoodCheckIn.checked_in_at >= start,
                MoodCheckIn.checked_in_at <= end,
            )
            .first()
        )

    def has_checked_in_today(self, user_id: str) -> bool:
        return self.get_check_in_for_today(user_id) is not None

    def create_check_in(self, user_id: str, mood_1: str, mood_2: Optional[str] = None,
                        mood_3: Optional[str] = None) -> MoodCheckIn:
        moods = self._normalize_moods(mood_1, mood_2, mood_3)
        if self.has_checked_in_today(user_id):
            raise AppError(400, "CHECKIN_EXISTS", "오늘은 이미 감정 체크인을 했어요.")

        now = DateTimeUtils.now()
        check_in = MoodCheckIn(
            user_id=user_id, mood_1=moods[0], mood_2=moods[1], mood_3=moods[2],
            checked_in_at=now, check_in_date=DateTimeUtils.today(self.timezone, now),
        )
        db.session.add(check_in)
        try:
            db.session.commit()
        except IntegrityError:
            # 동시에 들어온 다른 요청이 먼저 체크인한 경우
            db.session.rollback()
            logging.warning(f"Mood check-in for user {user_id} was created concurrently.")
            raise AppError(400, "CHECKIN_EXISTS", "오늘은 이미 감정 체크인을 했어요.")
        logging.info(f"Mood check-in {check_in.check_in_id} created for user {user_id}")
        return check_in

    def get_check_in_history(self, user_id: str, limit: int = 30) -> List[MoodCheckIn]:
        return (
            MoodCheckIn.query
            .filter_by(user_id=user_id)
            .order_by(MoodCheckIn.checked_in_at.desc())
            .limit(limit)
            .all()
        )

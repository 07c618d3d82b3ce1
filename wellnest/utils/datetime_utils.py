# wellnest/utils/datetime_utils.py
"""
프로젝트 전체에서 일관된 시간/날짜 처리를 위한 중앙화된 유틸리티 모듈

이 모듈의 목적:
1. 모든 시간 값을 UTC timezone-aware datetime으로 표준화
2. DB에서 읽은 timezone-naive 값(SQLite 등)을 UTC로 정규화
3. 서버 타임존 기준 '오늘'의 시작/끝 경계 계산
4. ISO 포맷 파싱/생성 통일
"""

import logging
from datetime import datetime, date, timezone, time, timedelta
from typing import Optional, Tuple
from dateutil import parser as dateutil_parser
from dateutil import tz

logger = logging.getLogger(__name__)


class DateTimeUtils:
    """시간/날짜 처리를 위한 중앙화된 유틸리티 클래스"""

    @staticmethod
    def now() -> datetime:
        """현재 시간을 UTC timezone-aware datetime으로 반환"""
        return datetime.now(timezone.utc)

    @staticmethod
    def to_utc(dt: Optional[datetime]) -> Optional[datetime]:
        """
        datetime을 UTC timezone-aware 값으로 정규화합니다.
        timezone-naive 값은 UTC로 저장된 것으로 간주합니다.
        """
        if dt is None:
            return None
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    @staticmethod
    def get_timezone(tz_name: str = 'UTC'):
        """IANA 타임존 이름을 tzinfo로 변환합니다. 알 수 없는 이름이면 UTC를 사용합니다."""
        zone = tz.gettz(tz_name)
        if zone is None:
            logger.warning(f"Unknown timezone '{tz_name}', falling back to UTC.")
            return timezone.utc
        return zone

    @staticmethod
    def today(tz_name: str = 'UTC', reference: Optional[datetime] = None) -> date:
        """서버 타임존 기준 오늘 날짜를 반환"""
        reference = DateTimeUtils.to_utc(reference) or DateTimeUtils.now()
        return reference.astimezone(DateTimeUtils.get_timezone(tz_name)).date()

    @staticmethod
    def day_bounds(tz_name: str = 'UTC', reference: Optional[datetime] = None) -> Tuple[datetime, datetime]:
        """
        서버 타임존 기준으로 reference가 속한 날의 시작과 끝(23:59:59.999)을 UTC로 반환합니다.

        Returns:
            (start_utc, end_utc)
        """
        zone = DateTimeUtils.get_timezone(tz_name)
        local_day = DateTimeUtils.today(tz_name, reference)
        start_local = datetime.combine(local_day, time.min).replace(tzinfo=zone)
        end_local = start_local + timedelta(days=1) - timedelta(milliseconds=1)
        return start_local.astimezone(timezone.utc), end_local.astimezone(timezone.utc)

    @staticmethod
    def parse_iso_datetime(iso_string: str) -> datetime:
        """
        ISO 포맷 문자열을 datetime 객체로 파싱

        지원 포맷:
        - 2024-01-15T10:30:00Z
        - 2024-01-15T10:30:00+09:00
        - 2024-01-15T10:30:00.123456Z
        - 2024-01-15T10:30:00
        """
        if not iso_string:
            raise ValueError("빈 문자열은 파싱할 수 없습니다")
        try:
            if iso_string.endswith('Z'):
                iso_string = iso_string[:-1] + '+00:00'
            dt = dateutil_parser.isoparse(iso_string)
        except (ValueError, OverflowError) as e:
            logger.error(f"ISO datetime 파싱 실패: {iso_string} - {e}")
            raise ValueError(f"잘못된 ISO 날짜 형식입니다: {iso_string}")
        return DateTimeUtils.to_utc(dt)

    @staticmethod
    def to_iso_string(dt: Optional[datetime]) -> Optional[str]:
        """datetime 객체를 ISO 포맷 문자열(Z 접미사)로 변환"""
        if dt is None:
            return None
        return DateTimeUtils.to_utc(dt).isoformat().replace('+00:00', 'Z')

    @staticmethod
    def remaining_minutes(until: datetime, reference: Optional[datetime] = None) -> int:
        """until 까지 남은 시간을 분 단위로 올림하여 반환합니다. 이미 지났다면 0."""
        reference = DateTimeUtils.to_utc(reference) or DateTimeUtils.now()
        seconds = (DateTimeUtils.to_utc(until) - reference).total_seconds()
        if seconds <= 0:
            return 0
        minutes, remainder = divmod(seconds, 60)
        return int(minutes) + (1 if remainder > 0 else 0)

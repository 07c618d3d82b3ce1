# wellnest/models/base.py
import uuid

from wellnest.utils.datetime_utils import DateTimeUtils


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow():
    # 테스트에서 DateTimeUtils.now 를 고정할 수 있도록 호출 시점에 조회합니다.
    return DateTimeUtils.now()

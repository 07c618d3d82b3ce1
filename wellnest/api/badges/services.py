# wellnest/api/badges/services.py
import logging
from typing import List, Dict, Any

from wellnest.models.badge import Badge, UserBadge


class BadgeService:
    """배지 조회 전용 서비스. 배지 수여는 다른 시스템에서 처리합니다."""
    def __init__(self):
        logging.info("BadgeService initialized.")

    def get_user_badges(self, user_id: str) -> List[UserBadge]:
        return (
            UserBadge.query
            .filter_by(user_id=user_id)
            .order_by(UserBadge.awarded_at.desc())
            .all()
        )

    def get_user_badge_count(self, user_id: str) -> int:
        return UserBadge.query.filter_by(user_id=user_id).count()

    def check_user_has_badge(self, user_id: str, badge_id: str) -> bool:
        return UserBadge.query.filter_by(user_id=user_id, badge_id=badge_id).first() is not None

    def get_all_obtainable_badges(self, user_id: str) -> List[Dict[str, Any]]:
        """모든 배지와 사용자의 획득 여부(is_obtained, awarded_at)를 함께 반환합니다."""
        awarded = {ub.badge_id: ub.awarded_at for ub in UserBadge.query.filter_by(user_id=user_id).all()}
        badges = Badge.query.order_by(Badge.level.asc(), Badge.name.asc()).all()
        return [
            {
                "badge": badge,
                "is_obtained": badge.badge_id in awarded,
                "awarded_at": awarded.get(badge.badge_id),
            }
            for badge in badges
        ]

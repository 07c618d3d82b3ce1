# wellnest/api/gratitude_jar/services.py
import logging
from typing import Dict, Any, Optional

from wellnest.core.database import db
from wellnest.core.errors import AppError
from wellnest.models.gratitude_entry import GratitudeEntry
from wellnest.utils.crypto_utils import ContentCipher
from wellnest.utils.pagination import paginate_by_cursor


class GratitudeJarService:
    """감사 항아리 서비스. 본문은 암호화해 저장하고 목록은 커서 기반으로 제공합니다."""
    def __init__(self, cipher: ContentCipher):
        self.cipher = cipher
        logging.info("GratitudeJarService initialized.")

    def _to_safe_entry(self, entry: GratitudeEntry) -> Dict[str, Any]:
        return {
            "gratitude_id": entry.gratitude_id,
            "user_id": entry.user_id,
            "content": self.cipher.decrypt(entry.content_encrypted),
            "created_at": entry.created_at,
            "updated_at": entry.updated_at,
        }

    def _get_owned_entry(self, user_id: str, gratitude_id: str, include_deleted: bool = False) -> GratitudeEntry:
        entry = db.session.get(GratitudeEntry, gratitude_id)
        if not entry or (entry.is_deleted and not include_deleted):
            raise AppError(404, "GRATITUDE_ENTRY_NOT_FOUND", "감사 일기를 찾을 수 없습니다.")
        if entry.user_id != user_id:
            raise AppError(403, "FORBIDDEN", "본인의 감사 일기만 접근할 수 있습니다.")
        return entry

    def create_entry(self, user_id: str, content: str) -> Dict[str, Any]:
        entry = GratitudeEntry(user_id=user_id, content_encrypted=self.cipher.encrypt(content))
        db.session.add(entry)
        db.session.commit()
        logging.info(f"Gratitude entry {entry.gratitude_id} created for user {user_id}")
        return self._to_safe_entry(entry)

    def get_entries_by_user(self, user_id: str, limit: int = 10,
                            last_entry_id: Optional[str] = None) -> Dict[str, Any]:
        cursor_row = None
        if last_entry_id:
            cursor_row = GratitudeEntry.query.filter_by(gratitude_id=last_entry_id, user_id=user_id).first()
            if not cursor_row:
                raise AppError(400, "INVALID_CURSOR", "잘못된 페이지 커서입니다.")

        query = GratitudeEntry.query.filter_by(user_id=user_id, is_deleted=False)
        entries, has_more, next_cursor = paginate_by_cursor(
            query, GratitudeEntry.gratitude_id, GratitudeEntry.created_at, limit, cursor_row
        )
        return {
            "entries": [self._to_safe_entry(entry) for entry in entries],
            "hasMore": has_more,
            "nextCursor": next_cursor,
        }

    def get_entry_by_id(self, user_id: str, gratitude_id: str, include_deleted: bool = False) -> Dict[str, Any]:
        return self._to_safe_entry(self._get_owned_entry(user_id, gratitude_id, include_deleted))

    def get_latest_entry(self, user_id: str) -> Optional[Dict[str, Any]]:
        entry = (
            GratitudeEntry.query
            .filter_by(user_id=user_id, is_deleted=False)
            .order_by(GratitudeEntry.created_at.desc(), GratitudeEntry.gratitude_id.desc())
            .first()
        )
        return self._to_safe_entry(entry) if entry else None

    def count_entries(self, user_id: str) -> int:
        return GratitudeEntry.query.filter_by(user_id=user_id, is_deleted=False).count()

    def update_entry(self, user_id: str, gratitude_id: str, content: str) -> Dict[str, Any]:
        entry = self._get_owned_entry(user_id, gratitude_id)
        entry.content_encrypted = self.cipher.encrypt(content)
        db.session.commit()
        return self._to_safe_entry(entry)

    def soft_delete_entry(self, user_id: str, gratitude_id: str) -> None:
        entry = self._get_owned_entry(user_id, gratitude_id)
        entry.is_deleted = True
        db.session.commit()
        logging.info(f"Gratitude entry {gratitude_id} soft-deleted")

    def hard_delete_entry(self, user_id: str, gratitude_id: str) -> None:
        entry = self._get_owned_entry(user_id, gratitude_id, include_deleted=True)
        db.session.delete(entry)
        db.session.commit()
        logging.info(f"Gratitude entry {gratitude_id} permanently deleted")

# wellnest/api/journal/services.py
import logging
from typing import Dict, Any, Optional

from wellnest.core.database import db
from wellnest.core.errors import AppError
from wellnest.models.journal_entry import JournalEntry
from wellnest.utils.crypto_utils import ContentCipher
from wellnest.utils.pagination import paginate_by_cursor


class JournalService:
    """
    마음 거울(일기) 서비스. 제목과 본문은 저장 전에 암호화하고,
    응답에는 복호화된 평문만 포함합니다.
    """
    def __init__(self, cipher: ContentCipher):
        self.cipher = cipher
        logging.info("JournalService initialized.")

    def _to_safe_entry(self, entry: JournalEntry) -> Dict[str, Any]:
        """암호화된 필드를 제외하고 복호화한 제목/본문을 담은 딕셔너리로 변환합니다."""
        return {
            "journal_id": entry.journal_id,
            "user_id": entry.user_id,
            "title": self.cipher.decrypt(entry.title_encrypted),
            "content": self.cipher.decrypt(entry.content_encrypted),
            "wellness_state": entry.wellness_state,
            "created_at": entry.created_at,
            "updated_at": entry.updated_at,
        }

    def _get_owned_entry(self, user_id: str, journal_id: str, include_deleted: bool = False) -> JournalEntry:
        entry = db.session.get(JournalEntry, journal_id)
        if not entry or (entry.is_deleted and not include_deleted):
            raise AppError(404, "JOURNAL_ENTRY_NOT_FOUND", "일기를 찾을 수 없습니다.")
        if entry.user_id != user_id:
            raise AppError(403, "FORBIDDEN", "본인의 일기만 접근할 수 있습니다.")
        return entry

    def create_entry(self, user_id: str, title: str, content: str,
                     wellness_state: Optional[Dict[str, float]] = None) -> Dict[str, Any]:
        entry = JournalEntry(
            user_id=user_id,
            title_encrypted=self.cipher.encrypt(title),
            content_encrypted=self.cipher.encrypt(content),
            wellness_state=wellness_state,
        )
        db.session.add(entry)
        db.session.commit()
        logging.info(f"Journal entry {entry.journal_id} created for user {user_id}")
        return self._to_safe_entry(entry)

    def get_entries_by_user(self, user_id: str, limit: int = 10,
                            last_entry_id: Optional[str] = None) -> Dict[str, Any]:
        cursor_row = None
        if last_entry_id:
            cursor_row = JournalEntry.query.filter_by(journal_id=last_entry_id, user_id=user_id).first()
            if not cursor_row:
                raise AppError(400, "INVALID_CURSOR", "잘못된 페이지 커서입니다.")

        query = JournalEntry.query.filter_by(user_id=user_id, is_deleted=False)
        entries, has_more, next_cursor = paginate_by_cursor(
            query, JournalEntry.journal_id, JournalEntry.created_at, limit, cursor_row
        )
        return {
            "entries": [self._to_safe_entry(entry) for entry in entries],
            "hasMore": has_more,
            "nextCursor": next_cursor,
        }

    def get_entry_by_id(self, user_id: str, journal_id: str, include_deleted: bool = False) -> Dict[str, Any]:
        return self._to_safe_entry(self._get_owned_entry(user_id, journal_id, include_deleted))

    def get_latest_entry(self, user_id: str) -> Optional[Dict[str, Any]]:
        entry = (
            JournalEntry.query
            .filter_by(user_id=user_id, is_deleted=False)
            .order_by(JournalEntry.created_at.desc(), JournalEntry.journal_id.desc())
            .first()
        )
        return self._to_safe_entry(entry) if entry else None

    def count_entries(self, user_id: str) -> int:
        return JournalEntry.query.filter_by(user_id=user_id, is_deleted=False).count()

    def update_entry(self, user_id: str, journal_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        entry = self._get_owned_entry(user_id, journal_id)
        if 'title' in data:
            entry.title_encrypted = self.cipher.encrypt(data['title'])
        if 'content' in data:
            entry.content_encrypted = self.cipher.encrypt(data['content'])
        if 'wellness_state' in data:
            entry.wellness_state = data['wellness_state']
        db.session.commit()
        return self._to_safe_entry(entry)

    def soft_delete_entry(self, user_id: str, journal_id: str) -> None:
        """삭제 플래그만 설정합니다. include_deleted 조회로는 여전히 읽을 수 있습니다."""
        entry = self._get_owned_entry(user_id, journal_id)
        entry.is_deleted = True
        db.session.commit()
        logging.info(f"Journal entry {journal_id} soft-deleted")

    def hard_delete_entry(self, user_id: str, journal_id: str) -> None:
        """행을 영구 삭제합니다. 이미 소프트 삭제된 항목도 대상입니다."""
        entry = self._get_owned_entry(user_id, journal_id, include_deleted=True)
        db.session.delete(entry)
        db.session.commit()
        logging.info(f"Journal entry {journal_id} permanently deleted")

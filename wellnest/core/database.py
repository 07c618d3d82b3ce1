# wellnest/core/database.py
from contextlib import contextmanager

from flask_sqlalchemy import SQLAlchemy

# 앱 팩토리에서 db.init_app(app)으로 연결됩니다.
db = SQLAlchemy()


@contextmanager
def transaction():
    """블록이 정상 종료되면 커밋하고, 예외가 발생하면 롤백한 뒤 다시 던집니다."""
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

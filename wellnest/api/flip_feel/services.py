# wellnest/api/flip_feel/services.py
import logging
import random
from typing import Dict, Any, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import lazyload

from wellnest.core.database import db, transaction
from wellnest.core.errors import AppError
from wellnest.models.flip_feel import (
    FlipFeelQuestion, FlipFeelChoice, FlipFeelSession, FlipFeelResponse, CHOICES_PER_QUESTION
)
from wellnest.utils.datetime_utils import DateTimeUtils

MIN_QUESTION_COUNT = 5
MAX_QUESTION_COUNT = 15
DEFAULT_QUESTION_COUNT = 10


class FlipFeelService:
    """
    플립 앤 필(카드 뒤집기 감정 퀴즈) 서비스.
    질문/선택지 관리와 사용자의 응답 세션 기록을 담당합니다.
    """
    def __init__(self):
        logging.info("FlipFeelService initialized.")

    # ------------------------------------------------------------------
    # 질문 관리
    # ------------------------------------------------------------------
    def create_questions_and_choices(self, questions: List[Dict[str, Any]]) -> List[FlipFeelQuestion]:
        """질문과 4개의 선택지를 함께 생성합니다. 요청 전체가 하나의 트랜잭션입니다."""
        texts = [q['question_text'] for q in questions]
        if len(texts) != len(set(texts)):
            raise AppError(409, "DUPLICATE_QUESTION", "요청 안에 중복된 질문이 있습니다.")

        created = []
        try:
            with transaction():
                for data in questions:
                    if len(data['choices']) != CHOICES_PER_QUESTION:
                        raise AppError(400, "INVALID_CHOICES", f"질문마다 선택지는 정확히 {CHOICES_PER_QUESTION}개여야 합니다.")
                    question = FlipFeelQuestion(category=data['category'], question_text=data['question_text'])
                    for position, choice in enumerate(data['choices']):
                        question.choices.append(FlipFeelChoice(
                            choice_text=choice['choice_text'],
                            mood_label=choice['mood_label'],
                            position=position,
                        ))
                    db.session.add(question)
                    created.append(question)
                db.session.flush()
        except IntegrityError:
            raise AppError(409, "DUPLICATE_QUESTION", "이미 등록된 질문입니다.")

        logging.info(f"{len(created)} flip-feel question(s) created")
        return created

    def _get_question(self, question_id: str) -> FlipFeelQuestion:
        question = db.session.get(FlipFeelQuestion, question_id)
        if not question:
            raise AppError(404, "QUESTION_NOT_FOUND", "질문을 찾을 수 없습니다.")
        return question

    def update_question(self, question_id: str, data: Dict[str, Any]) -> FlipFeelQuestion:
        question = self._get_question(question_id)
        for key in ('question_text', 'category'):
            if key in data:
                setattr(question, key, data[key])
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise AppError(409, "DUPLICATE_QUESTION", "이미 등록된 질문입니다.")
        return question

    def delete_question(self, question_id: str) -> None:
        question = self._get_question(question_id)
        if FlipFeelResponse.query.filter_by(question_id=question_id).first():
            raise AppError(409, "QUESTION_IN_USE", "응답 기록이 있는 질문은 삭제할 수 없습니다.")
        db.session.delete(question)
        db.session.commit()
        logging.info(f"Flip-feel question {question_id} deleted")

    def get_questions_by_category(self, category: str, count: int = DEFAULT_QUESTION_COUNT) -> List[FlipFeelQuestion]:
        """카테고리의 질문 중 count 개를 무작위 순서로 반환합니다."""
        if count < MIN_QUESTION_COUNT or count > MAX_QUESTION_COUNT:
            raise AppError(400, "INVALID_COUNT", f"질문 개수는 {MIN_QUESTION_COUNT}~{MAX_QUESTION_COUNT} 사이여야 합니다.")

        questions = FlipFeelQuestion.query.filter_by(category=category).all()
        if len(questions) < count:
            raise AppError(
                400, "INSUFFICIENT_QUESTIONS",
                f"'{category}' 카테고리에 질문이 {len(questions)}개뿐입니다. (요청: {count}개)"
            )
        return random.sample(questions, count)

    # ------------------------------------------------------------------
    # 응답 세션
    # ------------------------------------------------------------------
    def _build_responses(self, responses: List[Dict[str, str]]) -> List[FlipFeelResponse]:
        """(question_id, choice_id) 쌍을 검증합니다. 선택지는 해당 질문에 속해야 합니다."""
        question_ids = [r['question_id'] for r in responses]
        if len(question_ids) != len(set(question_ids)):
            raise AppError(400, "INVALID_RESPONSE", "같은 질문에 두 번 응답할 수 없습니다.")

        choice_ids = [r['choice_id'] for r in responses]
        choices = {c.choice_id: c for c in FlipFeelChoice.query.filter(FlipFeelChoice.choice_id.in_(choice_ids)).all()}

        built = []
        for response in responses:
            choice = choices.get(response['choice_id'])
            if not choice or choice.question_id != response['question_id']:
                raise AppError(
                    400, "INVALID_RESPONSE",
                    f"잘못된 응답입니다. (question_id: {response['question_id']}, choice_id: {response['choice_id']})"
                )
            built.append(FlipFeelResponse(question_id=response['question_id'], choice_id=response['choice_id']))
        return built

    def _get_owned_session(self, user_id: str, session_id: str) -> FlipFeelSession:
        session = db.session.get(FlipFeelSession, session_id)
        if not session:
            raise AppError(404, "SESSION_NOT_FOUND", "세션을 찾을 수 없습니다.")
        if session.user_id != user_id:
            raise AppError(403, "FORBIDDEN", "본인의 세션만 조회할 수 있습니다.")
        return session

    def submit_responses(self, user_id: str, responses: List[Dict[str, str]]) -> FlipFeelSession:
        """세션과 모든 응답을 하나의 트랜잭션으로 저장합니다."""
        with transaction():
            built = self._build_responses(responses)
            now = DateTimeUtils.now()
            session = FlipFeelSession(user_id=user_id, started_at=now, finished_at=now)
            session.responses.extend(built)
            db.session.add(session)
        logging.info(f"Flip-feel session {session.flip_feel_id} submitted with {len(built)} response(s)")
        return session

    def start_session(self, user_id: str) -> FlipFeelSession:
        session = FlipFeelSession(user_id=user_id)
        db.session.add(session)
        db.session.commit()
        return session

    def add_responses(self, user_id: str, session_id: str, responses: List[Dict[str, str]]) -> FlipFeelSession:
        with transaction():
            session = self._get_owned_session(user_id, session_id)
            if session.finished_at is not None:
                raise AppError(400, "SESSION_ALREADY_FINISHED", "이미 완료된 세션입니다.")
            answered = {r.question_id for r in session.responses}
            if answered & {r['question_id'] for r in responses}:
                raise AppError(400, "INVALID_RESPONSE", "이미 응답한 질문입니다.")
            session.responses.extend(self._build_responses(responses))
        return session

    def complete_session(self, user_id: str, session_id: str) -> FlipFeelSession:
        with transaction():
            session = self._get_owned_session(user_id, session_id)
            if session.finished_at is not None:
                raise AppError(400, "SESSION_ALREADY_FINISHED", "이미 완료된 세션입니다.")
            session.finished_at = DateTimeUtils.now()
        return session

    def get_user_sessions(self, user_id: str, with_responses: bool = False) -> List[FlipFeelSession]:
        query = FlipFeelSession.query.filter_by(user_id=user_id)
        if not with_responses:
            query = query.options(lazyload(FlipFeelSession.responses))
        return (
            query
            .order_by(FlipFeelSession.started_at.desc())
            .all()
        )

    def get_session_by_id(self, user_id: str, session_id: str) -> FlipFeelSession:
        return self._get_owned_session(user_id, session_id)

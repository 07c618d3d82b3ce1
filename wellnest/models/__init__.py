# wellnest/models/__init__.py
"""
SQLAlchemy 모델 패키지.

db.create_all() 이 모든 테이블을 인식하도록 각 모델 모듈을 여기서 임포트합니다.
"""
from .pet import Pet, PetInteraction, PetMood, AgeStage, InteractionType
from .food import PetFood, FoodInventory
from .decor import DecorItem, DecorInventory, DecorType
from .quest import QuestDefinition, DailyQuest, UserQuest, QuestStatus, QuestScope, QuestTag, RewardType
from .journal_entry import JournalEntry
from .gratitude_entry import GratitudeEntry
from .mood_check_in import MoodCheckIn, VALID_MOODS
from .flip_feel import (
    FlipFeelQuestion, FlipFeelChoice, FlipFeelSession, FlipFeelResponse,
    FlipFeelCategory, MoodLabel, CHOICES_PER_QUESTION
)
from .badge import Badge, UserBadge

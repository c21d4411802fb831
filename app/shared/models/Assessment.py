# app/shared/models/Assessment.py
"""
Modèles du test psychologique unifié (DISC / Big Five / Leadership).

TestQuestion (catalogue)         PsychologicalTest ──< TestResponse
    scoring_weights (JSON)               │                dimension_scores (JSON, copie)
    {                                    │
      "A": {"D": 4, "I": 1},             └──< PersonalityProfile (1 par référentiel,
      "B": {"S": 3},                            créé uniquement à la complétion)
      ...
    }

PsychologicalTest.*_scores : null tant que status = in_progress.
"""
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, JSON, Text, ForeignKey,
    UniqueConstraint, Enum as SAEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base
from app.shared.enums import TestStatus, TestType


class TestQuestion(Base):
    __tablename__ = "test_questions"
    id              = Column(Integer, primary_key=True, index=True)
    question_number = Column(Integer, nullable=False, index=True)
    question_text   = Column(Text,    nullable=False)
    question_type   = Column(String,  nullable=False, index=True)   # disc | big_five | leadership
    dimension       = Column(String,  nullable=True)                # informatif
    options         = Column(JSON,    nullable=True)                # [{"label": "A", "text": "..."}]
    scoring_weights = Column(JSON,    nullable=False, default=dict) # {option: {dimension: poids}}
    is_active       = Column(Boolean, default=True)

    def __repr__(self):
        return f"<TestQuestion id={self.id} n={self.question_number} type={self.question_type}>"


class PsychologicalTest(Base):
    __tablename__ = "psychological_tests"
    id                 = Column(Integer, primary_key=True, index=True)
    user_id            = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    test_type          = Column(String,  nullable=False, default=TestType.UNIFIED.value)
    total_questions    = Column(Integer, nullable=False)
    answered_questions = Column(Integer, nullable=False, default=0)
    status             = Column(
        SAEnum(TestStatus, name="teststatus", values_callable=lambda e: [m.value for m in e]),
        nullable=False, default=TestStatus.IN_PROGRESS,
    )

    disc_scores       = Column(JSON, nullable=True)
    big_five_scores   = Column(JSON, nullable=True)
    leadership_scores = Column(JSON, nullable=True)
    overall_analysis  = Column(Text, nullable=True)
    recommendations   = Column(Text, nullable=True)

    created_at   = Column(DateTime(timezone=True), server_default=func.now())
    completed_at = Column(DateTime(timezone=True), nullable=True)

    user      = relationship("User", back_populates="psychological_tests")
    responses = relationship("TestResponse", back_populates="test", cascade="all, delete-orphan")
    profiles  = relationship("PersonalityProfile", back_populates="test", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<PsychologicalTest id={self.id} user={self.user_id} status={self.status}>"


class TestResponse(Base):
    __tablename__ = "test_responses"
    __table_args__ = (
        UniqueConstraint("test_id", "question_number", name="uq_test_responses_test_question"),
    )
    id               = Column(Integer, primary_key=True, index=True)
    test_id          = Column(Integer, ForeignKey("psychological_tests.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id      = Column(Integer, ForeignKey("test_questions.id"), nullable=False)
    question_number  = Column(Integer, nullable=False)
    selected_option  = Column(String(1), nullable=False)
    response_value   = Column(Integer, nullable=False)       # A=1 … D=4
    dimension_scores = Column(JSON, nullable=False, default=dict)  # = scoring_weights[selected_option]
    answered_at      = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    test     = relationship("PsychologicalTest", back_populates="responses")
    question = relationship("TestQuestion")

    def __repr__(self):
        return f"<TestResponse test={self.test_id} n={self.question_number} option={self.selected_option}>"


class PersonalityProfile(Base):
    __tablename__ = "personality_profiles"
    id                 = Column(Integer, primary_key=True, index=True)
    test_id            = Column(Integer, ForeignKey("psychological_tests.id", ondelete="CASCADE"), nullable=False, index=True)
    profile_type       = Column(String, nullable=False)      # disc | big_five | leadership
    primary_trait      = Column(String, nullable=False)
    secondary_trait    = Column(String, nullable=True)
    description        = Column(Text,   nullable=True)
    strengths          = Column(Text,   nullable=True)
    development_areas  = Column(Text,   nullable=True)
    career_suggestions = Column(Text,   nullable=True)
    created_at         = Column(DateTime(timezone=True), server_default=func.now())

    test = relationship("PsychologicalTest", back_populates="profiles")

    def __repr__(self):
        return f"<PersonalityProfile test={self.test_id} type={self.profile_type} primary={self.primary_trait}>"

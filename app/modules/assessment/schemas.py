# app/modules/assessment/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any, Literal
from datetime import datetime

from app.shared.enums import TestStatus, TestType


# ── Test ───────────────────────────────────────────────────

class StartTestIn(BaseModel):
    test_type: TestType = TestType.UNIFIED


class TestOut(BaseModel):
    id: int
    user_id: int
    test_type: str
    total_questions: int
    answered_questions: int
    status: TestStatus
    disc_scores: Optional[Dict[str, float]] = None
    big_five_scores: Optional[Dict[str, float]] = None
    leadership_scores: Optional[Dict[str, float]] = None
    overall_analysis: Optional[str] = None
    recommendations: Optional[str] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class TestListItemOut(TestOut):
    profiles_count: int = 0


# ── Questions ──────────────────────────────────────────────

class QuestionOut(BaseModel):
    id: int
    question_number: int
    question_text: str
    question_type: str
    dimension: Optional[str] = None
    options: Optional[List[Dict[str, Any]]] = None   # scoring_weights jamais exposé
    model_config = ConfigDict(from_attributes=True)


class TestQuestionsOut(BaseModel):
    test_id: int
    test_type: str
    questions: List[QuestionOut]
    total_questions: int


# ── Réponses ───────────────────────────────────────────────

class SubmitResponseIn(BaseModel):
    question_id: int
    question_number: int = Field(ge=1)
    selected_option: Literal["A", "B", "C", "D"]


class ResponseOut(BaseModel):
    id: int
    test_id: int
    question_id: int
    question_number: int
    selected_option: str
    response_value: int
    dimension_scores: Dict[str, Any]
    answered_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class ResponseDetailOut(BaseModel):
    id: int
    question_id: int
    question_number: int
    selected_option: str
    response_value: int
    dimension_scores: Dict[str, Any]
    answered_at: Optional[datetime] = None
    question_text: str
    question_type: str
    options: Optional[List[Dict[str, Any]]] = None


# ── Profils & résultats ────────────────────────────────────

class ProfileOut(BaseModel):
    profile_type: str
    primary_trait: str
    secondary_trait: Optional[str] = None
    description: Optional[str] = None
    strengths: Optional[str] = None
    development_areas: Optional[str] = None
    career_suggestions: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class ScoresOut(BaseModel):
    disc: Dict[str, float]
    big_five: Dict[str, float]
    leadership: Dict[str, float]


class AnalysisOut(BaseModel):
    overall: Optional[str] = None
    recommendations: Optional[str] = None


class TestDetailOut(BaseModel):
    test: TestOut
    responses: List[ResponseDetailOut]
    profiles: List[ProfileOut]


class CompletionOut(BaseModel):
    test: TestOut
    scores: ScoresOut
    analysis: AnalysisOut
    profiles: List[ProfileOut]


# ── Rapport ────────────────────────────────────────────────

class ReportTestInfoOut(BaseModel):
    id: int
    type: str
    completed_at: Optional[datetime] = None
    total_questions: int
    answered_questions: int


class ReportScoresOut(BaseModel):
    disc: Optional[Dict[str, float]] = None
    big_five: Optional[Dict[str, float]] = None
    leadership: Optional[Dict[str, float]] = None


class ReportSummaryOut(BaseModel):
    primary_disc: Optional[str] = None
    primary_big_five: Optional[str] = None
    primary_leadership: Optional[str] = None


class ReportOut(BaseModel):
    test_info: ReportTestInfoOut
    scores: ReportScoresOut
    analysis: AnalysisOut
    profiles: List[ProfileOut]
    summary: ReportSummaryOut

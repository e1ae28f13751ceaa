"""Pydantic request/response schemas for the web API."""

from typing import Optional

from pydantic import BaseModel, Field

from shared_types import ChartMode, ChartRange, ChatRole, TrendRange

# --- Moods ---


class MoodCreate(BaseModel):
    # Free-form strings: label, date and notes length are validated in
    # moods.actions against the configured limits.
    mood: str = Field(..., max_length=20)
    date: str = Field(..., max_length=20, description="Calendar day, yyyy-MM-dd")
    notes: Optional[str] = None


class MoodEntryOut(BaseModel):
    id: str
    mood: str
    label: str
    score: int
    icon: str
    color: str
    notes: str = ""
    date: str
    timestamp: str
    created_at: str


class ActionResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    entry_id: Optional[str] = None
    deleted: Optional[int] = None


# --- Trends ---


class TrendAnalysisOut(BaseModel):
    time_range: TrendRange
    summary: str
    is_empty: bool
    period_start: str
    period_end: str
    average_score: Optional[float] = None
    distribution: Optional[dict[str, int]] = None


class ChartPointOut(BaseModel):
    date: str
    day_label: str
    counts: Optional[dict[str, int]] = None
    average_score: Optional[float] = None


class ChartOut(BaseModel):
    time_range: ChartRange
    mode: ChartMode
    points: list[ChartPointOut]
    legend: list[dict] = []


# --- Chat ---


class HistoryTurn(BaseModel):
    role: ChatRole
    content: str = Field(..., max_length=20_000)


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=5000)
    # Client-held session turns; when omitted the stored transcript is used.
    session_history: Optional[list[HistoryTurn]] = None
    save: bool = True


class ChatResponse(BaseModel):
    response: str


class ChatMessageOut(BaseModel):
    id: str
    role: ChatRole
    content: str
    timestamp: str


class GreetingResponse(BaseModel):
    greeting: str

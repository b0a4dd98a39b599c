# =========================
# FILE: chefsense/chefsense/api/schemas.py
# =========================
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field


class SessionRequest(BaseModel):
    session_id: str = Field(..., description="Client session id to keep context")


class SessionResponse(BaseModel):
    session_id: str
    reply: str
    role: str = "assistant"
    available: bool = True
    context: Optional[Dict[str, Any]] = None


class ChatRequest(BaseModel):
    session_id: str = Field(..., description="Client session id to keep context")
    text: str = Field(..., examples=["I have chicken, onions and rice, what can I cook?"])
    source: Literal["text", "voice"] = "text"


class Directive(BaseModel):
    type: Literal["link", "card"]
    slug: str
    text: Optional[str] = None
    name: Optional[str] = None
    country: Optional[str] = None
    meal_type: Optional[str] = None
    total_minutes: Optional[int] = None


class ChatResponse(BaseModel):
    session_id: str
    reply: str
    role: str = "assistant"
    intent: Optional[str] = None
    lang: str = "en"
    rtl: bool = False
    speech_lang: str = "en-US"
    speech_text: Optional[str] = None
    source: Optional[str] = None
    recipes: List[Dict[str, Any]] = Field(default_factory=list)
    directives: List[Directive] = Field(default_factory=list)
    available: bool = True
    ignored: bool = False
    context: Optional[Dict[str, Any]] = None


class RecipeSummary(BaseModel):
    slug: str
    name_en: str
    country: str
    mealType: str
    dietaryStyle: str
    difficulty: str
    total_time_minutes: int


class VoiceErrorRequest(BaseModel):
    code: str = Field(..., examples=["no-speech"])


class VoiceErrorResponse(BaseModel):
    code: str
    message: str

"""
Pydantic request / response schemas shared by the pipeline and the API.
"""

from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ── Emotion ──────────────────────────────────────────────
class Emotion(str, Enum):
    NEUTRAL = "neutral"
    HAPPY = "happy"
    SAD = "sad"
    ANGRY = "angry"
    SURPRISED = "surprised"
    THINKING = "thinking"


class ResolvedAnswer(BaseModel):
    text: str
    emotion: Emotion = Emotion.NEUTRAL
    source: Literal["local", "generative", "default"] = "local"


# ── Profile ──────────────────────────────────────────────
class UserProfile(BaseModel):
    display_name: str = "Guest"
    theme_color: str = "purple"  # blue / purple / green / orange
    language: Literal["en", "hi"] = "en"


# ── Knowledge Base ───────────────────────────────────────
class KnowledgeEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: Optional[str] = None
    topic: str
    keywords: List[str]
    response: str
    match_count: Optional[int] = None


class KnowledgeEntryCreate(BaseModel):
    topic: str = Field(min_length=1)
    keywords: List[str] = Field(min_length=1)
    response: str = Field(min_length=1)

    @field_validator("topic", "response")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("keywords", mode="before")
    @classmethod
    def _split_keywords(cls, value: Union[str, List[str]]) -> List[str]:
        """Accept "hello, hi, hey" as well as a list; drop empty items."""
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, list):
            return value
        if not all(isinstance(k, str) for k in value):
            raise ValueError("keywords must be strings")
        return [k.strip() for k in value if k.strip()]


class KnowledgeDeleteResponse(BaseModel):
    status: str
    id: str


# ── Chat ─────────────────────────────────────────────────
class TextChatRequest(BaseModel):
    message: str
    profile: Optional[UserProfile] = None


class ImageChatRequest(BaseModel):
    image_base64: str = Field(min_length=1)
    profile: Optional[UserProfile] = None


# ── Admin ────────────────────────────────────────────────
class CredentialsUpdate(BaseModel):
    api_key: str


class CredentialsStatus(BaseModel):
    configured: bool

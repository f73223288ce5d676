"""
Document Schemas

Core principle: every record is derived from one call's input and never outlives it.
An AnalysisRecord is a pure function of the extracted text (plus the declared media type).
"""

import base64
from typing import List, Literal, Union
from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Inputs
# ============================================================================

class Payload(BaseModel):
    """File payload supplied by the caller on the first turn of a conversation"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    data: Union[str, bytes] = Field(..., description="Base64 text (optionally a data: URL) or raw bytes")
    mime_type: str = Field(default="", alias="mimeType", description="Declared media type")

    @classmethod
    def from_bytes(cls, raw: bytes, mime_type: str) -> "Payload":
        """Build a base64 payload from raw file bytes."""
        return cls(data=base64.b64encode(raw).decode("ascii"), mime_type=mime_type)

    @classmethod
    def from_text(cls, text: str, mime_type: str = "text/plain") -> "Payload":
        """Build a payload carrying already-extracted plain text."""
        return cls.from_bytes(text.encode("utf-8"), mime_type)


class ConversationTurn(BaseModel):
    """One prior exchange in a conversation"""
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str


# ============================================================================
# Analysis output
# ============================================================================

class SentimentResult(BaseModel):
    """Lexicon-based polarity of a document"""
    score: int = 0
    comparative: float = 0.0  # score per word
    positive: List[str] = Field(default_factory=list)
    negative: List[str] = Field(default_factory=list)

    @property
    def label(self) -> str:
        if self.score > 0:
            return "positive"
        if self.score < 0:
            return "negative"
        return "neutral"


class AnalysisRecord(BaseModel):
    """Structured output of the Content Analyzer for one document"""
    word_count: int
    sentences: List[str] = Field(default_factory=list)
    nouns: List[str] = Field(default_factory=list)
    verbs: List[str] = Field(default_factory=list)
    adjectives: List[str] = Field(default_factory=list)
    people: List[str] = Field(default_factory=list)
    places: List[str] = Field(default_factory=list)
    organizations: List[str] = Field(default_factory=list)
    topics: List[str] = Field(default_factory=list, max_length=10)
    keywords: List[str] = Field(default_factory=list, max_length=15)
    sentiment: SentimentResult = Field(default_factory=SentimentResult)
    mime_type: str = ""
    language: str = "en"

    @property
    def sentence_count(self) -> int:
        return len(self.sentences)

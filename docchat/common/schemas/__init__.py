"""
docchat Schemas

Call inputs (payload, history) and the analysis record shared by the analyzer and responder.
"""

from .document import (
    Payload,
    ConversationTurn,
    SentimentResult,
    AnalysisRecord,
)

__all__ = [
    "Payload",
    "ConversationTurn",
    "SentimentResult",
    "AnalysisRecord",
]

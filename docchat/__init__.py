"""
docchat

Offline document question-answering: rule-based intent classification and
linguistic analysis, no network calls and no learned models.

Philosophy:
- Every answer is derived from the document text and the message alone
- Analysis is deterministic: same text, same record
- Nothing persists between calls; history is read, never written
- respond() always returns a string

Usage:
    from docchat import respond, DocumentChatEngine
    from docchat.common.schemas import Payload, ConversationTurn
    from docchat.analyzer import ContentAnalyzer, TextExtractor
    from docchat.responder import Synthesizer, classify
"""

from .engine import DocumentChatEngine, respond

__version__ = "0.1.0"

__all__ = [
    "DocumentChatEngine",
    "respond",
]

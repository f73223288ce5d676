"""
Responder - Intent Classification and Answer Synthesis

Decides what the user is asking for and writes the answer from document analysis.

Key Components:
- classify / classify_conversation: Ordered rule tables mapping messages to intents
- Synthesizer: Intent-keyed answer strategies over an AnalysisRecord
- build_context: Flattens prior conversation turns

Pipeline:
1. Classify the message (document or no-document vocabulary)
2. Pick the strategy for the intent
3. Fill it from the AnalysisRecord and the document sentences
"""

from .intent_classifier import (
    DocumentIntent,
    ConversationIntent,
    IntentRule,
    DOCUMENT_INTENT_RULES,
    CONVERSATION_INTENT_RULES,
    classify,
    classify_conversation,
)
from .synthesizer import Synthesizer
from .context import build_context

__all__ = [
    "DocumentIntent",
    "ConversationIntent",
    "IntentRule",
    "DOCUMENT_INTENT_RULES",
    "CONVERSATION_INTENT_RULES",
    "classify",
    "classify_conversation",
    "Synthesizer",
    "build_context",
]

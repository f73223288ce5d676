"""
Intent Classifier

Maps a free-form user message to a closed intent vocabulary.
Rules are ordered data: the first rule whose pattern matches the
lower-cased message wins, so earlier rules take priority.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Generic, List, Sequence, Tuple, TypeVar


class DocumentIntent(str, Enum):
    """Intent of a message asked about a loaded document"""
    GREETING = "greeting"
    SUMMARY = "summary"  # "Summarize the report"
    KEYWORDS = "keywords"  # "What are the key terms?"
    SENTIMENT = "sentiment"  # "What's the tone?"
    QUESTIONS = "questions"  # "What questions does it answer?"
    FACTS = "facts"  # "Give me the facts"
    TRANSLATION = "translation"  # "Translate it"
    STATISTICS = "statistics"  # "Word count?"
    GENERAL = "general"  # Catch-all


class ConversationIntent(str, Enum):
    """Intent of a message sent without any document"""
    GREETING = "greeting"
    QUESTION = "question"
    REQUEST = "request"
    DEFAULT = "default"


IntentT = TypeVar("IntentT", DocumentIntent, ConversationIntent)


@dataclass(frozen=True)
class IntentRule(Generic[IntentT]):
    """A set of trigger patterns mapping to one intent"""
    intent: IntentT
    patterns: Tuple[str, ...]

    def matches(self, message: str) -> bool:
        return any(re.search(pattern, message) for pattern in self.patterns)


# Plain substrings: "this" and "which" contain "hi" and classify as greetings
_GREETING_PATTERNS = (r"hello", r"hi", r"hey")

DOCUMENT_INTENT_RULES: List[IntentRule[DocumentIntent]] = [
    IntentRule(DocumentIntent.GREETING, _GREETING_PATTERNS),
    IntentRule(DocumentIntent.SUMMARY, (r"summarize", r"summary", r"overview")),
    IntentRule(DocumentIntent.KEYWORDS, (r"keyword", r"key term", r"important words")),
    IntentRule(DocumentIntent.SENTIMENT, (r"sentiment", r"tone", r"mood")),
    IntentRule(DocumentIntent.QUESTIONS, (r"question", r"ask", r"what")),
    IntentRule(DocumentIntent.FACTS, (r"fact", r"information", r"data")),
    IntentRule(DocumentIntent.TRANSLATION, (r"translate", r"translation")),
    IntentRule(DocumentIntent.STATISTICS, (r"statistic", r"analysis", r"count")),
]

CONVERSATION_INTENT_RULES: List[IntentRule[ConversationIntent]] = [
    IntentRule(ConversationIntent.GREETING, _GREETING_PATTERNS),
    IntentRule(ConversationIntent.QUESTION, (
        r"\?", r"\bwhat\b", r"\bhow\b", r"\bwhy\b", r"\bwho\b",
        r"\bwhen\b", r"\bwhere\b", r"\bwhich\b", r"question",
    )),
    IntentRule(ConversationIntent.REQUEST, (
        r"please", r"can you", r"could you", r"would you", r"\bi need\b",
        r"\bi want\b", r"\bhelp\b", r"show me", r"give me", r"\bfind\b",
    )),
]


def _first_match(message: str, rules: Sequence[IntentRule[IntentT]], default: IntentT) -> IntentT:
    lowered = message.lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule.intent
    return default


def classify(message: str) -> DocumentIntent:
    """Classify a message asked about a document"""
    return _first_match(message, DOCUMENT_INTENT_RULES, DocumentIntent.GENERAL)


def classify_conversation(message: str) -> ConversationIntent:
    """Classify a message sent without a document"""
    return _first_match(message, CONVERSATION_INTENT_RULES, ConversationIntent.DEFAULT)

"""
Synthesizer

Rule-based answer synthesis from an AnalysisRecord.
Each document intent has its own generation strategy; messages sent
without a document get one of four canned answers.

Key principle: answers only restate what analysis found.
- no topics/keywords -> the sentence naming them is omitted or left empty
- no matching sentences -> a fixed fallback line instead of invented content
"""

import logging
import math
from typing import Callable, Dict, List

from ..common.schemas import AnalysisRecord
from .intent_classifier import ConversationIntent, DocumentIntent

logger = logging.getLogger("docchat.responder.synthesizer")


CONVERSATION_RESPONSES = {
    ConversationIntent.GREETING: (
        "Hello! I'm your local AI assistant. I can help you analyze files, extract "
        "information, and answer questions. What would you like to do?"
    ),
    ConversationIntent.QUESTION: (
        "I'd be happy to help answer your question. However, I work best when you provide "
        "a file to analyze. Upload a document, image, or other file and ask me specific "
        "questions about it."
    ),
    ConversationIntent.REQUEST: (
        "I understand you're looking for something. To provide the most helpful response, "
        "please share a file or document you'd like me to analyze."
    ),
    ConversationIntent.DEFAULT: (
        "I'm here to help you analyze files and documents. You can ask me to summarize "
        "content, extract key information, find specific details, or answer questions "
        "about your uploaded files."
    ),
}

GENERIC_QUESTIONS = [
    "What are the main topics discussed in this document?",
    "What is the overall sentiment or tone of the content?",
    "Who are the key people or entities mentioned?",
    "What are the most important keywords?",
    "What action items or conclusions can be drawn?",
]

COPULAS = ("is", "are", "was", "were")

NO_FACTS_MESSAGE = "I couldn't identify specific factual statements in this document."

TRANSLATION_MESSAGE = (
    "I can help with basic text analysis, but I don't currently support translation. "
    "The document appears to be in English."
)

NO_RELEVANT_CONTENT_MESSAGE = (
    "I can provide general analysis but couldn't find specific content directly "
    "related to your question."
)

STATISTICS_TEMPLATE = """Document Statistics:
• Word count: {word_count}
• Sentences: {sentence_count}
• Average words per sentence: {average}
• Nouns identified: {nouns}
• Verbs identified: {verbs}
• Sentiment score: {score} ({label})
• Detected language: {language}"""

# Summary thresholds
SHORT_DOCUMENT_WORDS = 50
SUMMARY_RATIO = 0.3
SUMMARY_MAX_SENTENCES = 3


def _bullets(lines: List[str]) -> str:
    return "\n".join(f"• {line}" for line in lines)


def average_words_per_sentence(analysis: AnalysisRecord) -> int:
    """round(word_count / sentence_count), 0 for a document without sentences"""
    if not analysis.sentences:
        return 0
    return round(analysis.word_count / len(analysis.sentences))


class Synthesizer:
    """
    Synthesizes answers from document analysis.

    Strategies by intent:
    - summary: opening sentences (or a one-liner for short documents)
    - keywords / sentiment / statistics: report analysis fields
    - questions / translation: fixed text
    - facts: sentences with a copular verb
    - general (and greeting): key terms plus passages matching them
    """

    def __init__(self):
        self._strategies: Dict[DocumentIntent, Callable[[str, AnalysisRecord], str]] = {
            DocumentIntent.SUMMARY: self._summary,
            DocumentIntent.KEYWORDS: self._keywords,
            DocumentIntent.SENTIMENT: self._sentiment,
            DocumentIntent.QUESTIONS: self._questions,
            DocumentIntent.FACTS: self._facts,
            DocumentIntent.TRANSLATION: self._translation,
            DocumentIntent.STATISTICS: self._statistics,
        }

    def synthesize(
        self,
        intent: DocumentIntent,
        message: str,
        analysis: AnalysisRecord,
        context: str = "",
    ) -> str:
        """
        Produce the answer to a message about a document.

        Args:
            intent: Classified intent of the message
            message: The user's message
            analysis: AnalysisRecord of the document
            context: Conversation context; appended to general answers when non-empty

        Returns:
            Answer text
        """
        strategy = self._strategies.get(intent)
        if strategy is not None:
            return strategy(message, analysis)

        answer = self._general(message, analysis)
        if context:
            answer += f"\n\n{context}"
        return answer

    def converse(self, intent: ConversationIntent) -> str:
        """Canned answer for a message sent without a document"""
        return CONVERSATION_RESPONSES[intent]

    def _summary(self, message: str, analysis: AnalysisRecord) -> str:
        topics = ", ".join(analysis.topics[:3])

        if analysis.word_count < SHORT_DOCUMENT_WORDS:
            return (
                f"This is a short document with {analysis.word_count} words. "
                f"It appears to discuss: {topics}."
            )

        count = math.ceil(len(analysis.sentences) * SUMMARY_RATIO)
        count = min(SUMMARY_MAX_SENTENCES, max(1, count))
        summary = " ".join(analysis.sentences[:count])

        return (
            f"This document contains {analysis.word_count} words and appears to focus on: "
            f"{topics}. Here's a summary based on the opening content:\n\n{summary}"
        )

    def _keywords(self, message: str, analysis: AnalysisRecord) -> str:
        return f"Key terms in this document: {', '.join(analysis.keywords[:10])}"

    def _sentiment(self, message: str, analysis: AnalysisRecord) -> str:
        sentiment = analysis.sentiment
        return (
            f"The overall sentiment of this document is {sentiment.label} "
            f"(score: {sentiment.score})."
        )

    def _questions(self, message: str, analysis: AnalysisRecord) -> str:
        return (
            "Here are some questions this document might help answer:\n"
            + _bullets(GENERIC_QUESTIONS)
        )

    def _facts(self, message: str, analysis: AnalysisRecord) -> str:
        # Substring match, so "This" counts as containing "is"
        facts = [
            sentence for sentence in analysis.sentences
            if any(copula in sentence.lower() for copula in COPULAS)
        ]

        if not facts:
            return NO_FACTS_MESSAGE

        return "Here are some key facts I found:\n" + _bullets(facts[:5])

    def _translation(self, message: str, analysis: AnalysisRecord) -> str:
        return TRANSLATION_MESSAGE

    def _statistics(self, message: str, analysis: AnalysisRecord) -> str:
        return STATISTICS_TEMPLATE.format(
            word_count=analysis.word_count,
            sentence_count=len(analysis.sentences),
            average=average_words_per_sentence(analysis),
            nouns=len(analysis.nouns),
            verbs=len(analysis.verbs),
            score=analysis.sentiment.score,
            label=analysis.sentiment.label,
            language=analysis.language,
        )

    def _general(self, message: str, analysis: AnalysisRecord) -> str:
        keywords = analysis.keywords[:5]
        topics = analysis.topics[:3]

        answer = "Based on my analysis of your document, "
        if keywords:
            answer += f"the key terms appear to be: {', '.join(keywords)}. "
        if topics:
            answer += f"The main topics are: {', '.join(topics)}. "

        answer += f'\n\nRegarding your question: "{message}"\n'

        terms = [term.lower() for term in keywords + topics]
        relevant = [
            sentence for sentence in analysis.sentences
            if any(term in sentence.lower() for term in terms)
        ]
        logger.debug("%d of %d sentences match key terms", len(relevant), len(analysis.sentences))

        if relevant:
            answer += "I found these relevant passages:\n" + _bullets(relevant[:3])
        else:
            answer += NO_RELEVANT_CONTENT_MESSAGE

        return answer

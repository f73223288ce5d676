"""
Document Chat Engine

Single entry point: respond(message, payload, history) -> str.

Pipeline:
1. No payload -> classify with the no-document rules, return a canned answer
2. Extract text from the payload (apology if unavailable)
3. Analyze the text once
4. Classify the message and synthesize the answer

respond() never raises: any failure becomes a fixed apology string.
"""

import logging
from typing import Any, Mapping, Optional, Sequence, Union

from .analyzer import ContentAnalyzer, ExtractionStatus, LinguisticPipeline, TextExtractor
from .common.config import DocChatConfig
from .common.schemas import AnalysisRecord, ConversationTurn, Payload
from .responder import Synthesizer, build_context, classify, classify_conversation

logger = logging.getLogger("docchat.engine")

EXTRACTION_UNAVAILABLE_MESSAGE = (
    "I'm sorry, I couldn't extract readable text from this file. I can work with text "
    "documents, PDFs with text content, and other readable file formats."
)

PIPELINE_FAILURE_MESSAGE = (
    "I encountered an error while processing your request. Let me try a different approach."
)

PayloadLike = Union[Payload, Mapping[str, Any]]
TurnLike = Union[ConversationTurn, Mapping[str, Any]]


class DocumentChatEngine:
    """
    Answers questions about a document with rule-based analysis.

    Holds no per-conversation state: the analyzer, extractor and synthesizer
    are built at construction and only read afterwards, so one engine can
    serve independent conversations concurrently.
    """

    def __init__(
        self,
        config: Optional[DocChatConfig] = None,
        extractor: Optional[TextExtractor] = None,
        analyzer: Optional[ContentAnalyzer] = None,
        synthesizer: Optional[Synthesizer] = None,
    ):
        self._config = config or DocChatConfig()
        self._extractor = extractor or TextExtractor(self._config.extractor)
        self._analyzer = analyzer or ContentAnalyzer(
            self._config.analyzer,
            pipeline=LinguisticPipeline(max_length=self._config.extractor.max_payload_bytes),
        )
        self._synthesizer = synthesizer or Synthesizer()

    @property
    def extractor(self) -> TextExtractor:
        return self._extractor

    @property
    def analyzer(self) -> ContentAnalyzer:
        return self._analyzer

    def respond(
        self,
        message: str,
        payload: Optional[PayloadLike] = None,
        history: Sequence[TurnLike] = (),
    ) -> str:
        """
        Answer a message, optionally about a file payload.

        Args:
            message: The user's message
            payload: File payload (first turn of a conversation only)
            history: Prior turns, oldest first; never modified

        Returns:
            Answer text; an apology string on any failure
        """
        try:
            return self._respond(message, payload, history)
        except Exception as e:
            logger.error("Local document processing failed: %s", e, exc_info=True)
            return PIPELINE_FAILURE_MESSAGE

    def analyze(self, payload: PayloadLike) -> Optional[AnalysisRecord]:
        """Extract and analyze a payload; None when no readable text is available"""
        payload = self._coerce_payload(payload)
        extraction = self._extractor.extract(payload)
        if not extraction.is_available:
            return None
        return self._analyzer.analyze(extraction.text, payload.mime_type)

    def _respond(
        self,
        message: str,
        payload: Optional[PayloadLike],
        history: Sequence[TurnLike],
    ) -> str:
        if payload is None:
            intent = classify_conversation(message)
            logger.debug("No document, conversation intent: %s", intent.value)
            return self._synthesizer.converse(intent)

        payload = self._coerce_payload(payload)
        extraction = self._extractor.extract(payload)
        if extraction.status == ExtractionStatus.UNAVAILABLE or not extraction.text:
            return EXTRACTION_UNAVAILABLE_MESSAGE

        turns = [self._coerce_turn(turn) for turn in history]
        context = build_context(turns)
        if context:
            logger.debug("Conversation context (%d turns):\n%s", len(turns), context)

        analysis = self._analyzer.analyze(extraction.text, payload.mime_type)
        intent = classify(message)
        logger.debug(
            "Document intent: %s (%d words, %d sentences)",
            intent.value, analysis.word_count, len(analysis.sentences),
        )

        if not self._config.responder.include_history_context:
            context = ""

        return self._synthesizer.synthesize(intent, message, analysis, context=context)

    @staticmethod
    def _coerce_payload(payload: PayloadLike) -> Payload:
        if isinstance(payload, Payload):
            return payload
        return Payload.model_validate(payload)

    @staticmethod
    def _coerce_turn(turn: TurnLike) -> ConversationTurn:
        if isinstance(turn, ConversationTurn):
            return turn
        return ConversationTurn.model_validate(turn)


def respond(
    message: str,
    payload: Optional[PayloadLike] = None,
    history: Sequence[TurnLike] = (),
    config: Optional[DocChatConfig] = None,
) -> str:
    """Answer one message with a freshly built engine. Never raises."""
    try:
        engine = DocumentChatEngine(config=config)
    except Exception as e:
        logger.error("Failed to build document chat engine: %s", e, exc_info=True)
        return PIPELINE_FAILURE_MESSAGE
    return engine.respond(message, payload, history)

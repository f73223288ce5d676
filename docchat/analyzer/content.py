"""
Content Analyzer

Runs a fixed battery of linguistic passes over extracted text and builds an AnalysisRecord.

Rules:
- every pass is a pure function of the text; same text -> identical record
- topics are capped at 10 and keywords at 15, both deduplicated
- a failing entity or keyword pass degrades to an empty list, never aborts analysis
- topics come from entities, so a failed entity pass leaves them empty too
"""

import logging
from typing import List, Optional

from ..common.config import AnalyzerConfig
from ..common.language import detect_language
from ..common.schemas import AnalysisRecord
from .keywords import extract_keywords
from .linguistics import Entities, LinguisticPipeline, word_tokens
from .sentiment import SentimentScorer

logger = logging.getLogger("docchat.analyzer.content")

MAX_TOPICS = 10
MAX_KEYWORDS = 15


def _dedupe(items: List[str]) -> List[str]:
    return list(dict.fromkeys(items))


class ContentAnalyzer:
    """
    Builds AnalysisRecords from document text.

    Pipeline:
    1. Tokenize into words (word_count)
    2. Segment sentences
    3. Tag nouns, verbs, adjectives
    4. Extract people, places, organizations
    5. Derive topics (entities, deduplicated, max 10)
    6. Score sentiment (AFINN valence sum)
    7. Derive keywords (nouns + adjectives + keyword heuristic, max 15)
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        pipeline: Optional[LinguisticPipeline] = None,
        scorer: Optional[SentimentScorer] = None,
    ):
        """
        Initialize content analyzer.

        Args:
            config: Analyzer options (keyword language, language detection)
            pipeline: Linguistic pipeline; a new one is built when omitted
            scorer: Sentiment scorer; a new one is built when omitted
        """
        self._config = config or AnalyzerConfig()
        self._pipeline = pipeline or LinguisticPipeline()
        self._scorer = scorer or SentimentScorer()

    @property
    def pipeline(self) -> LinguisticPipeline:
        return self._pipeline

    def analyze(self, text: str, mime_type: str = "") -> AnalysisRecord:
        """
        Analyze document text.

        Args:
            text: Extracted document text
            mime_type: Declared media type of the source payload

        Returns:
            AnalysisRecord for the text
        """
        words = word_tokens(text)
        doc = self._pipeline.parse(text)

        sentences = self._pipeline.sentences(doc)
        pos = self._pipeline.parts_of_speech(doc)
        entities = self._extract_entities(doc)
        topics = self._extract_topics(entities)
        sentiment = self._scorer.score(text, len(words))
        keywords = self._extract_keywords(text, pos.nouns, pos.adjectives)

        language = "en"
        if self._config.detect_language:
            language = detect_language(text).code

        return AnalysisRecord(
            word_count=len(words),
            sentences=sentences,
            nouns=pos.nouns,
            verbs=pos.verbs,
            adjectives=pos.adjectives,
            people=entities.people,
            places=entities.places,
            organizations=entities.organizations,
            topics=topics,
            keywords=keywords,
            sentiment=sentiment,
            mime_type=mime_type,
            language=language,
        )

    def _extract_entities(self, doc) -> Entities:
        try:
            return self._pipeline.entities(doc)
        except Exception as e:
            logger.warning("Entity extraction failed: %s", e)
            return Entities()

    @staticmethod
    def _extract_topics(entities: Entities) -> List[str]:
        """People, places and organizations as topics, in document order"""
        return _dedupe(entities.in_order)[:MAX_TOPICS]

    def _extract_keywords(self, text: str, nouns: List[str], adjectives: List[str]) -> List[str]:
        """Union of nouns, adjectives and heuristic keywords"""
        try:
            extracted = extract_keywords(
                text,
                language=self._config.keyword_language,
                remove_digits=True,
                return_changed_case=True,
                remove_duplicates=True,
            )
            return _dedupe(nouns + adjectives + extracted)[:MAX_KEYWORDS]
        except Exception as e:
            logger.warning("Keyword extraction failed: %s", e)
            return []

"""
Analyzer - Document Text Extraction and Analysis

Turns a file payload into text and runs rule-based linguistic analysis over it.

Key Components:
- TextExtractor: Decodes payloads by media type (placeholders for images/PDF)
- LinguisticPipeline: spaCy-based tokenization, sentences, POS heuristics, entities
- SentimentScorer: AFINN lexicon polarity
- ContentAnalyzer: Builds the AnalysisRecord

Pipeline:
1. Extract text from payload
2. Tokenize and segment sentences
3. Tag grammatical categories and entities
4. Derive topics, sentiment and keywords
"""

from .extractor import TextExtractor, ExtractionResult, ExtractionStatus
from .linguistics import LinguisticPipeline, word_tokens
from .keywords import extract_keywords
from .sentiment import SentimentScorer
from .content import ContentAnalyzer

__all__ = [
    "TextExtractor",
    "ExtractionResult",
    "ExtractionStatus",
    "LinguisticPipeline",
    "word_tokens",
    "extract_keywords",
    "SentimentScorer",
    "ContentAnalyzer",
]

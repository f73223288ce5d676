"""
Document Language Detection

Per-document language identification using langdetect + Unicode script fallback.
The result is recorded on the AnalysisRecord; answers are always produced in English.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from langdetect import DetectorFactory, detect_langs
from langdetect.lang_detect_exception import LangDetectException

logger = logging.getLogger("docchat.common.language")

# Seed langdetect so repeated analysis of the same text is identical
DetectorFactory.seed = 0

# Texts shorter than this are too noisy for langdetect
MIN_DETECT_CHARS = 20

# Only the head of a document is sampled
SAMPLE_CHARS = 2000


@dataclass(frozen=True)
class LanguageInfo:
    """Detected language information"""
    code: str           # ISO 639-1: "en", "de", "ko"
    confidence: float   # 0.0~1.0
    script: str         # "Latin", "Cyrillic", "Hangul", "Kana", "CJK", ...

    @property
    def is_english(self) -> bool:
        return self.code == "en"


# Unicode range based script detection
_SCRIPT_RANGES = [
    (0x0400, 0x04FF, "Cyrillic", "ru"),
    (0x0370, 0x03FF, "Greek", "el"),
    (0x0590, 0x05FF, "Hebrew", "he"),
    (0x0600, 0x06FF, "Arabic", "ar"),
    (0xAC00, 0xD7AF, "Hangul", "ko"),
    (0x1100, 0x11FF, "Hangul", "ko"),
    (0x3040, 0x309F, "Kana", "ja"),
    (0x30A0, 0x30FF, "Kana", "ja"),
    (0x4E00, 0x9FFF, "CJK", "zh"),
]


def _detect_script(text: str) -> tuple[str, Optional[str]]:
    """Return the dominant non-Latin script and its language, or ("Latin", None)."""
    counts: dict[str, int] = {}
    langs: dict[str, str] = {}
    total = 0

    for ch in text:
        if not ch.isalpha():
            continue
        total += 1
        cp = ord(ch)
        for start, end, script, lang in _SCRIPT_RANGES:
            if start <= cp <= end:
                counts[script] = counts.get(script, 0) + 1
                langs[script] = lang
                break

    if total == 0 or not counts:
        return "Latin", None

    # Japanese mixes Kanji with Kana
    if counts.get("Kana"):
        return "Kana", "ja"

    dominant = max(counts, key=counts.get)
    if counts[dominant] > total * 0.3:
        return dominant, langs[dominant]

    return "Latin", None


def detect_language(text: str) -> LanguageInfo:
    """Detect the language of a document.

    Short or empty text defaults to English. langdetect is tried first and
    the Unicode script is used when the text is too short or langdetect fails.
    """
    if not text or not text.strip():
        return LanguageInfo(code="en", confidence=1.0, script="Latin")

    sample = text.strip()[:SAMPLE_CHARS]
    script, script_lang = _detect_script(sample)

    if len(sample) >= MIN_DETECT_CHARS:
        try:
            results = detect_langs(sample)
            if results:
                top = results[0]
                return LanguageInfo(
                    code=top.lang,
                    confidence=round(top.prob, 4),
                    script=script,
                )
        except LangDetectException as e:
            # raised for text without letter features (digits, symbols)
            logger.debug("langdetect failed: %s", e)

    if script_lang:
        return LanguageInfo(code=script_lang, confidence=0.7, script=script)

    return LanguageInfo(code="en", confidence=0.5, script="Latin")

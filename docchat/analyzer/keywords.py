"""
Keyword Extraction Heuristic

Stop-word filtering over the shared word tokenizer. Options mirror the
extraction settings used by the Content Analyzer:
language, remove_digits, return_changed_case, remove_duplicates.
"""

import re
from typing import List

from spacy.lang.en.stop_words import STOP_WORDS as ENGLISH_STOP_WORDS

from .linguistics import word_tokens

STOP_WORDS = {
    "english": ENGLISH_STOP_WORDS,
}

# Leading/trailing punctuation around a whitespace token
_EDGE_PUNCT_RE = re.compile(r"^[^\w]+|[^\w]+$")


def extract_keywords(
    text: str,
    language: str = "english",
    remove_digits: bool = True,
    return_changed_case: bool = True,
    remove_duplicates: bool = True,
) -> List[str]:
    """
    Extract candidate keywords from text.

    Args:
        text: Input text
        language: Stop-word list to apply (only "english" is bundled)
        remove_digits: Drop purely numeric tokens
        return_changed_case: Lower-case the returned keywords
        remove_duplicates: Keep only the first occurrence of each keyword

    Returns:
        Keywords in document order

    Raises:
        ValueError: If no stop-word list exists for ``language``
    """
    try:
        stop_words = STOP_WORDS[language.lower()]
    except KeyError:
        raise ValueError(f"Unsupported keyword language: {language}") from None

    keywords = []
    for token in word_tokens(text):
        word = _EDGE_PUNCT_RE.sub("", token)
        if not word:
            continue
        if word.lower() in stop_words:
            continue
        if remove_digits and re.fullmatch(r"[\d.,]+", word):
            continue
        keywords.append(word.lower() if return_changed_case else word)

    if remove_duplicates:
        keywords = list(dict.fromkeys(keywords))

    return keywords

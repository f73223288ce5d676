"""
Sentiment Scoring

Lexicon-based polarity using the AFINN word list: every recognized word
contributes its integer valence and the document score is the sum.
"""

from afinn import Afinn

from ..common.schemas import SentimentResult


class SentimentScorer:
    """AFINN scorer owned by one analyzer instance"""

    def __init__(self, language: str = "en"):
        self._afinn = Afinn(language=language)

    def score(self, text: str, word_count: int) -> SentimentResult:
        """
        Score text.

        Args:
            text: Document text
            word_count: Word count from the shared tokenizer, used for ``comparative``

        Returns:
            SentimentResult with the signed valence sum and the contributing words
        """
        positive = []
        negative = []
        for word in self._afinn.find_all(text.lower()):
            valence = self._afinn.score(word)
            if valence > 0:
                positive.append(word)
            elif valence < 0:
                negative.append(word)

        total = int(self._afinn.score(text))
        comparative = total / word_count if word_count else 0.0

        return SentimentResult(
            score=total,
            comparative=round(comparative, 4),
            positive=positive,
            negative=negative,
        )

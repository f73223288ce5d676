"""
Tests for Synthesizer

Answers are checked against hand-built AnalysisRecords so each strategy
is exercised independently of the linguistic heuristics.
"""

import pytest


def _record(**overrides):
    from docchat.common.schemas import AnalysisRecord, SentimentResult

    data = dict(
        word_count=12,
        sentences=["The budget is approved.", "Dogs bark loudly.", "Acme builds rockets."],
        nouns=["budget", "Dogs", "rockets"],
        verbs=["approved", "bark", "builds"],
        adjectives=[],
        people=[],
        places=[],
        organizations=["Acme"],
        topics=["Acme"],
        keywords=["budget", "dogs", "rockets", "acme"],
        sentiment=SentimentResult(score=2, comparative=0.1667, positive=["approved"]),
        mime_type="text/plain",
    )
    data.update(overrides)
    return AnalysisRecord(**data)


@pytest.fixture
def synthesizer():
    from docchat.responder.synthesizer import Synthesizer
    return Synthesizer()


class TestConverse:
    """Tests for no-document canned answers"""

    def test_each_intent_has_its_canned_answer(self, synthesizer):
        from docchat.responder.intent_classifier import ConversationIntent
        from docchat.responder.synthesizer import CONVERSATION_RESPONSES

        for intent in ConversationIntent:
            assert synthesizer.converse(intent) == CONVERSATION_RESPONSES[intent]

    def test_greeting_text(self, synthesizer):
        from docchat.responder.intent_classifier import ConversationIntent

        answer = synthesizer.converse(ConversationIntent.GREETING)

        assert answer.startswith("Hello! I'm your local AI assistant.")


class TestSummary:
    """Tests for the summary strategy"""

    def test_short_document(self, synthesizer):
        from docchat.responder.intent_classifier import DocumentIntent

        record = _record(word_count=12, topics=["Acme", "London", "Jane", "Paris"])
        answer = synthesizer.synthesize(DocumentIntent.SUMMARY, "summarize", record)

        assert answer == (
            "This is a short document with 12 words. "
            "It appears to discuss: Acme, London, Jane."
        )

    def test_short_document_without_topics(self, synthesizer):
        from docchat.responder.intent_classifier import DocumentIntent

        record = _record(word_count=3, topics=[])
        answer = synthesizer.synthesize(DocumentIntent.SUMMARY, "summarize", record)

        assert answer == "This is a short document with 3 words. It appears to discuss: ."

    @pytest.mark.parametrize("sentence_count,expected", [
        (1, 1),
        (3, 1),
        (4, 2),
        (7, 3),
        (20, 3),
    ])
    def test_long_document_sentence_count(self, synthesizer, sentence_count, expected):
        from docchat.responder.intent_classifier import DocumentIntent

        sentences = [f"Sentence {i}." for i in range(sentence_count)]
        record = _record(word_count=80, sentences=sentences, topics=["Acme"])
        answer = synthesizer.synthesize(DocumentIntent.SUMMARY, "summarize", record)

        head, summary = answer.split("\n\n", 1)
        assert head == (
            "This document contains 80 words and appears to focus on: Acme. "
            "Here's a summary based on the opening content:"
        )
        assert summary == " ".join(sentences[:expected])


class TestReportingStrategies:
    """Tests for keywords, sentiment, questions, translation, statistics"""

    def test_keywords_first_ten(self, synthesizer):
        from docchat.responder.intent_classifier import DocumentIntent

        keywords = [f"k{i}" for i in range(15)]
        answer = synthesizer.synthesize(DocumentIntent.KEYWORDS, "keywords", _record(keywords=keywords))

        assert answer == "Key terms in this document: " + ", ".join(keywords[:10])

    @pytest.mark.parametrize("score,label", [(3, "positive"), (-2, "negative"), (0, "neutral")])
    def test_sentiment(self, synthesizer, score, label):
        from docchat.common.schemas import SentimentResult
        from docchat.responder.intent_classifier import DocumentIntent

        record = _record(sentiment=SentimentResult(score=score))
        answer = synthesizer.synthesize(DocumentIntent.SENTIMENT, "tone?", record)

        assert answer == f"The overall sentiment of this document is {label} (score: {score})."

    def test_questions_are_fixed(self, synthesizer):
        from docchat.responder.intent_classifier import DocumentIntent
        from docchat.responder.synthesizer import GENERIC_QUESTIONS

        answer = synthesizer.synthesize(DocumentIntent.QUESTIONS, "questions", _record())

        assert answer.startswith("Here are some questions this document might help answer:\n")
        for question in GENERIC_QUESTIONS:
            assert f"• {question}" in answer

    def test_translation_is_fixed(self, synthesizer):
        from docchat.responder.intent_classifier import DocumentIntent
        from docchat.responder.synthesizer import TRANSLATION_MESSAGE

        answer = synthesizer.synthesize(DocumentIntent.TRANSLATION, "translate", _record())

        assert answer == TRANSLATION_MESSAGE

    def test_statistics(self, synthesizer):
        from docchat.responder.intent_classifier import DocumentIntent

        answer = synthesizer.synthesize(DocumentIntent.STATISTICS, "stats", _record())

        assert answer.startswith("Document Statistics:\n")
        assert "• Word count: 12" in answer
        assert "• Sentences: 3" in answer
        assert "• Average words per sentence: 4" in answer
        assert "• Nouns identified: 3" in answer
        assert "• Verbs identified: 3" in answer
        assert "• Sentiment score: 2 (positive)" in answer
        assert "• Detected language: en" in answer

    def test_average_without_sentences(self):
        from docchat.responder.synthesizer import average_words_per_sentence

        assert average_words_per_sentence(_record(word_count=0, sentences=[])) == 0

    def test_average_rounds(self):
        from docchat.responder.synthesizer import average_words_per_sentence

        assert average_words_per_sentence(_record(word_count=10, sentences=["a", "b", "c"])) == 3


class TestFacts:
    """Tests for the facts strategy"""

    def test_copular_sentences(self, synthesizer):
        from docchat.responder.intent_classifier import DocumentIntent

        answer = synthesizer.synthesize(DocumentIntent.FACTS, "facts", _record())

        assert answer == "Here are some key facts I found:\n• The budget is approved."

    def test_at_most_five_facts(self, synthesizer):
        from docchat.responder.intent_classifier import DocumentIntent

        sentences = [f"Item {i} was shipped." for i in range(8)]
        answer = synthesizer.synthesize(DocumentIntent.FACTS, "facts", _record(sentences=sentences))

        assert answer.count("•") == 5
        assert "Item 4 was shipped." in answer
        assert "Item 5" not in answer

    def test_substring_match(self, synthesizer):
        from docchat.responder.intent_classifier import DocumentIntent

        # "This" contains "is"
        answer = synthesizer.synthesize(DocumentIntent.FACTS, "facts", _record(sentences=["This works."]))

        assert "• This works." in answer

    def test_no_facts(self, synthesizer):
        from docchat.responder.intent_classifier import DocumentIntent
        from docchat.responder.synthesizer import NO_FACTS_MESSAGE

        record = _record(sentences=["Dogs bark loudly.", "Birds sing songs."])
        answer = synthesizer.synthesize(DocumentIntent.FACTS, "facts", record)

        assert answer == NO_FACTS_MESSAGE


class TestGeneral:
    """Tests for the general strategy"""

    def test_relevant_passages(self, synthesizer):
        from docchat.responder.intent_classifier import DocumentIntent

        answer = synthesizer.synthesize(DocumentIntent.GENERAL, "Tell me more", _record())

        assert answer.startswith(
            "Based on my analysis of your document, the key terms appear to be: "
            "budget, dogs, rockets, acme. The main topics are: Acme. "
        )
        assert 'Regarding your question: "Tell me more"' in answer
        assert "I found these relevant passages:\n" in answer
        assert "• The budget is approved." in answer
        assert "• Dogs bark loudly." in answer
        assert "• Acme builds rockets." in answer

    def test_no_relevant_content(self, synthesizer):
        from docchat.responder.intent_classifier import DocumentIntent
        from docchat.responder.synthesizer import NO_RELEVANT_CONTENT_MESSAGE

        record = _record(keywords=[], topics=[])
        answer = synthesizer.synthesize(DocumentIntent.GENERAL, "anything", record)

        assert answer == (
            "Based on my analysis of your document, "
            '\n\nRegarding your question: "anything"\n'
            + NO_RELEVANT_CONTENT_MESSAGE
        )

    def test_at_most_three_passages(self, synthesizer):
        from docchat.responder.intent_classifier import DocumentIntent

        sentences = [f"Budget line {i}." for i in range(6)]
        record = _record(sentences=sentences, keywords=["budget"], topics=[])
        answer = synthesizer.synthesize(DocumentIntent.GENERAL, "budget?", record)

        assert answer.count("•") == 3

    def test_greeting_falls_through_to_general(self, synthesizer):
        from docchat.responder.intent_classifier import DocumentIntent

        record = _record()
        greeting = synthesizer.synthesize(DocumentIntent.GREETING, "hello", record)
        general = synthesizer.synthesize(DocumentIntent.GENERAL, "hello", record)

        assert greeting == general

    def test_context_appended_only_to_general(self, synthesizer):
        from docchat.responder.intent_classifier import DocumentIntent

        context = "Previous conversation:\nuser: hi"
        general = synthesizer.synthesize(DocumentIntent.GENERAL, "more", _record(), context=context)
        keywords = synthesizer.synthesize(DocumentIntent.KEYWORDS, "keywords", _record(), context=context)

        assert general.endswith("\n\n" + context)
        assert context not in keywords

"""
Linguistic Pipeline

Rule-based linguistic primitives on top of a blank spaCy English pipeline:
- word tokenization shared by every stage that counts words
- sentence segmentation (sentencizer)
- lexical part-of-speech heuristics (nouns, verbs, adjectives)
- named entities from an entity ruler (people, places, organizations)

No statistical model is loaded, so results are fully deterministic.
"""

from dataclasses import dataclass, field
from typing import Dict, List

import spacy
from spacy.tokens import Doc, Token

from ..common.config import DEFAULT_MAX_PAYLOAD_BYTES


def word_tokens(text: str) -> List[str]:
    """Whitespace-delimited tokens containing at least one letter or digit.

    This is the single definition of a "word": word counts and the keyword
    heuristic both go through it.
    """
    return [chunk for chunk in text.split() if any(ch.isalnum() for ch in chunk)]


def _inflections(base: str) -> set:
    """Regular inflected forms of a verb base"""
    forms = {base, base + "s", base + "ed", base + "ing"}
    if base.endswith("e"):
        forms |= {base + "d", base[:-1] + "ing"}
    if base.endswith("y") and len(base) > 2 and base[-2] not in "aeiou":
        forms |= {base[:-1] + "ies", base[:-1] + "ied"}
    if base.endswith(("s", "sh", "ch", "x", "z")):
        forms.add(base + "es")
    return forms


@dataclass
class PartsOfSpeech:
    """Tokens grouped by grammatical category, in document order"""
    nouns: List[str] = field(default_factory=list)
    verbs: List[str] = field(default_factory=list)
    adjectives: List[str] = field(default_factory=list)


@dataclass
class Entities:
    """Named entities grouped by bucket, in document order"""
    people: List[str] = field(default_factory=list)
    places: List[str] = field(default_factory=list)
    organizations: List[str] = field(default_factory=list)
    in_order: List[str] = field(default_factory=list)  # every bucket, document order


class LinguisticPipeline:
    """
    Wraps a blank spaCy English pipeline with rule components.

    Each instance owns its own spaCy Language object; it is built once and
    only read afterwards.
    """

    AUXILIARIES = {
        "be", "is", "are", "was", "were", "been", "being", "am",
        "have", "has", "had", "having", "do", "does", "did", "done",
        "will", "would", "can", "could", "should", "may", "might", "must", "shall",
    }

    VERB_BASES = [
        "make", "take", "get", "go", "know", "think", "see", "come", "want", "use",
        "find", "give", "tell", "work", "call", "try", "ask", "need", "feel", "become",
        "leave", "put", "mean", "keep", "let", "begin", "seem", "help", "show", "hear",
        "play", "run", "move", "live", "believe", "bring", "happen", "write", "provide",
        "sit", "stand", "lose", "pay", "meet", "include", "continue", "set", "learn",
        "change", "lead", "understand", "watch", "follow", "stop", "create", "speak",
        "read", "allow", "add", "spend", "grow", "open", "walk", "win", "offer",
        "remember", "love", "consider", "appear", "buy", "wait", "serve", "die", "send",
        "expect", "build", "stay", "fall", "cut", "reach", "remain", "suggest", "raise",
        "pass", "sell", "require", "report", "decide", "pull", "say", "describe",
        "explain", "develop", "improve", "increase", "reduce", "support", "announce",
        "deliver", "discuss", "launch", "produce", "receive", "return", "release",
        "agree", "enjoy", "hate", "like", "prefer", "fail", "succeed", "manage",
        "plan", "share", "present", "analyze", "review", "publish", "approve",
    ]

    IRREGULAR_VERBS = {
        "made", "took", "taken", "got", "gotten", "went", "gone", "knew", "known",
        "thought", "saw", "seen", "came", "gave", "given", "told", "felt", "became",
        "left", "meant", "kept", "began", "begun", "heard", "ran", "brought", "wrote",
        "written", "sat", "stood", "lost", "paid", "met", "led", "understood", "spoke",
        "spoken", "spent", "grew", "grown", "won", "bought", "built", "fell", "fallen",
        "sold", "said", "drew", "drawn", "chose", "chosen", "found", "held", "sent",
    }

    ADJECTIVES = {
        "good", "great", "new", "old", "big", "small", "high", "low", "large", "long",
        "short", "young", "important", "different", "early", "late", "bad", "best",
        "better", "worse", "worst", "major", "minor", "strong", "weak", "clear", "free",
        "full", "hard", "easy", "real", "true", "false", "open", "simple", "recent",
        "main", "key", "happy", "sad", "poor", "rich", "fast", "slow", "huge", "tiny",
        "terrible", "awful", "excellent", "wonderful", "amazing", "horrible", "nice",
        "quick", "hot", "cold", "warm", "safe", "likely", "current", "final", "local",
        "global", "public", "private", "common", "general", "specific", "available",
    }

    ADJECTIVE_SUFFIXES = ("ous", "ful", "ive", "able", "ible", "ical", "less", "ish")

    # Words with verb-like endings that are not verbs
    NOT_VERBS = {
        "thing", "something", "nothing", "anything", "everything", "morning", "evening",
        "ceiling", "king", "ring", "spring", "string", "wing", "building",
        "need", "seed", "bed", "red", "hundred", "speed", "feed", "breed", "shed",
    }

    INTERJECTIONS = {"hello", "hi", "hey", "oh", "ok", "okay", "yes", "thanks", "wow", "hmm"}

    DETERMINERS = ["the", "a", "an", "this", "that", "these", "those", "our", "their", "my"]

    # --- Entity ruler vocabulary ---

    HONORIFICS = [
        "mr", "mr.", "mrs", "mrs.", "ms", "ms.", "dr", "dr.", "prof", "prof.",
        "sir", "madam", "president", "senator", "ceo", "professor", "judge",
    ]

    FIRST_NAMES = [
        "James", "John", "Robert", "Michael", "William", "David", "Richard", "Joseph",
        "Thomas", "Charles", "Daniel", "Matthew", "Mark", "Paul", "Steven", "Andrew",
        "George", "Peter", "Alex", "Sam", "Tom", "Mary", "Patricia", "Jennifer",
        "Linda", "Elizabeth", "Barbara", "Susan", "Jessica", "Sarah", "Karen", "Nancy",
        "Lisa", "Emily", "Emma", "Anna", "Maria", "Laura", "Alice", "Bob", "Carol",
        "Eve", "Grace", "Olivia", "Sophia", "Chris", "Kim", "Lee", "Wei", "Yuki",
    ]

    ORG_SUFFIXES = [
        "inc", "inc.", "corp", "corp.", "corporation", "company", "co", "co.", "ltd",
        "ltd.", "llc", "plc", "group", "university", "college", "institute", "bank",
        "foundation", "association", "agency", "ministry", "department", "council",
        "committee", "labs", "technologies", "systems", "partners", "society",
    ]

    ORG_HEADS = ["university", "bank", "institute", "ministry", "department", "college", "museum"]

    PLACE_SUFFIXES = [
        "city", "county", "river", "lake", "mountain", "mountains", "island", "islands",
        "valley", "province", "state", "street", "avenue", "bay", "ocean", "sea", "park",
    ]

    PLACES = [
        "Africa", "Asia", "Europe", "America", "Antarctica", "Australia", "North America",
        "South America", "United States", "United Kingdom", "Canada", "Mexico", "Brazil",
        "Argentina", "France", "Germany", "Italy", "Spain", "Portugal", "Netherlands",
        "Belgium", "Switzerland", "Austria", "Sweden", "Norway", "Denmark", "Finland",
        "Poland", "Ireland", "Greece", "Turkey", "Russia", "Ukraine", "China", "Japan",
        "Korea", "South Korea", "India", "Pakistan", "Indonesia", "Vietnam", "Thailand",
        "Egypt", "Nigeria", "Kenya", "South Africa", "Israel", "Iran", "Iraq",
        "New York", "Los Angeles", "San Francisco", "Chicago", "Boston", "Seattle",
        "Washington", "London", "Paris", "Berlin", "Madrid", "Rome", "Amsterdam",
        "Tokyo", "Seoul", "Beijing", "Shanghai", "Hong Kong", "Singapore", "Sydney",
        "Toronto", "Moscow", "Dubai", "Mumbai", "Delhi", "California", "Texas", "Florida",
    ]

    PLACE_ACRONYMS = ["US", "USA", "UK", "EU", "UAE"]

    ENTITY_BUCKETS = {
        "PERSON": "people",
        "GPE": "places",
        "LOC": "places",
        "ORG": "organizations",
    }

    def __init__(self, max_length: int = DEFAULT_MAX_PAYLOAD_BYTES):
        self._verb_forms = set(self.AUXILIARIES) | set(self.IRREGULAR_VERBS)
        for base in self.VERB_BASES:
            self._verb_forms |= _inflections(base)

        self._nlp = spacy.blank("en")
        # Decoded text can be as long as the payload limit allows
        self._nlp.max_length = max(self._nlp.max_length, max_length)
        self._nlp.add_pipe("sentencizer")
        ruler = self._nlp.add_pipe("entity_ruler")
        ruler.add_patterns(self._entity_patterns())

    @property
    def max_length(self) -> int:
        return self._nlp.max_length

    @property
    def stop_words(self) -> set:
        return self._nlp.Defaults.stop_words

    def parse(self, text: str) -> Doc:
        """Run the spaCy pipeline over text"""
        return self._nlp(text)

    def sentences(self, doc: Doc) -> List[str]:
        """Sentence texts, verbatim apart from surrounding whitespace"""
        sentences = []
        for sent in doc.sents:
            sentence = sent.text.strip()
            if sentence:
                sentences.append(sentence)
        return sentences

    def parts_of_speech(self, doc: Doc) -> PartsOfSpeech:
        """Tag word tokens with lexical heuristics"""
        pos = PartsOfSpeech()
        for token in doc:
            tag = self._tag(token)
            if tag == "VERB":
                pos.verbs.append(token.text)
            elif tag == "ADJ":
                pos.adjectives.append(token.text)
            elif tag == "NOUN":
                pos.nouns.append(token.text)
        return pos

    def entities(self, doc: Doc) -> Entities:
        """Bucket entity ruler matches into people, places and organizations"""
        entities = Entities()
        for ent in doc.ents:
            bucket = self.ENTITY_BUCKETS.get(ent.label_)
            if bucket is None:
                continue
            getattr(entities, bucket).append(ent.text)
            entities.in_order.append(ent.text)
        return entities

    def _tag(self, token: Token) -> str:
        """Return VERB, ADJ, NOUN, or "" for tokens that are none of these"""
        lower = token.lower_

        if lower in self._verb_forms:
            return "VERB"

        if not token.is_alpha or len(lower) < 2 or token.is_stop or lower in self.INTERJECTIONS:
            return ""

        # adverbs
        if lower.endswith("ly") and len(lower) > 4:
            return ""

        if lower in self.ADJECTIVES:
            return "ADJ"

        if lower not in self.NOT_VERBS and len(lower) > 4 and lower.endswith(("ing", "ed")):
            return "VERB"

        if token.i > 0 and token.nbor(-1).lower_ == "to" and not token.is_title:
            return "VERB"

        if len(lower) > 4 and lower.endswith(self.ADJECTIVE_SUFFIXES):
            return "ADJ"

        return "NOUN"

    def _entity_patterns(self) -> List[Dict]:
        """Token and phrase patterns for the entity ruler"""
        name_part = {"IS_TITLE": True, "IS_ALPHA": True, "LOWER": {"NOT_IN": self.DETERMINERS}}
        patterns = [
            # Dr. Jane Smith, President Obama
            {"label": "PERSON", "pattern": [
                {"LOWER": {"IN": self.HONORIFICS}},
                dict(name_part, OP="+"),
            ]},
            # John, John Smith
            {"label": "PERSON", "pattern": [
                {"TEXT": {"IN": self.FIRST_NAMES}},
                dict(name_part, OP="?"),
            ]},
            # Acme Corp, Stanford University
            {"label": "ORG", "pattern": [
                dict(name_part, OP="+"),
                {"LOWER": {"IN": self.ORG_SUFFIXES}},
            ]},
            # University of Oxford
            {"label": "ORG", "pattern": [
                {"LOWER": {"IN": self.ORG_HEADS}, "IS_TITLE": True},
                {"LOWER": "of"},
                dict(name_part, OP="+"),
            ]},
            # NASA, IBM
            {"label": "ORG", "pattern": [
                {"IS_UPPER": True, "IS_ALPHA": True, "LENGTH": {">=": 2},
                 "TEXT": {"NOT_IN": self.PLACE_ACRONYMS}},
            ]},
            # Hudson River, Orange County
            {"label": "LOC", "pattern": [
                dict(name_part, OP="+"),
                {"LOWER": {"IN": self.PLACE_SUFFIXES}, "IS_TITLE": True},
            ]},
        ]
        patterns.extend({"label": "GPE", "pattern": place} for place in self.PLACES)
        patterns.extend({"label": "GPE", "pattern": acronym} for acronym in self.PLACE_ACRONYMS)
        return patterns

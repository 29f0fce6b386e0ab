"""Document model shared by the entity and coreference mention inventories.

Tokens live once, in ``Document.tokens``. Sentences, entity mentions and
coreference mentions are views over that store, and tokens point back at the
mentions that contain them through plain integer indices.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence


class MentionType(str, Enum):
    PROPER = "PROPER"
    NOMINAL = "NOMINAL"
    PRONOMINAL = "PRONOMINAL"
    LIST = "LIST"


@dataclass(slots=True)
class Token:
    """A single token with its NER label slots and mention back-pointers."""

    word: str
    index: int = -1  # document-wide position, assigned by Document.add_sentence
    sentence_index: int = -1
    index_in_sentence: int = -1
    begin: int = 0
    end: int = 0
    pos: str = ""
    lemma: str = ""
    speaker: Optional[str] = None
    ner: str = ""  # primary label, read by the coreference system
    fine_grained_ner: str = ""
    coarse_ner: str = ""
    entity_mention_index: Optional[int] = None
    coref_mention_index: Optional[int] = None


@dataclass(slots=True)
class Sentence:
    index: int
    tokens: list[Token] = field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(token.word for token in self.tokens)


@dataclass(slots=True)
class EntityMention:
    """NER mention: a contiguous span inside one sentence (0-based, end exclusive)."""

    index: int
    sentence_index: int
    token_begin: int
    token_end: int
    text: str = ""
    ner: str = ""
    canonical_entity_mention_index: Optional[int] = None

    def __len__(self) -> int:
        return self.token_end - self.token_begin


@dataclass(slots=True)
class CorefMention:
    """
    Mention from the coreference inventory.

    Offsets are 0-based and half-open, the convention used to slice a
    sentence's token list.
    """

    mention_id: int
    sentence_index: int
    start_index: int
    end_index: int
    head_index: int
    cluster_id: Optional[int] = None
    text: str = ""
    mention_type: MentionType = MentionType.NOMINAL

    def __len__(self) -> int:
        return self.end_index - self.start_index


@dataclass(slots=True)
class ChainMention:
    """
    A mention as seen from its chain.

    Unlike CorefMention, sentence and token coordinates here are 1-based
    (end still exclusive).
    """

    mention_id: int
    cluster_id: int
    sent_num: int
    start_index: int
    end_index: int
    head_index: int
    text: str = ""
    mention_type: MentionType = MentionType.NOMINAL

    @property
    def position(self) -> tuple[int, int]:
        return (self.sent_num, self.head_index)

    @classmethod
    def from_mention(cls, mention: CorefMention) -> "ChainMention":
        if mention.cluster_id is None:
            raise ValueError(f"Coref mention {mention.mention_id} has no cluster id")
        return cls(
            mention_id=mention.mention_id,
            cluster_id=mention.cluster_id,
            sent_num=mention.sentence_index + 1,
            start_index=mention.start_index + 1,
            end_index=mention.end_index + 1,
            head_index=mention.head_index + 1,
            text=mention.text,
            mention_type=mention.mention_type,
        )


def chain_order_key(mention: ChainMention) -> tuple[int, int, int, int]:
    """Textual order: sentence, start, longer span first, then mention id."""
    return (mention.sent_num, mention.start_index, -mention.end_index, mention.mention_id)


@dataclass
class CorefChain:
    """Mentions sharing a cluster id, with one representative mention."""

    chain_id: int
    mentions: list[ChainMention] = field(default_factory=list)
    representative: Optional[ChainMention] = None

    def mentions_in_textual_order(self) -> list[ChainMention]:
        return sorted(self.mentions, key=chain_order_key)

    @staticmethod
    def compare(first: ChainMention, second: ChainMention) -> int:
        """
        Return -1, 0 or 1 as ``first`` comes before, on the same span as, or
        after ``second``. The mention id only breaks ties when sorting.
        """
        a, b = chain_order_key(first)[:3], chain_order_key(second)[:3]
        if a < b:
            return -1
        if a > b:
            return 1
        return 0


@dataclass
class Document:
    """
    Container populated incrementally by pipeline stages.

    ``sentences``, ``coref_mentions`` and ``coref_chains`` stay ``None`` until
    the stage producing them has run.
    """

    text: str = ""
    tokens: list[Token] = field(default_factory=list)
    sentences: Optional[list[Sentence]] = None
    entity_mentions: list[EntityMention] = field(default_factory=list)
    coref_mentions: Optional[list[CorefMention]] = None
    coref_chains: Optional[dict[int, CorefChain]] = None
    use_marked_discourse: bool = False

    # =========================================================================
    # Building
    # =========================================================================

    def add_sentence(self, tokens: Sequence[Token]) -> Sentence:
        """Append a sentence, assigning document and sentence positions to its tokens."""
        if self.sentences is None:
            self.sentences = []
        sentence = Sentence(index=len(self.sentences))
        for position, token in enumerate(tokens):
            token.index = len(self.tokens)
            token.sentence_index = sentence.index
            token.index_in_sentence = position
            self.tokens.append(token)
            sentence.tokens.append(token)
        self.sentences.append(sentence)
        return sentence

    def add_entity_mention(
        self,
        sentence_index: int,
        token_begin: int,
        token_end: int,
        ner: str = "",
    ) -> EntityMention:
        """Register an entity mention and point its tokens back at it.

        A token belongs to at most one entity mention; an overlapping span
        raises ``ValueError``.
        """
        tokens = self.sentence_tokens(sentence_index)
        if tokens is None or not 0 <= token_begin < token_end <= len(tokens):
            raise IndexError(
                f"Entity mention span [{token_begin}, {token_end}) is outside sentence {sentence_index}"
            )
        span = tokens[token_begin:token_end]
        claimed = [t.index for t in span if t.entity_mention_index is not None]
        if claimed:
            raise ValueError(
                f"Entity mention span [{token_begin}, {token_end}) in sentence {sentence_index} "
                f"overlaps another entity mention at token {claimed[0]}"
            )
        mention = EntityMention(
            index=len(self.entity_mentions),
            sentence_index=sentence_index,
            token_begin=token_begin,
            token_end=token_end,
            text=" ".join(token.word for token in span),
            ner=ner,
        )
        self.entity_mentions.append(mention)
        for token in span:
            token.entity_mention_index = mention.index
        return mention

    def add_coref_mention(
        self,
        sentence_index: int,
        start_index: int,
        end_index: int,
        cluster_id: Optional[int] = None,
        mention_type: MentionType = MentionType.NOMINAL,
        head_index: Optional[int] = None,
    ) -> CorefMention:
        """Register a coreference mention and point its tokens back at it.

        A token belongs to at most one coref mention; an overlapping span
        raises ``ValueError``.
        """
        tokens = self.sentence_tokens(sentence_index)
        if tokens is None or not 0 <= start_index < end_index <= len(tokens):
            raise IndexError(
                f"Coref mention span [{start_index}, {end_index}) is outside sentence {sentence_index}"
            )
        if self.coref_mentions is None:
            self.coref_mentions = []
        span = tokens[start_index:end_index]
        claimed = [t.index for t in span if t.coref_mention_index is not None]
        if claimed:
            raise ValueError(
                f"Coref mention span [{start_index}, {end_index}) in sentence {sentence_index} "
                f"overlaps another coref mention at token {claimed[0]}"
            )
        mention = CorefMention(
            mention_id=len(self.coref_mentions),
            sentence_index=sentence_index,
            start_index=start_index,
            end_index=end_index,
            head_index=end_index - 1 if head_index is None else head_index,
            cluster_id=cluster_id,
            text=" ".join(token.word for token in span),
            mention_type=mention_type,
        )
        self.coref_mentions.append(mention)
        for token in span:
            token.coref_mention_index = mention.mention_id
        return mention

    # =========================================================================
    # Lookup (None on any miss)
    # =========================================================================

    def sentence_tokens(self, sentence_index: int) -> Optional[list[Token]]:
        if self.sentences is None or not 0 <= sentence_index < len(self.sentences):
            return None
        return self.sentences[sentence_index].tokens

    def token_at(self, sentence_index: int, index_in_sentence: int) -> Optional[Token]:
        tokens = self.sentence_tokens(sentence_index)
        if tokens is None or not 0 <= index_in_sentence < len(tokens):
            return None
        return tokens[index_in_sentence]

    def entity_mention_tokens(self, mention: EntityMention) -> list[Token]:
        tokens = self.sentence_tokens(mention.sentence_index) or []
        return tokens[mention.token_begin:mention.token_end]

    def coref_mention_tokens(self, mention: CorefMention) -> Optional[list[Token]]:
        tokens = self.sentence_tokens(mention.sentence_index)
        if tokens is None:
            return None
        if not 0 <= mention.start_index <= mention.end_index <= len(tokens):
            return None
        return tokens[mention.start_index:mention.end_index]

    def get_entity_mention(self, index: Optional[int]) -> Optional[EntityMention]:
        if index is None or not 0 <= index < len(self.entity_mentions):
            return None
        return self.entity_mentions[index]

    def get_coref_mention(self, index: Optional[int]) -> Optional[CorefMention]:
        if index is None or self.coref_mentions is None:
            return None
        if not 0 <= index < len(self.coref_mentions):
            return None
        return self.coref_mentions[index]

    def get_chain(self, cluster_id: Optional[int]) -> Optional[CorefChain]:
        if cluster_id is None or self.coref_chains is None:
            return None
        return self.coref_chains.get(cluster_id)

    def has_speakers(self) -> bool:
        return any(token.speaker is not None for token in self.tokens)

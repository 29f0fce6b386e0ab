"""Inline coreference mention detection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AbstractSet, Optional

from ..core.matcher import POSSESSIVE_CLITIC
from ..document.annotation import Document, MentionType
from ..document.keys import AnnotationKey
from ..utils.config import CorefConfig

logger = logging.getLogger(__name__)

# Entity types that name values rather than referents
NON_REFERENTIAL_NER = {
    "DATE",
    "TIME",
    "DURATION",
    "SET",
    "NUMBER",
    "CARDINAL",
    "ORDINAL",
    "PERCENT",
    "MONEY",
    "QUANTITY",
}


@dataclass(slots=True)
class _Candidate:
    sentence_index: int
    start: int
    end: int
    head: int
    mention_type: MentionType


class CorefMentionAnnotator:
    """
    Builds the coref mention inventory when no earlier stage supplied one.

    Referential entity mentions become PROPER mentions, swallowing a
    following ``'s`` token, and pronoun tokens become PRONOMINAL mentions.
    Overlapping candidates are dropped so a token belongs to at most one
    coref mention.
    """

    def __init__(self, config: Optional[CorefConfig] = None):
        self.config = config or CorefConfig()
        self.pronouns = {pronoun.lower() for pronoun in self.config.pronouns}

    def requires(self) -> AbstractSet[AnnotationKey]:
        return frozenset({AnnotationKey.TOKENS, AnnotationKey.SENTENCES, AnnotationKey.MENTIONS})

    def requirements_satisfied(self) -> AbstractSet[AnnotationKey]:
        return frozenset({AnnotationKey.COREF_MENTIONS, AnnotationKey.COREF_MENTION_INDEX})

    def annotate(self, document: Document) -> None:
        document.coref_mentions = []
        for token in document.tokens:
            token.coref_mention_index = None

        candidates = self._find_candidates(document)
        candidates.sort(key=lambda c: (c.sentence_index, c.start, -c.end))

        claimed: set[tuple[int, int]] = set()
        skipped = 0
        for candidate in candidates:
            positions = {(candidate.sentence_index, i) for i in range(candidate.start, candidate.end)}
            if positions & claimed:
                skipped += 1
                continue
            claimed |= positions
            document.add_coref_mention(
                candidate.sentence_index,
                candidate.start,
                candidate.end,
                mention_type=candidate.mention_type,
                head_index=candidate.head,
            )

        logger.debug(
            "Detected %d coref mentions (%d overlapping candidates dropped)",
            len(document.coref_mentions),
            skipped,
        )

    def _find_candidates(self, document: Document) -> list[_Candidate]:
        candidates: list[_Candidate] = []

        for mention in document.entity_mentions:
            if mention.ner.upper() in NON_REFERENTIAL_NER:
                continue
            end = mention.token_end
            following = document.token_at(mention.sentence_index, end)
            if following is not None and following.word == POSSESSIVE_CLITIC:
                end += 1
            candidates.append(
                _Candidate(
                    sentence_index=mention.sentence_index,
                    start=mention.token_begin,
                    end=end,
                    head=mention.token_end - 1,
                    mention_type=MentionType.PROPER,
                )
            )

        for sentence in document.sentences or []:
            for token in sentence.tokens:
                if token.word.lower() in self.pronouns:
                    candidates.append(
                        _Candidate(
                            sentence_index=sentence.index,
                            start=token.index_in_sentence,
                            end=token.index_in_sentence + 1,
                            head=token.index_in_sentence,
                            mention_type=MentionType.PRONOMINAL,
                        )
                    )

        return candidates

"""Coreference systems the annotator delegates chain computation to."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from ..document.annotation import ChainMention, CorefChain, CorefMention, Document, MentionType
from ..errors import ConfigurationError
from ..utils.config import CorefConfig
from .registry import coref_system, get_system_for_algorithm, list_registered_algorithms

logger = logging.getLogger(__name__)

PERSON_PRONOUNS = {"he", "him", "his", "himself", "she", "her", "hers", "herself"}
NEUTER_PRONOUNS = {"it", "its", "itself"}


class CorefSystem(Protocol):
    """
    Protocol for pluggable coreference backends.

    After ``annotate`` returns, ``document.coref_chains`` maps cluster ids to
    chains and every coref mention carries its ``cluster_id``. Errors are
    raised to the caller.
    """

    def annotate(self, document: Document) -> None:
        ...


@coref_system("exact_match")
class ExactMatchCorefSystem:
    """
    String-match clustering for offline use and tests.

    Proper and nominal mentions with the same normalized text and the same
    primary NER label on their head share a chain. Pronouns join the most
    recent compatible chain started in the same or the previous sentence.
    """

    def __init__(self, config: Optional[CorefConfig] = None):
        self.config = config or CorefConfig()

    def annotate(self, document: Document) -> None:
        if document.coref_mentions is None:
            logger.warning("No coref mentions on document, producing no chains")
            document.coref_chains = {}
            return

        mentions = sorted(
            document.coref_mentions,
            key=lambda m: (m.sentence_index, m.start_index, -m.end_index),
        )

        cluster_by_key: dict[tuple[str, str], int] = {}
        # cluster id -> (head NER label, sentence of latest mention)
        recent: dict[int, tuple[str, int]] = {}

        for mention in mentions:
            mention.cluster_id = None
            if mention.mention_type is MentionType.PRONOMINAL:
                mention.cluster_id = self._antecedent_cluster(document, mention, recent)
            else:
                key = (self._normalize(document, mention), self._head_label(document, mention))
                mention.cluster_id = cluster_by_key.setdefault(key, mention.mention_id)

            if mention.cluster_id is None:
                mention.cluster_id = mention.mention_id
            label = recent.get(mention.cluster_id, (self._head_label(document, mention), 0))[0]
            recent[mention.cluster_id] = (label, mention.sentence_index)

        document.coref_chains = self._build_chains(mentions)
        logger.debug(
            "Clustered %d coref mentions into %d chains",
            len(mentions),
            len(document.coref_chains),
        )

    def _antecedent_cluster(
        self,
        document: Document,
        mention: CorefMention,
        recent: dict[int, tuple[str, int]],
    ) -> Optional[int]:
        word = mention.text.lower()
        wants_person = word in PERSON_PRONOUNS
        if not wants_person and word not in NEUTER_PRONOUNS:
            return None

        best: Optional[tuple[int, int]] = None
        for cluster_id, (label, sentence_index) in recent.items():
            if label in ("", "O") or (label == "PERSON") != wants_person:
                continue
            if not 0 <= mention.sentence_index - sentence_index <= 1:
                continue
            # latest sentence wins, then the later-starting chain
            candidate = (sentence_index, cluster_id)
            if best is None or candidate > best:
                best = candidate
        return best[1] if best else None

    @staticmethod
    def _normalize(document: Document, mention: CorefMention) -> str:
        tokens = document.coref_mention_tokens(mention) or []
        words = [token.word for token in tokens]
        if len(words) > 1 and words[-1] == "'s":
            words = words[:-1]
        return " ".join(words).lower()

    @staticmethod
    def _head_label(document: Document, mention: CorefMention) -> str:
        head = document.token_at(mention.sentence_index, mention.head_index)
        return head.ner if head is not None else ""

    @staticmethod
    def _build_chains(mentions: list[CorefMention]) -> dict[int, CorefChain]:
        chains: dict[int, CorefChain] = {}
        for mention in mentions:
            chain = chains.setdefault(mention.cluster_id, CorefChain(chain_id=mention.cluster_id))
            chain.mentions.append(ChainMention.from_mention(mention))

        for chain in chains.values():
            ordered = chain.mentions_in_textual_order()
            proper = [m for m in ordered if m.mention_type is MentionType.PROPER]
            chain.representative = proper[0] if proper else ordered[0]
        return chains


def build_coref_system(config: CorefConfig) -> CorefSystem:
    """Instantiate the coref system registered for the configured algorithm."""
    algorithm = config.algorithm.value
    system_cls = get_system_for_algorithm(algorithm)
    if system_cls is None:
        raise ConfigurationError(
            f"No coref system registered for coref.algorithm={algorithm}; "
            f"available: {', '.join(sorted(list_registered_algorithms())) or 'none'}"
        )
    return system_cls(config)

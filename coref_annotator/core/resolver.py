"""Attach canonical entity mentions to NER mentions through coreference chains."""

from __future__ import annotations

import logging
from typing import Optional

from ..document.annotation import Document, EntityMention
from .matcher import entity_mention_coref_mention_match

logger = logging.getLogger(__name__)


def resolve_canonical_index(document: Document, entity_mention: EntityMention) -> Optional[int]:
    """
    Find the canonical entity mention index for one entity mention.

    Follows the coref mention on the mention's first token to its chain, then
    the chain's representative mention back to an entity mention. Both the
    queried mention and the representative one must line up with their coref
    mentions, otherwise None is returned. Misses are normal document
    conditions and are never raised.
    """
    em_tokens = document.entity_mention_tokens(entity_mention)
    if not em_tokens:
        return None

    # No coref mention on the first token, e.g. a bare date like "now"
    coref_mention = document.get_coref_mention(em_tokens[0].coref_mention_index)
    if coref_mention is None:
        return None

    chain = document.get_chain(coref_mention.cluster_id)
    if chain is None:
        logger.debug(
            "No chain %s for coref mention %d", coref_mention.cluster_id, coref_mention.mention_id
        )
        return None

    if not entity_mention_coref_mention_match(document, entity_mention, coref_mention):
        logger.debug(
            "Entity mention %d (%r) does not line up with coref mention %d (%r)",
            entity_mention.index,
            entity_mention.text,
            coref_mention.mention_id,
            coref_mention.text,
        )
        return None

    representative = chain.representative
    if representative is None:
        return None

    # Chain coordinates are 1-based
    first_token = document.token_at(representative.sent_num - 1, representative.start_index - 1)
    if first_token is None:
        logger.debug("Representative mention of chain %d is outside the document", chain.chain_id)
        return None

    representative_index = first_token.entity_mention_index
    representative_entity_mention = document.get_entity_mention(representative_index)
    if representative_entity_mention is None:
        return None

    representative_coref_mention = document.get_coref_mention(first_token.coref_mention_index)
    if representative_coref_mention is None:
        return None

    if not entity_mention_coref_mention_match(
        document, representative_entity_mention, representative_coref_mention
    ):
        logger.debug(
            "Representative of chain %d (%r) has no matching entity mention",
            chain.chain_id,
            representative.text,
        )
        return None

    return representative_index


def canonicalize_entity_mentions(document: Document) -> int:
    """
    Set ``canonical_entity_mention_index`` on every entity mention that resolves.

    Returns the number of mentions that received a canonical index. Running
    it again over an unchanged document assigns the same indices.
    """
    resolved = 0
    for entity_mention in document.entity_mentions:
        canonical_index = resolve_canonical_index(document, entity_mention)
        if canonical_index is None:
            continue
        entity_mention.canonical_entity_mention_index = canonical_index
        resolved += 1

    logger.debug(
        "Canonicalized %d of %d entity mentions", resolved, len(document.entity_mentions)
    )
    return resolved

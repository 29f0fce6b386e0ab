"""Span equivalence between an entity mention and a coreference mention."""

from __future__ import annotations

from ..document.annotation import CorefMention, Document, EntityMention

POSSESSIVE_CLITIC = "'s"


def entity_mention_coref_mention_match(
    document: Document,
    entity_mention: EntityMention,
    coref_mention: CorefMention,
) -> bool:
    """
    Return True when both mentions cover the same tokens.

    The coref mention may be one token longer than the entity mention if
    that extra trailing token is the possessive clitic ``'s``; NER spans
    usually leave it out while coref spans keep it. Tokens are compared by
    their position in the document's shared token list, never by text.
    """
    em_tokens = document.entity_mention_tokens(entity_mention)
    cm_tokens = document.coref_mention_tokens(coref_mention)
    if cm_tokens is None:
        return False

    em_size = len(em_tokens)
    cm_size = len(cm_tokens)
    if abs(cm_size - em_size) > 1:
        return False
    if em_size > cm_size:
        return False

    for em_token, cm_token in zip(em_tokens, cm_tokens):
        if em_token.index != cm_token.index:
            return False

    if cm_size - em_size == 1:
        return cm_tokens[-1].word == POSSESSIVE_CLITIC
    return True

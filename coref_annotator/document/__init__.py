"""Document model, attribute keys and document readers/writers."""

from .annotation import (
    ChainMention,
    CorefChain,
    CorefMention,
    Document,
    EntityMention,
    MentionType,
    Sentence,
    Token,
    chain_order_key,
)
from .keys import AnnotationKey

__all__ = [
    "AnnotationKey",
    "ChainMention",
    "CorefChain",
    "CorefMention",
    "Document",
    "EntityMention",
    "MentionType",
    "Sentence",
    "Token",
    "chain_order_key",
]

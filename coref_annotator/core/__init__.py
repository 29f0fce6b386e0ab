"""Mention alignment, canonicalization and NER granularity switching."""

from .granularity import NerGranularity, primary_ner_granularity, set_ner_granularity
from .links import get_links
from .matcher import entity_mention_coref_mention_match
from .resolver import canonicalize_entity_mentions, resolve_canonical_index

__all__ = [
    "NerGranularity",
    "canonicalize_entity_mentions",
    "entity_mention_coref_mention_match",
    "get_links",
    "primary_ner_granularity",
    "resolve_canonical_index",
    "set_ner_granularity",
]

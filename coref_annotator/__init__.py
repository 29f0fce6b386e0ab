"""Coreference annotation stage that links NER mentions to canonical entity mentions."""

__version__ = "0.1.0"
__author__ = "coref-annotator"

from .core import (
    NerGranularity,
    canonicalize_entity_mentions,
    entity_mention_coref_mention_match,
    get_links,
    primary_ner_granularity,
)
from .document import AnnotationKey, CorefChain, CorefMention, Document, EntityMention, Token
from .errors import ConfigurationError, CorefAnnotatorError, DocumentFormatError
from .pipeline import AnnotationPipeline, CorefAnnotator
from .utils.config import CorefConfig

__all__ = [
    "AnnotationKey",
    "AnnotationPipeline",
    "ConfigurationError",
    "CorefAnnotator",
    "CorefAnnotatorError",
    "CorefChain",
    "CorefConfig",
    "CorefMention",
    "Document",
    "DocumentFormatError",
    "EntityMention",
    "NerGranularity",
    "Token",
    "canonicalize_entity_mentions",
    "entity_mention_coref_mention_match",
    "get_links",
    "primary_ner_granularity",
]

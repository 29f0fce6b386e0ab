"""Names of the document attributes annotators require and produce."""

from enum import Enum


class AnnotationKey(str, Enum):
    """Document attributes the pipeline scheduler reasons about"""
    TEXT = "text"
    TOKENS = "tokens"
    CHARACTER_OFFSET_BEGIN = "character_offset_begin"
    CHARACTER_OFFSET_END = "character_offset_end"
    INDEX = "index"
    VALUE = "value"
    SENTENCES = "sentences"
    SENTENCE_INDEX = "sentence_index"
    PART_OF_SPEECH = "part_of_speech"
    LEMMA = "lemma"
    NAMED_ENTITY_TAG = "named_entity_tag"
    COARSE_NAMED_ENTITY_TAG = "coarse_named_entity_tag"
    FINE_GRAINED_NAMED_ENTITY_TAG = "fine_grained_named_entity_tag"
    BASIC_DEPENDENCIES = "basic_dependencies"
    ENHANCED_DEPENDENCIES = "enhanced_dependencies"
    TREE = "tree"
    CATEGORY = "category"
    MENTIONS = "mentions"
    COREF_MENTIONS = "coref_mentions"
    COREF_MENTION_INDEX = "coref_mention_index"
    COREF_CHAINS = "coref_chains"

"""Coreference annotator: runs a coref system and canonicalizes entity mentions."""

from __future__ import annotations

import logging
from typing import AbstractSet, Optional

from ..core.granularity import NerGranularity, primary_ner_granularity
from ..core.resolver import canonicalize_entity_mentions
from ..document.annotation import Document
from ..document.keys import AnnotationKey
from ..errors import ConfigurationError
from ..utils.config import CorefAlgorithm, CorefConfig, Language, MentionDetectionType
from .mentions import CorefMentionAnnotator
from .systems import CorefSystem, build_coref_system

logger = logging.getLogger(__name__)

BASE_REQUIREMENTS = frozenset({
    AnnotationKey.TEXT,
    AnnotationKey.TOKENS,
    AnnotationKey.CHARACTER_OFFSET_BEGIN,
    AnnotationKey.CHARACTER_OFFSET_END,
    AnnotationKey.INDEX,
    AnnotationKey.VALUE,
    AnnotationKey.SENTENCES,
    AnnotationKey.SENTENCE_INDEX,
    AnnotationKey.PART_OF_SPEECH,
    AnnotationKey.LEMMA,
    AnnotationKey.NAMED_ENTITY_TAG,
    AnnotationKey.COARSE_NAMED_ENTITY_TAG,
    AnnotationKey.FINE_GRAINED_NAMED_ENTITY_TAG,
    AnnotationKey.BASIC_DEPENDENCIES,
    AnnotationKey.ENHANCED_DEPENDENCIES,
})


class CorefAnnotator:
    """
    Adds coreference chains to a document and links NER mentions to the
    canonical entity mention of their chain.

    The coref system sees coarse NER labels as the primary label while it
    runs; fine labels are put back afterwards even if it raises.
    """

    def __init__(
        self,
        config: Optional[CorefConfig] = None,
        coref_system: Optional[CorefSystem] = None,
        mention_annotator: Optional[CorefMentionAnnotator] = None,
    ):
        self.config = config or CorefConfig()

        if (self.config.algorithm is CorefAlgorithm.HYBRID
                and self.config.language is Language.ENGLISH):
            logger.error(
                "coref.algorithm=hybrid is not supported for English, "
                "please change coref.algorithm or coref.language"
            )
            raise ConfigurationError("coref.algorithm=hybrid is not supported for English")

        if coref_system is None:
            try:
                coref_system = build_coref_system(self.config)
            except ConfigurationError:
                logger.error("Error creating CorefAnnotator, terminating pipeline construction")
                raise
        self.coref_system = coref_system

        # Unless an earlier stage supplies coref mentions, detect them here
        self.perform_mention_detection = not self.config.use_custom_mention_detection
        self.mention_annotator: Optional[CorefMentionAnnotator] = None
        if self.perform_mention_detection:
            self.mention_annotator = mention_annotator or CorefMentionAnnotator(self.config)

    def annotate(self, document: Document) -> None:
        if document.sentences is None:
            logger.error("Coreference resolution requires sentences, skipping document")
            return

        with primary_ner_granularity(document, NerGranularity.COARSE):
            if self.mention_annotator is not None:
                self.mention_annotator.annotate(document)
            if document.has_speakers():
                document.use_marked_discourse = True
            self.coref_system.annotate(document)

        resolved = canonicalize_entity_mentions(document)
        logger.info(
            "Found %d coref chains, canonicalized %d/%d entity mentions",
            len(document.coref_chains or {}),
            resolved,
            len(document.entity_mentions),
        )

    def requires(self) -> AbstractSet[AnnotationKey]:
        requirements = set(BASE_REQUIREMENTS)
        if self.config.md_type is not MentionDetectionType.DEPENDENCY:
            requirements.add(AnnotationKey.TREE)
            requirements.add(AnnotationKey.CATEGORY)
        if not self.perform_mention_detection:
            requirements.add(AnnotationKey.COREF_MENTIONS)
        return frozenset(requirements)

    def requirements_satisfied(self) -> AbstractSet[AnnotationKey]:
        return frozenset({AnnotationKey.COREF_CHAINS})

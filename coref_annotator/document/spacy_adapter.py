"""
Build Documents from spaCy pipelines
"""

import logging
from typing import Dict, Optional

import spacy
from spacy.language import Language
from spacy.tokens import Doc

from ..errors import ConfigurationError
from .annotation import Document, Token

logger = logging.getLogger(__name__)

# OntoNotes labels used by spaCy's English models -> coarse four-class labels.
# Numeric and temporal types keep their own label.
COARSE_NER: Dict[str, str] = {
    "PERSON": "PERSON",
    "ORG": "ORGANIZATION",
    "GPE": "LOCATION",
    "LOC": "LOCATION",
    "FAC": "LOCATION",
    "NORP": "MISC",
    "PRODUCT": "MISC",
    "EVENT": "MISC",
    "WORK_OF_ART": "MISC",
    "LAW": "MISC",
    "LANGUAGE": "MISC",
    "DATE": "DATE",
    "TIME": "TIME",
    "PERCENT": "PERCENT",
    "MONEY": "MONEY",
    "QUANTITY": "QUANTITY",
    "ORDINAL": "ORDINAL",
    "CARDINAL": "CARDINAL",
}


def load_spacy_pipeline(model: str = "en_core_web_sm") -> Language:
    """Load a spaCy model by name."""
    try:
        nlp = spacy.load(model)
    except OSError as e:
        logger.warning(f"spaCy model {model} not found. Install with: python -m spacy download {model}")
        raise ConfigurationError(f"spaCy model {model} is not installed") from e
    logger.info(f"Loaded spaCy model {model}")
    return nlp


def coarse_label(label: str) -> str:
    if not label or label == "O":
        return "O"
    return COARSE_NER.get(label, "MISC")


def document_from_spacy(doc: Doc) -> Document:
    """
    Convert a spaCy Doc into a Document.

    Fine labels are spaCy's entity types, coarse labels come from COARSE_NER
    and the primary label starts out as the fine one. Entities become entity
    mentions. A Doc without sentence boundaries gives a Document whose
    ``sentences`` is None and which has no entity mentions.
    """
    document = Document(text=doc.text)

    def make_token(sp_token) -> Token:
        fine = sp_token.ent_type_ or "O"
        return Token(
            word=sp_token.text,
            begin=sp_token.idx,
            end=sp_token.idx + len(sp_token.text),
            pos=sp_token.tag_,
            lemma=sp_token.lemma_,
            ner=fine,
            fine_grained_ner=fine,
            coarse_ner=coarse_label(fine),
        )

    if not doc.has_annotation("SENT_START"):
        logger.warning("spaCy doc has no sentence boundaries")
        for position, sp_token in enumerate(doc):
            token = make_token(sp_token)
            token.index = position
            document.tokens.append(token)
        return document

    sentence_starts: Dict[int, int] = {}
    for sent in doc.sents:
        sentence = document.add_sentence([make_token(t) for t in sent])
        sentence_starts[sent.start] = sentence.index

    for ent in doc.ents:
        sent_start = ent.sent.start
        sentence_index: Optional[int] = sentence_starts.get(sent_start)
        if sentence_index is None or ent.end > ent.sent.end:
            logger.debug(f"Skipping entity {ent.text!r} that crosses a sentence boundary")
            continue
        mention = document.add_entity_mention(
            sentence_index, ent.start - sent_start, ent.end - sent_start, ner=ent.label_
        )
        mention.text = ent.text

    return document

"""
Reading and writing documents as CoreNLP-style JSON
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import DocumentFormatError
from .annotation import Document, MentionType, Token

logger = logging.getLogger(__name__)


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TokenModel(_Model):
    """A token; NER fields default to empty"""
    word: str
    begin: int = Field(default=0, alias="characterOffsetBegin")
    end: int = Field(default=0, alias="characterOffsetEnd")
    pos: str = ""
    lemma: str = ""
    speaker: Optional[str] = None
    ner: str = ""
    fine_grained_ner: Optional[str] = Field(default=None, alias="fineGrainedNer")
    coarse_ner: str = Field(default="", alias="coarseNer")


class EntityMentionModel(_Model):
    """Entity mention with sentence-relative, 0-based half-open token offsets"""
    token_begin: int = Field(alias="tokenBegin", ge=0)
    token_end: int = Field(alias="tokenEnd", ge=1)
    ner: str = ""
    text: Optional[str] = None
    canonical_entity_mention_index: Optional[int] = Field(
        default=None, alias="canonicalEntityMentionIndex"
    )


class CorefMentionModel(_Model):
    """Pre-detected coref mention, 0-based half-open like entity mentions"""
    sentence_index: int = Field(alias="sentenceIndex", ge=0)
    start_index: int = Field(alias="startIndex", ge=0)
    end_index: int = Field(alias="endIndex", ge=1)
    head_index: Optional[int] = Field(default=None, alias="headIndex")
    mention_type: MentionType = Field(default=MentionType.NOMINAL, alias="type")


class SentenceModel(_Model):
    tokens: List[TokenModel]
    entitymentions: List[EntityMentionModel] = Field(default_factory=list)


class DocumentModel(_Model):
    """Input document. ``sentences`` is absent when segmentation never ran."""
    text: str = ""
    sentences: Optional[List[SentenceModel]] = None
    tokens: List[TokenModel] = Field(default_factory=list)
    coref_mentions: Optional[List[CorefMentionModel]] = Field(default=None, alias="corefMentions")


def _make_token(model: TokenModel) -> Token:
    fine = model.ner if model.fine_grained_ner is None else model.fine_grained_ner
    return Token(
        word=model.word,
        begin=model.begin,
        end=model.end,
        pos=model.pos,
        lemma=model.lemma,
        speaker=model.speaker,
        ner=model.ner,
        fine_grained_ner=fine,
        coarse_ner=model.coarse_ner,
    )


def document_from_json(data: Dict[str, Any]) -> Document:
    """Build a Document from parsed JSON data."""
    try:
        model = DocumentModel.model_validate(data)
    except ValidationError as e:
        raise DocumentFormatError(f"Invalid document: {e}") from e

    document = Document(text=model.text)

    if model.sentences is None:
        # Unsegmented input: keep the tokens, leave sentences unset
        for position, token_model in enumerate(model.tokens):
            token = _make_token(token_model)
            token.index = position
            document.tokens.append(token)
        return document

    try:
        for sentence_index, sentence_model in enumerate(model.sentences):
            document.add_sentence([_make_token(t) for t in sentence_model.tokens])
            for em_model in sentence_model.entitymentions:
                mention = document.add_entity_mention(
                    sentence_index, em_model.token_begin, em_model.token_end, ner=em_model.ner
                )
                if em_model.text:
                    mention.text = em_model.text
                mention.canonical_entity_mention_index = em_model.canonical_entity_mention_index

        if model.coref_mentions is not None:
            document.coref_mentions = []
            for cm_model in model.coref_mentions:
                document.add_coref_mention(
                    cm_model.sentence_index,
                    cm_model.start_index,
                    cm_model.end_index,
                    mention_type=cm_model.mention_type,
                    head_index=cm_model.head_index,
                )
    except (IndexError, ValueError) as e:
        raise DocumentFormatError(str(e)) from e

    logger.debug(
        f"Loaded document with {len(document.sentences or [])} sentences, "
        f"{len(document.tokens)} tokens, {len(document.entity_mentions)} entity mentions"
    )
    return document


def load_document(path: Path) -> Document:
    """Read a JSON document from disk."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DocumentFormatError(f"{path} is not valid JSON: {e}") from e
    return document_from_json(data)


def _token_to_json(token: Token) -> Dict[str, Any]:
    return TokenModel(
        word=token.word,
        begin=token.begin,
        end=token.end,
        pos=token.pos,
        lemma=token.lemma,
        speaker=token.speaker,
        ner=token.ner,
        fine_grained_ner=token.fine_grained_ner,
        coarse_ner=token.coarse_ner,
    ).model_dump(by_alias=True, exclude_none=True)


def document_to_json(document: Document) -> Dict[str, Any]:
    """
    Serialize a Document.

    Entity mentions carry ``canonicalEntityMentionIndex`` when resolved and
    chains are written under ``corefs`` with 1-based chain coordinates.
    """
    output: Dict[str, Any] = {"text": document.text}

    if document.sentences is None:
        output["tokens"] = [_token_to_json(token) for token in document.tokens]
    else:
        mentions_by_sentence: Dict[int, List[Dict[str, Any]]] = {}
        for mention in document.entity_mentions:
            entry: Dict[str, Any] = {
                "index": mention.index,
                "tokenBegin": mention.token_begin,
                "tokenEnd": mention.token_end,
                "text": mention.text,
                "ner": mention.ner,
            }
            if mention.canonical_entity_mention_index is not None:
                entry["canonicalEntityMentionIndex"] = mention.canonical_entity_mention_index
            mentions_by_sentence.setdefault(mention.sentence_index, []).append(entry)

        output["sentences"] = [
            {
                "index": sentence.index,
                "tokens": [_token_to_json(token) for token in sentence.tokens],
                "entitymentions": mentions_by_sentence.get(sentence.index, []),
            }
            for sentence in document.sentences
        ]

    if document.coref_chains is not None:
        output["corefs"] = {
            str(chain_id): [
                {
                    "id": mention.mention_id,
                    "text": mention.text,
                    "type": mention.mention_type.value,
                    "sentNum": mention.sent_num,
                    "startIndex": mention.start_index,
                    "endIndex": mention.end_index,
                    "headIndex": mention.head_index,
                    "position": list(mention.position),
                    "isRepresentativeMention": mention is chain.representative,
                }
                for mention in chain.mentions_in_textual_order()
            ]
            for chain_id, chain in sorted(document.coref_chains.items())
        }

    return output

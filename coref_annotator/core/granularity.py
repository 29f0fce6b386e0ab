"""Switch which NER label granularity is the primary ``ner`` label on tokens."""

from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Iterator

from ..document.annotation import Document, Token


class NerGranularity(str, Enum):
    FINE = "fine"
    COARSE = "coarse"
    OTHER = "other"


def _source_label(token: Token, granularity: NerGranularity) -> str:
    if granularity is NerGranularity.FINE:
        return token.fine_grained_ner
    if granularity is NerGranularity.COARSE:
        return token.coarse_ner
    return token.ner


def set_ner_granularity(document: Document, granularity: NerGranularity) -> None:
    """Copy the chosen granularity into each token's primary label, skipping empty labels."""
    granularity = NerGranularity(granularity)
    for token in document.tokens:
        label = _source_label(token, granularity)
        if label:
            token.ner = label


@contextmanager
def primary_ner_granularity(document: Document, granularity: NerGranularity) -> Iterator[Document]:
    """
    Make ``granularity`` the primary NER label for the duration of the block.

    On exit, normal or by exception, the primary label goes back to the fine
    grained one. Tokens without a fine label get back whatever primary label
    they had on entry.
    """
    saved = [token.ner for token in document.tokens]
    set_ner_granularity(document, granularity)
    try:
        yield document
    finally:
        for token, label in zip(document.tokens, saved):
            token.ner = token.fine_grained_ner or label

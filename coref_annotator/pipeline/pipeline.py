"""Sequential annotation pipeline with requirement checking."""

from __future__ import annotations

import logging
import time
from typing import AbstractSet, Iterable, List, Optional

from ..document.annotation import Document
from ..document.keys import AnnotationKey
from ..errors import ConfigurationError
from .annotator import Annotator

logger = logging.getLogger(__name__)


class AnnotationPipeline:
    """
    Runs annotators in order over a document.

    At construction every annotator's requirements must be covered by the
    attributes the input documents already carry (``provided``) plus
    whatever earlier annotators satisfy.
    """

    def __init__(
        self,
        annotators: Iterable[Annotator],
        provided: Optional[AbstractSet[AnnotationKey]] = None,
    ):
        self.annotators: List[Annotator] = list(annotators)
        self.provided = frozenset(provided or ())
        self._check_requirements()

    def _check_requirements(self) -> None:
        satisfied = set(self.provided)
        for annotator in self.annotators:
            missing = set(annotator.requires()) - satisfied
            if missing:
                names = ", ".join(sorted(key.value for key in missing))
                raise ConfigurationError(
                    f"{type(annotator).__name__} requires annotations not produced "
                    f"by earlier stages: {names}"
                )
            satisfied |= set(annotator.requirements_satisfied())

    def annotate(self, document: Document) -> Document:
        for annotator in self.annotators:
            start = time.perf_counter()
            annotator.annotate(document)
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.debug(f"{type(annotator).__name__} took {elapsed_ms:.1f}ms")
        return document

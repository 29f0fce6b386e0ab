"""The contract every pipeline stage exposes to the scheduler."""

from __future__ import annotations

from typing import AbstractSet, Protocol

from ..document.annotation import Document
from ..document.keys import AnnotationKey


class Annotator(Protocol):
    """Protocol for pipeline stages."""

    def annotate(self, document: Document) -> None:
        ...

    def requires(self) -> AbstractSet[AnnotationKey]:
        """Attributes that must already be on the document."""
        ...

    def requirements_satisfied(self) -> AbstractSet[AnnotationKey]:
        """Attributes this stage guarantees once ``annotate`` returns."""
        ...

"""
Pipeline stages: the coreference annotator, its collaborators and a runner
"""

from .annotator import Annotator
from .coref import CorefAnnotator
from .mentions import CorefMentionAnnotator
from .pipeline import AnnotationPipeline
from .registry import coref_system
from .systems import CorefSystem, ExactMatchCorefSystem, build_coref_system

__all__ = [
    "AnnotationPipeline",
    "Annotator",
    "CorefAnnotator",
    "CorefMentionAnnotator",
    "CorefSystem",
    "ExactMatchCorefSystem",
    "build_coref_system",
    "coref_system",
]

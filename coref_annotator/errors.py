"""Exception types raised by the coreference annotation stage."""


class CorefAnnotatorError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(CorefAnnotatorError):
    """Unsupported or inconsistent configuration, raised while assembling a pipeline."""


class DocumentFormatError(CorefAnnotatorError):
    """A serialized document could not be turned into a Document."""

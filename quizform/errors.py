"""Exceptions raised by quizform."""


class QuizFormError(Exception):
    """Base class for conversion failures surfaced to callers."""


class TemplateShapeError(QuizFormError):
    """The page template lacks the form-open or form-close anchor."""


class SinkWriteError(QuizFormError):
    """The output sink rejected a write."""


class UnsupportedDocumentError(QuizFormError):
    """No text extractor exists for the document's file type."""

"""
Quiz Form

Converts numbered quiz documents into self-contained HTML assessment forms.
"""

from .converter import convert_file, convert_text
from .errors import QuizFormError, SinkWriteError, TemplateShapeError, UnsupportedDocumentError
from .ingestion import extract_text
from .models import Option, Question
from .parser import parse_questions
from .renderer import render, render_to

__all__ = [
    "Option",
    "Question",
    "QuizFormError",
    "SinkWriteError",
    "TemplateShapeError",
    "UnsupportedDocumentError",
    "convert_file",
    "convert_text",
    "extract_text",
    "parse_questions",
    "render",
    "render_to",
]

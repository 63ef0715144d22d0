"""
Quiz Conversion Pipeline

document -> text -> questions -> HTML assessment page
"""

import logging
import os
import time
from pathlib import Path
from typing import Optional

from quizform.ingestion import extract_text
from quizform.models import Question
from quizform.parser import parse_questions
from quizform.renderer import load_template, render, render_to


# Configuration
DEFAULT_TITLE = os.getenv("QUIZFORM_TITLE", "Online Assessment")
DEFAULT_OUTPUT_DIR = os.getenv("QUIZFORM_OUTPUT_DIR", "output")

log = logging.getLogger(__name__)


def default_output_path(output_dir: Optional[str] = None) -> Path:
    """Timestamped output file name, e.g. output/assessment_1700000000000.html."""
    return Path(output_dir or DEFAULT_OUTPUT_DIR) / f"assessment_{time.time_ns() // 1_000_000}.html"


def convert_text(text: str, title: Optional[str] = None, template: Optional[str] = None) -> str:
    """Parse quiz text and render it as an HTML page string."""
    questions = parse_questions(text)
    log.info("Rendering %d questions", len(questions))
    return render(questions, title or DEFAULT_TITLE, template)


def convert_file(
    input_path: str,
    output_path: str,
    title: Optional[str] = None,
    template_path: Optional[str] = None,
) -> list[Question]:
    """
    Convert a quiz document into an HTML file, streaming the output.

    Args:
        input_path: Source document (.docx, .pdf, .txt, .md)
        output_path: HTML file to write; parent directories are created
        title: Page title (defaults to QUIZFORM_TITLE)
        template_path: Page template (defaults to the bundled template)

    Returns:
        The parsed questions
    """
    template = load_template(template_path)
    questions = parse_questions(extract_text(input_path))
    log.info("Parsed %d questions from %s", len(questions), input_path)

    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", encoding="utf-8") as sink:
        render_to(questions, title or DEFAULT_TITLE, template, sink)

    log.info("Wrote %s", out)
    return questions

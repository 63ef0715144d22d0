"""
Assessment Renderer

Renders parsed questions into an HTML form using a page template with
{{title}} and {{questionsHtml}} placeholders inside <form id="assessmentForm">.
"""

import html
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, TextIO

from quizform.errors import SinkWriteError, TemplateShapeError
from quizform.models import Question

log = logging.getLogger(__name__)

FORM_OPEN = '<form id="assessmentForm">'
FORM_CLOSE = "</form>"
HEAD_CLOSE = "</head>"
TITLE_PLACEHOLDER = "{{title}}"
QUESTIONS_PLACEHOLDER = "{{questionsHtml}}"

DEFAULT_TEMPLATE_PATH = Path(__file__).resolve().parent / "templates" / "evaluation.html"
TEXT_ANSWER_PLACEHOLDER = os.getenv("QUIZFORM_TEXT_PLACEHOLDER", "Enter your answer")


@dataclass(frozen=True)
class TemplateParts:
    """Static regions of a page template, in output order."""
    head: str
    heading: str
    opening: str
    trailer: str
    closing: str
    has_placeholder: bool


def load_template(path: Optional[str] = None) -> str:
    """Read a template file, falling back to QUIZFORM_TEMPLATE and then the bundled one."""
    template_path = Path(path or os.getenv("QUIZFORM_TEMPLATE") or DEFAULT_TEMPLATE_PATH)
    return template_path.read_text(encoding="utf-8")


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


def split_template(template: str, title: str = "") -> TemplateParts:
    """
    Split a template around the form anchors and fill in the title.

    Raises:
        TemplateShapeError: If the form-open or form-close anchor is missing
    """
    form_start = template.find(FORM_OPEN)
    if form_start == -1:
        raise TemplateShapeError(f"Template has no {FORM_OPEN!r} anchor")
    inner_start = form_start + len(FORM_OPEN)
    form_end = template.find(FORM_CLOSE, inner_start)
    if form_end == -1:
        raise TemplateShapeError(f"Template has no {FORM_CLOSE!r} anchor after the form opening")

    safe_title = _escape(title)

    def fill(region: str) -> str:
        return region.replace(TITLE_PLACEHOLDER, safe_title)

    prefix = template[:form_start]
    head_end = prefix.find(HEAD_CLOSE)
    head_end = len(prefix) if head_end == -1 else head_end + len(HEAD_CLOSE)

    inner = template[inner_start:form_end]
    marker = inner.find(QUESTIONS_PLACEHOLDER)
    if marker == -1:
        leading, trailing = inner, ""
    else:
        leading = inner[:marker]
        trailing = inner[marker + len(QUESTIONS_PLACEHOLDER):].replace(QUESTIONS_PLACEHOLDER, "")

    return TemplateParts(
        head=fill(prefix[:head_end]),
        heading=fill(prefix[head_end:]),
        opening=FORM_OPEN + fill(leading),
        trailer=fill(trailing),
        closing=fill(template[form_end:]),
        has_placeholder=marker != -1,
    )


def question_html(question: Question) -> str:
    """Render one question block."""
    qid = question.id
    stem = f'<div class="question-stem">{qid}. {_escape(question.stem)}</div>'

    if question.type == "choice":
        options = "".join(
            f"""
                <div class="option">
                    <input type="radio" name="question-{qid}" id="q{qid}-{opt.letter}" value="{opt.letter}">
                    <label for="q{qid}-{opt.letter}">{opt.letter}. {_escape(opt.text)}</label>
                </div>"""
            for opt in question.options
        )
        body = f"""
            <div class="options">{options}
            </div>"""
    else:
        body = f"""
            <div>
                <textarea name="question-{qid}" rows="4" cols="60" placeholder="{html.escape(TEXT_ANSWER_PLACEHOLDER)}"></textarea>
            </div>"""

    return f"""
        <div class="question" data-id="{qid}">
            {stem}{body}
        </div>"""


def render(questions: Iterable[Question], title: str, template: Optional[str] = None) -> str:
    """Render questions into a complete HTML page string."""
    parts = split_template(load_template() if template is None else template, title)
    chunks = [parts.head, parts.heading, parts.opening]
    if parts.has_placeholder:
        chunks.extend(question_html(q) for q in questions)
    chunks.extend([parts.trailer, parts.closing])
    return "".join(chunks)


def _write(sink: TextIO, chunk: str) -> None:
    try:
        sink.write(chunk)
    except (OSError, ValueError) as exc:
        raise SinkWriteError(f"Failed to write rendered HTML: {exc}") from exc


def render_to(
    questions: Iterable[Question],
    title: str,
    template: Optional[str],
    sink: TextIO,
) -> int:
    """
    Stream the rendered page into a writable text sink.

    Writes the same bytes as render(), one write per static region and one
    per question. Stops early if the sink reports itself closed after a
    question block.

    Returns:
        Number of question blocks written
    """
    parts = split_template(load_template() if template is None else template, title)

    _write(sink, parts.head)
    _write(sink, parts.heading)
    _write(sink, parts.opening)

    written = 0
    if parts.has_placeholder:
        for question in questions:
            _write(sink, question_html(question))
            written += 1
            if getattr(sink, "closed", False):
                log.info("Output closed after %d questions, stopping", written)
                return written

    _write(sink, parts.trailer)
    _write(sink, parts.closing)
    log.debug("Rendered %d questions", written)
    return written

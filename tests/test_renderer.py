import io

import pytest

from quizform.errors import SinkWriteError, TemplateShapeError
from quizform.models import Option, Question
from quizform.parser import parse_questions
from quizform.renderer import (
    FORM_OPEN,
    question_html,
    render,
    render_to,
    split_template,
)


TEMPLATE = (
    "<html><head><title>{{title}}</title></head>\n"
    "<body><h1>{{title}}</h1>\n"
    '<form id="assessmentForm">\n'
    "{{questionsHtml}}\n"
    "<button>Send</button></form></body></html>"
)

QUESTIONS = [
    Question(
        id=1,
        stem="Capital of China?",
        options=(Option(letter="A", text="Shanghai"), Option(letter="B", text="Beijing")),
    ),
    Question(id=2, stem="Describe AI."),
]


class RecordingSink:
    """Collects writes; optionally fails or closes after a number of writes."""

    def __init__(self, fail_on=None, close_after=None):
        self.writes = []
        self.closed = False
        self.fail_on = fail_on
        self.close_after = close_after

    def write(self, chunk):
        if self.fail_on is not None and len(self.writes) == self.fail_on:
            raise OSError("disk full")
        self.writes.append(chunk)
        if self.close_after is not None and len(self.writes) == self.close_after:
            self.closed = True
        return len(chunk)


def test_render_fills_title_and_questions():
    page = render(QUESTIONS, "Quiz", TEMPLATE)

    assert "<title>Quiz</title>" in page
    assert "<h1>Quiz</h1>" in page
    assert "{{" not in page
    assert '<input type="radio" name="question-1" id="q1-A" value="A">' in page
    assert '<label for="q1-B">B. Beijing</label>' in page
    assert '<textarea name="question-2"' in page
    assert page.index("Capital of China?") < page.index("Describe AI.") < page.index("<button>Send</button>")


def test_render_matches_streamed_output():
    sink = io.StringIO()
    written = render_to(QUESTIONS, "Quiz", TEMPLATE, sink)

    assert written == 2
    assert sink.getvalue() == render(QUESTIONS, "Quiz", TEMPLATE)


def test_render_is_deterministic():
    text = "1. Capital of China?\nA. Shanghai\nB. Beijing\n\n2. Describe AI.\n"

    assert render(parse_questions(text), "Quiz", TEMPLATE) == render(parse_questions(text), "Quiz", TEMPLATE)


def test_stream_writes_regions_in_order():
    sink = RecordingSink()
    render_to(QUESTIONS, "Quiz", TEMPLATE, sink)
    parts = split_template(TEMPLATE, "Quiz")

    assert sink.writes == [
        parts.head,
        parts.heading,
        parts.opening,
        question_html(QUESTIONS[0]),
        question_html(QUESTIONS[1]),
        parts.trailer,
        parts.closing,
    ]
    assert parts.head.endswith("</head>")
    assert parts.opening.startswith(FORM_OPEN)
    assert parts.closing.startswith("</form>")


@pytest.mark.parametrize("template", [
    TEMPLATE.replace('<form id="assessmentForm">', "<form>"),
    TEMPLATE.replace("</form>", ""),
])
def test_missing_form_anchor_raises(template):
    with pytest.raises(TemplateShapeError):
        render(QUESTIONS, "Quiz", template)
    with pytest.raises(TemplateShapeError):
        render_to(QUESTIONS, "Quiz", template, io.StringIO())


def test_missing_questions_placeholder_renders_empty_form():
    template = TEMPLATE.replace("{{questionsHtml}}", "")

    page = render(QUESTIONS, "Quiz", template)

    assert page == template.replace("{{title}}", "Quiz")
    assert 'class="question"' not in page
    assert render_to(QUESTIONS, "Quiz", template, io.StringIO()) == 0


def test_extra_placeholder_in_trailer_is_stripped():
    template = TEMPLATE.replace("<button>", "{{questionsHtml}}<button>")

    page = render(QUESTIONS, "Quiz", template)

    assert "{{questionsHtml}}" not in page
    assert page.count('class="question"') == 2


def test_text_is_escaped():
    question = Question(id=5, stem="Is 1 < 2 & 3 > 2?", options=(Option(letter="A", text="<b>yes</b>"),))

    page = render([question], "Tom & Jerry", TEMPLATE)

    assert "Is 1 &lt; 2 &amp; 3 &gt; 2?" in page
    assert "A. &lt;b&gt;yes&lt;/b&gt;" in page
    assert "<h1>Tom &amp; Jerry</h1>" in page


def test_sink_failure_stops_writing():
    sink = RecordingSink(fail_on=4)

    with pytest.raises(SinkWriteError) as excinfo:
        render_to(QUESTIONS, "Quiz", TEMPLATE, sink)

    assert isinstance(excinfo.value.__cause__, OSError)
    assert len(sink.writes) == 4


def test_closed_file_raises_sink_error():
    sink = io.StringIO()
    sink.close()

    with pytest.raises(SinkWriteError):
        render_to(QUESTIONS, "Quiz", TEMPLATE, sink)


def test_closing_sink_cancels_remaining_questions():
    sink = RecordingSink(close_after=4)

    written = render_to(QUESTIONS, "Quiz", TEMPLATE, sink)

    assert written == 1
    assert sink.writes[-1] == question_html(QUESTIONS[0])


def test_default_template_is_used():
    page = render(QUESTIONS, "Quiz", None)

    assert FORM_OPEN in page
    assert "<title>Quiz</title>" in page
    assert "<h1>Quiz</h1>" in page
    assert "{{questionsHtml}}" not in page

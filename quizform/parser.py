"""
Question Parser

Turns flattened document text into Question records.

Two strategies are tried in order:
1. Tag-then-split: mark every question/option boundary with a tagged line
   break, split into fragments and fold them into questions.
2. Block fallback: match whole "<n>. ..." blocks directly and pull the
   lettered options out of each block.
"""

import logging
import re
from functools import reduce
from typing import NamedTuple, Optional

from quizform.models import Option, Question

log = logging.getLogger(__name__)

QUESTION_TAG = "QUESTION:"
OPTION_TAG = "OPTION:"

# ASCII period or ideographic comma
_SEP = r"[.、]"

# "12. what..." but not "12.5" or "12.Answer"
_QUESTION_MARKER = rf"(?<!\d)\d+{_SEP}(?=\s*[^A-Z\d])"
# "B. text" but not the "I." in "AI."
_LETTER_GUARD = r"(?<![A-Za-z0-9])"
_OPTION_MARKER = rf"{_LETTER_GUARD}[A-Z]{_SEP}(?=\s*[^A-Z])"

_MARKER_RE = re.compile(rf"(?P<question>{_QUESTION_MARKER})|(?P<option>{_OPTION_MARKER})")
_QUESTION_FRAGMENT_RE = re.compile(rf"(\d+){_SEP}\s*(.*)", re.DOTALL)
_OPTION_FRAGMENT_RE = re.compile(rf"([A-Z]){_SEP}\s*(.*)", re.DOTALL)

# Fallback markers only need "<digits><sep>" / "<letter><sep>"
_BLOCK_MARKER = rf"(?<!\d)\d+{_SEP}(?!\d)"
_BLOCK_OPTION_MARKER = rf"{_LETTER_GUARD}[A-Z]{_SEP}"

_BLOCK_RE = re.compile(rf"{_BLOCK_MARKER}.*?(?={_BLOCK_MARKER}|\Z)", re.DOTALL)
_BLOCK_HEAD_RE = re.compile(rf"(\d+){_SEP}\s*(.*?)(?={_BLOCK_OPTION_MARKER}|\Z)", re.DOTALL)
_BLOCK_OPTION_RE = re.compile(
    rf"{_LETTER_GUARD}([A-Z]){_SEP}\s*(.*?)(?={_BLOCK_OPTION_MARKER}|\Z)",
    re.DOTALL,
)


class _Draft(NamedTuple):
    """The question currently being accumulated."""
    id: int
    stem: str
    options: tuple[Option, ...] = ()


class _FoldState(NamedTuple):
    questions: tuple[Question, ...] = ()
    draft: Optional[_Draft] = None


def _squash(text: str) -> str:
    """Collapse whitespace runs to single spaces."""
    return " ".join(text.split())


def _make_question(draft: _Draft) -> Question:
    return Question(id=draft.id, stem=draft.stem, options=draft.options)


def _read_question_head(match: Optional[re.Match], clean=str.strip) -> Optional[tuple[int, str]]:
    if not match:
        return None
    try:
        qid = int(match.group(1))
    except ValueError:
        # digit run past the int conversion limit
        return None
    stem = clean(match.group(2))
    if qid <= 0 or not stem:
        return None
    return qid, stem


def _read_option(match: Optional[re.Match], clean=str.strip) -> Optional[Option]:
    if not match:
        return None
    text = clean(match.group(2))
    if not text:
        return None
    return Option(letter=match.group(1), text=text)


# =============================================================================
# Primary strategy: tag, split, fold
# =============================================================================

def tag_markers(text: str) -> str:
    """Insert a line break and tag in front of every question/option marker."""
    def _tag(match: re.Match) -> str:
        tag = QUESTION_TAG if match.lastgroup == "question" else OPTION_TAG
        return f"\n{tag}{match.group(0)}"

    return _MARKER_RE.sub(_tag, text)


def split_fragments(tagged: str) -> list[str]:
    """Split tagged text into trimmed, non-blank fragments."""
    return [part.strip() for part in tagged.splitlines() if part.strip()]


def _step(state: _FoldState, fragment: str) -> _FoldState:
    if fragment.startswith(QUESTION_TAG):
        head = _read_question_head(_QUESTION_FRAGMENT_RE.match(fragment[len(QUESTION_TAG):]))
        if head is None:
            log.debug("Dropping unparseable question fragment: %r", fragment)
            return state
        questions = state.questions
        if state.draft is not None:
            questions += (_make_question(state.draft),)
        return _FoldState(questions, _Draft(*head))

    if fragment.startswith(OPTION_TAG):
        if state.draft is None:
            log.debug("Dropping option outside a question: %r", fragment)
            return state
        option = _read_option(_OPTION_FRAGMENT_RE.match(fragment[len(OPTION_TAG):]))
        if option is None:
            log.debug("Dropping unparseable option fragment: %r", fragment)
            return state
        draft = state.draft._replace(options=state.draft.options + (option,))
        return _FoldState(state.questions, draft)

    # Untagged continuation text
    return state


def parse_tagged(text: str) -> list[Question]:
    """Parse questions with the tag-then-split strategy."""
    fragments = split_fragments(tag_markers(text))
    log.debug("Tagged pass produced %d fragments", len(fragments))

    final = reduce(_step, fragments, _FoldState())
    questions = final.questions
    if final.draft is not None:
        questions += (_make_question(final.draft),)
    return list(questions)


# =============================================================================
# Fallback strategy: whole question blocks
# =============================================================================

def parse_blocks(text: str) -> list[Question]:
    """Parse questions by matching "<n>. stem A. opt B. opt" blocks."""
    questions = []
    for block in _BLOCK_RE.findall(text):
        head_match = _BLOCK_HEAD_RE.match(block)
        head = _read_question_head(head_match, _squash)
        if head is None:
            log.debug("Dropping unparseable block: %r", block)
            continue

        options = []
        for opt_match in _BLOCK_OPTION_RE.finditer(block, head_match.end()):
            option = _read_option(opt_match, _squash)
            if option is not None:
                options.append(option)

        qid, stem = head
        questions.append(Question(id=qid, stem=stem, options=tuple(options)))
    return questions


def parse_questions(text: str) -> list[Question]:
    """
    Parse quiz text into questions.

    Never raises: unparseable pieces are dropped, and when the tagged pass
    finds nothing the block fallback is tried.

    Args:
        text: Plain text with paragraphs flattened to newlines

    Returns:
        Questions in the order their stems appear in the text
    """
    if not text or not text.strip():
        return []

    questions = parse_tagged(text)
    if not questions:
        log.debug("Tagged pass found no questions, using block fallback")
        questions = parse_blocks(text)

    log.debug("Parsed %d questions", len(questions))
    return questions

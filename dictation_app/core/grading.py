"""
Answer grading for dictation practice.

Answers are compared against the reference sentence after normalization
(lower-casing and stripping a fixed punctuation set). The word diff is
positional: the n-th typed word is compared with the n-th reference word,
so an inserted or dropped word marks every following word as wrong.
"""
import logging
import re
from typing import List

from dictation_app.core.models import GradingResult, WordAnnotation

logger = logging.getLogger(__name__)

PUNCTUATION = ".,!?;:"
_PUNCTUATION_RE = re.compile(f"[{re.escape(PUNCTUATION)}]")


def normalize(text: str) -> str:
    """Lower-case text, drop punctuation and trim the ends.

    Internal whitespace is left alone, so "a  b" and "a b" stay different.
    """
    return _PUNCTUATION_RE.sub("", text.lower()).strip()


def is_match(reference: str, user_input: str) -> bool:
    """Return True if the answer equals the reference after normalization."""
    return normalize(reference) == normalize(user_input)


def diff(reference: str, user_input: str) -> List[WordAnnotation]:
    """Annotate each reference word with whether the user got it right.

    Args:
        reference: The reference sentence
        user_input: What the user typed

    Returns:
        One WordAnnotation per whitespace-separated reference word. Words the
        user did not reach are incorrect; extra typed words are ignored.
    """
    reference_words = reference.split()
    user_words = [normalize(w) for w in user_input.split()]

    annotations = []
    for i, word in enumerate(reference_words):
        typed = user_words[i] if i < len(user_words) else None
        annotations.append(WordAnnotation(text=word, is_correct=typed == normalize(word)))
    return annotations


def grade(reference: str, user_input: str) -> GradingResult:
    """Check an answer and build the display diff in one go."""
    result = GradingResult(
        is_match=is_match(reference, user_input),
        words=diff(reference, user_input),
    )
    logger.debug("Graded answer: match=%s mistakes=%d", result.is_match, result.mistakes)
    return result

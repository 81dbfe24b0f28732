"""
Practice session state for the dictation trainer.

A session walks through idle -> processing -> practicing -> completed and
keeps the current sentence, the user's answer and the last grading result.
It holds no Qt objects so the UI layer can drive it from signals.
"""
import logging
import typing as t
from dataclasses import dataclass, field

from dictation_app.config import SessionStatus
from dictation_app.core.grading import grade
from dictation_app.core.models import GradingResult, Segment
from dictation_app.core.transcribe import TranscriptionError, EMPTY_MESSAGE

logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Exception raised for an action that is invalid in the current status."""
    pass


@dataclass
class DictationSession:
    """Mutable state of one practice run.

    Attributes:
        status: One of the SessionStatus values
        segments: Sentences to practice, in order
        current_index: Index of the sentence being practiced
        user_input: Current contents of the answer box
        feedback: Result of the last submission, if any
        error: Message of the last failure, shown on the upload page
    """
    status: str = SessionStatus.IDLE
    segments: t.List[Segment] = field(default_factory=list)
    current_index: int = 0
    user_input: str = ""
    feedback: t.Optional[GradingResult] = None
    error: t.Optional[str] = None

    # status transitions ---------------------------------------------
    def begin_processing(self) -> None:
        if self.status != SessionStatus.IDLE:
            raise SessionError(f"Cannot start processing while {self.status}")
        self.status = SessionStatus.PROCESSING
        self.error = None

    def load_segments(self, segments: t.Sequence[Segment]) -> None:
        """Start practicing the given sentences.

        Raises:
            TranscriptionError: If no sentences were given; the session is
                reset to idle first
        """
        if self.status != SessionStatus.PROCESSING:
            raise SessionError(f"Cannot load segments while {self.status}")
        if not segments:
            self.fail(EMPTY_MESSAGE)
            raise TranscriptionError(EMPTY_MESSAGE)
        self.segments = list(segments)
        self.current_index = 0
        self._clear_answer()
        self.status = SessionStatus.PRACTICING
        logger.info("Practicing %d sentences", len(self.segments))

    def fail(self, message: str) -> None:
        """Return to the upload state and remember why."""
        logger.warning("Session failed: %s", message)
        self.status = SessionStatus.IDLE
        self.segments = []
        self.current_index = 0
        self._clear_answer()
        self.error = message

    def reset(self) -> None:
        """Drop all progress and go back to the upload state."""
        self.status = SessionStatus.IDLE
        self.segments = []
        self.current_index = 0
        self._clear_answer()
        self.error = None

    # practice -------------------------------------------------------
    @property
    def current_segment(self) -> t.Optional[Segment]:
        if 0 <= self.current_index < len(self.segments):
            return self.segments[self.current_index]
        return None

    @property
    def is_last(self) -> bool:
        return self.current_index >= len(self.segments) - 1

    @property
    def progress(self) -> float:
        """Fraction of sentences reached, counting the current one."""
        if not self.segments:
            return 0.0
        return (self.current_index + 1) / len(self.segments)

    @property
    def is_correct(self) -> bool:
        return self.feedback is not None and self.feedback.is_match

    @property
    def can_submit(self) -> bool:
        return (
            self.status == SessionStatus.PRACTICING
            and bool(self.user_input.strip())
            and not self.is_correct
        )

    def set_input(self, text: str) -> None:
        """Update the answer; editing after a wrong answer hides the feedback."""
        self.user_input = text
        if self.feedback is not None and not self.feedback.is_match:
            self.feedback = None

    def submit(self) -> t.Optional[GradingResult]:
        """Grade the current answer.

        Returns:
            The GradingResult, or None if there is nothing to submit
        """
        if not self.can_submit:
            return None
        segment = self.current_segment
        self.feedback = grade(segment.text, self.user_input)
        logger.info(
            "Sentence %d/%d: %s",
            self.current_index + 1, len(self.segments),
            "correct" if self.feedback.is_match else f"{self.feedback.mistakes} mistake(s)"
        )
        return self.feedback

    def next(self) -> None:
        """Move to the next sentence, or complete the session after the last."""
        self._require_practicing()
        if self.is_last:
            self.status = SessionStatus.COMPLETED
            logger.info("Session completed (%d sentences)", len(self.segments))
            return
        self.current_index += 1
        self._clear_answer()

    def prev(self) -> None:
        """Move to the previous sentence; does nothing on the first one."""
        self._require_practicing()
        if self.current_index == 0:
            return
        self.current_index -= 1
        self._clear_answer()

    def _require_practicing(self) -> None:
        if self.status != SessionStatus.PRACTICING:
            raise SessionError(f"Not practicing (status is {self.status})")

    def _clear_answer(self) -> None:
        self.user_input = ""
        self.feedback = None

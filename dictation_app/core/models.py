"""
Pydantic models for the dictation trainer.

This module contains the data transfer objects used to represent sentence
segments and grading results throughout the application.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Segment(BaseModel):
    """One sentence of the audio with its reference text and time window.

    Attributes:
        text: The reference sentence (trimmed, never empty)
        start_time: Start of the window in seconds
        end_time: End of the window in seconds, strictly after start_time
    """
    text: str = Field(alias="sentence")
    start_time: float = Field(alias="startTime", ge=0)
    end_time: float = Field(alias="endTime")
    model_config = ConfigDict(
        extra='ignore',           # tolerate unknown keys at parse-time
        populate_by_name=True,    # accept text/start_time as well as the wire names
        frozen=True,
    )

    @field_validator("text")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("segment text must not be empty")
        return value

    @model_validator(mode="after")
    def _check_window(self) -> "Segment":
        if self.end_time <= self.start_time:
            raise ValueError(
                f"end_time ({self.end_time}) must be greater than start_time ({self.start_time})"
            )
        return self

    @property
    def duration(self) -> float:
        """Length of the window in seconds."""
        return self.end_time - self.start_time


class WordAnnotation(BaseModel):
    """A reference word and whether the user typed it correctly.

    Attributes:
        text: The reference word as displayed, punctuation retained
        is_correct: True if the user's word at the same position matched
    """
    text: str
    is_correct: bool
    model_config = ConfigDict(frozen=True)


class GradingResult(BaseModel):
    """Outcome of checking one answer against its reference sentence.

    Attributes:
        is_match: True if the normalized answer equals the normalized reference
        words: One annotation per reference word, in order
    """
    is_match: bool
    words: list[WordAnnotation] = []

    @property
    def mistakes(self) -> int:
        """Number of reference words marked incorrect."""
        return sum(1 for w in self.words if not w.is_correct)

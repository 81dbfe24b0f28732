"""
Remote transcription that turns an audio clip into sentence segments.

Audio is sent to the OpenAI audio transcription endpoint and the returned
timestamped pieces are merged into whole sentences ready for practice.
"""
import logging
import mimetypes
import typing as t

import openai
from openai import OpenAI
from pydantic import ValidationError

from dictation_app.config import (
    OPENAI_API_KEY,
    TRANSCRIPTION_MODEL,
    DEFAULT_LANGUAGE,
    SEGMENT_PREROLL_SEC,
    SEGMENT_END_PAD_SEC,
)
from dictation_app.core.models import Segment

# Set up logging
logger = logging.getLogger(__name__)

SENTENCE_ENDINGS = (".", "!", "?", "…")

FAILED_MESSAGE = "Failed to transcribe audio. Please try a shorter clip or different file."
EMPTY_MESSAGE = "No sentences detected in the audio."

# File extensions the transcription endpoint recognises
PREFERRED_EXTENSIONS = {
    "audio/mpeg": ".mp3",
    "audio/mp3": ".mp3",
    "audio/wav": ".wav",
    "audio/x-wav": ".wav",
    "audio/mp4": ".m4a",
    "audio/x-m4a": ".m4a",
    "audio/ogg": ".ogg",
    "audio/flac": ".flac",
    "audio/webm": ".webm",
}


class TranscriptionError(Exception):
    """Exception raised when audio could not be turned into segments."""
    pass


def get_client() -> OpenAI:
    """Create an OpenAI client from the configured API key."""
    if not OPENAI_API_KEY:
        raise TranscriptionError("OPENAI_API_KEY is not set")
    return OpenAI(api_key=OPENAI_API_KEY)


def transcribe_and_segment(
    audio_bytes: bytes,
    mime_type: str,
    language: str = DEFAULT_LANGUAGE,
    client: t.Optional[OpenAI] = None,
    progress_callback: t.Callable[[float], None] = None
) -> t.List[Segment]:
    """Transcribe audio and split it into sentence segments.

    Args:
        audio_bytes: Raw bytes of the audio file
        mime_type: MIME type of the audio, e.g. "audio/mpeg"
        language: Language code (or 'auto' to let the service detect it)
        client: Optional OpenAI client, created from config if omitted
        progress_callback: Optional callback function to report progress (0-100)

    Returns:
        Ordered list of Segment objects covering the audio

    Raises:
        TranscriptionError: On any upstream failure or if no sentence was found
    """
    client = client or get_client()
    filename = f"audio{_extension_for(mime_type)}"
    logger.info("Transcribing %d bytes of %s with %s", len(audio_bytes), mime_type, TRANSCRIPTION_MODEL)

    if progress_callback:
        progress_callback(5)

    params = {}
    if language and language != "auto":
        params["language"] = language

    try:
        response = client.audio.transcriptions.create(
            model=TRANSCRIPTION_MODEL,
            file=(filename, audio_bytes, mime_type),
            response_format="verbose_json",
            timestamp_granularities=["segment"],
            **params
        )
    except openai.OpenAIError as e:
        logger.error("Transcription request failed: %s", e)
        raise TranscriptionError(FAILED_MESSAGE) from e

    if progress_callback:
        progress_callback(80)

    try:
        pieces = [
            (float(_field(p, "start")), float(_field(p, "end")), str(_field(p, "text") or ""))
            for p in (_field(response, "segments") or [])
        ]
    except (KeyError, AttributeError, TypeError, ValueError) as e:
        logger.error("Malformed transcription response: %s", e)
        raise TranscriptionError(FAILED_MESSAGE) from e

    segments = pieces_to_sentences(pieces)

    if progress_callback:
        progress_callback(100)

    if not segments:
        raise TranscriptionError(EMPTY_MESSAGE)

    logger.info("Transcription completed: %d sentences from %d pieces", len(segments), len(pieces))
    return segments


def pieces_to_sentences(
    pieces: t.Iterable[t.Tuple[float, float, str]],
    preroll: float = SEGMENT_PREROLL_SEC,
    end_pad: float = SEGMENT_END_PAD_SEC
) -> t.List[Segment]:
    """Merge timestamped text pieces into padded sentence segments.

    Consecutive pieces are joined until the text ends a sentence. Each
    sentence window starts `preroll` seconds early (never before zero) and
    ends `end_pad` seconds late, so neighbouring segments may overlap.

    Args:
        pieces: (start, end, text) tuples in playback order
        preroll: Seconds added before each sentence
        end_pad: Seconds added after each sentence

    Returns:
        List of Segment objects; empty or invalid sentences are dropped
    """
    sentences = []
    buffer = []
    start = end = 0.0

    def flush():
        text = " ".join(buffer).strip()
        buffer.clear()
        if not text:
            return
        try:
            sentences.append(Segment(
                text=text,
                start_time=max(0.0, start - preroll),
                end_time=end + end_pad,
            ))
        except ValidationError as e:
            logger.warning("Dropping invalid sentence %r: %s", text, e.errors()[0]["msg"])

    for piece_start, piece_end, text in pieces:
        text = text.strip()
        if not text:
            continue
        if not buffer:
            start = piece_start
        buffer.append(text)
        end = piece_end
        if text.endswith(SENTENCE_ENDINGS):
            flush()
    flush()

    return sentences


def _field(obj, name):
    """Read a field from either a response object or a plain dict."""
    if isinstance(obj, dict):
        return obj[name]
    return getattr(obj, name)


def _extension_for(mime_type: str) -> str:
    ext = PREFERRED_EXTENSIONS.get(mime_type) or mimetypes.guess_extension(mime_type or "")
    if ext:
        return ext
    # e.g. "audio/x-aiff" -> ".aiff"
    subtype = (mime_type or "").split("/")[-1].split(";")[0]
    return "." + (subtype.removeprefix("x-") or "wav")

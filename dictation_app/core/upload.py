"""
Guard for audio files picked by the user.
"""
import logging
import mimetypes
import typing as t
from dataclasses import dataclass
from pathlib import Path

from dictation_app.config import MAX_UPLOAD_BYTES

logger = logging.getLogger(__name__)

# Not every platform's mime table knows these
for _ext, _type in ((".m4a", "audio/mp4"), (".flac", "audio/flac"), (".ogg", "audio/ogg")):
    mimetypes.add_type(_type, _ext)


class UploadError(Exception):
    """Exception raised for files that cannot be used for practice."""
    pass


@dataclass
class AudioFile:
    """An accepted audio file and its contents."""
    path: Path
    data: bytes
    mime_type: str

    @property
    def size_mb(self) -> float:
        return len(self.data) / 1024 / 1024


def guess_mime_type(path: t.Union[str, Path]) -> t.Optional[str]:
    """Guess the MIME type of a file from its extension."""
    mime_type, _ = mimetypes.guess_type(str(path))
    return mime_type


def load_audio_file(path: t.Union[str, Path], max_bytes: int = MAX_UPLOAD_BYTES) -> AudioFile:
    """Validate and read an audio file.

    Args:
        path: Path to the picked file
        max_bytes: Size ceiling in bytes

    Returns:
        AudioFile with the file contents and MIME type

    Raises:
        UploadError: If the file is missing, unreadable, not audio, or too large
    """
    path = Path(path)
    if not path.is_file():
        raise UploadError(f"File not found: {path.name}")

    mime_type = guess_mime_type(path)
    if not mime_type or not mime_type.startswith("audio/"):
        raise UploadError("Please choose an audio file (MP3, WAV, M4A).")

    size = path.stat().st_size
    if size > max_bytes:
        logger.info("Rejected %s: %d bytes exceeds %d", path.name, size, max_bytes)
        raise UploadError(
            f"File is too large. Please upload an audio file under {max_bytes // (1024 * 1024)}MB."
        )

    try:
        data = path.read_bytes()
    except OSError as e:
        logger.error("Could not read %s: %s", path, e)
        raise UploadError(f"Could not read {path.name}.") from e

    logger.info("Accepted %s (%s, %d bytes)", path.name, mime_type, size)
    return AudioFile(path=path, data=data, mime_type=mime_type)

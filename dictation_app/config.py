"""
Global configuration settings for the dictation trainer.
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file if present
load_dotenv()

# Remote transcription (OpenAI audio API)
OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")
TRANSCRIPTION_MODEL = os.environ.get("TRANSCRIPTION_MODEL", "whisper-1")
DEFAULT_LANGUAGE = os.environ.get("DICTATION_LANGUAGE", "nl")  # ISO language code

# Upload guard
MAX_UPLOAD_BYTES = 20 * 1024 * 1024  # 20 MiB

# Segment padding applied when sentences are produced
SEGMENT_PREROLL_SEC = float(os.environ.get("SEGMENT_PREROLL_SEC", "0.0"))
SEGMENT_END_PAD_SEC = float(os.environ.get("SEGMENT_END_PAD_SEC", "0.3"))

# Extra time allowed past a segment's end before playback stops
END_PADDING_SEC = float(os.environ.get("END_PADDING_SEC", "0.0"))

# Threading configuration
MAX_WORKERS = int(os.environ.get("MAX_WORKERS", "1"))

# UI configuration
POLL_INTERVAL_MS = 10  # How often the playhead is checked while playing


# Status values for the practice session
class SessionStatus:
    IDLE = "idle"
    PROCESSING = "processing"
    PRACTICING = "practicing"
    COMPLETED = "completed"

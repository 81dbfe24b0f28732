"""
Core logic for the dictation trainer: grading, segment playback and sessions.
"""

from .models import Segment, WordAnnotation, GradingResult
from .grading import normalize, is_match, diff, grade
from .playback import AudioHandle, PlaybackController, PlaybackSession
from .session import DictationSession, SessionError
from .transcribe import TranscriptionError, transcribe_and_segment
from .upload import AudioFile, UploadError, load_audio_file

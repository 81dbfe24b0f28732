"""
Transcription controller for the dictation trainer.

This module runs the remote transcription call off the GUI thread and
reports the resulting segments, or the failure, through the event bus.
"""
import logging

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

from dictation_app.config import DEFAULT_LANGUAGE, MAX_WORKERS
from dictation_app.core.transcribe import TranscriptionError, transcribe_and_segment
from dictation_app.core.upload import AudioFile
from dictation_app.ui.event_bus import BUS

logger = logging.getLogger(__name__)


class WorkerSignals(QObject):
    """Signals for worker thread communication."""
    finished = Signal(list)      # segments
    error = Signal(str)          # error_message
    progress = Signal(float)     # progress_percentage


class TranscriptionWorker(QRunnable):
    """Worker thread for one transcription request."""

    def __init__(self, audio_file: AudioFile, language: str):
        super().__init__()
        self.audio_file = audio_file
        self.language = language
        self.signals = WorkerSignals()

    @Slot()
    def run(self):
        """Transcribe the file in a background thread."""
        try:
            segments = transcribe_and_segment(
                self.audio_file.data,
                self.audio_file.mime_type,
                language=self.language,
                progress_callback=self.signals.progress.emit,
            )
            self.signals.finished.emit(segments)
        except TranscriptionError as e:
            logger.error("Transcription failed for %s: %s", self.audio_file.path.name, e, exc_info=True)
            self.signals.error.emit(str(e))
        except Exception as e:
            logger.error("Unexpected error for %s: %s", self.audio_file.path.name, e, exc_info=True)
            self.signals.error.emit("An error occurred during processing.")


class TranscriptionController:
    """Controller for transcription requests.

    Listens for BUS.transcriptionRequested and answers with
    BUS.transcriptionFinished or BUS.transcriptionFailed.
    """

    def __init__(self, language: str = DEFAULT_LANGUAGE):
        """Initialize the controller.

        Args:
            language: Language code passed to the transcription service
        """
        self.language = language
        self.threadpool = QThreadPool()
        self.threadpool.setMaxThreadCount(MAX_WORKERS)
        self.busy = False

        # Connect to event bus
        BUS.transcriptionRequested.connect(self.start)

        logger.info("Transcription controller initialized with %d worker threads",
                    self.threadpool.maxThreadCount())

    def start(self, audio_file: AudioFile) -> bool:
        """Start transcribing a file unless a request is already running.

        Returns:
            True if a worker was started
        """
        if self.busy:
            logger.warning("Ignoring %s: a transcription is already running", audio_file.path.name)
            return False

        worker = TranscriptionWorker(audio_file, self.language)
        worker.signals.progress.connect(BUS.transcriptionProgress.emit)
        worker.signals.finished.connect(self._on_finished)
        worker.signals.error.connect(self._on_error)

        self.busy = True
        self.threadpool.start(worker)
        logger.info("Started transcription of %s", audio_file.path.name)
        return True

    def _on_finished(self, segments: list):
        self.busy = False
        logger.info("Transcription returned %d segments", len(segments))
        BUS.transcriptionFinished.emit(segments)

    def _on_error(self, message: str):
        self.busy = False
        BUS.transcriptionFailed.emit(message)

    def close(self):
        """Stop listening for requests."""
        BUS.transcriptionRequested.disconnect(self.start)

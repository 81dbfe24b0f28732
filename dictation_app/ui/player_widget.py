"""
Audio player widget for the dictation trainer.
"""
import logging
from pathlib import Path

from PySide6.QtCore import Signal, QTimer, QUrl
from PySide6.QtWidgets import QWidget
from PySide6.QtMultimedia import QMediaPlayer, QAudioOutput

from dictation_app.config import POLL_INTERVAL_MS

logger = logging.getLogger(__name__)

# setPosition() is asynchronous; a report at or up to this far past a
# requested seek, and not equal to the pre-seek position, counts as arrival
SEEK_TOLERANCE_MS = 250


class PlaybackError(Exception):
    """Exception raised when a media file cannot be loaded."""
    pass


class PlayerWidget(QWidget):
    """Hidden audio player exposing the AudioHandle interface.

    Wraps the QMediaPlayer with a simpler API in seconds. While playing, a
    timer polls the playhead every POLL_INTERVAL_MS so registered time
    listeners see updates more often than QMediaPlayer reports them.

    Signals:
        playbackFailed: Emitted with an error message if the media fails
    """
    playbackFailed = Signal(str)

    def __init__(self, parent=None, poll_interval_ms: int = POLL_INTERVAL_MS):
        """Initialize the player widget.

        Args:
            parent: Optional parent widget
            poll_interval_ms: Playhead polling interval while playing
        """
        super().__init__(parent)
        self.setVisible(False)

        # Create media player and audio output
        self.player = QMediaPlayer(self)
        self.audio_output = QAudioOutput(self)
        self.player.setAudioOutput(self.audio_output)

        self._listeners = []
        self._pending_seek_ms = None
        self._seek_origin_ms = None

        self.timer = QTimer(self)
        self.timer.setInterval(poll_interval_ms)
        self.timer.timeout.connect(self._emit_time)

        self.player.positionChanged.connect(self._on_position_changed)
        self.player.playbackStateChanged.connect(self._on_state_changed)
        self.player.errorOccurred.connect(self._on_error)

    def load(self, path: Path):
        """Load media file from path.

        Args:
            path: Path to media file

        Raises:
            PlaybackError: If the file does not exist
        """
        path = Path(path)
        if not path.is_file():
            raise PlaybackError(f"Media file not found: {path}")
        self.player.setSource(QUrl.fromLocalFile(str(path)))
        self.player.pause()  # Load but don't play initially
        logger.info("Loaded %s", path.name)

    def unload(self):
        """Stop playback and release the current source."""
        self.player.stop()
        self.player.setSource(QUrl())
        self._pending_seek_ms = None
        self._seek_origin_ms = None

    # AudioHandle ----------------------------------------------------
    def position(self) -> float:
        if self._pending_seek_ms is not None:
            return self._pending_seek_ms / 1000.0
        return self.player.position() / 1000.0

    def set_position(self, sec: float):
        ms = int(sec * 1000)
        if self._pending_seek_ms is None:
            self._seek_origin_ms = self.player.position()
        self._pending_seek_ms = ms
        self.player.setPosition(ms)

    def play(self):
        self.player.play()

    def pause(self):
        self.player.pause()

    def add_time_listener(self, listener):
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_time_listener(self, listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    # internals ------------------------------------------------------
    def _on_position_changed(self, ms: int):
        if self._pending_seek_ms is not None and self._seek_arrived(ms):
            self._pending_seek_ms = None
            self._seek_origin_ms = None
        self._emit_time(None if self._pending_seek_ms is not None else ms / 1000.0)

    def _seek_arrived(self, ms: int) -> bool:
        """Whether a reported position is the pending seek landing.

        The backend may still report the pre-seek playhead after
        setPosition(), which can sit just past the target when a short
        window is repeated.
        """
        target = self._pending_seek_ms
        if ms == self._seek_origin_ms and ms != target:
            return False
        return target <= ms <= target + SEEK_TOLERANCE_MS

    def _emit_time(self, sec=None):
        if sec is None:
            sec = self.position()
        # Listeners may detach themselves while being notified
        for listener in list(self._listeners):
            listener(sec)

    def _on_state_changed(self, state):
        if state == QMediaPlayer.PlaybackState.PlayingState:
            self.timer.start()
        else:
            self.timer.stop()

    def _on_error(self, error, message: str):
        logger.error("Playback error %s: %s", error, message)
        self.playbackFailed.emit(message or "Audio could not be played.")

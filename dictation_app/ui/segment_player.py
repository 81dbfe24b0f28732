"""
SegmentPlayer widget with play and repeat controls for one sentence.

This module defines a widget that drives a PlaybackController over the
shared PlayerWidget so only the current sentence's audio is heard.
"""
import logging
import typing as t

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLabel

from dictation_app.core.models import Segment
from dictation_app.core.playback import PlaybackController
from dictation_app.ui.player_widget import PlayerWidget

logger = logging.getLogger(__name__)


class SegmentPlayer(QWidget):
    """Play/Repeat controls bound to the current segment.

    Signals:
        playStarted: Emitted when the sentence starts playing
        playEnded: Emitted when the sentence has played to its end
    """
    playStarted = Signal()
    playEnded = Signal()

    def __init__(self, player: PlayerWidget, parent=None, padding_seconds: t.Optional[float] = None):
        """Initialize the SegmentPlayer.

        Args:
            player: Player widget owned by the window
            parent: Optional parent widget
            padding_seconds: Override for the end padding from config
        """
        super().__init__(parent)
        if padding_seconds is None:
            self.controller = PlaybackController(player)
        else:
            self.controller = PlaybackController(player, padding_seconds)
        self.segment = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        buttons = QHBoxLayout()
        self.play_btn = QPushButton("▶ Play Sentence")
        self.play_btn.clicked.connect(self.play)
        buttons.addWidget(self.play_btn)

        self.repeat_btn = QPushButton("⟲")
        self.repeat_btn.setToolTip("Repeat")
        self.repeat_btn.setFixedWidth(40)
        self.repeat_btn.clicked.connect(self.play)
        buttons.addWidget(self.repeat_btn)
        layout.addLayout(buttons)

        self.time_label = QLabel("")
        self.time_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.time_label)

    def set_segment(self, segment: Segment) -> None:
        """Show a new segment and park the playhead at its start."""
        self.controller.stop()
        self._set_playing(False)
        self.segment = segment
        self.time_label.setText(f"{segment.start_time:.2f}s – {segment.end_time:.2f}s")
        self.controller.seek_to(segment.start_time)

    def play(self) -> None:
        """Play the current segment from its start; repeats restart it."""
        if self.segment is None:
            return
        self.controller.play(self.segment, on_start=self._on_start, on_end=self._on_end)

    def stop(self) -> None:
        self.controller.stop()
        self._set_playing(False)

    def teardown(self) -> None:
        """Detach from the player before this widget goes away."""
        self.controller.teardown()
        self._set_playing(False)

    def _on_start(self):
        self._set_playing(True)
        self.playStarted.emit()

    def _on_end(self):
        self._set_playing(False)
        self.playEnded.emit()

    def _set_playing(self, playing: bool):
        self.play_btn.setText("🔊 Playing..." if playing else "▶ Play Sentence")

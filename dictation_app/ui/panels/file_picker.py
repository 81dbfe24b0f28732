"""
File picker panel for the dictation trainer.

This module provides the upload page: choose an audio file, see its name
and size, and start practice. Rejected files are reported inline.
"""
import logging
from pathlib import Path

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QWidget, QPushButton, QVBoxLayout, QLabel, QFileDialog

from dictation_app.config import MAX_UPLOAD_BYTES
from dictation_app.core.upload import AudioFile, UploadError, load_audio_file

logger = logging.getLogger(__name__)


class FilePickerPanel(QWidget):
    """Panel for selecting an audio file.

    Signals:
        filePicked: Emitted with the accepted AudioFile
        startRequested: Emitted with the AudioFile when practice should begin
    """
    filePicked = Signal(object)       # AudioFile
    startRequested = Signal(object)   # AudioFile

    def __init__(self, parent=None):
        """Initialize the file picker panel.

        Args:
            parent: Optional parent widget
        """
        super().__init__(parent)
        self.audio_file = None

        title = QLabel("<h2>Step 1: Upload Your Audio</h2>")
        title.setAlignment(Qt.AlignCenter)

        # Create button
        self.select_btn = QPushButton("Select Audio File")
        self.select_btn.clicked.connect(self._on_click)

        self.file_label = QLabel(
            f"Supports MP3, WAV, M4A up to {MAX_UPLOAD_BYTES // (1024 * 1024)}MB"
        )
        self.file_label.setAlignment(Qt.AlignCenter)

        self.start_btn = QPushButton("Start Dictation Practice")
        self.start_btn.setVisible(False)
        self.start_btn.clicked.connect(self._on_start)

        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #c0392b;")
        self.error_label.setWordWrap(True)
        self.error_label.setVisible(False)

        # Set layout
        layout = QVBoxLayout(self)
        layout.addWidget(title)
        layout.addWidget(self.select_btn)
        layout.addWidget(self.file_label)
        layout.addWidget(self.start_btn)
        layout.addWidget(self.error_label)
        layout.addStretch()

    def _on_click(self):
        """Handle button click event."""
        path, _ = QFileDialog.getOpenFileName(
            self,
            "Open",
            str(Path.home()),
            "Audio (*.mp3 *.wav *.m4a *.flac *.ogg);;All (*)"
        )

        if path:
            logger.info("User selected %s", path)
            self.pick(Path(path))

    def pick(self, path: Path) -> bool:
        """Validate and remember a file.

        Returns:
            True if the file was accepted
        """
        try:
            audio_file = load_audio_file(path)
        except UploadError as e:
            self.show_error(str(e))
            return False

        self.audio_file = audio_file
        self.file_label.setText(f"<b>{audio_file.path.name}</b> ({audio_file.size_mb:.2f} MB)")
        self.start_btn.setVisible(True)
        self.show_error(None)
        self.filePicked.emit(audio_file)
        return True

    def show_error(self, message):
        """Show an inline error, or hide it when message is None."""
        self.error_label.setText(message or "")
        self.error_label.setVisible(bool(message))

    def clear(self) -> None:
        """Forget the picked file."""
        self.audio_file = None
        self.start_btn.setVisible(False)
        self.file_label.setText(
            f"Supports MP3, WAV, M4A up to {MAX_UPLOAD_BYTES // (1024 * 1024)}MB"
        )

    def _on_start(self):
        if self.audio_file is not None:
            self.startRequested.emit(self.audio_file)

"""
Main window for the dictation trainer.

This module ties together the pages, the shared audio player and the
transcription controller. One stacked page is shown per session status;
the practice logic itself lives in DictationSession.
"""
import logging

from PySide6.QtCore import Qt, QEvent
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QStackedWidget, QMessageBox, QLabel, QPushButton, QPlainTextEdit, QProgressBar
)

from dictation_app.config import DEFAULT_LANGUAGE, SessionStatus
from dictation_app.core.session import DictationSession
from dictation_app.core.transcribe import TranscriptionError
from dictation_app.core.upload import AudioFile

# Import event bus
from dictation_app.ui.event_bus import BUS

# Import controllers
from dictation_app.ui.controllers.transcription_ctrl import TranscriptionController

# Import panels
from dictation_app.ui.panels.file_picker import FilePickerPanel
from dictation_app.ui.panels.feedback_view import FeedbackView

# Import media components
from dictation_app.ui.player_widget import PlayerWidget, PlaybackError
from dictation_app.ui.segment_player import SegmentPlayer
from dictation_app.ui.shortcuts import ShortcutAction, resolve_shortcut

logger = logging.getLogger(__name__)

PAGE_UPLOAD, PAGE_PROCESSING, PAGE_PRACTICE, PAGE_COMPLETED = range(4)


class MainWindow(QMainWindow):
    """Main application window.

    Orchestrates panels and controllers; keeps widgets in sync with the
    DictationSession.
    """

    def __init__(self, language: str = DEFAULT_LANGUAGE):
        """Initialize the main window.

        Args:
            language: Language of the audio being practiced
        """
        super().__init__()

        # Set window properties
        self.setWindowTitle("Dictation Trainer")
        self.setMinimumSize(720, 560)

        self.session = DictationSession()

        # Shared audio handle, lent to the segment player
        self.player = PlayerWidget(self)

        # Initialize UI components
        self._init_ui()

        # Initialize controllers
        self.transcription_ctrl = TranscriptionController(language)

        # Set up event bus connections
        self._init_connections()

        # Keyboard shortcuts are handled for the whole window
        QApplication.instance().installEventFilter(self)

    def _init_ui(self):
        """Initialize the user interface."""
        self.stack = QStackedWidget()

        # Page 0: upload
        self.file_picker = FilePickerPanel()
        self.stack.addWidget(self.file_picker)

        # Page 1: processing
        processing = QWidget()
        p_layout = QVBoxLayout(processing)
        p_layout.addStretch()
        busy = QLabel("<h2>Analyzing audio...</h2><p>Generating sentence segments.</p>")
        busy.setAlignment(Qt.AlignCenter)
        p_layout.addWidget(busy)
        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 100)
        p_layout.addWidget(self.progress_bar)
        p_layout.addStretch()
        self.stack.addWidget(processing)

        # Page 2: practice
        self.stack.addWidget(self._build_practice_page())

        # Page 3: completed
        completed = QWidget()
        c_layout = QVBoxLayout(completed)
        c_layout.addStretch()
        self.completed_label = QLabel("")
        self.completed_label.setAlignment(Qt.AlignCenter)
        c_layout.addWidget(self.completed_label)
        self.again_btn = QPushButton("Practice Another Clip")
        self.again_btn.clicked.connect(self._reset)
        c_layout.addWidget(self.again_btn)
        c_layout.addStretch()
        self.stack.addWidget(completed)

        self.setCentralWidget(self.stack)

        # Status bar
        self.statusBar().showMessage("Ready")

    def _build_practice_page(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)

        self.progress_label = QLabel("")
        self.progress_label.setAlignment(Qt.AlignRight)
        layout.addWidget(self.progress_label)

        nav = QHBoxLayout()
        self.prev_btn = QPushButton("‹")
        self.prev_btn.setToolTip("Previous Sentence (Left Arrow)")
        self.prev_btn.clicked.connect(self._on_prev)
        nav.addWidget(self.prev_btn)

        self.segment_player = SegmentPlayer(self.player)
        nav.addWidget(self.segment_player, 1)

        self.next_nav_btn = QPushButton("›")
        self.next_nav_btn.setToolTip("Next Sentence (Right Arrow)")
        self.next_nav_btn.clicked.connect(self._on_next)
        nav.addWidget(self.next_nav_btn)
        layout.addLayout(nav)

        hint = QLabel("[Space]: Play | [Enter]: Check/Next | [Arrows]: Nav (when not typing)")
        hint.setStyleSheet("color: #94a3b8; font-size: 10px;")
        layout.addWidget(hint)

        self.answer_box = QPlainTextEdit()
        self.answer_box.setPlaceholderText("Type the sentence here...")
        layout.addWidget(self.answer_box)

        self.check_btn = QPushButton("Check Answer (Enter)")
        self.check_btn.clicked.connect(self._on_submit)
        layout.addWidget(self.check_btn)

        self.feedback_view = FeedbackView()
        self.feedback_view.setVisible(False)
        layout.addWidget(self.feedback_view)

        self.advance_btn = QPushButton("Next Sentence (Enter)")
        self.advance_btn.setVisible(False)
        self.advance_btn.clicked.connect(self._on_next)
        layout.addWidget(self.advance_btn)

        self.cancel_btn = QPushButton("Cancel Session")
        self.cancel_btn.setFlat(True)
        self.cancel_btn.clicked.connect(self._on_cancel)
        layout.addWidget(self.cancel_btn, 0, Qt.AlignCenter)
        return page

    def _init_connections(self):
        """Initialize connections between components via the event bus."""
        self.file_picker.filePicked.connect(self._on_file_picked)
        self.file_picker.startRequested.connect(self._on_start_requested)
        self.answer_box.textChanged.connect(self._on_text_changed)
        self.segment_player.playEnded.connect(self._focus_answer)
        self.player.playbackFailed.connect(self._on_playback_failed)

        BUS.transcriptionProgress.connect(self._on_transcription_progress)
        BUS.transcriptionFinished.connect(self._on_transcription_finished)
        BUS.transcriptionFailed.connect(self._on_transcription_failed)

    # transcription --------------------------------------------------
    def _on_file_picked(self, audio_file: AudioFile):
        self.statusBar().showMessage(f"Selected {audio_file.path.name}")

    def _on_start_requested(self, audio_file: AudioFile):
        try:
            self.player.load(audio_file.path)
        except PlaybackError as e:
            self.file_picker.show_error(str(e))
            return

        self.session.begin_processing()
        self.progress_bar.setValue(0)
        self.stack.setCurrentIndex(PAGE_PROCESSING)
        self.statusBar().showMessage(f"Transcribing {audio_file.path.name}...")
        BUS.transcriptionRequested.emit(audio_file)

    def _on_transcription_progress(self, progress: float):
        self.progress_bar.setValue(int(progress))

    def _on_transcription_finished(self, segments: list):
        if self.session.status != SessionStatus.PROCESSING:
            logger.info("Discarding segments for a cancelled session")
            return
        try:
            self.session.load_segments(segments)
        except TranscriptionError as e:
            self._show_upload_error(str(e))
            return
        self.stack.setCurrentIndex(PAGE_PRACTICE)
        self.statusBar().showMessage(f"{len(segments)} sentences ready")
        self._show_segment()

    def _on_transcription_failed(self, message: str):
        if self.session.status != SessionStatus.PROCESSING:
            return
        self.session.fail(message)
        self._show_upload_error(message)

    def _show_upload_error(self, message: str):
        self.player.unload()
        self.file_picker.show_error(message)
        self.stack.setCurrentIndex(PAGE_UPLOAD)
        self.statusBar().showMessage("Ready")

    # practice -------------------------------------------------------
    def _show_segment(self):
        """Sync the practice page with the session's current sentence."""
        segment = self.session.current_segment
        self.segment_player.set_segment(segment)

        self.answer_box.blockSignals(True)
        self.answer_box.setPlainText(self.session.user_input)
        self.answer_box.blockSignals(False)

        total = len(self.session.segments)
        index = self.session.current_index
        self.progress_label.setText(f"{index + 1} / {total}")
        self.prev_btn.setEnabled(index > 0)
        self.next_nav_btn.setEnabled(not self.session.is_last)
        self._show_feedback()
        self._focus_answer()

    def _show_feedback(self):
        feedback = self.session.feedback
        correct = self.session.is_correct

        self.answer_box.setReadOnly(correct)
        self.check_btn.setVisible(not correct)
        self.check_btn.setEnabled(self.session.can_submit)
        self.check_btn.setText(
            "Try Again (Enter)" if feedback is not None and not correct else "Check Answer (Enter)"
        )

        if feedback is None:
            self.feedback_view.clear()
            self.feedback_view.setVisible(False)
        else:
            self.feedback_view.set_result(feedback)
            self.feedback_view.setVisible(True)

        self.advance_btn.setVisible(correct)
        self.advance_btn.setText(
            "Finish Session (Enter)" if self.session.is_last else "Next Sentence (Enter)"
        )

    def _on_text_changed(self):
        self.session.set_input(self.answer_box.toPlainText())
        self._show_feedback()

    def _on_submit(self):
        if self.session.submit() is not None:
            self._show_feedback()

    def _on_next(self):
        if self.session.status != SessionStatus.PRACTICING:
            return
        self.session.next()
        if self.session.status == SessionStatus.COMPLETED:
            self.segment_player.stop()
            self.completed_label.setText(
                "<h1>Gefeliciteerd!<br/>Session Complete</h1>"
                f"<p>You've successfully transcribed {len(self.session.segments)} sentences.</p>"
            )
            self.stack.setCurrentIndex(PAGE_COMPLETED)
            return
        self._show_segment()

    def _on_prev(self):
        if self.session.status != SessionStatus.PRACTICING or self.session.current_index == 0:
            return
        self.session.prev()
        self._show_segment()

    def _on_cancel(self):
        reply = QMessageBox.question(
            self,
            "Cancel Session",
            "Are you sure you want to stop? Progress will be lost.",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No
        )
        if reply == QMessageBox.Yes:
            self._reset()

    def _reset(self):
        """Go back to the upload page with a fresh session."""
        self.segment_player.stop()
        self.player.unload()
        self.session.reset()
        self.file_picker.clear()
        self.file_picker.show_error(None)
        self.stack.setCurrentIndex(PAGE_UPLOAD)
        self.statusBar().showMessage("Ready")

    def _focus_answer(self):
        self.answer_box.setFocus()

    def _on_playback_failed(self, message: str):
        self.statusBar().showMessage(f"Playback error: {message}", 5000)

    # keyboard -------------------------------------------------------
    def eventFilter(self, obj, event):
        """Route key presses on this window to practice shortcuts."""
        if (
            event.type() == QEvent.KeyPress
            and self.session.status == SessionStatus.PRACTICING
            and isinstance(obj, QWidget)
            and obj.window() is self
        ):
            action = resolve_shortcut(
                event.key(),
                event.modifiers(),
                is_typing=obj is self.answer_box,
                feedback_correct=self.session.is_correct,
                has_input=bool(self.session.user_input.strip()),
            )
            if action is not None:
                self.run_action(action)
                return True
        return super().eventFilter(obj, event)

    def run_action(self, action: str) -> None:
        """Run a ShortcutAction."""
        logger.debug("Shortcut: %s", action)
        if action == ShortcutAction.PLAY:
            self.segment_player.play()
        elif action == ShortcutAction.SUBMIT:
            self._on_submit()
        elif action == ShortcutAction.NEXT:
            self._on_next()
        elif action == ShortcutAction.PREV:
            self._on_prev()

    def closeEvent(self, event):
        """Release the audio handle before the window goes away."""
        QApplication.instance().removeEventFilter(self)
        if self.transcription_ctrl is not None:
            self.transcription_ctrl.close()
            self.transcription_ctrl = None
        self.segment_player.teardown()
        self.player.unload()
        super().closeEvent(event)

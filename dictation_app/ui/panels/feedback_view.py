"""
Feedback view for graded answers.

This module defines a read-only text browser that shows the reference
sentence with the words the user got wrong highlighted.
"""
import html
import logging

from PySide6.QtWidgets import QTextBrowser

from dictation_app.core.models import GradingResult

logger = logging.getLogger(__name__)


def feedback_html(result: GradingResult) -> str:
    """Render the reference words, marking incorrect ones with class "wrong"."""
    parts = ["<p>"]
    for word in result.words:
        css_class = "ok" if word.is_correct else "wrong"
        parts.append(f'<span class="{css_class}">{html.escape(word.text)}</span> ')
    parts.append("</p>")
    return "".join(parts)


class FeedbackView(QTextBrowser):
    """Shows a GradingResult as a heading plus the annotated sentence."""

    def __init__(self, parent=None):
        """Initialize the FeedbackView.

        Args:
            parent: Optional parent widget
        """
        super().__init__(parent)
        self.setReadOnly(True)
        self.setOpenLinks(False)
        self.document().setDefaultStyleSheet("""
            span.ok { }
            span.wrong { color: #dc2626; font-weight: 800; text-decoration: underline; }
            h3.pass { color: #166534; }
            h3.fail { color: #991b1b; }
        """)

    def set_result(self, result: GradingResult) -> None:
        """Display a grading result.

        Args:
            result: The GradingResult to display
        """
        if result.is_match:
            heading = '<h3 class="pass">Uitstekend! (Excellent)</h3><p><i>Sentence Reference</i></p>'
        else:
            heading = (
                '<h3 class="fail">Niet helemaal... (Not quite)</h3>'
                '<p><i>Correction Guide (Bold = Errors)</i></p>'
            )
        body = feedback_html(result)
        footer = "" if result.is_match else "<p>Correct the red words and try again!</p>"
        self.setHtml(heading + body + footer)

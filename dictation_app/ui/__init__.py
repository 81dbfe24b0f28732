"""
UI package for the dictation trainer.
"""

from .player_widget import PlayerWidget
from .segment_player import SegmentPlayer
from .panels.feedback_view import FeedbackView

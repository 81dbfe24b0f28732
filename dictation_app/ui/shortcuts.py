"""
Keyboard shortcuts for the practice page.

Keys are routed to actions depending on whether the answer box has focus:
plain Space and arrows only act outside the box so typing is unaffected.
"""
import typing as t

from PySide6.QtCore import Qt


class ShortcutAction:
    PLAY = "play"
    SUBMIT = "submit"
    NEXT = "next"
    PREV = "prev"


_ENTER_KEYS = (Qt.Key_Return, Qt.Key_Enter)


def resolve_shortcut(
    key: int,
    modifiers,
    is_typing: bool,
    feedback_correct: bool,
    has_input: bool
) -> t.Optional[str]:
    """Map a key press to a ShortcutAction.

    Args:
        key: Qt key code
        modifiers: Qt.KeyboardModifier flags held during the press
        is_typing: True if the answer box has focus
        feedback_correct: True if the current answer was graded correct
        has_input: True if the answer box holds non-whitespace text

    Returns:
        The action to run, or None to let the key through
    """
    shift = bool(modifiers & Qt.ShiftModifier)
    alt = bool(modifiers & Qt.AltModifier)
    ctrl = bool(modifiers & (Qt.ControlModifier | Qt.MetaModifier))

    if key in _ENTER_KEYS and not shift:
        if feedback_correct:
            return ShortcutAction.NEXT
        if is_typing or has_input:
            return ShortcutAction.SUBMIT
        return None

    if key == Qt.Key_Space:
        if not is_typing or ctrl:
            return ShortcutAction.PLAY
        return None

    if key in (Qt.Key_Left, Qt.Key_Right) and (not is_typing or alt):
        return ShortcutAction.PREV if key == Qt.Key_Left else ShortcutAction.NEXT

    return None

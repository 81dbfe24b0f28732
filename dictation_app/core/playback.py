"""
Segment playback over a shared audio handle.

The PlaybackController plays exactly one segment's window of a longer audio
file. It seeks to the window start, starts playback and installs a
boundary-watcher on the handle's time updates; once the playhead reaches the
window end (plus an optional pad) playback is paused and the owner notified.
"""
import logging
import typing as t
from dataclasses import dataclass, field

from dictation_app.config import END_PADDING_SEC

logger = logging.getLogger(__name__)

Callback = t.Optional[t.Callable[[], None]]
TimeListener = t.Callable[[float], None]


class AudioHandle(t.Protocol):
    """Playback capability lent to the controller by its owner.

    Positions are in seconds. Time listeners are called with the current
    position whenever the handle reports progress.
    """

    def position(self) -> float: ...

    def set_position(self, sec: float) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def add_time_listener(self, listener: TimeListener) -> None: ...

    def remove_time_listener(self, listener: TimeListener) -> None: ...


@dataclass
class PlaybackSession:
    """State of a single play() request.

    Attributes:
        start_time: Window start in seconds
        end_time: Window end in seconds
        padding: Seconds allowed past end_time before stopping
        on_start: Called once playback has been started
        on_end: Called once when the boundary is reached
        is_active: False once the session ended or was superseded
    """
    start_time: float
    end_time: float
    padding: float = 0.0
    on_start: Callback = None
    on_end: Callback = None
    is_active: bool = True
    # ---------- non-serialised ----------
    watcher: t.Optional[TimeListener] = field(default=None, repr=False)

    @property
    def stop_at(self) -> float:
        """Playhead position at which playback is stopped."""
        return self.end_time + self.padding


class PlaybackController:
    """Plays bounded windows of a shared audio handle.

    At most one session is active at a time. Starting a new one always
    detaches the previous boundary-watcher first, so a superseded session
    never reports its end.
    """

    def __init__(self, handle: AudioHandle, padding_seconds: float = END_PADDING_SEC):
        """Initialize the controller.

        Args:
            handle: Audio handle owned by the caller
            padding_seconds: Extra time played past each window's end
        """
        if padding_seconds < 0:
            raise ValueError(f"padding_seconds must be >= 0, got {padding_seconds}")
        self.handle = handle
        self.padding_seconds = padding_seconds
        self.session: t.Optional[PlaybackSession] = None

    @property
    def is_playing(self) -> bool:
        """True while a session is waiting for its end boundary."""
        return self.session is not None and self.session.is_active

    def seek_to(self, time: float) -> None:
        """Move the playhead, clamping negative times to zero."""
        self.handle.set_position(max(0.0, time))

    def play(self, window, on_start: Callback = None, on_end: Callback = None) -> PlaybackSession:
        """Play one window and stop at its end.

        Args:
            window: A Segment or a (start, end) pair in seconds
            on_start: Called after playback has been started
            on_end: Called once when the end boundary is reached; never
                called if this session is superseded or torn down first

        Returns:
            The new, active PlaybackSession
        """
        start, end = _window_bounds(window)

        # Never leave two watchers attached to the same handle
        self._detach()

        session = PlaybackSession(
            start_time=start,
            end_time=end,
            padding=self.padding_seconds,
            on_start=on_start,
            on_end=on_end,
        )
        self.session = session

        self.seek_to(start)
        self.handle.play()
        logger.debug("Playing window %.2f-%.2f (stop at %.2f)", start, end, session.stop_at)
        if on_start:
            on_start()

        def watcher(position: float) -> None:
            if not session.is_active or position < session.stop_at:
                return
            self.handle.pause()
            self._detach()
            logger.debug("Reached end of window at %.3f", position)
            if session.on_end:
                session.on_end()

        # on_start may itself have started another session
        if self.session is session:
            session.watcher = watcher
            self.handle.add_time_listener(watcher)
        return session

    def stop(self) -> None:
        """Pause playback and drop the active session without notifying."""
        if self.is_playing:
            self.handle.pause()
        self._detach()

    def teardown(self) -> None:
        """Release the handle; must be called when the owner goes away."""
        self._detach()
        logger.debug("Playback controller torn down")

    def _detach(self) -> None:
        session = self.session
        if session is None:
            return
        session.is_active = False
        if session.watcher is not None:
            self.handle.remove_time_listener(session.watcher)
            session.watcher = None
        self.session = None


def _window_bounds(window) -> t.Tuple[float, float]:
    """Return (start, end) from a Segment or a pair."""
    if hasattr(window, "start_time") and hasattr(window, "end_time"):
        return float(window.start_time), float(window.end_time)
    start, end = window
    return float(start), float(end)

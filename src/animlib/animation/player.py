"""
Keyframe Player

Advances a single animation state through its clip's keyframes.
"""

import logging
from typing import Callable, Optional

from .clip import AnimationClip
from .keyframe import Keyframe
from .state import AnimationState, UnsupportedWrapModeError, WrapMode

logger = logging.getLogger(__name__)


class PlayerHooks:
    """
    Extension points called by :class:`KeyframePlayer`.

    The base implementation does nothing. Concrete players (skeleton posing,
    property animation, recording) override the methods they need.
    """

    def init_clip(self, player: "KeyframePlayer"):
        """Called when a clip starts and whenever playback rewinds."""

    def set_keyframe(self, player: "KeyframePlayer", index: int, keyframe: Keyframe):
        """Called once per keyframe crossed, in increasing index order."""

    def on_update(self, player: "KeyframePlayer"):
        """Called after every update once the new time has been applied."""


class CallbackHooks(PlayerHooks):
    """Hook set built from plain callables."""

    def __init__(
        self,
        on_init_clip: Optional[Callable[["KeyframePlayer"], None]] = None,
        on_keyframe: Optional[Callable[["KeyframePlayer", int, Keyframe], None]] = None,
        on_update: Optional[Callable[["KeyframePlayer"], None]] = None
    ):
        self._on_init_clip = on_init_clip
        self._on_keyframe = on_keyframe
        self._on_update = on_update

    def init_clip(self, player):
        if self._on_init_clip is not None:
            self._on_init_clip(player)

    def set_keyframe(self, player, index, keyframe):
        if self._on_keyframe is not None:
            self._on_keyframe(player, index, keyframe)

    def on_update(self, player):
        if self._on_update is not None:
            self._on_update(player)


class KeyframePlayer:
    """
    Drives time advancement for one active clip.

    Manages:
    - The clip and (borrowed) state being played
    - A keyframe cursor: every keyframe before it has been applied
    - Wrap-mode handling when time passes the clip length
    """

    def __init__(
        self,
        hooks: Optional[PlayerHooks] = None,
        on_init_clip: Optional[Callable] = None,
        on_keyframe: Optional[Callable] = None,
        on_update: Optional[Callable] = None
    ):
        """
        Initialize player.

        Args:
            hooks: Hook object receiving playback events
            on_init_clip: Callable used when no hook object is given
            on_keyframe: Callable used when no hook object is given
            on_update: Callable used when no hook object is given
        """
        if hooks is None:
            hooks = CallbackHooks(on_init_clip, on_keyframe, on_update)
        self.hooks = hooks

        self._clip: Optional[AnimationClip] = None
        self._state: Optional[AnimationState] = None
        self._keyframe: int = 0
        self._time: float = 0.0

    @property
    def current_clip(self) -> Optional[AnimationClip]:
        """Clip currently being played."""
        return self._clip

    @property
    def current_state(self) -> Optional[AnimationState]:
        return self._state

    @property
    def current_keyframe(self) -> int:
        """Index of the next keyframe to apply."""
        return self._keyframe

    @current_keyframe.setter
    def current_keyframe(self, index: int):
        self.seek(self._require_clip().keyframes[index].time)

    @property
    def current_time(self) -> float:
        """Current play position in seconds."""
        return self._time

    @current_time.setter
    def current_time(self, time: float):
        self.seek(time)

    def seek(self, time: float):
        """
        Move the play position and apply the keyframes it crosses.

        Moving backwards resets the cursor to the first keyframe and
        re-initializes the clip before applying keyframes again.

        Args:
            time: Target time in seconds
        """
        keyframes = self._require_clip().keyframes

        if time < self._time:
            self._keyframe = 0
            self.hooks.init_clip(self)

        self._time = time

        while self._keyframe < len(keyframes):
            keyframe = keyframes[self._keyframe]

            # Stop at the first keyframe past the play position
            if keyframe.time > time:
                break

            self.hooks.set_keyframe(self, self._keyframe, keyframe)
            self._keyframe += 1

    def start_clip(self, clip: AnimationClip, state: AnimationState):
        """
        Start playing a clip.

        Args:
            clip: Animation clip to play
            state: State receiving time, length and enabled flag

        Raises:
            ValueError: If clip is None
        """
        if clip is None:
            raise ValueError("Clip required")

        self._clip = clip
        self._state = state
        self._keyframe = max(0, state.first_frame)
        self.seek(clip.keyframes[self._keyframe].time)

        last_index = len(clip.keyframes) - 1
        state.time = self._time
        state.length = clip.keyframes[min(state.last_frame, last_index)].time
        state.enabled = True

        logger.debug("Started clip '%s' at %.3fs (length %.3fs)", clip.name, state.time, state.length)
        self.hooks.init_clip(self)

    def pause_clip(self):
        """Pause playback of the current clip."""
        self._require_state().enabled = False

    def resume_clip(self):
        """Resume playback of the current clip."""
        self._require_state().enabled = True

    def update(self, delta_time: float):
        """
        Advance playback.

        Args:
            delta_time: Time elapsed since last frame (seconds)

        Raises:
            UnsupportedWrapModeError: If time overflows a state with WrapMode.DEFAULT
        """
        if self._clip is None or self._state is None:
            return

        state = self._state
        if not state.enabled:
            return

        state.time += delta_time * state.speed

        if state.time > state.length:
            if state.wrap_mode is WrapMode.ONCE:
                state.enabled = False
                return
            elif state.wrap_mode is WrapMode.LOOP:
                # Single wrap per tick
                state.time -= state.length
            elif state.wrap_mode is WrapMode.PING_PONG:
                # Time is left past the end; the reversed speed brings it back
                state.speed *= -1
            else:
                raise UnsupportedWrapModeError(state.wrap_mode)

        self.seek(state.time)
        self.hooks.on_update(self)

    def _require_clip(self) -> AnimationClip:
        if self._clip is None:
            raise RuntimeError("No clip has been started on this player")
        return self._clip

    def _require_state(self) -> AnimationState:
        if self._state is None:
            raise RuntimeError("No clip has been started on this player")
        return self._state

    def __repr__(self):
        clip_name = self._clip.name if self._clip else "None"
        return f"KeyframePlayer(clip='{clip_name}', time={self._time:.2f}s, keyframe={self._keyframe})"

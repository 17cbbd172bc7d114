"""
Animation State

Per-instance playback cursor for one clip inside one registry.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional

from .clip import AnimationClip

if TYPE_CHECKING:
    from .player import KeyframePlayer


class WrapMode(Enum):
    """Policy applied when elapsed time passes the clip length."""
    DEFAULT = "default"
    ONCE = "once"
    LOOP = "loop"
    PING_PONG = "ping_pong"

    @classmethod
    def from_string(cls, value) -> "WrapMode":
        """Parse a wrap mode from config data (accepts members, names and values)."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_")
        if key == "pingpong":
            key = "ping_pong"
        for mode in cls:
            if mode.value == key:
                return mode
        raise ValueError(f"Unknown wrap mode: {value}")


class QueueMode(Enum):
    """Queueing behaviour for play_queued."""
    COMPLETE_OTHERS = "complete_others"
    PLAY_NOW = "play_now"


class UnsupportedWrapModeError(NotImplementedError):
    """Raised when playback overflows a state whose wrap mode has no policy."""

    def __init__(self, wrap_mode: WrapMode):
        super().__init__(f"Unsupported wrap mode: {wrap_mode.value}")
        self.wrap_mode = wrap_mode


class AnimationState:
    """
    Mutable playback state of a single clip.

    Tracks:
    - Enabled flag, elapsed time and signed speed
    - Length derived from the clip's last usable keyframe
    - Wrap mode and frame bounds
    """

    def __init__(
        self,
        clip: AnimationClip,
        name: Optional[str] = None,
        wrap_mode: WrapMode = WrapMode.ONCE,
        speed: float = 1.0,
        player: Optional["KeyframePlayer"] = None
    ):
        """
        Initialize state.

        Args:
            clip: Clip this state plays
            name: Registered name (defaults to the clip name)
            wrap_mode: Overflow policy
            speed: Playback speed multiplier
            player: Player that advances this state
        """
        self.clip = clip
        self.name = name if name is not None else clip.name
        self.enabled: bool = False
        self.time: float = 0.0
        self.speed: float = speed
        self.weight: float = 1.0  # Stored only; no blending is applied
        self.wrap_mode = wrap_mode
        self.first_frame: int = clip.first_frame
        self.last_frame: int = clip.last_frame
        self.length: float = clip.duration
        self.player = player

    @property
    def normalized_time(self) -> float:
        """Elapsed time as a fraction of the clip length."""
        if self.length <= 0.0:
            return 0.0
        return self.time / self.length

    def update(self, delta_time: float):
        """
        Advance this state through its player.

        Args:
            delta_time: Time elapsed since last frame (seconds)
        """
        if self.player is None:
            return
        self.player.update(delta_time)

    def __repr__(self):
        return (
            f"AnimationState(name='{self.name}', time={self.time:.2f}s, "
            f"length={self.length:.2f}s, enabled={self.enabled}, wrap={self.wrap_mode.value})"
        )

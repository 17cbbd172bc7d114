"""
Animation Clip

Named, immutable wrapper around a keyframe track and a frame range.
"""

from typing import Optional, Tuple

from .keyframe import Keyframe, KeyframeTrack


class AnimationClip:
    """
    Named animation data source.

    A clip cut from another clip shares the parent's track object and only
    stores its own frame range.
    """

    def __init__(
        self,
        name: str,
        track: KeyframeTrack,
        first_frame: int = 0,
        last_frame: Optional[int] = None
    ):
        """
        Initialize clip.

        Args:
            name: Clip name
            track: Keyframe track (shared, never copied)
            first_frame: First keyframe index this clip represents
            last_frame: Last keyframe index (None for the end of the track)
        """
        if track is None:
            raise ValueError("AnimationClip requires a keyframe track")
        if last_frame is None:
            last_frame = track.last_index
        if first_frame > last_frame:
            raise ValueError(
                f"Invalid frame range [{first_frame}, {last_frame}] for clip '{name}'"
            )
        if first_frame > track.last_index:
            raise ValueError(
                f"First frame {first_frame} is past the last keyframe "
                f"({track.last_index}) for clip '{name}'"
            )

        self._name = name
        self._track = track
        self._first_frame = int(first_frame)
        self._last_frame = int(last_frame)

    @classmethod
    def sub_clip(
        cls,
        parent: "AnimationClip",
        name: str,
        first_frame: int,
        last_frame: int
    ) -> "AnimationClip":
        """Create a view over a range of ``parent``'s track."""
        return cls(name, parent.track, first_frame, last_frame)

    @property
    def name(self) -> str:
        return self._name

    @property
    def track(self) -> KeyframeTrack:
        return self._track

    @property
    def keyframes(self) -> Tuple[Keyframe, ...]:
        """All keyframes of the underlying track."""
        return self._track.keyframes

    @property
    def first_frame(self) -> int:
        return self._first_frame

    @property
    def last_frame(self) -> int:
        return self._last_frame

    @property
    def frame_count(self) -> int:
        """Number of keyframes inside this clip's range."""
        last = min(self._last_frame, self._track.last_index)
        return max(0, last - max(0, self._first_frame) + 1)

    @property
    def duration(self) -> float:
        """Timestamp of the last usable keyframe."""
        return self._track[min(self._last_frame, self._track.last_index)].time

    def __repr__(self):
        return (
            f"AnimationClip(name='{self._name}', frames=[{self._first_frame}, "
            f"{self._last_frame}], duration={self.duration:.2f}s)"
        )

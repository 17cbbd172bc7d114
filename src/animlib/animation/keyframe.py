"""
Keyframes

Time-stamped pose samples and the ordered tracks that hold them.
"""

from enum import Enum
from typing import Any, Iterable, List, Sequence, Tuple

import numpy as np


class AnimationTarget(Enum):
    """Animation target properties."""
    TRANSLATION = "translation"
    ROTATION = "rotation"
    SCALE = "scale"
    WEIGHTS = "weights"  # Morph target weights


class JointPose:
    """
    Pose payload for skeletal keyframes.

    Names the joint and the property a keyframe sets, plus the value
    (Vector3 for T/S, Quaternion for R, numpy array for weights).
    """

    __slots__ = ("joint_name", "target", "value")

    def __init__(self, joint_name: str, target: AnimationTarget, value):
        self.joint_name = joint_name
        self.target = target
        self.value = value

    def __repr__(self):
        return f"JointPose(joint='{self.joint_name}', target={self.target.value})"


class Keyframe:
    """
    Single keyframe in a track.

    Stores a time and an opaque pose payload.
    """

    __slots__ = ("time", "pose")

    def __init__(self, time: float, pose: Any = None):
        """
        Initialize keyframe.

        Args:
            time: Time in seconds
            pose: Pose applied when playback crosses this keyframe
        """
        self.time = float(time)
        self.pose = pose

    def __repr__(self):
        return f"Keyframe(t={self.time:.3f}, pose={self.pose})"


class KeyframeTrack:
    """
    Immutable, time-ordered sequence of keyframes.

    Tracks are shared read-only between every clip cut from them, so
    nothing here mutates after construction.
    """

    def __init__(self, keyframes: Iterable[Keyframe]):
        """
        Initialize track.

        Args:
            keyframes: Keyframes sorted by non-decreasing time

        Raises:
            ValueError: If the track is empty or out of order
        """
        frames = tuple(keyframes)
        if not frames:
            raise ValueError("KeyframeTrack requires at least one keyframe")

        times = np.array([kf.time for kf in frames], dtype=np.float64)
        if np.any(np.diff(times) < 0.0):
            raise ValueError("Keyframe timestamps must be non-decreasing")
        times.setflags(write=False)

        self._keyframes = frames
        self._times = times

    @classmethod
    def from_times(cls, times: Sequence[float], poses: Sequence[Any] = None) -> "KeyframeTrack":
        """Build a track from parallel time/pose sequences."""
        if poses is None:
            poses = [None] * len(times)
        if len(poses) != len(times):
            raise ValueError(f"Expected {len(times)} poses, got {len(poses)}")
        return cls(Keyframe(t, p) for t, p in zip(times, poses))

    @classmethod
    def from_channels(cls, channels: Iterable[Sequence[Tuple[float, Any]]]) -> "KeyframeTrack":
        """
        Merge per-joint channels into one track.

        Keyframes with equal timestamps keep the order of their channels.

        Args:
            channels: Iterable of (time, pose) sequences

        Returns:
            Merged track sorted by time
        """
        merged: List[Tuple[float, int, int, Any]] = []
        for channel_idx, channel in enumerate(channels):
            for key_idx, (time, pose) in enumerate(channel):
                merged.append((float(time), channel_idx, key_idx, pose))

        merged.sort(key=lambda entry: entry[:3])
        return cls(Keyframe(time, pose) for time, _, _, pose in merged)

    @property
    def keyframes(self) -> Tuple[Keyframe, ...]:
        return self._keyframes

    @property
    def times(self) -> np.ndarray:
        """Read-only array of keyframe timestamps."""
        return self._times

    @property
    def last_index(self) -> int:
        return len(self._keyframes) - 1

    def index_at(self, time: float) -> int:
        """Index of the first keyframe whose time is strictly greater than ``time``."""
        return int(np.searchsorted(self._times, time, side="right"))

    def __len__(self):
        return len(self._keyframes)

    def __getitem__(self, index: int) -> Keyframe:
        return self._keyframes[index]

    def __iter__(self):
        return iter(self._keyframes)

    def __repr__(self):
        return f"KeyframeTrack(keyframes={len(self._keyframes)}, end={self._times[-1]:.2f}s)"

"""Tests for keyframe tracks and clips"""

import pytest
import numpy as np

from animlib.animation import AnimationClip, AnimationTarget, JointPose, Keyframe, KeyframeTrack


def test_track_requires_keyframes():
    """Empty tracks are rejected"""
    with pytest.raises(ValueError):
        KeyframeTrack([])


def test_track_requires_sorted_times():
    """Timestamps must not decrease"""
    with pytest.raises(ValueError):
        KeyframeTrack.from_times([0.0, 1.0, 0.5])


def test_track_allows_equal_times():
    """Equal timestamps are valid"""
    track = KeyframeTrack.from_times([0.0, 0.5, 0.5, 1.0])
    assert len(track) == 4
    assert track.last_index == 3


def test_track_times_are_read_only():
    """Times array cannot be written through"""
    track = KeyframeTrack.from_times([0.0, 0.5, 1.0])
    assert np.allclose(track.times, [0.0, 0.5, 1.0])
    with pytest.raises(ValueError):
        track.times[0] = 2.0


def test_track_index_at():
    """index_at returns the first keyframe strictly after the time"""
    track = KeyframeTrack.from_times([0.0, 0.5, 1.0])
    assert track.index_at(-0.1) == 0
    assert track.index_at(0.0) == 1
    assert track.index_at(0.6) == 2
    assert track.index_at(1.0) == 3


def test_track_from_channels_merges_by_time():
    """Channels merge into one ordered track; ties keep channel order"""
    hip = [(0.0, JointPose("hip", AnimationTarget.TRANSLATION, [0, 0, 0])),
           (1.0, JointPose("hip", AnimationTarget.TRANSLATION, [1, 0, 0]))]
    knee = [(0.0, JointPose("knee", AnimationTarget.ROTATION, [0, 0, 0, 1])),
            (0.5, JointPose("knee", AnimationTarget.ROTATION, [0, 0, 0, 1]))]

    track = KeyframeTrack.from_channels([hip, knee])

    assert [kf.time for kf in track] == [0.0, 0.0, 0.5, 1.0]
    assert [kf.pose.joint_name for kf in track] == ["hip", "knee", "knee", "hip"]


def test_from_times_pose_count_mismatch():
    """Pose and time sequences must line up"""
    with pytest.raises(ValueError):
        KeyframeTrack.from_times([0.0, 1.0], ["a"])


def test_clip_defaults_to_full_track():
    """A clip without a range covers the whole track"""
    track = KeyframeTrack.from_times([0.0, 0.5, 1.0])
    clip = AnimationClip("walk", track)

    assert clip.first_frame == 0
    assert clip.last_frame == 2
    assert clip.frame_count == 3
    assert clip.duration == 1.0
    assert clip.keyframes[1].time == 0.5


def test_sub_clip_shares_track():
    """Sub-clips reference the parent's track instead of copying it"""
    track = KeyframeTrack.from_times([0.0, 0.25, 0.5, 0.75, 1.0])
    parent = AnimationClip("all", track)

    sub = AnimationClip.sub_clip(parent, "middle", 1, 3)

    assert sub.track is parent.track
    assert sub.name == "middle"
    assert sub.frame_count == 3
    assert sub.duration == 0.75


def test_clip_rejects_inverted_range():
    """first_frame after last_frame is invalid"""
    track = KeyframeTrack.from_times([0.0, 0.5, 1.0])
    with pytest.raises(ValueError):
        AnimationClip("bad", track, 2, 1)


def test_clip_duration_clamps_last_frame():
    """A range past the end uses the track's last keyframe"""
    track = KeyframeTrack.from_times([0.0, 0.5, 1.0])
    clip = AnimationClip("long", track, 0, 10)
    assert clip.duration == 1.0
    assert clip.frame_count == 3


def test_keyframe_repr():
    """Keyframes show their time"""
    assert "t=0.500" in repr(Keyframe(0.5))


def test_clip_rejects_first_frame_past_track():
    """A range starting after the last keyframe is invalid"""
    track = KeyframeTrack.from_times([0.0, 0.5, 1.0])
    parent = AnimationClip("all", track)
    with pytest.raises(ValueError):
        AnimationClip.sub_clip(parent, "tail", 5, 10)

    # Starting on the last keyframe is still allowed
    assert AnimationClip.sub_clip(parent, "end", 2, 10).frame_count == 1

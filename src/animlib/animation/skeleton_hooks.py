"""
Skeleton Pose Hooks

Player hooks that apply JointPose keyframes to a skeleton.
"""

from typing import Dict, List

import numpy as np
from pyrr import Quaternion, Vector3

from .keyframe import AnimationTarget, JointPose, Keyframe
from .player import KeyframePlayer, PlayerHooks
from .skeleton import Joint, Skeleton


class SkeletonPoseHooks(PlayerHooks):
    """
    Poses a skeleton as playback crosses keyframes.

    Manages:
    - Resetting the clip's joints to bind pose when it starts or rewinds
    - Writing each crossed keyframe into its joint
    - Rebuilding joint matrices once per update
    """

    def __init__(self, skeleton: Skeleton):
        """
        Initialize hooks.

        Args:
            skeleton: Skeleton to pose
        """
        self.skeleton = skeleton
        self._dirty: Dict[str, Joint] = {}
        self._joints: List[Joint] = []
        self._joints_track = None

    def init_clip(self, player: KeyframePlayer):
        """Reset the joints this clip animates; joints posed by other clips are kept."""
        for joint in self._joints_for(player.current_clip):
            joint.reset_pose()
            self._dirty[joint.name] = joint

    def _joints_for(self, clip) -> List[Joint]:
        if clip is None:
            return []

        track = clip.track
        if self._joints_track is not track:
            names = {kf.pose.joint_name for kf in track if isinstance(kf.pose, JointPose)}
            self._joints = [joint for joint in self.skeleton.joints if joint.name in names]
            self._joints_track = track
        return self._joints

    def set_keyframe(self, player: KeyframePlayer, index: int, keyframe: Keyframe):
        pose = keyframe.pose
        if not isinstance(pose, JointPose):
            return

        joint = self.skeleton.get_joint(pose.joint_name)
        if joint is None:
            return

        if pose.target == AnimationTarget.TRANSLATION:
            joint.translation = Vector3(pose.value)
        elif pose.target == AnimationTarget.ROTATION:
            joint.rotation = Quaternion(pose.value)
        elif pose.target == AnimationTarget.SCALE:
            joint.scale = Vector3(pose.value)
        elif pose.target == AnimationTarget.WEIGHTS:
            joint.weights = np.asarray(pose.value, dtype='f4')

        self._dirty[joint.name] = joint

    def on_update(self, player: KeyframePlayer):
        """Rebuild animated transforms for touched joints and refresh world transforms."""
        for joint in self._dirty.values():
            joint.animated_transform = joint.compose_local_transform()
        self._dirty.clear()

        self.skeleton.update_world_transforms()


def skeleton_player_factory(skeleton: Skeleton):
    """Player factory for AnimationRegistry that poses ``skeleton``."""

    def factory(state) -> KeyframePlayer:
        return KeyframePlayer(SkeletonPoseHooks(skeleton))

    return factory

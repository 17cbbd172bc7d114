"""
Animation System

Clip registry, playback states and keyframe players.
"""

from .keyframe import Keyframe, KeyframeTrack, JointPose, AnimationTarget
from .clip import AnimationClip
from .state import AnimationState, WrapMode, QueueMode, UnsupportedWrapModeError
from .player import KeyframePlayer, PlayerHooks, CallbackHooks
from .registry import AnimationRegistry, AnimationDefinition, load_animation_definition
from .skeleton import Joint, Skeleton
from .skeleton_hooks import SkeletonPoseHooks, skeleton_player_factory

__all__ = [
    'Keyframe',
    'KeyframeTrack',
    'JointPose',
    'AnimationTarget',
    'AnimationClip',
    'AnimationState',
    'WrapMode',
    'QueueMode',
    'UnsupportedWrapModeError',
    'KeyframePlayer',
    'PlayerHooks',
    'CallbackHooks',
    'AnimationRegistry',
    'AnimationDefinition',
    'load_animation_definition',
    'Joint',
    'Skeleton',
    'SkeletonPoseHooks',
    'skeleton_player_factory',
]

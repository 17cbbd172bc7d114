"""
AnimLib - Keyframe Animation Playback

Named clip registry, per-clip playback states and keyframe players
for component-based engines.
"""

# Configuration
from .config.settings import *

# Animation
from .animation import (
    AnimationClip,
    AnimationDefinition,
    AnimationRegistry,
    AnimationState,
    AnimationTarget,
    CallbackHooks,
    Joint,
    JointPose,
    Keyframe,
    KeyframePlayer,
    KeyframeTrack,
    PlayerHooks,
    QueueMode,
    Skeleton,
    SkeletonPoseHooks,
    UnsupportedWrapModeError,
    WrapMode,
    load_animation_definition,
    skeleton_player_factory,
)

# Loaders
from .loaders import ClipLibrary, GltfClipLoader

__version__ = "0.1.0"
__all__ = [
    # Config (exported via *)
    # Animation
    "AnimationClip",
    "AnimationDefinition",
    "AnimationRegistry",
    "AnimationState",
    "AnimationTarget",
    "CallbackHooks",
    "Joint",
    "JointPose",
    "Keyframe",
    "KeyframePlayer",
    "KeyframeTrack",
    "PlayerHooks",
    "QueueMode",
    "Skeleton",
    "SkeletonPoseHooks",
    "UnsupportedWrapModeError",
    "WrapMode",
    "load_animation_definition",
    "skeleton_player_factory",
    # Loaders
    "ClipLibrary",
    "GltfClipLoader",
]

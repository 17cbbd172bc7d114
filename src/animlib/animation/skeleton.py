"""
Skeleton

Joint hierarchy posed by skeletal keyframes.
"""

from typing import Dict, List, Optional

import numpy as np
from pyrr import Matrix44, Quaternion, Vector3


class Joint:
    """
    Single joint in a skeleton hierarchy.

    Each joint has:
    - Bind pose translation/rotation/scale
    - Current pose components written by keyframes
    - Local and world transforms
    """

    def __init__(self, name: str, index: int, parent: Optional['Joint'] = None):
        """
        Initialize a joint.

        Args:
            name: Joint name (matches JointPose.joint_name)
            index: Joint index in skeleton
            parent: Parent joint (None for root)
        """
        self.name = name
        self.index = index
        self.parent = parent
        self.children: List['Joint'] = []

        # Bind pose
        self.base_translation = Vector3([0.0, 0.0, 0.0])
        self.base_rotation = Quaternion([0.0, 0.0, 0.0, 1.0])
        self.base_scale = Vector3([1.0, 1.0, 1.0])
        self.base_weights: Optional[np.ndarray] = None

        # Current pose (None = bind pose component)
        self.translation: Optional[Vector3] = None
        self.rotation: Optional[Quaternion] = None
        self.scale: Optional[Vector3] = None
        self.weights: Optional[np.ndarray] = None

        # Animated transform (overrides the bind pose while animating)
        self.animated_transform: Optional[Matrix44] = None
        self.world_transform = Matrix44.identity()

    def add_child(self, child: 'Joint'):
        """Add a child joint to this joint's hierarchy."""
        self.children.append(child)
        child.parent = self

    def reset_pose(self):
        """Drop pose components and the animated transform."""
        self.translation = None
        self.rotation = None
        self.scale = None
        self.weights = None
        self.animated_transform = None

    def compose_local_transform(self) -> Matrix44:
        """
        Build the local matrix from the current pose.

        Missing components fall back to the bind pose. Order is scale,
        then rotation, then translation (row-major).
        """
        translation = self.translation if self.translation is not None else self.base_translation
        rotation = self.rotation if self.rotation is not None else self.base_rotation
        scale = self.scale if self.scale is not None else self.base_scale

        mat = Matrix44.from_scale(Vector3(scale))
        mat = mat @ Quaternion(rotation).matrix44
        mat = mat @ Matrix44.from_translation(Vector3(translation))
        return mat

    def get_local_transform(self) -> Matrix44:
        """Current local transform (animated or bind pose)."""
        if self.animated_transform is not None:
            return self.animated_transform
        return self.compose_local_transform()

    def __repr__(self):
        return f"Joint(name='{self.name}', index={self.index}, children={len(self.children)})"


class Skeleton:
    """
    Hierarchical skeleton structure.

    Finds joints by name and propagates local transforms down the
    hierarchy into world transforms.
    """

    def __init__(self, name: str = "Skeleton"):
        self.name = name
        self.joints: List[Joint] = []
        self.root_joints: List[Joint] = []
        self.joint_by_name: Dict[str, Joint] = {}

    def add_joint(self, joint: Joint):
        """
        Add a joint to the skeleton.

        Args:
            joint: Joint to add (roots are joints without a parent)
        """
        self.joints.append(joint)
        self.joint_by_name[joint.name] = joint

        if joint.parent is None:
            self.root_joints.append(joint)

    def get_joint(self, name: str) -> Optional[Joint]:
        return self.joint_by_name.get(name)

    def update_world_transforms(self):
        """
        Recompute world transforms from local transforms.

        world = local @ parent_world (row-major form).
        """
        for root in self.root_joints:
            self._update_joint_recursive(root, Matrix44.identity())

    def _update_joint_recursive(self, joint: Joint, parent_world: Matrix44):
        joint.world_transform = joint.get_local_transform() @ parent_world
        for child in joint.children:
            self._update_joint_recursive(child, joint.world_transform)

    def reset_animation(self):
        """Reset all joints to bind pose."""
        for joint in self.joints:
            joint.reset_pose()

    def __repr__(self):
        return f"Skeleton(name='{self.name}', joints={len(self.joints)}, roots={len(self.root_joints)})"

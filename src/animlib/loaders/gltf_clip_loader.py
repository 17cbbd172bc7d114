"""
GLTF/GLB Clip Loader

Loads glTF animations as animation clips and skins as skeletons.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np
import pygltflib
from pyrr import Quaternion, Vector3

from ..animation import AnimationClip, AnimationTarget, Joint, JointPose, KeyframeTrack, Skeleton
from ..config.settings import UNNAMED_CLIP_PREFIX, UNNAMED_JOINT_PREFIX

logger = logging.getLogger(__name__)

COMPONENT_TYPE_SIZES = {
    5120: 1,  # BYTE
    5121: 1,  # UNSIGNED_BYTE
    5122: 2,  # SHORT
    5123: 2,  # UNSIGNED_SHORT
    5125: 4,  # UNSIGNED_INT
    5126: 4,  # FLOAT
}

COMPONENT_DTYPES = {
    5120: np.int8,
    5121: np.uint8,
    5122: np.int16,
    5123: np.uint16,
    5125: np.uint32,
    5126: np.float32,
}

COMPONENT_COUNTS = {
    'SCALAR': 1,
    'VEC2': 2,
    'VEC3': 3,
    'VEC4': 4,
    'MAT2': 4,
    'MAT3': 9,
    'MAT4': 16,
}

TARGET_PATHS = {
    "translation": AnimationTarget.TRANSLATION,
    "rotation": AnimationTarget.ROTATION,
    "scale": AnimationTarget.SCALE,
    "weights": AnimationTarget.WEIGHTS,
}


class GltfClipLoader:
    """
    Converts glTF animation data into clips.

    Each glTF animation becomes one clip; its channels are merged into a
    single time-ordered track of JointPose keyframes.
    """

    def load(self, filepath) -> Dict[str, AnimationClip]:
        """
        Load every animation in a GLTF or GLB file.

        Args:
            filepath: Path to .gltf or .glb file

        Returns:
            Dictionary mapping clip name to AnimationClip
        """
        return self.load_from_gltf(self._read(filepath))

    def load_skeleton_from_file(self, filepath) -> Optional[Skeleton]:
        """Load the skeleton of a GLTF or GLB file (None without skins)."""
        return self.load_skeleton(self._read(filepath))

    def _read(self, filepath) -> pygltflib.GLTF2:
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"glTF file not found: {filepath}")

        logger.info("Loading animations: %s", filepath)
        return pygltflib.GLTF2().load(str(filepath))

    def load_from_gltf(self, gltf: pygltflib.GLTF2) -> Dict[str, AnimationClip]:
        """
        Load animations from parsed GLTF data.

        Args:
            gltf: GLTF data

        Returns:
            Dictionary mapping clip name to AnimationClip
        """
        clips: Dict[str, AnimationClip] = {}

        for anim_idx, gltf_anim in enumerate(gltf.animations or []):
            clip_name = gltf_anim.name if gltf_anim.name else f"{UNNAMED_CLIP_PREFIX}{anim_idx}"

            channels = []
            for channel in gltf_anim.channels:
                keys = self._load_channel(gltf, gltf_anim, channel)
                if keys:
                    channels.append(keys)

            if not channels:
                logger.warning("Animation '%s' has no usable channels; skipped", clip_name)
                continue

            clips[clip_name] = AnimationClip(clip_name, KeyframeTrack.from_channels(channels))

        return clips

    def _load_channel(self, gltf: pygltflib.GLTF2, gltf_anim, channel) -> List[Tuple[float, JointPose]]:
        """Decode one channel into (time, JointPose) pairs."""
        sampler = gltf_anim.samplers[channel.sampler]

        target_node_idx = channel.target.node
        target_node = gltf.nodes[target_node_idx]
        joint_name = target_node.name if target_node.name else f"{UNNAMED_JOINT_PREFIX}{target_node_idx}"

        target_path = channel.target.path
        target = TARGET_PATHS.get(target_path)
        if target is None:
            logger.warning("Unknown animation target path: %s", target_path)
            return []

        times = self._get_accessor_data(gltf, sampler.input)
        values = self._get_accessor_data(gltf, sampler.output)

        if times is None or values is None or len(times) == 0:
            logger.warning("Missing keyframe data for channel %s.%s", joint_name, target_path)
            return []

        # Cubic spline samplers store (in-tangent, value, out-tangent) per key
        elements_per_key = 3 if sampler.interpolation == "CUBICSPLINE" else 1

        if target == AnimationTarget.TRANSLATION or target == AnimationTarget.SCALE:
            value_size = 3
        elif target == AnimationTarget.ROTATION:
            value_size = 4
        else:
            value_size = len(values) // (len(times) * elements_per_key)

        values = values.reshape(len(times), elements_per_key, value_size)[:, elements_per_key // 2]

        keys = []
        for time, value in zip(times, values):
            if target == AnimationTarget.ROTATION:
                # glTF and pyrr both store quaternions as (x, y, z, w)
                value = Quaternion(value)
            elif target in (AnimationTarget.TRANSLATION, AnimationTarget.SCALE):
                value = Vector3(value)
            else:
                value = np.array(value, dtype='f4')

            keys.append((float(time), JointPose(joint_name, target, value)))

        return keys

    def load_skeleton(self, gltf: pygltflib.GLTF2) -> Optional[Skeleton]:
        """
        Build a skeleton from glTF skins and nodes.

        Args:
            gltf: GLTF data

        Returns:
            Skeleton with joint hierarchy and bind pose, or None without skins
        """
        if not gltf.skins:
            return None

        skeleton = Skeleton()

        joint_indices = set()
        for skin in gltf.skins:
            joint_indices.update(skin.joints)

        joint_map: Dict[int, Joint] = {}
        for joint_idx in sorted(joint_indices):
            node = gltf.nodes[joint_idx]
            joint = Joint(
                name=node.name if node.name else f"{UNNAMED_JOINT_PREFIX}{joint_idx}",
                index=joint_idx,
            )
            if node.translation is not None:
                joint.base_translation = Vector3(node.translation)
            if node.rotation is not None:
                joint.base_rotation = Quaternion(node.rotation)
            if node.scale is not None:
                joint.base_scale = Vector3(node.scale)
            joint_map[joint_idx] = joint

        for joint_idx, joint in joint_map.items():
            for child_idx in gltf.nodes[joint_idx].children or []:
                if child_idx in joint_map:
                    joint.add_child(joint_map[child_idx])

        # Parents are known now, so roots are registered correctly
        for joint in joint_map.values():
            skeleton.add_joint(joint)

        skeleton.update_world_transforms()
        return skeleton

    def _get_accessor_data(self, gltf: pygltflib.GLTF2, accessor_idx: int) -> Optional[np.ndarray]:
        """
        Get data from an accessor.

        Args:
            gltf: GLTF data
            accessor_idx: Accessor index

        Returns:
            Flat float32 numpy array, or None if the accessor has no buffer view
        """
        if accessor_idx is None:
            return None

        accessor = gltf.accessors[accessor_idx]
        if accessor.bufferView is None:
            return None

        buffer_view = gltf.bufferViews[accessor.bufferView]
        buffer = gltf.buffers[buffer_view.buffer]

        if buffer.uri:
            # External or data-URI buffer
            buffer_data = gltf.get_data_from_buffer_uri(buffer.uri)
        else:
            # Embedded buffer (GLB)
            buffer_data = gltf.binary_blob()

        offset = (buffer_view.byteOffset or 0) + (accessor.byteOffset or 0)
        stride = buffer_view.byteStride or 0

        component_size = COMPONENT_TYPE_SIZES[accessor.componentType]
        component_count = COMPONENT_COUNTS[accessor.type]
        element_size = component_size * component_count

        if stride == 0 or stride == element_size:
            end_offset = offset + accessor.count * element_size
            data = buffer_data[offset:end_offset]
        else:
            data = bytearray()
            for i in range(accessor.count):
                element_offset = offset + i * stride
                data.extend(buffer_data[element_offset:element_offset + element_size])

        array = np.frombuffer(bytes(data), dtype=COMPONENT_DTYPES[accessor.componentType])
        return array.astype('f4')

"""Tests for GltfClipLoader and ClipLibrary"""

import pytest
import numpy as np
import pygltflib
from pyrr import Quaternion, Vector3

from animlib.animation import AnimationTarget
from animlib.loaders import ClipLibrary, GltfClipLoader


def build_gltf(animation_name="walk", extra_path=None):
    """Two-joint glTF with translation and rotation channels on the hip."""
    times = np.array([0.0, 0.5, 1.0], dtype=np.float32)
    translations = np.array([[0, 0, 0], [1, 2, 3], [2, 0, 0]], dtype=np.float32)
    rotations = np.array([[0, 0, 0, 1], [0, 0.7071068, 0, 0.7071068], [0, 1, 0, 0]], dtype=np.float32)

    chunks = [times.tobytes(), translations.tobytes(), rotations.tobytes()]
    blob = b"".join(chunks)

    buffer_views = []
    offset = 0
    for chunk in chunks:
        buffer_views.append(pygltflib.BufferView(buffer=0, byteOffset=offset, byteLength=len(chunk)))
        offset += len(chunk)

    accessors = [
        pygltflib.Accessor(bufferView=0, componentType=pygltflib.FLOAT, count=3, type=pygltflib.SCALAR),
        pygltflib.Accessor(bufferView=1, componentType=pygltflib.FLOAT, count=3, type=pygltflib.VEC3),
        pygltflib.Accessor(bufferView=2, componentType=pygltflib.FLOAT, count=3, type=pygltflib.VEC4),
    ]

    channels = [
        pygltflib.AnimationChannel(sampler=0, target=pygltflib.AnimationChannelTarget(node=0, path="translation")),
        pygltflib.AnimationChannel(sampler=1, target=pygltflib.AnimationChannelTarget(node=0, path="rotation")),
    ]
    if extra_path is not None:
        channels.append(
            pygltflib.AnimationChannel(sampler=0, target=pygltflib.AnimationChannelTarget(node=1, path=extra_path))
        )

    gltf = pygltflib.GLTF2(
        nodes=[
            pygltflib.Node(name="hip", children=[1], translation=[0.0, 1.0, 0.0]),
            pygltflib.Node(name="knee", translation=[0.0, -0.5, 0.0]),
        ],
        skins=[pygltflib.Skin(joints=[0, 1])],
        buffers=[pygltflib.Buffer(byteLength=len(blob))],
        bufferViews=buffer_views,
        accessors=accessors,
        animations=[
            pygltflib.Animation(
                name=animation_name,
                samplers=[
                    pygltflib.AnimationSampler(input=0, output=1, interpolation="LINEAR"),
                    pygltflib.AnimationSampler(input=0, output=2, interpolation="LINEAR"),
                ],
                channels=channels,
            )
        ],
    )
    gltf.set_binary_blob(blob)
    return gltf


def test_load_animation_clip():
    """Channels merge into one clip ordered by time"""
    clips = GltfClipLoader().load_from_gltf(build_gltf())

    assert list(clips) == ["walk"]
    clip = clips["walk"]
    assert len(clip.track) == 6
    assert clip.duration == pytest.approx(1.0)

    targets = [kf.pose.target for kf in clip.keyframes]
    assert targets == [AnimationTarget.TRANSLATION, AnimationTarget.ROTATION] * 3
    assert all(kf.pose.joint_name == "hip" for kf in clip.keyframes)


def test_loaded_values_are_pyrr_types():
    """Translations load as Vector3 and rotations as (x, y, z, w) quaternions"""
    clip = GltfClipLoader().load_from_gltf(build_gltf())["walk"]

    translation = clip.keyframes[2].pose.value
    rotation = clip.keyframes[3].pose.value

    assert isinstance(translation, Vector3)
    assert np.allclose(translation, [1.0, 2.0, 3.0])
    assert isinstance(rotation, Quaternion)
    assert np.allclose(rotation, [0.0, 0.7071068, 0.0, 0.7071068])


def test_unnamed_animation_gets_index_name():
    """Unnamed animations are named after their index"""
    clips = GltfClipLoader().load_from_gltf(build_gltf(animation_name=None))
    assert list(clips) == ["Animation_0"]


def test_unknown_target_path_is_skipped():
    """Channels with unknown paths are dropped"""
    clips = GltfClipLoader().load_from_gltf(build_gltf(extra_path="pointer"))
    assert len(clips["walk"].track) == 6


def test_load_skeleton():
    """Skins become a skeleton with bind pose translations"""
    skeleton = GltfClipLoader().load_skeleton(build_gltf())

    assert [j.name for j in skeleton.root_joints] == ["hip"]
    knee = skeleton.get_joint("knee")
    assert knee.parent.name == "hip"
    assert np.allclose(knee.world_transform[3, :3], [0.0, 0.5, 0.0])


def test_load_missing_file(tmp_path):
    """Missing files raise FileNotFoundError"""
    with pytest.raises(FileNotFoundError):
        GltfClipLoader().load(tmp_path / "missing.glb")


def test_clip_library_register_and_load():
    """Clips resolve by id; unknown ids return None"""
    clip = GltfClipLoader().load_from_gltf(build_gltf())["walk"]
    library = ClipLibrary()

    library.register(10, clip)
    clip_id = library.add(clip)

    assert library.load_clip(10) is clip
    assert clip_id == 11
    assert library.load_clip(42) is None
    assert len(library) == 2


def test_clip_library_register_gltf(tmp_path):
    """Clips from a glTF file get consecutive ids"""
    path = tmp_path / "walker.glb"
    build_gltf().save_binary(str(path))
    library = ClipLibrary()

    ids = library.register_gltf(path, first_id=5)

    assert ids == {"walk": 5}
    assert library.load_clip(5).name == "walk"

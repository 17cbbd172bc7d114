#!/usr/bin/env python3
"""
Play Clip Example

Loads the animations of a glTF/GLB file, registers them and steps the
default clip at a fixed frame rate, printing the skeleton pose.

Usage:
    python examples/play_clip.py path/to/model.glb [clip_name] [--loop]
"""

import logging
import sys

from animlib import (
    AnimationDefinition,
    AnimationRegistry,
    ClipLibrary,
    Skeleton,
    WrapMode,
    skeleton_player_factory,
)

FRAME_TIME = 1.0 / 30.0
FRAME_COUNT = 90


def main(argv):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if len(argv) < 2:
        print(__doc__)
        return 1

    path = argv[1]
    clip_name = argv[2] if len(argv) > 2 and not argv[2].startswith("--") else None
    wrap_mode = WrapMode.LOOP if "--loop" in argv else WrapMode.ONCE

    library = ClipLibrary()
    ids = library.register_gltf(path)
    if not ids:
        print(f"No animations found in {path}")
        return 1

    skeleton = library.loader.load_skeleton_from_file(path) or Skeleton()
    default_id = ids.get(clip_name, next(iter(ids.values())))
    definition = AnimationDefinition(
        clip=default_id,
        clips=list(ids.values()),
        play_automatically=True,
        wrap_mode=wrap_mode,
    )

    registry = AnimationRegistry.from_definition(
        definition, library, player_factory=skeleton_player_factory(skeleton)
    )
    registry.awake()

    print(f"Clips: {', '.join(state.name for state in registry)}")
    print(f"Playing: {registry.default_clip} ({wrap_mode.value})")

    for frame in range(FRAME_COUNT):
        registry.update_animation_states(FRAME_TIME)
        state = registry[registry.default_clip]
        print(f"  frame {frame:3d}  t={state.time:6.3f}s  keyframe={state.player.current_keyframe}")
        if not registry.any_playing:
            print("Playback finished")
            break

    for joint in skeleton.joints:
        print(f"  {joint.name}: {joint.world_transform[3, :3]}")

    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))

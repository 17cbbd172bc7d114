"""
Clip Library - Numeric Asset Ids for Animation Clips

Resolves the clip ids stored in animation definitions.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from ..animation import AnimationClip
from ..config.settings import FIRST_CLIP_ID
from .gltf_clip_loader import GltfClipLoader

logger = logging.getLogger(__name__)


class ClipLibrary:
    """Maps numeric clip ids to loaded clips."""

    def __init__(self, loader: Optional[GltfClipLoader] = None):
        """
        Initialize library.

        Args:
            loader: glTF loader used by register_gltf
        """
        self.loader = loader or GltfClipLoader()
        self.clips_by_id: Dict[int, AnimationClip] = {}
        self._next_id = FIRST_CLIP_ID

    def register(self, clip_id: int, clip: AnimationClip) -> None:
        """Register ``clip`` under ``clip_id`` (replaces any previous clip)."""
        if clip_id in self.clips_by_id:
            logger.debug("Replacing clip id %s", clip_id)
        self.clips_by_id[clip_id] = clip
        self._next_id = max(self._next_id, clip_id + 1)

    def add(self, clip: AnimationClip) -> int:
        """Register ``clip`` under the next free id and return the id."""
        clip_id = self._next_id
        self.register(clip_id, clip)
        return clip_id

    def register_gltf(self, path: Path | str, first_id: Optional[int] = None) -> Dict[str, int]:
        """
        Load a glTF file and register each of its clips.

        Args:
            path: Path to .gltf or .glb file
            first_id: Id of the first clip (next free id when None)

        Returns:
            Dictionary mapping clip name to assigned id
        """
        clips = self.loader.load(path)

        if first_id is not None:
            self._next_id = first_id

        ids = {}
        for name, clip in clips.items():
            ids[name] = self.add(clip)
        return ids

    def load_clip(self, clip_id: int) -> Optional[AnimationClip]:
        """Clip registered under ``clip_id``, or None."""
        return self.clips_by_id.get(clip_id)

    def __len__(self):
        return len(self.clips_by_id)
